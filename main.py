"""
Continuous live simulation: cells sense food, act through their networks,
and the fittest (by energy) reproduce with mutation.
"""

from __future__ import annotations
import argparse
import logging
import random
from typing import List, Optional

import numpy as np

import config
from cell.cell import Cell
from config import SimConfig
from evolution.population import PopulationController
from sim.scheduler import PassScheduler
from world.world import World

logger = logging.getLogger("cell_evo")


def build(cfg: SimConfig, seed: Optional[int] = None):
    rng = random.Random(seed)
    np_rng = np.random.default_rng(seed)
    world = World.create(int(cfg.world_w), int(cfg.world_h), rng=random.Random(rng.random()))
    controller = PopulationController(cfg, rng=rng, np_rng=np_rng)
    scheduler = PassScheduler(
        cfg,
        controller,
        sensor=world.food,
        projectiles=world.projectiles,
        energy=world.energy,
    )
    return world, scheduler


def step(world: World, scheduler: PassScheduler, cells: List[Cell], dt: float):
    world.update(cells, dt)
    return scheduler.tick(cells, dt)


def stats_for(world: World, scheduler: PassScheduler, cells: List[Cell]) -> dict:
    return {
        "population": len(cells),
        "births": scheduler.controller.births,
        "deaths": world.deaths,
        "max_energy": world.energy.max_energy,
        "sim_time": scheduler.clock.now,
    }


def run_headless(cfg: SimConfig, seconds: float, seed: Optional[int], dt: float = 1 / 60) -> dict:
    world, scheduler = build(cfg, seed)
    cells: List[Cell] = []
    scheduler.bootstrap_pass(cells)

    next_report = 10.0
    with scheduler:
        while scheduler.clock.now < seconds:
            step(world, scheduler, cells, dt)
            if scheduler.clock.now >= next_report:
                logger.info("t=%.0fs %s", scheduler.clock.now, stats_for(world, scheduler, cells))
                next_report += 10.0
    return stats_for(world, scheduler, cells)


def run_interactive(cfg: SimConfig, seed: Optional[int]) -> None:
    import pygame

    from render import colors
    from render.renderer import draw_cells, draw_focus_panel, draw_food, draw_hud, draw_projectiles, pick_cell

    pygame.init()
    screen = pygame.display.set_mode((int(cfg.world_w), int(cfg.world_h)))
    pygame.display.set_caption("cell_evo (Live Neuroevolution)")
    clock = pygame.time.Clock()

    world, scheduler = build(cfg, seed)
    cells: List[Cell] = []
    scheduler.bootstrap_pass(cells)

    debug = False
    running = True
    with scheduler:
        while running:
            dt_frame = clock.tick(60) / 1000.0
            dt_frame = min(dt_frame, 1 / 30)

            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False
                elif e.type == pygame.KEYDOWN and e.key == pygame.K_TAB:
                    debug = not debug
                elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    scheduler.focus.focus(pick_cell(cells, *e.pos))

            sub_steps = max(1, config.SIM_SPEED)
            dt = dt_frame / sub_steps
            for _ in range(sub_steps):
                step(world, scheduler, cells, dt)

            screen.fill(colors.BG)
            draw_food(screen, world.food.pellets)
            draw_projectiles(screen, world.projectiles.projectiles)
            draw_cells(screen, cells, focused_id=scheduler.focus.cell_id, debug=debug)
            draw_hud(screen, stats_for(world, scheduler, cells))
            draw_focus_panel(screen, scheduler.focus)
            pygame.display.flip()

    pygame.quit()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the cell neuroevolution simulation.")
    parser.add_argument("--headless", action="store_true", help="run without a window")
    parser.add_argument("--seconds", type=float, default=120.0, help="simulated seconds (headless only)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-population", type=int, default=config.MAX_POPULATION)
    parser.add_argument("--workers", type=int, default=config.UPDATE_WORKERS)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s,%(msecs)d %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    cfg = SimConfig().replace(max_population=args.max_population, update_workers=args.workers)
    if args.headless:
        final = run_headless(cfg, args.seconds, args.seed)
        logger.info("finished: %s", final)
    else:
        run_interactive(cfg, args.seed)


if __name__ == "__main__":
    main()
