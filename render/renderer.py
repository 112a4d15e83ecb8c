"""
cell_evo module: render/renderer.py

Pygame rendering of the world (top-down) and the focused-cell inspector.
"""

from __future__ import annotations
import math
from typing import List, Optional, Sequence

import pygame

from cell.cell import Cell
from render import colors
from sim.focus import FocusedCell
from world.food import FoodPellet
from world.projectiles import Projectile


def _draw_dir_indicator(screen: pygame.Surface, x: float, y: float, angle: float, r: float) -> None:
    dx = math.cos(angle) * r
    dy = math.sin(angle) * r
    pygame.draw.line(screen, colors.DIR, (x, y), (x + dx, y + dy), 2)


def draw_food(screen: pygame.Surface, pellets: List[FoodPellet]) -> None:
    # brightness scales with radius
    for p in pellets:
        v = int(110 + min(120, p.radius * 18))
        pygame.draw.circle(screen, (40, v, 60), (int(p.x), int(p.y)), int(p.radius))


def draw_projectiles(screen: pygame.Surface, projectiles: List[Projectile]) -> None:
    for p in projectiles:
        pygame.draw.circle(screen, colors.BULLET, (int(p.x), int(p.y)), max(1, int(p.radius)))


def draw_cells(
    screen: pygame.Surface,
    cells: Sequence[Cell],
    focused_id: Optional[int] = None,
    debug: bool = False,
) -> None:
    debug_font = pygame.font.Font(None, 16) if debug else None
    for c in cells:
        b = c.body
        col = colors.CELL_FOCUSED if c.id == focused_id else colors.CELL
        pygame.draw.circle(screen, col, (int(b.x), int(b.y)), int(b.radius))
        _draw_dir_indicator(screen, b.x, b.y, b.angle, b.radius + 4)

        if debug_font is not None:
            txt = debug_font.render(f"{c.id} g{c.generation}", True, colors.TEXT)
            screen.blit(txt, (b.x + b.radius + 2, b.y - b.radius - 2))


def pick_cell(cells: Sequence[Cell], x: float, y: float) -> Optional[Cell]:
    best = None
    best_d2 = float("inf")
    for c in cells:
        dx = c.body.x - x
        dy = c.body.y - y
        d2 = dx * dx + dy * dy
        if d2 <= (c.body.radius * 2) ** 2 and d2 < best_d2:
            best, best_d2 = c, d2
    return best


def draw_hud(screen: pygame.Surface, stats: dict) -> None:
    font = pygame.font.Font(None, 26)

    lines = [
        f"Population: {stats.get('population', 0)}",
        f"Births: {stats.get('births', 0)}  Deaths: {stats.get('deaths', 0)}",
        f"Max energy: {stats.get('max_energy', 0.0):.2f}",
        f"Sim time: {stats.get('sim_time', 0.0):.1f}s",
    ]

    y = 10
    for line in lines:
        txt = font.render(line, True, colors.TEXT)
        screen.blit(txt, (12, y))
        y += 22


def draw_focus_panel(screen: pygame.Surface, focus: FocusedCell, width: int = 240) -> None:
    """Per-layer activation bars plus a fitness sparkline for the focused cell."""
    if focus.cell_id is None:
        return

    sw, sh = screen.get_size()
    x0 = sw - width - 10
    panel = pygame.Rect(x0, 10, width, 220)
    pygame.draw.rect(screen, colors.PANEL_BG, panel)

    font = pygame.font.Font(None, 20)
    screen.blit(font.render(f"Cell {focus.cell_id}", True, colors.TEXT), (x0 + 8, 16))

    # activations: one row per layer, one bar per node
    y = 40
    for layer in focus.layers:
        if not layer:
            continue
        bar_w = max(2, (width - 16) // len(layer))
        for i, v in enumerate(layer):
            h = int(abs(v) * 12)
            col = colors.ACT_POS if v >= 0 else colors.ACT_NEG
            pygame.draw.rect(screen, col, pygame.Rect(x0 + 8 + i * bar_w, y + 12 - h, bar_w - 1, max(1, h)))
        y += 28

    # fitness sparkline of the newest samples
    history = focus.fitness[-(width - 16):]
    if len(history) >= 2:
        lo, hi = min(history), max(history)
        span = (hi - lo) or 1.0
        base = panel.bottom - 10
        pts = [(x0 + 8 + i, base - int((v - lo) / span * 50)) for i, v in enumerate(history)]
        pygame.draw.lines(screen, colors.FITNESS_LINE, False, pts, 1)
