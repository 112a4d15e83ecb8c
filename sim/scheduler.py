"""
cell_evo module: sim/scheduler.py

Runs the three passes over the population, strictly in order, once per tick:
  1. agent update (every tick, gated per cell)
  2. reproduction (every reproduction_period)
  3. bootstrap check (every bootstrap_period)
The world collaborators are expected to publish their snapshot (energy,
food, positions) before tick() is called.
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import List, MutableSequence, Optional

from cell.cell import Cell
from config import SimConfig
from evolution.population import PopulationController
from sim.clock import PeriodicTimer, SimClock
from sim.focus import FocusedCell
from sim.interfaces import EnergySource, FoodSensor, ProjectileSink
from sim.update import update_cells

logger = logging.getLogger(__name__)


@dataclass
class TickReport:
    updated: int = 0
    born: int = 0
    bootstrapped: int = 0


class PassScheduler:
    def __init__(
        self,
        cfg: SimConfig,
        controller: PopulationController,
        sensor: FoodSensor,
        projectiles: ProjectileSink,
        energy: EnergySource,
        focus: Optional[FocusedCell] = None,
    ):
        self.cfg = cfg.validate()
        self.controller = controller
        self.sensor = sensor
        self.projectiles = projectiles
        self.energy = energy
        self.focus = focus if focus is not None else FocusedCell()

        self.clock = SimClock(phase_cycle=cfg.phase_cycle)
        self.reproduction_timer = PeriodicTimer(cfg.reproduction_period)
        self.bootstrap_timer = PeriodicTimer(cfg.bootstrap_period)

        self._executor: Optional[ThreadPoolExecutor] = None
        if cfg.update_workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=cfg.update_workers, thread_name_prefix="cell-update")

    def update_pass(self, cells: MutableSequence[Cell]) -> int:
        return update_cells(
            cells,
            self.clock,
            self.sensor,
            self.projectiles,
            self.cfg,
            focus=self.focus,
            executor=self._executor,
        )

    def reproduction_pass(self, cells: MutableSequence[Cell]) -> List[Cell]:
        self.controller.now = self.clock.now
        return self.controller.reproduce(cells, self.energy)

    def bootstrap_pass(self, cells: MutableSequence[Cell]) -> List[Cell]:
        self.controller.now = self.clock.now
        return self.controller.bootstrap(cells)

    def tick(self, cells: MutableSequence[Cell], dt: float) -> TickReport:
        self.clock.advance(dt)
        report = TickReport()
        report.updated = self.update_pass(cells)
        if self.reproduction_timer.tick(dt):
            report.born = len(self.reproduction_pass(cells))
        if self.bootstrap_timer.tick(dt):
            report.bootstrapped = len(self.bootstrap_pass(cells))
        self.focus.clear_if_gone(cells)
        return report

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "PassScheduler":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
