"""
cell_evo module: cell/cell.py

Cell container: body state + brain + evolution bookkeeping.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

import config
from evolution.fitness import FitnessScores
from neural.network import Network


@dataclass
class CellBody:
    x: float
    y: float
    angle: float = 0.0
    radius: float = config.CELL_RADIUS

    # dynamics
    vx: float = 0.0
    vy: float = 0.0
    ang_v: float = 0.0

    # external force, rewritten by the action decoder each evaluation
    force_x: float = 0.0
    force_y: float = 0.0
    torque: float = 0.0

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Cell:
    id: int
    body: CellBody
    network: Network
    phase_offset: float
    fitness_scores: FitnessScores = field(default_factory=FitnessScores)

    num_cells_spawned: int = 0
    last_bullet_fired: Optional[float] = None
    last_updated: Optional[float] = None

    birth_ts: float = 0.0
    birth_place: Tuple[float, float] = (0.0, 0.0)
    parent_id: Optional[int] = None
    generation: int = 0
    age: float = 0.0


class CellIdCounter:
    """Monotonic id source; ids are never reused within a run."""

    def __init__(self, start: int = 0):
        self.value = start

    def next(self) -> int:
        self.value += 1
        return self.value
