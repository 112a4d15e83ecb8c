"""
cell_evo module: sim/update.py

Agent-update pass. A cell only runs its forward pass when both gates allow it:
- at least update_interval has passed since its last evaluation
- the shared cycle clock has reached the cell's own phase offset

Evaluation itself is pure per cell, so it can be fanned out over an executor;
side effects (fitness push, force, projectiles) are applied serially.
"""

from __future__ import annotations
from concurrent.futures import Executor
from dataclasses import dataclass
import logging
from typing import List, Optional, Sequence, TYPE_CHECKING

from cell.actions import CellAction, get_nn_cell_action, perform_cell_action
from config import SimConfig
from evolution.fitness import calc_fitness
from sim.clock import SimClock

if TYPE_CHECKING:
    from cell.cell import Cell
    from sim.focus import FocusedCell
    from sim.interfaces import FoodSensor, ProjectileSink

logger = logging.getLogger(__name__)


@dataclass
class CellEvaluation:
    inputs: List[float]
    layers: List[List[float]]
    fitness: float
    action: CellAction


def is_update_due(cell: "Cell", clock: SimClock, cfg: SimConfig) -> bool:
    if cell.last_updated is not None and clock.now - cell.last_updated < cfg.update_interval:
        return False
    if clock.phase < cell.phase_offset:
        return False
    return True


def evaluate_cell(cell: "Cell", sensor: "FoodSensor", cfg: SimConfig) -> CellEvaluation:
    body = cell.body
    inputs = sensor.sense(body.x, body.y, body.angle)
    layers = cell.network.predict(inputs)
    output = layers[-1]
    fitness = calc_fitness(inputs, output[:4], cfg)
    return CellEvaluation(
        inputs=list(inputs),
        layers=layers,
        fitness=fitness,
        action=get_nn_cell_action(output, cfg),
    )


def update_cells(
    cells: Sequence["Cell"],
    clock: SimClock,
    sensor: "FoodSensor",
    projectiles: "ProjectileSink",
    cfg: SimConfig,
    focus: Optional["FocusedCell"] = None,
    executor: Optional[Executor] = None,
) -> int:
    """Evaluate every due cell once. Returns the number of cells evaluated."""
    due = [c for c in cells if is_update_due(c, clock, cfg)]
    if not due:
        return 0

    if executor is not None and len(due) > 1:
        evaluations = list(executor.map(lambda c: evaluate_cell(c, sensor, cfg), due))
    else:
        evaluations = [evaluate_cell(c, sensor, cfg) for c in due]

    fired = 0
    for cell, ev in zip(due, evaluations):
        cell.last_updated = clock.now
        if focus is not None:
            focus.publish(cell, ev.layers)
        cell.fitness_scores.push(ev.fitness)
        if perform_cell_action(ev.action, cell, clock.now, projectiles, cfg):
            fired += 1

    logger.debug("t=%.2f updated %d/%d cells, %d fired", clock.now, len(due), len(cells), fired)
    return len(due)
