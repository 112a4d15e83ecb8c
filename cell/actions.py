"""
cell_evo module: cell/actions.py

Turns the network's output layer into a concrete action and applies it:
- channel 0: thrust along the heading, scaled by move_force
- channel 1: torque, scaled by turn_torque
- channel 2: fire when above fire_threshold (rate limited by fire_interval)
- channel 3: reserved
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Optional, Sequence, TYPE_CHECKING

from config import SimConfig

if TYPE_CHECKING:
    from cell.cell import Cell
    from sim.interfaces import ProjectileSink


@dataclass(frozen=True)
class CellAction:
    thrust: float
    torque: float
    fire: bool


def _channel(output: Sequence[float], idx: int) -> float:
    if idx >= len(output):
        return 0.0
    return max(-1.0, min(1.0, float(output[idx])))


def get_nn_cell_action(output: Sequence[float], cfg: SimConfig) -> CellAction:
    return CellAction(
        thrust=_channel(output, 0) * cfg.move_force,
        torque=_channel(output, 1) * cfg.turn_torque,
        fire=_channel(output, 2) > cfg.fire_threshold,
    )


def can_fire(last_fired: Optional[float], now: float, interval: float) -> bool:
    return last_fired is None or (now - last_fired) >= interval


def perform_cell_action(
    action: CellAction,
    cell: "Cell",
    now: float,
    projectiles: "ProjectileSink",
    cfg: SimConfig,
) -> bool:
    """
    Write force/torque into the cell's external force slot and fire if allowed.
    Returns True if a projectile was spawned.
    """
    body = cell.body
    body.force_x = math.cos(body.angle) * action.thrust
    body.force_y = math.sin(body.angle) * action.thrust
    body.torque = action.torque

    if not action.fire:
        return False
    if not can_fire(cell.last_bullet_fired, now, cfg.fire_interval):
        return False

    projectiles.spawn(cell.id, body.x, body.y, body.angle)
    cell.last_bullet_fired = now
    return True
