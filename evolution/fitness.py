"""
cell_evo module: evolution/fitness.py

Per-evaluation reward and the rolling history it is recorded into.

Reward shape (all terms bounded):
- thrusting while food is ahead, and turning toward food at the side, scores
  positively, scaled up as the food gets closer
- a fire decision costs a flat amount
- driving the reserved channel costs a little, to keep it quiet
"""

from __future__ import annotations
from collections import deque
import math
from typing import Iterator, Optional, Sequence

from config import SimConfig

# sensory vector layout
FOOD_AHEAD = 0
FOOD_SIDE = 1
FOOD_CLOSENESS = 2
FOOD_VISIBLE = 3

# action channel layout
THRUST = 0
TURN = 1
FIRE = 2
RESERVED = 3


def _unit(values: Sequence[float], idx: int) -> float:
    # missing / non-finite channels read as 0
    if idx >= len(values):
        return 0.0
    v = float(values[idx])
    if not math.isfinite(v):
        return 0.0
    return max(-1.0, min(1.0, v))


def calc_fitness(inputs: Sequence[float], action: Sequence[float], cfg: SimConfig) -> float:
    ahead = _unit(inputs, FOOD_AHEAD)
    side = _unit(inputs, FOOD_SIDE)
    closeness = max(0.0, _unit(inputs, FOOD_CLOSENESS))
    visible = max(0.0, _unit(inputs, FOOD_VISIBLE))

    thrust = _unit(action, THRUST)
    turn = _unit(action, TURN)
    fire = _unit(action, FIRE)
    reserved = _unit(action, RESERVED)

    seek = thrust * ahead + cfg.fitness_turn_weight * turn * side
    score = visible * (1.0 + closeness) * seek

    if fire > cfg.fire_threshold:
        score -= cfg.fitness_fire_cost
    score -= cfg.fitness_reserved_cost * abs(reserved)
    return score


class FitnessScores:
    """Append-only fitness history, optionally capped to the newest maxlen entries."""

    def __init__(self, maxlen: Optional[int] = None):
        self._scores: deque = deque(maxlen=maxlen)
        self.total_recorded = 0

    def push(self, score: float) -> None:
        self._scores.append(float(score))
        self.total_recorded += 1

    @property
    def maxlen(self) -> Optional[int]:
        return self._scores.maxlen

    @property
    def latest(self) -> Optional[float]:
        return self._scores[-1] if self._scores else None

    def mean(self) -> float:
        if not self._scores:
            return 0.0
        return sum(self._scores) / len(self._scores)

    def to_list(self) -> list:
        return list(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self) -> Iterator[float]:
        return iter(self._scores)
