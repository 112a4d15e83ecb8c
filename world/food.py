"""
cell_evo module: world/food.py

Food field. Pellets appear in gaussian clumps, age out after their
lifespan and are the only thing a cell can sense. Feeds FoodSensor.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import random
from typing import List, Optional

import config

EDGE_MARGIN = 10.0
CLUMP_MARGIN = 60.0
CLUMP_SIZE_RANGE = (4, 16)
CLUMP_SPREAD_RANGE = (18.0, 60.0)


@dataclass
class FoodPellet:
    x: float
    y: float
    radius: float
    energy: float
    age: float = 0.0
    lifespan: float = 12.0

    @property
    def dead(self) -> bool:
        return self.age >= self.lifespan


class FoodField:
    def __init__(self, w: int, h: int, rng: Optional[random.Random] = None, sense_range: float = config.SENSE_RANGE):
        self.w = w
        self.h = h
        self.rng = rng if rng is not None else random.Random()
        self.sense_range = sense_range
        self.pellets: List[FoodPellet] = []

        self.target_pellets = config.FOOD_TARGET_PELLETS
        self.spawn_rate = config.FOOD_SPAWN_RATE  # clumps/s while under target
        self._spawn_credit = 0.0

    def update(self, dt: float) -> None:
        live = []
        for p in self.pellets:
            p.age += dt
            if not p.dead:
                live.append(p)
        self.pellets = live

        if len(self.pellets) >= self.target_pellets:
            self._spawn_credit = 0.0
            return
        self._spawn_credit += dt * self.spawn_rate
        while self._spawn_credit >= 1.0 and len(self.pellets) < self.target_pellets:
            self._spawn_credit -= 1.0
            self.pellets.extend(self._clump())

    def _clump(self) -> List[FoodPellet]:
        rng = self.rng
        cx = rng.uniform(CLUMP_MARGIN, self.w - CLUMP_MARGIN)
        cy = rng.uniform(CLUMP_MARGIN, self.h - CLUMP_MARGIN)
        spread = rng.uniform(*CLUMP_SPREAD_RANGE)
        out = []
        for _ in range(rng.randint(*CLUMP_SIZE_RANGE)):
            r = rng.uniform(*config.FOOD_RADIUS_RANGE)
            out.append(FoodPellet(
                x=_clamp(rng.gauss(cx, spread), EDGE_MARGIN, self.w - EDGE_MARGIN),
                y=_clamp(rng.gauss(cy, spread), EDGE_MARGIN, self.h - EDGE_MARGIN),
                radius=r,
                # energy grows with area
                energy=max(0.1, 0.08 * r * r),
                lifespan=rng.uniform(*config.FOOD_LIFESPAN_RANGE),
            ))
        return out

    def eat_near(self, x: float, y: float, reach: float) -> float:
        """Remove every pellet within reach of (x, y); returns the energy they held."""
        eaten = [p for p in self.pellets if math.hypot(p.x - x, p.y - y) <= reach]
        if eaten:
            self.pellets = [p for p in self.pellets if math.hypot(p.x - x, p.y - y) > reach]
        return sum(p.energy for p in eaten)

    def sense(self, x: float, y: float, angle: float) -> List[float]:
        """[food_ahead, food_side, food_closeness, food_visible] for the nearest pellet in range."""
        if not self.pellets:
            return [0.0, 0.0, 0.0, 0.0]
        nearest = min(self.pellets, key=lambda p: (p.x - x) ** 2 + (p.y - y) ** 2)
        dist = math.hypot(nearest.x - x, nearest.y - y)
        if dist > self.sense_range:
            return [0.0, 0.0, 0.0, 0.0]

        bearing = math.atan2(nearest.y - y, nearest.x - x) - angle
        return [math.cos(bearing), math.sin(bearing), max(0.0, 1.0 - dist / self.sense_range), 1.0]


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))
