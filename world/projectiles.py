"""
cell_evo module: world/projectiles.py

Bullets fired by cells. They fly straight, expire after a lifespan and
report which cell (other than the shooter) they hit.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import List, Sequence, Tuple, TYPE_CHECKING

import config

if TYPE_CHECKING:
    from cell.cell import Cell


@dataclass
class Projectile:
    owner_id: int
    x: float
    y: float
    vx: float
    vy: float
    age: float = 0.0
    lifespan: float = config.BULLET_LIFESPAN
    radius: float = config.BULLET_RADIUS

    @property
    def dead(self) -> bool:
        return self.age >= self.lifespan


class ProjectileField:
    def __init__(self, speed: float = config.BULLET_SPEED):
        self.speed = speed
        self.projectiles: List[Projectile] = []
        self.fired = 0

    def spawn(self, owner_id: int, x: float, y: float, angle: float) -> None:
        self.projectiles.append(
            Projectile(
                owner_id=owner_id,
                x=x,
                y=y,
                vx=math.cos(angle) * self.speed,
                vy=math.sin(angle) * self.speed,
            )
        )
        self.fired += 1

    def update(self, dt: float) -> None:
        for p in self.projectiles:
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.age += dt
        self.projectiles = [p for p in self.projectiles if not p.dead]

    def collect_hits(self, cells: Sequence["Cell"]) -> List[Tuple[int, int]]:
        """Remove projectiles that touch a non-owner cell; returns (owner_id, target_id) pairs."""
        hits: List[Tuple[int, int]] = []
        remaining: List[Projectile] = []
        for p in self.projectiles:
            target = None
            for c in cells:
                if c.id == p.owner_id:
                    continue
                reach = c.body.radius + p.radius
                dx = c.body.x - p.x
                dy = c.body.y - p.y
                if dx * dx + dy * dy <= reach * reach:
                    target = c
                    break
            if target is None:
                remaining.append(p)
            else:
                hits.append((p.owner_id, target.id))
        self.projectiles = remaining
        return hits
