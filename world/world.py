"""
cell_evo module: world/world.py

World state container (food, projectiles, energy) and the per-frame step of
everything outside the neuroevolution passes: physics, eating, hits, death.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
from typing import List, MutableSequence, Optional, TYPE_CHECKING

import config
from world.energy import EnergyMap
from world.food import FoodField
from world.physics import separate_cells, step_body
from world.projectiles import ProjectileField

if TYPE_CHECKING:
    from cell.cell import Cell

logger = logging.getLogger(__name__)


@dataclass
class World:
    w: int
    h: int
    food: FoodField
    projectiles: ProjectileField = field(default_factory=ProjectileField)
    energy: EnergyMap = field(default_factory=EnergyMap)
    deaths: int = 0

    @staticmethod
    def create(w: int, h: int, rng: Optional[random.Random] = None) -> "World":
        return World(w=w, h=h, food=FoodField(w, h, rng=rng))

    def update(self, cells: MutableSequence["Cell"], dt: float) -> List[int]:
        """
        Advance the world by dt and remove dead cells from `cells` in place.
        Returns the ids of the cells that died. Publishes max energy last.
        """
        self.food.update(dt)
        self.energy.track_new(cells)

        for c in cells:
            step_body(c.body, dt, self.w, self.h)
            c.age += dt
            self.energy.drain(c, dt)
            gained = self.food.eat_near(c.body.x, c.body.y, reach=config.EAT_REACH)
            if gained > 0:
                self.energy.add(c.id, gained)
        separate_cells(cells)

        self.projectiles.update(dt)
        for _owner, target in self.projectiles.collect_hits(cells):
            self.energy.add(target, -config.BULLET_DAMAGE)

        dead = set(self.energy.starved())
        dead.update(c.id for c in cells if c.age >= config.MAX_AGE_SECONDS)
        if dead:
            cells[:] = [c for c in cells if c.id not in dead]
            self.energy.forget(dead)
            self.deaths += len(dead)
            logger.debug("%d cells died, %d alive", len(dead), len(cells))

        self.energy.publish()
        return sorted(dead)
