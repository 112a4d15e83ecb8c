"""
cell_evo module: evolution/population.py

Population controller:
- bootstrap: when no cell is alive, seed max_population fresh random brains
- reproduction: each cell reproduces with probability energy / max_energy,
  as long as the population stays under the cap
Removal (death, culling) happens elsewhere; the passes here only insert.
"""

from __future__ import annotations
import logging
import math
import random
from typing import List, MutableSequence, Optional

import numpy as np

from cell.cell import Cell, CellBody, CellIdCounter
from config import SimConfig
from evolution.fitness import FitnessScores
from evolution.reproduction import clone_for_spawn, should_reproduce
from neural.network import NetArch, Network
from sim.interfaces import EnergySource

logger = logging.getLogger(__name__)


class PopulationController:
    def __init__(
        self,
        cfg: SimConfig,
        rng: Optional[random.Random] = None,
        np_rng: Optional[np.random.Generator] = None,
        now: float = 0.0,
    ):
        self.cfg = cfg.validate()
        self.arch = NetArch.from_config(cfg)
        self.rng = rng if rng is not None else random.Random()
        self.np_rng = np_rng if np_rng is not None else np.random.default_rng()
        self.ids = CellIdCounter()
        self.now = now

        self.births = 0
        self.bootstraps = 0

    def new_network(self) -> Network:
        return Network(
            self.arch,
            strength=self.cfg.init_mutation_strength,
            rng=self.np_rng,
            mutation_scale=self.cfg.mutation_scale,
        )

    def spawn_cell(self, network: Network, parent: Optional[Cell] = None) -> Cell:
        x = self.rng.uniform(0.0, self.cfg.world_w)
        y = self.rng.uniform(0.0, self.cfg.world_h)
        return Cell(
            id=self.ids.next(),
            body=CellBody(x=x, y=y, angle=self.rng.uniform(0.0, 2 * math.pi)),
            network=network,
            phase_offset=self.rng.uniform(0.0, self.cfg.phase_cycle),
            fitness_scores=FitnessScores(maxlen=self.cfg.fitness_history_len),
            birth_ts=self.now,
            birth_place=(x, y),
            parent_id=parent.id if parent is not None else None,
            generation=parent.generation + 1 if parent is not None else 0,
        )

    def bootstrap(self, cells: MutableSequence[Cell]) -> List[Cell]:
        """Seed a full population, but only if it is exactly empty."""
        if len(cells) > 0:
            return []

        spawned = [self.spawn_cell(self.new_network()) for _ in range(self.cfg.max_population)]
        cells.extend(spawned)
        self.bootstraps += 1
        logger.info("population empty: bootstrapped %d cells (bootstrap #%d)", len(spawned), self.bootstraps)
        return spawned

    def reproduce(self, cells: MutableSequence[Cell], energy: EnergySource) -> List[Cell]:
        cap = self.cfg.max_population
        max_energy = energy.max_energy
        num_cells = len(cells)
        children: List[Cell] = []

        # only cells alive at the start of the pass are considered as parents
        for parent in list(cells):
            if num_cells >= cap:
                continue
            e = energy.energy_of(parent.id)
            if e is None:
                continue
            if not should_reproduce(e, max_energy, self.rng):
                continue

            net = clone_for_spawn(parent.network, self.cfg.reproduction_mutation_strength, rng=self.np_rng)
            child = self.spawn_cell(net, parent=parent)
            parent.num_cells_spawned += 1
            num_cells += 1
            children.append(child)
            logger.debug("cell %d (e=%.2f/%.2f) spawned cell %d", parent.id, e, max_energy, child.id)

        cells.extend(children)
        self.births += len(children)
        assert len(cells) <= cap, f"population {len(cells)} exceeds cap {cap}"
        return children
