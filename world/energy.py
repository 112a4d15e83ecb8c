"""
cell_evo module: world/energy.py

Energy bookkeeping per cell id. Cells become tracked the first time the
world sees them; until then energy_of() returns None and they can't breed.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

import config

if TYPE_CHECKING:
    from cell.cell import Cell


class EnergyMap:
    def __init__(self, start_energy: float = config.START_ENERGY, cap: float = config.MAX_ENERGY):
        self.start_energy = start_energy
        self.cap = cap
        self.values: Dict[int, float] = {}
        self._max_energy = 0.0

    @property
    def max_energy(self) -> float:
        return self._max_energy

    def energy_of(self, cell_id: int) -> Optional[float]:
        return self.values.get(cell_id)

    def track_new(self, cells: Iterable["Cell"]) -> int:
        added = 0
        for c in cells:
            if c.id not in self.values:
                self.values[c.id] = self.start_energy
                added += 1
        return added

    def add(self, cell_id: int, amount: float) -> None:
        if cell_id in self.values:
            self.values[cell_id] = max(0.0, min(self.cap, self.values[cell_id] + amount))

    def drain(self, cell: "Cell", dt: float) -> None:
        body = cell.body
        thrust = abs(body.force_x) + abs(body.force_y) + abs(body.torque)
        cost = config.ENERGY_DRAIN_PER_SEC * dt + thrust * config.THRUST_COST_SCALE * dt
        self.add(cell.id, -cost)

    def starved(self) -> List[int]:
        return [cid for cid, e in self.values.items() if e <= 0.0]

    def forget(self, cell_ids: Iterable[int]) -> None:
        for cid in cell_ids:
            self.values.pop(cid, None)

    def publish(self) -> float:
        """Recompute the population-wide max; call once per tick before the passes."""
        self._max_energy = max(self.values.values(), default=0.0)
        return self._max_energy
