"""
cell_evo module: sim/interfaces.py

What the passes need from the outside world. The demo implementations live
under world/; tests use small fakes.
"""

from __future__ import annotations
from typing import List, Optional, Protocol


class FoodSensor(Protocol):
    def sense(self, x: float, y: float, angle: float) -> List[float]:
        """Sensory vector (fixed width) describing food near (x, y) seen at heading angle."""
        ...


class EnergySource(Protocol):
    @property
    def max_energy(self) -> float:
        ...

    def energy_of(self, cell_id: int) -> Optional[float]:
        """Current energy, or None if the cell is not tracked yet."""
        ...


class ProjectileSink(Protocol):
    def spawn(self, owner_id: int, x: float, y: float, angle: float) -> None:
        ...
