"""
cell_evo module: sim/clock.py

Logical simulation time.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class SimClock:
    now: float = 0.0
    phase_cycle: float = 1.0

    def advance(self, dt: float) -> None:
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self.now += dt

    @property
    def phase(self) -> float:
        """Position within the repeating cycle, in [0, phase_cycle)."""
        return self.now % self.phase_cycle


@dataclass
class PeriodicTimer:
    period: float
    elapsed: float = 0.0

    def tick(self, dt: float) -> bool:
        # fires at most once per tick; leftover time carries into the next period
        self.elapsed += dt
        if self.elapsed < self.period:
            return False
        self.elapsed %= self.period
        return True
