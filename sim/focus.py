"""
cell_evo module: sim/focus.py

Read-only feed for the inspector: the latest layer activations of one
focused cell plus its fitness history. Nothing here feeds back into the sim.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from cell.cell import Cell


class FocusedCell:
    def __init__(self):
        self.cell_id: Optional[int] = None
        self.layers: List[List[float]] = []
        self._cell: Optional["Cell"] = None

    def focus(self, cell: Optional["Cell"]) -> None:
        self._cell = cell
        self.cell_id = cell.id if cell is not None else None
        self.layers = []

    def publish(self, cell: "Cell", layers: List[List[float]]) -> None:
        if cell.id == self.cell_id:
            self.layers = [list(layer) for layer in layers]

    def clear_if_gone(self, cells: Iterable["Cell"]) -> None:
        if self.cell_id is None:
            return
        if all(c.id != self.cell_id for c in cells):
            self.focus(None)

    @property
    def fitness(self) -> List[float]:
        if self._cell is None:
            return []
        return self._cell.fitness_scores.to_list()
