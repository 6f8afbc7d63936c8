#!/usr/bin/env python3
"""
Breadth-first search: FIFO frontier, so cells are expanded in rings of
increasing distance from the start and the recorded route is a shortest one.
"""

from typing import Iterable

from pathviz.core.grid import Cell
from pathviz.core.runner import TraversalRunner


class BreadthFirstRunner(TraversalRunner):
    name = "BFS"

    def _take(self) -> Cell:
        return self.frontier.popleft()

    def _put(self, cells: Iterable[Cell]) -> None:
        self.frontier.extend(cells)
