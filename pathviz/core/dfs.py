#!/usr/bin/env python3
"""
Depth-first search: LIFO frontier. The last neighbour pushed is the next one
expanded, so the walk runs down one corridor until it dead-ends.
"""

from typing import Iterable

from pathviz.core.grid import Cell
from pathviz.core.runner import TraversalRunner


class DepthFirstRunner(TraversalRunner):
    name = "DFS"

    def _take(self) -> Cell:
        return self.frontier.pop()

    def _put(self, cells: Iterable[Cell]) -> None:
        # stack push, in neighbour order
        self.frontier.extend(cells)
