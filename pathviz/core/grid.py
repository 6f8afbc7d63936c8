#!/usr/bin/env python3
"""
Grid graph: a rectangular lattice of cells joined by an undirected adjacency
relation (up/down/left/right).

Walls are taken out of the graph eagerly: set_wall() unlinks the cell from
all its neighbours and clear_wall() links it back, so traversal code only
ever sees plain connectivity and never has to ask about walls.
"""

import logging
import uuid
from typing import Iterator, List, Optional, Tuple

from pathviz.core.errors import InvalidDimension, OutOfRange
from pathviz.core.types import LATTICE_OFFSETS, CellType, Coord

logger = logging.getLogger(__name__)

_WALLED = (CellType.WALL, CellType.ERROR)


class Cell:
    """One grid position: lattice coordinates, a semantic type and its adjacency."""

    def __init__(self, row: int, col: int, id: Optional[str] = None):
        self.row = row
        self.col = col
        self.id = id or str(uuid.uuid4())
        self._type = CellType.CLEAR
        self._adjacent: set = set()

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col}, {self._type.name})"

    # -------------------- adjacency --------------------

    def join(self, other: "Cell") -> None:
        self._adjacent.add(other)
        other._adjacent.add(self)

    def unlink(self, other: "Cell") -> None:
        self._adjacent.discard(other)
        other._adjacent.discard(self)

    @property
    def adjacents(self) -> Tuple["Cell", ...]:
        """Current neighbours in lattice order (up, left, right, down)."""
        return tuple(sorted(self._adjacent, key=lambda c: (c.row, c.col)))

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    # -------------------- type transitions --------------------

    @property
    def type(self) -> CellType:
        return self._type

    @property
    def is_wall(self) -> bool:
        """WALL, or ERROR (a wall the traversal stepped on)."""
        return self._type in _WALLED

    def mark_wall(self) -> None:
        self._type = CellType.WALL

    def mark_clear(self) -> None:
        self._type = CellType.CLEAR

    def mark_start(self) -> None:
        self._type = CellType.START

    def unmark_start(self) -> None:
        if self._type is CellType.START:
            self._type = CellType.CLEAR

    def mark_end(self) -> None:
        self._type = CellType.END

    def unmark_end(self) -> None:
        if self._type is CellType.END:
            self._type = CellType.CLEAR

    def mark_visited(self) -> None:
        # a wall in the traversal means the graph and the types disagree
        if self._type is CellType.WALL:
            logger.warning("traversal visited walled cell (%d, %d)", self.row, self.col)
            self._type = CellType.ERROR
        else:
            self._type = CellType.VISITED

    def mark_path(self) -> None:
        if self._type is CellType.VISITED or self._type is CellType.CLEAR:
            self._type = CellType.PATH

    def reset_traversal(self) -> None:
        if self._type in (CellType.VISITED, CellType.PATH):
            self._type = CellType.CLEAR


class GridGraph:
    """rows x cols lattice of Cells, indexed [row][col]."""

    def __init__(self, row_count: int, column_count: int):
        if not _positive_int(row_count) or not _positive_int(column_count):
            raise InvalidDimension(row_count, column_count)
        self.row_count = row_count
        self.column_count = column_count
        self.retired = False
        self._cells: List[List[Cell]] = []

    @classmethod
    def build(cls, row_count: int, column_count: int) -> "GridGraph":
        """Allocate every cell as CLEAR and link all lattice neighbours."""
        graph = cls(row_count, column_count)
        graph._generate_cells()
        for r in range(row_count):
            for c in range(column_count):
                graph._join_lattice(graph._cells[r][c])
        logger.debug("built %dx%d grid graph", row_count, column_count)
        return graph

    def _generate_cells(self) -> None:
        self._cells = [[Cell(r, c) for c in range(self.column_count)] for r in range(self.row_count)]

    # -------------------- lookup --------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.row_count and 0 <= col < self.column_count

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise OutOfRange(row, col, self.row_count, self.column_count)
        return self._cells[row][col]

    def lattice_neighbors(self, cell: Cell) -> Iterator[Cell]:
        for dr, dc in LATTICE_OFFSETS:
            r, c = cell.row + dr, cell.col + dc
            if self.in_bounds(r, c):
                yield self._cells[r][c]

    def neighbors_of(self, row: int, col: int) -> frozenset:
        return frozenset(self.cell(row, col).adjacents)

    @property
    def cells(self) -> List[List[Cell]]:
        return self._cells

    @property
    def node_count(self) -> int:
        return self.row_count * self.column_count

    def __iter__(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    # -------------------- wall edits --------------------

    def set_wall(self, row: int, col: int) -> None:
        cell = self.cell(row, col)
        if cell.is_wall:
            return
        for other in tuple(cell.adjacents):
            cell.unlink(other)
        cell.mark_wall()
        logger.debug("wall set at (%d, %d)", row, col)

    def clear_wall(self, row: int, col: int) -> None:
        cell = self.cell(row, col)
        if not cell.is_wall:
            return
        cell.mark_clear()
        self._join_lattice(cell)
        logger.debug("wall cleared at (%d, %d)", row, col)

    def _join_lattice(self, cell: Cell) -> None:
        for other in self.lattice_neighbors(cell):
            if not other.is_wall:
                cell.join(other)

    def retire(self) -> None:
        """Called when a rebuild replaces this graph; runners bound to it go stale."""
        self.retired = True


def _positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
