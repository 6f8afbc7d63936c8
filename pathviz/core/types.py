#!/usr/bin/env python3
from enum import Enum
from typing import Tuple

Coord = Tuple[int, int]  # (row, col)

# up, left, right, down
LATTICE_OFFSETS: Tuple[Coord, ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


class CellType(Enum):
    WALL = 0
    CLEAR = 1
    START = 2
    END = 3
    VISITED = 4
    PATH = 5
    ERROR = 6


class RunStatus(Enum):
    CONTINUING = "continuing"
    REACHED = "reached"
    EXHAUSTED = "exhausted"
    CANCELLED = "cancelled"      # stopped from outside before reaching a verdict

    @property
    def is_terminal(self) -> bool:
        return self is not RunStatus.CONTINUING


class ToolMode(Enum):
    WALL = 0
    START = 1
    END = 2
