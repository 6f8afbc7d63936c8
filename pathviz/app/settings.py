#!/usr/bin/env python3
"""
Grid settings as entered in the launcher / viewer panel.

User input is clamped here so the core only ever sees valid dimensions:
unparsable text falls back to the size derived from the canvas, and numbers
are pinned into the configured range.
"""

from dataclasses import dataclass, replace
from typing import Optional

from pathviz.config import (
    ALGORITHM_CHOICES,
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_ALGORITHM,
    DEFAULT_BOX_SIZE,
    MAX_BOX_SIZE,
    MAX_COLUMNS,
    MAX_ROWS,
    MIN_BOX_SIZE,
    MIN_COLUMNS,
    MIN_ROWS,
)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def parse_count(text, fallback: int, lo: int, hi: int) -> int:
    """int(text) pinned to [lo, hi]; `fallback` when text is not a number."""
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        value = fallback
    return clamp(value, lo, hi)


@dataclass(frozen=True)
class GridSettings:
    rows: int
    columns: int
    box_size: int = DEFAULT_BOX_SIZE
    algorithm: str = DEFAULT_ALGORITHM
    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT

    @classmethod
    def from_canvas(cls, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT,
                    box_size: int = DEFAULT_BOX_SIZE, algorithm: Optional[str] = None) -> "GridSettings":
        """As many boxes of `box_size` as fit on the canvas."""
        box_size = clamp(box_size, MIN_BOX_SIZE, MAX_BOX_SIZE)
        algo = algorithm if algorithm in ALGORITHM_CHOICES else DEFAULT_ALGORITHM
        return cls(
            rows=clamp(height // box_size, MIN_ROWS, MAX_ROWS),
            columns=clamp(width // box_size, MIN_COLUMNS, MAX_COLUMNS),
            box_size=box_size,
            algorithm=algo,
            width=width,
            height=height,
        )

    def default_rows(self) -> int:
        return clamp(self.height // self.box_size, MIN_ROWS, MAX_ROWS)

    def default_columns(self) -> int:
        return clamp(self.width // self.box_size, MIN_COLUMNS, MAX_COLUMNS)

    def requires_rebuild(self, other: "GridSettings") -> bool:
        """A new grid is needed whenever the dimensions or the cell size change."""
        return (self.rows, self.columns, self.box_size) != (other.rows, other.columns, other.box_size)

    # -------------------- input --------------------

    def with_rows(self, text) -> "GridSettings":
        return replace(self, rows=parse_count(text, self.default_rows(), MIN_ROWS, MAX_ROWS))

    def with_columns(self, text) -> "GridSettings":
        return replace(self, columns=parse_count(text, self.default_columns(), MIN_COLUMNS, MAX_COLUMNS))

    def with_box_size(self, text) -> "GridSettings":
        return replace(self, box_size=parse_count(text, self.box_size, MIN_BOX_SIZE, MAX_BOX_SIZE))

    def with_algorithm(self, name: str) -> "GridSettings":
        name = str(name).lower()
        return replace(self, algorithm=name if name in ALGORITHM_CHOICES else self.algorithm)
