"""
Errors raised by the grid core.

All of them are local and synchronous: the caller (controller or UI) gets
them immediately and nothing is retried internally. A failed call leaves
prior state untouched.
"""


class GridError(Exception):
    """Base class for every error the core raises."""


class InvalidDimension(GridError, ValueError):
    """Row or column count is not a positive integer."""

    def __init__(self, row_count, column_count):
        super().__init__(f"grid dimensions must be positive integers, got {row_count}x{column_count}")
        self.row_count = row_count
        self.column_count = column_count


class OutOfRange(GridError, IndexError):
    """Coordinate outside the current grid."""

    def __init__(self, row, col, row_count, column_count):
        super().__init__(f"cell ({row}, {col}) outside {row_count}x{column_count} grid")
        self.row = row
        self.col = col


class AlreadyRunning(GridError, RuntimeError):
    """A runner was started twice, or a run was requested while one is active."""


class StaleRunner(GridError, RuntimeError):
    """The runner's graph was retired by a rebuild; its cells are no longer live."""


class MissingDesignation(GridError, RuntimeError):
    """A run needs both a start cell and an end cell."""
