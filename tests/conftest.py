"""
Pytest configuration and shared fixtures.

Nothing here touches pygame; the core is driven by calling tick() directly
or by pumping a FrameTicker on a fake clock.
"""

from collections import Counter

import pytest

from pathviz.core.controller import ControllerListener
from pathviz.core.grid import GridGraph
from pathviz.core.ticker import FrameTicker


class FakeClock:
    """Monotonic clock the test advances by hand (seconds)."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class RecordingListener(ControllerListener):
    """Records every hook call in order."""

    def __init__(self) -> None:
        self.started = 0
        self.stopped = []
        self.visited = []
        self.designations = []
        self.rebuilt = []

    def on_run_started(self) -> None:
        self.started += 1

    def on_run_stopped(self, status) -> None:
        self.stopped.append(status)

    def on_cell_visited(self, cell) -> None:
        self.visited.append(cell.coord)

    def on_designation_changed(self, ready: bool) -> None:
        self.designations.append(ready)

    def on_grid_rebuilt(self, graph) -> None:
        self.rebuilt.append(graph)

    def visit_counts(self) -> Counter:
        return Counter(self.visited)


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ticker(clock: FakeClock) -> FrameTicker:
    return FrameTicker(interval_ms=16, clock=clock)


@pytest.fixture
def open_3x3() -> GridGraph:
    return GridGraph.build(3, 3)


@pytest.fixture
def walled_4x5() -> GridGraph:
    """4x5 grid with an L-shaped wall:

        . . # . .
        . . # . .
        . . # # .
        . . . . .
    """
    graph = GridGraph.build(4, 5)
    for r, c in [(0, 2), (1, 2), (2, 2), (2, 3)]:
        graph.set_wall(r, c)
    return graph
