#!/usr/bin/env python3
"""
Frame-stepped traversal over a GridGraph.

A runner advances its search by exactly ONE step per tick() so the grid can
be redrawn between steps:
- start()  seeds the frontier, runs one tick, then hands tick() to the ticker
- tick()   one frontier removal + (maybe) one expansion -> RunStatus
- stop()   cancels the ticker and reports completion exactly once

Subclasses only choose the frontier discipline (_take / _put); the stepping
logic below is shared.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Set

from pathviz.core.errors import AlreadyRunning, StaleRunner
from pathviz.core.grid import Cell, GridGraph
from pathviz.core.ticker import FrameTicker
from pathviz.core.types import RunStatus

logger = logging.getLogger(__name__)


class RunListener:
    """Hooks a runner calls on its collaborator. Override what you need."""

    def on_run_started(self) -> None:
        pass

    def on_run_stopped(self, status: RunStatus) -> None:
        pass

    def on_cell_visited(self, cell: Cell) -> None:
        pass


class TraversalRunner(ABC):
    name = "traversal"

    def __init__(self, graph: GridGraph, start_cell: Cell, end_cell: Cell,
                 ticker: Optional[FrameTicker] = None,
                 listener: Optional[RunListener] = None):
        self.graph = graph
        self.start_cell = start_cell
        self.end_cell = end_cell
        self.ticker = ticker
        self.listener = listener or RunListener()

        self.frontier: Deque[Cell] = deque()
        self.visited: Set[Cell] = set()
        self.came_from: Dict[Cell, Cell] = {}
        self.status: Optional[RunStatus] = None
        self.finished = False
        self.steps = 0
        self._started = False
        self._stopped = False

    # -------------------- frontier discipline --------------------

    @abstractmethod
    def _take(self) -> Cell:
        """Remove and return the next candidate."""

    @abstractmethod
    def _put(self, cells: Iterable[Cell]) -> None:
        """Add candidates to the frontier."""

    # -------------------- lifecycle --------------------

    def start(self) -> RunStatus:
        if self._started or self._stopped:
            raise AlreadyRunning(f"{self.name} runner already used")
        self._check_graph()
        self._started = True
        self.frontier.clear()
        self.visited.clear()
        self.came_from.clear()
        self.frontier.append(self.start_cell)
        self.finished = False
        self.status = RunStatus.CONTINUING
        logger.debug("%s run from %s to %s", self.name, self.start_cell.coord, self.end_cell.coord)
        self.listener.on_run_started()

        status = self.tick()
        if not self.finished and self.ticker is not None:
            self.ticker.schedule(self.tick)
        return status

    def tick(self) -> RunStatus:
        if self.finished:
            return self.status
        self._check_graph()
        if not self.frontier:
            return self._finish(RunStatus.EXHAUSTED)

        cell = self._take()
        self.steps += 1
        if cell is self.end_cell:
            return self._finish(RunStatus.REACHED)

        # expansion is decided on removal; duplicates already queued get skipped here
        if cell not in self.visited:
            self.visited.add(cell)
            if cell is not self.start_cell:
                cell.mark_visited()
                self.listener.on_cell_visited(cell)
            neighbours = cell.adjacents
            for n in neighbours:
                if n is not self.start_cell and n not in self.came_from:
                    self.came_from[n] = cell
            self._put(neighbours)

        if self.finished:       # a listener stopped us mid-step
            return self.status
        return RunStatus.CONTINUING

    def stop(self) -> None:
        if self._stopped:
            return
        if not self.finished:
            self._check_graph()
        if self.ticker is not None:
            self.ticker.cancel(self.tick)
        self._stopped = True
        self.finished = True
        if self.status is None or not self.status.is_terminal:
            self.status = RunStatus.CANCELLED
        logger.info("%s run stopped: %s after %d steps", self.name, self.status.value, self.steps)
        self.listener.on_run_stopped(self.status)

    def _finish(self, status: RunStatus) -> RunStatus:
        self.status = status
        self.finished = True
        self.stop()
        return status

    def _check_graph(self) -> None:
        if self.graph.retired:
            raise StaleRunner(f"{self.name} runner is bound to a retired grid")

    # -------------------- results --------------------

    @property
    def running(self) -> bool:
        return self._started and not self.finished

    def path(self) -> List[Cell]:
        """Start-to-end route through first discoverers; empty unless the end was reached."""
        if self.status is not RunStatus.REACHED:
            return []
        route = [self.end_cell]
        cur = self.end_cell
        while cur is not self.start_cell:
            cur = self.came_from[cur]
            route.append(cur)
        route.reverse()
        return route

    def metrics(self) -> dict:
        return {
            "algo": self.name,
            "status": self.status.value if self.status else "idle",
            "steps": self.steps,
            "visited": len(self.visited),
            "frontier": len(self.frontier),
        }
