#!/usr/bin/env python3
"""
GridController: the one object the UI talks to.

Owns the current GridGraph, the start/end designation, the active tool mode
and the lifecycle of the traversal runner. A rebuild always stops the active
runner and retires the old graph before the new one is handed out, so a
runner never outlives the cells it points at.
"""

import logging
from typing import Dict, Optional, Type

from pathviz.config import DEFAULT_ALGORITHM, HIGHLIGHT_PATH
from pathviz.core.bfs import BreadthFirstRunner
from pathviz.core.dfs import DepthFirstRunner
from pathviz.core.errors import AlreadyRunning, MissingDesignation
from pathviz.core.grid import Cell, GridGraph
from pathviz.core.runner import RunListener, TraversalRunner
from pathviz.core.ticker import FrameTicker
from pathviz.core.types import CellType, RunStatus, ToolMode

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[TraversalRunner]] = {
    "bfs": BreadthFirstRunner,
    "dfs": DepthFirstRunner,
}


class ControllerListener(RunListener):
    """Run hooks plus the controller's own edit notifications."""

    def on_designation_changed(self, ready: bool) -> None:
        pass

    def on_grid_rebuilt(self, graph: GridGraph) -> None:
        pass


class GridController(RunListener):
    def __init__(self, row_count: int, column_count: int, *,
                 algorithm: str = DEFAULT_ALGORITHM,
                 ticker: Optional[FrameTicker] = None,
                 listener: Optional[ControllerListener] = None,
                 highlight_path: bool = HIGHLIGHT_PATH):
        self.graph = GridGraph.build(row_count, column_count)
        self.ticker = ticker or FrameTicker()
        self.listener = listener or ControllerListener()
        self.highlight_path = highlight_path
        self.tool_mode = ToolMode.WALL
        self.algorithm = _check_algorithm(algorithm)
        self._runner: Optional[TraversalRunner] = None
        self._start: Optional[Cell] = None
        self._end: Optional[Cell] = None

    # -------------------- designation --------------------

    @property
    def start(self) -> Optional[Cell]:
        """Designated start cell, or None once vacated (e.g. walled over)."""
        if self._start is not None and self._start.type is CellType.START:
            return self._start
        return None

    @property
    def end(self) -> Optional[Cell]:
        if self._end is not None and self._end.type is CellType.END:
            return self._end
        return None

    @property
    def is_ready(self) -> bool:
        return self.start is not None and self.end is not None

    def set_start(self, row: int, col: int) -> None:
        cell = self.graph.cell(row, col)
        self._check_idle("move the start")
        if self._start is not None:
            self._start.unmark_start()
        self._ensure_open(cell)
        cell.mark_start()
        self._start = cell
        self.listener.on_designation_changed(self.is_ready)

    def set_end(self, row: int, col: int) -> None:
        cell = self.graph.cell(row, col)
        self._check_idle("move the end")
        if self._end is not None:
            self._end.unmark_end()
        self._ensure_open(cell)
        cell.mark_end()
        self._end = cell
        self.listener.on_designation_changed(self.is_ready)

    def _ensure_open(self, cell: Cell) -> None:
        # a designated cell must be part of the graph
        if cell.is_wall:
            self.graph.clear_wall(cell.row, cell.col)

    # -------------------- edits --------------------

    def _check_idle(self, action: str) -> None:
        # the active runner holds on to the designated cells
        if self.is_running:
            raise AlreadyRunning(f"cannot {action} while a traversal is running")

    def toggle_wall(self, row: int, col: int) -> None:
        cell = self.graph.cell(row, col)
        if self.is_running and cell in (self._runner.start_cell, self._runner.end_cell):
            raise AlreadyRunning("cannot wall over the start or end while a traversal is running")
        was_ready = self.is_ready
        if cell.is_wall:
            self.graph.clear_wall(row, col)
        else:
            self.graph.set_wall(row, col)
        if self.is_ready != was_ready:
            self.listener.on_designation_changed(self.is_ready)

    def perform_action(self, row: int, col: int) -> None:
        """Apply the active tool to one cell."""
        if self.tool_mode is ToolMode.START:
            self.set_start(row, col)
        elif self.tool_mode is ToolMode.END:
            self.set_end(row, col)
        else:
            self.toggle_wall(row, col)

    def reset_traversal(self) -> None:
        for cell in self.graph:
            cell.reset_traversal()

    def clear_grid(self) -> None:
        """Stop any run, drop every wall and mark, vacate both designations."""
        self.stop_run()
        for cell in self.graph:
            self.graph.clear_wall(cell.row, cell.col)
            cell.mark_clear()
        self._start = None
        self._end = None
        logger.debug("grid cleared")
        self.listener.on_designation_changed(False)

    def rebuild(self, row_count: int, column_count: int) -> GridGraph:
        new_graph = GridGraph.build(row_count, column_count)
        self.stop_run()
        self.graph.retire()
        self.graph = new_graph
        self._runner = None
        self._start = None
        self._end = None
        logger.info("grid rebuilt at %dx%d", row_count, column_count)
        self.listener.on_grid_rebuilt(new_graph)
        self.listener.on_designation_changed(False)
        return new_graph

    # -------------------- runs --------------------

    @property
    def runner(self) -> Optional[TraversalRunner]:
        return self._runner

    @property
    def is_running(self) -> bool:
        return self._runner is not None and self._runner.running

    def set_algorithm(self, name: str) -> None:
        self.algorithm = _check_algorithm(name)

    def start_run(self, algorithm: Optional[str] = None) -> TraversalRunner:
        if self.is_running:
            raise AlreadyRunning("a traversal is already running")
        start, end = self.start, self.end
        if start is None or end is None:
            raise MissingDesignation("set both a start and an end cell first")
        runner_cls = ALGORITHMS[_check_algorithm(algorithm or self.algorithm)]
        self.reset_traversal()
        self._runner = runner_cls(self.graph, start, end, ticker=self.ticker, listener=self)
        self._runner.start()
        return self._runner

    def stop_run(self) -> None:
        if self._runner is not None:
            self._runner.stop()

    def toggle_run(self) -> None:
        if self.is_running:
            self.stop_run()
        else:
            self.start_run()

    def pump(self) -> bool:
        """Advance the active run if a tick is due; call once per frame."""
        return self.ticker.pump()

    # -------------------- runner hooks --------------------

    def on_run_started(self) -> None:
        self.listener.on_run_started()

    def on_cell_visited(self, cell: Cell) -> None:
        self.listener.on_cell_visited(cell)

    def on_run_stopped(self, status: RunStatus) -> None:
        if status is RunStatus.REACHED and self.highlight_path and self._runner is not None:
            for cell in self._runner.path()[1:-1]:
                cell.mark_path()
        self.listener.on_run_stopped(status)


def _check_algorithm(name: str) -> str:
    key = name.lower()
    if key not in ALGORITHMS:
        raise ValueError(f"unknown algorithm {name!r}, expected one of {sorted(ALGORITHMS)}")
    return key
