"""
Tests for GridController: designation, edits, rebuild and run lifecycle.
"""

import pytest

from pathviz.core.bfs import BreadthFirstRunner
from pathviz.core.controller import ALGORITHMS, GridController
from pathviz.core.errors import AlreadyRunning, InvalidDimension, MissingDesignation, OutOfRange, StaleRunner
from pathviz.core.types import CellType, RunStatus, ToolMode


def _types(controller: GridController, cell_type: CellType) -> list:
    return [c.coord for c in controller.graph if c.type is cell_type]


@pytest.fixture
def controller(ticker, recorder) -> GridController:
    return GridController(3, 3, algorithm="bfs", ticker=ticker, listener=recorder, highlight_path=True)


def _pump_until_done(controller: GridController, clock, limit: int = 500) -> None:
    for _ in range(limit):
        if not controller.is_running:
            return
        clock.advance_ms(20)
        controller.pump()
    raise AssertionError("run did not finish")


# =============================================================================
# Designation
# =============================================================================


class TestDesignation:
    """Start / end designation."""

    def test_single_designation(self, controller) -> None:
        """Any sequence of set_start/set_end leaves at most one of each."""
        moves = [("s", 0, 0), ("e", 2, 2), ("s", 1, 1), ("s", 0, 2), ("e", 0, 2), ("e", 1, 0), ("s", 1, 0)]
        for kind, r, c in moves:
            (controller.set_start if kind == "s" else controller.set_end)(r, c)
            assert len(_types(controller, CellType.START)) <= 1
            assert len(_types(controller, CellType.END)) <= 1

    def test_new_start_demotes_previous(self, controller) -> None:
        controller.set_start(0, 0)
        controller.set_start(1, 1)
        assert controller.graph.cell(0, 0).type is CellType.CLEAR
        assert controller.start is controller.graph.cell(1, 1)

    def test_walled_holder_stays_wall(self, controller) -> None:
        """A start that was walled over is vacated, not demoted to CLEAR."""
        controller.set_start(0, 0)
        controller.toggle_wall(0, 0)
        assert controller.start is None
        controller.set_start(2, 2)
        assert controller.graph.cell(0, 0).type is CellType.WALL

    def test_designating_a_wall_opens_it(self, controller) -> None:
        """The wall is cleared first so the start is part of the graph."""
        controller.toggle_wall(1, 1)
        controller.set_end(1, 1)
        cell = controller.graph.cell(1, 1)
        assert cell.type is CellType.END
        assert len(cell.adjacents) == 4

    def test_start_over_end_vacates_end(self, controller) -> None:
        controller.set_end(0, 0)
        controller.set_start(0, 0)
        assert controller.end is None
        assert not controller.is_ready

    def test_ready_notifications(self, controller, recorder) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        assert recorder.designations == [False, True]
        assert controller.is_ready

    def test_designation_locked_during_run(self, ticker, clock) -> None:
        """Start and end cannot move while a run holds them."""
        controller = GridController(1, 4, ticker=ticker)
        controller.set_start(0, 0)
        controller.set_end(0, 3)
        controller.start_run("bfs")
        with pytest.raises(AlreadyRunning):
            controller.set_end(0, 2)
        with pytest.raises(AlreadyRunning):
            controller.set_start(0, 1)
        with pytest.raises(AlreadyRunning):
            controller.toggle_wall(0, 3)

        _pump_until_done(controller, clock)
        assert controller.runner.status is RunStatus.REACHED
        assert controller.end is controller.graph.cell(0, 3)
        assert controller.graph.cell(0, 2).type is CellType.PATH

        controller.set_end(0, 2)
        assert controller.end.type is CellType.END

    def test_walling_designation_notifies(self, controller, recorder) -> None:
        """Walling over a designated cell reports that the grid is no longer ready."""
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.toggle_wall(1, 1)
        controller.toggle_wall(2, 2)
        assert recorder.designations == [False, True, False]
        controller.toggle_wall(2, 2)
        assert recorder.designations == [False, True, False]
        assert not controller.is_ready

    def test_out_of_range_changes_nothing(self, controller) -> None:
        controller.set_start(0, 0)
        with pytest.raises(OutOfRange):
            controller.set_start(3, 0)
        assert controller.start is controller.graph.cell(0, 0)


# =============================================================================
# Edits
# =============================================================================


class TestEdits:
    """Tool actions, clearing and rebuilding."""

    def test_perform_action_follows_tool_mode(self, controller) -> None:
        controller.perform_action(1, 1)
        assert controller.graph.cell(1, 1).type is CellType.WALL
        controller.perform_action(1, 1)
        assert controller.graph.cell(1, 1).type is CellType.CLEAR

        controller.tool_mode = ToolMode.START
        controller.perform_action(0, 0)
        controller.tool_mode = ToolMode.END
        controller.perform_action(2, 2)
        assert controller.start.coord == (0, 0)
        assert controller.end.coord == (2, 2)

    def test_clear_grid(self, controller, recorder) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        for r, c in [(0, 1), (1, 1), (2, 1)]:
            controller.toggle_wall(r, c)

        controller.clear_grid()
        assert {c.type for c in controller.graph} == {CellType.CLEAR}
        assert sum(len(c.adjacents) for c in controller.graph) == 2 * 12
        assert controller.start is None and controller.end is None
        assert recorder.designations[-1] is False

    def test_reset_traversal(self, controller, clock) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.start_run()
        _pump_until_done(controller, clock)
        assert _types(controller, CellType.VISITED)

        controller.reset_traversal()
        assert _types(controller, CellType.VISITED) == []
        assert _types(controller, CellType.PATH) == []
        assert controller.start.type is CellType.START

    def test_rebuild(self, controller, recorder) -> None:
        old = controller.graph
        controller.set_start(0, 0)
        new = controller.rebuild(4, 6)
        assert new is controller.graph
        assert old.retired and not new.retired
        assert (new.row_count, new.column_count) == (4, 6)
        assert controller.start is None
        assert recorder.rebuilt == [new]

    def test_invalid_rebuild_keeps_state(self, controller) -> None:
        old = controller.graph
        controller.set_start(0, 0)
        with pytest.raises(InvalidDimension):
            controller.rebuild(0, 5)
        assert controller.graph is old and not old.retired
        assert controller.start is old.cell(0, 0)


# =============================================================================
# Runs
# =============================================================================


class TestRuns:
    """Run lifecycle through the controller."""

    def test_missing_designation(self, controller) -> None:
        controller.set_start(0, 0)
        with pytest.raises(MissingDesignation):
            controller.start_run()
        assert controller.runner is None

    def test_start_run_twice(self, controller) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.start_run()
        with pytest.raises(AlreadyRunning):
            controller.start_run()

    def test_unknown_algorithm(self, controller) -> None:
        with pytest.raises(ValueError):
            controller.set_algorithm("astar")
        with pytest.raises(ValueError):
            GridController(2, 2, algorithm="dijkstra")

    @pytest.mark.parametrize("algo", sorted(ALGORITHMS))
    def test_run_reaches_and_highlights_path(self, controller, recorder, clock, algo) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        runner = controller.start_run(algo)
        assert isinstance(runner, ALGORITHMS[algo])
        assert controller.is_running

        _pump_until_done(controller, clock)
        assert recorder.started == 1
        assert recorder.stopped == [RunStatus.REACHED]
        path = [c.coord for c in runner.path()]
        assert path[0] == (0, 0) and path[-1] == (2, 2)
        assert sorted(_types(controller, CellType.PATH)) == sorted(path[1:-1])
        assert controller.end.type is CellType.END

    def test_no_highlight(self, ticker, clock) -> None:
        controller = GridController(3, 3, ticker=ticker, highlight_path=False)
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.start_run()
        _pump_until_done(controller, clock)
        assert controller.runner.status is RunStatus.REACHED
        assert _types(controller, CellType.PATH) == []

    def test_new_run_clears_previous_marks(self, controller, clock) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.start_run("bfs")
        _pump_until_done(controller, clock)
        controller.set_end(0, 1)
        controller.start_run("bfs")
        assert _types(controller, CellType.PATH) == []
        _pump_until_done(controller, clock)
        assert controller.runner.status is RunStatus.REACHED

    def test_toggle_run(self, controller, recorder) -> None:
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.toggle_run()
        assert controller.is_running
        controller.toggle_run()
        assert not controller.is_running
        assert recorder.stopped == [RunStatus.CANCELLED]

    def test_rebuild_stops_active_run(self, controller, recorder, clock) -> None:
        """The runner is stopped before the old graph is retired."""
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        old = controller.graph
        runner = controller.start_run()
        controller.rebuild(5, 5)

        assert recorder.stopped == [RunStatus.CANCELLED]
        assert controller.runner is None
        assert not controller.ticker.active
        clock.advance_ms(100)
        assert not controller.pump()
        runner.stop()
        assert recorder.stopped == [RunStatus.CANCELLED]
        with pytest.raises(StaleRunner):
            BreadthFirstRunner(old, old.cell(0, 0), old.cell(2, 2)).start()

    def test_wall_edit_during_run(self, controller, clock) -> None:
        """Walls placed mid-run are respected by later expansions."""
        controller.set_start(0, 0)
        controller.set_end(2, 2)
        controller.start_run("bfs")
        for r, c in [(1, 2), (2, 1)]:
            controller.toggle_wall(r, c)
        _pump_until_done(controller, clock)
        assert controller.runner.status is RunStatus.EXHAUSTED
        assert controller.end.type is CellType.END
