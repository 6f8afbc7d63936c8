#!/usr/bin/env python3
"""
Grid Pathfinding Viewer: paint walls, drop start/end, watch BFS/DFS walk.

- Mouse:
    left click / drag  -> apply the active tool (wall toggle, start, end)
- Keyboard:
    [1]/[2]/[3]  -> tool: walls / start / end
    [B]/[D]      -> algorithm: BFS / DFS
    [SPACE]      -> start / stop the run
    [R]          -> reset traversal marks
    [C]          -> clear the grid
    [+]/[-]      -> ticks/sec
    [Q]/[ESC]    -> quit

Options: --algo=bfs|dfs --rows=N --cols=N --box=PX (env: PATHVIZ_ALGORITHM)
"""

import logging
import sys
from typing import Callable, List, Optional, Tuple

import pygame

from pathviz.app import theme as THEME
from pathviz.app.settings import GridSettings
from pathviz.config import LOG_FORMAT, LOG_LEVEL, resolve_algorithm
from pathviz.core.controller import ControllerListener, GridController
from pathviz.core.errors import GridError
from pathviz.core.grid import GridGraph
from pathviz.core.types import Coord, RunStatus, ToolMode

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 300
GRID_MARGIN = 16
MIN_WIN_H = 640
FONT_NAME = None  # default pygame font

TOOL_LABELS = {ToolMode.WALL: "Walls", ToolMode.START: "Start", ToolMode.END: "Target"}
STATUS_LABELS = {
    RunStatus.REACHED: "Target reached",
    RunStatus.EXHAUSTED: "No path",
    RunStatus.CANCELLED: "Stopped",
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback: Callable[[], None], *,
                 togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False
        self.enabled = True

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if not self.enabled:
            bg = THEME.BTN_DISABLED
        elif self.active and self.togglable:
            bg = THEME.BTN_ACTIVE
        elif self.hover:
            bg = THEME.BTN_HOVER
        else:
            bg = THEME.BTN_IDLE
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, THEME.BTN_BORDER_ACTIVE, self.rect, width=2, border_radius=10)

        color = THEME.TEXT_LIGHT if self.enabled else THEME.TEXT_DIM
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.enabled and self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer(ControllerListener):
    def __init__(self, settings: GridSettings):
        pygame.init()
        self.settings = settings
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        self.controller = GridController(settings.rows, settings.columns,
                                         algorithm=settings.algorithm, listener=self)
        self.state = "Idle"
        self.message = ""
        self._dragging = False
        self._last_drag_cell: Optional[Coord] = None
        self._hover_cell: Optional[Coord] = None

        self._buttons: List[UIButton] = []
        self.screen = pygame.display.set_mode(self._window_size())
        pygame.display.set_caption("Pathfinding Visualizer")
        self._layout()
        self.clock = pygame.time.Clock()

    @property
    def graph(self) -> GridGraph:
        return self.controller.graph

    # ---------- layout ----------
    def _window_size(self) -> Tuple[int, int]:
        cs = self.settings.box_size
        w = GRID_MARGIN * 2 + self.settings.columns * cs + PANEL_W
        h = max(GRID_MARGIN * 2 + self.settings.rows * cs, MIN_WIN_H)
        return w, h

    def _layout(self):
        cs = self.settings.box_size
        win_w, win_h = self.screen.get_size()
        self.grid_rect = pygame.Rect(GRID_MARGIN, GRID_MARGIN,
                                     self.settings.columns * cs, self.settings.rows * cs)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)
        self._build_buttons()

    def _apply_settings(self, settings: GridSettings):
        """Rebuild the grid (and window) for new dimensions or box size."""
        rebuild = self.settings.requires_rebuild(settings)
        self.settings = settings
        if rebuild:
            self.controller.rebuild(settings.rows, settings.columns)
        self.screen = pygame.display.set_mode(self._window_size())
        self._layout()

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.controller.pump()
            self._draw()
            self.clock.tick(60)

    def _quit(self):
        self.controller.stop_run()
        pygame.quit()
        sys.exit(0)

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        if not self.grid_rect.collidepoint(pos):
            return None
        cs = self.settings.box_size
        col = (pos[0] - self.grid_rect.x) // cs
        row = (pos[1] - self.grid_rect.y) // cs
        return (row, col) if self.graph.in_bounds(row, col) else None

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self._cell_at(e.pos)
                if cell is not None:
                    self._dragging = True
                    self._paint(cell)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self._dragging = False
                self._last_drag_cell = None
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                self._hover_cell = self._cell_at(e.pos)
                if self._dragging and self._hover_cell is not None:
                    self._paint(self._hover_cell)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_r:
            self._reset_traversal()
        elif key == pygame.K_c:
            self._clear()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+5)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-5)
        elif key == pygame.K_1:
            self._switch_tool(ToolMode.WALL)
        elif key == pygame.K_2:
            self._switch_tool(ToolMode.START)
        elif key == pygame.K_3:
            self._switch_tool(ToolMode.END)
        elif key == pygame.K_b:
            self._switch_algo("bfs")
        elif key == pygame.K_d:
            self._switch_algo("dfs")

    # ---------- actions ----------
    def _paint(self, cell: Coord):
        # one action per cell per drag, otherwise a wall would flicker on and off
        if cell == self._last_drag_cell:
            return
        self._last_drag_cell = cell
        if self.controller.is_running and self.controller.tool_mode is not ToolMode.WALL:
            return
        try:
            self.controller.perform_action(*cell)
        except GridError as ex:
            self.message = str(ex)

    def _toggle_run(self):
        try:
            self.controller.toggle_run()
        except GridError as ex:
            logger.warning("cannot run: %s", ex)
            self.message = str(ex)

    def _reset_traversal(self):
        if self.controller.is_running:
            return
        self.controller.reset_traversal()
        self.state = "Idle"

    def _clear(self):
        self.controller.clear_grid()
        self.state = "Idle"

    def _switch_tool(self, mode: ToolMode):
        if self.controller.is_running:
            return
        self.controller.tool_mode = mode
        self._refresh_active_states()

    def _switch_algo(self, name: str):
        if self.controller.is_running:
            return
        self.controller.set_algorithm(name)
        self.settings = self.settings.with_algorithm(name)
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        ticker = self.controller.ticker
        ticker.set_ticks_per_sec(ticker.ticks_per_sec + dv)

    def _bump_rows(self, dv: int):
        if not self.controller.is_running:
            self._apply_settings(self.settings.with_rows(self.settings.rows + dv))

    def _bump_columns(self, dv: int):
        if not self.controller.is_running:
            self._apply_settings(self.settings.with_columns(self.settings.columns + dv))

    def _bump_box(self, dv: int):
        if not self.controller.is_running:
            self._apply_settings(self.settings.with_box_size(self.settings.box_size + dv))

    # ---------- controller hooks ----------
    def on_run_started(self) -> None:
        self.state = "Running"
        self.message = ""
        self._refresh_active_states()

    def on_run_stopped(self, status: RunStatus) -> None:
        self.state = STATUS_LABELS.get(status, "Idle")
        self._refresh_active_states()

    def on_designation_changed(self, ready: bool) -> None:
        if hasattr(self, "btn_run"):
            self.btn_run.enabled = ready or self.controller.is_running

    def on_grid_rebuilt(self, graph: GridGraph) -> None:
        self.state = "Idle"
        self._hover_cell = None

    # ---------- drawing ----------
    def _draw(self):
        THEME.draw_backdrop(self.screen)
        self._draw_grid()
        THEME.glass_panel(self.screen, self._right_band.inflate(-12, -12))
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_grid(self):
        cs = self.settings.box_size
        ox, oy = self.grid_rect.topleft
        for row in self.graph.cells:
            for cell in row:
                rect = pygame.Rect(ox + cell.col * cs, oy + cell.row * cs, cs, cs)
                pygame.draw.rect(self.screen, THEME.fill_for(cell.type), rect)
                pygame.draw.rect(self.screen, THEME.BOX_BORDER_COLOR, rect, 1)

        if self._hover_cell is not None:
            row, col = self._hover_cell
            rect = pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)
            pygame.draw.rect(self.screen, THEME.HOVER_OUTLINE, rect, 2)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 24
        y = rb.y + 266  # leaves space for the metrics card above
        w = rb.width - 48
        h = 32
        gap = 8
        half = (w - gap) // 2

        def add(label, cb, *, togglable=False, store_as: str | None = None, width=w, dx=0):
            btn = UIButton(label, pygame.Rect(x + dx, y, width, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Start / Stop", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Reset", self._reset_traversal, width=half)
        add("Clear Grid", self._clear, width=half, dx=half + gap); y += h + gap

        add("Walls",  lambda: self._switch_tool(ToolMode.WALL),  togglable=True, store_as="btn_tool_wall",
            width=(w - 2 * gap) // 3)
        add("Start",  lambda: self._switch_tool(ToolMode.START), togglable=True, store_as="btn_tool_start",
            width=(w - 2 * gap) // 3, dx=(w - 2 * gap) // 3 + gap)
        add("Target", lambda: self._switch_tool(ToolMode.END),   togglable=True, store_as="btn_tool_end",
            width=(w - 2 * gap) // 3, dx=2 * ((w - 2 * gap) // 3 + gap)); y += h + gap

        add("BFS", lambda: self._switch_algo("bfs"), togglable=True, store_as="btn_algo_bfs", width=half)
        add("DFS", lambda: self._switch_algo("dfs"), togglable=True, store_as="btn_algo_dfs",
            width=half, dx=half + gap); y += h + gap

        add("Speed -", lambda: self._bump_speed(-5), width=half)
        add("Speed +", lambda: self._bump_speed(+5), width=half, dx=half + gap); y += h + gap
        add("Rows -", lambda: self._bump_rows(-1), width=half)
        add("Rows +", lambda: self._bump_rows(+1), width=half, dx=half + gap); y += h + gap
        add("Cols -", lambda: self._bump_columns(-1), width=half)
        add("Cols +", lambda: self._bump_columns(+1), width=half, dx=half + gap); y += h + gap
        add("Box -", lambda: self._bump_box(-2), width=half)
        add("Box +", lambda: self._bump_box(+2), width=half, dx=half + gap)

        self._refresh_active_states()

    def _refresh_active_states(self):
        running = self.controller.is_running
        if hasattr(self, "btn_run"):
            self.btn_run.active = running
            self.btn_run.enabled = running or self.controller.is_ready
        mode = self.controller.tool_mode
        for name, m in (("btn_tool_wall", ToolMode.WALL), ("btn_tool_start", ToolMode.START),
                        ("btn_tool_end", ToolMode.END)):
            if hasattr(self, name):
                getattr(self, name).active = mode is m
        if hasattr(self, "btn_algo_bfs"):
            self.btn_algo_bfs.active = self.controller.algorithm == "bfs"
        if hasattr(self, "btn_algo_dfs"):
            self.btn_algo_dfs.active = self.controller.algorithm == "dfs"

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 40, 236), pygame.SRCALPHA)
        pygame.draw.rect(card, THEME.CARD_BG, card.get_rect(), border_radius=14)
        self.screen.blit(card, (rb.x + 20, rb.y + 18))

        x0 = rb.x + 34
        y0 = rb.y + 28

        def line(text, big=False, color=THEME.TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        runner = self.controller.runner
        m = runner.metrics() if runner is not None else {}
        line("Metrics", big=True, color=THEME.ACCENT_GOLD)
        line(f"State: {self.state}")
        line(f"Algo: {self.controller.algorithm.upper()}   Tool: {TOOL_LABELS[self.controller.tool_mode]}")
        line(f"Steps: {m.get('steps', 0)}")
        line(f"Visited: {m.get('visited', 0)}")
        line(f"Frontier: {m.get('frontier', 0)}")
        line(f"Path Len: {len(runner.path()) if runner is not None else 0}")
        line(f"Speed: {self.controller.ticker.ticks_per_sec} ticks/s")
        line(f"Grid: {self.settings.rows}x{self.settings.columns} @ {self.settings.box_size}px",
             color=THEME.TEXT_DIM)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)

        if self.message:
            surf = self.font_small.render(self.message, True, THEME.ACCENT_GOLD)
            self.screen.blit(surf, (x0 - 10, rb.bottom - 30))


# ---------- entry points ----------
def settings_from_argv(argv: List[str]) -> GridSettings:
    settings = GridSettings.from_canvas(algorithm=resolve_algorithm(argv))
    for arg in argv:
        if arg.startswith("--box="):
            box = arg.split("=", 1)[1]
            settings = GridSettings.from_canvas(box_size=settings.with_box_size(box).box_size,
                                                algorithm=settings.algorithm)
    for arg in argv:
        if arg.startswith("--rows="):
            settings = settings.with_rows(arg.split("=", 1)[1])
        elif arg.startswith("--cols="):
            settings = settings.with_columns(arg.split("=", 1)[1])
    return settings


def run(settings: GridSettings):
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("starting viewer: %dx%d grid, %s", settings.rows, settings.columns, settings.algorithm)
    Viewer(settings).run()


def main(argv: Optional[List[str]] = None):
    run(settings_from_argv(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
