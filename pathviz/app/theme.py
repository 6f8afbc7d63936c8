# pathviz/app/theme.py
"""
Palette + panel skin (visuals only; no logic)
- Cells: one fill per CellType, thin navy border
- Backdrop: dark vertical gradient, cached by window size
- Right panel: frosted glass underlay (viewer draws text/buttons on top)
"""

from __future__ import annotations
from typing import Dict, Tuple
import pygame

from pathviz.core.types import CellType

RGB = Tuple[int, int, int]

# ---- cell palette ----
BOX_BORDER_COLOR = (25, 41, 101)     # #192965
CELL_COLORS: Dict[CellType, RGB] = {
    CellType.WALL:    (25, 41, 101),    # #192965
    CellType.CLEAR:   (255, 255, 255),
    CellType.START:   (0, 123, 255),    # #007bff
    CellType.END:     (240, 19, 77),    # #f0134d
    CellType.VISITED: (195, 240, 202),  # #c3f0ca
    CellType.PATH:    (63, 197, 240),   # #3fc5f0
    CellType.ERROR:   (108, 117, 125),  # #6c757d
}
HOVER_OUTLINE = (255, 210, 0)

# ---- panel ----
TEXT_LIGHT    = (230, 235, 240)
TEXT_DIM      = (150, 158, 170)
ACCENT_GOLD   = (255, 210, 0)
PANEL_FILL    = (18, 20, 28, 190)
PANEL_SHADOW  = (0, 0, 0, 140)
CARD_BG       = (24, 28, 36, 220)
CARD_HI       = (255, 255, 255, 18)

BTN_IDLE      = (36, 40, 48, 220)
BTN_HOVER     = (46, 50, 60, 230)
BTN_ACTIVE    = (58, 86, 160, 235)
BTN_DISABLED  = (30, 32, 38, 160)
BTN_BORDER_ACTIVE = (120, 170, 255, 255)

# caches
_backdrop_by_size: dict[Tuple[int, int], pygame.Surface] = {}


def fill_for(cell_type: CellType) -> RGB:
    return CELL_COLORS[cell_type]


# ---------- helpers ----------
def rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)


def glass_panel(screen: pygame.Surface, rect: pygame.Rect,
                fill_rgba=PANEL_FILL, shadow_rgba=PANEL_SHADOW):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), shadow_rgba, radius=20)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), fill_rgba, radius=20)
    # subtle top sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 12)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255, 255, 255, 18), hi.get_rect(), border_radius=18)
    card.blit(hi, (0, 0))
    screen.blit(card, rect.topleft)


def draw_backdrop(screen: pygame.Surface):
    """Dark gradient, rendered once per window size."""
    size = screen.get_size()
    if size not in _backdrop_by_size:
        w, h = size
        surf = pygame.Surface(size)
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(surf, c, (0, y), (w, y))
        _backdrop_by_size.clear()
        _backdrop_by_size[size] = surf
    screen.blit(_backdrop_by_size[size], (0, 0))
