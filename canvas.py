# canvas.py
"""
A 2D drawing surface backed by Pygame.

Canvas wraps a per-pixel-alpha pygame.Surface behind the small interface the
renderer draws through: clear a rectangle, fill a circle, stroke a line and
change the pixel size. Colours are CSS-style hex strings ('#rrggbb' or
'#rrggbbaa'); the alpha channel is blended onto whatever is already drawn.
"""
import pygame
import pygame.gfxdraw
from functools import lru_cache
from typing import Protocol, Tuple

# Methods a surface must provide for the renderer to draw on it.
SURFACE_METHODS = ("clear_rect", "fill_circle", "stroke_line", "resize")


class DrawingSurface(Protocol):
    width: int
    height: int

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None: ...

    def stroke_line(
        self, x1: float, y1: float, x2: float, y2: float, color: str, width: float
    ) -> None: ...

    def resize(self, width: int, height: int) -> None: ...


@lru_cache(maxsize=1024)
def parse_color(color: str) -> pygame.Color:
    """Parses '#rrggbb' / '#rrggbbaa' into a pygame.Color."""
    return pygame.Color(color)


class Canvas:
    """
    Transparent Pygame surface the starfield is drawn onto.
    The host blits it over its background every frame.
    """
    def __init__(self, width: int, height: int):
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def clear_rect(self, x: float, y: float, w: float, h: float):
        self.surface.fill((0, 0, 0, 0), pygame.Rect(int(x), int(y), int(w), int(h)))

    def fill_circle(self, x: float, y: float, radius: float, color: str):
        if radius <= 0:
            return
        # Sub-pixel radii still light up a single pixel.
        r = max(int(round(radius)), 1)
        pygame.gfxdraw.filled_circle(self.surface, int(x), int(y), r, parse_color(color))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float):
        c = parse_color(color)
        if width <= 1:
            pygame.gfxdraw.line(self.surface, int(x1), int(y1), int(x2), int(y2), c)
        else:
            pygame.draw.line(self.surface, c, (x1, y1), (x2, y2), int(round(width)))

    def resize(self, width: int, height: int):
        """Replaces the backing surface. Previous contents are discarded."""
        self.surface = pygame.Surface((width, height), pygame.SRCALPHA)
