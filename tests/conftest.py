import os

# Pygame must never try to open a real display during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from frame_scheduler import FrameScheduler
from viewport import ViewportSignals


class RecordingSurface:
    """Drawing surface that records every call instead of painting."""

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.calls = []

    def clear_rect(self, x, y, w, h):
        self.calls.append(("clear", x, y, w, h))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("circle", x, y, radius, color))

    def stroke_line(self, x1, y1, x2, y2, color, width):
        self.calls.append(("line", x1, y1, x2, y2, color, width))

    def resize(self, width, height):
        self.width = width
        self.height = height
        self.calls.append(("resize", width, height))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]

    def reset(self):
        self.calls = []


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def signals():
    return ViewportSignals(800, 600)
