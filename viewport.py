# viewport.py
"""
Viewport size and pointer signals.

ViewportSignals is the renderer's only view of the window: it reports the
current size and fans out resize and pointer events to subscribers.
dispatch_event translates raw Pygame events into those signals.
"""
import logging
import pygame
from typing import Callable, List, Tuple

ResizeHandler = Callable[[int, int], None]
PointerMoveHandler = Callable[[float, float], None]
PointerLeaveHandler = Callable[[], None]


def _subscribe(handlers: list, handler) -> Callable[[], None]:
    handlers.append(handler)

    def unsubscribe():
        if handler in handlers:
            handlers.remove(handler)

    return unsubscribe


class ViewportSignals:
    """
    Tracks the viewport size and delivers resize / pointer events.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._resize_handlers: List[ResizeHandler] = []
        self._move_handlers: List[PointerMoveHandler] = []
        self._leave_handlers: List[PointerLeaveHandler] = []

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def on_resize(self, handler: ResizeHandler) -> Callable[[], None]:
        return _subscribe(self._resize_handlers, handler)

    def on_pointer_move(self, handler: PointerMoveHandler) -> Callable[[], None]:
        return _subscribe(self._move_handlers, handler)

    def on_pointer_leave(self, handler: PointerLeaveHandler) -> Callable[[], None]:
        return _subscribe(self._leave_handlers, handler)

    def emit_resize(self, width: int, height: int):
        self.width = width
        self.height = height
        logging.debug(f"Viewport resized to {width}x{height}.")
        for handler in list(self._resize_handlers):
            handler(width, height)

    def emit_pointer_move(self, x: float, y: float):
        for handler in list(self._move_handlers):
            handler(x, y)

    def emit_pointer_leave(self):
        for handler in list(self._leave_handlers):
            handler()


def dispatch_event(event: pygame.event.Event, signals: ViewportSignals) -> bool:
    """
    Handle a single pygame event.
    Returns False if the application should quit, True otherwise.
    """
    if event.type == pygame.QUIT:
        logging.info("Quit event received.")
        return False
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            logging.info("ESC key pressed.")
            return False
    elif event.type == pygame.VIDEORESIZE:
        signals.emit_resize(event.w, event.h)
    elif event.type == pygame.MOUSEMOTION:
        signals.emit_pointer_move(*event.pos)
    elif event.type == pygame.WINDOWLEAVE:
        signals.emit_pointer_leave()

    return True
