# visualization.py
"""
Renders the starfield and drives its frame loop.

FieldRenderer owns a ParticleField, steps it once per frame, and draws the
particles and the proximity links between them onto a DrawingSurface. It
also follows the viewport: resizes adapt the bounds and pointer movement
feeds the repulsion force.
"""
import logging
import numpy as np
from enum import Enum
from numba import jit
from typing import Callable, List, Optional, Tuple
from canvas import SURFACE_METHODS, DrawingSurface
from constants import LINK_DISTANCE, LINK_MAX_ALPHA, LINK_WIDTH
from frame_scheduler import FrameScheduler
from particle import ParticleField
from settings import FieldConfiguration
from viewport import ViewportSignals

# --- Data Contracts ---
#
# class FieldRenderer:
#   - __init__(self, scheduler, signals=None, rng=None, log_throttle=600):
#     - Inputs:
#       - scheduler: FrameScheduler the loop reschedules itself through.
#       - signals: Optional ViewportSignals. Without it the renderer runs
#         with no resize adaptation and no pointer repulsion.
#       - rng: Optional numpy Generator used to seed every new field.
#
#   - start(self, surface: DrawingSurface, configuration: FieldConfiguration) -> None:
#     - Side Effects: Builds a field sized to the surface, subscribes to the
#       viewport signals and schedules the first tick. No-op if running.
#     - Errors: ValueError if the surface is missing or cannot be drawn on.
#
#   - stop(self) -> None:
#     - Side Effects: Unsubscribes, cancels the pending tick, clears the
#       surface and detaches from it. Idempotent.
#
#   - reconfigure(self, configuration: FieldConfiguration) -> None:
#     - Side Effects: Rebuilds the field if count, speed or size changed.
#       A hidden configuration stops the loop and clears the surface; a
#       visible one restarts it with a fresh field.


@jit(nopython=True)
def _find_links_numba(positions, max_distance):
    """
    Numba-jitted O(n^2) proximity pass.

    Each unordered pair is visited once (i < j). Returns the indices and the
    distance of every pair closer than max_distance.
    """
    n = positions.shape[0]
    max_distance_sq = max_distance * max_distance

    # First pass counts, second pass fills, so no per-frame n^2 allocation.
    count = 0
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            if dx * dx + dy * dy < max_distance_sq:
                count += 1

    first = np.empty(count, dtype=np.int64)
    second = np.empty(count, dtype=np.int64)
    distances = np.empty(count, dtype=np.float64)
    k = 0
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            dist_sq = dx * dx + dy * dy
            if dist_sq < max_distance_sq:
                first[k] = i
                second[k] = j
                distances[k] = np.sqrt(dist_sq)
                k += 1
    return first, second, distances


def find_links(positions: np.ndarray, max_distance: float = LINK_DISTANCE):
    """Returns (first, second, distances) for every pair closer than max_distance."""
    positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 2)
    return _find_links_numba(positions, float(max_distance))


def link_alpha(distance, max_distance: float = LINK_DISTANCE):
    """
    Alpha byte of a link: LINK_MAX_ALPHA at distance 0, falling linearly to
    0 at max_distance. Computed as floor((1 - d / max) * LINK_MAX_ALPHA).
    """
    fade = np.clip(1.0 - np.asarray(distance, dtype=np.float64) / max_distance, 0.0, 1.0)
    return np.floor(fade * LINK_MAX_ALPHA).astype(np.int64)


def with_alpha(color: str, alpha: int) -> str:
    """Appends an alpha byte (0-255) to '#rrggbb' as two hex digits."""
    return f"{color}{min(max(int(alpha), 0), 255):02x}"


def with_opacity(color: str, opacity: float) -> str:
    """Appends an opacity in [0, 1] to '#rrggbb' as two hex digits."""
    return with_alpha(color, int(min(max(float(opacity), 0.0), 1.0) * 255))


class RendererState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


def _validate_surface(surface) -> None:
    if surface is None:
        msg = "Cannot start the starfield without a drawing surface."
    else:
        missing = [name for name in SURFACE_METHODS if not callable(getattr(surface, name, None))]
        width = getattr(surface, "width", 0)
        height = getattr(surface, "height", 0)
        if missing:
            msg = f"Drawing surface {surface!r} is missing {', '.join(missing)}."
        elif not (width > 0 and height > 0):
            msg = f"Drawing surface has no drawable area ({width}x{height})."
        else:
            return
    logging.critical(msg)
    raise ValueError(msg)


class FieldRenderer:
    """
    Runs the starfield's frame loop and draws each frame.
    """
    def __init__(
        self,
        scheduler: FrameScheduler,
        signals: Optional[ViewportSignals] = None,
        rng: Optional[np.random.Generator] = None,
        log_throttle: int = 600,
    ):
        self._scheduler = scheduler
        self._signals = signals
        self._rng = rng
        self._log_throttle = max(int(log_throttle), 1)

        self._surface: Optional[DrawingSurface] = None
        self._config = FieldConfiguration()
        self._running = False
        self._frame_handle: Optional[int] = None
        self._unsubscribers: List[Callable[[], None]] = []

        self.field: Optional[ParticleField] = None
        self.pointer: Optional[Tuple[float, float]] = None
        self.frame_count = 0

        if signals is None:
            logging.warning("No viewport signals: resize and pointer repulsion disabled.")

    @property
    def state(self) -> RendererState:
        return RendererState.RUNNING if self._running else RendererState.STOPPED

    @property
    def configuration(self) -> FieldConfiguration:
        return self._config

    # --- Lifecycle ---

    def start(self, surface: DrawingSurface, configuration: FieldConfiguration):
        if self._running:
            logging.debug("start() ignored: the render loop is already running.")
            return
        _validate_surface(surface)
        self._surface = surface
        self._config = configuration

        if configuration.show_particles:
            self._begin()
        else:
            self._clear()
            logging.info("Starfield is hidden; renderer attached without a loop.")

    def stop(self):
        if self._surface is None:
            return
        self._halt()
        self._surface = None
        logging.info("Starfield renderer stopped.")

    def reconfigure(self, configuration: FieldConfiguration):
        previous, self._config = self._config, configuration
        if self._surface is None:
            return

        if not configuration.show_particles:
            if self._running:
                self._halt()
                logging.info("Starfield hidden; render loop stopped.")
            return

        if not self._running:
            self._begin()
        elif previous.requires_rebuild(configuration):
            self.field = self._build_field()
        else:
            logging.debug(f"Configuration applied without rebuild: {configuration}")

    def _begin(self):
        surface = self._surface
        if self._signals is not None:
            width, height = self._signals.size
            if width > 0 and height > 0 and (width, height) != (surface.width, surface.height):
                surface.resize(width, height)

        self.field = self._build_field()
        self.pointer = None
        self.frame_count = 0
        if self._signals is not None:
            self._unsubscribers = [
                self._signals.on_resize(self._on_resize),
                self._signals.on_pointer_move(self._on_pointer_move),
                self._signals.on_pointer_leave(self._on_pointer_leave),
            ]
        self._running = True
        self._frame_handle = self._scheduler.request_frame(self._tick)
        logging.info(f"Starfield render loop started ({surface.width}x{surface.height}).")

    def _halt(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        self._running = False
        self.field = None
        self.pointer = None
        self._clear()

    def _build_field(self) -> ParticleField:
        config = self._config
        return ParticleField.create(
            self._surface.width,
            self._surface.height,
            config.particle_count,
            config.particle_speed,
            config.particle_size,
            rng=self._rng,
        )

    def _clear(self):
        self._surface.clear_rect(0, 0, self._surface.width, self._surface.height)

    # --- Viewport signal handlers ---

    def _on_resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            logging.debug(f"Ignoring degenerate viewport size {width}x{height}.")
            return
        self._surface.resize(width, height)
        if self.field is not None:
            self.field.resize(width, height)

    def _on_pointer_move(self, x: float, y: float):
        self.pointer = (x, y)

    def _on_pointer_leave(self):
        self.pointer = None

    # --- Frame loop ---

    def _tick(self, timestamp: float):
        self._frame_handle = None
        if not self._running:
            return

        self.draw_frame()
        self.frame_count += 1

        # Stopped or hidden while this frame was in flight.
        if not self._running:
            return

        # Hot loops must throttle logs
        if self.frame_count % self._log_throttle == 0:
            logging.debug(
                f"Frame {self.frame_count} at {timestamp:.0f}ms | "
                f"particles={len(self.field)} pointer={self.pointer}"
            )

        self._frame_handle = self._scheduler.request_frame(self._tick)

    def draw_frame(self):
        """
        Clears the surface, advances the field by one tick and draws it.
        """
        surface = self._surface
        config = self._config
        field = self.field

        surface.clear_rect(0, 0, surface.width, surface.height)
        field.step(self.pointer if config.pointer_repulsion else None)

        color = config.particle_color
        for (x, y), radius, alpha in zip(field.positions, field.radii, field.alphas):
            surface.fill_circle(x, y, radius, with_opacity(color, alpha))

        if config.particle_links:
            self._draw_links(color)

    def _draw_links(self, color: str):
        surface = self._surface
        positions = self.field.positions
        first, second, distances = find_links(positions, LINK_DISTANCE)
        for i, j, alpha in zip(first, second, link_alpha(distances)):
            x1, y1 = positions[i]
            x2, y2 = positions[j]
            surface.stroke_line(x1, y1, x2, y2, with_alpha(color, alpha), LINK_WIDTH)
