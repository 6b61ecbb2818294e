# particle.py
"""
Manages the kinematic state of the starfield.

This module defines the ParticleField class, which holds every particle's
position, velocity, radius and alpha in NumPy arrays and advances them by
one tick per call. It does no drawing.
"""
import logging
import numpy as np
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from constants import (
    ALPHA_MAX, ALPHA_MIN, REPULSION_RADIUS, REPULSION_STRENGTH, VELOCITY_SPREAD
)

# --- Data Contracts ---
#
# class ParticleField:
#   - create(width, height, count, speed, size, rng=None) -> ParticleField:
#     - Inputs:
#       - width, height: float > 0, viewport dimensions.
#       - count: int >= 0, number of particles.
#       - speed: float, velocity scalar. Negative values act as 0.
#       - size: float, radius scalar. Negative values act as 0.
#       - rng: Optional numpy Generator. A freshly OS-seeded one is used
#         when omitted, so every field is independently seeded.
#     - Outputs: A populated ParticleField.
#     - Invariants:
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - self.velocities is a NumPy array of shape (N, 2) of dtype float64.
#       - self.radii and self.alphas are NumPy arrays of shape (N,).
#
#   - step(self, pointer: Optional[Tuple[float, float]] = None) -> None:
#     - Side Effects: Moves every particle by its velocity, flips velocity
#       components of particles outside the bounds, and pushes particles
#       near the pointer away from it.
#     - Invariants: Particle count remains constant. Positions are NOT
#       clamped; a particle may overshoot an edge for a single tick.
#
#   - resize(self, width, height) -> None:
#     - Side Effects: Updates the bounce bounds. Particles are not moved.


@dataclass(frozen=True)
class Particle:
    """A read-only snapshot of one particle."""
    position: Tuple[float, float]
    velocity: Tuple[float, float]
    radius: float
    alpha: float


def _check_dimensions(width: float, height: float):
    if width <= 0 or height <= 0:
        msg = f"Viewport dimensions must be positive, got {width}x{height}."
        logging.error(msg)
        raise ValueError(msg)


class ParticleField:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(
        self,
        positions: np.ndarray,
        velocities: np.ndarray,
        radii: np.ndarray,
        alphas: np.ndarray,
        width: float,
        height: float,
    ):
        _check_dimensions(width, height)
        self.positions = positions
        self.velocities = velocities
        self.radii = radii
        self.alphas = alphas
        self.width = float(width)
        self.height = float(height)

    @classmethod
    def create(
        cls,
        width: float,
        height: float,
        count: int,
        speed: float,
        size: float,
        rng: Optional[np.random.Generator] = None,
    ) -> "ParticleField":
        """
        Seeds a new field of `count` particles inside the viewport.

        Args:
            width (float): The width of the viewport.
            height (float): The height of the viewport.
            count (int): Number of particles to create.
            speed (float): Scales the initial velocity components.
            size (float): Upper bound for particle radii.
            rng (Optional[np.random.Generator]): Source of randomness.
        """
        _check_dimensions(width, height)
        if count < 0:
            msg = f"Particle count must not be negative, got {count}."
            logging.error(msg)
            raise ValueError(msg)

        if rng is None:
            rng = np.random.default_rng()
        speed = max(float(speed), 0.0)
        size = max(float(size), 0.0)

        positions = rng.uniform(low=[0, 0], high=[width, height], size=(count, 2))
        velocities = rng.uniform(-VELOCITY_SPREAD, VELOCITY_SPREAD, size=(count, 2)) * speed
        radii = rng.uniform(0.0, 1.0, size=count) * size
        alphas = rng.uniform(ALPHA_MIN, ALPHA_MAX, size=count)

        logging.info(
            f"ParticleField created with {count} particles "
            f"in a {width:.0f}x{height:.0f} viewport (speed={speed}, size={size})."
        )
        return cls(positions, velocities, radii, alphas, width, height)

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, index: int) -> Particle:
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        return Particle(
            position=(float(x), float(y)),
            velocity=(float(vx), float(vy)),
            radius=float(self.radii[index]),
            alpha=float(self.alphas[index]),
        )

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield self[i]

    def step(self, pointer: Optional[Tuple[float, float]] = None):
        """
        Executes one time step of the field.
        """
        pos = self.positions
        vel = self.velocities

        # 1. Move
        pos += vel

        # 2. Bounce: flip the velocity component of any axis that is out of
        #    bounds and still heading outward. The position itself is left
        #    where it landed; a particle already heading back in keeps going.
        out_x = ((pos[:, 0] < 0) & (vel[:, 0] < 0)) | ((pos[:, 0] > self.width) & (vel[:, 0] > 0))
        out_y = ((pos[:, 1] < 0) & (vel[:, 1] < 0)) | ((pos[:, 1] > self.height) & (vel[:, 1] > 0))
        vel[out_x, 0] *= -1
        vel[out_y, 1] *= -1

        # 3. Pointer repulsion
        if pointer is None or len(self) == 0:
            return
        delta = np.asarray(pointer, dtype=np.float64) - pos
        distance = np.sqrt(np.sum(delta ** 2, axis=1))
        # d == 0 has no direction to push along.
        near = (distance < REPULSION_RADIUS) & (distance > 0)
        if not near.any():
            return
        force = (REPULSION_RADIUS - distance[near]) / REPULSION_RADIUS
        direction = delta[near] / distance[near, np.newaxis]
        pos[near] -= direction * (force * REPULSION_STRENGTH)[:, np.newaxis]

    def resize(self, width: float, height: float):
        """Updates the bounds used by future bounce tests."""
        _check_dimensions(width, height)
        self.width = float(width)
        self.height = float(height)
        logging.debug(f"ParticleField bounds set to {width}x{height}.")
