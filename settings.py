# settings.py
"""
Particle settings consumed by the renderer.

FieldConfiguration is an immutable snapshot of the user-facing particle
settings. It is built from the camelCase settings mapping the dashboard
stores, merged over the dashboard defaults.
"""
import dataclasses
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from constants import DEFAULT_SETTINGS

HEX_RGB = re.compile(r"^#[0-9a-fA-F]{6}$")

# --- Data Contracts ---
#
# FieldConfiguration.from_settings(settings: Optional[Mapping[str, Any]]) -> FieldConfiguration:
#   - Inputs: camelCase keys "particleCount", "particleSpeed", "particleSize",
#     "particleColor", "particleLinks", "showParticles", "pointerRepulsion".
#     Missing keys take the defaults from constants.DEFAULT_SETTINGS.
#   - Outputs: A validated, frozen FieldConfiguration.
#   - Invariants:
#     - particle_count is an int >= 0; speed and size are floats >= 0.
#     - particle_color is a '#rrggbb' string.
#   - Errors: ValueError when a numeric setting is not a finite number.


@dataclass(frozen=True)
class FieldConfiguration:
    particle_count: int = DEFAULT_SETTINGS["particleCount"]
    particle_speed: float = DEFAULT_SETTINGS["particleSpeed"]
    particle_size: float = DEFAULT_SETTINGS["particleSize"]
    particle_color: str = DEFAULT_SETTINGS["particleColor"]
    particle_links: bool = DEFAULT_SETTINGS["particleLinks"]
    show_particles: bool = DEFAULT_SETTINGS["showParticles"]
    pointer_repulsion: bool = DEFAULT_SETTINGS["pointerRepulsion"]

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None) -> "FieldConfiguration":
        merged: Dict[str, Any] = {**DEFAULT_SETTINGS, **(settings or {})}

        count = int(_number(merged, "particleCount"))
        speed = _number(merged, "particleSpeed")
        size = _number(merged, "particleSize")
        if count < 0 or speed < 0 or size < 0:
            logging.warning(
                f"Negative particle settings clamped to 0 "
                f"(count={count}, speed={speed}, size={size})."
            )
            count, speed, size = max(count, 0), max(speed, 0.0), max(size, 0.0)

        color = merged["particleColor"]
        if not isinstance(color, str) or not HEX_RGB.match(color):
            logging.error(
                f"Could not parse particle color {color!r}. "
                f"Falling back to {DEFAULT_SETTINGS['particleColor']}."
            )
            color = DEFAULT_SETTINGS["particleColor"]

        return cls(
            particle_count=count,
            particle_speed=speed,
            particle_size=size,
            particle_color=color.lower(),
            particle_links=bool(merged["particleLinks"]),
            show_particles=bool(merged["showParticles"]),
            pointer_repulsion=bool(merged["pointerRepulsion"]),
        )

    def requires_rebuild(self, other: "FieldConfiguration") -> bool:
        """True if switching to `other` needs a freshly seeded field."""
        return (
            self.particle_count != other.particle_count
            or self.particle_speed != other.particle_speed
            or self.particle_size != other.particle_size
        )

    def with_changes(self, **changes) -> "FieldConfiguration":
        return dataclasses.replace(self, **changes)


def _number(settings: Mapping[str, Any], key: str) -> float:
    value = settings[key]
    # bool is an int subclass but never a meaningful count or scalar.
    if not isinstance(value, bool):
        try:
            number = float(value)
        except (TypeError, ValueError):
            pass
        else:
            if math.isfinite(number):
                return number
    msg = f"Configuration error: {key} must be a finite number, got {value!r}."
    logging.critical(msg)
    raise ValueError(msg)
