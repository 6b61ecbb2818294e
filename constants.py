# constants.py
"""
Application-level constants.

These values are static and do not change between runs. User-tunable
particle settings (count, speed, size, colour, links, visibility) live in
`config.json` and are turned into a FieldConfiguration; everything here is
part of the field's fixed look and feel.
"""

# Window settings
WINDOW_TITLE = "Starfield"
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60
BACKGROUND_COLOR = (5, 5, 5)  # '#050505'

# --- Pointer Repulsion ---
# Particles closer than this to the pointer are pushed away.
REPULSION_RADIUS = 200.0  # Pixels
# Displacement per tick at distance 0; falls off linearly to 0 at the radius.
REPULSION_STRENGTH = 0.5  # Pixels

# --- Proximity Connections ---
LINK_DISTANCE = 150.0  # Pixels
# Alpha byte (0-255) of a link between two coincident particles.
LINK_MAX_ALPHA = 50
LINK_WIDTH = 0.5  # Pixels

# --- Particle Seeding ---
# Per-particle alpha is drawn uniformly from [ALPHA_MIN, ALPHA_MAX).
ALPHA_MIN = 0.1
ALPHA_MAX = 0.6
# Each velocity component is drawn from [-VELOCITY_SPREAD, VELOCITY_SPREAD] * speed.
VELOCITY_SPREAD = 0.5

# Defaults for the particle settings, matching the dashboard's own defaults.
DEFAULT_SETTINGS = {
    "particleCount": 80,
    "particleSpeed": 1.0,
    "particleSize": 2.0,
    "particleColor": "#ffffff",
    "particleLinks": True,
    "showParticles": True,
    "pointerRepulsion": True,
}
