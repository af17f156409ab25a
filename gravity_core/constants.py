#!/usr/bin/env python3
"""
Shared constants for Gravity Sandbox (world units, not SI).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Physical constants
G = 8.31 * 10e-5  # gravitational strength, 8.31e-4
DENSITY = 100.0  # mass = pi * r^3 * DENSITY

# Physics controls
ACCELERATION_SCALE = 0.1  # fixed impulse per tick, not scaled by dt
LAUNCH_SCALE = (-1.5, -1.5)  # drag vector -> initial velocity

# Placement
RADIUS_GROWTH = 0.5  # radius added per poll while the button is held
NUM_RANDOM_BODIES = 10
RANDOM_RADIUS_MIN = 2.0
RANDOM_RADIUS_MAX = 15.0  # exclusive
SPAWN_AREA_FRACTION = 0.4

# Rendering (viewport)
VIEW_WIDTH = 800
VIEW_HEIGHT = 600
WINDOW_TITLE = "Gravity simulator"
BACKGROUND_COLOR = (25, 25, 25)
PLACEHOLDER_COLOR = (255, 255, 255, 128)
INDICATOR_COLOR = (255, 255, 255, 204)
HUD_COLOR = (200, 200, 200)

# Camera zoom (world units per pixel)
DEFAULT_SCALE = 1.0
MIN_SCALE = 0.05
ZOOM_LINE_STEP = 0.1

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
