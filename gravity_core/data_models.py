#!/usr/bin/env python3
"""
Data models for Gravity Sandbox.

This module defines the Body dataclass shared between physics, placement, and the
presentation layer, plus the placement gesture state and the read-only views handed
to rendering and UI code.

Units and usage
- position, velocity and acceleration are (x, y) tuples in world units; y points up.
- mass is derived from radius (see body_mass) and never changes after creation.
- acceleration is a per-tick accumulator; the integrator zeroes it after each step.
- color is an RGB tuple in 0..255 and plays no part in the physics.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from .constants import DENSITY

Vec2 = Tuple[float, float]
Color = Tuple[int, int, int]


def body_mass(radius: float) -> float:
    """Mass of a body of the given radius: pi * r^3 * DENSITY."""
    return math.pi * radius * radius * radius * DENSITY


@dataclass
class Body:
    """
    A simulated circular point-mass.

    Fields:
    - id: Stable identifier assigned by the registry
    - mass: Derived from radius at creation time
    - radius: Visual size and force exclusion threshold
    - position: 2D position (x, y)
    - velocity: 2D velocity (vx, vy), persists across ticks
    - acceleration: 2D acceleration (ax, ay), transient per tick
    - color: RGB tuple used for rendering
    """
    id: int
    mass: float
    radius: float
    position: Vec2
    velocity: Vec2 = (0.0, 0.0)
    acceleration: Vec2 = (0.0, 0.0)
    color: Color = (200, 200, 255)

    @classmethod
    def from_radius(cls, body_id: int, radius: float, position: Vec2,
                    velocity: Vec2 = (0.0, 0.0), color: Color = (200, 200, 255)) -> "Body":
        """
        Create a body whose mass is derived from its radius.

        Raises:
            ValueError: if radius is not a positive finite number. A zero-radius body
                would have zero mass and poison the per-mass acceleration step.
        """
        radius = float(radius)
        if not math.isfinite(radius) or radius <= 0.0:
            raise ValueError(f"Body radius must be positive and finite, got {radius!r}")
        return cls(
            id=body_id,
            mass=body_mass(radius),
            radius=radius,
            position=(float(position[0]), float(position[1])),
            velocity=(float(velocity[0]), float(velocity[1])),
            color=color,
        )


@dataclass
class PlacementGesture:
    """
    Press-drag-release state for placing a new body. At most one is in flight.

    Inert at startup; begin sets the anchor, holding the button grows the radius,
    and release or cancel returns it to inert.
    """
    anchor: Vec2 = (0.0, 0.0)
    radius: float = 0.0
    active: bool = False

    def reset(self) -> None:
        self.radius = 0.0
        self.active = False


@dataclass(frozen=True)
class BodyView:
    """Read-only snapshot of a body for drawing."""
    id: int
    position: Vec2
    radius: float
    color: Color


@dataclass(frozen=True)
class GestureView:
    """Read-only snapshot of the placement gesture for visual feedback."""
    anchor: Vec2
    radius: float
    active: bool
