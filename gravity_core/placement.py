#!/usr/bin/env python3
"""
Body placement for Gravity Sandbox.

Two ways to create bodies:
- Gesture: press to set the anchor, hold to grow the radius, release to launch. The new
  body sits at the anchor and moves opposite to the drag, 1.5x as fast per unit dragged.
- Random batch: a fixed number of resting bodies scattered around the view centre.

The gesture functions mutate a PlacementGesture passed in by the caller; nothing here
keeps module-level state.
"""
import logging
import random
from typing import List, Optional

from .constants import (
    LAUNCH_SCALE,
    NUM_RANDOM_BODIES,
    RADIUS_GROWTH,
    RANDOM_RADIUS_MAX,
    RANDOM_RADIUS_MIN,
    SPAWN_AREA_FRACTION,
)
from .data_models import Body, Color, PlacementGesture, Vec2
from .vector_utils import vec_mul, vec_sub

logger = logging.getLogger(__name__)


def launch_velocity(anchor: Vec2, release: Vec2) -> Vec2:
    """Initial velocity for a drag from anchor to release."""
    return vec_mul(vec_sub(release, anchor), LAUNCH_SCALE)


def random_color(rng: random.Random) -> Color:
    return (rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255))


def begin_gesture(gesture: PlacementGesture, position: Vec2) -> None:
    gesture.anchor = (float(position[0]), float(position[1]))
    gesture.radius = 0.0
    gesture.active = True


def grow_gesture(gesture: PlacementGesture) -> None:
    """Called once per input poll while the placing button is held."""
    if not gesture.active:
        return
    gesture.radius += RADIUS_GROWTH


def cancel_gesture(gesture: PlacementGesture) -> None:
    if gesture.active:
        logger.debug("Placement cancelled at radius %.1f", gesture.radius)
    gesture.reset()


def finish_gesture(gesture: PlacementGesture, release: Vec2, body_id: int,
                   rng: random.Random) -> Optional[Body]:
    """
    Commit the gesture and build the new body.

    Returns None when no gesture is active, or when the gesture never grew (a click
    without holding); zero-radius bodies are rejected rather than created massless.
    The gesture is inert afterwards in every case.
    """
    if not gesture.active:
        return None

    anchor = gesture.anchor
    radius = gesture.radius
    gesture.reset()

    if radius <= 0.0:
        logger.warning("Ignoring placement at (%.1f, %.1f): radius is zero", anchor[0], anchor[1])
        return None

    velocity = launch_velocity(anchor, release)
    return Body.from_radius(body_id, radius, anchor, velocity, random_color(rng))


def random_position(rng: random.Random, width: float, height: float) -> Vec2:
    """A point in the spawn rectangle centred on the origin."""
    x = rng.uniform(-0.5, 0.5) * width * SPAWN_AREA_FRACTION
    y = rng.uniform(-0.5, 0.5) * height * SPAWN_AREA_FRACTION
    return (x, y)


def random_radius(rng: random.Random) -> float:
    # random() is in [0, 1), so the upper bound stays exclusive
    return RANDOM_RADIUS_MIN + rng.random() * (RANDOM_RADIUS_MAX - RANDOM_RADIUS_MIN)


def random_bodies(next_id, rng: random.Random, width: float, height: float,
                  count: int = NUM_RANDOM_BODIES) -> List[Body]:
    """
    Build a batch of resting bodies with random radius, position and colour.

    Args:
        next_id: Zero-argument callable returning a fresh body id (e.g. BodyRegistry.next_id)
        rng: Random source
        width, height: View size the spawn rectangle is proportional to
        count: Number of bodies to create
    """
    bodies = []
    for _ in range(count):
        radius = random_radius(rng)
        position = random_position(rng, width, height)
        bodies.append(Body.from_radius(next_id(), radius, position, (0.0, 0.0), random_color(rng)))
    return bodies
