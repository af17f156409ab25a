#!/usr/bin/env python3
"""
Simulation controller for Gravity Sandbox.

The controller is the single owner of simulation state: the body registry, the
placement gesture, the physics engine, the random source and the view size. The
presentation layer talks to it only through the input operations (gesture_*,
clear_all, spawn_random, tick) and reads back immutable views for drawing.

Threading model
- The pygame viewport thread calls tick() once per frame and forwards mouse and key
  input; the Dear PyGui inspector on the main thread reads views and issues
  spawn/clear/pause. Every public method takes a re-entrant lock, so a tick always
  completes before any other operation runs.
"""
import logging
import random
import threading
from typing import List, Optional, Set

from .constants import VIEW_HEIGHT, VIEW_WIDTH
from .data_models import Body, BodyView, GestureView, PlacementGesture, Vec2
from .physics import GravityPhysics, non_finite_bodies
from .placement import (
    begin_gesture,
    cancel_gesture,
    finish_gesture,
    grow_gesture,
    random_bodies,
)
from .registry import BodyRegistry

logger = logging.getLogger(__name__)


class SimulationController:
    """
    Shared state between the viewport thread and the inspector UI.
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, width: int = VIEW_WIDTH, height: int = VIEW_HEIGHT,
                 rng: Optional[random.Random] = None,
                 physics: Optional[GravityPhysics] = None,
                 populate: bool = False):
        self.lock = threading.RLock()
        self.registry = BodyRegistry()
        self.gesture = PlacementGesture()
        self.physics = physics or GravityPhysics()
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.running = True  # app running
        self.playing = True  # simulation running
        self.ticks = 0

        # Bodies already reported as holding NaN/Infinity
        self._reported_non_finite: Set[int] = set()

        if populate:
            self.spawn_random()

    # -----------------------
    # Placement gesture
    # -----------------------

    def gesture_start(self, position: Vec2) -> None:
        with self.lock:
            begin_gesture(self.gesture, position)

    def gesture_drag(self, position: Vec2) -> None:
        """
        Poll while the placing button is held. The radius grows per call; the cursor
        position only matters to the presentation layer's indicator.
        """
        with self.lock:
            grow_gesture(self.gesture)

    def gesture_end(self, position: Vec2) -> Optional[Body]:
        with self.lock:
            if not self.gesture.active:
                return None
            body = finish_gesture(self.gesture, position, self.registry.next_id(), self.rng)
            if body is None:
                return None
            self.registry.add(body)
            logger.debug("Placed body %d: radius=%.1f velocity=(%.2f, %.2f)",
                         body.id, body.radius, body.velocity[0], body.velocity[1])
            return body

    def gesture_cancel(self) -> None:
        with self.lock:
            cancel_gesture(self.gesture)

    # -----------------------
    # Bulk operations
    # -----------------------

    def clear_all(self) -> int:
        with self.lock:
            removed = self.registry.clear()
            self._reported_non_finite.clear()
        logger.info("Cleared %d bodies", removed)
        return removed

    def spawn_random(self) -> List[Body]:
        with self.lock:
            bodies = random_bodies(self.registry.next_id, self.rng, self.width, self.height)
            for b in bodies:
                self.registry.add(b)
            total = len(self.registry)
        logger.info("Spawned %d random bodies (%d total)", len(bodies), total)
        return bodies

    def set_view_size(self, width: int, height: int) -> None:
        with self.lock:
            self.width = int(width)
            self.height = int(height)

    def toggle_pause(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            playing = self.playing
        logger.info("Simulation %s", "resumed" if playing else "paused")
        return playing

    # -----------------------
    # Tick
    # -----------------------

    def tick(self, dt: float) -> None:
        """Advance one frame: force pass, then integration. No-op while paused."""
        with self.lock:
            if not self.playing:
                return
            bodies = self.registry.bodies()
            self.physics.step(bodies, dt)
            self.ticks += 1
            self._report_non_finite(bodies)

    def _report_non_finite(self, bodies: List[Body]) -> None:
        for b in non_finite_bodies(bodies):
            if b.id in self._reported_non_finite:
                continue
            self._reported_non_finite.add(b.id)
            logger.warning("Body %d has non-finite state after tick %d: position=%s velocity=%s",
                           b.id, self.ticks, b.position, b.velocity)

    # -----------------------
    # Read-only views
    # -----------------------

    def body_views(self) -> List[BodyView]:
        with self.lock:
            return self.registry.views()

    def gesture_view(self) -> GestureView:
        with self.lock:
            g = self.gesture
            return GestureView(g.anchor, g.radius, g.active)

    def body_count(self) -> int:
        with self.lock:
            return len(self.registry)

    def non_finite_ids(self) -> List[int]:
        with self.lock:
            return sorted(self._reported_non_finite & {b.id for b in self.registry})

    def get_body(self, body_id: int) -> Optional[Body]:
        with self.lock:
            return self.registry.get(body_id)

    def snapshot_bodies(self) -> List[Body]:
        """Detached copies of every body, for inspection."""
        with self.lock:
            return [Body(b.id, b.mass, b.radius, b.position, b.velocity, b.acceleration, b.color)
                    for b in self.registry]
