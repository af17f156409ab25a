#!/usr/bin/env python3
"""
Core Physics Engine for Gravity Sandbox

Responsibilities
- Accumulate pairwise gravitational accelerations into each body's acceleration field.
- Advance body states with a hybrid Euler step: a fixed-scale velocity kick followed by a
  position drift over the real elapsed frame time.
- Provide small diagnostics used by the controller and tests (momentum, non-finite state).

Units and conventions
- World units throughout; positions and velocities are (x, y) tuples.
- G and DENSITY are toy values tuned for an 800x600 view, not SI.

Numerical notes
- No softening. A pair only interacts when the squared distance exceeds the square of
  both radii; overlapping or concentric bodies simply ignore each other for that tick.
  This is the only stability guard, and nothing here clamps or repairs NaN/Infinity.
- The force vector is the separation vector scaled by G * m1 * m2 / d^2, so the
  effective pull falls off as 1/d rather than 1/d^2.
- The velocity kick uses a fixed ACCELERATION_SCALE instead of dt, while the position
  drift uses dt. Changing the frame rate therefore changes trajectories.
- Complexity: the force pass is O(N^2) over unordered pairs. Fine for tens of bodies.

Threading
- This module is pure compute and stateless besides G and the kick scale. It is used by a
  controller that guards shared data with a lock.
"""

import math
from typing import List, Tuple

from .constants import ACCELERATION_SCALE, G
from .data_models import Body
from .vector_utils import vec_add, vec_is_finite, vec_scale


class GravityPhysics:
    """
    Pairwise gravity and integration for a flat list of bodies.

    For a pair (i, j) with separation d = p_j - p_i, the force on i is:
    F = d * G * m_i * m_j / |d|^2
    and the force on j is -F. Each body receives F divided by its own mass.
    """

    def __init__(self, gravitational_constant: float = G,
                 acceleration_scale: float = ACCELERATION_SCALE):
        """
        Initialize the physics engine.

        Args:
            gravitational_constant: Strength of attraction between bodies
            acceleration_scale: Fixed factor applied to acceleration in the velocity kick
        """
        self.G = float(gravitational_constant)
        self.acceleration_scale = float(acceleration_scale)

    def accumulate_forces(self, bodies: List[Body]) -> None:
        """
        Add gravitational accelerations for every unordered pair of bodies.

        Pairs are visited once each, in list order (i < j). A pair is skipped when
        d^2 <= r_i^2 or d^2 <= r_j^2. Only the acceleration field of each body is
        written; contributions add onto whatever is already there.

        Args:
            bodies: Bodies to update in place. Accelerations are expected to be zero
                on entry (the integrator clears them).
        """
        n = len(bodies)
        if n < 2:
            return

        ax = [b.acceleration[0] for b in bodies]
        ay = [b.acceleration[1] for b in bodies]

        for i in range(n):
            bi = bodies[i]
            xi, yi = bi.position
            ri_sq = bi.radius * bi.radius
            for j in range(i + 1, n):
                bj = bodies[j]

                # Vector from body i to body j
                dx = bj.position[0] - xi
                dy = bj.position[1] - yi
                distance_sq = dx * dx + dy * dy

                if distance_sq > ri_sq and distance_sq > bj.radius * bj.radius:
                    f = (self.G * bi.mass * bj.mass) / distance_sq
                    fx = dx * f
                    fy = dy * f
                    ax[i] += fx / bi.mass
                    ay[i] += fy / bi.mass
                    ax[j] -= fx / bj.mass
                    ay[j] -= fy / bj.mass

        for b, x, y in zip(bodies, ax, ay):
            b.acceleration = (x, y)

    def integrate(self, bodies: List[Body], dt: float) -> None:
        """
        Advance each body independently by one tick.

        1) velocity += acceleration * acceleration_scale
        2) position += velocity * dt
        3) acceleration = (0, 0)

        Args:
            bodies: Bodies to integrate (modified in place).
            dt: Elapsed wall-clock time since the previous tick, in seconds.
        """
        for b in bodies:
            b.velocity = vec_add(b.velocity, vec_scale(b.acceleration, self.acceleration_scale))
            b.position = vec_add(b.position, vec_scale(b.velocity, dt))
            b.acceleration = (0.0, 0.0)

    def step(self, bodies: List[Body], dt: float) -> None:
        """One full tick: force pass, then integration."""
        self.accumulate_forces(bodies)
        self.integrate(bodies, dt)


def total_momentum(bodies: List[Body]) -> Tuple[float, float]:
    """Sum of mass * velocity over all bodies."""
    px, py = 0.0, 0.0
    for b in bodies:
        px += b.mass * b.velocity[0]
        py += b.mass * b.velocity[1]
    return (px, py)


def non_finite_bodies(bodies: List[Body]) -> List[Body]:
    """
    Return bodies whose mass, position, velocity or acceleration holds NaN or Infinity.

    Used to report numeric blow-ups; the engine itself never clamps them.
    """
    return [
        b for b in bodies
        if not (math.isfinite(b.mass)
                and vec_is_finite(b.position)
                and vec_is_finite(b.velocity)
                and vec_is_finite(b.acceleration))
    ]
