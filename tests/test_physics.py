import math

import pytest

from gravity_core.constants import G
from gravity_core.data_models import Body, body_mass
from gravity_core.physics import GravityPhysics, non_finite_bodies, total_momentum


def make(body_id, radius, position, velocity=(0.0, 0.0)):
    return Body.from_radius(body_id, radius, position, velocity)


def test_newtons_third_law_for_unequal_masses():
    a = make(0, 3.0, (0.0, 0.0))
    b = make(1, 7.0, (40.0, -25.0))
    GravityPhysics().accumulate_forces([a, b])

    fa = (a.mass * a.acceleration[0], a.mass * a.acceleration[1])
    fb = (b.mass * b.acceleration[0], b.mass * b.acceleration[1])
    assert fa[0] == pytest.approx(-fb[0], rel=1e-12)
    assert fa[1] == pytest.approx(-fb[1], rel=1e-12)
    # attraction: a is pulled towards b
    assert a.acceleration[0] > 0 and a.acceleration[1] < 0


def test_force_uses_unnormalised_separation():
    a = make(0, 2.0, (0.0, 0.0))
    b = make(1, 4.0, (30.0, 40.0))
    GravityPhysics().accumulate_forces([a, b])

    d_sq = 30.0 ** 2 + 40.0 ** 2
    f = G * a.mass * b.mass / d_sq
    assert a.acceleration == pytest.approx((30.0 * f / a.mass, 40.0 * f / a.mass))
    assert b.acceleration == pytest.approx((-30.0 * f / b.mass, -40.0 * f / b.mass))


@pytest.mark.parametrize("pos_b, r_a, r_b", [
    ((5.0, 0.0), 10.0, 2.0),   # inside a's radius
    ((5.0, 0.0), 2.0, 10.0),   # inside b's radius
    ((10.0, 0.0), 10.0, 1.0),  # exactly on the threshold
    ((0.0, 0.0), 3.0, 3.0),    # concentric
])
def test_overlapping_pair_contributes_nothing(pos_b, r_a, r_b):
    a = make(0, r_a, (0.0, 0.0))
    b = make(1, r_b, pos_b)
    GravityPhysics().accumulate_forces([a, b])
    assert a.acceleration == (0.0, 0.0)
    assert b.acceleration == (0.0, 0.0)


def test_overlapping_pair_does_not_block_other_pairs():
    a = make(0, 10.0, (0.0, 0.0))
    b = make(1, 2.0, (3.0, 0.0))
    c = make(2, 2.0, (100.0, 0.0))
    GravityPhysics().accumulate_forces([a, b, c])

    # a and b ignore each other, but both feel c
    d_ac = 100.0 ** 2
    assert a.acceleration[0] == pytest.approx(100.0 * G * c.mass / d_ac)
    d_bc = 97.0 ** 2
    assert b.acceleration[0] == pytest.approx(97.0 * G * c.mass / d_bc)


def test_accumulation_adds_to_existing_acceleration():
    a = make(0, 2.0, (0.0, 0.0))
    b = make(1, 2.0, (50.0, 0.0))
    a.acceleration = (1.0, 2.0)
    GravityPhysics().accumulate_forces([a, b])
    expected = 50.0 * G * b.mass / 2500.0
    assert a.acceleration == pytest.approx((1.0 + expected, 2.0))


def test_only_acceleration_is_written_by_force_pass():
    a = make(0, 2.0, (0.0, 0.0), (1.0, 1.0))
    b = make(1, 2.0, (50.0, 0.0), (-1.0, 0.5))
    GravityPhysics().accumulate_forces([a, b])
    assert a.position == (0.0, 0.0) and b.position == (50.0, 0.0)
    assert a.velocity == (1.0, 1.0) and b.velocity == (-1.0, 0.5)
    assert a.mass == body_mass(2.0)


def test_single_body_has_no_force():
    a = make(0, 5.0, (0.0, 0.0))
    GravityPhysics().accumulate_forces([a])
    assert a.acceleration == (0.0, 0.0)


def test_integration_order():
    b = make(0, 2.0, (10.0, -4.0), (3.0, 1.0))
    b.acceleration = (20.0, -5.0)
    dt = 0.25
    GravityPhysics().integrate([b], dt)

    v = (3.0 + 20.0 * 0.1, 1.0 + -5.0 * 0.1)
    assert b.velocity == pytest.approx(v)
    assert b.position == pytest.approx((10.0 + v[0] * dt, -4.0 + v[1] * dt))
    assert b.acceleration == (0.0, 0.0)


def test_kick_is_not_scaled_by_dt():
    slow = make(0, 2.0, (0.0, 0.0))
    fast = make(1, 2.0, (0.0, 0.0))
    slow.acceleration = fast.acceleration = (10.0, 0.0)
    physics = GravityPhysics()
    physics.integrate([slow], 1.0)
    physics.integrate([fast], 0.001)
    assert slow.velocity == fast.velocity == pytest.approx((1.0, 0.0))


def test_two_body_symmetric_scenario():
    left = make(0, 10.0, (-50.0, 0.0))
    right = make(1, 10.0, (50.0, 0.0))
    assert left.mass == pytest.approx(math.pi * 1000 * 100)

    GravityPhysics().step([left, right], 1.0)

    dv = G * left.mass / 100.0 * 0.1
    assert left.velocity[0] == pytest.approx(dv)
    assert right.velocity[0] == pytest.approx(-dv)
    assert left.velocity[1] == 0.0 and right.velocity[1] == 0.0
    assert total_momentum([left, right]) == (0.0, 0.0)
    assert left.position[0] == pytest.approx(-50.0 + dv)
    assert right.position[0] == pytest.approx(50.0 - dv)
    assert left.acceleration == right.acceleration == (0.0, 0.0)


def test_momentum_is_conserved_over_many_ticks():
    bodies = [
        make(0, 4.0, (-60.0, 10.0), (0.5, 0.0)),
        make(1, 6.0, (30.0, -20.0)),
        make(2, 3.0, (10.0, 70.0), (-0.2, 0.3)),
    ]
    physics = GravityPhysics()
    before = total_momentum(bodies)
    for _ in range(50):
        physics.step(bodies, 1 / 60)
    after = total_momentum(bodies)
    scale = max(b.mass for b in bodies)
    assert after[0] == pytest.approx(before[0], abs=1e-9 * scale)
    assert after[1] == pytest.approx(before[1], abs=1e-9 * scale)


def test_custom_gravitational_constant():
    a = make(0, 2.0, (0.0, 0.0))
    b = make(1, 2.0, (20.0, 0.0))
    GravityPhysics(gravitational_constant=2 * G).accumulate_forces([a, b])
    assert a.acceleration[0] == pytest.approx(2 * 20.0 * G * b.mass / 400.0)


def test_nan_body_is_reported_and_does_not_pull_others():
    broken = make(0, 2.0, (0.0, 0.0))
    broken.position = (float("nan"), 0.0)
    heavy = make(1, 5.0, (20.0, 0.0))
    bodies = [broken, heavy]
    GravityPhysics().step(bodies, 1 / 60)
    # NaN distances fail the exclusion test, so the pair is skipped
    assert non_finite_bodies(bodies) == [broken]
    assert heavy.velocity == (0.0, 0.0)


def test_massless_body_fails_loudly():
    # Bypasses from_radius validation to reproduce a zero-radius placement
    ghost = Body(id=0, mass=0.0, radius=0.0, position=(0.0, 0.0))
    heavy = make(1, 5.0, (20.0, 0.0))
    with pytest.raises(ZeroDivisionError):
        GravityPhysics().accumulate_forces([ghost, heavy])


def test_non_finite_bodies_empty_for_healthy_state():
    bodies = [make(0, 2.0, (0.0, 0.0)), make(1, 2.0, (10.0, 0.0))]
    GravityPhysics().step(bodies, 1 / 60)
    assert non_finite_bodies(bodies) == []
