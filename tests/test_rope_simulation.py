"""Tests for the rope simulation state."""

from __future__ import annotations

import pytest

from springrope.physics.spring import SpringParameters
from springrope.physics.vector_math import Vector2
from springrope.simulation.rope import RopeSimulation, layout_for_viewport

PARAMS = SpringParameters(stiffness=200.0, damping=10.0, mass=1.0)
ANCHOR0 = Vector2(50.0, 400.0)
ANCHOR3 = Vector2(350.0, 400.0)
MIDPOINT = Vector2(200.0, 400.0)


def _simulation() -> RopeSimulation:
    simulation = RopeSimulation(PARAMS)
    simulation.initialize(ANCHOR0, ANCHOR3, Vector2(100.0, 400.0), Vector2(300.0, 400.0))
    return simulation


def test_initialize_sets_points_at_rest():
    simulation = _simulation()
    assert simulation.control_points() == (
        ANCHOR0,
        Vector2(100.0, 400.0),
        Vector2(300.0, 400.0),
        ANCHOR3,
    )
    assert simulation.velocities() == (Vector2(), Vector2())
    assert simulation.anchor_midpoint() == MIDPOINT


def test_control_points_accessor_has_no_side_effects():
    simulation = _simulation()
    simulation.advance(1.0 / 60.0, MIDPOINT, MIDPOINT)
    first = simulation.control_points()
    assert simulation.control_points() == first


def test_rope_settles_at_midpoint():
    simulation = _simulation()
    for _ in range(600):
        simulation.advance(1.0 / 60.0, MIDPOINT, MIDPOINT)

    _, p1, p2, _ = simulation.control_points()
    v1, v2 = simulation.velocities()
    assert (p1 - MIDPOINT).length() < 0.5
    assert (p2 - MIDPOINT).length() < 0.5
    assert v1.length() < 0.01
    assert v2.length() < 0.01


def test_anchors_never_move():
    simulation = _simulation()
    for _ in range(120):
        simulation.advance(1.0 / 60.0, Vector2(10.0, 10.0), Vector2(390.0, 790.0))
    p0, _, _, p3 = simulation.control_points()
    assert p0 == ANCHOR0
    assert p3 == ANCHOR3


def test_each_point_follows_its_own_target():
    simulation = _simulation()
    for _ in range(600):
        simulation.advance(1.0 / 60.0, Vector2(100.0, 200.0), Vector2(300.0, 600.0))
    _, p1, p2, _ = simulation.control_points()
    assert p1.y == pytest.approx(200.0, abs=0.5)
    assert p2.y == pytest.approx(600.0, abs=0.5)


@pytest.mark.parametrize("dt", [0.0, -0.016])
def test_non_positive_dt_is_a_no_op(dt):
    simulation = _simulation()
    simulation.advance(1.0 / 60.0, Vector2(0.0, 0.0), Vector2(400.0, 800.0))
    before_points = simulation.control_points()
    before_velocities = simulation.velocities()

    simulation.advance(dt, MIDPOINT, MIDPOINT)

    assert simulation.control_points() == before_points
    assert simulation.velocities() == before_velocities


def test_layout_uses_viewport_fractions():
    layout = layout_for_viewport(400.0, 800.0)
    assert layout.anchor0.x == pytest.approx(60.0)
    assert layout.anchor3.x == pytest.approx(340.0)
    assert layout.anchor0.y == layout.anchor3.y == 400.0
    assert layout.p1.x == pytest.approx(140.0)
    assert layout.p2.x == pytest.approx(260.0)
    assert layout.anchor0.x < layout.anchor3.x


def test_from_layout_initialises_simulation():
    layout = layout_for_viewport(1000.0, 500.0, anchor_left=0.1, anchor_right=0.9)
    simulation = RopeSimulation.from_layout(PARAMS, layout)
    assert simulation.initialized
    assert simulation.control_points() == (layout.anchor0, layout.p1, layout.p2, layout.anchor3)
