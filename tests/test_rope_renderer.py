"""Tests for drawing a rope frame onto a pygame surface."""

from __future__ import annotations

import pytest

pygame = pytest.importorskip("pygame")

from springrope.physics.vector_math import Vector2
from springrope.rendering.frame import build_frame
from springrope.rendering.rope_renderer import (
    ANCHOR_COLOR,
    BACKGROUND_COLOR,
    CONTROL_COLOR,
    CURVE_COLOR,
    draw_rope,
)
from springrope.systems.notifications import NotificationManager

POINTS = (Vector2(60.0, 400.0), Vector2(140.0, 400.0), Vector2(260.0, 400.0), Vector2(340.0, 400.0))


def _rgb(surface, x: int, y: int):
    return tuple(surface.get_at((x, y)))[:3]


def test_draw_rope_marks_points_and_curve():
    surface = pygame.Surface((400, 800))
    draw_rope(surface, build_frame(POINTS, (POINTS[1], POINTS[2])))

    assert _rgb(surface, 60, 400) == ANCHOR_COLOR
    assert _rgb(surface, 340, 400) == ANCHOR_COLOR
    assert _rgb(surface, 140, 400) == CONTROL_COLOR
    assert _rgb(surface, 260, 400) == CONTROL_COLOR
    assert _rgb(surface, 5, 5) == BACKGROUND_COLOR

    band = {_rgb(surface, x, y) for x in range(60, 340) for y in (399, 400, 401)}
    assert CURVE_COLOR in band


def test_draw_rope_handles_collapsed_curve():
    point = Vector2(200.0, 400.0)
    surface = pygame.Surface((400, 800))
    draw_rope(surface, build_frame((point, point, point, point), (point, point)))
    assert _rgb(surface, 200, 400) == CONTROL_COLOR


def test_notifications_expire_and_show_once():
    manager = NotificationManager()
    assert manager.add_once("sensor", "Tilt sensor missing", seconds=0.05)
    assert not manager.add_once("sensor", "Tilt sensor missing", seconds=0.05)
    assert len(manager.notices) == 1

    manager.update(1.0 / 30.0)
    assert len(manager.notices) == 1
    manager.update(1.0 / 30.0)
    assert manager.notices == []
    assert not manager.add_once("sensor", "Tilt sensor missing")


def test_notifications_draw_panel_at_bottom_centre():
    pygame.font.init()
    font = pygame.font.Font(None, 20)
    surface = pygame.Surface((400, 800))
    surface.fill((255, 255, 255))

    manager = NotificationManager()
    manager.add("Rope reset", (255, 69, 58))
    manager.draw(surface, font)

    assert _rgb(surface, 5, 5) == (255, 255, 255)
    assert _rgb(surface, 200, 5) == (255, 255, 255)
    bottom = {_rgb(surface, x, y) for x in range(150, 250) for y in range(760, 795)}
    assert any(color != (255, 255, 255) for color in bottom)
