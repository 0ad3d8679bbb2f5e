"""Rope state: two fixed anchors and two spring-driven control points."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Tuple

from ..physics.spring import SpringParameters, spring_step
from ..physics.vector_math import Vector2, midpoint

logger = logging.getLogger("springrope.simulation")

ControlPoints = Tuple[Vector2, Vector2, Vector2, Vector2]


@dataclass
class ControlPoint:
    """Dynamic control point moved by the spring integrator."""

    position: Vector2
    velocity: Vector2 = field(default_factory=Vector2)


@dataclass(frozen=True)
class RopeLayout:
    """Initial placement of the four control points inside a viewport."""

    anchor0: Vector2
    anchor3: Vector2
    p1: Vector2
    p2: Vector2


def layout_for_viewport(
    width: float,
    height: float,
    *,
    anchor_left: float = 0.15,
    anchor_right: float = 0.85,
    anchor_height: float = 0.5,
    control_left: float = 0.35,
    control_right: float = 0.65,
) -> RopeLayout:
    """Place anchors and resting control points from viewport fractions."""

    y = height * anchor_height
    return RopeLayout(
        anchor0=Vector2(width * anchor_left, y),
        anchor3=Vector2(width * anchor_right, y),
        p1=Vector2(width * control_left, y),
        p2=Vector2(width * control_right, y),
    )


class RopeSimulation:
    """Owns the rope's control points and advances them one tick at a time.

    The simulation has no rendering dependency: the render path reads
    :meth:`control_points` after each :meth:`advance`.
    """

    def __init__(self, params: SpringParameters) -> None:
        self.params = params
        self._anchor0 = Vector2()
        self._anchor3 = Vector2()
        self.p1 = ControlPoint(Vector2())
        self.p2 = ControlPoint(Vector2())
        self.initialized = False

    @classmethod
    def from_layout(cls, params: SpringParameters, layout: RopeLayout) -> "RopeSimulation":
        simulation = cls(params)
        simulation.initialize(layout.anchor0, layout.anchor3, layout.p1, layout.p2)
        return simulation

    def initialize(self, anchor0: Vector2, anchor3: Vector2, initial_p1: Vector2, initial_p2: Vector2) -> None:
        """Set anchors and place both dynamic points at rest."""

        self._anchor0 = anchor0
        self._anchor3 = anchor3
        self.p1 = ControlPoint(initial_p1)
        self.p2 = ControlPoint(initial_p2)
        self.initialized = True
        logger.debug(
            "Rope initialised: P0=%s P1=%s P2=%s P3=%s",
            anchor0,
            initial_p1,
            initial_p2,
            anchor3,
        )

    @property
    def anchor0(self) -> Vector2:
        return self._anchor0

    @property
    def anchor3(self) -> Vector2:
        return self._anchor3

    def anchor_midpoint(self) -> Vector2:
        return midpoint(self._anchor0, self._anchor3)

    def advance(self, dt: float, target1: Vector2, target2: Vector2) -> None:
        """Integrate both dynamic points toward their targets.

        A non-positive ``dt`` leaves the state untouched.
        """

        if dt <= 0.0:
            return
        position, velocity = spring_step(self.p1.position, self.p1.velocity, target1, self.params, dt)
        self.p1 = ControlPoint(position, velocity)
        position, velocity = spring_step(self.p2.position, self.p2.velocity, target2, self.params, dt)
        self.p2 = ControlPoint(position, velocity)

    def control_points(self) -> ControlPoints:
        return (self._anchor0, self.p1.position, self.p2.position, self._anchor3)

    def velocities(self) -> Tuple[Vector2, Vector2]:
        return (self.p1.velocity, self.p2.velocity)
