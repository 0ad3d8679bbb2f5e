"""Damped spring integrator for the dynamic control points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .vector_math import Vector2


@dataclass(frozen=True)
class SpringParameters:
    """Spring constant, damping and mass shared by both dynamic points."""

    stiffness: float
    damping: float
    mass: float = 1.0

    def acceleration(self, position: Vector2, velocity: Vector2, target: Vector2) -> Vector2:
        """Return ``(-k (x - target) - d v) / m``."""

        spring_force = (position - target) * -self.stiffness
        damping_force = velocity * -self.damping
        return (spring_force + damping_force) / self.mass


def spring_step(
    position: Vector2,
    velocity: Vector2,
    target: Vector2,
    params: SpringParameters,
    dt: float,
) -> Tuple[Vector2, Vector2]:
    """Advance one semi-implicit Euler step and return ``(position, velocity)``.

    Velocity is updated first and the new velocity moves the position, which
    keeps the step stable for the damping regimes used here. ``dt`` must
    already be bounded by the caller; no clamping happens in this function.
    """

    acceleration = params.acceleration(position, velocity, target)
    new_velocity = velocity + acceleration * dt
    new_position = position + new_velocity * dt
    return new_position, new_velocity
