"""Cubic Bézier evaluation for the rope curve.

The rope is a single cubic segment ``B(t)`` with control points
``P0..P3``::

    B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3

Its derivative is the quadratic hodograph with control points
``3(P1-P0)``, ``3(P2-P1)`` and ``3(P3-P2)``. None of the evaluators clamp
``t``; values outside ``[0, 1]`` extrapolate the polynomial.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from .vector_math import Vector2

DEFAULT_CURVE_STEP = 0.01


@dataclass(frozen=True)
class CurveSample:
    """Point and unit tangent at parameter ``t``."""

    t: float
    point: Vector2
    tangent: Vector2


def evaluate_cubic(p0: Vector2, p1: Vector2, p2: Vector2, p3: Vector2, t: float) -> Vector2:
    """Evaluate the cubic Bézier defined by ``p0..p3`` at ``t``."""

    u = 1.0 - t
    b0 = u * u * u
    b1 = 3.0 * u * u * t
    b2 = 3.0 * u * t * t
    b3 = t * t * t
    return Vector2(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )


def evaluate_quadratic(q0: Vector2, q1: Vector2, q2: Vector2, t: float) -> Vector2:
    """Evaluate the quadratic Bézier defined by ``q0..q2`` at ``t``."""

    u = 1.0 - t
    b0 = u * u
    b1 = 2.0 * u * t
    b2 = t * t
    return Vector2(
        b0 * q0.x + b1 * q1.x + b2 * q2.x,
        b0 * q0.y + b1 * q1.y + b2 * q2.y,
    )


def hodograph(p0: Vector2, p1: Vector2, p2: Vector2, p3: Vector2) -> tuple[Vector2, Vector2, Vector2]:
    return (p1 - p0) * 3.0, (p2 - p1) * 3.0, (p3 - p2) * 3.0


def tangent_cubic(p0: Vector2, p1: Vector2, p2: Vector2, p3: Vector2, t: float) -> Vector2:
    """Return the exact derivative ``B'(t)`` (not normalised)."""

    q0, q1, q2 = hodograph(p0, p1, p2, p3)
    return evaluate_quadratic(q0, q1, q2, t)


class CurveSampler:
    """Restartable, lazily evaluated polyline along a cubic curve.

    Yields points for ``t = 0, step, 2*step, ...`` and a final point at
    exactly ``t = 1``; ``ceil(1 / step) + 1`` points in total. Each
    iteration re-evaluates the curve, so the sampler can be walked any
    number of times.
    """

    def __init__(self, p0: Vector2, p1: Vector2, p2: Vector2, p3: Vector2, step: float = DEFAULT_CURVE_STEP) -> None:
        if step <= 0.0:
            raise ValueError(f"Sample step must be positive, got {step}")
        self.control_points = (p0, p1, p2, p3)
        self.step = step
        self._count = math.ceil(1.0 / step) + 1

    def parameters(self) -> Iterator[float]:
        for index in range(self._count - 1):
            yield index * self.step
        yield 1.0

    def __iter__(self) -> Iterator[Vector2]:
        p0, p1, p2, p3 = self.control_points
        for t in self.parameters():
            yield evaluate_cubic(p0, p1, p2, p3, t)

    def __len__(self) -> int:
        return self._count


def sample_curve(
    p0: Vector2,
    p1: Vector2,
    p2: Vector2,
    p3: Vector2,
    step: float = DEFAULT_CURVE_STEP,
) -> CurveSampler:
    """Sample the curve at a fixed parameter step for drawing as a polyline."""

    return CurveSampler(p0, p1, p2, p3, step)


def tangent_parameters(step: float) -> List[float]:
    """Return ``0, step, 2*step, ...`` with the last value clamped to 1."""

    if step <= 0.0:
        raise ValueError(f"Tangent step must be positive, got {step}")
    count = math.ceil(1.0 / step) + 1
    values = [index * step for index in range(count - 1)]
    values.append(1.0)
    return values


def sample_tangents(
    p0: Vector2,
    p1: Vector2,
    p2: Vector2,
    p3: Vector2,
    parameters: Sequence[float],
) -> List[CurveSample]:
    """Evaluate point and unit tangent at each parameter value.

    Where the derivative vanishes (coincident control points) the tangent is
    the zero vector.
    """

    samples: List[CurveSample] = []
    for t in parameters:
        point = evaluate_cubic(p0, p1, p2, p3, t)
        tangent = tangent_cubic(p0, p1, p2, p3, t).normalize()
        samples.append(CurveSample(t=t, point=point, tangent=tangent))
    return samples
