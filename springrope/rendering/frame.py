"""Immutable render snapshot of the rope for one frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..physics.bezier import CurveSample, sample_curve, sample_tangents, tangent_parameters
from ..physics.vector_math import Vector2

Segment = Tuple[Vector2, Vector2]


@dataclass(frozen=True)
class RopeFrame:
    """Everything the renderer needs, detached from the live simulation."""

    control_points: Tuple[Vector2, Vector2, Vector2, Vector2]
    targets: Tuple[Vector2, Vector2]
    polyline: Tuple[Vector2, ...]
    samples: Tuple[CurveSample, ...]
    tangent_sticks: Tuple[Segment, ...]


def tangent_stick(sample: CurveSample, half_length: float) -> Segment:
    offset = sample.tangent * half_length
    return (sample.point - offset, sample.point + offset)


def build_frame(
    control_points: Tuple[Vector2, Vector2, Vector2, Vector2],
    targets: Tuple[Vector2, Vector2],
    *,
    curve_step: float = 0.01,
    tangent_step: float = 0.1,
    tangent_length: float = 16.0,
) -> RopeFrame:
    p0, p1, p2, p3 = control_points
    polyline = tuple(sample_curve(p0, p1, p2, p3, curve_step))
    samples = tuple(sample_tangents(p0, p1, p2, p3, tangent_parameters(tangent_step)))
    sticks = tuple(tangent_stick(sample, tangent_length) for sample in samples)
    return RopeFrame(
        control_points=tuple(control_points),
        targets=tuple(targets),
        polyline=polyline,
        samples=samples,
        tangent_sticks=sticks,
    )
