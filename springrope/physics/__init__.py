"""Curve and spring math for the rope."""

from .bezier import (
    CurveSample,
    CurveSampler,
    evaluate_cubic,
    evaluate_quadratic,
    sample_curve,
    sample_tangents,
    tangent_cubic,
    tangent_parameters,
)
from .spring import SpringParameters, spring_step
from .vector_math import Vector2

__all__ = [
    "CurveSample",
    "CurveSampler",
    "evaluate_cubic",
    "evaluate_quadratic",
    "sample_curve",
    "sample_tangents",
    "tangent_cubic",
    "tangent_parameters",
    "SpringParameters",
    "spring_step",
    "Vector2",
]
