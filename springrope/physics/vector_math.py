"""Immutable 2D vector used by the curve evaluator and the spring integrator."""

from __future__ import annotations

from dataclasses import dataclass
import math

NORMALIZE_EPSILON = 1e-4


@dataclass(frozen=True)
class Vector2:
    """Point or direction in viewport coordinates."""

    x: float = 0.0
    y: float = 0.0

    # Basic arithmetic -----------------------------------------------------
    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2":
        """Return a unit-length copy, or the zero vector for near-zero input."""

        magnitude = self.length()
        if magnitude < NORMALIZE_EPSILON:
            return Vector2()
        return Vector2(self.x / magnitude, self.y / magnitude)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Vector2(x={self.x:.3f}, y={self.y:.3f})"


def midpoint(a: Vector2, b: Vector2) -> Vector2:
    return Vector2((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)
