"""Map raw pointer or tilt input to the targets the springs chase."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Optional, Tuple, TypeVar

from ..physics.vector_math import Vector2, midpoint

T = TypeVar("T")

Targets = Tuple[Vector2, Vector2]

TILT_OFFSET_GAIN = 0.9
ROLL_RANGE = (-math.pi / 2.0, math.pi / 2.0)
PITCH_RANGE = (-math.pi / 2.0, 0.0)


@dataclass(frozen=True)
class Viewport:
    width: float
    height: float

    @property
    def center(self) -> Vector2:
        return Vector2(self.width / 2.0, self.height / 2.0)

    def clamp(self, point: Vector2) -> Vector2:
        return Vector2(
            max(0.0, min(self.width, point.x)),
            max(0.0, min(self.height, point.y)),
        )


class LatestValue(Generic[T]):
    """Single-slot cache holding the most recently published input value.

    Producers overwrite the slot; the tick handler reads it without blocking.
    A read may be stale by up to one input interval.
    """

    def __init__(self) -> None:
        self._value: Optional[T] = None

    def publish(self, value: T) -> None:
        self._value = value

    def latest(self) -> Optional[T]:
        return self._value

    def has_value(self) -> bool:
        return self._value is not None

    def clear(self) -> None:
        self._value = None


def remap(value: float, from_lo: float, from_hi: float, to_lo: float, to_hi: float) -> float:
    """Linearly map ``value`` from one range onto another (no clamping)."""

    return (value - from_lo) / (from_hi - from_lo) * (to_hi - to_lo) + to_lo


def mirror_point(point: Vector2, center: Vector2) -> Vector2:
    """Reflect ``point`` through ``center``."""

    return center - (point - center)


def low_pass(current: Vector2, sample: Vector2, smoothing: float) -> Vector2:
    return current * smoothing + sample * (1.0 - smoothing)


class DragTargetMapper:
    """Turn pointer positions into a followed target and its mirror image.

    ``target1`` low-passes toward the pointer; ``target2`` low-passes toward
    the pointer reflected through the anchor midpoint.
    """

    def __init__(
        self,
        anchor0: Vector2,
        anchor3: Vector2,
        viewport: Viewport,
        smoothing: float = 0.6,
        initial_targets: Optional[Targets] = None,
    ) -> None:
        self.center = midpoint(anchor0, anchor3)
        self.viewport = viewport
        self.smoothing = smoothing
        if initial_targets is None:
            initial_targets = (self.center, self.center)
        self.target1, self.target2 = initial_targets

    def reset(self, target1: Vector2, target2: Vector2) -> None:
        self.target1 = target1
        self.target2 = target2

    def update(self, pointer: Vector2) -> Targets:
        pointer = self.viewport.clamp(pointer)
        mirrored = self.viewport.clamp(mirror_point(pointer, self.center))
        self.target1 = low_pass(self.target1, pointer, self.smoothing)
        self.target2 = low_pass(self.target2, mirrored, self.smoothing)
        return self.target1, self.target2

    def targets(self) -> Targets:
        return self.target1, self.target2


class TiltTargetMapper:
    """Turn ``(pitch, roll)`` angles in radians into a pair of targets.

    ``offset`` mode scales roll/pitch into a pixel offset around the anchor
    midpoint and points the two targets in opposite directions. ``absolute``
    mode maps a fixed angular range across the whole viewport and sends both
    targets to that point.
    """

    MODES = ("offset", "absolute")

    def __init__(
        self,
        anchor0: Vector2,
        anchor3: Vector2,
        viewport: Viewport,
        scale_x: float = 120.0,
        scale_y: float = 80.0,
        mode: str = "offset",
    ) -> None:
        if mode not in self.MODES:
            raise ValueError(f"Unknown tilt mapping: {mode}")
        self.center = midpoint(anchor0, anchor3)
        self.viewport = viewport
        self.scale_x = scale_x
        self.scale_y = scale_y
        self.mode = mode

    def update(self, pitch: float, roll: float) -> Targets:
        if self.mode == "absolute":
            return self._absolute(pitch, roll)
        offset = Vector2(roll * self.scale_x, pitch * self.scale_y) * TILT_OFFSET_GAIN
        return (
            self.viewport.clamp(self.center + offset),
            self.viewport.clamp(self.center - offset),
        )

    def _absolute(self, pitch: float, roll: float) -> Targets:
        x = remap(roll, ROLL_RANGE[0], ROLL_RANGE[1], 0.0, self.viewport.width)
        y = remap(pitch, PITCH_RANGE[0], PITCH_RANGE[1], 0.0, self.viewport.height)
        target = self.viewport.clamp(Vector2(x, y))
        return target, target

    def fallback(self) -> Targets:
        """Targets used when no orientation sensor is available."""

        center = self.viewport.center
        return center, center
