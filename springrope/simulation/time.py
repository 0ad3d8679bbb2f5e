"""Frame timing for the simulation loop."""

from __future__ import annotations

import logging
from typing import Optional

import pygame

logger = logging.getLogger("springrope.simulation")

DEFAULT_DT_CEILING = 1.0 / 30.0


def clamp_dt(raw_dt: float, ceiling: float = DEFAULT_DT_CEILING) -> float:
    """Bound a frame delta to ``(0, ceiling]``; non-positive deltas become 0."""

    if raw_dt <= 0.0:
        return 0.0
    return min(raw_dt, ceiling)


class FrameClock:
    """Tick source paced by :class:`pygame.time.Clock`.

    Each :meth:`tick` returns the wall-clock delta since the previous tick,
    clamped by :func:`clamp_dt`. After :meth:`stop` ticks return ``0.0`` so a
    late caller cannot advance the simulation.
    """

    def __init__(self, fps: int, ceiling: float = DEFAULT_DT_CEILING, clock: Optional[pygame.time.Clock] = None) -> None:
        self.fps = fps
        self.ceiling = ceiling
        self._clock = clock or pygame.time.Clock()
        self.running = True
        self.last_raw_dt = 0.0
        self.stalled_frames = 0

    def tick(self) -> float:
        if not self.running:
            return 0.0
        raw = self._clock.tick(self.fps) / 1000.0
        self.last_raw_dt = raw
        if raw > self.ceiling:
            self.stalled_frames += 1
            logger.debug("Frame delta %.4fs clamped to %.4fs", raw, self.ceiling)
        return clamp_dt(raw, self.ceiling)

    def get_fps(self) -> float:
        return self._clock.get_fps()

    def stop(self) -> None:
        self.running = False
