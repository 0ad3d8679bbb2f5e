"""Input sources that publish raw pointer and orientation samples."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Protocol

import pygame

from ..physics.vector_math import Vector2
from .targets import LatestValue

logger = logging.getLogger("springrope.input")

ROLL_AXIS = 0
PITCH_AXIS = 1
AXIS_TO_RADIANS = math.pi / 2.0


@dataclass(frozen=True)
class Orientation:
    pitch: float
    roll: float


class InputSource(Protocol):
    """Event-driven producer writing into a :class:`LatestValue` slot."""

    running: bool

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Consume ``event`` if it belongs to this source."""

    def stop(self) -> None:
        """Stop publishing; later events are ignored."""


class PointerInput:
    """Publishes the pointer position while the primary button is held."""

    def __init__(self) -> None:
        self.slot: LatestValue[Vector2] = LatestValue()
        self.running = True
        self.dragging = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.running:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.dragging = True
            self.slot.publish(Vector2(*event.pos))
            return True
        if event.type == pygame.MOUSEMOTION and self.dragging:
            self.slot.publish(Vector2(*event.pos))
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
            self.slot.clear()
            return True
        return False

    def stop(self) -> None:
        self.running = False
        self.dragging = False
        self.slot.clear()


class JoystickOrientation:
    """Reads a gamepad stick as device tilt.

    The horizontal axis becomes roll and the vertical axis pitch, each
    scaled from ``[-1, 1]`` to ``[-pi/2, pi/2]`` radians. When no device is
    present the source reports itself unavailable and never publishes.
    """

    def __init__(self, joystick: Optional[object] = None) -> None:
        self.slot: LatestValue[Orientation] = LatestValue()
        self.running = False
        self._joystick = joystick

    @property
    def available(self) -> bool:
        return self._joystick is not None

    def start(self) -> bool:
        if self._joystick is None:
            pygame.joystick.init()
            if pygame.joystick.get_count() > 0:
                self._joystick = pygame.joystick.Joystick(0)
                logger.info("Orientation source: %s", self._joystick.get_name())
        self.running = self.available
        return self.available

    def sample(self) -> Optional[Orientation]:
        if not self.running or self._joystick is None:
            return None
        roll = self._joystick.get_axis(ROLL_AXIS) * AXIS_TO_RADIANS
        pitch = self._joystick.get_axis(PITCH_AXIS) * AXIS_TO_RADIANS
        return Orientation(pitch=pitch, roll=roll)

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.running:
            return False
        if event.type == pygame.JOYAXISMOTION:
            orientation = self.sample()
            if orientation is not None:
                self.slot.publish(orientation)
            return True
        if event.type == pygame.JOYDEVICEREMOVED:
            logger.warning("Orientation device removed; targets fall back to the viewport centre")
            self._joystick = None
            self.running = False
            self.slot.clear()
            return True
        return False

    def stop(self) -> None:
        self.running = False
        self.slot.clear()
