"""Coordinator wiring input, target mapping and the rope simulation."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..config.settings import SimulationSettings
from ..physics.spring import SpringParameters
from ..physics.vector_math import Vector2
from ..rendering.frame import RopeFrame, build_frame
from .input import InputSource, JoystickOrientation, PointerInput
from .rope import RopeLayout, RopeSimulation, layout_for_viewport
from .targets import DragTargetMapper, Targets, TiltTargetMapper, Viewport
from .time import FrameClock

logger = logging.getLogger("springrope.simulation")


class RopeController:
    """Owns the rope state and the single active input source.

    The tick handler is the only mutator of the simulation. Input sources
    write into last-value slots that :meth:`tick` reads without blocking.
    """

    def __init__(
        self,
        runtime: SimulationSettings,
        *,
        orientation: Optional[JoystickOrientation] = None,
    ) -> None:
        self.runtime = runtime
        self.viewport = Viewport(runtime.WINDOW_WIDTH, runtime.WINDOW_HEIGHT)
        self.params = SpringParameters(
            stiffness=runtime.STIFFNESS,
            damping=runtime.DAMPING,
            mass=runtime.MASS,
        )
        self.layout: RopeLayout = layout_for_viewport(
            runtime.WINDOW_WIDTH,
            runtime.WINDOW_HEIGHT,
            anchor_left=runtime.ANCHOR_LEFT_FRACTION,
            anchor_right=runtime.ANCHOR_RIGHT_FRACTION,
            anchor_height=runtime.ANCHOR_HEIGHT_FRACTION,
            control_left=runtime.CONTROL_LEFT_FRACTION,
            control_right=runtime.CONTROL_RIGHT_FRACTION,
        )
        self.simulation = RopeSimulation.from_layout(self.params, self.layout)
        self.input_mode = runtime.INPUT_MODE
        self.targets: Targets = (self.layout.p1, self.layout.p2)
        self.input_available = True

        self.pointer = PointerInput()
        self.drag_mapper = DragTargetMapper(
            self.layout.anchor0,
            self.layout.anchor3,
            self.viewport,
            smoothing=runtime.DRAG_SMOOTHING,
            initial_targets=self.targets,
        )
        self.orientation = orientation or JoystickOrientation()
        self.tilt_mapper = TiltTargetMapper(
            self.layout.anchor0,
            self.layout.anchor3,
            self.viewport,
            scale_x=runtime.TILT_SCALE_X,
            scale_y=runtime.TILT_SCALE_Y,
            mode=runtime.TILT_MAPPING,
        )

    @property
    def active_source(self) -> InputSource:
        return self.orientation if self.input_mode == "tilt" else self.pointer

    def start_input(self) -> bool:
        """Start the configured input source; ``False`` means degraded input."""

        if self.input_mode != "tilt":
            logger.info("Input source: pointer drag")
            self.input_available = True
            return True
        self.input_available = self.orientation.start()
        if not self.input_available:
            self.targets = self.tilt_mapper.fallback()
            logger.warning("Orientation sensor not available; using the viewport centre as target")
        return self.input_available

    def handle_event(self, event) -> bool:
        return self.active_source.handle_event(event)

    def _resolve_targets(self) -> Targets:
        if self.input_mode == "tilt":
            if not self.orientation.running:
                self.input_available = False
                return self.tilt_mapper.fallback()
            orientation = self.orientation.slot.latest()
            if orientation is None:
                # A resting stick sends no axis events; read it directly.
                orientation = self.orientation.sample()
                if orientation is None:
                    return self.targets
                self.orientation.slot.publish(orientation)
            return self.tilt_mapper.update(orientation.pitch, orientation.roll)
        pointer = self.pointer.slot.latest()
        if pointer is None:
            return self.drag_mapper.targets()
        return self.drag_mapper.update(pointer)

    def tick(self, dt: float) -> None:
        """Advance the rope by ``dt`` seconds; non-positive ``dt`` is a no-op."""

        if dt <= 0.0:
            return
        self.targets = self._resolve_targets()
        self.simulation.advance(dt, *self.targets)

    def reset(self) -> None:
        self.simulation.initialize(self.layout.anchor0, self.layout.anchor3, self.layout.p1, self.layout.p2)
        self.targets = (self.layout.p1, self.layout.p2)
        self.drag_mapper.reset(*self.targets)
        logger.info("Rope reset to initial layout")

    def frame(self) -> RopeFrame:
        return build_frame(
            self.simulation.control_points(),
            self.targets,
            curve_step=self.runtime.CURVE_STEP,
            tangent_step=self.runtime.TANGENT_STEP,
            tangent_length=self.runtime.TANGENT_LENGTH,
        )

    def max_speed(self) -> float:
        return max(velocity.length() for velocity in self.simulation.velocities())

    def shutdown(self, clock: Optional[FrameClock] = None) -> None:
        """Stop the input source, then the tick source."""

        self.pointer.stop()
        self.orientation.stop()
        if clock is not None:
            clock.stop()
        logger.info("Input and tick sources stopped")

    def control_points(self) -> Tuple[Vector2, Vector2, Vector2, Vector2]:
        return self.simulation.control_points()
