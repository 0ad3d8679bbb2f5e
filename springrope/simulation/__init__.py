"""Simulation package containing the rope state, input mapping and main loop."""

from __future__ import annotations

from .rope import ControlPoint, RopeLayout, RopeSimulation, layout_for_viewport
from .targets import DragTargetMapper, LatestValue, TiltTargetMapper, Viewport, mirror_point

__all__ = [
    "ControlPoint",
    "RopeLayout",
    "RopeSimulation",
    "layout_for_viewport",
    "DragTargetMapper",
    "LatestValue",
    "TiltTargetMapper",
    "Viewport",
    "mirror_point",
    "controller",
    "loop",
]
