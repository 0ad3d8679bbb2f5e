"""Rendering helpers for the spring rope."""

from __future__ import annotations

from .frame import RopeFrame, build_frame

__all__ = [
    "RopeFrame",
    "build_frame",
    "rope_renderer",
    "perf_hud",
]
