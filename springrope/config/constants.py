"""Constant values for the spring rope simulation."""

from __future__ import annotations

DEFAULTS = {
    "WINDOW_WIDTH": 400,
    "WINDOW_HEIGHT": 800,
    "FPS": 60,
}
