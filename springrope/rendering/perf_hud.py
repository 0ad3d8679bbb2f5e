"""Small runtime HUD for frame timing and spring state."""

from __future__ import annotations

from typing import Dict, Tuple

import pygame

WARNING_COLOR = (240, 120, 120)
INFO_COLOR = (235, 245, 255)
BACKGROUND_COLOR = (12, 20, 32, 170)


class PerfHUD:
    """Render a compact overlay with live frame stats and toggles."""

    def __init__(self, visible: bool = True) -> None:
        self.visible = visible
        self._font = pygame.font.Font(None, 18)
        self._metrics: Dict[str, object] = {}
        self._warn_stalls = False
        self._warn_input = False

    def toggle(self) -> None:
        self.visible = not self.visible

    def update(self, metrics: Dict[str, object]) -> None:
        self._metrics = metrics
        self._warn_stalls = int(metrics.get("stalled_frames", 0)) > 0
        self._warn_input = not bool(metrics.get("input_available", True))

    def draw(self, surface: pygame.Surface) -> None:
        if not self.visible or not self._metrics:
            return

        lines = self._build_lines()
        if not lines:
            return

        padding = 8
        line_height = self._font.get_height()
        width = max(self._font.size(text)[0] for text, _ in lines) + padding * 2
        height = line_height * len(lines) + padding * 2

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(BACKGROUND_COLOR)

        for idx, (text, color) in enumerate(lines):
            panel.blit(self._font.render(text, True, color), (padding, padding + idx * line_height))

        surface.blit(panel, (12, 12))

    def _build_lines(self) -> Tuple[Tuple[str, Tuple[int, int, int]], ...]:
        fps = float(self._metrics.get("fps", 0.0))
        dt_ms = float(self._metrics.get("dt", 0.0)) * 1000.0
        stalled = int(self._metrics.get("stalled_frames", 0))
        mode = str(self._metrics.get("input_mode", "drag"))
        stiffness = float(self._metrics.get("stiffness", 0.0))
        damping = float(self._metrics.get("damping", 0.0))
        mass = float(self._metrics.get("mass", 1.0))
        speed = float(self._metrics.get("max_speed", 0.0))

        lines = [
            (f"FPS: {fps:5.1f} | dt: {dt_ms:4.1f} ms", INFO_COLOR),
            (
                f"Clamped frames: {stalled}",
                WARNING_COLOR if self._warn_stalls else INFO_COLOR,
            ),
            (
                f"Input: {mode}{'' if not self._warn_input else ' (unavailable)'}",
                WARNING_COLOR if self._warn_input else INFO_COLOR,
            ),
            (f"k={stiffness:.0f} d={damping:.1f} m={mass:.2f} | |v|max {speed:6.1f}", INFO_COLOR),
            ("Toggles: [F3] HUD [R] reset [Esc] quit", INFO_COLOR),
        ]
        return tuple(lines)
