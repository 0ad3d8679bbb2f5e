"""Timed status notices drawn along the bottom edge of the window."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

import pygame

from ..config import settings

Color = Tuple[int, int, int]

DEFAULT_SECONDS = 3.0
PANEL_COLOR = (0, 0, 0, 160)
LINE_SPACING = 20
PADDING = 6


@dataclass
class Notice:
    message: str
    color: Color
    seconds_left: float
    key: Optional[str] = None


class NotificationManager:
    """Queue of short messages that expire after a number of seconds.

    Keyed notices are remembered after they expire, so :meth:`add_once`
    shows a degraded-input warning a single time per run.
    """

    def __init__(self, default_seconds: float = DEFAULT_SECONDS):
        self.default_seconds = default_seconds
        self.notices: List[Notice] = []
        self._shown_keys: Set[str] = set()

    def add(
        self,
        message: str,
        color: Color = settings.WHITE,
        seconds: Optional[float] = None,
        key: Optional[str] = None,
    ) -> Notice:
        notice = Notice(message, color, self.default_seconds if seconds is None else seconds, key)
        self.notices.append(notice)
        return notice

    def add_once(
        self, key: str, message: str, color: Color = settings.WHITE, seconds: Optional[float] = None
    ) -> bool:
        if key in self._shown_keys:
            return False
        self._shown_keys.add(key)
        self.add(message, color, seconds, key)
        return True

    def update(self, dt: float) -> None:
        """Age every notice by ``dt`` seconds and drop the expired ones."""

        for notice in self.notices:
            notice.seconds_left -= dt
        self.notices = [notice for notice in self.notices if notice.seconds_left > 0.0]

    def draw(self, surface: pygame.Surface, font: pygame.font.Font, limit: int = 3) -> None:
        visible = self.notices[-limit:]
        if not visible:
            return
        rendered = [font.render(notice.message, True, notice.color) for notice in visible]
        width = max(text.get_width() for text in rendered) + 2 * PADDING
        height = LINE_SPACING * len(rendered) + 2 * PADDING

        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(PANEL_COLOR)
        left = (surface.get_width() - width) // 2
        top = surface.get_height() - height - PADDING
        surface.blit(panel, (left, top))

        y = top + PADDING
        for text in rendered:
            surface.blit(text, ((surface.get_width() - text.get_width()) // 2, y))
            y += LINE_SPACING
