"""Draw a :class:`RopeFrame` onto a pygame surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

import pygame

from ..physics.vector_math import Vector2
from .frame import RopeFrame

Color = Tuple[int, int, int]
ColorA = Tuple[int, int, int, int]

BACKGROUND_COLOR: Color = (0, 0, 0)
GUIDE_COLOR: ColorA = (255, 255, 255, 64)
CURVE_COLOR: Color = (90, 200, 250)
TANGENT_COLOR: Color = (52, 199, 89)
ANCHOR_COLOR: Color = (255, 69, 58)
CONTROL_COLOR: Color = (255, 214, 10)
TARGET_COLOR: Color = (120, 120, 140)


@dataclass(frozen=True)
class RopeStyle:
    curve_width: int = 3
    tangent_width: int = 1
    guide_width: int = 1
    anchor_radius: int = 4
    control_radius: int = 4
    target_radius: int = 6
    show_targets: bool = True


def _points(vectors: Iterable[Vector2]) -> List[Tuple[float, float]]:
    return [vector.as_tuple() for vector in vectors]


def draw_guides(surface: pygame.Surface, frame: RopeFrame, style: RopeStyle) -> None:
    p0, p1, p2, p3 = frame.control_points
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    pygame.draw.line(overlay, GUIDE_COLOR, p0.as_tuple(), p1.as_tuple(), style.guide_width)
    pygame.draw.line(overlay, GUIDE_COLOR, p2.as_tuple(), p3.as_tuple(), style.guide_width)
    surface.blit(overlay, (0, 0))


def draw_curve(surface: pygame.Surface, frame: RopeFrame, style: RopeStyle) -> None:
    if len(frame.polyline) < 2:
        return
    pygame.draw.lines(surface, CURVE_COLOR, False, _points(frame.polyline), style.curve_width)


def draw_tangents(surface: pygame.Surface, frame: RopeFrame, style: RopeStyle) -> None:
    for start, end in frame.tangent_sticks:
        if start == end:
            continue
        pygame.draw.line(surface, TANGENT_COLOR, start.as_tuple(), end.as_tuple(), style.tangent_width)


def draw_control_points(surface: pygame.Surface, frame: RopeFrame, style: RopeStyle) -> None:
    p0, p1, p2, p3 = frame.control_points
    if style.show_targets:
        for target in frame.targets:
            pygame.draw.circle(surface, TARGET_COLOR, target.as_tuple(), style.target_radius, 1)
    pygame.draw.circle(surface, ANCHOR_COLOR, p0.as_tuple(), style.anchor_radius)
    pygame.draw.circle(surface, ANCHOR_COLOR, p3.as_tuple(), style.anchor_radius)
    pygame.draw.circle(surface, CONTROL_COLOR, p1.as_tuple(), style.control_radius)
    pygame.draw.circle(surface, CONTROL_COLOR, p2.as_tuple(), style.control_radius)


def draw_rope(surface: pygame.Surface, frame: RopeFrame, style: RopeStyle = RopeStyle()) -> None:
    """Clear ``surface`` and draw guides, curve, tangent sticks and points."""

    surface.fill(BACKGROUND_COLOR)
    draw_guides(surface, frame, style)
    draw_curve(surface, frame, style)
    draw_tangents(surface, frame, style)
    draw_control_points(surface, frame, style)
