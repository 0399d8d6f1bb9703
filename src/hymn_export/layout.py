"""Slide geometry shared by both ProPresenter formats."""

from __future__ import annotations

import math

CANVAS_WIDTH = 1920.0
CANVAS_HEIGHT = 1080.0
# x, y, width, height of the lyric text box.
TEXT_BOUNDS = (100.0, 100.0, 1720.0, 880.0)

SHADOW_ANGLE = 315.0
SHADOW_DISTANCE = 5.0
SHADOW_RADIUS = 5.0
SHADOW_OPACITY = 0.75
OUTLINE_WIDTH = 3.0


def shadow_offset(angle: float, distance: float) -> tuple[float, float]:
    """Split a shadow angle/distance into x/y offsets.

    Offsets are in AppKit space (y grows upward): 315 degrees is down-right,
    so x is positive and y negative.
    """
    radians = math.radians(angle)
    return (round(math.cos(radians) * distance, 4), round(math.sin(radians) * distance, 4))


def format_number(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
