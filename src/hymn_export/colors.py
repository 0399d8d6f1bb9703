"""RGBA colour values shared by every output format.

Channels are stored as floats in [0, 1]. Pro7 writes them straight into
``rv.data.Color``, Pro6 writes them as a space separated string, the RTF
colour table and the slide deck want 0-255 integers.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ColorError
from .layout import format_number

HEX_COLOR_RE = re.compile(r"^#?(?P<hex>[0-9a-fA-F]{6}(?:[0-9a-fA-F]{2})?)$")


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ColorError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ColorError(f"{name} must be within [0, 1], got {value!r}")
            object.__setattr__(self, name, float(value))

    def to_255(self) -> tuple[int, int, int]:
        return (round(self.red * 255), round(self.green * 255), round(self.blue * 255))

    @property
    def hex(self) -> str:
        return "{:02X}{:02X}{:02X}".format(*self.to_255())

    def to_cssrgb(self) -> tuple[int, int, int]:
        return (round(self.red * 100000), round(self.green * 100000), round(self.blue * 100000))

    @property
    def xml_string(self) -> str:
        return " ".join(format_number(value) for value in (self.red, self.green, self.blue, self.alpha))


def parse_color(value: Any) -> Color:
    """Turn a payload colour into a :class:`Color`.

    Accepted: ``"#RRGGBB"``/``"RRGGBBAA"`` hex strings, 3/4 item sequences of
    floats in [0, 1] or ints in 0..255, and mappings keyed either
    ``red/green/blue/alpha`` or ``r/g/b/a``.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        match = HEX_COLOR_RE.match(value.strip())
        if not match:
            raise ColorError(f"not a hex colour: {value!r}")
        digits = match.group("hex")
        channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
        return Color(*channels)
    if isinstance(value, Mapping):
        for keys in (("red", "green", "blue", "alpha"), ("r", "g", "b", "a")):
            if all(key in value for key in keys[:3]):
                extra = set(value) - set(keys)
                if extra:
                    raise ColorError(f"unexpected colour keys: {', '.join(sorted(map(str, extra)))}")
                channels = [value[key] for key in keys if key in value]
                return _from_channels(channels)
        raise ColorError(f"colour mapping needs red/green/blue or r/g/b keys: {value!r}")
    if isinstance(value, (list, tuple)):
        return _from_channels(list(value))
    raise ColorError(f"unsupported colour value: {value!r}")


def _from_channels(channels: list[Any]) -> Color:
    if len(channels) not in (3, 4):
        raise ColorError(f"expected 3 or 4 channels, got {len(channels)}")
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, (int, float)):
            raise ColorError(f"colour channels must be numbers, got {channel!r}")
    # All-integer input with any channel above 1 is read as 0-255.
    if all(isinstance(c, int) for c in channels) and any(c > 1 for c in channels):
        if any(c < 0 or c > 255 for c in channels):
            raise ColorError(f"0-255 colour channels out of range: {channels!r}")
        return Color(*(c / 255 for c in channels))
    return Color(*channels)


BLACK = Color(0.0, 0.0, 0.0, 1.0)
WHITE = Color(1.0, 1.0, 1.0, 1.0)
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)

# Group colours, by order of first appearance of each verse.
VERSE_GROUP_PALETTE: tuple[Color, ...] = (
    Color(0.0, 0.4666666666666667, 0.8, 1.0),
    Color(0.0, 0.34901960784313724, 0.6, 1.0),
    Color(0.0, 0.23529411764705882, 0.4, 1.0),
    Color(0.0, 0.40784313725490196, 0.7019607843137254, 1.0),
    Color(0.0, 0.2901960784313726, 0.5019607843137255, 1.0),
)
NEUTRAL_GROUP_COLOR = Color(0.5019607843137255, 0.5019607843137255, 0.5019607843137255, 1.0)
TITLE_GROUP_COLOR = Color(0.7019607843137254, 0.6549019607843137, 0.1411764705882353, 1.0)

