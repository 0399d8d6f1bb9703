"""Presentation options: one immutable value per generation call.

Payloads use camelCase keys, e.g.

{
  "linesPerSlide": 2,
  "includeTitleSlide": true,
  "includeVerseNumbers": false,
  "stripPunctuation": false,
  "fontFamily": "Helvetica",
  "fontSize": 140,
  "backgroundColor": "#000000",
  "textColor": [1, 1, 1, 1],
  "outlineColor": {"red": 0, "green": 0, "blue": 0, "alpha": 1},
  "includeShadow": false,
  "includeOutline": false,
  "author": "...", "publisher": "...", "ccliNumber": "12345", "copyrightYear": 1907
}
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from .colors import BLACK, WHITE, Color, parse_color
from .errors import ColorError, OptionsError
from .structure import illegal_character

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 140
# Title slides are always 160, bold, whatever the content size.
TITLE_FONT_SIZE = 160


@dataclass(frozen=True)
class PresentationOptions:
    lines_per_slide: int = 2
    include_title_slide: bool = True
    include_verse_numbers: bool = False
    strip_punctuation: bool = False
    font_family: str = "Helvetica"
    font_size: int = DEFAULT_FONT_SIZE
    background_color: Color = BLACK
    text_color: Color = WHITE
    outline_color: Color = BLACK
    include_shadow: bool = False
    include_outline: bool = False
    author: str = ""
    publisher: str = ""
    ccli_number: str = ""
    copyright_year: Optional[int] = None
    category: str = "Hymn"
    pro_presenter_version: int = 6

    def __post_init__(self) -> None:
        if isinstance(self.lines_per_slide, bool) or not isinstance(self.lines_per_slide, int) or self.lines_per_slide < 1:
            raise OptionsError("must be a positive integer", "linesPerSlide")
        if isinstance(self.font_size, bool) or not isinstance(self.font_size, (int, float)) or not math.isfinite(self.font_size) or self.font_size <= 0:
            raise OptionsError("must be a positive number", "fontSize")
        if not isinstance(self.font_family, str) or not self.font_family.strip():
            raise OptionsError("must be a non-empty string", "fontFamily")
        for name in ("font_family", "author", "publisher", "category"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise OptionsError("must be a string", _camel(name))
            char = illegal_character(value)
            if char is not None:
                raise OptionsError(f"control character {char!r} is not allowed", _camel(name))
        for name in ("background_color", "text_color", "outline_color"):
            if not isinstance(getattr(self, name), Color):
                raise ColorError("must be a Color", _camel(name))
        if self.ccli_number and not str(self.ccli_number).isdigit():
            raise OptionsError("must contain digits only", "ccliNumber")
        if self.copyright_year is not None and (
            isinstance(self.copyright_year, bool) or not isinstance(self.copyright_year, int) or self.copyright_year < 0
        ):
            raise OptionsError("must be a non-negative integer", "copyrightYear")
        if self.pro_presenter_version not in (6, 7):
            raise OptionsError("must be 6 or 7", "proPresenterVersion")

    @property
    def title_font_size(self) -> int:
        return TITLE_FONT_SIZE

    @property
    def ccli_song_number(self) -> int:
        return int(self.ccli_number) if self.ccli_number else 0

    @classmethod
    def from_payload(cls, payload: Optional[dict[str, Any]]) -> "PresentationOptions":
        if payload is None:
            return cls()
        if not isinstance(payload, dict):
            raise OptionsError("options payload must be an object")

        known = {_camel(f.name): f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, raw in payload.items():
            name = known.get(key)
            if name is None:
                logger.warning("Ignoring unknown presentation option %r", key)
                continue
            if raw is None:
                continue
            values[name] = _coerce(name, key, raw)
        return cls(**values)


_BOOL_FIELDS = {"include_title_slide", "include_verse_numbers", "strip_punctuation", "include_shadow", "include_outline"}
_COLOR_FIELDS = {"background_color", "text_color", "outline_color"}
_TEXT_FIELDS = {"font_family", "author", "publisher", "category"}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _coerce(name: str, key: str, raw: Any) -> Any:
    if name in _COLOR_FIELDS:
        try:
            return parse_color(raw)
        except ColorError as exc:
            raise ColorError(str(exc), key) from None
    if name in _BOOL_FIELDS:
        if isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.lower() in ("true", "false"):
            return raw.lower() == "true"
        raise OptionsError(f"expected a boolean, got {raw!r}", key)
    if name in _TEXT_FIELDS:
        if not isinstance(raw, str):
            raise OptionsError(f"expected a string, got {raw!r}", key)
        return raw.strip()
    if name == "ccli_number":
        if isinstance(raw, int) and not isinstance(raw, bool):
            return str(raw)
        if isinstance(raw, str):
            return raw.strip()
        raise OptionsError(f"expected a string, got {raw!r}", key)
    # Remaining fields are integers (font size may be fractional).
    if isinstance(raw, bool):
        raise OptionsError(f"expected a number, got {raw!r}", key)
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            raise OptionsError(f"expected a number, got {raw!r}", key) from None
    if name == "font_size" and isinstance(raw, float):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if not isinstance(raw, int):
        raise OptionsError(f"expected an integer, got {raw!r}", key)
    return raw
