"""Cocoa-flavoured RTF payloads for ProPresenter text elements.

Both ProPresenter formats carry the slide text as an RTF document: Pro7
stores the raw bytes in ``Graphics.Text.rtf_data`` and Pro6 stores them
base64 encoded in the ``RTFData`` node. The control words below are the ones
ProPresenter itself writes; the colour table always declares white first so
the text colour sits at index 2 and the outline colour at index 3.
"""

from __future__ import annotations

import base64
from typing import Iterable, Optional

from .colors import Color

PRO7_DIALECT = "pro7"
PRO6_DIALECT = "pro6"

_HEADERS = {
    PRO7_DIALECT: "{\\rtf1\\ansi\\ansicpg1252\\cocoartf2867\n\\cocoatextscaling0\\cocoaplatform0",
    PRO6_DIALECT: "{\\rtf1\\ansi\\ansicpg1252\\cocoartf1038\\cocoasubrtf320",
}

TAB_STOPS = tuple(range(560, 6721, 560))
PARAGRAPH_SPACING = 1400
TEXT_COLOR_INDEX = 2
OUTLINE_COLOR_INDEX = 3
OUTLINE_STROKE_WIDTH = -40


def rtf_escape(text: str) -> str:
    out: list[str] = []
    for char in text:
        if char in "\\{}":
            out.append("\\" + char)
        elif ord(char) < 0x80:
            out.append(char)
        else:
            try:
                encoded = char.encode("cp1252")
            except UnicodeEncodeError:
                encoded = b""
            if len(encoded) == 1:
                out.append(f"\\'{encoded[0]:02x}")
            else:
                out.append(_unicode_escape(char))
    return "".join(out)


def _unicode_escape(char: str) -> str:
    # RTF \u takes signed 16-bit values; astral characters go as a surrogate pair.
    data = char.encode("utf-16-le")
    parts = []
    for i in range(0, len(data), 2):
        unit = int.from_bytes(data[i:i + 2], "little")
        if unit > 0x7FFF:
            unit -= 0x10000
        parts.append(f"\\uc0\\u{unit} ")
    return "".join(parts)


def rtf_font_name(font: str) -> str:
    return rtf_escape(font).replace(" ", "\\ ") if font else "Helvetica"


def _color_table(text_color: Color, outline_color: Optional[Color]) -> str:
    entries = [(255, 255, 255), text_color.to_255()]
    if outline_color is not None:
        entries.append(outline_color.to_255())
    body = "".join(f"\\red{r}\\green{g}\\blue{b};" for r, g, b in entries)
    return "{\\colortbl;" + body + "}"


def _expanded_color_table(text_color: Color, outline_color: Optional[Color]) -> str:
    r, g, b = text_color.to_cssrgb()
    body = f";;\\cssrgb\\c{r}\\c{g}\\c{b};"
    if outline_color is not None:
        orr, og, ob = outline_color.to_cssrgb()
        if orr == og == ob:
            body += f"\\csgray\\c{orr};"
        else:
            body += f"\\cssrgb\\c{orr}\\c{og}\\c{ob};"
    return "{\\*\\expandedcolortbl" + body + "}"


def build_rtf(
    lines: Iterable[str],
    *,
    font: str,
    size: float,
    text_color: Color,
    bold: bool = False,
    outline_color: Optional[Color] = None,
    dialect: str = PRO7_DIALECT,
) -> bytes:
    """Render display lines as one centred RTF paragraph.

    ``size`` is in points and written in half-points. Passing
    ``outline_color`` declares the stroke colour in the colour table and
    turns on the stroke run attributes.
    """
    if dialect not in _HEADERS:
        raise ValueError(f"unknown RTF dialect {dialect!r}")

    raw_lines = [str(line) for line in lines] or [""]
    half_points = max(2, int(round(size * 2)))
    tabs = "".join(f"\\tx{stop}" for stop in TAB_STOPS)

    style = "\\f0"
    if bold:
        style += "\\b"
    style += f"\\fs{half_points} \\cf{TEXT_COLOR_INDEX}"
    if bold and dialect == PRO7_DIALECT:
        style += " \\up0"
    if outline_color is not None:
        style += f" \\outl0\\strokewidth{OUTLINE_STROKE_WIDTH} \\strokec{OUTLINE_COLOR_INDEX}"

    # A backslash before a literal newline is an RTF line break.
    text = "\\\n".join(rtf_escape(line) for line in raw_lines)
    font_table = "{\\fonttbl\\f0\\fswiss\\fcharset0 " + rtf_font_name(font) + ";}"

    if dialect == PRO7_DIALECT:
        rtf = (
            _HEADERS[dialect] + font_table + "\n"
            + _color_table(text_color, outline_color) + "\n"
            + _expanded_color_table(text_color, outline_color) + "\n"
            + f"\\pard{tabs}\\sa{PARAGRAPH_SPACING}\\pardirnatural\\qc\\partightenfactor0\n\n"
            + style + " " + text + "}"
        )
    else:
        rtf = (
            _HEADERS[dialect] + font_table
            + _color_table(text_color, outline_color)
            + f"\\pard{tabs}\\sa{PARAGRAPH_SPACING}\\qc\\pardirnatural"
            + style + " " + text + "}"
        )
    return rtf.encode("ascii")


def encode_rtf_base64(lines: Iterable[str], **kwargs) -> str:
    return base64.b64encode(build_rtf(lines, **kwargs)).decode("ascii")
