"""Hymn structure model, slide segmentation and plain-text helpers.

The structure is produced upstream by the lyric parser; this module only
validates it and cuts it into display slides:

{
  "sections": [
    {"type": "verse", "number": 1, "lines": [{"text": "...", "originalIndex": 0}, ...]},
    {"type": "chorus", "lines": [...]},
    ...
  ]
}
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .errors import HymnStructureError

SECTION_TYPES = ("verse", "chorus", "bridge", "other")
# Characters XML 1.0 cannot carry. Tab, newline and carriage return are allowed.
XML_ILLEGAL_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def illegal_character(text: str) -> Optional[str]:
    """First character of ``text`` that no output format can carry, or None."""
    match = XML_ILLEGAL_RE.search(text)
    return match.group() if match else None


def check_text(text: Any, path: str) -> None:
    if not isinstance(text, str):
        raise HymnStructureError("expected a string", path)
    char = illegal_character(text)
    if char is not None:
        raise HymnStructureError(f"control character {char!r} is not allowed", path)


@dataclass(frozen=True)
class Line:
    text: str
    original_index: int

    def __post_init__(self) -> None:
        check_text(self.text, "line.text")


@dataclass(frozen=True)
class Section:
    type: str
    number: Optional[int]
    lines: tuple[Line, ...]

    def __post_init__(self) -> None:
        validate_section(self.type, self.number)


@dataclass(frozen=True)
class HymnStructure:
    sections: tuple[Section, ...]

    @classmethod
    def from_dict(cls, payload: Any) -> "HymnStructure":
        if not isinstance(payload, dict):
            raise HymnStructureError("expected an object with a 'sections' list")
        raw_sections = payload.get("sections")
        if not isinstance(raw_sections, list):
            raise HymnStructureError("expected a list", "sections")
        return cls(tuple(_parse_section(raw, f"sections[{idx}]") for idx, raw in enumerate(raw_sections)))

    def to_dict(self) -> dict[str, Any]:
        sections = []
        for section in self.sections:
            entry: dict[str, Any] = {"type": section.type}
            if section.number is not None:
                entry["number"] = section.number
            entry["lines"] = [{"text": line.text, "originalIndex": line.original_index} for line in section.lines]
            sections.append(entry)
        return {"sections": sections}


@dataclass(frozen=True)
class Slide:
    lines: tuple[str, ...]
    section_type: str
    section_number: Optional[int] = None


def validate_section(section_type: Any, number: Any, path: str = "section") -> None:
    if section_type not in SECTION_TYPES:
        raise HymnStructureError(f"unknown section type {section_type!r}", f"{path}.type")
    if section_type == "verse":
        if isinstance(number, bool) or not isinstance(number, int) or number < 1:
            raise HymnStructureError("a verse needs a positive integer number", f"{path}.number")
    elif number is not None:
        raise HymnStructureError(f"a {section_type} section cannot carry a number", f"{path}.number")


def _parse_section(raw: Any, path: str) -> Section:
    if not isinstance(raw, dict):
        raise HymnStructureError("expected an object", path)
    section_type = raw.get("type")
    number = raw.get("number")
    validate_section(section_type, number, path)
    raw_lines = raw.get("lines")
    if not isinstance(raw_lines, list):
        raise HymnStructureError("expected a list", f"{path}.lines")

    lines: list[Line] = []
    for idx, raw_line in enumerate(raw_lines):
        line_path = f"{path}.lines[{idx}]"
        if not isinstance(raw_line, dict):
            raise HymnStructureError("expected an object", line_path)
        text = raw_line.get("text")
        check_text(text, f"{line_path}.text")
        original_index = raw_line.get("originalIndex", idx)
        if isinstance(original_index, bool) or not isinstance(original_index, int):
            raise HymnStructureError("expected an integer", f"{line_path}.originalIndex")
        lines.append(Line(text, original_index))

    return Section(section_type, number, tuple(lines))


def segment(structure: HymnStructure, lines_per_slide: int = 2) -> list[Slide]:
    """Cut every section into consecutive slides of at most ``lines_per_slide`` lines."""
    if isinstance(lines_per_slide, bool) or not isinstance(lines_per_slide, int) or lines_per_slide < 1:
        raise HymnStructureError(f"lines per slide must be a positive integer, got {lines_per_slide!r}")

    slides: list[Slide] = []
    for section in structure.sections:
        texts = [line.text for line in section.lines]
        for start in range(0, len(texts), lines_per_slide):
            slides.append(Slide(tuple(texts[start:start + lines_per_slide]), section.type, section.number))
    return slides


STRIP_CHARS_RE = re.compile(r"[.,;:!?\"“”„‟«»—–]")
# Apostrophes survive only between two word characters (don't, o'er).
STRAY_APOSTROPHE_RE = re.compile(r"(?<!\w)['‘’‚‛]|['‘’‚‛](?!\w)")


def strip_punctuation(text: str) -> str:
    stripped = STRIP_CHARS_RE.sub(" ", text)
    stripped = STRAY_APOSTROPHE_RE.sub("", stripped)
    return " ".join(stripped.split())


def format_plain_text(blocks: Iterable[Iterable[str]]) -> str:
    return "\n\n".join("\n".join(lines) for lines in blocks)


def format_per_slide_text(blocks: Iterable[Iterable[str]]) -> str:
    return "\n\n".join(
        f"--- Slide {number} ---\n" + "\n".join(lines)
        for number, lines in enumerate(blocks, start=1)
    )
