"""Display text and section groups shared by every encoder.

Each encoder used to work out slide text and section groups on its own; all
of that now happens here once per call so the formats cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .colors import NEUTRAL_GROUP_COLOR, TITLE_GROUP_COLOR, VERSE_GROUP_PALETTE, Color
from .options import PresentationOptions
from .structure import HymnStructure, Slide, check_text, segment, strip_punctuation

TITLE_GROUP_KEY = "title"
TITLE_GROUP_NAME = "Intro"
REFRAIN_LABEL = "Refrain"


@dataclass(frozen=True)
class RenderedSlide:
    lines: tuple[str, ...]
    group_key: str
    is_title: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class SectionGroup:
    key: str
    name: str
    color: Color
    slide_indices: list[int] = field(default_factory=list)


def section_key(section_type: str, number: Optional[int]) -> str:
    if section_type == "verse":
        return f"verse-{number}"
    return section_type


def group_name(key: str) -> str:
    if key == TITLE_GROUP_KEY:
        return TITLE_GROUP_NAME
    if key.startswith("verse-"):
        return f"Verse {key.split('-', 1)[1]}"
    if key == "chorus":
        return REFRAIN_LABEL
    return key.capitalize()


def render_slides(slides: Sequence[Slide], title: str, options: PresentationOptions) -> list[RenderedSlide]:
    """Final display lines for every slide, title slide first when requested."""
    rendered: list[RenderedSlide] = []
    check_text(title, "title")
    if options.include_title_slide:
        rendered.append(RenderedSlide((title,), TITLE_GROUP_KEY, is_title=True))

    seen: set[str] = set()
    for slide in slides:
        lines = list(slide.lines)
        if options.strip_punctuation:
            lines = [strip_punctuation(line) for line in lines]
        key = section_key(slide.section_type, slide.section_number)
        if options.include_verse_numbers and lines and key not in seen and slide.section_type in ("verse", "chorus"):
            seen.add(key)
            prefix = f"{slide.section_number}" if slide.section_type == "verse" else f"{REFRAIN_LABEL}:"
            lines[0] = f"{prefix} {lines[0]}" if lines[0] else prefix
        rendered.append(RenderedSlide(tuple(lines), key))
    return rendered


def render_structure(structure: HymnStructure, title: str, options: PresentationOptions) -> list[RenderedSlide]:
    return render_slides(segment(structure, options.lines_per_slide), title, options)


def group_slides(rendered: Sequence[RenderedSlide]) -> list[SectionGroup]:
    """Bucket slides by section key in order of first appearance.

    The verse palette index is local to this call.
    """
    groups: dict[str, SectionGroup] = {}
    verse_count = 0
    for index, slide in enumerate(rendered):
        group = groups.get(slide.group_key)
        if group is None:
            if slide.group_key == TITLE_GROUP_KEY:
                color = TITLE_GROUP_COLOR
            elif slide.group_key.startswith("verse-"):
                color = VERSE_GROUP_PALETTE[verse_count % len(VERSE_GROUP_PALETTE)]
                verse_count += 1
            else:
                color = NEUTRAL_GROUP_COLOR
            group = SectionGroup(slide.group_key, group_name(slide.group_key), color)
            groups[slide.group_key] = group
        group.slide_indices.append(index)
    return list(groups.values())
