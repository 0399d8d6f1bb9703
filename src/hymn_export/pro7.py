"""ProPresenter 7 (.pro) presentation encoder.

A Pro7 document is one serialized ``rv.data.Presentation``. Every slide is a
cue holding a single presentation-slide action; cues are listed in display
order and cue groups point at them by UUID.
"""

from __future__ import annotations

import logging
import os
import zipfile
from datetime import datetime
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple

from google.protobuf import json_format
from google.protobuf.message import Message

from .colors import BLACK, TRANSPARENT, Color
from .errors import SchemaValidationError
from .grouping import RenderedSlide, group_slides, render_structure
from .ids import new_uuid as default_uuid, utc_now
from .layout import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    OUTLINE_WIDTH,
    SHADOW_ANGLE,
    SHADOW_DISTANCE,
    SHADOW_OPACITY,
    SHADOW_RADIUS,
    TEXT_BOUNDS,
)
from .options import PresentationOptions
from .pro7_schema import Presentation, enum_value
from .rtf import OUTLINE_STROKE_WIDTH, PARAGRAPH_SPACING, PRO7_DIALECT, TAB_STOPS, build_rtf
from .structure import HymnStructure

logger = logging.getLogger(__name__)

CHORD_PRO_COLOR = Color(0.993, 0.76, 0.032, 1.0)
TRANSFORM_DELIMITER = "  •  "
TEXT_SCROLLER_REPEAT_DISTANCE = 0.05813953488372093
APPLICATION_VERSION = (7, 16, 0, "0")


def set_color(color: Any, value: Color) -> None:
    color.red = value.red
    color.green = value.green
    color.blue = value.blue
    color.alpha = value.alpha


def set_timestamp(timestamp: Any, moment: datetime) -> None:
    timestamp.seconds = int(moment.timestamp())
    timestamp.nanos = moment.microsecond * 1000


def _rectangle_path(path: Any) -> None:
    path.closed = True
    for x, y in ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)):
        point = path.points.add()
        point.point.x = x
        point.point.y = y
        point.q0.x = x
        point.q0.y = y
        point.q1.x = x
        point.q1.y = y
    path.shape.type = enum_value(path.shape, "TYPE_RECTANGLE")


def _set_shadow(shadow: Any, enabled: bool) -> None:
    # Disabled shadows are written with zero geometry; leaving them out makes
    # ProPresenter fall back to its own default drop shadow.
    shadow.style = enum_value(shadow, "STYLE_DROP")
    shadow.angle = SHADOW_ANGLE if enabled else 0.0
    shadow.offset = SHADOW_DISTANCE if enabled else 0.0
    shadow.radius = SHADOW_RADIUS if enabled else 0.0
    set_color(shadow.color, BLACK if enabled else TRANSPARENT)
    shadow.opacity = SHADOW_OPACITY if enabled else 0.0
    shadow.enable = enabled


def _fill_text_element(element: Any, slide: RenderedSlide, options: PresentationOptions, new_uuid: Callable[[], str]) -> None:
    element.uuid.string = new_uuid()
    element.name = "Text"
    x, y, width, height = TEXT_BOUNDS
    element.bounds.origin.x = x
    element.bounds.origin.y = y
    element.bounds.size.width = width
    element.bounds.size.height = height
    element.rotation = 0.0
    element.opacity = 1.0
    _rectangle_path(element.path)

    element.fill.enable = False
    set_color(element.fill.color, TRANSPARENT)

    element.stroke.style = enum_value(element.stroke, "STYLE_SOLID_LINE")
    element.stroke.width = OUTLINE_WIDTH if options.include_outline else 0.0
    set_color(element.stroke.color, options.outline_color)
    element.stroke.enable = options.include_outline

    _set_shadow(element.shadow, options.include_shadow)

    element.feather.style = enum_value(element.feather, "STYLE_INSIDE")
    element.feather.radius = 0.05
    element.feather.enable = False

    size = options.title_font_size if slide.is_title else options.font_size
    outline_color = options.outline_color if options.include_outline else None

    text = element.text
    text.rtf_data = build_rtf(
        slide.lines,
        font=options.font_family,
        size=size,
        text_color=options.text_color,
        bold=slide.is_title,
        outline_color=outline_color,
        dialect=PRO7_DIALECT,
    )
    attrs = text.attributes
    attrs.font.name = options.font_family
    attrs.font.family = options.font_family
    attrs.font.face = options.font_family
    attrs.font.size = float(size)
    attrs.font.bold = slide.is_title
    attrs.font.italic = False
    attrs.capitalization = enum_value(attrs, "CAPITALIZATION_NONE")
    set_color(attrs.text_solid_fill, options.text_color)
    # RTF stroke width is in twentieths of the attribute value.
    attrs.stroke_width = OUTLINE_STROKE_WIDTH / 20 if outline_color is not None else 0.0
    set_color(attrs.stroke_color, outline_color or TRANSPARENT)

    paragraph = attrs.paragraph_style
    paragraph.alignment = enum_value(paragraph, "ALIGNMENT_CENTER")
    paragraph.line_height_multiple = 1.0
    paragraph.paragraph_spacing = PARAGRAPH_SPACING / 20
    for stop in TAB_STOPS:
        paragraph.tab_stops.add().location = stop / 20

    _set_shadow(text.shadow, options.include_shadow)
    text.vertical_alignment = enum_value(text, "VERTICAL_ALIGNMENT_MIDDLE")
    text.scale_behavior = enum_value(text, "SCALE_BEHAVIOR_SCALE_FONT_DOWN")
    text.margins.SetInParent()
    text.is_superscript_standardized = True
    text.transformDelimiter = TRANSFORM_DELIMITER
    set_color(text.chord_pro.color, CHORD_PRO_COLOR)


def _fill_presentation_slide(target: Any, slide: RenderedSlide, options: PresentationOptions, new_uuid: Callable[[], str]) -> None:
    base = target.base_slide
    base.uuid.string = new_uuid()
    base.size.width = CANVAS_WIDTH
    base.size.height = CANVAS_HEIGHT
    base.draws_background_color = True
    set_color(base.background_color, options.background_color)

    slide_element = base.elements.add()
    _fill_text_element(slide_element.element, slide, options, new_uuid)
    slide_element.text_scroller.should_scroll = False
    slide_element.text_scroller.scroll_rate = 0.5
    slide_element.text_scroller.should_repeat = True
    slide_element.text_scroller.repeat_distance = TEXT_SCROLLER_REPEAT_DISTANCE

    target.chord_chart.platform = enum_value(target.chord_chart, "PLATFORM_MACOS")


def _add_cue(doc: Any, slide: RenderedSlide, name: str, options: PresentationOptions, new_uuid: Callable[[], str]) -> str:
    cue = doc.cues.add()
    cue_uuid = new_uuid()
    cue.uuid.string = cue_uuid
    cue.name = ""
    cue.isEnabled = True
    cue.completion_action_type = enum_value(cue, "COMPLETION_ACTION_TYPE_LAST")
    cue.hot_key.SetInParent()

    action = cue.actions.add()
    action.uuid.string = new_uuid()
    action.name = name
    action.isEnabled = True
    action.delay_time = 0.0
    action.type = enum_value(action, "ACTION_TYPE_PRESENTATION_SLIDE")
    action.layer_identification.uuid.string = "slides"
    action.layer_identification.name = "Slides"
    _fill_presentation_slide(action.slide.presentation, slide, options, new_uuid)
    return cue_uuid


def _set_application_info(doc: Any) -> None:
    info = doc.application_info
    info.platform = enum_value(info, "PLATFORM_MACOS")
    info.application = enum_value(info, "APPLICATION_PROPRESENTER")
    major, minor, patch, build = APPLICATION_VERSION
    info.application_version.major_version = major
    info.application_version.minor_version = minor
    info.application_version.patch_version = patch
    info.application_version.build = build


def _set_ccli(ccli: Any, title: str, options: PresentationOptions) -> None:
    ccli.author = options.author
    ccli.artist_credits = ""
    ccli.song_title = title
    ccli.publisher = options.publisher
    ccli.copyright_year = options.copyright_year or 0
    ccli.song_number = options.ccli_song_number
    ccli.display = False
    ccli.album = ""


def build_presentation(
    structure: HymnStructure,
    title: str,
    options: Optional[PresentationOptions] = None,
    *,
    new_uuid: Callable[[], str] = default_uuid,
    now: Callable[[], datetime] = utc_now,
) -> Any:
    """Build and validate the ``rv.data.Presentation`` message for a hymn."""
    options = options or PresentationOptions()
    rendered = render_structure(structure, title, options)
    groups = group_slides(rendered)
    names = {group.key: group.name for group in groups}

    doc = Presentation()
    _set_application_info(doc)
    doc.uuid.string = new_uuid()
    doc.name = title
    moment = now()
    set_timestamp(doc.last_date_used, moment)
    set_timestamp(doc.last_modified_date, moment)
    doc.category = options.category
    doc.chord_chart.platform = enum_value(doc.chord_chart, "PLATFORM_MACOS")

    cue_ids = [_add_cue(doc, slide, names[slide.group_key], options, new_uuid) for slide in rendered]

    for group in groups:
        cue_group = doc.cue_groups.add()
        cue_group.group.uuid.string = new_uuid()
        cue_group.group.name = group.name
        set_color(cue_group.group.color, group.color)
        cue_group.group.hotKey.code = 0
        cue_group.group.hotKey.control_identifier = ""
        cue_group.group.application_group_identifier.string = new_uuid()
        cue_group.group.application_group_name = ""
        for index in group.slide_indices:
            cue_group.cue_identifiers.add().string = cue_ids[index]
        logger.debug("Pro7 group %s: %d cues", group.name, len(group.slide_indices))

    _set_ccli(doc.ccli, title, options)
    validate_presentation(doc)
    return doc


def encode_pro7(
    structure: HymnStructure,
    title: str,
    options: Optional[PresentationOptions] = None,
    *,
    new_uuid: Callable[[], str] = default_uuid,
    now: Callable[[], datetime] = utc_now,
) -> bytes:
    doc = build_presentation(structure, title, options, new_uuid=new_uuid, now=now)
    data = doc.SerializeToString()
    logger.info("Encoded Pro7 presentation %r: %d cues, %d groups, %d bytes", title, len(doc.cues), len(doc.cue_groups), len(data))
    return data


def _iter_messages(message: Any, path: str) -> Iterator[Tuple[str, Any]]:
    yield path, message
    for field, value in message.ListFields():
        if field.message_type is None:
            continue
        child_path = f"{path}.{field.name}" if path else field.name
        if isinstance(value, Message):
            yield from _iter_messages(value, child_path)
        else:
            for index, item in enumerate(value):
                yield from _iter_messages(item, f"{child_path}[{index}]")


def validate_presentation(doc: Any) -> None:
    """Raise :class:`SchemaValidationError` for the first problem found.

    Covers the runtime's required-field check, colour channel ranges, empty
    or duplicate cue identifiers and cue groups pointing at unknown cues.
    """
    missing = doc.FindInitializationErrors()
    if missing:
        raise SchemaValidationError(missing[0], "required field is not set")

    for path, message in _iter_messages(doc, ""):
        if message.DESCRIPTOR.full_name != "rv.data.Color":
            continue
        for channel in ("red", "green", "blue", "alpha"):
            value = getattr(message, channel)
            if not 0.0 <= value <= 1.0:
                raise SchemaValidationError(f"{path}.{channel}", f"colour channel {value!r} outside [0, 1]")

    cue_ids: set[str] = set()
    for index, cue in enumerate(doc.cues):
        identifier = cue.uuid.string
        if not identifier:
            raise SchemaValidationError(f"cues[{index}].uuid.string", "empty identifier")
        if identifier in cue_ids:
            raise SchemaValidationError(f"cues[{index}].uuid.string", f"duplicate identifier {identifier}")
        cue_ids.add(identifier)

    for group_index, cue_group in enumerate(doc.cue_groups):
        for ident_index, ident in enumerate(cue_group.cue_identifiers):
            if ident.string not in cue_ids:
                raise SchemaValidationError(
                    f"cue_groups[{group_index}].cue_identifiers[{ident_index}].string",
                    f"no cue with identifier {ident.string!r}",
                )


def decode_pro7(data: bytes) -> Any:
    doc = Presentation()
    doc.ParseFromString(data)
    return doc


def read_presentation(path: str) -> Any:
    """Decode a ``.pro`` file, a zipped bundle or a bundle directory."""
    abs_path = os.path.abspath(path)
    if os.path.isdir(abs_path):
        candidates = sorted(
            (os.path.join(root, name) for root, _, files in os.walk(abs_path) for name in files if name.lower().endswith(".pro")),
            key=len,
        )
        if not candidates:
            raise FileNotFoundError(f"No presentation payload found inside {abs_path}")
        abs_path = candidates[0]

    with open(abs_path, "rb") as fh:
        payload = fh.read()
    if payload[:4] == b"PK\x03\x04":
        with zipfile.ZipFile(abs_path) as zf:
            for info in zf.infolist():
                if info.filename.lower().endswith(".pro"):
                    return decode_pro7(zf.read(info.filename))
        raise ValueError(f"No presentation payload found inside zip {abs_path}")
    return decode_pro7(payload)


def presentation_to_dict(doc: Any) -> dict[str, Any]:
    return json_format.MessageToDict(doc, preserving_proto_field_name=True)


def slide_texts(doc: Any) -> Iterable[bytes]:
    """RTF payload of every cue's text element, in cue order."""
    for cue in doc.cues:
        for action in cue.actions:
            for slide_element in action.slide.presentation.base_slide.elements:
                yield slide_element.element.text.rtf_data
