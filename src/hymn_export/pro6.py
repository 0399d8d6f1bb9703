"""ProPresenter 6 (.pro6) XML encoder.

Also used for the legacy "ProPresenter 7" XML download: ProPresenter 7
imports this dialect directly, so there is no second XML flavour.
"""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from lxml import etree

from .colors import BLACK, TRANSPARENT
from .grouping import RenderedSlide, group_slides, render_structure
from .ids import new_uuid as default_uuid, utc_now
from .layout import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    OUTLINE_WIDTH,
    SHADOW_ANGLE,
    SHADOW_DISTANCE,
    SHADOW_RADIUS,
    TEXT_BOUNDS,
    format_number,
    shadow_offset,
)
from .options import PresentationOptions
from .rtf import PRO6_DIALECT, encode_rtf_base64
from .structure import HymnStructure

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
VERSION_NUMBER = "600"
BUILD_NUMBER = "6016"


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _iso_timestamp(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


def shadow_string(enabled: bool) -> str:
    """``radius|r g b a|{x, y}`` as stored in the ``shadow`` node."""
    if not enabled:
        return f"0|{TRANSPARENT.xml_string}|{{0, 0}}"
    x, y = shadow_offset(SHADOW_ANGLE, SHADOW_DISTANCE)
    return f"{format_number(SHADOW_RADIUS)}|{BLACK.xml_string}|{{{format_number(x)}, {format_number(y)}}}"


def _position(bounds: tuple[float, float, float, float]) -> str:
    x, y, width, height = bounds
    return "{" + " ".join(format_number(v) for v in (x, y, 0, width, height)) + "}"


def _text_element(parent: etree._Element, slide: RenderedSlide, options: PresentationOptions, new_uuid: Callable[[], str]) -> None:
    element = etree.SubElement(parent, "RVTextElement", {
        "displayName": "Default",
        "UUID": new_uuid(),
        "typeID": "0",
        "displayDelay": "0",
        "locked": "false",
        "persistent": "0",
        "fromTemplate": "false",
        "opacity": "1",
        "source": "",
        "bezelRadius": "0",
        "rotation": "0",
        "drawingFill": "false",
        "drawingShadow": _bool(options.include_shadow),
        "drawingStroke": _bool(options.include_outline),
        "fillColor": "1 1 1 0",
        "adjustsHeightToFit": "false",
        "verticalAlignment": "0",
        "revealType": "0",
    })
    etree.SubElement(element, "RVRect3D", {"rvXMLIvarName": "position"}).text = _position(TEXT_BOUNDS)
    etree.SubElement(element, "shadow", {"rvXMLIvarName": "shadow"}).text = shadow_string(options.include_shadow)

    stroke = etree.SubElement(element, "dictionary", {"rvXMLIvarName": "stroke"})
    etree.SubElement(stroke, "NSColor", {"rvXMLDictionaryKey": "RVShapeElementStrokeColorKey"}).text = options.outline_color.xml_string
    etree.SubElement(stroke, "NSNumber", {"rvXMLDictionaryKey": "RVShapeElementStrokeWidthKey", "hint": "double"}).text = (
        format_number(OUTLINE_WIDTH if options.include_outline else 0)
    )

    rtf = encode_rtf_base64(
        slide.lines,
        font=options.font_family,
        size=options.title_font_size if slide.is_title else options.font_size,
        text_color=options.text_color,
        bold=slide.is_title,
        outline_color=options.outline_color if options.include_outline else None,
        dialect=PRO6_DIALECT,
    )
    plain = base64.b64encode(slide.text.encode("utf-8")).decode("ascii")
    etree.SubElement(element, "NSString", {"rvXMLIvarName": "PlainText"}).text = plain
    etree.SubElement(element, "NSString", {"rvXMLIvarName": "RTFData"}).text = rtf
    etree.SubElement(element, "NSString", {"rvXMLIvarName": "WinFlowData"})
    etree.SubElement(element, "NSString", {"rvXMLIvarName": "WinFontData"})


def _display_slide(parent: etree._Element, slide: RenderedSlide, options: PresentationOptions, new_uuid: Callable[[], str]) -> None:
    display = etree.SubElement(parent, "RVDisplaySlide", {
        "backgroundColor": options.background_color.xml_string,
        "highlightColor": "0 0 0 0",
        "drawingBackgroundColor": "true",
        "enabled": "true",
        "hotKey": "",
        "label": "",
        "notes": "",
        "UUID": new_uuid(),
        "chordChartPath": "",
    })
    etree.SubElement(display, "array", {"rvXMLIvarName": "cues"})
    elements = etree.SubElement(display, "array", {"rvXMLIvarName": "displayElements"})
    _text_element(elements, slide, options, new_uuid)


def build_document(
    structure: HymnStructure,
    title: str,
    options: Optional[PresentationOptions] = None,
    *,
    new_uuid: Callable[[], str] = default_uuid,
    now: Callable[[], datetime] = utc_now,
) -> etree._Element:
    options = options or PresentationOptions()
    rendered = render_structure(structure, title, options)

    root = etree.Element("RVPresentationDocument", {
        "CCLIArtistCredits": "",
        "CCLIAuthor": options.author,
        "CCLICopyrightYear": str(options.copyright_year or 0),
        "CCLIDisplay": "false",
        "CCLIPublisher": options.publisher,
        "CCLISongNumber": options.ccli_number,
        "CCLISongTitle": title,
        "category": options.category,
        "notes": "",
        "lastDateUsed": _iso_timestamp(now()),
        "height": format_number(CANVAS_HEIGHT),
        "width": format_number(CANVAS_WIDTH),
        "backgroundColor": options.background_color.xml_string,
        "buildNumber": BUILD_NUMBER,
        "chordChartPath": "",
        "docType": "0",
        "drawingBackgroundColor": "true",
        "resourcesDirectory": "",
        "selectedArrangementID": "",
        "os": "1",
        "usedCount": "0",
        "versionNumber": VERSION_NUMBER,
    })
    etree.SubElement(root, "RVTransition", {
        "rvXMLIvarName": "transitionObject",
        "transitionType": "-1",
        "transitionDirection": "0",
        "transitionDuration": "1",
        "motionEnabled": "false",
        "motionDuration": "0",
        "motionSpeed": "0",
        "groupIndex": "0",
        "orderIndex": "0",
        "slideBuildAction": "0",
        "slideBuildDelay": "0",
    })
    timeline = etree.SubElement(root, "RVTimeline", {
        "rvXMLIvarName": "timeline",
        "timeOffset": "0",
        "duration": "0",
        "selectedMediaTrackIndex": "0",
        "loop": "false",
    })
    etree.SubElement(timeline, "array", {"rvXMLIvarName": "timeCues"})
    etree.SubElement(timeline, "array", {"rvXMLIvarName": "mediaTracks"})

    groups_node = etree.SubElement(root, "array", {"rvXMLIvarName": "groups"})
    for group in group_slides(rendered):
        grouping = etree.SubElement(groups_node, "RVSlideGrouping", {
            "name": group.name,
            "uuid": new_uuid(),
            "color": group.color.xml_string,
        })
        slides_node = etree.SubElement(grouping, "array", {"rvXMLIvarName": "slides"})
        for index in group.slide_indices:
            _display_slide(slides_node, rendered[index], options, new_uuid)
    etree.SubElement(root, "array", {"rvXMLIvarName": "arrangements"})
    return root


def encode_pro6(
    structure: HymnStructure,
    title: str,
    options: Optional[PresentationOptions] = None,
    *,
    new_uuid: Callable[[], str] = default_uuid,
    now: Callable[[], datetime] = utc_now,
) -> str:
    root = build_document(structure, title, options, new_uuid=new_uuid, now=now)
    xml = XML_DECLARATION + etree.tostring(root, encoding="unicode", pretty_print=True)
    logger.info("Encoded Pro6 document %r: %d bytes", title, len(xml))
    return xml
