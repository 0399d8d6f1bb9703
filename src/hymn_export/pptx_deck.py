"""PowerPoint (.pptx) slide deck: one text box per slide."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional

from lxml import etree
from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Emu, Inches, Pt

from .colors import BLACK, Color
from .grouping import RenderedSlide, render_structure
from .layout import SHADOW_OPACITY
from .options import DEFAULT_FONT_SIZE, PresentationOptions
from .structure import HymnStructure

logger = logging.getLogger(__name__)

SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(5.625)
BLANK_LAYOUT = 6

# Content points for the default canvas size scale linearly; the title is fixed.
CONTENT_POINTS = 32
TITLE_POINTS = 44

SHADOW_BLUR = Pt(3)
SHADOW_DISTANCE = Pt(2)
SHADOW_DIRECTION = 45
OUTLINE_WIDTH = Pt(1)


def point_sizes(options: PresentationOptions) -> tuple[int, int]:
    """(content, title) point sizes. Only the content size follows ``options.font_size``."""
    return round(CONTENT_POINTS * options.font_size / DEFAULT_FONT_SIZE), TITLE_POINTS


def _srgb(parent: etree._Element, color: Color, alpha: Optional[float] = None) -> etree._Element:
    clr = etree.SubElement(parent, qn("a:srgbClr"), val=color.hex)
    if alpha is not None:
        etree.SubElement(clr, qn("a:alpha"), val=str(round(alpha * 100000)))
    return clr


def _add_outline(rPr: etree._Element, color: Color) -> None:
    ln = etree.Element(qn("a:ln"), w=str(int(OUTLINE_WIDTH)))
    _srgb(etree.SubElement(ln, qn("a:solidFill")), color)
    # a:ln is the first child of a:rPr
    rPr.insert(0, ln)


def _add_shadow(rPr: etree._Element) -> None:
    effects = etree.Element(qn("a:effectLst"))
    shadow = etree.SubElement(
        effects,
        qn("a:outerShdw"),
        blurRad=str(int(SHADOW_BLUR)),
        dist=str(int(SHADOW_DISTANCE)),
        dir=str(SHADOW_DIRECTION * 60000),
        algn="bl",
        rotWithShape="0",
    )
    _srgb(shadow, BLACK, SHADOW_OPACITY)
    fill = rPr.find(qn("a:solidFill"))
    if fill is not None:
        fill.addnext(effects)
    else:
        rPr.append(effects)


def _add_text_box(slide, rendered: RenderedSlide, options: PresentationOptions, size: int) -> None:
    width = Emu(int(SLIDE_WIDTH * 0.9))
    if rendered.is_title:
        box = slide.shapes.add_textbox(Inches(0.5), Emu(int(SLIDE_HEIGHT * 0.4)), width, Inches(1))
    else:
        box = slide.shapes.add_textbox(Inches(0.5), Emu(int(SLIDE_HEIGHT * 0.3)), width, Emu(int(SLIDE_HEIGHT * 0.4)))
    frame = box.text_frame
    frame.word_wrap = True
    frame.vertical_anchor = MSO_ANCHOR.MIDDLE

    for index, line in enumerate(rendered.lines):
        paragraph = frame.paragraphs[0] if index == 0 else frame.add_paragraph()
        paragraph.alignment = PP_ALIGN.CENTER
        run = paragraph.add_run()
        run.text = line
        font = run.font
        font.name = options.font_family
        font.size = Pt(size)
        font.bold = rendered.is_title
        font.color.rgb = RGBColor.from_string(options.text_color.hex)

        rPr = run._r.get_or_add_rPr()
        if options.include_outline:
            _add_outline(rPr, options.outline_color)
        if options.include_shadow:
            _add_shadow(rPr)


def build_deck(structure: HymnStructure, title: str, options: Optional[PresentationOptions] = None):
    options = options or PresentationOptions()
    content_size, title_size = point_sizes(options)

    deck = Presentation()
    deck.slide_width = SLIDE_WIDTH
    deck.slide_height = SLIDE_HEIGHT
    layout = deck.slide_layouts[BLANK_LAYOUT]

    for rendered in render_structure(structure, title, options):
        slide = deck.slides.add_slide(layout)
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(options.background_color.hex)
        _add_text_box(slide, rendered, options, title_size if rendered.is_title else content_size)
    return deck


def encode_pptx(structure: HymnStructure, title: str, options: Optional[PresentationOptions] = None) -> bytes:
    deck = build_deck(structure, title, options)
    out = BytesIO()
    deck.save(out)
    data = out.getvalue()
    logger.info("Encoded slide deck %r: %d slides, %d bytes", title, len(deck.slides), len(data))
    return data
