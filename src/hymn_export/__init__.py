"""Hymn presentation exports: ProPresenter 7, ProPresenter 6, PowerPoint and text."""

from .colors import Color, parse_color
from .errors import (
    ColorError,
    HymnExportError,
    HymnStructureError,
    OptionsError,
    SchemaValidationError,
    UnsupportedFormatError,
)
from .export import FORMATS, ExportResult, export_hymn, make_filename
from .options import PresentationOptions
from .pptx_deck import encode_pptx
from .pro6 import encode_pro6
from .pro7 import build_presentation, decode_pro7, encode_pro7, read_presentation, validate_presentation
from .structure import HymnStructure, Line, Section, Slide, segment, strip_punctuation

__all__ = [
    "Color",
    "ColorError",
    "ExportResult",
    "FORMATS",
    "HymnExportError",
    "HymnStructure",
    "HymnStructureError",
    "Line",
    "OptionsError",
    "PresentationOptions",
    "SchemaValidationError",
    "Section",
    "Slide",
    "UnsupportedFormatError",
    "build_presentation",
    "decode_pro7",
    "encode_pptx",
    "encode_pro6",
    "encode_pro7",
    "export_hymn",
    "make_filename",
    "parse_color",
    "read_presentation",
    "segment",
    "strip_punctuation",
    "validate_presentation",
]
