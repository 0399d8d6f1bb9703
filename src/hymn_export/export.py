"""Format selector: picks the encoder, extension and content type for a download."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Union

from .errors import UnsupportedFormatError
from .grouping import render_structure
from .ids import new_uuid as default_uuid, utc_now
from .options import PresentationOptions
from .pptx_deck import encode_pptx
from .pro6 import encode_pro6
from .pro7 import encode_pro7
from .structure import HymnStructure, format_per_slide_text, format_plain_text

logger = logging.getLogger(__name__)

FILENAME_UNSAFE_RE = re.compile(r"[^A-Za-z0-9]")

PPTX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

Encoder = Callable[..., Union[bytes, str]]


@dataclass(frozen=True)
class ExportFormat:
    extension: str
    content_type: str
    encoder: Encoder
    filename_suffix: str = ""


@dataclass(frozen=True)
class ExportResult:
    data: Union[bytes, str]
    filename: str
    content_type: str

    def as_bytes(self) -> bytes:
        return self.data.encode("utf-8") if isinstance(self.data, str) else self.data


def make_filename(title: str, extension: str) -> str:
    return f"{FILENAME_UNSAFE_RE.sub('_', title)}.{extension}"


def _pro7(structure, title, options, new_uuid, now) -> bytes:
    return encode_pro7(structure, title, options, new_uuid=new_uuid, now=now)


def _pro6(structure, title, options, new_uuid, now) -> str:
    return encode_pro6(structure, title, options, new_uuid=new_uuid, now=now)


def _pptx(structure, title, options, new_uuid, now) -> bytes:
    return encode_pptx(structure, title, options)


def _text(structure, title, options, new_uuid, now) -> str:
    return format_plain_text(slide.lines for slide in render_structure(structure, title, options))


def _text_per_slide(structure, title, options, new_uuid, now) -> str:
    return format_per_slide_text(slide.lines for slide in render_structure(structure, title, options))


_PRO7 = ExportFormat("pro", "application/octet-stream", _pro7)
_PRO6 = ExportFormat("pro6", "application/xml", _pro6)

FORMATS: dict[str, ExportFormat] = {
    "propresenter7": _PRO7,
    "pro7": _PRO7,
    "pro": _PRO7,
    "propresenter6": _PRO6,
    "pro6": _PRO6,
    # Legacy selector: XML dialect, extension follows options.pro_presenter_version.
    "propresenter": _PRO6,
    "pptx": ExportFormat("pptx", PPTX_CONTENT_TYPE, _pptx),
    "text": ExportFormat("txt", "text/plain", _text),
    "text-per-slide": ExportFormat("txt", "text/plain", _text_per_slide, filename_suffix=" slides"),
}
LEGACY_FORMAT = "propresenter"


def export_hymn(
    structure: HymnStructure,
    title: str,
    fmt: str,
    options: Optional[PresentationOptions] = None,
    *,
    new_uuid: Callable[[], str] = default_uuid,
    now: Callable[[], datetime] = utc_now,
) -> ExportResult:
    """Encode ``structure`` in the format named by ``fmt``.

    Raises :class:`UnsupportedFormatError` for unknown selectors before any
    encoding work is done.
    """
    export_format = FORMATS.get(fmt)
    if export_format is None:
        raise UnsupportedFormatError(fmt, FORMATS)
    options = options or PresentationOptions()

    extension = export_format.extension
    if fmt == LEGACY_FORMAT and options.pro_presenter_version == 7:
        extension = "pro"

    data = export_format.encoder(structure, title, options, new_uuid, now)
    filename = make_filename(title + export_format.filename_suffix, extension)
    logger.debug("Exported %r as %s -> %s", title, fmt, filename)
    return ExportResult(data, filename, export_format.content_type)
