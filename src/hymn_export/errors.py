"""Exceptions raised by the hymn export codecs."""

from __future__ import annotations

from typing import Iterable, Optional


class HymnExportError(Exception):
    """Base class for every error raised by this package."""


class HymnStructureError(HymnExportError, ValueError):
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class OptionsError(HymnExportError, ValueError):
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


class ColorError(OptionsError):
    pass


class UnsupportedFormatError(HymnExportError, ValueError):
    def __init__(self, fmt: str, valid: Iterable[str]) -> None:
        self.format = fmt
        self.valid = tuple(valid)
        super().__init__(f"Unsupported format {fmt!r}. Use one of: {', '.join(self.valid)}")


class SchemaValidationError(HymnExportError):
    """The Pro7 object graph does not satisfy the rv.data schema."""

    def __init__(self, field_path: str, reason: str) -> None:
        self.field_path = field_path
        self.reason = reason
        super().__init__(f"ProPresenter 7 validation failed at {field_path}: {reason}")
