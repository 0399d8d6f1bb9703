"""Identifier and clock defaults. Encoders take both as arguments so tests can pin them."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_uuid() -> str:
    return str(uuid.uuid4()).upper()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
