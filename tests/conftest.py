"""Shared fixtures: a small hymn and deterministic identifier/clock sources."""

from datetime import datetime, timezone

import pytest

from hymn_export.structure import HymnStructure

FIXED_NOW = datetime(2024, 3, 1, 12, 30, 45, 123000, tzinfo=timezone.utc)


def _lines(*texts):
    return [{"text": text, "originalIndex": idx} for idx, text in enumerate(texts)]


@pytest.fixture
def hymn_payload():
    """Verse 1, chorus, verse 2, chorus."""
    chorus = _lines("Blessed assurance, Jesus is mine!", "O what a foretaste of glory divine!")
    return {
        "sections": [
            {"type": "verse", "number": 1, "lines": _lines(
                "Amazing grace! how sweet the sound,",
                "That saved a wretch like me!",
                "I once was lost, but now am found,",
            )},
            {"type": "chorus", "lines": chorus},
            {"type": "verse", "number": 2, "lines": _lines(
                "'Twas grace that taught my heart to fear,",
                "And grace my fears relieved;",
            )},
            {"type": "chorus", "lines": chorus},
        ]
    }


@pytest.fixture
def hymn(hymn_payload):
    return HymnStructure.from_dict(hymn_payload)


@pytest.fixture
def counter_uuid():
    """Returns a factory producing sequential upper-case UUID strings."""

    def factory():
        state = {"n": 0}

        def new_uuid():
            state["n"] += 1
            return f"00000000-0000-4000-8000-{state['n']:012X}"

        return new_uuid

    return factory


@pytest.fixture
def fixed_now():
    return lambda: FIXED_NOW
