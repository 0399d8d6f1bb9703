"""Tests for the ProPresenter 7 protobuf encoder."""

import io
import os
import zipfile

import pytest

from hymn_export.colors import Color, VERSE_GROUP_PALETTE
from hymn_export.errors import SchemaValidationError
from hymn_export.options import PresentationOptions
from hymn_export.pro7 import (
    build_presentation,
    decode_pro7,
    encode_pro7,
    presentation_to_dict,
    read_presentation,
    slide_texts,
    validate_presentation,
)
from hymn_export.pro7_schema import enum_value

from conftest import FIXED_NOW


def _encode(hymn, counter_uuid, fixed_now, **options):
    return encode_pro7(hymn, "Amazing Grace", PresentationOptions(**options), new_uuid=counter_uuid(), now=fixed_now)


class TestEncodeDecode:
    """Encoded documents decode through the same schema."""

    def test_round_trip_slide_count_and_text(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now))
        assert doc.name == "Amazing Grace"
        assert len(doc.cues) == 6

        texts = list(slide_texts(doc))
        assert len(texts) == 6
        assert b"Amazing Grace}" in texts[0]
        assert b"Amazing grace! how sweet the sound,\\\nThat saved a wretch like me!}" in texts[1]
        assert b"I once was lost, but now am found,}" in texts[2]
        assert texts[3] == texts[5]

    def test_cues_in_input_order_and_groups(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now))
        assert [g.group.name for g in doc.cue_groups] == ["Intro", "Verse 1", "Refrain", "Verse 2"]

        cue_ids = [cue.uuid.string for cue in doc.cues]
        refrain = doc.cue_groups[2]
        assert [ident.string for ident in refrain.cue_identifiers] == [cue_ids[3], cue_ids[5]]
        assert [cue.actions[0].name for cue in doc.cues] == ["Intro", "Verse 1", "Verse 1", "Refrain", "Verse 2", "Refrain"]

    def test_action_is_presentation_slide(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now))
        action = doc.cues[1].actions[0]
        assert action.type == enum_value(action, "ACTION_TYPE_PRESENTATION_SLIDE")
        base = action.slide.presentation.base_slide
        assert base.size.width == 1920
        assert base.size.height == 1080
        element = base.elements[0].element
        assert (element.bounds.origin.x, element.bounds.origin.y) == (100, 100)
        assert (element.bounds.size.width, element.bounds.size.height) == (1720, 880)

    def test_metadata(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(
            hymn, counter_uuid, fixed_now, author="John Newton", publisher="Public Domain",
            ccli_number="22025", copyright_year=1779,
        ))
        assert doc.category == "Hymn"
        assert doc.ccli.author == "John Newton"
        assert doc.ccli.song_title == "Amazing Grace"
        assert doc.ccli.publisher == "Public Domain"
        assert doc.ccli.song_number == 22025
        assert doc.ccli.copyright_year == 1779
        assert doc.last_date_used.seconds == int(FIXED_NOW.timestamp())
        assert doc.application_info.application_version.major_version == 7

    def test_deterministic(self, hymn, counter_uuid, fixed_now):
        assert _encode(hymn, counter_uuid, fixed_now) == _encode(hymn, counter_uuid, fixed_now)

    def test_fresh_uuids_by_default(self, hymn):
        first = decode_pro7(encode_pro7(hymn, "Amazing Grace"))
        second = decode_pro7(encode_pro7(hymn, "Amazing Grace"))
        assert first.uuid.string != second.uuid.string
        assert first.uuid.string == first.uuid.string.upper()


class TestStyling:
    """Colours and text attributes survive the round trip."""

    def test_colors(self, hymn, counter_uuid, fixed_now):
        background = Color(0.1, 0.2, 0.3)
        text = Color(0.9, 0.8, 0.7, 1.0)
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now, background_color=background, text_color=text))
        base = doc.cues[1].actions[0].slide.presentation.base_slide
        assert base.draws_background_color is True
        got = base.background_color
        assert (got.red, got.green, got.blue, got.alpha) == pytest.approx((0.1, 0.2, 0.3, 1.0), abs=1e-6)
        fill = base.elements[0].element.text.attributes.text_solid_fill
        assert (fill.red, fill.green, fill.blue) == pytest.approx((0.9, 0.8, 0.7), abs=1e-6)
        verse_color = doc.cue_groups[1].group.color
        assert verse_color.blue == pytest.approx(VERSE_GROUP_PALETTE[0].blue, abs=1e-6)

    def test_title_font(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now, font_family="Georgia"))
        title_font = doc.cues[0].actions[0].slide.presentation.base_slide.elements[0].element.text.attributes.font
        body_font = doc.cues[1].actions[0].slide.presentation.base_slide.elements[0].element.text.attributes.font
        assert (title_font.name, title_font.size, title_font.bold) == ("Georgia", 160, True)
        assert (body_font.name, body_font.size, body_font.bold) == ("Georgia", 140, False)

    def test_title_size_is_fixed(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now, font_size=100))
        title = doc.cues[0].actions[0].slide.presentation.base_slide.elements[0].element.text
        body = doc.cues[1].actions[0].slide.presentation.base_slide.elements[0].element.text
        assert title.attributes.font.size == 160
        assert b"\\b\\fs320 " in title.rtf_data
        assert body.attributes.font.size == 100
        assert b"\\fs200 " in body.rtf_data

    def test_disabled_effects_are_written(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now))
        element = doc.cues[1].actions[0].slide.presentation.base_slide.elements[0].element
        assert element.HasField("shadow")
        assert element.shadow.HasField("enable")
        assert element.shadow.enable is False
        assert element.stroke.enable is False

    def test_shadow_and_outline(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now, include_shadow=True, include_outline=True))
        element = doc.cues[1].actions[0].slide.presentation.base_slide.elements[0].element
        assert element.shadow.enable is True
        assert element.shadow.angle == 315
        assert element.shadow.offset == 5
        assert element.shadow.opacity == 0.75
        assert element.stroke.enable is True
        assert element.stroke.width == 3
        assert b"\\strokec3" in element.text.rtf_data


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    """Tests for the pre-serialization checks."""

    def test_valid_document(self, hymn, counter_uuid, fixed_now):
        doc = build_presentation(hymn, "Amazing Grace", new_uuid=counter_uuid(), now=fixed_now)
        validate_presentation(doc)

    def test_missing_required_uuid(self, hymn, counter_uuid, fixed_now):
        doc = build_presentation(hymn, "Amazing Grace", new_uuid=counter_uuid(), now=fixed_now)
        doc.cues[0].uuid.ClearField("string")
        with pytest.raises(SchemaValidationError) as exc:
            validate_presentation(doc)
        assert exc.value.field_path.startswith("cues[0].uuid")

    def test_color_out_of_range(self, hymn, counter_uuid, fixed_now):
        doc = build_presentation(hymn, "Amazing Grace", new_uuid=counter_uuid(), now=fixed_now)
        doc.cue_groups[1].group.color.red = 2.0
        with pytest.raises(SchemaValidationError) as exc:
            validate_presentation(doc)
        assert exc.value.field_path == "cue_groups[1].group.color.red"

    def test_duplicate_cue_ids(self, hymn, fixed_now):
        with pytest.raises(SchemaValidationError) as exc:
            build_presentation(hymn, "Amazing Grace", new_uuid=lambda: "SAME", now=fixed_now)
        assert exc.value.field_path == "cues[1].uuid.string"

    def test_empty_cue_id(self, hymn, counter_uuid, fixed_now):
        doc = build_presentation(hymn, "Amazing Grace", new_uuid=counter_uuid(), now=fixed_now)
        doc.cues[2].uuid.string = ""
        with pytest.raises(SchemaValidationError) as exc:
            validate_presentation(doc)
        assert exc.value.field_path == "cues[2].uuid.string"

    def test_dangling_group_reference(self, hymn, counter_uuid, fixed_now):
        doc = build_presentation(hymn, "Amazing Grace", new_uuid=counter_uuid(), now=fixed_now)
        doc.cue_groups[0].cue_identifiers.add().string = "MISSING"
        with pytest.raises(SchemaValidationError) as exc:
            validate_presentation(doc)
        assert exc.value.field_path == "cue_groups[0].cue_identifiers[1].string"


class TestReading:
    """Tests for reading .pro files back for inspection."""

    def test_read_plain_file(self, tmp_path, hymn, counter_uuid, fixed_now):
        path = tmp_path / "Amazing_Grace.pro"
        path.write_bytes(_encode(hymn, counter_uuid, fixed_now))
        assert len(read_presentation(str(path)).cues) == 6

    def test_read_zip_bundle(self, tmp_path, hymn, counter_uuid, fixed_now):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            zf.writestr("Amazing_Grace.pro", _encode(hymn, counter_uuid, fixed_now))
            zf.writestr("media/readme.txt", "unused")
        path = tmp_path / "bundle.probundle"
        path.write_bytes(buffer.getvalue())
        assert read_presentation(str(path)).name == "Amazing Grace"

    def test_read_bundle_directory(self, tmp_path, hymn, counter_uuid, fixed_now):
        contents = tmp_path / "Song.proBundle" / "Contents"
        contents.mkdir(parents=True)
        (contents / "presentation.pro").write_bytes(_encode(hymn, counter_uuid, fixed_now))
        assert len(read_presentation(os.fspath(tmp_path / "Song.proBundle")).cue_groups) == 4

    def test_presentation_to_dict(self, hymn, counter_uuid, fixed_now):
        doc = decode_pro7(_encode(hymn, counter_uuid, fixed_now))
        data = presentation_to_dict(doc)
        assert data["name"] == "Amazing Grace"
        assert data["uuid"]["string"] == doc.uuid.string
        assert len(data["cues"]) == 6
        assert data["cue_groups"][1]["group"]["name"] == "Verse 1"
