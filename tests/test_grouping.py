"""Tests for display text and section grouping."""

import pytest

from hymn_export.colors import NEUTRAL_GROUP_COLOR, TITLE_GROUP_COLOR, VERSE_GROUP_PALETTE
from hymn_export.errors import HymnStructureError
from hymn_export.grouping import RenderedSlide, group_name, group_slides, render_structure, section_key
from hymn_export.options import PresentationOptions
from hymn_export.structure import HymnStructure


def _verses(count):
    return HymnStructure.from_dict({
        "sections": [{"type": "verse", "number": n, "lines": [{"text": f"verse {n}"}]} for n in range(1, count + 1)]
    })


class TestRender:
    """Tests for rendered slide text."""

    def test_title_slide_first(self, hymn):
        rendered = render_structure(hymn, "Amazing Grace", PresentationOptions())
        assert rendered[0] == RenderedSlide(("Amazing Grace",), "title", is_title=True)
        assert len(rendered) == 6
        assert [slide.group_key for slide in rendered] == ["title", "verse-1", "verse-1", "chorus", "verse-2", "chorus"]

    def test_without_title_slide(self, hymn):
        rendered = render_structure(hymn, "Amazing Grace", PresentationOptions(include_title_slide=False))
        assert len(rendered) == 5
        assert not any(slide.is_title for slide in rendered)

    def test_verse_numbers_prefix_first_slide_only(self, hymn):
        options = PresentationOptions(include_verse_numbers=True, include_title_slide=False)
        rendered = render_structure(hymn, "Amazing Grace", options)
        assert rendered[0].lines[0] == "1 Amazing grace! how sweet the sound,"
        assert rendered[1].lines[0] == "I once was lost, but now am found,"
        assert rendered[2].lines[0] == "Refrain: Blessed assurance, Jesus is mine!"
        assert rendered[3].lines[0] == "2 'Twas grace that taught my heart to fear,"
        # the repeated chorus is not labelled again
        assert rendered[4].lines[0] == "Blessed assurance, Jesus is mine!"

    def test_single_prefix_per_section_key(self, hymn):
        options = PresentationOptions(include_verse_numbers=True, lines_per_slide=1)
        rendered = render_structure(hymn, "Amazing Grace", options)
        prefixed = [s for s in rendered if s.lines[0].startswith(("1 ", "2 ", "Refrain: "))]
        assert [s.group_key for s in prefixed] == ["verse-1", "chorus", "verse-2"]

    def test_stripping_keeps_refrain_colon(self, hymn):
        options = PresentationOptions(include_verse_numbers=True, strip_punctuation=True, include_title_slide=False)
        rendered = render_structure(hymn, "Amazing Grace", options)
        assert rendered[0].lines == ("1 Amazing grace how sweet the sound", "That saved a wretch like me")
        assert rendered[2].lines[0] == "Refrain: Blessed assurance Jesus is mine"

    def test_bridge_never_prefixed(self):
        structure = HymnStructure.from_dict({"sections": [{"type": "bridge", "lines": [{"text": "over the hills"}]}]})
        options = PresentationOptions(include_verse_numbers=True, include_title_slide=False)
        assert render_structure(structure, "T", options)[0].lines == ("over the hills",)

    def test_title_is_not_stripped(self, hymn):
        options = PresentationOptions(strip_punctuation=True)
        assert render_structure(hymn, "Grace, Greater!", options)[0].lines == ("Grace, Greater!",)

    def test_prefix_on_line_emptied_by_stripping(self):
        structure = HymnStructure.from_dict({"sections": [
            {"type": "verse", "number": 1, "lines": [{"text": "—"}, {"text": "Come, thou fount"}]},
            {"type": "chorus", "lines": [{"text": "!"}]},
        ]})
        options = PresentationOptions(include_verse_numbers=True, strip_punctuation=True, include_title_slide=False)
        rendered = render_structure(structure, "T", options)
        assert rendered[0].lines == ("1", "Come thou fount")
        assert rendered[1].lines == ("Refrain:",)

    def test_title_with_control_character(self, hymn):
        with pytest.raises(HymnStructureError) as exc:
            render_structure(hymn, "Title\x0bwith tab", PresentationOptions())
        assert exc.value.path == "title"


class TestGroups:
    """Tests for section groups."""

    def test_names_and_first_appearance_order(self, hymn):
        groups = group_slides(render_structure(hymn, "Amazing Grace", PresentationOptions()))
        assert [g.name for g in groups] == ["Intro", "Verse 1", "Refrain", "Verse 2"]
        assert [g.slide_indices for g in groups] == [[0], [1, 2], [3, 5], [4]]

    def test_colors(self, hymn):
        groups = group_slides(render_structure(hymn, "Amazing Grace", PresentationOptions()))
        assert groups[0].color == TITLE_GROUP_COLOR
        assert groups[1].color == VERSE_GROUP_PALETTE[0]
        assert groups[2].color == NEUTRAL_GROUP_COLOR
        assert groups[3].color == VERSE_GROUP_PALETTE[1]

    def test_verse_palette_cycles(self):
        rendered = render_structure(_verses(7), "T", PresentationOptions(include_title_slide=False))
        colors = [g.color for g in group_slides(rendered)]
        assert colors[5] == VERSE_GROUP_PALETTE[0]
        assert colors[6] == VERSE_GROUP_PALETTE[1]

    def test_palette_index_is_per_call(self):
        rendered = render_structure(_verses(2), "T", PresentationOptions(include_title_slide=False))
        first = [g.color for g in group_slides(rendered)]
        second = [g.color for g in group_slides(rendered)]
        assert first == second

    def test_keys_and_names(self):
        assert section_key("verse", 3) == "verse-3"
        assert section_key("chorus", None) == "chorus"
        assert group_name("verse-3") == "Verse 3"
        assert group_name("chorus") == "Refrain"
        assert group_name("bridge") == "Bridge"
        assert group_name("other") == "Other"
        assert group_name("title") == "Intro"
