"""The subset of ProPresenter 7's ``rv.data`` protobuf schema we write.

ProPresenter does not publish its schema; the field numbers below follow the
community reverse-engineered ``rv.data`` definitions and only cover what a
single-text-box lyric presentation needs. Unknown fields in real files are
kept by the protobuf runtime when decoding, so reading a full document through
this subset is lossless.

The file is declared with proto2 syntax so that explicitly set zero values
(``enable = false``, zero geometry) are serialized instead of dropped, and so
that identity fields can be ``required`` and reported by path from
``FindInitializationErrors()``. The wire format is identical to the proto3
definitions ProPresenter reads.
"""

from __future__ import annotations

from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2

PACKAGE = "rv.data"
FILE_NAME = "hymn_export/rv_data_subset.proto"

_FDP = descriptor_pb2.FieldDescriptorProto
_SCALARS = {
    "double": _FDP.TYPE_DOUBLE,
    "float": _FDP.TYPE_FLOAT,
    "int32": _FDP.TYPE_INT32,
    "int64": _FDP.TYPE_INT64,
    "uint32": _FDP.TYPE_UINT32,
    "bool": _FDP.TYPE_BOOL,
    "string": _FDP.TYPE_STRING,
    "bytes": _FDP.TYPE_BYTES,
}


def _label(repeated: bool, required: bool) -> int:
    if repeated:
        return _FDP.LABEL_REPEATED
    if required:
        return _FDP.LABEL_REQUIRED
    return _FDP.LABEL_OPTIONAL


def _qualify(ref: str) -> str:
    return ref if ref.startswith(".") else f".{PACKAGE}.{ref}"


def _f(name: str, number: int, kind: str, *, repeated: bool = False, required: bool = False) -> _FDP:
    return _FDP(name=name, number=number, type=_SCALARS[kind], label=_label(repeated, required))


def _m(name: str, number: int, ref: str, *, repeated: bool = False, required: bool = False) -> _FDP:
    return _FDP(name=name, number=number, type=_FDP.TYPE_MESSAGE, type_name=_qualify(ref), label=_label(repeated, required))


def _e(name: str, number: int, ref: str) -> _FDP:
    return _FDP(name=name, number=number, type=_FDP.TYPE_ENUM, type_name=_qualify(ref), label=_FDP.LABEL_OPTIONAL)


def _enum(name: str, *values: str) -> descriptor_pb2.EnumDescriptorProto:
    enum = descriptor_pb2.EnumDescriptorProto(name=name)
    for number, value in enumerate(values):
        enum.value.add(name=value, number=number)
    return enum


def _msg(name: str, *fields: _FDP, nested: tuple = (), enums: tuple = ()) -> descriptor_pb2.DescriptorProto:
    message = descriptor_pb2.DescriptorProto(name=name)
    message.field.extend(fields)
    message.nested_type.extend(nested)
    message.enum_type.extend(enums)
    return message


def _graphics() -> descriptor_pb2.DescriptorProto:
    point = _msg("Point", _f("x", 1, "double"), _f("y", 2, "double"))
    size = _msg("Size", _f("width", 1, "double"), _f("height", 2, "double"))
    rect = _msg("Rect", _m("origin", 1, "Graphics.Point"), _m("size", 2, "Graphics.Size"))
    edge_insets = _msg(
        "EdgeInsets",
        _f("left", 1, "double"), _f("right", 2, "double"), _f("top", 3, "double"), _f("bottom", 4, "double"),
    )
    path = _msg(
        "Path",
        _f("closed", 1, "bool"),
        _m("points", 2, "Graphics.Path.BezierPoint", repeated=True),
        _m("shape", 3, "Graphics.Path.Shape"),
        nested=(
            _msg(
                "BezierPoint",
                _m("point", 1, "Graphics.Point"), _m("q0", 2, "Graphics.Point"), _m("q1", 3, "Graphics.Point"),
                _f("curved", 4, "bool"),
            ),
            _msg(
                "Shape",
                _e("type", 1, "Graphics.Path.Shape.Type"),
                enums=(_enum("Type", "TYPE_UNKNOWN", "TYPE_RECTANGLE", "TYPE_ELLIPSE", "TYPE_ISOSCELES_TRIANGLE"),),
            ),
        ),
    )
    fill = _msg("Fill", _f("enable", 1, "bool"), _m("color", 2, "Color"))
    stroke = _msg(
        "Stroke",
        _e("style", 1, "Graphics.Stroke.Style"),
        _f("width", 2, "double"),
        _m("color", 3, "Color"),
        _f("enable", 5, "bool"),
        enums=(_enum("Style", "STYLE_SOLID_LINE", "STYLE_SQUARE_DASH", "STYLE_SHORT_DASH", "STYLE_LONG_DASH"),),
    )
    shadow = _msg(
        "Shadow",
        _e("style", 1, "Graphics.Shadow.Style"),
        _f("angle", 2, "double"),
        _f("offset", 3, "double"),
        _f("radius", 4, "double"),
        _m("color", 5, "Color"),
        _f("opacity", 6, "double"),
        _f("enable", 7, "bool"),
        enums=(_enum("Style", "STYLE_DROP"),),
    )
    feather = _msg(
        "Feather",
        _e("style", 1, "Graphics.Feather.Style"),
        _f("radius", 2, "double"),
        _f("enable", 3, "bool"),
        enums=(_enum("Style", "STYLE_INSIDE", "STYLE_CENTER", "STYLE_OUTSIDE"),),
    )
    font = _msg(
        "Font",
        _f("name", 1, "string"), _f("size", 2, "double"), _f("italic", 3, "bool"),
        _f("bold", 8, "bool"), _f("family", 9, "string"), _f("face", 10, "string"),
    )
    paragraph = _msg(
        "Paragraph",
        _e("alignment", 1, "Graphics.Text.Attributes.Paragraph.Alignment"),
        _f("first_line_head_indent", 2, "double"),
        _f("head_indent", 3, "double"),
        _f("tail_indent", 4, "double"),
        _f("line_height_multiple", 5, "double"),
        _f("maximum_line_height", 6, "double"),
        _f("minimum_line_height", 7, "double"),
        _f("line_spacing", 8, "double"),
        _f("paragraph_spacing", 9, "double"),
        _f("paragraph_spacing_before", 10, "double"),
        _m("tab_stops", 11, "Graphics.Text.Attributes.Paragraph.TabStop", repeated=True),
        _f("default_tab_interval", 12, "double"),
        nested=(_msg("TabStop", _f("location", 1, "double"), _f("alignment", 2, "int32")),),
        enums=(_enum(
            "Alignment",
            "ALIGNMENT_LEFT", "ALIGNMENT_RIGHT", "ALIGNMENT_CENTER", "ALIGNMENT_JUSTIFIED", "ALIGNMENT_NATURAL",
        ),),
    )
    attributes = _msg(
        "Attributes",
        _m("font", 1, "Graphics.Text.Attributes.Font"),
        _e("capitalization", 2, "Graphics.Text.Attributes.Capitalization"),
        _m("paragraph_style", 8, "Graphics.Text.Attributes.Paragraph"),
        _f("kerning", 9, "double"),
        _f("stroke_width", 11, "double"),
        _m("stroke_color", 12, "Color"),
        _m("text_solid_fill", 15, "Color"),
        nested=(font, paragraph),
        enums=(_enum(
            "Capitalization",
            "CAPITALIZATION_NONE", "CAPITALIZATION_ALL_CAPS", "CAPITALIZATION_SMALL_CAPS",
            "CAPITALIZATION_TITLE_CASE", "CAPITALIZATION_START_CASE",
        ),),
    )
    chord_pro = _msg("ChordPro", _f("enabled", 1, "bool"), _f("notation", 2, "int32"), _m("color", 3, "Color"))
    text = _msg(
        "Text",
        _m("attributes", 3, "Graphics.Text.Attributes"),
        _m("shadow", 4, "Graphics.Shadow"),
        _f("rtf_data", 5, "bytes"),
        _e("vertical_alignment", 6, "Graphics.Text.VerticalAlignment"),
        _e("scale_behavior", 7, "Graphics.Text.ScaleBehavior"),
        _m("margins", 8, "Graphics.EdgeInsets"),
        _f("is_superscript_standardized", 9, "bool"),
        _f("transformDelimiter", 11, "string"),
        _m("chord_pro", 12, "Graphics.Text.ChordPro"),
        nested=(attributes, chord_pro),
        enums=(
            _enum("VerticalAlignment", "VERTICAL_ALIGNMENT_TOP", "VERTICAL_ALIGNMENT_MIDDLE", "VERTICAL_ALIGNMENT_BOTTOM"),
            _enum(
                "ScaleBehavior",
                "SCALE_BEHAVIOR_NONE", "SCALE_BEHAVIOR_SCALE_FONT_DOWN", "SCALE_BEHAVIOR_SCALE_FONT_DOWN_IN_PLACE",
                "SCALE_BEHAVIOR_SCALE_FONT_UP_DOWN", "SCALE_BEHAVIOR_ADJUST_CONTAINER_HEIGHT",
            ),
        ),
    )
    element = _msg(
        "Element",
        _m("uuid", 1, "UUID", required=True),
        _f("name", 2, "string"),
        _m("bounds", 3, "Graphics.Rect"),
        _f("rotation", 4, "double"),
        _f("opacity", 5, "double"),
        _f("locked", 6, "bool"),
        _f("aspect_ratio_locked", 7, "bool"),
        _m("path", 8, "Graphics.Path"),
        _m("fill", 9, "Graphics.Fill"),
        _m("stroke", 10, "Graphics.Stroke"),
        _m("shadow", 11, "Graphics.Shadow"),
        _m("feather", 12, "Graphics.Feather"),
        _m("text", 13, "Graphics.Text"),
        _f("hidden", 16, "bool"),
    )
    return _msg("Graphics", nested=(point, size, rect, edge_insets, path, fill, stroke, shadow, feather, text, element))


def _file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name=FILE_NAME,
        package=PACKAGE,
        syntax="proto2",
        dependency=["google/protobuf/timestamp.proto"],
    )
    proto.message_type.extend([
        _msg("UUID", _f("string", 1, "string", required=True)),
        _msg("Color", _f("red", 1, "float"), _f("green", 2, "float"), _f("blue", 3, "float"), _f("alpha", 4, "float")),
        _msg(
            "Version",
            _f("major_version", 1, "uint32"), _f("minor_version", 2, "uint32"),
            _f("patch_version", 3, "uint32"), _f("build", 4, "string"),
        ),
        _msg(
            "ApplicationInfo",
            _e("platform", 1, "ApplicationInfo.Platform"),
            _m("platform_version", 2, "Version"),
            _e("application", 3, "ApplicationInfo.Application"),
            _m("application_version", 4, "Version"),
            enums=(
                _enum("Platform", "PLATFORM_UNDEFINED", "PLATFORM_MACOS", "PLATFORM_WINDOWS"),
                _enum("Application", "APPLICATION_UNDEFINED", "APPLICATION_PROPRESENTER", "APPLICATION_PRO_REMOTE"),
            ),
        ),
        _msg(
            "URL",
            _f("absolute_string", 1, "string"),
            _e("platform", 4, "URL.Platform"),
            enums=(_enum("Platform", "PLATFORM_UNKNOWN", "PLATFORM_MACOS", "PLATFORM_WIN32", "PLATFORM_WEB"),),
        ),
        _msg("HotKey", _f("code", 1, "int32"), _f("control_identifier", 2, "string")),
        _msg(
            "Group",
            _m("uuid", 1, "UUID", required=True),
            _f("name", 2, "string"),
            _m("color", 3, "Color"),
            _m("hotKey", 4, "HotKey"),
            _m("application_group_identifier", 5, "UUID"),
            _f("application_group_name", 6, "string"),
        ),
        _graphics(),
        _msg(
            "Slide",
            _m("elements", 1, "Slide.Element", repeated=True),
            _m("element_build_order", 2, "UUID", repeated=True),
            _f("draws_background_color", 4, "bool"),
            _m("background_color", 5, "Color"),
            _m("size", 6, "Graphics.Size"),
            _m("uuid", 7, "UUID", required=True),
            nested=(
                _msg(
                    "Element",
                    _m("element", 1, "Graphics.Element", required=True),
                    _f("info", 4, "uint32"),
                    _m("text_scroller", 6, "Slide.Element.TextScroller"),
                    nested=(_msg(
                        "TextScroller",
                        _f("should_scroll", 1, "bool"), _f("scroll_rate", 2, "double"),
                        _f("should_repeat", 3, "bool"), _f("repeat_distance", 4, "double"),
                    ),),
                ),
            ),
        ),
        _msg(
            "PresentationSlide",
            _m("base_slide", 1, "Slide", required=True),
            _m("chord_chart", 4, "URL"),
        ),
        _msg(
            "Action",
            _m("uuid", 1, "UUID", required=True),
            _f("name", 2, "string"),
            _f("delay_time", 4, "double"),
            _f("isEnabled", 6, "bool"),
            _m("layer_identification", 7, "Action.LayerIdentification"),
            _f("duration", 8, "double"),
            _e("type", 9, "Action.ActionType"),
            _m("slide", 16, "Action.SlideType"),
            nested=(
                _msg("LayerIdentification", _m("uuid", 1, "UUID"), _f("name", 2, "string")),
                _msg("SlideType", _m("presentation", 2, "PresentationSlide")),
            ),
            enums=(_enum(
                "ActionType",
                "ACTION_TYPE_UNKNOWN", "ACTION_TYPE_STAGE_LAYOUT", "ACTION_TYPE_MEDIA", "ACTION_TYPE_TIMER",
                "ACTION_TYPE_COMMUNICATION", "ACTION_TYPE_CLEAR", "ACTION_TYPE_PROP", "ACTION_TYPE_MASK",
                "ACTION_TYPE_MESSAGE", "ACTION_TYPE_SOCIAL_MEDIA", "ACTION_TYPE_MULTISCREEN",
                "ACTION_TYPE_PRESENTATION_SLIDE",
            ),),
        ),
        _msg(
            "Cue",
            _m("uuid", 1, "UUID", required=True),
            _f("name", 2, "string"),
            _e("completion_action_type", 5, "Cue.CompletionActionType"),
            _m("hot_key", 8, "HotKey"),
            _m("actions", 10, "Action", repeated=True),
            _f("isEnabled", 12, "bool"),
            enums=(_enum(
                "CompletionActionType",
                "COMPLETION_ACTION_TYPE_FIRST", "COMPLETION_ACTION_TYPE_LAST", "COMPLETION_ACTION_TYPE_AFTER_ACTION",
                "COMPLETION_ACTION_TYPE_AFTER_TIME",
            ),),
        ),
        _msg(
            "Presentation",
            _m("application_info", 1, "ApplicationInfo"),
            _m("uuid", 2, "UUID", required=True),
            _f("name", 3, "string"),
            _m("last_date_used", 4, ".google.protobuf.Timestamp"),
            _m("last_modified_date", 5, ".google.protobuf.Timestamp"),
            _f("category", 6, "string"),
            _f("notes", 7, "string"),
            _m("chord_chart", 9, "URL"),
            _m("cue_groups", 12, "Presentation.CueGroup", repeated=True),
            _m("cues", 13, "Cue", repeated=True),
            _m("ccli", 14, "Presentation.CCLI"),
            nested=(
                _msg(
                    "CCLI",
                    _f("author", 1, "string"),
                    _f("artist_credits", 2, "string"),
                    _f("song_title", 3, "string"),
                    _f("publisher", 4, "string"),
                    _f("copyright_year", 5, "uint32"),
                    _f("song_number", 6, "uint32"),
                    _f("display", 7, "bool"),
                    _f("album", 8, "string"),
                    _f("artwork", 9, "bytes"),
                ),
                _msg(
                    "CueGroup",
                    _m("group", 1, "Group", required=True),
                    _m("cue_identifiers", 2, "UUID", repeated=True),
                ),
            ),
        ),
    ])
    return proto


_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(timestamp_pb2.DESCRIPTOR.serialized_pb)
_POOL.AddSerializedFile(_file().SerializeToString())


def message_class(name: str) -> Any:
    """Message class for ``rv.data.<name>``."""
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(f"{PACKAGE}.{name}"))


def enum_value(message: Any, name: str) -> int:
    """Number of an enum value declared on ``message``'s type, e.g. ``ACTION_TYPE_PRESENTATION_SLIDE``."""
    return message.DESCRIPTOR.enum_values_by_name[name].number


Presentation = message_class("Presentation")
