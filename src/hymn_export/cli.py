"""Command line entry point.

    hymn-export export '{"sections": [...]}' "Amazing Grace" --format pro7 --options @options.json
    hymn-export inspect "Amazing_Grace.pro"

JSON arguments are given inline or as ``@path/to/file.json``. Progress is
reported as ``key:value`` status lines on stdout; errors go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Optional

from google.protobuf.message import DecodeError

from .errors import HymnExportError
from .export import FORMATS, export_hymn
from .grouping import render_structure
from .options import PresentationOptions
from .pro7 import presentation_to_dict, read_presentation
from .structure import HymnStructure


def load_json_argument(value: str) -> Any:
    if value.startswith("@"):
        with open(os.path.expanduser(value[1:]), "r", encoding="utf-8") as fh:
            return json.load(fh)
    return json.loads(value)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hymn-export", description="Export hymns as presentation files.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log encoder progress to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    export = commands.add_parser("export", help="Write a presentation file for one hymn")
    export.add_argument("structure", help="Hymn structure JSON (inline or @file.json)")
    export.add_argument("title", help="Hymn title")
    export.add_argument("-f", "--format", default="text", choices=sorted(FORMATS), help="Output format (default: text)")
    export.add_argument("--options", help="Presentation options JSON (inline or @file.json)")
    export.add_argument("-o", "--output", help="Output path (default: derived from the title, in the current directory)")

    inspect = commands.add_parser("inspect", help="Dump a ProPresenter 7 .pro file as JSON")
    inspect.add_argument("pro_file", help="Path to the .pro presentation file (or bundle)")

    return parser.parse_args(argv[1:])


def run_export(args: argparse.Namespace) -> int:
    structure = HymnStructure.from_dict(load_json_argument(args.structure))
    options = PresentationOptions.from_payload(load_json_argument(args.options) if args.options else None)

    result = export_hymn(structure, args.title, args.format, options)
    target = os.path.abspath(os.path.expanduser(args.output or result.filename))
    with open(target, "wb") as fh:
        fh.write(result.as_bytes())

    print(f"hymn_export_slides:{len(render_structure(structure, args.title, options))}", flush=True)
    print(f"hymn_export_file:{target}", flush=True)
    return 0


def run_inspect(args: argparse.Namespace) -> int:
    doc = read_presentation(os.path.expanduser(args.pro_file))
    print(json.dumps(presentation_to_dict(doc), indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(sys.argv if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "inspect":
            return run_inspect(args)
        return run_export(args)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON payload: {exc}", file=sys.stderr)
    except DecodeError:
        print("ERROR: Could not parse the .pro file. Is this a Presentation document?", file=sys.stderr)
    except (HymnExportError, OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
