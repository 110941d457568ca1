"""Command-line front door for llindex.

Parses CLI options, loads the ``.ll`` file, and runs one query against it.
Lines and columns are 1-based here and 0-based in the library.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_cache_max_entries, load_outline_detail_width, load_style
from .highlight import colorize_ir, read_text
from .index import SnapshotCache, Span
from .service import SymbolService

COMMANDS = ("outline", "scopes", "definition", "references", "hover")
POSITION_COMMANDS = {"definition", "references", "hover"}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _span_label(span: Span) -> str:
    return f"{span.start_line + 1}:{span.start_column + 1}-{span.end_column}"


def _span_json(span: Span) -> dict[str, int]:
    return {
        "start_line": span.start_line,
        "start_column": span.start_column,
        "end_line": span.end_line,
        "end_column": span.end_column,
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query symbols in an LLVM IR (.ll) file.")
    parser.add_argument("path", help="Path to an .ll file.")
    parser.add_argument("command", choices=COMMANDS, help="Query to run.")
    parser.add_argument("--line", type=_positive_int, default=None, help="1-based line for position queries.")
    parser.add_argument("--column", type=_positive_int, default=None, help="1-based column for position queries.")
    parser.add_argument(
        "--include-declaration",
        action="store_true",
        help="Also list the definition site for `references`.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name (default from config).")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON.")
    parser.add_argument("--verbose", action="store_true", help="Log index and cache activity to stderr.")
    return parser


def run_query(args: argparse.Namespace, text: str, document_id: str, version: int) -> str:
    """Run one query and return the text to print."""
    service = SymbolService(SnapshotCache(load_cache_max_entries()), load_outline_detail_width())
    style = args.style or load_style()
    try:
        if args.command == "outline":
            symbols = service.outline(document_id, text, version)
            if args.json:
                return json.dumps(
                    [
                        {
                            "name": symbol.name,
                            "kind": symbol.kind.value,
                            "category": symbol.category,
                            "detail": symbol.detail,
                            "range": _span_json(symbol.range),
                            "selection_range": _span_json(symbol.selection_range),
                        }
                        for symbol in symbols
                    ],
                    indent=2,
                )
            return "\n".join(
                f"{symbol.selection_range.start_line + 1:>5}  {symbol.category:9} {symbol.name}  {symbol.detail}".rstrip()
                for symbol in symbols
            )

        if args.command == "scopes":
            scopes = service.index(document_id, text, version).function_scopes
            if args.json:
                return json.dumps(
                    [
                        {"name": s.name, "start_line": s.start_line, "end_line": s.end_line, "closed": s.closed}
                        for s in scopes
                    ],
                    indent=2,
                )
            return "\n".join(
                f"{s.name} {s.start_line + 1}-{s.end_line + 1}" + ("" if s.closed else " (unclosed)") for s in scopes
            )

        line = args.line - 1
        column = args.column - 1

        if args.command == "definition":
            definition = service.definition(document_id, text, version, line, column)
            if definition is None:
                raise SystemExit("No definition found.")
            if args.json:
                return json.dumps(
                    {
                        "name": definition.name,
                        "kind": definition.kind.value,
                        "function": definition.function_name,
                        "detail": definition.detail,
                        "selection_range": _span_json(definition.selection_range),
                    },
                    indent=2,
                )
            location = f"{document_id}:{_span_label(definition.selection_range)}"
            return location + "\n" + colorize_ir(definition.detail or definition.name, style, args.no_color)

        if args.command == "references":
            spans = service.references(document_id, text, version, line, column, args.include_declaration)
            if args.json:
                return json.dumps([_span_json(span) for span in spans], indent=2)
            return "\n".join(_span_label(span) for span in spans)

        info = service.hover(document_id, text, version, line, column)
        if info is None:
            raise SystemExit("Nothing to describe at this position.")
        if args.json:
            return json.dumps(
                {
                    "kind": info.kind_label,
                    "code": info.code,
                    "definition_line": info.definition_line,
                    "function": info.function_name,
                    "range": _span_json(info.range),
                },
                indent=2,
            )
        return "\n".join(
            [info.kind_label, colorize_ir(info.code, style, args.no_color), info.location_text()]
        )
    finally:
        service.shutdown()


def main() -> None:
    """Parse CLI arguments and print the answer to one symbol query."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.command in POSITION_COMMANDS and (args.line is None or args.column is None):
        parser.error(f"{args.command} requires --line and --column")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    target = path.resolve()
    text = read_text(target)
    version = target.stat().st_mtime_ns
    output = run_query(args, text, str(target), version)
    if output:
        sys.stdout.write(output + "\n")


if __name__ == "__main__":
    main()
