#!/usr/bin/env python3
"""CLI tool to tokenize chord sheets, transpose them and look up diagrams.

Usage:
    python examples/tokenize_sheet.py <input_file> [-o output_file]

Examples:
    python examples/tokenize_sheet.py song.txt --pretty
    python examples/tokenize_sheet.py song.txt --transpose up
    python examples/tokenize_sheet.py song.txt --chords-db guitar.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chord_sheets import (
    SheetSettings,
    apply_edits,
    chord_symbol_ranges,
    enharmonic_toggle,
    find_shape,
    load_instrument_chords,
    tokenize_document,
    transpose,
)
from chord_sheets.diagrams import InstrumentChords
from chord_sheets.sheet_parser import chord_tokens, section_names, unique_chord_tokens
from chord_sheets.sheet_parser.serialize import document_to_dict

logger = logging.getLogger(__name__)


def diagrams_to_dict(text: str, database: InstrumentChords, settings: SheetSettings) -> list[dict[str, Any]]:
    """Look up a shape for each distinct chord of a sheet."""
    result = []
    for token in unique_chord_tokens(chord_tokens(tokenize_document(text, settings))):
        chord = token.chord
        if chord.user_shape is not None:
            result.append({"text": token.text, "frets": chord.user_shape.frets, "position": chord.user_shape.position})
            continue
        shape = find_shape(chord, database)
        if shape is None:
            logger.info("No diagram for %s", token.text)
        result.append({
            "text": token.text,
            "frets": shape.frets if shape else None,
            "position": shape.base_fret if shape else None,
        })
    return result


def tokenize_sheet_file(input_path: Path, settings: SheetSettings, database: InstrumentChords | None) -> dict[str, Any]:
    """Tokenize a sheet file and return JSON-serializable data."""
    text = input_path.read_text(encoding="utf-8")
    lines = tokenize_document(text, settings)
    data = document_to_dict(lines)
    data["sections"] = section_names(lines)
    if database is not None:
        data["diagrams"] = diagrams_to_dict(text, database, settings)
    return data


def rewrite_sheet_file(input_path: Path, settings: SheetSettings, direction: str | None) -> str:
    """Transpose or respell the chords of a sheet file."""
    text = input_path.read_text(encoding="utf-8")
    ranges = chord_symbol_ranges(tokenize_document(text, settings))
    edits = transpose(ranges, direction) if direction else enharmonic_toggle(ranges)  # type: ignore[arg-type]
    logger.info("Rewriting %d of %d chords", len(edits), len(ranges))
    return apply_edits(text, edits)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Tokenize a chord sheet and export to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s song.txt
  %(prog)s song.txt -o tokens.json --pretty
  %(prog)s song.txt --transpose down
  %(prog)s song.txt --enharmonic
        """,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input chord sheet",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="JSON file with sheet settings (e.g. chordLineMarker)",
    )
    parser.add_argument(
        "--chords-db",
        type=Path,
        default=None,
        help="chords-db instrument JSON file to look up diagrams in",
    )
    rewrite = parser.add_mutually_exclusive_group()
    rewrite.add_argument(
        "--transpose",
        choices=["up", "down"],
        default=None,
        help="Print the sheet transposed one semitone instead of tokens",
    )
    rewrite.add_argument(
        "--enharmonic",
        action="store_true",
        help="Print the sheet with chords respelled instead of tokens",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log line classification details",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        settings = SheetSettings()
        if args.settings:
            settings = SheetSettings.from_dict(json.loads(args.settings.read_text(encoding="utf-8")))
        database = load_instrument_chords(args.chords_db) if args.chords_db else None

        if args.transpose or args.enharmonic:
            output = rewrite_sheet_file(args.input, settings, args.transpose)
        else:
            data = tokenize_sheet_file(args.input, settings, database)
            indent = 2 if args.pretty else None
            output = json.dumps(data, indent=indent, ensure_ascii=False)
    except (OSError, ValueError) as e:
        print(f"Error processing file: {e}", file=sys.stderr)
        return 1

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
