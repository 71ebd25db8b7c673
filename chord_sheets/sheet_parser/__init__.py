"""Chord sheet tokenizer.

This module provides functionality to tokenize plain-text chord sheets line
by line into typed tokens with document offsets, and to classify each line as
a chord line or a text line.
"""

from chord_sheets.sheet_parser.models import (
    ChordSymbolRange,
    ChordToken,
    DirectionToken,
    Edit,
    EmbedToken,
    HeaderToken,
    InlineChordParts,
    InlineHeaderToken,
    QuotedToken,
    SubToken,
    Token,
    TokenizedLine,
    UserShapeParts,
)
from chord_sheets.sheet_parser.parser import (
    chord_sequence_string,
    chord_symbol_ranges,
    chord_tokens,
    section_names,
    tokenize_document,
    unique_chord_tokens,
)
from chord_sheets.sheet_parser.tokenizer import tokenize_line

__all__ = [
    "ChordSymbolRange",
    "ChordToken",
    "DirectionToken",
    "Edit",
    "EmbedToken",
    "HeaderToken",
    "InlineChordParts",
    "InlineHeaderToken",
    "QuotedToken",
    "SubToken",
    "Token",
    "TokenizedLine",
    "UserShapeParts",
    "chord_sequence_string",
    "chord_symbol_ranges",
    "chord_tokens",
    "section_names",
    "tokenize_document",
    "tokenize_line",
    "unique_chord_tokens",
]
