"""Document-level chord sheet tokenization.

This module feeds the lines of a document to the line tokenizer with a
running offset and extracts the chord occurrences the transposer and the
diagram resolver work on.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from chord_sheets.settings import SheetSettings
from chord_sheets.sheet_parser.models import (
    ChordSymbolRange,
    ChordToken,
    HeaderToken,
    Token,
    TokenizedLine,
)
from chord_sheets.sheet_parser.tokenizer import tokenize_line


def preprocess(text: str) -> list[str]:
    """Split a document into lines.

    Normalizes line endings and keeps line content as is.

    Parameters
    ----------
    text : str
        The raw document.

    Returns
    -------
    list[str]
        Lines without their newline characters.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.split("\n")


def tokenize_document(text: str, settings: SheetSettings | None = None) -> list[TokenizedLine]:
    """Tokenize every line of a chord sheet.

    Token offsets are offsets into the document after line ending
    normalization, each line break counting as one character.

    Parameters
    ----------
    text : str
        The chord sheet.
    settings : SheetSettings | None
        Settings providing the line markers; defaults when None.

    Returns
    -------
    list[TokenizedLine]
        One entry per line.

    Examples
    --------
    >>> lines = tokenize_document("[Verse]\\nAm  C\\nHello world")
    >>> [line.is_chord_line for line in lines]
    [False, True, False]
    >>> lines[1].tokens[0].start
    8
    """
    if settings is None:
        settings = SheetSettings()

    result: list[TokenizedLine] = []
    offset = 0
    for line in preprocess(text):
        result.append(
            tokenize_line(line, offset, settings.chord_line_marker, settings.text_line_marker)
        )
        offset += len(line) + 1
    return result


def chord_tokens(lines: Iterable[TokenizedLine]) -> list[ChordToken]:
    """Return all chord tokens of the given lines, in document order."""
    return [token for line in lines for token in line.tokens if isinstance(token, ChordToken)]


def chord_symbol_ranges(lines: Iterable[TokenizedLine]) -> list[ChordSymbolRange]:
    """Locate the chord symbols of the given lines.

    The ranges cover the chord symbol only, not the brackets of inline chords
    or the shape of user-defined chords, so they can be handed to the
    transposer directly.

    Parameters
    ----------
    lines : Iterable[TokenizedLine]
        Tokenized lines.

    Returns
    -------
    list[ChordSymbolRange]
        One range per chord token, with document-global offsets.
    """
    ranges: list[ChordSymbolRange] = []
    for token in chord_tokens(lines):
        start, end = token.symbol_range
        ranges.append(
            ChordSymbolRange(start=start, end=end, chord_symbol=token.chord_symbol.text, chord=token.chord)
        )
    return ranges


def unique_chord_tokens(tokens: Iterable[ChordToken]) -> list[ChordToken]:
    """Keep the first chord token for each distinct token text."""
    seen: set[str] = set()
    unique: list[ChordToken] = []
    for token in tokens:
        if token.text not in seen:
            seen.add(token.text)
            unique.append(token)
    return unique


def chord_sequence_string(tokens: Iterable[Token]) -> str:
    """Serialize the token texts as a JSON list.

    Two chord sequences are the same iff their strings are equal, which lets
    a renderer skip rebuilding a chord overview that did not change.

    Examples
    --------
    >>> chord_sequence_string([])
    '[]'
    """
    return json.dumps([token.text for token in tokens], ensure_ascii=False)


def section_names(lines: Iterable[TokenizedLine]) -> list[str]:
    """Return the names of all section headers, in document order."""
    return [token.name for line in lines for token in line.tokens if isinstance(token, HeaderToken)]
