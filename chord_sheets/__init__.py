"""Chord sheet parsing and chord operations.

This library tokenizes plain-text chord sheets (lyrics mixed with chord
symbols, section headers and rhythm notation), and transposes, respells and
looks up fretboard diagrams for the chords it finds.

Examples
--------
>>> from chord_sheets import parse_chord, tokenize_line

>>> # Parse a chord symbol
>>> chord = parse_chord("Am7/G")
>>> chord.tonic, chord.quality, chord.bass
('A', 'minor seventh', 'G')

>>> # Tokenize a line of a sheet
>>> line = tokenize_line("Am G F C")
>>> line.is_chord_line
True

>>> # Transpose the chords of a document
>>> from chord_sheets import apply_edits, chord_symbol_ranges, tokenize_document, transpose
>>> text = "Am G"
>>> apply_edits(text, transpose(chord_symbol_ranges(tokenize_document(text)), "down"))
'G#m F#'
"""

from chord_sheets.diagrams import (
    FretShape,
    InstrumentChords,
    find_shape,
    load_instrument_chords,
    tonic_variations,
)
from chord_sheets.models import Chord, UserShape
from chord_sheets.settings import SheetSettings
from chord_sheets.sheet_parser import (
    chord_symbol_ranges,
    tokenize_document,
    tokenize_line,
)
from chord_sheets.symbols import is_chord, parse_chord, quality_aliases
from chord_sheets.transposer import apply_edits, enharmonic_toggle, transpose

__all__ = [
    "Chord",
    "FretShape",
    "InstrumentChords",
    "SheetSettings",
    "UserShape",
    "apply_edits",
    "chord_symbol_ranges",
    "enharmonic_toggle",
    "find_shape",
    "is_chord",
    "load_instrument_chords",
    "parse_chord",
    "quality_aliases",
    "tokenize_document",
    "tokenize_line",
    "tonic_variations",
    "transpose",
]
