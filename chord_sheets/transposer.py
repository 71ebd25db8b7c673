"""Chord transposition and enharmonic respelling.

The functions here compute replacement edits for chord symbols found in a
document; they never modify text themselves. Use ``apply_edits`` to apply
the result to a string.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from chord_sheets.pitch import Direction, enharmonic, transpose_note
from chord_sheets.sheet_parser.models import ChordSymbolRange, Edit
from chord_sheets.symbols import split_chord_symbol

logger = logging.getLogger(__name__)

NoteProcessor = Callable[[str], str]

DIRECTIONS: tuple[str, ...] = ("up", "down")


def process_chords(
    chord_ranges: Iterable[ChordSymbolRange],
    process_note: NoteProcessor,
    *,
    skip_user_shapes: bool = False,
) -> list[Edit]:
    """Rewrite the tonic and bass of each chord symbol.

    Parameters
    ----------
    chord_ranges : Iterable[ChordSymbolRange]
        Chord symbols with their document-global ranges.
    process_note : NoteProcessor
        Maps a note to its replacement; raises ValueError for notes it
        cannot handle.
    skip_user_shapes : bool
        Leave chords carrying a user-defined shape untouched.

    Returns
    -------
    list[Edit]
        One edit per chord whose symbol changes, in input order. Chords
        whose symbol did not parse or whose notes cannot be processed
        produce no edit.
    """
    edits: list[Edit] = []
    for chord_range in chord_ranges:
        if skip_user_shapes and chord_range.chord.user_shape is not None:
            continue
        if not chord_range.chord.is_recognized:
            logger.debug("Skipping %r: symbol did not parse", chord_range.chord_symbol)
            continue

        tonic, suffix, bass = split_chord_symbol(chord_range.chord_symbol)
        if not tonic:
            logger.debug("Skipping %r: no tonic", chord_range.chord_symbol)
            continue

        try:
            new_symbol = process_note(tonic) + suffix
            if bass:
                new_symbol = f"{new_symbol}/{process_note(bass)}"
        except ValueError as e:
            logger.debug("Skipping %r: %s", chord_range.chord_symbol, e)
            continue

        if new_symbol != chord_range.chord_symbol:
            edits.append(Edit(start=chord_range.start, end=chord_range.end, text=new_symbol))

    return edits


def transpose(chord_ranges: Iterable[ChordSymbolRange], direction: Direction) -> list[Edit]:
    """Transpose chord symbols by one semitone.

    Going up prefers sharps; going down takes the simplest spelling of the
    step, so naturals fall to sharps and altered notes to naturals. Chords
    with a user-defined shape are skipped: their fingering does not follow
    the symbol.

    Parameters
    ----------
    chord_ranges : Iterable[ChordSymbolRange]
        Chord symbols with their document-global ranges.
    direction : {"up", "down"}
        Transposition direction.

    Returns
    -------
    list[Edit]
        Replacement edits.

    Raises
    ------
    ValueError
        If the direction is invalid.

    Examples
    --------
    >>> from chord_sheets.symbols import parse_chord
    >>> ranges = [ChordSymbolRange(0, 4, "Am/G", parse_chord("Am/G"))]
    >>> transpose(ranges, "up")
    [Edit(start=0, end=4, text='A#m/G#')]
    """
    if direction not in DIRECTIONS:
        msg = f"Unknown transposition direction: {direction}"
        raise ValueError(msg)

    return process_chords(
        chord_ranges,
        lambda note: transpose_note(note, direction),
        skip_user_shapes=True,
    )


def enharmonic_toggle(chord_ranges: Iterable[ChordSymbolRange]) -> list[Edit]:
    """Respell the tonic and bass of chord symbols enharmonically.

    Examples
    --------
    >>> from chord_sheets.symbols import parse_chord
    >>> enharmonic_toggle([ChordSymbolRange(3, 6, "C#m", parse_chord("C#m"))])
    [Edit(start=3, end=6, text='Dbm')]
    """
    return process_chords(chord_ranges, enharmonic)


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    """Apply replacement edits to a text.

    Parameters
    ----------
    text : str
        The original document.
    edits : Sequence[Edit]
        Non-overlapping edits with offsets into ``text``.

    Returns
    -------
    str
        The edited document.

    Raises
    ------
    ValueError
        If edits overlap or fall outside the text.
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            msg = f"Overlapping edits: {previous} and {current}"
            raise ValueError(msg)
    if ordered and (ordered[0].start < 0 or ordered[-1].end > len(text)):
        msg = "Edit range outside of text"
        raise ValueError(msg)

    result = text
    for edit in reversed(ordered):
        result = result[: edit.start] + edit.text + result[edit.end :]
    return result
