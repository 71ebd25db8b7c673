"""Pitch spelling operations for chord symbols.

Pitch values come from pychord's note table; this module only decides how a
pitch class is spelled (sharps, flats or naturals).
"""

from __future__ import annotations

import re
from typing import Literal

from pychord.utils import note_to_val

Direction = Literal["up", "down"]

# Pitch class (0-11, C=0) to name, sharp and flat spellings
SHARP_NAMES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NAMES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

LETTERS = "CDEFGAB"

# Note letter with an optional accidental, as pychord reads roots
NOTE_RE = re.compile(r"[A-G][#b]?")


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("Bb")
    10
    """
    if not NOTE_RE.fullmatch(note):
        msg = f"Unknown note: {note}"
        raise ValueError(msg)
    return note_to_val(note) % 12


def is_flat(note: str) -> bool:
    """Return True if the note is spelled with a flat."""
    return note[1:].startswith("b")


def is_sharp(note: str) -> bool:
    """Return True if the note is spelled with a sharp."""
    return note[1:].startswith("#")


def enharmonic(note: str) -> str:
    """Respell a note with its enharmonic equivalent.

    Flats take the sharp name, everything else takes the flat name, so
    natural notes stay natural and E#/B# collapse to F/C.

    Examples
    --------
    >>> enharmonic("C#")
    'Db'
    >>> enharmonic("Db")
    'C#'
    >>> enharmonic("E")
    'E'
    """
    pc = note_to_pc(note)
    return SHARP_NAMES[pc] if is_flat(note) else FLAT_NAMES[pc]


def simplify(note: str) -> str:
    """Respell a note with the simplest name that keeps its accidental direction.

    Examples
    --------
    >>> simplify("F#")
    'F#'
    >>> simplify("Db")
    'Db'
    """
    pc = note_to_pc(note)
    return SHARP_NAMES[pc] if is_sharp(note) else FLAT_NAMES[pc]


def _minor_second(note: str, step: int) -> tuple[int, int]:
    """Step a note a minor second onto the neighbouring letter.

    Returns the pitch class of the result and the accidental (in semitones,
    positive for sharps) needed to spell it on that letter.
    """
    pc = note_to_pc(note)
    letter = LETTERS[(LETTERS.index(note[0]) + step) % len(LETTERS)]
    target = (pc + step) % 12
    alteration = (target - note_to_pc(letter) + 6) % 12 - 6
    return target, alteration


def transpose_note(note: str, direction: Direction) -> str:
    """Move a note one semitone.

    The note moves a minor second onto the next letter up or down. Going up,
    the result takes its enharmonic spelling, so it prefers sharps; going
    down, it takes its simplified spelling, so naturals fall to sharps and
    altered notes fall to naturals. Transposing up and back down returns
    naturals and sharps unchanged.

    Parameters
    ----------
    note : str
        Note name.
    direction : {"up", "down"}
        Transposition direction.

    Returns
    -------
    str
        The transposed note.

    Raises
    ------
    ValueError
        If the note is unknown or the direction is invalid.

    Examples
    --------
    >>> transpose_note("C", "up")
    'C#'
    >>> transpose_note("C", "down")
    'B'
    >>> transpose_note("D", "down")
    'C#'
    >>> transpose_note("Eb", "down")
    'D'
    """
    if direction == "up":
        pc, alteration = _minor_second(note, 1)
        return SHARP_NAMES[pc] if alteration < 0 else FLAT_NAMES[pc]
    if direction == "down":
        pc, alteration = _minor_second(note, -1)
        return SHARP_NAMES[pc] if alteration > 0 else FLAT_NAMES[pc]
    msg = f"Unknown transposition direction: {direction}"
    raise ValueError(msg)
