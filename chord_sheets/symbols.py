"""Chord symbol parser.

This module turns a bare word such as "Gm7", "C/E" or "BbΔ7" into a Chord.
Symbols are parsed by pychord; the quality table groups pychord's quality
names by chord components so that every spelling of a quality shares one
canonical name and one alias list.
"""

from __future__ import annotations

import re

from pychord import Chord as PyChord
from pychord.constants.qualities import DEFAULT_QUALITIES

from chord_sheets.models import Chord, UserShape
from chord_sheets.pitch import NOTE_RE

# Canonical names for common qualities, keyed by the preferred pychord
# spelling. Chord databases spell some qualities out ("major", "minor").
QUALITY_NAMES: dict[str, str] = {
    "": "major",
    "m": "minor",
    "aug": "augmented",
    "dim": "diminished",
    "5": "fifth",
    "sus4": "suspended fourth",
    "sus2": "suspended second",
    "7sus4": "suspended fourth seventh",
    "6": "sixth",
    "m6": "minor sixth",
    "69": "sixth added ninth",
    "7": "dominant seventh",
    "maj7": "major seventh",
    "m7": "minor seventh",
    "m7b5": "half-diminished",
    "dim7": "diminished seventh",
    "mmaj7": "minor/major seventh",
    "7b5": "dominant seventh flat five",
    "7#5": "augmented seventh",
    "9": "dominant ninth",
    "maj9": "major ninth",
    "m9": "minor ninth",
    "add9": "added ninth",
    "madd9": "minor added ninth",
    "7b9": "dominant flat ninth",
    "7#9": "dominant sharp ninth",
    "11": "eleventh",
    "13": "dominant thirteenth",
}

# Sheet spellings pychord does not read, mapped to the pychord spelling
SPELLING_OVERLAY: dict[str, str] = {
    "M": "",
    "^": "",
    "mi": "m",
    "min": "m",
    "-": "m",
    "+": "aug",
    "°": "dim",
    "o": "dim",
    "-6": "m6",
    "6/9": "69",
    "maj": "",
    "ma7": "maj7",
    "Maj7": "maj7",
    "Δ": "maj7",
    "Δ7": "maj7",
    "^7": "maj7",
    "mi7": "m7",
    "min7": "m7",
    "-7": "m7",
    "ø": "m7b5",
    "ø7": "m7b5",
    "h7": "m7b5",
    "-7b5": "m7b5",
    "°7": "dim7",
    "o7": "dim7",
    "m/maj7": "mmaj7",
    "m/M7": "mmaj7",
    "mΔ": "mmaj7",
    "-Δ7": "mmaj7",
    "Δ9": "maj9",
    "-9": "m9",
}


def _build_chord_types() -> dict[str, tuple[str, ...]]:
    """Group pychord quality names by components and add overlay spellings."""
    groups: dict[tuple, list[str]] = {}
    for name, components in DEFAULT_QUALITIES:
        groups.setdefault(tuple(components), []).append(name)

    chord_types: dict[str, tuple[str, ...]] = {}
    canonical_of: dict[str, str] = {}
    for spellings in groups.values():
        named = [s for s in spellings if s in QUALITY_NAMES]
        preferred = named[0] if named else spellings[0]
        canonical = QUALITY_NAMES.get(preferred, preferred)
        aliases = [preferred] + [s for s in spellings if s != preferred]
        chord_types[canonical] = tuple(aliases)
        for spelling in aliases:
            canonical_of[spelling] = canonical

    for spelling, target in SPELLING_OVERLAY.items():
        canonical = canonical_of.get(target)
        if canonical is None or spelling in canonical_of:
            continue
        chord_types[canonical] += (spelling,)
        canonical_of[spelling] = canonical

    return chord_types


# Canonical quality name to accepted suffix spellings, preferred first
CHORD_TYPES: dict[str, tuple[str, ...]] = _build_chord_types()

# Reverse lookup from suffix spelling to canonical quality name
SUFFIX_TO_QUALITY: dict[str, str] = {
    alias: name for name, aliases in CHORD_TYPES.items() for alias in aliases
}

PYCHORD_NAMES: frozenset[str] = frozenset(name for name, _ in DEFAULT_QUALITIES)


def _build_pychord_spellings() -> dict[str, str]:
    """Map every accepted suffix to a pychord quality name pychord can parse.

    Names with a slash are avoided because pychord reads the slash as a bass.
    """
    spellings: dict[str, str] = {}
    for aliases in CHORD_TYPES.values():
        readable = [a for a in aliases if a in PYCHORD_NAMES and "/" not in a]
        if not readable:
            continue
        for alias in aliases:
            spellings[alias] = alias if alias in readable else readable[0]
    return spellings


# Suffix spelling to the pychord quality name used for parsing
PYCHORD_SPELLINGS: dict[str, str] = _build_pychord_spellings()

TONIC_RE = re.compile(r"^(?P<tonic>[A-G][#b]?)(?P<rest>.*)$", re.DOTALL)


def quality_aliases(quality: str) -> tuple[str, ...]:
    """Return the suffix spellings accepted for a quality.

    Parameters
    ----------
    quality : str
        Canonical quality name (e.g., "minor seventh").

    Returns
    -------
    tuple[str, ...]
        Suffix spellings, preferred first.

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> quality_aliases("minor seventh")[0]
    'm7'
    >>> quality_aliases("major seventh")[0]
    'maj7'
    """
    if quality in CHORD_TYPES:
        return CHORD_TYPES[quality]
    msg = f"Unknown chord quality: {quality}"
    raise ValueError(msg)


def split_chord_symbol(text: str) -> tuple[str, str, str | None]:
    """Split a chord symbol into tonic, suffix and bass.

    The suffix is returned as written, without checking that it names a known
    quality. A slash only introduces a bass when the text after the last
    slash is a note, so "C6/9" has no bass.

    Parameters
    ----------
    text : str
        The chord symbol.

    Returns
    -------
    tuple[str, str, str | None]
        ``(tonic, suffix, bass)``; the tonic is empty if the text does not
        start with a note.

    Examples
    --------
    >>> split_chord_symbol("Am7/G")
    ('A', 'm7', 'G')
    >>> split_chord_symbol("C6/9")
    ('C', '6/9', None)
    >>> split_chord_symbol("Hello")
    ('', 'Hello', None)
    """
    match = TONIC_RE.match(text)
    if not match:
        return "", text, None

    tonic = match.group("tonic")
    rest = match.group("rest")

    head, slash, tail = rest.rpartition("/")
    if slash and NOTE_RE.fullmatch(tail):
        return tonic, head, tail
    return tonic, rest, None


def parse_chord(text: str) -> Chord | None:
    """Parse a chord symbol into a Chord object.

    Parameters
    ----------
    text : str
        The word to interpret (e.g., "Gm7", "F#dim7/A", "Do").

    Returns
    -------
    Chord | None
        The parsed Chord, or None if the word is not a chord symbol.

    Examples
    --------
    >>> chord = parse_chord("Gm7")
    >>> chord.tonic, chord.quality
    ('G', 'minor seventh')
    >>> parse_chord("Hello") is None
    True
    """
    tonic, suffix, bass = split_chord_symbol(text)
    if not tonic:
        return None

    pychord_suffix = PYCHORD_SPELLINGS.get(suffix)
    if pychord_suffix is None:
        return None

    symbol = tonic + pychord_suffix
    if bass:
        symbol = f"{symbol}/{bass}"

    try:
        pc = PyChord(symbol)
    except (ValueError, KeyError):  # pychord rejects unknown notes and qualities
        return None

    quality = SUFFIX_TO_QUALITY.get(pc.quality.quality)
    if quality is None:
        return None

    return Chord(
        tonic=pc.root,
        quality=quality,
        quality_aliases=CHORD_TYPES[quality],
        bass=pc.on or None,
    )


def is_chord(text: str) -> bool:
    """Check if a word parses as a chord symbol.

    Examples
    --------
    >>> is_chord("C/E")
    True
    >>> is_chord("world")
    False
    """
    return parse_chord(text) is not None


def parse_user_chord(text: str, shape: UserShape) -> Chord:
    """Parse the symbol of a user-defined chord shape.

    User-defined shapes are chords whatever their symbol says, so an
    unrecognized symbol still yields a Chord, with an empty tonic.

    Parameters
    ----------
    text : str
        The chord symbol written before the shape (e.g., "Am", "C*4").
    shape : UserShape
        The fingering written in brackets.

    Returns
    -------
    Chord
        The chord carrying the user shape.
    """
    chord = parse_chord(text)
    if chord is None:
        return Chord(tonic="", quality="", user_shape=shape)
    return Chord(
        tonic=chord.tonic,
        quality=chord.quality,
        quality_aliases=chord.quality_aliases,
        bass=chord.bass,
        user_shape=shape,
    )
