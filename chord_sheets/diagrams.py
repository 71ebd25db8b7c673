"""Fretboard diagram lookup.

This module matches parsed chords against a per-instrument database of
fretboard shapes, such as the guitar and ukulele databases of chords-db.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from chord_sheets.models import Chord
from chord_sheets.pitch import enharmonic, simplify

logger = logging.getLogger(__name__)

# chords-db spells sharp keys as "Csharp", "Fsharp", ...
SHARP = "#"
SHARP_WORD = "sharp"


@dataclass(frozen=True)
class FretShape:
    """A fretboard shape from a chord database.

    Parameters
    ----------
    key : str
        Tonic key the shape is filed under (e.g., "C", "Csharp", "Eb").
    suffix : str
        Quality suffix, possibly with a bass (e.g., "minor", "m7", "/E").
    frets : str
        Fret pattern, one character per string, "x" for muted strings.
    base_fret : int
        Fret the diagram starts at.
    """

    key: str
    suffix: str
    frets: str
    base_fret: int = 1


@dataclass(frozen=True)
class InstrumentChords:
    """Shape database of one instrument.

    Parameters
    ----------
    name : str
        Instrument name (e.g., "guitar").
    chords : Mapping[str, tuple[FretShape, ...]]
        Shapes by tonic key, keys in database order.
    """

    name: str
    chords: Mapping[str, tuple[FretShape, ...]]


ShapeDatabase = Union[InstrumentChords, Mapping[str, Sequence[FretShape]]]


def tonic_variations(tonic: str) -> list[str]:
    """Return the spellings under which a tonic may be filed.

    Parameters
    ----------
    tonic : str
        The chord tonic.

    Returns
    -------
    list[str]
        The tonic, its simplified and enharmonic spellings, and the first
        sharp spelling with "#" written out as "sharp".

    Examples
    --------
    >>> tonic_variations("Db")
    ['Db', 'Db', 'C#', 'Csharp']
    >>> tonic_variations("E")
    ['E', 'E', 'E']
    """
    variations = [tonic]
    try:
        variations += [simplify(tonic), enharmonic(tonic)]
    except ValueError:
        logger.debug("No enharmonic spellings for tonic %r", tonic)

    sharp_variation = next((v for v in variations if SHARP in v), None)
    if sharp_variation is not None:
        variations.append(sharp_variation.replace(SHARP, SHARP_WORD, 1))
    return variations


def find_shape(chord: Chord, database: ShapeDatabase) -> FretShape | None:
    """Find the best fretboard shape for a chord.

    The tonic key is the first database key among the tonic variations.
    Shapes for that key are then tried in order:

    1. suffix equal to the quality name plus "/bass";
    2. suffix equal to a quality alias plus "/bass";
    3. suffix equal to the quality name;
    4. suffix equal to a quality alias.

    The first two steps only apply to slash chords.

    Parameters
    ----------
    chord : Chord
        The parsed chord.
    database : ShapeDatabase
        Shapes by tonic key, or an InstrumentChords.

    Returns
    -------
    FretShape | None
        The best match, or None if no shape fits.
    """
    chords = database.chords if isinstance(database, InstrumentChords) else database
    if not chord.is_recognized:
        return None

    variations = tonic_variations(chord.tonic)
    tonic_key = next((key for key in chords if key in variations), None)
    if tonic_key is None:
        logger.debug("No shapes filed under tonic %r", chord.tonic)
        return None

    shapes = chords[tonic_key]

    if chord.bass:
        bass_suffix = f"/{chord.bass}"
        for shape in shapes:
            if shape.suffix == chord.quality + bass_suffix:
                return shape
        for shape in shapes:
            if any(shape.suffix == alias + bass_suffix for alias in chord.quality_aliases):
                return shape

    for shape in shapes:
        if shape.suffix == chord.quality:
            return shape
    for shape in shapes:
        if shape.suffix in chord.quality_aliases:
            return shape

    logger.debug("No shape for %s under key %r", chord, tonic_key)
    return None


def _frets_to_string(frets: Any) -> str:
    """Convert chords-db frets (list of ints, -1 muted) to a pattern string."""
    if isinstance(frets, str):
        return frets
    return "".join("x" if fret < 0 else format(fret, "x") for fret in frets)


def parse_shape(key: str, item: Mapping[str, Any]) -> FretShape:
    """Parse one chords-db entry into a FretShape.

    The first listed position becomes the shape.

    Raises
    ------
    ValueError
        If the entry has no suffix or no positions.
    """
    positions = item.get("positions") or []
    if "suffix" not in item or not positions:
        msg = f"Malformed chord entry under key {key!r}: {item!r}"
        raise ValueError(msg)

    position = positions[0]
    return FretShape(
        key=item.get("key", key),
        suffix=item["suffix"],
        frets=_frets_to_string(position["frets"]),
        base_fret=int(position.get("baseFret", 1)),
    )


def parse_instrument_data(data: Mapping[str, Any], name: str | None = None) -> InstrumentChords:
    """Parse a chords-db instrument from a dictionary.

    Expected structure::

        {
            "main": {"name": "guitar"},
            "chords": {
                "C": [{"key": "C", "suffix": "major",
                       "positions": [{"frets": [-1, 3, 2, 0, 1, 0], "baseFret": 1}]}],
                ...
            }
        }

    Parameters
    ----------
    data : Mapping[str, Any]
        The database contents.
    name : str | None
        Instrument name; defaults to ``data["main"]["name"]``.

    Returns
    -------
    InstrumentChords
        The parsed database.
    """
    if name is None:
        name = data.get("main", {}).get("name", "unknown")

    chords: dict[str, tuple[FretShape, ...]] = {}
    for key, items in data.get("chords", {}).items():
        chords[key] = tuple(parse_shape(key, item) for item in items)

    logger.debug("Loaded %d shapes for %s", sum(len(s) for s in chords.values()), name)
    return InstrumentChords(name=name, chords=chords)


def load_instrument_chords(path: str | Path, name: str | None = None) -> InstrumentChords:
    """Load a chords-db instrument from a JSON file.

    Parameters
    ----------
    path : str | Path
        Path to the JSON file.
    name : str | None
        Instrument name; defaults to the name stored in the file.

    Returns
    -------
    InstrumentChords
        The parsed database.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)

    return parse_instrument_data(data, name)
