"""Chord data models for chord-sheets.

This module provides the value types shared by the chord symbol parser,
the sheet tokenizer, the transposer and the diagram resolver.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserShape:
    """A fretboard fingering written next to a chord symbol.

    Parameters
    ----------
    frets : str
        Fret pattern, one character per string (e.g., "x02210", "x34_24_").
    position : int
        Barre position, 0 when the sheet does not give one.

    Examples
    --------
    >>> UserShape(frets="x32010", position=3).position
    3
    """

    frets: str
    position: int = 0


@dataclass(frozen=True)
class Chord:
    """Parsed chord symbol.

    Parameters
    ----------
    tonic : str
        Root pitch with accidental (e.g., "C", "F#", "Bb"). Empty when the
        symbol was not recognized, which only happens for user-defined shapes.
    quality : str
        Canonical quality name (e.g., "major", "minor seventh").
    quality_aliases : tuple[str, ...]
        Suffix spellings accepted for the quality, in preference order.
    bass : str | None
        The bass note for slash chords.
    user_shape : UserShape | None
        Fingering written in the sheet, overriding any database lookup.

    Examples
    --------
    >>> chord = Chord(tonic="G", quality="minor seventh", quality_aliases=("m7",))
    >>> chord.suffix
    'm7'
    >>> str(Chord(tonic="C", quality="major", quality_aliases=("",), bass="E"))
    'C/E'
    """

    tonic: str
    quality: str
    quality_aliases: tuple[str, ...] = ()
    bass: str | None = None
    user_shape: UserShape | None = None

    @property
    def suffix(self) -> str:
        """Preferred suffix spelling of the quality."""
        return self.quality_aliases[0] if self.quality_aliases else ""

    @property
    def is_recognized(self) -> bool:
        """Whether the symbol parsed into a tonic."""
        return bool(self.tonic)

    def to_symbol(self) -> str:
        """Build a chord symbol from the tonic, preferred suffix and bass.

        Returns
        -------
        str
            Chord symbol (e.g., "Gm7", "C/E").
        """
        result = f"{self.tonic}{self.suffix}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def __str__(self) -> str:
        """Return the chord symbol as default string representation."""
        return self.to_symbol()
