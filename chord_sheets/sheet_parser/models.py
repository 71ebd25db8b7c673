"""Data models for chord sheet tokenization.

This module defines the tokens produced for a single sheet line and the
values derived from them (chord symbol ranges and replacement edits).

Token ``start``/``end`` offsets are document-global. Sub-token offsets are
local to the token that owns them; add the token's ``start`` to get a
document-global position.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from chord_sheets.models import Chord


TokenKind = Literal[
    "word",
    "whitespace",
    "marker",
    "header",
    "inlineHeader",
    "chord",
    "rhythm",
    "notation",
    "quoted",
    "direction",
    "embed",
    "break",
]


@dataclass(frozen=True)
class SubToken:
    """A named part of a token.

    Parameters
    ----------
    text : str
        The exact substring.
    start : int
        Inclusive start, relative to the owning token.
    end : int
        Exclusive end, relative to the owning token.
    """

    text: str
    start: int
    end: int

    @property
    def range(self) -> tuple[int, int]:
        """Half-open ``(start, end)`` pair."""
        return self.start, self.end


@dataclass(frozen=True)
class Token:
    """A token with document offsets.

    Parameters
    ----------
    text : str
        The exact substring of the line.
    start : int
        Inclusive start offset in the document.
    end : int
        Exclusive end offset in the document.
    kind : TokenKind
        The token classification.

    Examples
    --------
    >>> token = Token(text="Hello", start=10, end=15, kind="word")
    >>> token.range
    (10, 15)
    """

    text: str
    start: int
    end: int
    kind: TokenKind

    @property
    def range(self) -> tuple[int, int]:
        """Half-open ``(start, end)`` pair."""
        return self.start, self.end


@dataclass(frozen=True)
class HeaderToken(Token):
    """A section header occupying a whole line, e.g. "[Verse 1]"."""

    opening_bracket: SubToken
    header_name: SubToken
    closing_bracket: SubToken

    @property
    def name(self) -> str:
        """The header text between the brackets."""
        return self.header_name.text


@dataclass(frozen=True)
class InlineHeaderToken(Token):
    """A header inside a line, ending with a colon, e.g. "Chorus:"."""

    header_name: SubToken
    closing_mark: SubToken


@dataclass(frozen=True)
class QuotedToken(Token):
    """A label between matching delimiters.

    Parameters
    ----------
    opening_quote : SubToken
        The opening delimiter (for ChordPro directives, "{name: ").
    quoted_text : SubToken
        The text between the delimiters.
    closing_quote : SubToken
        The closing delimiter.
    quote_type : str
        Presentation hint derived from the delimiter (e.g., "lyric-cue").
    """

    opening_quote: SubToken
    quoted_text: SubToken
    closing_quote: SubToken
    quote_type: str


@dataclass(frozen=True)
class DirectionToken(Token):
    """A direction running to the end of the line, e.g. "x2 to coda"."""

    opening: SubToken
    direction_text: SubToken


@dataclass(frozen=True)
class EmbedToken(Token):
    """An embedded resource, e.g. "![[riff.png|300x200]]".

    Resolving ``src`` against a document store is left to the renderer.
    """

    src: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class InlineChordParts:
    """Sub-tokens of a bracketed inline chord such as "[Am slowly]"."""

    opening_bracket: SubToken
    closing_bracket: SubToken
    aux_text: SubToken | None = None


@dataclass(frozen=True)
class UserShapeParts:
    """Sub-tokens of a user-defined shape such as "Dm6[4|x2x132]"."""

    opening_bracket: SubToken
    frets: SubToken
    closing_bracket: SubToken
    position: SubToken | None = None
    position_separator: SubToken | None = None


@dataclass(frozen=True)
class ChordToken(Token):
    """A chord occurrence.

    Parameters
    ----------
    chord : Chord
        The parsed chord.
    chord_symbol : SubToken
        The chord symbol inside the token (excludes brackets and shapes).
    inline_chord : InlineChordParts | None
        Bracket parts when the chord was written inline in lyrics.
    user_shape_parts : UserShapeParts | None
        Shape parts when the chord carries a user-defined fingering.
    """

    chord: Chord
    chord_symbol: SubToken
    inline_chord: InlineChordParts | None = None
    user_shape_parts: UserShapeParts | None = None

    @property
    def symbol_range(self) -> tuple[int, int]:
        """Document-global ``(start, end)`` of the chord symbol."""
        return self.start + self.chord_symbol.start, self.start + self.chord_symbol.end


@dataclass(frozen=True)
class TokenizedLine:
    """Tokens of one line and the line classification.

    Parameters
    ----------
    tokens : tuple[Token, ...]
        Tokens in line order; their texts concatenate to the line.
    is_chord_line : bool
        Whether the line holds chords rather than lyrics.
    """

    tokens: tuple[Token, ...]
    is_chord_line: bool

    @property
    def text(self) -> str:
        """The line rebuilt from its tokens."""
        return "".join(token.text for token in self.tokens)


@dataclass(frozen=True)
class ChordSymbolRange:
    """A chord symbol located in a document.

    Parameters
    ----------
    start : int
        Document-global start of the chord symbol.
    end : int
        Document-global end of the chord symbol.
    chord_symbol : str
        The chord symbol text.
    chord : Chord
        The parsed chord.
    """

    start: int
    end: int
    chord_symbol: str
    chord: Chord


@dataclass(frozen=True)
class Edit:
    """Replacement of ``text[start:end]`` by ``text``."""

    start: int
    end: int
    text: str
