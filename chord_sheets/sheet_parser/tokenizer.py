"""Position-aware tokenizer for chord sheet lines.

This module turns one line of a chord sheet into typed tokens carrying
document offsets, so the line can be rebuilt exactly from the token texts and
edits can be mapped back onto the source.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from functools import lru_cache

from chord_sheets.models import UserShape
from chord_sheets.settings import DEFAULT_CHORD_LINE_MARKER, DEFAULT_TEXT_LINE_MARKER
from chord_sheets.sheet_parser import patterns
from chord_sheets.sheet_parser.chord_detector import (
    RHYTHM,
    Pending,
    classify_line,
    log_classification,
    reclassify_tokens,
)
from chord_sheets.sheet_parser.models import (
    ChordToken,
    DirectionToken,
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
from chord_sheets.symbols import parse_chord, parse_user_chord

logger = logging.getLogger(__name__)


def _sub(match: re.Match[str], group: str, base: int = 0) -> SubToken:
    """Build a sub-token from a match group, relative to ``base``."""
    start, end = match.span(group)
    return SubToken(text=match.group(group), start=start - base, end=end - base)


def _optional_sub(match: re.Match[str], group: str, base: int = 0) -> SubToken | None:
    """Like ``_sub`` but None for groups that did not take part or are empty."""
    if not match.group(group):
        return None
    return _sub(match, group, base)


class _LineScanner:
    """Mutable state of a single tokenization pass over one line."""

    def __init__(self, line_offset: int) -> None:
        self.line_offset = line_offset
        self.pos = 0
        self.tokens: list[Token] = []
        self.pending: dict[int, Pending] = {}
        self.word_count = 0
        self.marker: str | None = None
        self.has_user_shape = False

    def _bounds(self, match: re.Match[str]) -> tuple[str, int, int]:
        text = match.group(0)
        start = self.line_offset + self.pos
        return text, start, start + len(text)

    def _add_plain(self, match: re.Match[str], kind: str) -> Token:
        text, start, end = self._bounds(match)
        token = Token(text=text, start=start, end=end, kind=kind)  # type: ignore[arg-type]
        self.tokens.append(token)
        return token

    def on_marker(self, name: str, match: re.Match[str]) -> None:
        self.marker = match.group("marker")
        self._add_plain(match, "marker")

    def on_notation(self, name: str, match: re.Match[str]) -> None:
        self._add_plain(match, "notation")

    def on_break(self, name: str, match: re.Match[str]) -> None:
        self._add_plain(match, "break")

    def on_whitespace(self, name: str, match: re.Match[str]) -> None:
        self._add_plain(match, "whitespace")

    def on_direction(self, name: str, match: re.Match[str]) -> None:
        text, start, end = self._bounds(match)
        self.tokens.append(
            DirectionToken(
                text=text,
                start=start,
                end=end,
                kind="direction",
                opening=_sub(match, "open"),
                direction_text=_sub(match, "text"),
            )
        )

    def on_quoted(self, name: str, match: re.Match[str]) -> None:
        text, start, end = self._bounds(match)
        self.tokens.append(
            QuotedToken(
                text=text,
                start=start,
                end=end,
                kind="quoted",
                opening_quote=_sub(match, "open"),
                quoted_text=_sub(match, "text"),
                closing_quote=_sub(match, "close"),
                quote_type=patterns.quote_type(match.group("open"), name),
            )
        )

    def on_embed(self, name: str, match: re.Match[str]) -> None:
        text, start, end = self._bounds(match)
        width = match.group("width")
        height = match.group("height")
        self.tokens.append(
            EmbedToken(
                text=text,
                start=start,
                end=end,
                kind="embed",
                src=match.group("src"),
                width=int(width) if width else None,
                height=int(height) if height else None,
            )
        )

    def on_inline_header(self, name: str, match: re.Match[str]) -> None:
        text, start, end = self._bounds(match)
        self.tokens.append(
            InlineHeaderToken(
                text=text,
                start=start,
                end=end,
                kind="inlineHeader",
                header_name=_sub(match, "name"),
                closing_mark=_sub(match, "close"),
            )
        )

    def on_inline_chord(self, name: str, match: re.Match[str]) -> None:
        chord = parse_chord(match.group("chord_symbol"))
        if chord is None:
            logger.debug("Bracketed text %r is not a chord, keeping it as a word", match.group(0))
            self._add_plain(match, "word")
            return

        text, start, end = self._bounds(match)
        self.tokens.append(
            ChordToken(
                text=text,
                start=start,
                end=end,
                kind="chord",
                chord=chord,
                chord_symbol=_sub(match, "chord_symbol"),
                inline_chord=InlineChordParts(
                    opening_bracket=_sub(match, "open"),
                    closing_bracket=_sub(match, "close"),
                    aux_text=_optional_sub(match, "aux_text"),
                ),
            )
        )

    def on_user_defined_chord(self, name: str, match: re.Match[str]) -> None:
        position = match.group("pos")
        shape = UserShape(frets=match.group("frets"), position=int(position) if position else 0)
        text, start, end = self._bounds(match)
        self.tokens.append(
            ChordToken(
                text=text,
                start=start,
                end=end,
                kind="chord",
                chord=parse_user_chord(match.group("chord_symbol"), shape),
                chord_symbol=_sub(match, "chord_symbol"),
                user_shape_parts=UserShapeParts(
                    opening_bracket=_sub(match, "open"),
                    frets=_sub(match, "frets"),
                    closing_bracket=_sub(match, "close"),
                    position=_optional_sub(match, "pos"),
                    position_separator=_optional_sub(match, "pos_sep"),
                ),
            )
        )
        self.has_user_shape = True

    def on_word_or_rhythm(self, name: str, match: re.Match[str]) -> None:
        self._add_plain(match, "word")
        self.pending[len(self.tokens) - 1] = RHYTHM

    def on_word_or_chord(self, name: str, match: re.Match[str]) -> None:
        self._add_plain(match, "word")
        chord = parse_chord(match.group(0))
        if chord is not None:
            self.pending[len(self.tokens) - 1] = chord
        self.word_count += 1


Handler = Callable[[_LineScanner, str, re.Match[str]], None]


@lru_cache(maxsize=32)
def inline_patterns(
    chord_line_marker: str, text_line_marker: str
) -> tuple[tuple[str, re.Pattern[str], Handler], ...]:
    """Return the ordered token patterns for the given line markers.

    The order matters: specific tokens come before the generic ones (inline
    chords before bare words, ChordPro directives before curly labels). The
    last three patterns together accept any character, so the scan always
    makes progress.
    """
    return (
        ("marker", patterns.line_marker_pattern(chord_line_marker, text_line_marker), _LineScanner.on_marker),
        ("notation", patterns.NOTATION_RE, _LineScanner.on_notation),
        ("direction", patterns.DIRECTION_RE, _LineScanner.on_direction),
        ("break", patterns.BREAK_RE, _LineScanner.on_break),
        ("quoted", patterns.QUOTED_RE, _LineScanner.on_quoted),
        ("chordpro_quoted", patterns.CHORDPRO_QUOTED_RE, _LineScanner.on_quoted),
        ("smart_quoted", patterns.SMART_QUOTED_RE, _LineScanner.on_quoted),
        ("curly_quoted", patterns.CURLY_QUOTED_RE, _LineScanner.on_quoted),
        ("angle_quoted", patterns.ANGLE_QUOTED_RE, _LineScanner.on_quoted),
        ("embed", patterns.EMBED_RE, _LineScanner.on_embed),
        ("inline_header", patterns.INLINE_HEADER_RE, _LineScanner.on_inline_header),
        ("inline_chord", patterns.INLINE_CHORD_RE, _LineScanner.on_inline_chord),
        ("user_defined_chord", patterns.USER_DEFINED_CHORD_RE, _LineScanner.on_user_defined_chord),
        ("word_or_rhythm", patterns.WORD_OR_RHYTHM_RE, _LineScanner.on_word_or_rhythm),
        ("word_or_chord", patterns.WORD_OR_CHORD_RE, _LineScanner.on_word_or_chord),
        ("whitespace", patterns.WHITESPACE_RE, _LineScanner.on_whitespace),
    )


def tokenize_header(line: str, offset: int = 0) -> tuple[Token, ...] | None:
    """Tokenize a line consisting of a section header only.

    Parameters
    ----------
    line : str
        The line to check.
    offset : int
        Document offset of the first character of the line.

    Returns
    -------
    tuple[Token, ...] | None
        Whitespace (if any), the header and whitespace (if any), or None if
        the line is not a header line.

    Examples
    --------
    >>> tokens = tokenize_header("  [Chorus]")
    >>> [(t.kind, t.text) for t in tokens]
    [('whitespace', '  '), ('header', '[Chorus]')]
    >>> tokenize_header("Hello [Chorus]") is None
    True
    """
    match = patterns.HEADER_RE.match(line)
    if not match:
        return None

    tokens: list[Token] = []
    leading = match.group("leading_ws")
    if leading:
        tokens.append(Token(text=leading, start=offset, end=offset + len(leading), kind="whitespace"))

    header_start, header_end = match.start("open"), match.end("close")
    tokens.append(
        HeaderToken(
            text=line[header_start:header_end],
            start=offset + header_start,
            end=offset + header_end,
            kind="header",
            opening_bracket=_sub(match, "open", header_start),
            header_name=_sub(match, "name", header_start),
            closing_bracket=_sub(match, "close", header_start),
        )
    )

    trailing = match.group("trailing_ws")
    if trailing:
        tokens.append(
            Token(text=trailing, start=offset + header_end, end=offset + len(line), kind="whitespace")
        )
    return tuple(tokens)


def tokenize_line(
    line: str,
    offset: int = 0,
    chord_line_marker: str = DEFAULT_CHORD_LINE_MARKER,
    text_line_marker: str = DEFAULT_TEXT_LINE_MARKER,
) -> TokenizedLine:
    """Tokenize and classify one line of a chord sheet.

    Parameters
    ----------
    line : str
        The line to tokenize, without its newline.
    offset : int
        Document offset of the first character of the line. Token offsets
        are document-global; sub-token offsets are local to their token.
    chord_line_marker : str
        Marker that forces a chord line when it ends the line.
    text_line_marker : str
        Marker that forces a text line when it ends the line.

    Returns
    -------
    TokenizedLine
        Tokens whose texts concatenate to ``line``, and the classification.

    Raises
    ------
    ValueError
        If a marker is empty.

    Examples
    --------
    >>> result = tokenize_line("Am G F C")
    >>> result.is_chord_line
    True
    >>> [t.kind for t in result.tokens if t.kind != "whitespace"]
    ['chord', 'chord', 'chord', 'chord']
    >>> tokenize_line("Hello world").is_chord_line
    False
    """
    if not chord_line_marker or not text_line_marker:
        msg = "Line markers must not be empty"
        raise ValueError(msg)

    header_tokens = tokenize_header(line, offset)
    if header_tokens is not None:
        return TokenizedLine(tokens=header_tokens, is_chord_line=False)

    scanner = _LineScanner(offset)
    table = inline_patterns(chord_line_marker, text_line_marker)

    while scanner.pos < len(line):
        remaining = line[scanner.pos :]
        for name, pattern, handler in table:
            match = pattern.match(remaining)
            if match:
                handler(scanner, name, match)
                scanner.pos += match.end()
                break
        else:
            # Unreachable: word_or_rhythm, word_or_chord and whitespace
            # together accept every character.
            msg = f"No token pattern matches the remaining line: {remaining!r}"
            raise RuntimeError(msg)

    is_chord_line = classify_line(
        marker=scanner.marker,
        has_user_shape=scanner.has_user_shape,
        pending_count=len(scanner.pending),
        word_count=scanner.word_count,
        chord_line_marker=chord_line_marker,
        text_line_marker=text_line_marker,
    )
    log_classification(line, is_chord_line, len(scanner.pending), scanner.word_count)

    tokens = reclassify_tokens(scanner.tokens, scanner.pending) if is_chord_line else scanner.tokens
    return TokenizedLine(tokens=tuple(tokens), is_chord_line=is_chord_line)
