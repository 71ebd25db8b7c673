"""Line classification for chord sheets.

A line is scanned once with every bare word tokenized as a plain word. Words
that could be chords or rhythm marks are remembered as pending; once the
whole line has been seen it is classified, and on chord lines the pending
tokens are rewritten as chords and rhythm marks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Literal, Union

from chord_sheets.models import Chord
from chord_sheets.sheet_parser.models import ChordToken, SubToken, Token

logger = logging.getLogger(__name__)

# A line is a chord line when more than this share of its words are chords
CHORD_LINE_THRESHOLD = 0.5

RHYTHM: Literal["rhythm"] = "rhythm"

# What a pending token becomes on a chord line
Pending = Union[Chord, Literal["rhythm"]]


def classify_line(
    *,
    marker: str | None,
    has_user_shape: bool,
    pending_count: int,
    word_count: int,
    chord_line_marker: str,
    text_line_marker: str,
) -> bool:
    """Decide whether a scanned line is a chord line.

    Rules, first match wins:

    1. the line ends with the chord-line marker, or holds a user-defined
       chord shape: chord line;
    2. the line ends with the text-line marker: text line;
    3. otherwise it is a chord line iff ``pending_count / word_count`` is
       strictly greater than ``CHORD_LINE_THRESHOLD``.

    Parameters
    ----------
    marker : str | None
        The line marker found at the end of the line, if any.
    has_user_shape : bool
        Whether the line contains a user-defined chord shape.
    pending_count : int
        Number of tokens pending reclassification (chord and rhythm
        candidates).
    word_count : int
        Number of bare words on the line.
    chord_line_marker : str
        The configured chord-line marker.
    text_line_marker : str
        The configured text-line marker.

    Returns
    -------
    bool
        True for a chord line.

    Examples
    --------
    >>> classify_line(marker=None, has_user_shape=False, pending_count=2,
    ...               word_count=4, chord_line_marker="%c", text_line_marker="%t")
    False
    >>> classify_line(marker="%c", has_user_shape=False, pending_count=0,
    ...               word_count=4, chord_line_marker="%c", text_line_marker="%t")
    True
    """
    if marker == chord_line_marker or has_user_shape:
        return True
    if marker == text_line_marker:
        return False
    if word_count == 0:
        # Only rhythm candidates can be pending here, e.g. "| / / |"
        return pending_count > 0
    return pending_count / word_count > CHORD_LINE_THRESHOLD


def reclassify_tokens(tokens: Sequence[Token], pending: Mapping[int, Pending]) -> list[Token]:
    """Rewrite pending tokens of a chord line.

    Parameters
    ----------
    tokens : Sequence[Token]
        Tokens of the line as scanned.
    pending : Mapping[int, Pending]
        Index into ``tokens`` to the chord the word parsed as, or ``RHYTHM``.

    Returns
    -------
    list[Token]
        A new token list; rhythm candidates have kind "rhythm" and chord
        candidates are ChordTokens whose symbol spans the whole token.
    """
    result = list(tokens)
    for index, target in pending.items():
        token = result[index]
        if not isinstance(target, Chord):
            result[index] = replace(token, kind="rhythm")
            continue
        result[index] = ChordToken(
            text=token.text,
            start=token.start,
            end=token.end,
            kind="chord",
            chord=target,
            chord_symbol=SubToken(text=token.text, start=0, end=len(token.text)),
        )
    return result


def chord_ratio(pending_count: int, word_count: int) -> float:
    """Share of pending tokens among words, 0.0 for lines without words."""
    return pending_count / word_count if word_count > 0 else 0.0


def log_classification(line: str, is_chord_line: bool, pending_count: int, word_count: int) -> None:
    """Write a debug record explaining a line classification."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Classified %r as %s line (%d pending, %d words, ratio %.2f)",
            line,
            "chord" if is_chord_line else "text",
            pending_count,
            word_count,
            chord_ratio(pending_count, word_count),
        )
