"""JSON-ready representations of tokenized chord sheets."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from chord_sheets.models import Chord
from chord_sheets.sheet_parser.models import (
    ChordToken,
    DirectionToken,
    EmbedToken,
    HeaderToken,
    InlineHeaderToken,
    QuotedToken,
    SubToken,
    Token,
    TokenizedLine,
)


def sub_token_to_dict(sub: SubToken | None) -> dict[str, Any] | None:
    """Convert a SubToken to a dict, passing None through."""
    if sub is None:
        return None
    return {"text": sub.text, "start": sub.start, "end": sub.end}


def chord_to_dict(chord: Chord) -> dict[str, Any]:
    """Convert a Chord to a JSON-serializable dict."""
    result: dict[str, Any] = {
        "tonic": chord.tonic,
        "quality": chord.quality,
        "quality_aliases": list(chord.quality_aliases),
        "bass": chord.bass,
    }
    if chord.user_shape is not None:
        result["user_shape"] = {
            "frets": chord.user_shape.frets,
            "position": chord.user_shape.position,
        }
    return result


def token_to_dict(token: Token) -> dict[str, Any]:
    """Convert a Token to a JSON-serializable dict.

    Every token has "kind", "text", "start" and "end"; specialised tokens
    add their own fields.
    """
    result: dict[str, Any] = {
        "kind": token.kind,
        "text": token.text,
        "start": token.start,
        "end": token.end,
    }

    if isinstance(token, ChordToken):
        result["chord"] = chord_to_dict(token.chord)
        result["chord_symbol"] = sub_token_to_dict(token.chord_symbol)
        if token.inline_chord is not None:
            result["inline_chord"] = {
                "opening_bracket": sub_token_to_dict(token.inline_chord.opening_bracket),
                "aux_text": sub_token_to_dict(token.inline_chord.aux_text),
                "closing_bracket": sub_token_to_dict(token.inline_chord.closing_bracket),
            }
        if token.user_shape_parts is not None:
            parts = token.user_shape_parts
            result["user_shape_parts"] = {
                "opening_bracket": sub_token_to_dict(parts.opening_bracket),
                "position": sub_token_to_dict(parts.position),
                "position_separator": sub_token_to_dict(parts.position_separator),
                "frets": sub_token_to_dict(parts.frets),
                "closing_bracket": sub_token_to_dict(parts.closing_bracket),
            }
    elif isinstance(token, HeaderToken):
        result["header_name"] = sub_token_to_dict(token.header_name)
    elif isinstance(token, InlineHeaderToken):
        result["header_name"] = sub_token_to_dict(token.header_name)
    elif isinstance(token, QuotedToken):
        result["quoted_text"] = sub_token_to_dict(token.quoted_text)
        result["quote_type"] = token.quote_type
    elif isinstance(token, DirectionToken):
        result["opening"] = sub_token_to_dict(token.opening)
        result["direction_text"] = sub_token_to_dict(token.direction_text)
    elif isinstance(token, EmbedToken):
        result["src"] = token.src
        result["width"] = token.width
        result["height"] = token.height

    return result


def line_to_dict(line: TokenizedLine) -> dict[str, Any]:
    """Convert a TokenizedLine to a JSON-serializable dict."""
    return {
        "is_chord_line": line.is_chord_line,
        "tokens": [token_to_dict(token) for token in line.tokens],
    }


def document_to_dict(lines: Iterable[TokenizedLine]) -> dict[str, Any]:
    """Convert tokenized document lines to a JSON-serializable dict."""
    return {"lines": [line_to_dict(line) for line in lines]}
