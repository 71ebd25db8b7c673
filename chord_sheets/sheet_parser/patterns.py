"""Token patterns for chord sheet lines.

Every pattern is matched against the start of the unconsumed part of a line,
so all of them are anchored with ``re.match``. Group offsets reported by a
match are therefore local to the token being built.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Section header: the only content of its line
HEADER_RE = re.compile(r"(?P<leading_ws>\s*)(?P<open>\[)(?P<name>[^\]]+)(?P<close>\])(?P<trailing_ws>\s*)\Z")

# MusGlyphs notation, e.g. "@q=80"
NOTATION_RE = re.compile(r"@\S+")

# Direction opened by a repeat mark ("x2"), an arrow ("->") or a double slash
DIRECTION_RE = re.compile(r"(?P<open>x\d+|->|//\s?)(?P<text>.*)\Z")

# Column/section break: three dashes, nothing else
BREAK_RE = re.compile(r"---\Z")

# Label between two identical symbols, lazy to avoid swallowing a second label
QUOTED_RE = re.compile(r"(?P<open>['_!$&^*+=])(?P<text>.+?)(?P<close>(?P=open))")

# ChordPro directive, e.g. "{comment: Slowly}"
CHORDPRO_QUOTED_RE = re.compile(r"(?P<open>\{[^:]+?:\s*)(?P<text>[^}]+?)(?P<close>\})")

# Labels using asymmetric delimiter pairs
SMART_QUOTED_RE = re.compile(r"(?P<open>‘)(?P<text>[^’]+?)(?P<close>’)")
CURLY_QUOTED_RE = re.compile(r"(?P<open>\{)(?P<text>[^}]+?)(?P<close>\})")
ANGLE_QUOTED_RE = re.compile(r"(?P<open><)(?P<text>[^>]+?)(?P<close>>)")

# Embedded file with optional size, e.g. "![[riff.png|300x200]]"
EMBED_RE = re.compile(r"!\[\[(?P<src>[^\[|]+?)(?:\|(?P<width>\d+)(?:x(?P<height>\d+))?)?\]\]")

# Inline header, e.g. "Chorus:"
INLINE_HEADER_RE = re.compile(r"(?P<name>[^:]+)(?P<close>:)")

# Bracketed chord in lyrics with optional auxiliary text, e.g. "[Am]" or "[Dm slowly]"
INLINE_CHORD_RE = re.compile(r"(?P<open>\[)(?P<chord_symbol>[^\s\]]+)(?P<aux_text>[^\[\]()]*)(?P<close>\])")

# Chord symbol with its own fingering and optional barre position:
# "Bbadd13[x13333]", "Dm6[4|x2x132]", "B*[_224442_]"
USER_DEFINED_CHORD_RE = re.compile(
    r"(?P<chord_symbol>[A-Z][A-Za-z0-9#()+\-°/*]*)"
    r"(?P<open>\[)"
    r"(?:(?P<pos>[0-9]+)(?P<pos_sep>\|))?"
    r"(?P<frets>[0-9x_]+)"
    r"(?P<close>\])"
)

# Bar lines, strums, repeats: rhythm on chord lines, words elsewhere
WORD_OR_RHYTHM_RE = re.compile(r"[\[\]/|%.~]+")

# Anything else up to whitespace, a bar line or a bracket. Slashes stay
# because they are valid inside chord symbols.
WORD_OR_CHORD_RE = re.compile(r"[^|~\s\[]+")

WHITESPACE_RE = re.compile(r"\s+")

# Presentation hints for quoted labels, by opening delimiter
QUOTE_TYPES: dict[str, str] = {
    "^": "plain",
    "'": "lyric-cue",
    "‘": "lyric-cue",
    "!": "music-cue",
    "_": "part-1",
    "*": "part-2",
    "+": "part-3",
    "&": "part-4",
    "$": "part-5",
    "=": "rule",
    "{": "lozenge",
    "<": "small",
}


def quote_type(opening: str, pattern_name: str) -> str:
    """Return the presentation hint for a quoted label.

    Examples
    --------
    >>> quote_type("'", "quoted")
    'lyric-cue'
    >>> quote_type("{title: ", "chordpro_quoted")
    'chordpro'
    """
    if pattern_name == "chordpro_quoted":
        return "chordpro"
    return QUOTE_TYPES.get(opening, "unknown")


@lru_cache(maxsize=32)
def line_marker_pattern(chord_line_marker: str, text_line_marker: str) -> re.Pattern[str]:
    """Compile the pattern for line markers at the end of a line.

    Parameters
    ----------
    chord_line_marker : str
        Marker forcing a chord line (e.g., "%c").
    text_line_marker : str
        Marker forcing a text line (e.g., "%t").

    Returns
    -------
    re.Pattern[str]
        Pattern matching either marker followed only by whitespace.
    """
    markers = "|".join(re.escape(m) for m in (text_line_marker, chord_line_marker))
    return re.compile(rf"(?P<marker>{markers})\s*\Z")
