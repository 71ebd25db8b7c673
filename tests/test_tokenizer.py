"""Tests for the chord sheet line tokenizer."""

import pytest

from chord_sheets.sheet_parser import patterns
from chord_sheets.sheet_parser import tokenizer as tokenizer_module
from chord_sheets.sheet_parser.models import (
    ChordToken,
    DirectionToken,
    EmbedToken,
    HeaderToken,
    InlineHeaderToken,
    QuotedToken,
    SubToken,
)
from chord_sheets.sheet_parser.tokenizer import tokenize_header, tokenize_line


def non_whitespace(line: str) -> list[tuple[str, str]]:
    """Return (kind, text) of the non-whitespace tokens of a line."""
    return [(t.kind, t.text) for t in tokenize_line(line).tokens if t.kind != "whitespace"]


class TestTokenizeLineBasic:
    """Basic token types."""

    def test_words_and_whitespace(self) -> None:
        """Test a plain lyric line."""
        result = tokenize_line("Hello world")
        assert [(t.kind, t.text, t.start, t.end) for t in result.tokens] == [
            ("word", "Hello", 0, 5),
            ("whitespace", " ", 5, 6),
            ("word", "world", 6, 11),
        ]
        assert result.is_chord_line is False

    def test_empty_line(self) -> None:
        """Test that an empty line has no tokens."""
        result = tokenize_line("")
        assert result.tokens == ()
        assert result.is_chord_line is False

    def test_whitespace_only(self) -> None:
        """Test a whitespace-only line."""
        result = tokenize_line("    ")
        assert [t.kind for t in result.tokens] == ["whitespace"]
        assert result.is_chord_line is False

    def test_chord_line_marker(self) -> None:
        """Test that the chord-line marker is a token at the end."""
        result = tokenize_line("Am G F %c")
        assert len(result.tokens) == 7
        marker = result.tokens[6]
        assert (marker.kind, marker.text, marker.range) == ("marker", "%c", (7, 9))

    def test_text_line_marker(self) -> None:
        """Test that the text-line marker is a token at the end."""
        result = tokenize_line("Lyrics here %t")
        marker = result.tokens[-1]
        assert (marker.kind, marker.text, marker.range) == ("marker", "%t", (12, 14))

    def test_marker_with_trailing_whitespace(self) -> None:
        """Trailing whitespace after the marker belongs to the marker token."""
        result = tokenize_line("hello world %c  ")
        assert result.tokens[-1].text == "%c  "
        assert result.is_chord_line is True

    def test_marker_not_at_line_end_is_a_word(self) -> None:
        """A marker in the middle of a line is not a marker."""
        assert ("marker", "%c") not in non_whitespace("%c Am G")

    def test_custom_markers(self) -> None:
        """Test user-defined markers, including regex metacharacters."""
        result = tokenize_line("Hello world (c)", chord_line_marker="(c)", text_line_marker="(t)")
        assert result.tokens[-1].kind == "marker"
        assert result.is_chord_line is True

    def test_empty_marker_raises(self) -> None:
        """Test that empty markers are rejected."""
        with pytest.raises(ValueError, match="must not be empty"):
            tokenize_line("Am", chord_line_marker="")


class TestChordDetection:
    """Bare chord words on chord lines."""

    def test_basic_chords(self) -> None:
        """Test a line of simple chords."""
        line = "Am C G D"
        result = tokenize_line(line)
        assert len(result.tokens) == 7
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert [c.chord.tonic for c in chords] == ["A", "C", "G", "D"]
        assert chords[0].chord.quality == "minor"
        assert chords[1].chord.quality == "major"
        assert all(c.chord.bass is None for c in chords)
        for chord in chords:
            start = line.index(chord.text)
            assert chord.range == (start, start + len(chord.text))
            assert chord.chord_symbol == SubToken(text=chord.text, start=0, end=len(chord.text))

    def test_complex_chords(self) -> None:
        """Test extended chord qualities."""
        result = tokenize_line("Cmaj7 Dm7b5 G7sus4")
        assert len(result.tokens) == 5
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert [(c.text, c.range, c.chord.quality) for c in chords] == [
            ("Cmaj7", (0, 5), "major seventh"),
            ("Dm7b5", (6, 11), "half-diminished"),
            ("G7sus4", (12, 18), "suspended fourth seventh"),
        ]

    def test_extended_chords_make_chord_line(self) -> None:
        """Qualities beyond sevenths are chords, so the line is a chord line."""
        result = tokenize_line("C9sus4 Aadd11 F7#9 C6/9 G")
        assert result.is_chord_line is True
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert [(c.text, c.chord.quality) for c in chords] == [
            ("C9sus4", "9sus4"),
            ("Aadd11", "add11"),
            ("F7#9", "dominant sharp ninth"),
            ("C6/9", "sixth added ninth"),
            ("G", "major"),
        ]
        assert chords[3].chord.bass is None

    def test_slash_chords(self) -> None:
        """Test chords with a bass note."""
        result = tokenize_line("C/G Am/F Dm7/C")
        assert len(result.tokens) == 5
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert [(c.range, c.chord.tonic, c.chord.bass) for c in chords] == [
            ((0, 3), "C", "G"),
            ((4, 8), "A", "F"),
            ((9, 14), "D", "C"),
        ]
        assert chords[2].chord.quality == "minor seventh"
        assert chords[1].chord_symbol.range == (0, 4)

    def test_chords_on_text_line_stay_words(self) -> None:
        """The same word is a chord on a chord line but a word in lyrics."""
        assert non_whitespace("Am I wrong to love you") == [
            ("word", "Am"),
            ("word", "I"),
            ("word", "wrong"),
            ("word", "to"),
            ("word", "love"),
            ("word", "you"),
        ]

    def test_inline_chords(self) -> None:
        """Test bracketed chords inside lyrics."""
        line = "The [C#/D#] Eastern world, it [F# solo.] is ex-[G#7  ]plodin'"
        result = tokenize_line(line)
        assert result.is_chord_line is False

        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert len(chords) == 3

        first = chords[0]
        assert first.text == "[C#/D#]"
        assert first.range == (4, 11)
        assert (first.chord.tonic, first.chord.quality, first.chord.bass) == ("C#", "major", "D#")
        assert first.chord_symbol == SubToken(text="C#/D#", start=1, end=6)
        assert first.inline_chord is not None
        assert first.inline_chord.opening_bracket == SubToken(text="[", start=0, end=1)
        assert first.inline_chord.closing_bracket == SubToken(text="]", start=6, end=7)
        assert first.inline_chord.aux_text is None

        second = chords[1]
        assert second.text == "[F# solo.]"
        assert second.chord_symbol == SubToken(text="F#", start=1, end=3)
        assert second.inline_chord is not None
        assert second.inline_chord.aux_text == SubToken(text=" solo.", start=3, end=9)
        assert second.inline_chord.closing_bracket == SubToken(text="]", start=9, end=10)

        third = chords[2]
        assert third.range == (47, 54)
        assert third.chord.quality == "dominant seventh"
        assert third.chord_symbol.text == "G#7"
        assert third.inline_chord is not None
        assert third.inline_chord.aux_text == SubToken(text="  ", start=4, end=6)

        words = [t.text for t in result.tokens if t.kind == "word"]
        assert words == ["The", "Eastern", "world,", "it", "is", "ex-", "plodin'"]

    def test_inline_non_chord_is_a_word(self) -> None:
        """Bracketed text that is not a chord becomes a single word."""
        assert non_whitespace("Say [hello] there") == [
            ("word", "Say"),
            ("word", "[hello]"),
            ("word", "there"),
        ]

    def test_user_defined_chords(self) -> None:
        """Test chords with a fingering in brackets."""
        line = "Some Am[x02210] user-defined C*4[3|x32010] chords C°[x34_24_]"
        result = tokenize_line(line)
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert len(chords) == 3

        assert chords[0].range == (5, 15)
        assert chords[0].chord_symbol == SubToken(text="Am", start=0, end=2)
        assert chords[0].chord.user_shape is not None
        assert chords[0].chord.user_shape.frets == "x02210"
        assert chords[0].chord.user_shape.position == 0

        assert chords[1].range == (29, 42)
        assert chords[1].chord_symbol == SubToken(text="C*4", start=0, end=3)
        assert chords[1].chord.user_shape is not None
        assert chords[1].chord.user_shape.frets == "x32010"
        assert chords[1].chord.user_shape.position == 3
        assert chords[1].chord.tonic == ""

        assert chords[2].range == (50, 61)
        assert chords[2].chord_symbol.text == "C°"
        assert chords[2].chord.quality == "diminished"
        assert chords[2].chord.user_shape is not None
        assert chords[2].chord.user_shape.frets == "x34_24_"

        words = [t.text for t in result.tokens if t.kind == "word"]
        assert words == ["Some", "user-defined", "chords"]

    def test_user_defined_chord_parts(self) -> None:
        """Test sub-token offsets of a user-defined shape with position."""
        result = tokenize_line("Dm6[4|x2x132]")
        chord = result.tokens[0]
        assert isinstance(chord, ChordToken)
        parts = chord.user_shape_parts
        assert parts is not None
        assert parts.opening_bracket.range == (3, 4)
        assert parts.position == SubToken(text="4", start=4, end=5)
        assert parts.position_separator == SubToken(text="|", start=5, end=6)
        assert parts.frets == SubToken(text="x2x132", start=6, end=12)
        assert parts.closing_bracket.range == (12, 13)

    def test_user_defined_chord_without_position(self) -> None:
        """Position parts are absent when no barre position is given."""
        chord = tokenize_line("Am[x02210]").tokens[0]
        assert isinstance(chord, ChordToken)
        assert chord.user_shape_parts is not None
        assert chord.user_shape_parts.position is None
        assert chord.user_shape_parts.position_separator is None


class TestHeaders:
    """Section header lines."""

    def test_basic_header(self) -> None:
        """Test a header alone on its line."""
        result = tokenize_line("[Verse 1]")
        assert result.is_chord_line is False
        assert len(result.tokens) == 1
        header = result.tokens[0]
        assert isinstance(header, HeaderToken)
        assert header.kind == "header"
        assert header.name == "Verse 1"
        assert header.range == (0, 9)
        assert header.opening_bracket == SubToken(text="[", start=0, end=1)
        assert header.header_name == SubToken(text="Verse 1", start=1, end=8)
        assert header.closing_bracket == SubToken(text="]", start=8, end=9)

    def test_header_with_surrounding_whitespace(self) -> None:
        """Whitespace around a header gets its own tokens."""
        result = tokenize_line("  [Chorus]  ")
        assert [t.kind for t in result.tokens] == ["whitespace", "header", "whitespace"]
        header = result.tokens[1]
        assert isinstance(header, HeaderToken)
        assert header.text == "[Chorus]"
        assert header.range == (2, 10)
        assert header.header_name.range == (1, 7)
        assert header.closing_bracket.range == (7, 8)
        assert result.tokens[2].range == (10, 12)

    def test_header_with_offset(self) -> None:
        """Header offsets are document-global, sub-tokens stay local."""
        header = tokenize_line(" [Intro]", offset=50).tokens[1]
        assert isinstance(header, HeaderToken)
        assert header.range == (51, 58)
        assert header.header_name.range == (1, 6)

    @pytest.mark.parametrize(
        ("line", "name"),
        [
            ("[Bridge #2 (alternate)]", "Bridge #2 (alternate)"),
            ("[Verse [1]", "Verse [1"),
            ("[Am]", "Am"),
        ],
    )
    def test_header_names(self, line: str, name: str) -> None:
        """Test header names with special characters."""
        header = tokenize_line(line).tokens[0]
        assert isinstance(header, HeaderToken)
        assert header.name == name

    @pytest.mark.parametrize(
        "line",
        ["Hello [Verse 1] there", "[Verse 1", "[Verse 1][Chorus]", "[]"],
    )
    def test_invalid_headers(self, line: str) -> None:
        """Headers must be the only content of their line."""
        result = tokenize_line(line)
        assert not any(t.kind == "header" for t in result.tokens)
        assert tokenize_header(line) is None


class TestRhythm:
    """Rhythm notation."""

    def test_rhythm_only_line(self) -> None:
        """A line of bar lines and strums is a chord line of rhythm tokens."""
        result = tokenize_line("| / /  |    %    |")
        assert result.is_chord_line is True
        rhythm = [(t.text, t.range) for t in result.tokens if t.kind == "rhythm"]
        assert rhythm == [
            ("|", (0, 1)),
            ("/", (2, 3)),
            ("/", (4, 5)),
            ("|", (7, 8)),
            ("%", (12, 13)),
            ("|", (17, 18)),
        ]

    def test_rhythm_with_chords(self) -> None:
        """Test rhythm marks mixed with chords."""
        assert non_whitespace("| G / / / | Am / C /  |    %    |") == [
            ("rhythm", "|"),
            ("chord", "G"),
            ("rhythm", "/"),
            ("rhythm", "/"),
            ("rhythm", "/"),
            ("rhythm", "|"),
            ("chord", "Am"),
            ("rhythm", "/"),
            ("chord", "C"),
            ("rhythm", "/"),
            ("rhythm", "|"),
            ("rhythm", "%"),
            ("rhythm", "|"),
        ]

    def test_rhythm_marks_in_lyrics_stay_words(self) -> None:
        """Rhythm candidates on text lines are words."""
        result = tokenize_line("and then ... we left")
        assert result.is_chord_line is False
        assert ("word", "...") in [(t.kind, t.text) for t in result.tokens]


class TestAnnotations:
    """Notation, directions, breaks, labels, embeds and inline headers."""

    def test_notation(self) -> None:
        """Test MusGlyphs notation marks."""
        result = tokenize_line("@q=80 Am G")
        assert (result.tokens[0].kind, result.tokens[0].text, result.tokens[0].range) == ("notation", "@q=80", (0, 5))
        assert result.is_chord_line is True

    @pytest.mark.parametrize(
        ("line", "opening", "text"),
        [
            ("x2 repeat", "x2", " repeat"),
            ("-> to coda", "->", " to coda"),
            ("// fade out", "// ", "fade out"),
        ],
    )
    def test_direction(self, line: str, opening: str, text: str) -> None:
        """A direction runs to the end of the line."""
        result = tokenize_line(line)
        assert len(result.tokens) == 1
        direction = result.tokens[0]
        assert isinstance(direction, DirectionToken)
        assert direction.range == (0, len(line))
        assert direction.opening.text == opening
        assert direction.direction_text.text == text
        assert direction.direction_text.end == len(line)

    def test_direction_after_chords(self) -> None:
        """Test a repeat mark at the end of a chord line."""
        result = tokenize_line("Am G x2")
        assert result.is_chord_line is True
        assert result.tokens[-1].kind == "direction"
        assert result.tokens[-1].range == (5, 7)

    def test_break(self) -> None:
        """Three dashes are a break."""
        result = tokenize_line("---")
        assert [(t.kind, t.text) for t in result.tokens] == [("break", "---")]
        assert result.is_chord_line is False

    @pytest.mark.parametrize(
        ("line", "quote_type", "text"),
        [
            ("'Softly'", "lyric-cue", "Softly"),
            ("‘Softly’", "lyric-cue", "Softly"),
            ("!Guitar solo!", "music-cue", "Guitar solo"),
            ("*Solo*", "part-2", "Solo"),
            ("_Lead_", "part-1", "Lead"),
            ("=Intro=", "rule", "Intro"),
            ("^plain^", "plain", "plain"),
            ("{Bridge}", "lozenge", "Bridge"),
            ("<small print>", "small", "small print"),
            ("{comment: Slowly}", "chordpro", "Slowly"),
        ],
    )
    def test_quoted(self, line: str, quote_type: str, text: str) -> None:
        """Test every label delimiter."""
        result = tokenize_line(line)
        assert len(result.tokens) == 1
        quoted = result.tokens[0]
        assert isinstance(quoted, QuotedToken)
        assert quoted.quote_type == quote_type
        assert quoted.quoted_text.text == text
        assert quoted.closing_quote.end == len(line)

    def test_chordpro_opening_includes_directive(self) -> None:
        """The opening of a ChordPro directive includes its name."""
        quoted = tokenize_line("{comment: Slowly}").tokens[0]
        assert isinstance(quoted, QuotedToken)
        assert quoted.opening_quote == SubToken(text="{comment: ", start=0, end=10)
        assert quoted.quoted_text.range == (10, 16)

    @pytest.mark.parametrize(
        ("line", "src", "width", "height"),
        [
            ("![[riff.png|300x200]]", "riff.png", 300, 200),
            ("![[riff.png|300]]", "riff.png", 300, None),
            ("![[scores/riff.png]]", "scores/riff.png", None, None),
        ],
    )
    def test_embed(self, line: str, src: str, width: int | None, height: int | None) -> None:
        """Test embedded resources."""
        embed = tokenize_line(line).tokens[0]
        assert isinstance(embed, EmbedToken)
        assert (embed.src, embed.width, embed.height) == (src, width, height)
        assert embed.range == (0, len(line))

    def test_inline_header(self) -> None:
        """Text up to a colon is an inline header."""
        result = tokenize_line("Chorus: la la")
        header = result.tokens[0]
        assert isinstance(header, InlineHeaderToken)
        assert header.text == "Chorus:"
        assert header.header_name == SubToken(text="Chorus", start=0, end=6)
        assert header.closing_mark == SubToken(text=":", start=6, end=7)
        assert [t.text for t in result.tokens[1:] if t.kind == "word"] == ["la", "la"]


class TestClassification:
    """Line classification."""

    def test_all_chords(self) -> None:
        """Four chords out of four words is a chord line."""
        result = tokenize_line("Am G F C")
        assert result.is_chord_line is True
        assert sum(1 for t in result.tokens if t.kind == "chord") == 4

    def test_comment_breaks_chord_detection(self) -> None:
        """Four chords out of eight words is not a majority."""
        result = tokenize_line("Am G F (comment that breaks chord detection) C")
        assert result.is_chord_line is False
        assert not any(t.kind == "chord" for t in result.tokens)
        assert all(t.kind in ("word", "whitespace") for t in result.tokens)

    def test_exactly_half_is_text(self) -> None:
        """Ties resolve to text lines."""
        assert tokenize_line("Am G hello world").is_chord_line is False

    def test_majority_is_chords(self) -> None:
        """More than half chords is a chord line."""
        assert tokenize_line("Am G C hello").is_chord_line is True

    def test_chord_marker_forces_chord_line(self) -> None:
        """The chord-line marker wins over the ratio."""
        result = tokenize_line("Hello world Am %c")
        assert result.is_chord_line is True
        assert [t.kind for t in result.tokens if t.text == "Am"] == ["chord"]

    def test_text_marker_forces_text_line(self) -> None:
        """The text-line marker wins over the ratio."""
        result = tokenize_line("Am G F C %t")
        assert result.is_chord_line is False
        assert not any(t.kind == "chord" for t in result.tokens)

    def test_user_shape_forces_chord_line(self) -> None:
        """A user-defined shape makes a chord line whatever the ratio."""
        result = tokenize_line("Am[x02210] lyrics")
        chords = [t for t in result.tokens if isinstance(t, ChordToken)]
        assert len(chords) == 1
        assert chords[0].chord.user_shape is not None
        assert chords[0].chord.user_shape.frets == "x02210"
        assert chords[0].chord.user_shape.position == 0
        assert result.is_chord_line is True

    def test_user_shape_wins_over_text_marker(self) -> None:
        """Shape presence takes precedence over the text-line marker."""
        assert tokenize_line("Am[x02210] lyrics %t").is_chord_line is True


class TestOffsets:
    """Coordinate bases of token ranges."""

    def test_offset_applies_to_tokens(self) -> None:
        """Token ranges are shifted by the line offset."""
        result = tokenize_line("Am G", offset=100)
        assert [t.range for t in result.tokens] == [(100, 102), (102, 103), (103, 104)]

    def test_chord_symbol_range_is_token_local(self) -> None:
        """Chord symbol sub-ranges do not include the line offset."""
        result = tokenize_line("la [Am]", offset=10)
        chord = result.tokens[-1]
        assert isinstance(chord, ChordToken)
        assert chord.range == (13, 17)
        assert chord.chord_symbol.range == (1, 3)
        assert chord.symbol_range == (14, 16)


class TestReconstruction:
    """Token texts rebuild the line exactly."""

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "   ",
            "Hello world",
            "Am G F C",
            "  Am   G  %c  ",
            "[Verse 1]",
            "  [Chorus]\t",
            "The [C#/D#] Eastern world, it [F# solo.] is ex-[G#7  ]plodin'",
            "Some Am[x02210] user-defined C*4[3|x32010] chords C°[x34_24_]",
            "| G / / / | Am / C /  |    %    |",
            "@q=80 'Softly' {comment: x} ![[riff.png|300x200]] Chorus: la x2 again",
            "---",
            "~~ [ ] | tight|spacing~here",
        ],
    )
    def test_lossless(self, line: str) -> None:
        """Concatenated token texts equal the line."""
        result = tokenize_line(line)
        assert result.text == line
        assert "".join(t.text for t in result.tokens) == line

    def test_ranges_are_contiguous(self) -> None:
        """Each token starts where the previous one ended."""
        result = tokenize_line("Am  [G]la | / x2", offset=7)
        assert result.tokens[0].start == 7
        for previous, current in zip(result.tokens, result.tokens[1:]):
            assert current.start == previous.end


class TestPatternTable:
    """The pattern table guarantees progress."""

    def test_catch_all_patterns_are_last(self) -> None:
        """The generic patterns come after all specific ones."""
        names = [name for name, _, _ in tokenizer_module.inline_patterns("%c", "%t")]
        assert names[-3:] == ["word_or_rhythm", "word_or_chord", "whitespace"]
        assert names.index("chordpro_quoted") < names.index("curly_quoted")
        assert names.index("inline_chord") < names.index("word_or_chord")

    def test_no_match_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without the catch-all patterns the scan reports a defect."""
        table = (("whitespace", patterns.WHITESPACE_RE, tokenizer_module._LineScanner.on_whitespace),)
        monkeypatch.setattr(tokenizer_module, "inline_patterns", lambda *_: table)
        with pytest.raises(RuntimeError, match="No token pattern matches"):
            tokenize_line("Am")
