"""Chord sheet settings.

The tokenizer only reads the two line markers. The remaining options are
display toggles passed through to the renderer.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Literal

DEFAULT_CHORD_LINE_MARKER = "%c"
DEFAULT_TEXT_LINE_MARKER = "%t"

ShowMode = Literal["never", "preview", "always"]
SHOW_MODES: tuple[str, ...] = ("never", "preview", "always")

# Host settings keys (camelCase, as stored by the host) to field names
SETTINGS_KEYS: dict[str, str] = {
    "chordLineMarker": "chord_line_marker",
    "textLineMarker": "text_line_marker",
    "showChordDiagramsOnHover": "show_chord_diagrams_on_hover",
    "showChordOverview": "show_chord_overview",
    "diagramWidth": "diagram_width",
    "highlightChords": "highlight_chords",
    "highlightSectionHeaders": "highlight_section_headers",
    "highlightRhythmMarkers": "highlight_rhythm_markers",
    "instrument": "instrument",
}


@dataclass(frozen=True)
class SheetSettings:
    """Settings for chord sheet tokenization and display.

    Parameters
    ----------
    chord_line_marker : str
        Marker forcing a line to be read as chords.
    text_line_marker : str
        Marker forcing a line to be read as lyrics.
    show_chord_diagrams_on_hover : ShowMode
        When the renderer shows a diagram popup for a chord.
    show_chord_overview : ShowMode
        When the renderer shows the overview of all chords of a block.
    diagram_width : int
        Diagram width in pixels.
    highlight_chords : bool
        Whether chords are highlighted.
    highlight_section_headers : bool
        Whether section headers are highlighted.
    highlight_rhythm_markers : bool
        Whether rhythm markers are highlighted.
    instrument : str
        Name of the instrument whose shape database is used for diagrams.

    Examples
    --------
    >>> SheetSettings().chord_line_marker
    '%c'
    >>> SheetSettings.from_dict({"chordLineMarker": "!c"}).chord_line_marker
    '!c'
    """

    chord_line_marker: str = DEFAULT_CHORD_LINE_MARKER
    text_line_marker: str = DEFAULT_TEXT_LINE_MARKER
    show_chord_diagrams_on_hover: ShowMode = "preview"
    show_chord_overview: ShowMode = "never"
    diagram_width: int = 100
    highlight_chords: bool = True
    highlight_section_headers: bool = True
    highlight_rhythm_markers: bool = True
    instrument: str = "guitar"

    def __post_init__(self) -> None:
        if not self.chord_line_marker or not self.text_line_marker:
            msg = "Line markers must not be empty"
            raise ValueError(msg)
        if self.chord_line_marker == self.text_line_marker:
            msg = f"Chord and text line markers must differ, both are {self.chord_line_marker!r}"
            raise ValueError(msg)
        for name in ("show_chord_diagrams_on_hover", "show_chord_overview"):
            value = getattr(self, name)
            if value not in SHOW_MODES:
                msg = f"Invalid value for {name}: {value!r} (expected one of {', '.join(SHOW_MODES)})"
                raise ValueError(msg)
        if self.diagram_width <= 0:
            msg = f"Diagram width must be positive, got {self.diagram_width}"
            raise ValueError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SheetSettings:
        """Build settings from a host settings mapping.

        Keys may be the host's camelCase names or the field names. Unknown
        keys are ignored so that settings saved by newer hosts still load.

        Parameters
        ----------
        data : Mapping[str, Any]
            The stored settings.

        Returns
        -------
        SheetSettings
            Settings with defaults for missing keys.

        Raises
        ------
        ValueError
            If a value is invalid.
        """
        field_names = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = SETTINGS_KEYS.get(key, key)
            if name in field_names:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the settings keyed by the host's camelCase names."""
        return {key: getattr(self, name) for key, name in SETTINGS_KEYS.items()}
