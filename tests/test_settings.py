"""Tests for chord sheet settings."""

import pytest

from chord_sheets.settings import SETTINGS_KEYS, SheetSettings


class TestSheetSettings:
    """Test settings defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = SheetSettings()
        assert settings.chord_line_marker == "%c"
        assert settings.text_line_marker == "%t"
        assert settings.show_chord_diagrams_on_hover == "preview"
        assert settings.show_chord_overview == "never"
        assert settings.diagram_width == 100
        assert settings.instrument == "guitar"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"chord_line_marker": ""},
            {"text_line_marker": ""},
            {"chord_line_marker": "%x", "text_line_marker": "%x"},
            {"show_chord_overview": "sometimes"},
            {"show_chord_diagrams_on_hover": "hover"},
            {"diagram_width": 0},
        ],
    )
    def test_invalid_values(self, kwargs: dict) -> None:
        """Test that invalid values are rejected."""
        with pytest.raises(ValueError):
            SheetSettings(**kwargs)


class TestFromDict:
    """Test building settings from stored mappings."""

    def test_camel_case_keys(self) -> None:
        """Host keys are mapped to fields."""
        settings = SheetSettings.from_dict(
            {"chordLineMarker": "!c", "textLineMarker": "!t", "showChordOverview": "always", "diagramWidth": 140}
        )
        assert settings.chord_line_marker == "!c"
        assert settings.text_line_marker == "!t"
        assert settings.show_chord_overview == "always"
        assert settings.diagram_width == 140

    def test_field_names(self) -> None:
        """Field names are accepted too."""
        assert SheetSettings.from_dict({"instrument": "ukulele"}).instrument == "ukulele"
        assert SheetSettings.from_dict({"highlight_chords": False}).highlight_chords is False

    def test_unknown_keys_are_ignored(self) -> None:
        """Settings from newer hosts still load."""
        assert SheetSettings.from_dict({"someFutureOption": 1}) == SheetSettings()

    def test_invalid_value(self) -> None:
        """Validation applies to loaded values."""
        with pytest.raises(ValueError, match="Invalid value for show_chord_overview"):
            SheetSettings.from_dict({"showChordOverview": "sometimes"})

    def test_to_dict_round_trip(self) -> None:
        """to_dict output loads back to equal settings."""
        settings = SheetSettings(instrument="ukulele", highlight_rhythm_markers=False)
        data = settings.to_dict()
        assert set(data) == set(SETTINGS_KEYS)
        assert SheetSettings.from_dict(data) == settings
