"""Unit tests for configuration models."""

import pytest

from glyphdupe.config import (
    CanonicalConfig,
    GlyphDupeSettings,
    MatchConfig,
    ProbeConfig,
    build_settings,
)
from glyphdupe.exceptions import ConfigurationError


class TestMatchConfig:
    """Tests for the match threshold."""

    @pytest.mark.parametrize(
        ("pct", "total", "expected"),
        [
            (80, 88, 71),
            (80, 10, 8),
            (100, 7, 7),
            (50, 3, 2),
            (33.3, 3, 1),
            (0.1, 88, 1),
        ],
    )
    def test_min_matches_rounds_up(self, pct, total, expected):
        assert MatchConfig(match_pct=pct).min_matches(total) == expected

    @pytest.mark.parametrize("pct", [0, -5, 100.5])
    def test_out_of_range(self, pct):
        with pytest.raises(ConfigurationError, match="match_pct"):
            build_settings(match={"match_pct": pct})


class TestCanonicalConfig:
    def test_scale_for(self):
        config = CanonicalConfig()
        assert config.scale_for(2000) == 0.5
        assert config.scale_for(1000) == 1.0

    def test_scale_disabled(self):
        assert CanonicalConfig(normalize_upm=False).scale_for(2048) == 1.0

    def test_grid_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="grid"):
            build_settings(canonical={"grid": 0})


class TestProbeConfig:
    def test_string_probe(self):
        assert ProbeConfig(test_string="aab").build_probe_set().characters() == "ab"

    def test_nam_overrides_string(self, tmp_path):
        nam = tmp_path / "x.nam"
        nam.write_text("0x0078 x\n", encoding="utf-8")
        probe = ProbeConfig(test_string="abc", test_nam=nam).build_probe_set()
        assert probe.characters() == "x"

    def test_empty_string_rejected(self):
        with pytest.raises(ConfigurationError):
            ProbeConfig(test_string="").build_probe_set()


class TestSettings:
    def test_defaults(self):
        settings = GlyphDupeSettings()
        assert settings.match.match_pct == 80.0
        assert settings.canonical.grid == 1.0
        assert settings.canonical.normalize_upm
        assert settings.processing.max_workers is None
        assert settings.font.location == {}

    def test_sections(self):
        settings = build_settings(
            match={"match_pct": 60}, font={"location": {"wght": 700}}, processing={"max_workers": 2}
        )
        assert settings.match.min_matches(10) == 6
        assert settings.font.location == {"wght": 700.0}
        assert settings.processing.max_workers == 2

    def test_invalid_workers(self):
        with pytest.raises(ConfigurationError):
            build_settings(processing={"max_workers": 0})
