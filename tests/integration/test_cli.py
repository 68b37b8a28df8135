"""End-to-end tests of the glyphdupe command line."""

import pytest
from conftest import shape
from typer.testing import CliRunner

from glyphdupe.cli.app import app, parse_location
from glyphdupe.exceptions import ConfigurationError

runner = CliRunner()


@pytest.fixture
def corpus(tmp_path, font_factory, full_glyphs, probe_text):
    """Two copies of one design (one shifted) and an unrelated font."""
    other = {ch: shape(i + 40) for i, ch in enumerate(probe_text)}
    return {
        "a": font_factory("a.ttf", full_glyphs),
        "b": font_factory("b.ttf", full_glyphs, dx=25),
        "c": font_factory("c.ttf", other),
    }


def invoke(*args):
    return runner.invoke(app, [str(a) for a in args])


class TestReport:
    """Tests for the group report."""

    def test_reports_copied_fonts(self, corpus, probe_text):
        result = invoke(corpus["a"].parent, "--test-string", probe_text, "-j", "1", "-q")

        assert result.exit_code == 0
        assert "Showing groups where at least 8/10 glyphs match" in result.output
        assert "Group, Score" in result.output
        assert f"{{{corpus['a']}, {corpus['b']}}}, 10/10" in result.output
        assert str(corpus["c"]) not in result.output

    def test_output_is_reproducible(self, corpus, probe_text):
        args = (corpus["c"], corpus["b"], corpus["a"], "--test-string", probe_text, "-q")
        first = invoke(*args, "-j", "1")
        second = invoke(*args, "-j", "2")
        assert first.exit_code == second.exit_code == 0
        assert first.output == second.output

    def test_match_pct_changes_header(self, corpus, probe_text):
        result = invoke(corpus["a"], corpus["b"], "--test-string", probe_text, "-m", "55", "-j", "1", "-q")
        assert result.exit_code == 0
        assert "at least 6/10 glyphs match" in result.output

    def test_nothing_to_report(self, corpus, probe_text):
        result = invoke(corpus["a"], corpus["c"], "--test-string", probe_text, "-j", "1", "-q")
        assert result.exit_code == 0
        assert result.output.rstrip().endswith("Group, Score")

    def test_dump_groups_lists_shared_glyphs(self, corpus, probe_text):
        result = invoke(
            corpus["a"], corpus["b"], "--test-string", probe_text, "--dump-groups", "-j", "1", "-q"
        )
        assert result.exit_code == 0
        assert f"shared (10): {probe_text}" in result.output

    def test_dump_glyphs(self, corpus, probe_text, tmp_path):
        out = tmp_path / "dump"
        result = invoke(
            corpus["a"],
            corpus["c"],
            "--test-string",
            "ab",
            "--dump-glyphs",
            "--working-dir",
            out,
            "-j",
            "1",
            "-q",
        )
        assert result.exit_code == 0
        assert (out / "U+0061-inconsistent.svg").is_file()
        assert (out / "outlines.tsv").read_text(encoding="utf-8").startswith("path\tcodepoint")

    def test_location_selects_instance(self, font_factory, full_glyphs, probe_text):
        a = font_factory(
            "a.ttf", full_glyphs, heavy={ch: shape(i + 50) for i, ch in enumerate(probe_text)}
        )
        b = font_factory(
            "b.ttf", full_glyphs, heavy={ch: shape(i + 80) for i, ch in enumerate(probe_text)}
        )
        args = (a, b, "--test-string", probe_text, "-j", "1", "-q")

        assert f"{{{a}, {b}}}, 10/10" in invoke(*args).output
        heavy = invoke(*args, "--location", "wght=900")
        assert heavy.exit_code == 0
        assert "10/10" not in heavy.output

    def test_status_output(self, corpus, probe_text):
        result = invoke(corpus["a"], corpus["b"], "--test-string", probe_text, "-j", "1")
        assert result.exit_code == 0
        assert "glyphdupe" in result.output
        assert "Complete" in result.output


class TestErrors:
    """Tests for exit codes and warnings."""

    def test_invalid_match_pct(self, corpus):
        result = invoke(corpus["a"], "--match-pct", "150")
        assert result.exit_code == 1
        assert "match_pct" in result.output

    def test_empty_test_string(self, corpus):
        result = invoke(corpus["a"], "--test-string", "")
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_invalid_location(self, corpus):
        result = invoke(corpus["a"], "--location", "wght")
        assert result.exit_code == 1

    def test_unreadable_nam_file(self, corpus, tmp_path):
        nam = tmp_path / "latin1.nam"
        nam.write_bytes(b"0x0041\n\xff\xfe garbage\n")
        result = invoke(corpus["a"], "--test-nam", nam, "-q")
        assert result.exit_code == 1
        assert "Unable to read nam file" in result.output

    def test_invalid_log_level(self, corpus):
        result = invoke(corpus["a"], "--log-level", "LOUD")
        assert result.exit_code == 1

    def test_verbose_and_quiet(self, corpus):
        result = invoke(corpus["a"], "-v", "-q")
        assert result.exit_code == 1

    def test_missing_path_is_skipped(self, corpus, probe_text, tmp_path):
        result = invoke(
            tmp_path / "missing.ttf",
            corpus["a"],
            corpus["b"],
            "--test-string",
            probe_text,
            "-j",
            "1",
        )
        assert result.exit_code == 0
        assert "Cannot use" in result.output
        assert "10/10" in result.output

    def test_broken_font_is_skipped(self, corpus, probe_text, tmp_path):
        broken = tmp_path / "zz-broken.ttf"
        broken.write_bytes(b"not a font")
        result = invoke(corpus["a"], corpus["b"], broken, "--test-string", probe_text, "-j", "1", "-q")
        assert result.exit_code == 0
        assert "Skipped" in result.output
        assert "10/10" in result.output

    def test_no_fonts(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = invoke(empty, "-q")
        assert result.exit_code == 0
        assert "no fonts" in result.output

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert "glyphdupe" in result.output


class TestParseLocation:
    def test_parses_pairs(self):
        assert parse_location(["wght=700", "wdth=87.5"]) == {"wght": 700.0, "wdth": 87.5}

    @pytest.mark.parametrize("value", ["wght", "=700", "wght=bold", "toolong=1"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ConfigurationError):
            parse_location([value])
