"""Tests for domain models."""

from pathlib import Path

import pytest

from glyphdupe.domain import (
    DEFAULT_PROBE_STRING,
    Contour,
    GlyphOutline,
    Group,
    PairScore,
    Point,
    PointType,
    ProbeSet,
    parse_nam_line,
)
from glyphdupe.exceptions import ConfigurationError


class TestPoint:
    """Tests for Point."""

    def test_default_on_curve(self):
        assert Point(1, 2).point_type is PointType.ON_CURVE

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Point(1, 2).x = 3  # type: ignore[misc]

    def test_control_point(self):
        assert Point(0, 0, PointType.OFF_CURVE_CUBIC).point_type is not PointType.ON_CURVE

    def test_hashable(self):
        assert len({Point(0, 0), Point(0, 0), Point(0, 1)}) == 2


class TestContour:
    """Tests for Contour."""

    def test_equality_follows_points(self):
        points = [Point(0, 0), Point(10, 0), Point(10, 10)]
        assert Contour(points=list(points)) == Contour(points=list(points))
        assert Contour(points=points) != Contour(points=points[::-1])


class TestGlyphOutline:
    """Tests for GlyphOutline."""

    def test_empty(self):
        assert GlyphOutline().is_empty()
        assert GlyphOutline(contours=[Contour(points=[])]).is_empty()

    def test_point_count(self):
        outline = GlyphOutline(
            contours=[
                Contour(points=[Point(0, 0), Point(1, 0), Point(1, 1)]),
                Contour(points=[Point(5, 5), Point(6, 5), Point(6, 6), Point(5, 6)]),
            ]
        )
        assert not outline.is_empty()
        assert outline.point_count == 7


class TestProbeSet:
    """Tests for ProbeSet."""

    def test_from_string_deduplicates_in_order(self):
        probe = ProbeSet.from_string("abcab")
        assert probe.characters() == "abc"
        assert len(probe) == 3
        assert list(probe) == [ord("a"), ord("b"), ord("c")]

    def test_index_of(self):
        probe = ProbeSet.from_string("xyz")
        assert probe.index_of(ord("z")) == 2
        assert ord("y") in probe
        with pytest.raises(KeyError):
            probe.index_of(ord("a"))

    def test_empty_rejected(self):
        with pytest.raises(ConfigurationError, match="empty"):
            ProbeSet.from_string("")

    def test_surrogate_rejected(self):
        with pytest.raises(ConfigurationError):
            ProbeSet([0xD800])

    def test_equality_and_hash(self):
        assert ProbeSet.from_string("ab") == ProbeSet([97, 98, 97])
        assert hash(ProbeSet.from_string("ab")) == hash(ProbeSet([97, 98]))
        assert ProbeSet.from_string("ab") != ProbeSet.from_string("ba")

    def test_default_probe_string(self):
        probe = ProbeSet.from_string(DEFAULT_PROBE_STRING)
        assert len(probe) == len(DEFAULT_PROBE_STRING)
        assert " " not in probe.characters()
        assert probe.characters().startswith("abc")

    def test_from_nam(self, tmp_path):
        nam = tmp_path / "core.nam"
        nam.write_text(
            "# Latin core\n"
            "0x0041  LATIN CAPITAL LETTER A\n"
            "\n"
            "0x0062 LATIN SMALL LETTER B  # comment\n"
            "0x0041  duplicate\n",
            encoding="utf-8",
        )
        assert ProbeSet.from_nam(nam).characters() == "Ab"

    def test_from_nam_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Unable to read"):
            ProbeSet.from_nam(tmp_path / "missing.nam")

    def test_from_nam_not_utf8(self, tmp_path):
        nam = tmp_path / "latin1.nam"
        nam.write_bytes(b"0x0041\n\xff\xfe garbage\n")
        with pytest.raises(ConfigurationError, match="Unable to read"):
            ProbeSet.from_nam(nam)

    def test_from_nam_without_codepoints(self, tmp_path):
        nam = tmp_path / "empty.nam"
        nam.write_text("# nothing here\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            ProbeSet.from_nam(nam)


class TestParseNamLine:
    """Tests for .nam line parsing."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("0x0041 LATIN CAPITAL LETTER A", 0x41),
            ("0x1F600", 0x1F600),
            ("  0x00E9  # e acute", 0xE9),
            ("", None),
            ("# only a comment", None),
            ("U+0041 not a nam line", None),
        ],
    )
    def test_lines(self, line, expected):
        assert parse_nam_line(line) == expected

    def test_bad_hex(self):
        with pytest.raises(ConfigurationError):
            parse_nam_line("0xZZZZ BAD")

    def test_out_of_range(self):
        with pytest.raises(ConfigurationError):
            parse_nam_line("0x110000")


class TestScores:
    """Tests for PairScore and Group."""

    def test_pair_key_is_order_independent(self):
        a = PairScore(Path("b.ttf"), Path("a.ttf"), 3, 10)
        assert a.key() == ("a.ttf", "b.ttf")
        assert a.ratio == 0.3

    def test_group_sort_key(self):
        high = Group(members=(Path("z.ttf"), Path("zz.ttf")), matches=9, total=10)
        low = Group(members=(Path("a.ttf"), Path("b.ttf")), matches=8, total=10)
        tie = Group(members=(Path("c.ttf"), Path("d.ttf")), matches=8, total=10)
        assert sorted([tie, low, high], key=Group.sort_key) == [high, low, tie]

    def test_group_membership(self):
        group = Group(members=(Path("a.ttf"), Path("b.ttf")), matches=8, total=10)
        assert Path("a.ttf") in group
        assert Path("c.ttf") not in group
        assert group.size == 2
        assert group.ratio == 0.8
