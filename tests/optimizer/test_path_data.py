"""Tests for path data and transform parsing and formatting."""

import pytest

from vjs_svg_sprite.optimizer.path_data import (
    PathDataError,
    boxes_intersect,
    convert_path_data,
    convert_transform,
    format_number,
    join_numbers,
    parse_path_data,
    parse_transform,
    path_bounding_box,
)


class TestFormatNumber:
    """Test compact number formatting."""

    @pytest.mark.parametrize(
        ("value", "precision", "expected"),
        [
            (0.5, 3, ".5"),
            (-0.25, 3, "-.25"),
            (10.0, 3, "10"),
            (100, 3, "100"),
            (1.23456, 3, "1.235"),
            (0.0001, 3, "0"),
            (-0.0, 3, "0"),
            (2.5, 0, "2"),
        ],
    )
    def test_format_number(self, value: float, precision: int, expected: str):
        """Test rounding and stripping redundant characters."""
        assert format_number(value, precision) == expected

    def test_join_numbers(self):
        """Test separators are only emitted where the grammar needs them."""
        assert join_numbers(["1", "-2", ".5"]) == "1-2 .5"
        assert join_numbers(["1.5", ".5"]) == "1.5.5"
        assert join_numbers(["2", "2"], previous="1") == " 2 2"


class TestParsePathData:
    """Test parsing path data into absolute segments."""

    def test_relative_commands(self):
        """Test relative commands are made absolute."""
        assert parse_path_data("M10 20l5 5h-3z") == [
            ("M", [10.0, 20.0]),
            ("L", [15.0, 25.0]),
            ("H", [12.0]),
            ("Z", []),
        ]

    def test_implicit_lineto_after_moveto(self):
        """Test extra pairs after a moveto become linetos."""
        assert parse_path_data("m1 1 2 2") == [("M", [1.0, 1.0]), ("L", [3.0, 3.0])]

    def test_packed_arc_flags(self):
        """Test arc flags written without separators."""
        assert parse_path_data("M0 0a5 5 0 1010 0") == [
            ("M", [0.0, 0.0]),
            ("A", [5.0, 5.0, 0.0, 1.0, 0.0, 10.0, 0.0]),
        ]

    def test_close_path_returns_to_subpath_start(self):
        """Test relative commands after z start from the subpath start."""
        segments = parse_path_data("M5 5l1 0zl0 1")
        assert segments[-1] == ("L", [5.0, 6.0])

    def test_compact_numbers(self):
        """Test numbers separated only by signs and decimal points."""
        assert parse_path_data("M.5.5l-1-1") == [("M", [0.5, 0.5]), ("L", [-0.5, -0.5])]

    @pytest.mark.parametrize("data", ["M10", "X1 2", "10 20", "M0 0a5 5 0 2 0 1 1"])
    def test_invalid(self, data: str):
        """Test malformed path data raises PathDataError."""
        with pytest.raises(PathDataError):
            parse_path_data(data)


class TestConvertPathData:
    """Test compact path data output."""

    def test_axis_aligned_lines(self):
        """Test axis-aligned lines become H/V commands."""
        assert convert_path_data("M 10 20 L 10 14 L 14 14") == "M10 20v-6h4"

    def test_close_path(self):
        """Test close path is written in lower case."""
        assert convert_path_data("M0 0L10 0L10 10Z") == "M0 0h10v10z"

    def test_repeated_command_letter_dropped(self):
        """Test consecutive segments of the same command share one letter."""
        assert convert_path_data("M0 0l1 1l2 2") == "M0 0l1 1 2 2"

    def test_precision(self):
        """Test coordinates are rounded to the requested precision."""
        assert convert_path_data("M0.12345 0L1.23456 0", 2) == "M.12 0h1.11"

    def test_absolute_when_shorter(self):
        """Test absolute coordinates win when they are shorter."""
        assert convert_path_data("M22 12L12 3L2 12") == "M22 12L12 3 2 12"


class TestBoundingBoxes:
    """Test path bounding boxes."""

    def test_path_bounding_box(self):
        """Test a box enclosing every point."""
        segments = parse_path_data("M0 0L10 5H-2V7")
        assert path_bounding_box(segments) == (-2.0, 0.0, 10.0, 7.0)

    def test_empty_path(self):
        """Test an empty path has no box."""
        assert path_bounding_box([]) is None

    def test_boxes_intersect(self):
        """Test overlap detection."""
        assert not boxes_intersect((0, 0, 1, 1), (2, 2, 3, 3))
        assert boxes_intersect((0, 0, 1, 1), (1, 0, 2, 1))
        assert boxes_intersect((0, 0, 4, 4), (1, 1, 2, 2))
        assert not boxes_intersect(None, (0, 0, 1, 1))


class TestTransforms:
    """Test transform list handling."""

    def test_parse_transform(self):
        """Test parsing a transform list."""
        assert parse_transform("translate(10, 5) rotate(45)") == [
            ("translate", [10.0, 5.0]),
            ("rotate", [45.0]),
        ]

    def test_convert_transform_shortens_arguments(self):
        """Test redundant arguments are dropped."""
        assert convert_transform("translate(10, 0) scale(2, 2)") == "translate(10)scale(2)"
        assert convert_transform("rotate(45 0 0)") == "rotate(45)"

    def test_convert_transform_drops_identities(self):
        """Test identity transforms disappear."""
        assert convert_transform("translate(0,0) rotate(0) matrix(1 0 0 1 0 0)") == ""

    def test_invalid_transform(self):
        """Test unknown transform functions raise PathDataError."""
        with pytest.raises(PathDataError):
            parse_transform("skew(10)")
