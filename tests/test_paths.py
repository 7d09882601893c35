"""Tests for path normalization."""

from __future__ import annotations

import pytest

from drivefs import paths
from drivefs.errors import InvalidArgumentError


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "/"),
            ("/", "/"),
            ("a", "/a"),
            ("/a/b", "/a/b"),
            ("a\\b\\c", "/a/b/c"),
            ("//a///b//", "/a/b"),
            ("/a/./b/", "/a/b"),
            ("/a/b/../c", "/a/c"),
            ("/../../a", "/a"),
            ("..", "/"),
        ],
    )
    def test_absolute(self, raw: str, expected: str) -> None:
        """Test paths are canonicalized to absolute form."""
        assert paths.normalize(raw) == expected

    def test_relative_keeps_relative(self) -> None:
        """Test a relative path stays relative when absolute is False."""
        assert paths.normalize("a/./b/../c", absolute=False) == "a/c"

    def test_relative_with_leading_separator_is_absolute(self) -> None:
        """Test a leading separator wins over absolute=False."""
        assert paths.normalize("\\a\\b", absolute=False) == "/a/b"

    def test_relative_empty(self) -> None:
        """Test a relative path with no segments becomes empty."""
        assert paths.normalize("./..", absolute=False) == ""

    def test_idempotent(self) -> None:
        """Test normalizing a canonical path returns it unchanged."""
        canonical = paths.normalize("x/../y/z/")
        assert paths.normalize(canonical) == canonical

    def test_none_raises(self) -> None:
        """Test None is rejected."""
        with pytest.raises(InvalidArgumentError):
            paths.normalize(None)  # type: ignore[arg-type]


class TestCombine:
    """Tests for combine()."""

    def test_relative_parts(self) -> None:
        """Test relative parts are joined without a leading separator."""
        assert paths.combine("a", "b", "c.txt") == "a/b/c.txt"

    def test_absolute_part_resets(self) -> None:
        """Test an absolute part discards what came before it."""
        assert paths.combine("a", "/b", "c") == "/b/c"

    def test_skips_blank_parts(self) -> None:
        """Test empty and whitespace parts are ignored."""
        assert paths.combine("/a", "", "  ", "b") == "/a/b"

    def test_no_parts(self) -> None:
        """Test combining nothing yields an empty path."""
        assert paths.combine() == ""

    def test_parent_segments_collapse(self) -> None:
        """Test '..' segments collapse across parts."""
        assert paths.combine("/a/b", "../c") == "/a/c"


class TestSegments:
    """Tests for segment helpers."""

    def test_split_root(self) -> None:
        """Test the root has no segments."""
        assert paths.split_segments("/") == []

    def test_split_nested(self) -> None:
        """Test segments of a nested path."""
        assert paths.split_segments("/a/b/c") == ["a", "b", "c"]

    def test_join_root(self) -> None:
        """Test joining onto the root does not double the separator."""
        assert paths.join("/", "a") == "/a"

    def test_join_nested(self) -> None:
        """Test joining onto a nested path."""
        assert paths.join("/a", "b") == "/a/b"

    @pytest.mark.parametrize(
        ("path", "expected"),
        [("/", "/"), ("/a", "/"), ("/a/b", "/a"), ("/a/b/c", "/a/b")],
    )
    def test_parent_path(self, path: str, expected: str) -> None:
        """Test parent paths, including the root's own parent."""
        assert paths.parent_path(path) == expected

    def test_file_name(self) -> None:
        """Test the last segment is returned."""
        assert paths.file_name("/a/b/report.txt") == "report.txt"

    def test_file_name_root_raises(self) -> None:
        """Test the root has no file name."""
        with pytest.raises(InvalidArgumentError):
            paths.file_name("/")


class TestHints:
    """Tests for directory hints and containment."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("a/", True), ("a\\", True), ("a", False), ("", False), ("/", True)],
    )
    def test_is_directory_hint(self, raw: str, expected: bool) -> None:
        """Test a trailing separator marks a directory."""
        assert paths.is_directory_hint(raw) is expected

    def test_is_within_self(self) -> None:
        """Test a path lies within itself."""
        assert paths.is_within("/a", "/a") is True

    def test_is_within_child(self) -> None:
        """Test a descendant lies within its ancestor."""
        assert paths.is_within("/a/b/c", "/a") is True

    def test_is_within_sibling_prefix(self) -> None:
        """Test a sibling sharing a name prefix is not within."""
        assert paths.is_within("/ab", "/a") is False

    def test_everything_within_root(self) -> None:
        """Test every path lies within the root."""
        assert paths.is_within("/x/y", "/") is True
