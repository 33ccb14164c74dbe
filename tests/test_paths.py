"""
Tests for the portastore.paths module.

This module tests:
- combine(): joining a base path with validated entry names
- validate_segment(): rejection of malformed names
- split_extension(): extension detection used for unique names
- PortablePath parsing and navigation
"""

import pytest

from portastore.exceptions import InvalidSegmentError
from portastore.paths import PortablePath, combine, split_extension, validate_segment


# =============================================================================
# combine Tests
# =============================================================================

class TestCombine:
    """Tests for combine()."""

    def test_joins_with_separator(self):
        """Test joining a base path and names."""
        assert combine("/data/app", "notes", "todo.txt", separator="/") == "/data/app/notes/todo.txt"

    def test_base_only(self):
        """Test that a lone base path is returned normalized."""
        assert combine("/data/app/", separator="/") == "/data/app"

    def test_collapses_repeated_separators_in_base(self):
        """Test that the base path never yields empty segments."""
        assert combine("/data//app", "x", separator="/") == "/data/app/x"

    def test_windows_separator_keeps_drive(self):
        """Test combining with a backslash separator and a drive."""
        assert combine("C:\\Users\\me", "file.txt", separator="\\") == "C:\\Users\\me\\file.txt"

    def test_relative_base(self):
        """Test that relative bases stay relative."""
        assert combine("data", "x", separator="/") == "data/x"

    def test_no_segments_raises(self):
        """Test that combine() needs at least a base."""
        with pytest.raises(InvalidSegmentError):
            combine()

    def test_empty_base_raises(self):
        """Test that an empty base path is rejected."""
        with pytest.raises(InvalidSegmentError):
            combine("", "x", separator="/")

    def test_name_with_separator_raises(self):
        """Test that names cannot smuggle in extra segments."""
        with pytest.raises(InvalidSegmentError):
            combine("/data", "a/b", separator="/")

    def test_empty_name_raises(self):
        """Test that empty names are rejected."""
        with pytest.raises(InvalidSegmentError):
            combine("/data", "", separator="/")


# =============================================================================
# validate_segment Tests
# =============================================================================

class TestValidateSegment:
    """Tests for validate_segment()."""

    @pytest.mark.parametrize("name", ["file.txt", "a b (2).txt", ".hidden", "no_extension"])
    def test_valid_names(self, name):
        """Test that ordinary names pass through unchanged."""
        assert validate_segment(name, "/") == name

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "nul\x00char"])
    def test_invalid_names(self, name):
        """Test that malformed names are rejected."""
        with pytest.raises(InvalidSegmentError) as exc_info:
            validate_segment(name, "/")

        assert exc_info.value.error_code == "INVALID_SEGMENT"

    def test_non_string_rejected(self):
        """Test that non-string names are rejected."""
        with pytest.raises(InvalidSegmentError):
            validate_segment(None, "/")

    def test_is_a_value_error(self):
        """Test that callers catching ValueError also catch invalid segments."""
        with pytest.raises(ValueError):
            validate_segment("", "/")


# =============================================================================
# split_extension Tests
# =============================================================================

class TestSplitExtension:
    """Tests for split_extension()."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("file.txt", ("file", ".txt")),
            ("a.b.txt", ("a.b", ".txt")),
            ("foo", ("foo", "")),
            (".bashrc", ("", ".bashrc")),
            ("archive.", ("archive", ".")),
        ],
    )
    def test_split(self, name, expected):
        """Test extension detection on the last dot."""
        assert split_extension(name) == expected


# =============================================================================
# PortablePath Tests
# =============================================================================

class TestPortablePath:
    """Tests for PortablePath."""

    def test_parse_absolute(self):
        """Test parsing an absolute path into anchor and segments."""
        path = PortablePath.parse("/a/b/c", "/")

        assert path.anchor == "/"
        assert path.segments == ("a", "b", "c")
        assert str(path) == "/a/b/c"

    def test_name_and_parent(self):
        """Test navigation to the last segment and the parent."""
        path = PortablePath.parse("/a/b/c.txt", "/")

        assert path.name == "c.txt"
        assert str(path.parent) == "/a/b"

    def test_anchor_has_no_parent(self):
        """Test that the bare anchor is the top of the tree."""
        path = PortablePath.parse("/", "/")

        assert path.name == ""
        assert path.parent is None
        assert str(path) == "/"

    def test_join_validates(self):
        """Test that join() applies segment validation."""
        path = PortablePath.parse("/a", "/")

        assert str(path.join("b", "c")) == "/a/b/c"
        with pytest.raises(InvalidSegmentError):
            path.join("..")

    def test_windows_drive_root(self):
        """Test parsing a drive root with a backslash separator."""
        path = PortablePath.parse("C:\\", "\\")

        assert path.anchor == "C:\\"
        assert path.segments == ()
        assert str(path) == "C:\\"

    def test_immutable(self):
        """Test that paths are frozen values."""
        path = PortablePath.parse("/a", "/")

        with pytest.raises(AttributeError):
            path.anchor = "/b"
