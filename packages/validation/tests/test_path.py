"""Tests for PropertyPath."""

import pytest

from dataknobs_validation.path import IndexSegment, NamedSegment, PropertyPath


class TestRendering:
    """Test string rendering of paths."""

    def test_single_segment(self):
        """Test a single named segment renders as itself."""
        assert str(PropertyPath("name")) == "name"

    def test_nested_children_dot_joined(self):
        """Test named segments are dot-joined."""
        assert str(PropertyPath("user").child("email")) == "user.email"

    def test_index_after_name(self):
        """Test indexed segments are bracketed without a dot."""
        assert str(PropertyPath("items").index(0).child("name")) == "items[0].name"

    def test_deep_nesting(self):
        """Test mixed nesting of fields and indices."""
        path = PropertyPath("orders").index(1).child("items").index(3).child("name")
        assert str(path) == "orders[1].items[3].name"

    def test_empty_path(self):
        """Test the empty path renders as an empty string."""
        assert str(PropertyPath.EMPTY) == ""
        assert PropertyPath.root() is PropertyPath.EMPTY
        assert PropertyPath.EMPTY.is_empty()
        assert not PropertyPath.EMPTY

    def test_index_on_empty_path(self):
        """Test an index on the root renders as a bare bracket."""
        assert str(PropertyPath.EMPTY.index(2)) == "[2]"

    def test_positional_constructor(self):
        """Test building a path from mixed str/int segments."""
        assert PropertyPath("items", 0, "name") == PropertyPath("items").index(0).child("name")


class TestEquality:
    """Test structural equality of paths."""

    def test_equal_paths(self):
        """Test equal segment sequences compare and hash equal."""
        a = PropertyPath("user").child("email")
        b = PropertyPath("user").child("email")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_paths(self):
        """Test differing names are unequal."""
        assert PropertyPath("user").child("email") != PropertyPath("user").child("name")

    def test_index_not_equal_to_named(self):
        """Test an index segment differs from a name with the same text."""
        assert PropertyPath("items").index(0) != PropertyPath("items").child("0")

    def test_parent_not_mutated(self):
        """Test extending a path leaves the parent untouched."""
        parent = PropertyPath("items")
        parent.child("a")
        parent.index(1)
        assert str(parent) == "items"
        assert parent.segments == (NamedSegment("items"),)


class TestParseAndJoin:
    """Test parsing rendered paths and joining paths."""

    def test_parse_round_trip(self):
        """Test parsing yields typed segments."""
        path = PropertyPath.parse("orders[1].items[3].name")
        assert path.segments == (
            NamedSegment("orders"),
            IndexSegment(1),
            NamedSegment("items"),
            IndexSegment(3),
            NamedSegment("name"),
        )

    def test_parse_empty(self):
        """Test parsing the empty string."""
        assert PropertyPath.parse("") == PropertyPath.EMPTY

    @pytest.mark.parametrize("text", ["a..b", "a.", ".a", "a.[0]", "a[x]", "a[0"])
    def test_parse_malformed(self, text):
        """Test malformed paths are rejected."""
        with pytest.raises(ValueError):
            PropertyPath.parse(text)

    def test_join(self):
        """Test joining appends all segments."""
        joined = PropertyPath("address").join(PropertyPath("lines", 0))
        assert str(joined) == "address.lines[0]"

    def test_join_with_empty(self):
        """Test joining with the empty path is the identity."""
        path = PropertyPath("a")
        assert path.join(PropertyPath.EMPTY) is path
        assert PropertyPath.EMPTY.join(path) is path

    def test_child_from_string(self):
        """Test appending a rendered path."""
        path = PropertyPath("user").child_from_string("tags[0].value")
        assert path == PropertyPath("user", "tags", 0, "value")

    def test_negative_index_rejected(self):
        """Test negative indices are invalid."""
        with pytest.raises(ValueError):
            PropertyPath("items").index(-1)
