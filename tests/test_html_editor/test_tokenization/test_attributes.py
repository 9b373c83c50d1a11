"""Tests for attribute-list parsing."""

from html_editor.tokenization import parse_attributes


class TestParseAttributes:
    """Tests for parse_attributes."""

    def test_empty_string_has_no_attributes(self):
        """Test that an empty substring yields no pairs."""
        assert parse_attributes("") == []
        assert parse_attributes("   ") == []

    def test_bare_name_has_empty_value(self):
        """Test that a name without '=' gets an empty value."""
        assert parse_attributes("defer") == [("defer", "")]

    def test_all_value_forms(self):
        """Test unquoted, double-quoted, single-quoted and bare attributes."""
        attrs = parse_attributes("a=1 b=\"two words\" c='x y' d")

        assert attrs == [("a", "1"), ("b", "two words"), ("c", "x y"), ("d", "")]

    def test_whitespace_around_equals(self):
        """Test that whitespace around '=' is allowed."""
        assert parse_attributes('a = "1"  b= 2') == [("a", "1"), ("b", "2")]

    def test_consecutive_bare_names(self):
        """Test that bare names separated by whitespace stay separate."""
        assert parse_attributes("async defer") == [("async", ""), ("defer", "")]

    def test_duplicates_are_kept_in_order(self):
        """Test that duplicated names are preserved in source order."""
        assert parse_attributes("a=1 b=2 a=3") == [("a", "1"), ("b", "2"), ("a", "3")]

    def test_other_quote_inside_value(self):
        """Test that the non-delimiting quote is part of the value."""
        assert parse_attributes("data-x='it\"s'") == [("data-x", 'it"s')]

    def test_unterminated_quote_runs_to_end(self):
        """Test that an unterminated quoted value takes the rest of the input."""
        assert parse_attributes('a="x y') == [("a", "x y")]

    def test_stray_equals_is_skipped(self):
        """Test that '=' without a name in front of it is ignored."""
        assert parse_attributes("= a") == [("a", "")]

    def test_character_references_are_decoded(self):
        """Test that entities in values are decoded by default."""
        attrs = parse_attributes('href="?a=1&amp;b=2" title="&quot;hi&quot;"')

        assert attrs == [("href", "?a=1&b=2"), ("title", '"hi"')]

    def test_decoding_can_be_disabled(self):
        """Test that values are kept verbatim when decoding is off."""
        attrs = parse_attributes('href="?a=1&amp;b=2"', decode_entities=False)

        assert attrs == [("href", "?a=1&amp;b=2")]
