"""Tests for serializing nodes back to markup."""

import pytest

from html_editor.nodes import Comment, Doctype, Element, RawHTML, Text, new_element
from html_editor.serialization import (
    HTMLSerializer,
    escape_attribute,
    escape_text,
    render_attributes,
    to_html,
)


class TestEscaping:
    """Tests for text and attribute escaping."""

    def test_escape_text(self):
        """Test that markup characters in text are escaped."""
        assert escape_text("a < b & c > d") == "a &lt; b &amp; c &gt; d"

    def test_escape_text_keeps_quotes(self):
        """Test that quotes in text are left alone."""
        assert escape_text("say \"hi\" 'there'") == "say \"hi\" 'there'"

    def test_escape_attribute(self):
        """Test that ampersands and double quotes are escaped in values."""
        assert escape_attribute('a "q" & <b>') == "a &quot;q&quot; &amp; <b>"

    def test_render_attributes(self):
        """Test attribute ordering and bare names."""
        rendered = render_attributes([("b", "1"), ("defer", ""), ("a", "2"), ("b", "3")])

        assert rendered == 'b="1" defer a="2" b="3"'


class TestElementSerialization:
    """Tests for element rendering."""

    def test_element_without_attributes(self):
        """Test an empty non-void element."""
        assert to_html(Element("div")) == "<div></div>"

    def test_nested_elements(self):
        """Test that children render in order inside the element."""
        element = Element("ul", [("class", "x")], [
            Element("li", [], [Text("a")]),
            Element("li", [], [Text("b")]),
        ])

        assert to_html(element) == '<ul class="x"><li>a</li><li>b</li></ul>'

    def test_void_element(self):
        """Test that void elements have no end tag."""
        assert to_html(Element("img", [("src", "x.png")])) == '<img src="x.png">'
        assert to_html(Element("hr")) == "<hr>"

    def test_void_element_ignores_children(self):
        """Test that children of a void element are never rendered."""
        assert to_html(Element("br", [], [Text("x")])) == "<br>"

    def test_void_detection_is_case_insensitive(self):
        """Test that <BR> renders without an end tag."""
        assert to_html(Element("BR")) == "<BR>"

    def test_boolean_attribute(self):
        """Test that an empty value renders as a bare attribute name."""
        element = new_element("script", [("src", "index.js"), ("defer", "")])

        assert to_html([element]) == '<script src="index.js" defer></script>'

    def test_attribute_values_are_escaped(self):
        """Test escaping inside double-quoted values."""
        element = Element("p", [("title", 'a "q" & b')])

        assert to_html(element) == '<p title="a &quot;q&quot; &amp; b"></p>'

    def test_script_text_is_not_escaped(self):
        """Test that raw-text bodies are written verbatim."""
        script = Element("script", [], [Text("if (a < b && c) {}")])
        style = Element("style", [], [Text("a > b {}")])

        assert to_html(script) == "<script>if (a < b && c) {}</script>"
        assert to_html(style) == "<style>a > b {}</style>"

    def test_raw_text_detection_is_case_insensitive(self):
        """Test that <SCRIPT> content is also written verbatim."""
        assert to_html(Element("SCRIPT", [], [Text("<")])) == "<SCRIPT><</SCRIPT>"

    def test_script_element_children_are_serialized_normally(self):
        """Test that only direct text children of script are raw."""
        script = Element("script", [], [Text("a<"), Element("b", [], [Text("<")])])

        assert to_html(script) == "<script>a<<b>&lt;</b></script>"


class TestLeafSerialization:
    """Tests for text, comments, doctypes and raw markup."""

    def test_text(self):
        """Test that text is escaped."""
        assert to_html(Text("1 < 2 & 3")) == "1 &lt; 2 &amp; 3"

    def test_comment(self):
        """Test that comment bodies are written verbatim."""
        assert to_html(Comment(" a < b ")) == "<!-- a < b -->"

    def test_html_doctype(self):
        """Test the HTML doctype rendering."""
        assert to_html(Doctype.for_html()) == "<!DOCTYPE html>"

    def test_xml_declaration(self):
        """Test the XML declaration rendering."""
        doctype = Doctype.for_xml("1.0", "UTF-8")

        assert to_html(doctype) == '<?xml version="1.0" encoding="UTF-8"?>'

    def test_raw_html(self):
        """Test that RawHTML is emitted unchanged, including inside elements."""
        assert to_html(RawHTML("<b>&nbsp;</b>")) == "<b>&nbsp;</b>"
        assert to_html(Element("div", [], [RawHTML("<i>x</i>")])) == "<div><i>x</i></div>"


class TestForestSerialization:
    """Tests for serializing lists of nodes."""

    def test_forest_is_concatenated(self):
        """Test that top-level nodes render one after another."""
        forest = [
            Doctype.for_html(),
            Comment("c"),
            Element("p", [], [Text("x")]),
            Text("tail"),
        ]

        assert to_html(forest) == "<!DOCTYPE html><!--c--><p>x</p>tail"

    def test_empty_forest(self):
        """Test that an empty list renders as an empty string."""
        assert to_html([]) == ""

    def test_tuple_forest(self):
        """Test that tuples are accepted like lists."""
        assert to_html((Text("a"), Text("b"))) == "ab"

    def test_serializer_instance(self):
        """Test using a serializer instance directly."""
        serializer = HTMLSerializer()

        assert serializer.serialize(Element("b", [], [Text("x")])) == "<b>x</b>"

    def test_unknown_object_is_a_type_error(self):
        """Test that non-node values are rejected."""
        with pytest.raises(TypeError, match="Cannot serialize int"):
            to_html([Text("a"), 42])


class TestRawTextElements:
    """Tests for the configurable raw-text element set."""

    def test_default_set(self):
        """Test that script and style are raw by default."""
        assert HTMLSerializer().raw_text_elements == frozenset({"script", "style"})

    def test_custom_set(self):
        """Test that only the configured elements are written raw."""
        serializer = HTMLSerializer(raw_text_elements={"TEXTAREA"})
        forest = [
            Element("textarea", [], [Text("a &amp; <b>")]),
            Element("script", [], [Text("a < b")]),
        ]

        assert serializer.serialize(forest) == (
            "<textarea>a &amp; <b></textarea><script>a &lt; b</script>"
        )

    def test_to_html_accepts_set(self):
        """Test the module-level function with an explicit set."""
        element = Element("style", [], [Text("a > b")])

        assert to_html(element, raw_text_elements=()) == "<style>a &gt; b</style>"
        assert to_html(element) == "<style>a > b</style>"
