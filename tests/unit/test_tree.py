"""
Unit tests for the tree helpers.
"""

import pytest
from bs4 import BeautifulSoup, Tag

from tomarkdown.tree import (
    NodeKind,
    bfs_order,
    child_index,
    class_string,
    element_children,
    find_root,
    is_block,
    is_void,
    kind_of,
    outer,
    tag_name,
    text_content,
)


class TestKindOf:
    """Tests for node kind discrimination."""

    def test_document(self, make_soup):
        """Test that the parsed document is a DOCUMENT."""
        assert kind_of(make_soup("<p>Hi</p>")) is NodeKind.DOCUMENT

    def test_element_text_and_comment(self, make_soup):
        """Test element, text and comment children of a paragraph."""
        soup = make_soup("<p>Hi<!-- note --></p>")
        text, comment = soup.p.contents

        assert kind_of(soup.p) is NodeKind.ELEMENT
        assert kind_of(text) is NodeKind.TEXT
        assert kind_of(comment) is NodeKind.COMMENT

    def test_doctype_counts_as_comment(self, make_soup):
        """Test that markup-only strings are not treated as text."""
        soup = make_soup("<!DOCTYPE html><p>Hi</p>")
        assert kind_of(soup.contents[0]) is NodeKind.COMMENT

    def test_rejects_foreign_objects(self):
        """Test that non-node values raise TypeError."""
        with pytest.raises(TypeError):
            kind_of(42)


class TestTagTables:
    """Tests for block and void classification."""

    def test_block_elements(self, make_soup):
        """Test that paragraphs and list items are blocks."""
        soup = make_soup("<ul><li><p>x</p></li></ul>")
        assert is_block(soup.ul)
        assert is_block(soup.li)
        assert is_block(soup.p)

    def test_inline_elements_are_not_blocks(self, make_soup):
        """Test that inline elements and text are not blocks."""
        soup = make_soup("<span>x</span>")
        assert not is_block(soup.span)
        assert not is_block(soup.span.contents[0])

    def test_void_elements(self, make_soup):
        """Test void element detection."""
        soup = make_soup("<p>a<br>b<img src='x.png'></p>")
        assert is_void(soup.br)
        assert is_void(soup.img)
        assert not is_void(soup.p)

    def test_tag_name_of_text_is_empty(self, make_soup):
        """Test that text nodes have no tag name."""
        soup = make_soup("<p>text</p>")
        assert tag_name(soup.p) == "p"
        assert tag_name(soup.p.contents[0]) == ""


class TestBfsOrder:
    """Tests for breadth-first flattening."""

    HTML = "<div><p><em>a</em></p><ul><li>b</li></ul></div>"

    def test_breadth_first_order(self, make_soup):
        """Test that shallower elements come first."""
        soup = make_soup(self.HTML)
        assert [node.name for node in bfs_order(soup)] == ["div", "p", "ul", "em", "li"]

    def test_excludes_root(self, make_soup):
        """Test that the starting node is left out."""
        soup = make_soup(self.HTML)
        assert [node.name for node in bfs_order(soup.div)] == ["p", "ul", "em", "li"]

    def test_reversed_order_puts_children_first(self, make_soup):
        """Test that every element follows its descendants in reverse."""
        soup = make_soup("<div><p>x <em>y <b>z</b></em></p><ol><li><i>w</i></li></ol></div>")
        order = list(reversed(bfs_order(soup)))
        position = {id(node): index for index, node in enumerate(order)}

        for node in order:
            for descendant in node.find_all(True):
                assert position[id(descendant)] < position[id(node)]

    def test_skips_text_nodes(self, make_soup):
        """Test that only elements are enumerated."""
        soup = make_soup("<p>one <b>two</b> three</p>")
        assert [node.name for node in bfs_order(soup)] == ["p", "b"]


class TestSiblingHelpers:
    """Tests for child position helpers."""

    def test_child_index_uses_identity(self, make_soup):
        """Test that identical siblings get distinct indexes."""
        soup = make_soup("<ul><li>x</li><li>x</li></ul>")
        first, second = soup.find_all("li")

        assert child_index(first) == 0
        assert child_index(second) == 1

    def test_child_index_elements_only(self, make_soup):
        """Test counting only element siblings."""
        soup = make_soup("<p>a<em>b</em>c<em>d</em></p>")
        second = soup.find_all("em")[1]

        assert child_index(second) == 3
        assert child_index(second, elements_only=True) == 1

    def test_element_children(self, make_soup):
        """Test that text children are filtered out."""
        soup = make_soup("<tr> <td>a</td> <td>b</td> </tr>")
        assert [cell.name for cell in element_children(soup.tr)] == ["td", "td"]

    def test_class_string(self, make_soup):
        """Test joining a multi-valued class attribute."""
        soup = make_soup('<div class="highlight highlight-python">x</div>')
        assert class_string(soup.div) == "highlight highlight-python"

    def test_text_content(self, make_soup):
        """Test textContent-style text extraction."""
        soup = make_soup("<p>one <b>two</b></p>")
        assert text_content(soup.p) == "one two"
        assert text_content(soup.b.contents[0]) == "two"


class TestOuter:
    """Tests for reproducing an element's tag around content."""

    def test_wraps_content_with_attributes(self, make_soup):
        """Test that attributes survive and content goes inside."""
        soup = make_soup('<div class="note" id="n1"><p>ignored</p></div>')
        assert outer(soup.div, "**hi**") == '<div class="note" id="n1">**hi**</div>'

    def test_does_not_copy_children(self, make_soup):
        """Test that the original children are not serialized."""
        soup = make_soup("<section><p>old</p></section>")
        assert outer(soup.section, "new") == "<section>new</section>"

    def test_void_element_has_no_closing_tag(self, make_soup):
        """Test that void elements drop the content."""
        soup = make_soup('<img src="a.png" alt="A">')
        markup = outer(soup.img, "ignored")

        assert markup.startswith("<img")
        assert 'src="a.png"' in markup
        assert "ignored" not in markup
        assert "</img>" not in markup


class TestFindRoot:
    """Tests for picking the conversion root."""

    def test_full_document_uses_body(self):
        """Test that a full document is converted from its body."""
        soup = BeautifulSoup("<html><head><title>T</title></head><body><p>x</p></body></html>", "html.parser")
        assert find_root(soup) is soup.body

    def test_fragment_uses_document(self, make_soup):
        """Test that a fragment is converted from the document itself."""
        soup = make_soup("<p>x</p>")
        assert find_root(soup) is soup

    def test_root_is_always_a_tag(self, make_soup):
        """Test that the root is never None, even for empty input."""
        assert isinstance(find_root(make_soup("")), Tag)
