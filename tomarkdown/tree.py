"""
Tree helpers over BeautifulSoup nodes.

BeautifulSoup already gives us a document tree; this module adds the
pieces the conversion engine needs on top of it: discriminating node
kinds, the block/void tag tables, a breadth-first flattening of the
element nodes, and a way to reproduce an element's own tag around
converted content.
"""

from collections import deque
from enum import Enum

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString


BLOCK_TAGS = frozenset([
    "address", "article", "aside", "audio", "blockquote", "body",
    "canvas", "center", "dd", "dir", "div", "dl", "dt", "fieldset", "figcaption",
    "figure", "footer", "form", "frameset", "h1", "h2", "h3", "h4", "h5", "h6",
    "header", "hgroup", "hr", "html", "isindex", "li", "main", "menu", "nav",
    "noframes", "noscript", "ol", "output", "p", "pre", "section", "table",
    "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
])

VOID_TAGS = frozenset([
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
])


class NodeKind(Enum):
    """Kinds of node the converter distinguishes."""
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    DOCUMENT = "document"


def kind_of(node) -> NodeKind:
    """
    Classify a BeautifulSoup node.

    Comments, CDATA sections, doctypes, declarations and processing
    instructions are all markup-only strings and count as COMMENT: none of
    them contributes text to the Markdown output.
    """
    # BeautifulSoup subclasses Tag, Comment subclasses NavigableString
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, PreformattedString):
        return NodeKind.COMMENT
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    raise TypeError(f"Not a document node: {node!r}")


def is_element(node) -> bool:
    return node is not None and kind_of(node) is NodeKind.ELEMENT


def is_text(node) -> bool:
    return node is not None and kind_of(node) is NodeKind.TEXT


def is_comment(node) -> bool:
    return node is not None and kind_of(node) is NodeKind.COMMENT


def tag_name(node) -> str:
    """Lower-cased tag name of an element, empty string for anything else."""
    if not is_element(node):
        return ""
    return node.name.lower()


def is_block(node) -> bool:
    """True if the node is an element whose tag always starts a new line."""
    return tag_name(node) in BLOCK_TAGS


def is_void(node) -> bool:
    """True if the node is an element that cannot hold content."""
    return tag_name(node) in VOID_TAGS


def text_content(node) -> str:
    """The text a node holds, like the DOM's textContent."""
    if is_element(node):
        return node.get_text()
    if is_text(node):
        return str(node)
    return ""


def element_children(node) -> list:
    return [child for child in node.children if is_element(child)]


def child_index(node, elements_only: bool = False) -> int:
    """
    Position of a node among its parent's children.

    Compares by identity: BeautifulSoup's == compares markup, so two
    identical <li> elements would otherwise share an index.
    """
    siblings = node.parent.contents
    if elements_only:
        siblings = [child for child in siblings if is_element(child)]
    for index, sibling in enumerate(siblings):
        if sibling is node:
            return index
    raise ValueError(f"{node!r} is not a child of its parent")


def parent_name(node) -> str:
    return tag_name(node.parent) if node.parent is not None else ""


def class_string(node) -> str:
    """The class attribute as one space-separated string."""
    classes = node.get("class") if is_element(node) else None
    if not classes:
        return ""
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def bfs_order(root) -> list:
    """
    Flatten the element nodes below ``root`` in breadth-first order.

    The root itself is left out. Every node at depth d comes before every
    node at depth d + 1, so walking the list backwards visits each element
    after all of its descendants.
    """
    queue = deque([root])
    order = []
    while queue:
        node = queue.popleft()
        order.append(node)
        queue.extend(child for child in node.children if is_element(child))
    return order[1:]


def outer(node, content: str = "") -> str:
    """
    Reproduce an element's own tag, with its attributes, around ``content``.

    Void elements have no closing tag, so the content is dropped for them.
    """
    shell = Tag(
        name=node.name,
        attrs=dict(node.attrs),
        can_be_empty_element=is_void(node),
    )
    markup = shell.decode()
    if is_void(node):
        return markup
    return markup.replace("><", f">{content}<", 1)


def find_root(soup: BeautifulSoup) -> Tag:
    """The <body> of a full document, or the document itself for a fragment."""
    body = soup.find("body")
    return body if body is not None else soup
