"""
tomarkdown Core Engine

Parses an HTML fragment, folds the element tree bottom-up through an
ordered set of converter rules, and normalizes the resulting text into
Markdown.

The fold visits elements in reverse breadth-first order, so every
element's children have been converted before the element itself. The
converted text of each element is kept in a side mapping owned by the
call, never on the tree.
"""

import dataclasses
import logging
import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from .converters import GFM_CONVERTERS, MARKDOWN_CONVERTERS
from .errors import InputTypeError, UnmatchedElementError
from .rules import Registry
from .tree import (
    bfs_order,
    find_root,
    is_block,
    is_element,
    is_text,
    is_void,
    tag_name,
    text_content,
)
from .whitespace import collapse_whitespace, remove_blank_nodes

logger = logging.getLogger(__name__)

# Rendered even when their content is blank
ALWAYS_RENDERED_TAGS = frozenset(["a", "th", "td"])

UNMATCHED_POLICIES = ("passthrough", "error")

FLANKING_WHITESPACE = " \r\n\t"

ORDERED_LIST_TRIGGER_RE = re.compile(r"(\d+)\. ")
LEADING_NEWLINES_RE = re.compile(r"^[\t\r\n]+")
TRAILING_WHITESPACE_RE = re.compile(r"[\t\r\n\s]+$")
BLANK_LINE_RE = re.compile(r"\n\s+\n")
EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class ConversionOptions:
    """
    Settings for one conversion.

    Attributes:
        gfm: Add the GitHub-flavoured rules (tables, strikethrough,
            fenced code, task lists) above the base rules.
        converters: Caller rules, tried before every built-in rule. Each is
            a Converter or a mapping with ``filter`` and ``replacement``.
        unmatched: What to do with an element no rule matches.
            "passthrough" keeps its converted content and drops the tag,
            "error" raises UnmatchedElementError.
    """
    gfm: bool = False
    converters: tuple = ()
    unmatched: str = "passthrough"

    def __post_init__(self):
        if self.unmatched not in UNMATCHED_POLICIES:
            raise ValueError(
                f"unmatched must be one of {', '.join(UNMATCHED_POLICIES)}, got {self.unmatched!r}"
            )
        object.__setattr__(self, "converters", tuple(self.converters or ()))

    def registry(self) -> Registry:
        """Compose the rule layers for one call, highest precedence first."""
        return Registry.compose(
            overrides=self.converters,
            extensions=GFM_CONVERTERS if self.gfm else (),
            base=MARKDOWN_CONVERTERS,
        )


def escape_list_markers(html: str) -> str:
    """Escape "1. " so literal text is not read back as an ordered list item."""
    return ORDERED_LIST_TRIGGER_RE.sub(r"\1\\. ", html)


def html_to_tree(html: str) -> BeautifulSoup:
    """Parse ``html`` and collapse the whitespace around its blocks."""
    soup = BeautifulSoup(html, "html.parser")
    collapse_whitespace(find_root(soup), is_block)
    return soup


def normalize(text: str) -> str:
    """
    Tidy the assembled Markdown.

    Leading line breaks and trailing whitespace go, a line holding only
    whitespace becomes a plain blank line, and there is never more than one
    blank line in a row.
    """
    text = LEADING_NEWLINES_RE.sub("", text)
    text = TRAILING_WHITESPACE_RE.sub("", text)
    text = BLANK_LINE_RE.sub("\n\n", text)
    return EXCESS_NEWLINES_RE.sub("\n\n", text)


def is_flanked_by_whitespace(side: str, node) -> bool:
    """
    Check whether the content next to ``node`` already supplies a space.

    ``side`` is "left" to look at the previous sibling, "right" for the next.
    """
    sibling = node.previous_sibling if side == "left" else node.next_sibling
    if is_text(sibling):
        text = str(sibling)
    elif is_element(sibling) and not is_block(sibling):
        text = text_content(sibling)
    else:
        return False
    return text.endswith(" ") if side == "left" else text.startswith(" ")


def flanking_whitespace(node, content: str) -> tuple:
    """
    Work out the spaces to put around an inline element's Markdown.

    Returns ``(leading, trailing, content)``. A whitespace edge of
    ``content`` is moved outside as a single space, unless the neighbouring
    sibling already provides one; then the edge is left as it is. Block
    elements are returned untouched.
    """
    if is_block(node) or not content:
        return "", "", content

    leading = trailing = ""
    if content[0] in FLANKING_WHITESPACE and not is_flanked_by_whitespace("left", node):
        leading = " "
        content = content.lstrip(FLANKING_WHITESPACE)
    if content and content[-1] in FLANKING_WHITESPACE and not is_flanked_by_whitespace("right", node):
        trailing = " "
        content = content.rstrip(FLANKING_WHITESPACE)
    return leading, trailing, content


class ConversionContext:
    """
    State for one conversion call.

    Holds the composed registry and the Markdown produced for each element
    so far, keyed by node identity.
    """

    def __init__(self, registry: Registry, unmatched: str = "passthrough"):
        self.registry = registry
        self.unmatched = unmatched
        self.outputs = {}

    def output_of(self, node) -> str:
        return self.outputs[id(node)]

    def content_of(self, node) -> str:
        """Concatenate the converted children of ``node`` in document order."""
        parts = []
        for child in node.children:
            if is_element(child):
                parts.append(self.outputs[id(child)])
            elif is_text(child):
                parts.append(str(child))
        return "".join(parts)

    def process(self, node) -> None:
        """Convert one element whose children have all been converted."""
        content = self.content_of(node)
        name = tag_name(node)

        if not is_void(node) and name not in ALWAYS_RENDERED_TAGS and not content.strip():
            self.outputs[id(node)] = ""
            return

        converter = self.registry.find(node)
        if converter is None:
            if self.unmatched == "error":
                raise UnmatchedElementError(name)
            logger.debug("No converter for <%s>, keeping its content", name)
            self.outputs[id(node)] = content
            return

        leading, trailing, content = flanking_whitespace(node, content)
        self.outputs[id(node)] = leading + converter.apply(content, node) + trailing

    def fold(self, root) -> str:
        """Convert every element below ``root`` and return the root's content."""
        nodes = bfs_order(root)
        logger.debug("Converting %d elements with %d rules", len(nodes), len(self.registry))
        for node in reversed(nodes):
            self.process(node)
        return self.content_of(root)


class ToMarkdown:
    """
    HTML to Markdown converter.

    One instance can convert any number of documents; every call parses its
    own tree and builds its own context, so nothing is shared between calls.
    """

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def convert(self, html: str) -> str:
        """
        Convert an HTML fragment or document to Markdown.

        Args:
            html: The markup to convert. For a full document only the
                <body> is converted.

        Returns:
            The Markdown text, without leading or trailing blank lines.

        Raises:
            InputTypeError: If ``html`` is not a string.
            FilterTypeError: If a caller rule has an unsupported filter.
            ConverterContractError: If a matched rule's replacement is not
                a function returning a string.
            UnmatchedElementError: If no rule matches an element and the
                unmatched policy is "error".
        """
        if not isinstance(html, str):
            raise InputTypeError(html)
        if html == "":
            return ""

        registry = self.options.registry()
        soup = html_to_tree(escape_list_markers(html))
        root = find_root(soup)
        remove_blank_nodes(root)

        context = ConversionContext(registry, self.options.unmatched)
        return normalize(context.fold(root))


def convert(html: str, options: Optional[ConversionOptions] = None, **overrides) -> str:
    """
    Convert ``html`` to Markdown.

    Keyword arguments override fields of ``options``, so
    ``convert(html, gfm=True)`` works without building options first.
    """
    options = options or ConversionOptions()
    if overrides:
        options = dataclasses.replace(options, **overrides)
    return ToMarkdown(options).convert(html)
