"""
Whitespace passes applied to a freshly parsed tree.

collapse_whitespace() squeezes runs of HTML whitespace to single spaces
and drops the spaces that only pad block boundaries, the way a browser
renders them. remove_blank_nodes() then throws away comments and the
whitespace-only text left between blocks.

Both passes mark first and mutate afterwards, so the tree is never
changed while it is being walked.
"""

import logging
import re

from .tree import (
    is_block,
    is_comment,
    is_element,
    is_text,
    is_void,
    tag_name,
)

logger = logging.getLogger(__name__)

PREFORMATTED_TAGS = frozenset(["pre", "code"])

WHITESPACE_RUN_RE = re.compile(r"[ \r\n\t]+")
LEADING_BREAK_RE = re.compile(r"\A[\n\r\t\f]+\s*")
TRAILING_BREAK_RE = re.compile(r"\s*[\r\n]\s*\Z")


def is_pre(node) -> bool:
    return tag_name(node) == "pre"


def _walk(node, skip):
    """
    Yield the nodes below ``node`` in document order.

    An element with children is yielded twice, once on the way in and once
    on the way out. The subtree of an element for which ``skip`` is true
    is not entered. Uses an explicit stack, so nesting depth is unbounded.
    """
    stack = [(node, iter(node.children))]
    while stack:
        parent, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            if stack:
                yield parent
            continue
        yield child
        if is_element(child) and child.contents and not skip(child):
            stack.append((child, iter(child.children)))


def _apply(values: dict, nodes: dict) -> None:
    for key, value in values.items():
        node = nodes[key]
        if not value:
            node.extract()
        elif value != str(node):
            node.replace_with(type(node)(value))


def collapse_whitespace(root, block=is_block, pre=is_pre) -> None:
    """
    Collapse insignificant whitespace in ``root`` in place.

    Runs of spaces, tabs and line breaks become one space; a space is
    dropped when the text before it already ends in one, and trailing
    spaces are dropped before a block boundary or a <br>. Whitespace inside
    elements matched by ``pre`` is left alone.
    """
    if not root.contents or pre(root):
        return

    nodes = {}
    values = {}
    prev_text = None
    keep_leading_ws = False

    for node in _walk(root, pre):
        if is_text(node):
            text = WHITESPACE_RUN_RE.sub(" ", str(node))
            prev_value = values[id(prev_text)] if prev_text is not None else None
            if (prev_value is None or prev_value.endswith(" ")) and not keep_leading_ws and text.startswith(" "):
                text = text[1:]
            nodes[id(node)] = node
            values[id(node)] = text
            if text:
                prev_text = node
        elif is_element(node):
            if block(node) or tag_name(node) == "br":
                if prev_text is not None:
                    values[id(prev_text)] = values[id(prev_text)].rstrip(" ")
                prev_text = None
                keep_leading_ws = False
            elif is_void(node) or pre(node):
                prev_text = None
                keep_leading_ws = True
            elif prev_text is not None:
                keep_leading_ws = False

    if prev_text is not None:
        values[id(prev_text)] = values[id(prev_text)].rstrip(" ")

    _apply(values, nodes)


def _in_preformatted(node) -> bool:
    parent = node.parent
    while parent is not None:
        if tag_name(parent) in PREFORMATTED_TAGS:
            return True
        parent = parent.parent
    return False


def _neighbour(node, forward: bool):
    sibling = node.next_sibling if forward else node.previous_sibling
    while sibling is not None and is_comment(sibling):
        sibling = sibling.next_sibling if forward else sibling.previous_sibling
    return sibling


def _is_inline(node) -> bool:
    return node is not None and (is_text(node) or (is_element(node) and not is_block(node)))


def _separates_inline_content(node) -> bool:
    return _is_inline(_neighbour(node, False)) and _is_inline(_neighbour(node, True))


def _mark_blank_nodes(root, doomed: list, nodes: dict, values: dict) -> None:
    stack = [root]
    while stack:
        node = stack.pop()
        for child in node.children:
            if is_comment(child):
                doomed.append(child)
            elif is_element(child):
                stack.append(child)
            elif is_text(child) and not _in_preformatted(child):
                text = str(child)
                if text.strip():
                    stripped = TRAILING_BREAK_RE.sub("", LEADING_BREAK_RE.sub("", text))
                    if stripped != text:
                        nodes[id(child)] = child
                        values[id(child)] = stripped
                elif not _separates_inline_content(child):
                    doomed.append(child)


def remove_blank_nodes(root) -> None:
    """
    Drop comments and blank text nodes from ``root`` in place.

    Text inside <pre> or <code> is never touched. Elsewhere a whitespace-only
    text node is removed unless it is the only thing separating two pieces
    of inline content, and text with real characters loses any leading or
    trailing whitespace that carries a line break.
    """
    doomed = []
    nodes = {}
    values = {}
    _mark_blank_nodes(root, doomed, nodes, values)

    for node in doomed:
        node.extract()
    _apply(values, nodes)
    logger.debug("Removed %d blank nodes", len(doomed))
