"""
GitHub-flavoured Markdown rules.

Tables, strikethrough, task-list checkboxes and fenced code blocks. These
sit above the base rules, so a GFM rule wins wherever both match.
"""

import re

from ..rules import ByPredicate, ByTag, ByTagSet, Converter
from ..tree import child_index, class_string, element_children, parent_name, tag_name, text_content
from .markdown import first_code_child, is_code_block

HIGHLIGHT_RE = re.compile(r"highlight highlight-(\S+)")

ALIGN_BORDERS = {
    "left": ":--",
    "right": "--:",
    "center": ":-:",
}


def _cell(content, node):
    prefix = "| " if child_index(node) == 0 else " "
    return f"{prefix}{content} |"


def _line_break(content, node):
    return "\n"


def _strikethrough(content, node):
    return f"~~{content}~~"


def is_task_checkbox(node) -> bool:
    return (
        tag_name(node) == "input"
        and (node.get("type") or "").lower() == "checkbox"
        and parent_name(node) == "li"
    )


def _checkbox(content, node):
    return "[x] " if node.has_attr("checked") else "[ ] "


def _table_row(content, node):
    border_cells = ""
    if parent_name(node) == "thead":
        for cell in element_children(node):
            align = (cell.get("align") or "").lower()
            border_cells += _cell(ALIGN_BORDERS.get(align, "---"), cell)
    if border_cells:
        return f"\n{content}\n{border_cells}"
    return f"\n{content}"


def _table(content, node):
    return f"\n\n{content}\n\n"


def _table_section(content, node):
    return content


def _fenced_code_block(content, node):
    return "\n\n```\n" + text_content(first_code_child(node)) + "\n```\n\n"


def highlight_language(node) -> str:
    """Language named by a ``highlight highlight-<lang>`` class, or ""."""
    match = HIGHLIGHT_RE.search(class_string(node))
    return match.group(1) if match else ""


def is_highlighted_pre(node) -> bool:
    return (
        tag_name(node) == "pre"
        and parent_name(node) == "div"
        and bool(highlight_language(node.parent))
    )


def _highlighted_code_block(content, node):
    language = highlight_language(node.parent)
    return f"\n\n```{language}\n{text_content(node)}\n```\n\n"


def is_highlight_wrapper(node) -> bool:
    return tag_name(node) == "div" and bool(highlight_language(node))


def _highlight_wrapper(content, node):
    return f"\n\n{content}\n\n"


GFM_CONVERTERS = (
    Converter(ByTag("br"), _line_break, name="line break"),
    Converter(ByTagSet(frozenset(["del", "s", "strike"])), _strikethrough, name="strikethrough"),
    Converter(ByPredicate(is_task_checkbox), _checkbox, name="task checkbox"),
    Converter(ByTagSet(frozenset(["th", "td"])), _cell, name="table cell"),
    Converter(ByTag("tr"), _table_row, name="table row"),
    Converter(ByTag("table"), _table, name="table"),
    Converter(ByTagSet(frozenset(["thead", "tbody", "tfoot"])), _table_section, name="table section"),
    Converter(ByPredicate(is_code_block), _fenced_code_block, name="fenced code block"),
    Converter(ByPredicate(is_highlighted_pre), _highlighted_code_block, name="highlighted code block"),
    Converter(ByPredicate(is_highlight_wrapper), _highlight_wrapper, name="highlight wrapper"),
)
