"""
Base Markdown rules.

These cover every block element (unknown blocks are kept as raw HTML) and
the common inline elements. Inline tags without a rule fall through to the
engine's unmatched-element policy.
"""

import re

from ..rules import ByPredicate, ByTag, ByTagSet, Converter
from ..tree import child_index, is_block, is_text, outer, parent_name, tag_name, text_content

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def _paragraph(content, node):
    return f"\n\n{content}\n\n"


def _line_break(content, node):
    return "  \n"


def _heading(content, node):
    level = int(tag_name(node)[1])
    return f"\n\n{'#' * level} {content}\n\n"


def _horizontal_rule(content, node):
    return "\n\n* * *\n\n"


def _emphasis(content, node):
    return f"_{content}_"


def _strong(content, node):
    return f"**{content}**"


def is_inline_code(node) -> bool:
    """A <code> that does not open a <pre> code block."""
    if tag_name(node) != "code":
        return False
    return parent_name(node) != "pre" or first_code_child(node.parent) is not node


def _inline_code(content, node):
    return f"`{content}`"


def _title_part(node) -> str:
    title = node.get("title")
    return f' "{title}"' if title else ""


def is_link(node) -> bool:
    return tag_name(node) == "a" and bool(node.get("href"))


def _link(content, node):
    return f"[{content}]({node.get('href')}{_title_part(node)})"


def _image(content, node):
    src = node.get("src") or ""
    if not src:
        return ""
    alt = node.get("alt") or ""
    return f"![{alt}]({src}{_title_part(node)})"


def first_code_child(node):
    """The <code> opening a <pre>, skipping the line break the parser keeps after <pre>."""
    for child in node.children:
        if is_text(child) and child.strip() == "":
            continue
        return child if tag_name(child) == "code" else None
    return None


def is_code_block(node) -> bool:
    """A <pre> whose first child is a <code> element."""
    return tag_name(node) == "pre" and first_code_child(node) is not None


def is_code_block_body(node) -> bool:
    return tag_name(node) == "code" and not is_inline_code(node)


def _code_block_body(content, node):
    return content


def _indented_code_block(content, node):
    code = text_content(first_code_child(node))
    return "\n\n    " + code.replace("\n", "\n    ") + "\n\n"


def _blockquote(content, node):
    content = re.sub(r"\n{3,}", "\n\n", content.strip())
    content = re.sub(r"^", "> ", content, flags=re.MULTILINE)
    return f"\n\n{content}\n\n"


def _list_item(content, node):
    content = re.sub(r"^\s+", "", content).replace("\n", "\n    ")
    if parent_name(node) == "ol":
        prefix = f"{child_index(node, elements_only=True) + 1}.  "
    else:
        prefix = "*   "
    # Items start their own line; the list rule drops the first break
    return f"\n{prefix}{content}"


def _list(content, node):
    if parent_name(node) == "li":
        return content
    return "\n\n" + content.lstrip("\n") + "\n\n"


def _other_block(content, node):
    return f"\n\n{outer(node, content)}\n\n"


MARKDOWN_CONVERTERS = (
    Converter(ByTag("p"), _paragraph, name="paragraph"),
    Converter(ByTag("br"), _line_break, name="line break"),
    Converter(ByTagSet(frozenset(HEADING_TAGS)), _heading, name="heading"),
    Converter(ByTag("hr"), _horizontal_rule, name="horizontal rule"),
    Converter(ByTagSet(frozenset(["em", "i"])), _emphasis, name="emphasis"),
    Converter(ByTagSet(frozenset(["strong", "b"])), _strong, name="strong"),
    Converter(ByPredicate(is_inline_code), _inline_code, name="inline code"),
    Converter(ByPredicate(is_link), _link, name="link"),
    Converter(ByTag("img"), _image, name="image"),
    Converter(ByPredicate(is_code_block_body), _code_block_body, name="code block body"),
    Converter(ByPredicate(is_code_block), _indented_code_block, name="code block"),
    Converter(ByTag("blockquote"), _blockquote, name="blockquote"),
    Converter(ByTag("li"), _list_item, name="list item"),
    Converter(ByTagSet(frozenset(["ul", "ol"])), _list, name="list"),
    Converter(ByPredicate(is_block), _other_block, name="block"),
)
