"""Markdown helper components.

Each helper is a pure function returning a string. Block-level helpers
(Heading, List, Code block, Quote, Hr) end with a newline so they never run
into the text that follows them.
"""

from typing import Any

from promptweave.prompt.element import Conditional, Element, flatten_children, scalar_text
from promptweave.prompt.errors import InvalidAttributeError


def stringify(node: Any) -> str:
    """Convert a node to plain text, invoking component functions."""
    if node is None or isinstance(node, bool) or isinstance(node, Conditional):
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, (int, float)):
        return scalar_text(node)
    if isinstance(node, (list, tuple)):
        return "".join(stringify(child) for child in node)
    if isinstance(node, Element):
        if node.is_component:
            return stringify(node.invoke())
        return "".join(stringify(child) for child in node.children)
    return str(node)


def List(*children: Any, ordered: bool = False, bullet: str = "-") -> str:
    """
    Markdown list, one line per item.

    Example:
        List(Item("First"), Item("Second"))
        # - First
        # - Second
    """
    items = flatten_children(children)
    lines = []
    for index, item in enumerate(items):
        prefix = f"{index + 1}." if ordered else bullet
        lines.append(f"{prefix} {stringify(item)}")
    return "\n".join(lines) + "\n"


def Item(*children: Any) -> str:
    """A list item, for use inside List."""
    return stringify(children)


def Heading(*children: Any, level: int = 2) -> str:
    """Markdown heading, `## Title` by default."""
    if not 1 <= level <= 6:
        raise InvalidAttributeError("Heading", "level", level)
    return f"{'#' * level} {stringify(children)}\n"


def Code(*children: Any, lang: str = "", inline: bool = False) -> str:
    """
    Inline code or a fenced code block.

    Example:
        Code("init()", inline=True)    # `init()`
        Code("x = 1", lang="python")   # ```python\\nx = 1\\n```\\n
    """
    content = stringify(children)
    if inline:
        return f"`{content}`"
    return f"```{lang}\n{content}\n```\n"


def Bold(*children: Any) -> str:
    return f"**{stringify(children)}**"


def Italic(*children: Any) -> str:
    return f"*{stringify(children)}*"


def Strike(*children: Any) -> str:
    return f"~~{stringify(children)}~~"


def Quote(*children: Any) -> str:
    """Blockquote; every line is prefixed with `> `."""
    content = stringify(children)
    quoted = "\n".join(f"> {line}" for line in content.split("\n"))
    return f"{quoted}\n"


def Hr() -> str:
    """Horizontal rule."""
    return "---\n"
