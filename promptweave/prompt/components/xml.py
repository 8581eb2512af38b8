"""XML-style grouping for structured prompt sections."""

from typing import Any

from promptweave.prompt.element import Element, ElementKind, create_element
from promptweave.prompt.errors import InvalidAttributeError


DEFAULT_GROUP_TAG = "group"
DEFAULT_INDENT = 2


def Group(*children: Any, tag: str, indent: int = DEFAULT_INDENT, inline: bool = False) -> Element:
    """
    Wrap children in XML-style tags.

    Block mode (default) puts tags on their own lines, indents the body and
    ends with a newline so following text starts on a new line. Inline mode
    emits `<tag>body</tag>` with no added whitespace.

    Example:
        Group("Some content", tag="schema")
        # <schema>
        #   Some content
        # </schema>

        Group("John Doe", tag="name", inline=True)
        # <name>John Doe</name>
    """
    if indent < 0:
        raise InvalidAttributeError("Group", "indent", indent)
    return create_element(
        ElementKind.GROUP,
        {"tag": tag, "indent": indent, "inline": inline},
        *children,
    )


def indent_lines(content: str, indent: int) -> str:
    """Indent every non-empty line by `indent` spaces."""
    if indent <= 0:
        return content
    prefix = " " * indent
    return "\n".join(prefix + line if line else line for line in content.split("\n"))


def wrap_xml(tag: str, content: str, indent: int = 0) -> str:
    """
    Wrap a string in XML-style tags (for non-tree string building).

    Example:
        wrap_xml("user", "content", indent=2)
        # <user>
        #   content
        # </user>
    """
    return f"<{tag}>\n{indent_lines(content, indent)}\n</{tag}>"
