"""Message components: each opens a new message with a fixed role."""

from typing import Any, Dict, Optional

from promptweave.prompt.element import Element, ElementKind, create_element
from promptweave.prompt.models import UNSET, Role


# Marker kinds that open a message, and the role they open it with.
# Tool calls are absent: they merge into a preceding assistant message.
MESSAGE_ROLES = {
    ElementKind.SYSTEM: Role.SYSTEM,
    ElementKind.USER: Role.USER,
    ElementKind.ASSISTANT: Role.ASSISTANT,
    ElementKind.TOOL_RESULT: Role.TOOL,
}


def System(*children: Any) -> Element:
    """System message (instructions)."""
    return create_element(ElementKind.SYSTEM, None, *children)


def User(*children: Any) -> Element:
    """User message."""
    return create_element(ElementKind.USER, None, *children)


def Assistant(*children: Any) -> Element:
    """Assistant message."""
    return create_element(ElementKind.ASSISTANT, None, *children)


def ToolCall(id: str, name: str, input: Optional[Dict[str, Any]] = None) -> Element:
    """
    Tool invocation requested by the assistant.

    Consecutive tool calls collapse into one assistant message.

    Args:
        id: Unique ID for this call
        name: Tool name
        input: Arguments passed to the tool
    """
    return create_element(
        ElementKind.TOOL_CALL,
        {"id": id, "name": name, "input": dict(input or {})},
    )


def ToolResult(
    *children: Any,
    id: str,
    name: Optional[str] = None,
    json: Any = UNSET,
    is_error: bool = False,
) -> Element:
    """
    Result of a tool call.

    Args:
        children: Text result, or a single Json element (auto-detected as
                  structured data)
        id: The tool call ID this result responds to
        name: Tool name (some formats ignore it)
        json: Structured result; takes precedence over children
        is_error: Whether the result reports a failure

    Example:
        ToolResult("Sunny, 22C", id="call_1", name="get_weather")
        ToolResult(id="call_1", name="get_weather", json={"temp": 22})
    """
    attributes: Dict[str, Any] = {"id": id, "name": name, "is_error": is_error}
    if json is not UNSET:
        attributes["json"] = json
    return create_element(ElementKind.TOOL_RESULT, attributes, *children)


def is_message_kind(kind: Any) -> bool:
    """Check if a kind opens a message."""
    return kind in MESSAGE_ROLES


def get_role_from_kind(kind: Any) -> Optional[Role]:
    """Get the role a message kind opens, or None."""
    return MESSAGE_ROLES.get(kind)
