"""Prompt tree renderer.

Walks a node tree and produces the intermediate message list (IR) consumed
by every adapter.

Rendering rules:
    - Text appends to the last message only if it has the active role;
      text with no open message is dropped.
    - Message markers always append a new message; messages are never
      reordered during the walk.
    - Consecutive tool calls share one assistant message.
    - WrapUser children that are Conditionals are left as placeholders and
      evaluated later by the adapter (see promptweave.prompt.deferred).
    - Unknown kinds render their children transparently.

The walk is synchronous and allocates its own MessageBuilder per call, so
concurrent renders never share state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from promptweave.prompt.components.message import get_role_from_kind
from promptweave.prompt.components.xml import DEFAULT_GROUP_TAG, DEFAULT_INDENT, indent_lines
from promptweave.prompt.components.wrap_user import DEFAULT_WRAP_TAG
from promptweave.prompt.element import (
    Conditional,
    Element,
    ElementKind,
    condition_placeholder,
    scalar_text,
)
from promptweave.prompt.models import (
    UNSET,
    ConditionFn,
    ContentPart,
    FilePart,
    IRMessage,
    IRToolCall,
    RenderedContent,
    Role,
    TextPart,
    WrapUserMode,
)


logger = logging.getLogger(__name__)


@dataclass
class RenderMessage:
    """A message being accumulated during one render call."""
    role: Role
    content: List[str] = field(default_factory=list)
    parts: List[FilePart] = field(default_factory=list)
    tool_calls: Optional[List[IRToolCall]] = None
    tool_call_id: Optional[str] = None
    tool_name: Optional[str] = None
    tool_result_json: Any = UNSET
    tool_result_is_error: bool = False
    is_native: bool = False
    native_content: Any = None
    is_wrap_user: bool = False
    wrap_user_tag: Optional[str] = None
    wrap_user_mode: Optional[WrapUserMode] = None
    wrap_user_conditions: List[ConditionFn] = field(default_factory=list)


class MessageBuilder:
    """Ordered list of in-progress messages for a single render call."""

    def __init__(self, messages: Optional[List[RenderMessage]] = None):
        self.messages: List[RenderMessage] = list(messages or [])

    @property
    def last(self) -> Optional[RenderMessage]:
        return self.messages[-1] if self.messages else None

    def push(self, message: RenderMessage) -> RenderMessage:
        self.messages.append(message)
        return message

    def current(self, role: Optional[Role]) -> Optional[RenderMessage]:
        """The last message, if it accepts content for `role`."""
        last = self.last
        if role is None or last is None or last.role != role:
            return None
        return last

    def append_text(self, text: str, role: Optional[Role]) -> None:
        message = self.current(role)
        if message is not None:
            message.content.append(text)

    def build(self) -> List[IRMessage]:
        """Finalize every accumulated message into IR."""
        return [finalize_message(message) for message in self.messages]


# =============================================================================
# IR FINALIZATION
# =============================================================================

def finalize_message(message: RenderMessage) -> IRMessage:
    """Convert an in-progress message into an immutable IR message."""
    if message.is_native:
        return IRMessage(
            role=message.role,
            content="",
            is_native=True,
            native_content=message.native_content,
        )

    text = "".join(message.content).strip()

    parts = None
    if message.parts:
        leading: List[ContentPart] = [TextPart(text)] if text else []
        parts = tuple(leading + list(message.parts))

    return IRMessage(
        role=message.role,
        content=text,
        parts=parts,
        tool_calls=tuple(message.tool_calls) if message.tool_calls else None,
        tool_call_id=message.tool_call_id or None,
        tool_name=message.tool_name or None,
        tool_result_json=message.tool_result_json,
        tool_result_is_error=message.tool_result_is_error,
        is_wrap_user=message.is_wrap_user,
        wrap_user_tag=message.wrap_user_tag if message.is_wrap_user else None,
        wrap_user_mode=message.wrap_user_mode if message.is_wrap_user else None,
        wrap_user_conditions=(
            tuple(message.wrap_user_conditions) if message.wrap_user_conditions else None
        ),
    )


def _is_combinable_system(message: IRMessage) -> bool:
    return message.role == Role.SYSTEM and not message.is_native


def combine_system_messages(messages: List[IRMessage]) -> List[IRMessage]:
    """
    Merge all system messages into one, placed first.

    Contents are joined with a blank line. A lone system message is moved
    to the front unchanged.
    """
    systems = [m for m in messages if _is_combinable_system(m)]
    if not systems:
        return messages

    others = [m for m in messages if not _is_combinable_system(m)]
    if len(systems) == 1:
        return systems + others

    content = "\n\n".join(m.content for m in systems)
    file_parts = [
        part
        for m in systems
        for part in (m.parts or ())
        if isinstance(part, FilePart)
    ]
    parts = None
    if file_parts:
        leading: List[ContentPart] = [TextPart(content)] if content else []
        parts = tuple(leading + file_parts)

    combined = IRMessage(role=Role.SYSTEM, content=content, parts=parts)
    return [combined] + others


# =============================================================================
# TREE WALKER
# =============================================================================

def _attr_int(attributes: Dict[str, Any], key: str, default: int) -> int:
    value = attributes.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def extract_json_data(node: Any) -> Any:
    """
    Structured data carried by a Json element, or UNSET.

    Component elements carrying a `data` attribute count as Json too.
    """
    if not isinstance(node, Element):
        return UNSET
    if node.kind == ElementKind.JSON and "data" in node.attributes:
        return node.attributes["data"]
    if node.is_component and "data" in node.attributes:
        return node.attributes["data"]
    return UNSET


class PromptRenderer:
    """Interprets prompt trees into in-progress messages.

    Holds no per-render state; every call works on the MessageBuilder it
    is handed.
    """

    def __init__(self):
        self._handlers: Dict[ElementKind, Callable[[Element, MessageBuilder, Optional[Role]], None]] = {
            ElementKind.SYSTEM: self._render_message,
            ElementKind.USER: self._render_message,
            ElementKind.ASSISTANT: self._render_message,
            ElementKind.TOOL_RESULT: self._render_message,
            ElementKind.TOOL_CALL: self._render_tool_call,
            ElementKind.GROUP: self._render_group,
            ElementKind.JSON: self._render_children,
            ElementKind.FILE: self._render_file,
            ElementKind.NATIVE: self._render_native,
            ElementKind.WRAP_USER: self._render_wrap_user,
            ElementKind.IF: self._render_children,
            ElementKind.SHOW: self._render_children,
            ElementKind.EACH: self._render_children,
            ElementKind.FRAGMENT: self._render_children,
        }

    @property
    def handled_kinds(self) -> List[ElementKind]:
        return list(self._handlers.keys())

    def render_node(self, node: Any, builder: MessageBuilder, role: Optional[Role]) -> None:
        """Render one node into the builder under the active role."""
        if node is None or isinstance(node, bool):
            return

        if isinstance(node, (str, int, float)):
            builder.append_text(scalar_text(node), role)
            return

        if isinstance(node, (list, tuple)):
            for child in node:
                self.render_node(child, builder, role)
            return

        if isinstance(node, Element):
            self.render_element(node, builder, role)
            return

        if isinstance(node, Conditional):
            # Only WrapUser captures conditionals; elsewhere there is no context
            logger.debug("Dropping conditional outside WrapUser")
            return

        logger.debug("Ignoring unsupported node type %s", type(node).__name__)

    def render_element(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        if element.is_component:
            # Component functions are transparent with respect to messages
            self.render_node(element.invoke(), builder, role)
            return

        handler = self._handlers.get(element.kind) if isinstance(element.kind, ElementKind) else None
        if handler is None:
            logger.debug("Unknown element kind %r rendered transparently", element.kind)
            self._render_children(element, builder, role)
            return

        handler(element, builder, role)

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _render_children(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        for child in element.children:
            self.render_node(child, builder, role)

    def _render_message(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        message_role = get_role_from_kind(element.kind)
        message = RenderMessage(role=message_role)

        if element.kind == ElementKind.TOOL_RESULT:
            self._apply_tool_result(element, message)

        builder.push(message)
        for child in element.children:
            self.render_node(child, builder, message_role)

    def _apply_tool_result(self, element: Element, message: RenderMessage) -> None:
        attributes = element.attributes
        if attributes.get("id"):
            message.tool_call_id = str(attributes["id"])
        if attributes.get("name"):
            message.tool_name = str(attributes["name"])
        if attributes.get("is_error"):
            message.tool_result_is_error = True

        if "json" in attributes:
            message.tool_result_json = attributes["json"]
            return

        # Auto-detect a lone Json child as the structured result
        meaningful = [
            child for child in element.children
            if not (isinstance(child, str) and not child.strip())
        ]
        if len(meaningful) != 1:
            if meaningful:
                logger.debug(
                    "Tool result %s has %d children; using text result",
                    message.tool_call_id, len(meaningful),
                )
            return

        data = extract_json_data(meaningful[0])
        if data is not UNSET:
            message.tool_result_json = data

    def _render_tool_call(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        attributes = element.attributes
        call_input = attributes.get("input")
        call = IRToolCall(
            id=str(attributes.get("id") or ""),
            name=str(attributes.get("name") or ""),
            input=dict(call_input) if isinstance(call_input, Mapping) else {},
        )

        last = builder.last
        if last is not None and last.role == Role.ASSISTANT and not last.is_native:
            if last.tool_calls is None:
                last.tool_calls = []
            last.tool_calls.append(call)
            return

        builder.push(RenderMessage(role=Role.ASSISTANT, tool_calls=[call]))

    def _render_group(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        current = builder.current(role)
        if current is None:
            return

        attributes = element.attributes
        tag = str(attributes.get("tag") or DEFAULT_GROUP_TAG)

        if attributes.get("inline"):
            current.content.append(f"<{tag}>")
            self._render_children(element, builder, role)
            current.content.append(f"</{tag}>")
            return

        indent = max(_attr_int(attributes, "indent", DEFAULT_INDENT), 0)

        # Children render into an isolated buffer so the whole body can be
        # indented once; nested groups compound indentation this way
        buffer = MessageBuilder([RenderMessage(role=role)])
        self._render_children(element, buffer, role)
        inner = buffer.messages[0]

        body = "".join(inner.content).strip("\n")
        current.content.append(f"<{tag}>\n{indent_lines(body, indent)}\n</{tag}>\n")
        current.parts.extend(inner.parts)

    def _render_file(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        current = builder.current(role)
        if current is None:
            return

        attributes = element.attributes
        current.parts.append(FilePart(
            type="image" if attributes.get("type") == "image" else "file",
            mime_type=str(attributes.get("mime_type") or "application/octet-stream"),
            data=str(attributes.get("data") or ""),
            is_url=bool(attributes.get("is_url")),
            filename=str(attributes["filename"]) if attributes.get("filename") else None,
        ))

    def _render_native(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        # Role is a placeholder; adapters emit native content as-is
        builder.push(RenderMessage(
            role=Role.USER,
            is_native=True,
            native_content=element.attributes.get("content"),
        ))

    def _render_wrap_user(self, element: Element, builder: MessageBuilder, role: Optional[Role]) -> None:
        attributes = element.attributes
        try:
            mode = WrapUserMode(attributes.get("mode") or WrapUserMode.SUFFIX)
        except ValueError:
            mode = WrapUserMode.SUFFIX

        message = builder.push(RenderMessage(
            role=Role.USER,
            is_wrap_user=True,
            wrap_user_tag=str(attributes.get("tag") or DEFAULT_WRAP_TAG),
            wrap_user_mode=mode,
        ))

        for child in element.children:
            if isinstance(child, Conditional):
                # Leave a hole at this position; the adapter fills it once
                # it knows whether the history has a user turn
                message.content.append(condition_placeholder(len(message.wrap_user_conditions)))
                message.wrap_user_conditions.append(child.fn)
            else:
                self.render_node(child, builder, Role.USER)


_renderer = PromptRenderer()


def _as_node_list(nodes: Any) -> List[Any]:
    return list(nodes) if isinstance(nodes, (list, tuple)) else [nodes]


def render(nodes: Any) -> List[IRMessage]:
    """
    Render a prompt tree to IR messages.

    Args:
        nodes: A node or a list of top-level nodes

    Returns:
        IR messages in authored order, with system messages merged first
    """
    builder = MessageBuilder()
    for node in _as_node_list(nodes):
        _renderer.render_node(node, builder, None)

    messages = combine_system_messages(builder.build())
    logger.debug(
        "Rendered %d messages",
        len(messages),
        extra={"roles": [m.role.value for m in messages]},
    )
    return messages


def render_to_content(node: Any) -> RenderedContent:
    """
    Render a fragment to text and file parts, as if inside a user message.

    The text is not trimmed.

    Example:
        render_to_content(["Hello ", File(url="https://example.com/a.png")])
        # RenderedContent(content="Hello ", parts=[FilePart(type="image", ...)])
    """
    builder = MessageBuilder([RenderMessage(role=Role.USER)])
    for n in _as_node_list(node):
        _renderer.render_node(n, builder, Role.USER)

    fragment = builder.messages[0]
    return RenderedContent(content="".join(fragment.content), parts=list(fragment.parts))


def render_to_string(node: Any) -> str:
    """
    Render a fragment to plain text, discarding file parts.

    Example:
        render_to_string(Group("content", tag="schema"))
        # "<schema>\\n  content\\n</schema>\\n"
    """
    return render_to_content(node).content
