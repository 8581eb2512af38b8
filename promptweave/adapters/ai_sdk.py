"""Vercel AI SDK (ModelMessage) adapter.

Same ordering as the OpenAI adapter, but tool calls and tool results are
typed content parts with camelCase keys, and tool call input stays a dict.

Example:
    from promptweave import ToolCall, ToolResult, Json
    from promptweave.adapters import ai_sdk

    messages = ai_sdk.prompt([
        ToolCall(id="call_1", name="get_weather", input={"city": "Tokyo"}),
        ToolResult(Json({"temp": 22}), id="call_1", name="get_weather"),
    ])
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from promptweave.adapters.base import BasePromptAdapter, WireMessage, message_field
from promptweave.prompt.models import ContentPart, IRMessage, Role


class AISDKAdapter(BasePromptAdapter):
    """Flat ModelMessage array with typed tool-call / tool-result parts."""

    @property
    def format_name(self) -> str:
        return "ai-sdk"

    def convert_part(self, part: ContentPart) -> Dict[str, Any]:
        if part.type == "text":
            return {"type": "text", "text": part.text}

        if part.type == "image":
            if part.is_url:
                return {"type": "image", "image": part.data}
            return {"type": "image", "image": part.data, "mediaType": part.mime_type}

        return {"type": "file", "data": part.data, "mediaType": part.mime_type}

    def tool_result_output(self, message: IRMessage) -> Dict[str, Any]:
        """Pick text/json/error-text/error-json output for a tool result."""
        if message.has_tool_result_json:
            output_type = "error-json" if message.tool_result_is_error else "json"
            return {"type": output_type, "value": message.tool_result_json}

        output_type = "error-text" if message.tool_result_is_error else "text"
        return {"type": output_type, "value": message.content}

    def convert_message(self, message: IRMessage) -> Optional[WireMessage]:
        if message.is_native:
            return message.native_content

        if message.role == Role.TOOL:
            return {
                "role": "tool",
                "content": [
                    {
                        "type": "tool-result",
                        "toolCallId": message.tool_call_id or "",
                        "toolName": message.tool_name or "",
                        "output": self.tool_result_output(message),
                    }
                ],
            }

        if message.role == Role.ASSISTANT:
            if message.tool_calls:
                content: List[Dict[str, Any]] = []
                if message.content:
                    content.append({"type": "text", "text": message.content})
                content.extend(
                    {
                        "type": "tool-call",
                        "toolCallId": call.id,
                        "toolName": call.name,
                        "input": call.input,
                    }
                    for call in message.tool_calls
                )
                return {"role": "assistant", "content": content}
            return {"role": "assistant", "content": message.content}

        if message.role == Role.SYSTEM:
            return {"role": "system", "content": message.content}

        if message.parts:
            return {"role": "user", "content": [self.convert_part(p) for p in message.parts]}

        return {"role": "user", "content": message.content}


_adapter = AISDKAdapter()


def prompt(nodes: Any, messages: Optional[Sequence[WireMessage]] = None) -> List[WireMessage]:
    """
    Render nodes to AI SDK ModelMessage dictionaries.

    Args:
        nodes: A node or list of top-level nodes
        messages: Existing conversation; its last user message is wrapped
                  by any WrapUser elements

    Returns:
        Message list with system messages first
    """
    return _adapter.prompt(nodes, messages=messages)


# =============================================================================
# DEBUG FORMATTING
# =============================================================================

DOUBLE_LINE = "═" * 64
SINGLE_LINE = "─" * 64


def _format_role_header(role: str, is_first: bool) -> str:
    line = DOUBLE_LINE if is_first else SINGLE_LINE
    lead = "" if is_first else "\n"
    return f"{lead}{line}\n{role.upper()}\n{line}\n"


def _format_content_part(part: Any) -> str:
    if isinstance(part, str):
        return part

    part_type = message_field(part, "type")
    if part_type == "text":
        return message_field(part, "text", "") or ""
    if part_type == "image":
        image = message_field(part, "image", "")
        url = image if message_field(part, "mediaType") is None else "[base64 image]"
        return f'<Image url="{url}" />'
    if part_type == "file":
        data = message_field(part, "data", "")
        media_type = message_field(part, "mediaType")
        url = data if str(data).startswith(("http://", "https://")) else "[base64 file]"
        return f'<File url="{url}" mimeType="{media_type}" />'
    if part_type == "tool-call":
        args = json.dumps(message_field(part, "input"), indent=2, ensure_ascii=False)
        return (
            f"[Tool Call: {message_field(part, 'toolName')} "
            f"(id: {message_field(part, 'toolCallId')})]\n{args}"
        )
    if part_type == "tool-result":
        output = message_field(part, "output") or {}
        value = message_field(output, "value")
        rendered = value if isinstance(value, str) else json.dumps(value, indent=2, ensure_ascii=False)
        return f"[Tool Result for: {message_field(part, 'toolCallId')}]\n{rendered}"
    return ""


def _format_message(message: Any, is_first: bool) -> str:
    text = _format_role_header(str(message_field(message, "role", "")), is_first)

    content = message_field(message, "content")
    if isinstance(content, str):
        text += content
    elif isinstance(content, (list, tuple)):
        text += "\n\n".join(
            formatted for formatted in (_format_content_part(p) for p in content) if formatted
        )
    return text


def messages_to_string(messages: Sequence[Any]) -> str:
    """
    Format messages as a human-readable transcript for logs and debugging.

    Example:
        ════════════════════════════════════════════════════════════════
        SYSTEM
        ════════════════════════════════════════════════════════════════
        You are helpful
        ────────────────────────────────────────────────────────────────
        USER
        ────────────────────────────────────────────────────────────────
        Hello!
    """
    if not messages:
        return f"{SINGLE_LINE}\n[Empty prompt]\n{SINGLE_LINE}"

    return "".join(
        _format_message(message, index == 0) for index, message in enumerate(messages)
    ) + "\n"
