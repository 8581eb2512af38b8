"""OpenAI chat completions adapter.

Example:
    from promptweave import System, User
    from promptweave.adapters import openai

    messages = openai.prompt([
        System("You are a helpful assistant."),
        User("Hello!"),
    ])
    # [{"role": "system", "content": "..."}, {"role": "user", "content": "Hello!"}]
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from promptweave.adapters.base import (
    BasePromptAdapter,
    WireMessage,
    extract_text,
    message_field,
)
from promptweave.prompt.models import ContentPart, IRMessage, Role


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class OpenAIAdapter(BasePromptAdapter):
    """Flat message array; system messages sorted first; tool role results."""

    @property
    def format_name(self) -> str:
        return "openai"

    def convert_part(self, part: ContentPart) -> Dict[str, Any]:
        if part.type == "text":
            return {"type": "text", "text": part.text}

        if part.type == "image":
            url = part.data if part.is_url else f"data:{part.mime_type};base64,{part.data}"
            return {"type": "image_url", "image_url": {"url": url}}

        # No native file input in chat completions; describe the attachment
        return {
            "type": "text",
            "text": f"[File: {part.filename or 'attachment'} ({part.mime_type})]",
        }

    def convert_message(self, message: IRMessage) -> Optional[WireMessage]:
        if message.is_native:
            return message.native_content

        if message.role == Role.TOOL:
            content = message.content
            if not content and message.has_tool_result_json:
                content = _compact_json(message.tool_result_json)
            return {
                "role": "tool",
                "content": content,
                "tool_call_id": message.tool_call_id or "",
            }

        if message.role == Role.ASSISTANT:
            if message.tool_calls:
                return {
                    "role": "assistant",
                    "content": message.content or None,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.name,
                                "arguments": _compact_json(call.input),
                            },
                        }
                        for call in message.tool_calls
                    ],
                }
            return {"role": "assistant", "content": message.content}

        if message.role == Role.SYSTEM:
            return {"role": "system", "content": message.content}

        if message.parts:
            return {"role": "user", "content": [self.convert_part(p) for p in message.parts]}

        return {"role": "user", "content": message.content}

    def extract_content(self, message: Any) -> str:
        if message_field(message, "role") not in ("user", "system", "assistant"):
            return ""
        return extract_text(message_field(message, "content"))


_adapter = OpenAIAdapter()


def prompt(nodes: Any, messages: Optional[Sequence[WireMessage]] = None) -> List[WireMessage]:
    """
    Render nodes to OpenAI chat completion messages.

    Args:
        nodes: A node or list of top-level nodes
        messages: Existing conversation; its last user message is wrapped
                  by any WrapUser elements

    Returns:
        Message list with system messages first
    """
    return _adapter.prompt(nodes, messages=messages)
