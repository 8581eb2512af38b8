"""Prompt adapter base class.

Every adapter follows the same flow:

    nodes -> render() -> IR -> (WrapUser resolution against history)
          -> per-message conversion -> format-specific output shaping

Subclasses only supply the leaf mappers for their wire format.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from promptweave.prompt.deferred import resolve_wrap_users
from promptweave.prompt.models import ContentPart, IRMessage, TextPart
from promptweave.prompt.render import render


logger = logging.getLogger(__name__)

WireMessage = Dict[str, Any]


def message_field(message: Any, key: str, default: Any = None) -> Any:
    """Read a field from a history message (dict or SDK object)."""
    if isinstance(message, dict):
        return message.get(key, default)
    return getattr(message, key, default)


def extract_text(content: Any) -> str:
    """
    Text of a history message's content.

    Strings are returned verbatim; lists of parts contribute their text
    parts, concatenated; anything else yields "".
    """
    if isinstance(content, str):
        return content
    if isinstance(content, (list, tuple)):
        texts = []
        for part in content:
            if message_field(part, "type") == "text":
                texts.append(message_field(part, "text", "") or "")
        return "".join(texts)
    return ""


def sort_system_first(messages: List[WireMessage]) -> List[WireMessage]:
    """Move system messages to the front, keeping relative order in each group."""
    systems = [m for m in messages if message_field(m, "role") == "system"]
    others = [m for m in messages if message_field(m, "role") != "system"]
    return systems + others


class BasePromptAdapter(ABC):
    """Base class for wire-format adapters with the shared prompt flow."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the wire format name (e.g., 'openai')."""
        ...

    @abstractmethod
    def convert_part(self, part: ContentPart) -> Dict[str, Any]:
        """Convert one IR content part to a wire content part."""
        ...

    @abstractmethod
    def convert_message(self, message: IRMessage) -> Optional[WireMessage]:
        """Convert one IR message; None drops it from the message list."""
        ...

    def shape_output(self, messages: List[WireMessage], ir: List[IRMessage]) -> Any:
        """Shape the final output. Defaults to system-first ordering."""
        return sort_system_first(messages)

    def extract_content(self, message: Any) -> str:
        """Text of a history message, used as the WrapUser original."""
        return extract_text(message_field(message, "content"))

    def build_user_message(self, content: str, parts: Sequence[ContentPart]) -> WireMessage:
        """Build a user message; text goes first when file parts are present."""
        if not parts:
            return {"role": "user", "content": content}

        wire_parts = []
        if content:
            wire_parts.append(self.convert_part(TextPart(content)))
        wire_parts.extend(self.convert_part(part) for part in parts)
        return {"role": "user", "content": wire_parts}

    def find_last_user_index(self, history: Sequence[Any]) -> Optional[int]:
        for index in range(len(history) - 1, -1, -1):
            if message_field(history[index], "role") == "user":
                return index
        return None

    def prompt(self, nodes: Any, messages: Optional[Sequence[Any]] = None) -> Any:
        """
        Render nodes into this adapter's wire format.

        Args:
            nodes: A node or list of top-level nodes
            messages: Existing conversation in this format. Only consulted
                      when the tree contains WrapUser elements.

        Returns:
            Format-specific output (see shape_output)
        """
        ir = render(nodes)

        wrap_users = [m for m in ir if m.is_wrap_user]
        converted = [
            wire for wire in (self.convert_message(m) for m in ir if not m.is_wrap_user)
            if wire is not None
        ]

        if not wrap_users:
            logger.debug("Converted %d messages to %s format", len(converted), self.format_name)
            return self.shape_output(converted, ir)

        history = list(messages or [])
        last_user = self.find_last_user_index(history)

        if last_user is None:
            resolved = resolve_wrap_users(wrap_users, None)
            wire = history + [self.build_user_message(resolved.content, resolved.parts)] + converted
        else:
            original = self.extract_content(history[last_user])
            resolved = resolve_wrap_users(wrap_users, original)
            wire = (
                history[:last_user]
                + [self.build_user_message(resolved.content, resolved.parts)]
                + history[last_user + 1:]
                + converted
            )

        logger.debug(
            "Converted %d messages to %s format with %d WrapUser blocks",
            len(wire), self.format_name, len(wrap_users),
        )
        return self.shape_output(wire, ir)
