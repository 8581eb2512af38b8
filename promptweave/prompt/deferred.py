"""WrapUser deferred evaluation.

The renderer leaves one placeholder per conditional child in a WrapUser
message's text (pass 1: a template with indexed holes). Once an adapter
knows whether the caller's history contains a user turn, each condition is
called exactly once and its rendered output fills its hole (pass 2), so
static text and conditional output keep their authored order.
"""

import logging
from typing import Dict, List, Optional

from promptweave.prompt.components.wrap_user import DEFAULT_WRAP_TAG
from promptweave.prompt.components.xml import wrap_xml
from promptweave.prompt.element import CONDITION_PLACEHOLDER_PATTERN
from promptweave.prompt.models import (
    ContentPart,
    IRMessage,
    RenderedContent,
    WrapUserContext,
    WrapUserMode,
)
from promptweave.prompt.render import render_to_content


logger = logging.getLogger(__name__)


def evaluate_conditions(message: IRMessage, has_user: bool) -> Dict[int, RenderedContent]:
    """Call every deferred condition once and render its result."""
    context = WrapUserContext(has_user=has_user)
    results: Dict[int, RenderedContent] = {}
    for index, condition in enumerate(message.wrap_user_conditions or ()):
        results[index] = render_to_content(condition(context))
    return results


def fill_placeholders(template: str, results: Dict[int, RenderedContent]) -> str:
    """Replace each placeholder with its evaluated text."""
    def substitute(match) -> str:
        result = results.get(int(match.group(1)))
        return result.content if result is not None else ""

    return CONDITION_PLACEHOLDER_PATTERN.sub(substitute, template)


def evaluate_wrap_user_content(message: IRMessage, has_user: bool) -> RenderedContent:
    """
    Evaluate one WrapUser message's content.

    Returns:
        Text with every placeholder filled, plus file parts (the message's
        own first, then those produced by conditions in index order)
    """
    parts: List[ContentPart] = [
        part for part in (message.parts or ()) if part.type != "text"
    ]

    if not message.wrap_user_conditions:
        return RenderedContent(content=message.content, parts=parts)

    results = evaluate_conditions(message, has_user)
    content = fill_placeholders(message.content, results).strip()
    for index in sorted(results):
        parts.extend(results[index].parts)

    return RenderedContent(content=content, parts=parts)


def process_wrap_users(
    messages: List[IRMessage],
    original_content: str,
    has_user: bool = True,
) -> RenderedContent:
    """
    Combine WrapUser messages with the original user text.

    Prefix-mode content goes before the wrapped original, suffix-mode after,
    each in authored order, joined by blank lines. The tag of the last
    WrapUser message wraps the original.
    """
    prefixes: List[str] = []
    suffixes: List[str] = []
    parts: List[ContentPart] = []
    final_tag = DEFAULT_WRAP_TAG

    for message in messages:
        evaluated = evaluate_wrap_user_content(message, has_user)
        parts.extend(evaluated.parts)

        if evaluated.content:
            if message.wrap_user_mode == WrapUserMode.PREFIX:
                prefixes.append(evaluated.content)
            else:
                suffixes.append(evaluated.content)

        final_tag = message.wrap_user_tag or DEFAULT_WRAP_TAG

    wrapped_original = wrap_xml(final_tag, original_content)
    logger.debug(
        "Wrapped original user message in <%s> with %d prefix and %d suffix blocks",
        final_tag, len(prefixes), len(suffixes),
    )

    return RenderedContent(
        content="\n\n".join(prefixes + [wrapped_original] + suffixes),
        parts=parts,
    )


def combine_wrap_users(messages: List[IRMessage], has_user: bool = False) -> RenderedContent:
    """Combine WrapUser messages into standalone content (no original)."""
    evaluated = [evaluate_wrap_user_content(m, has_user) for m in messages]
    return RenderedContent(
        content="\n\n".join(e.content for e in evaluated if e.content),
        parts=[part for e in evaluated for part in e.parts],
    )


def resolve_wrap_users(
    messages: List[IRMessage],
    original_content: Optional[str],
) -> RenderedContent:
    """
    Resolve WrapUser messages against an optional original user text.

    Args:
        messages: WrapUser IR messages in authored order
        original_content: Text of the history's last user message, or None
                          when there is none

    Returns:
        Content and parts of the single user message that replaces them
    """
    if original_content is None:
        logger.debug("No prior user message; WrapUser content becomes a new user message")
        return combine_wrap_users(messages, has_user=False)
    return process_wrap_users(messages, original_content, has_user=True)
