"""WrapUser: combine authored content with the caller's last user turn."""

from typing import Any, Union

from promptweave.prompt.element import Element, ElementKind, create_element
from promptweave.prompt.errors import InvalidAttributeError
from promptweave.prompt.models import WrapUserMode


DEFAULT_WRAP_TAG = "user"


def WrapUser(
    *children: Any,
    tag: str = DEFAULT_WRAP_TAG,
    mode: Union[WrapUserMode, str] = WrapUserMode.SUFFIX,
) -> Element:
    """
    Wrap the last user message of an existing conversation.

    Given caller history, the adapter replaces the last user message with
    the original text wrapped in `<tag>` plus this content before it
    ("prefix") or after it ("suffix"). Without a user message in the
    history, the content alone becomes a new user message.

    Callable children are deferred: each receives a WrapUserContext and
    its result is rendered in place.

    Example:
        WrapUser(
            "Respond in JSON.",
            lambda ctx: " Reply to the user." if ctx.has_user else None,
            tag="original-query",
        )
    """
    try:
        mode = WrapUserMode(mode)
    except ValueError:
        raise InvalidAttributeError("WrapUser", "mode", mode)

    return create_element(
        ElementKind.WRAP_USER,
        {"tag": tag or DEFAULT_WRAP_TAG, "mode": mode},
        *children,
    )
