"""Native content passthrough.

Injects content already in the target client library's message format.
Adapters emit it unchanged, in authored position.
"""

from typing import Any

from promptweave.prompt.element import Element, ElementKind, create_element


def Native(content: Any) -> Element:
    """
    Pass a provider-native message through untouched.

    Example:
        Native({"role": "user", "content": [{"type": "text", "text": "Hi"}]})
    """
    return create_element(ElementKind.NATIVE, {"content": content})
