"""Control flow components."""

from typing import Any, Callable, Iterable, Optional

from promptweave.prompt.element import Element, ElementKind, create_element


def If(*children: Any, condition: bool) -> Optional[Element]:
    """
    Render children only when condition is truthy.

    Example:
        If("You have VIP access!", condition=user.is_vip)
    """
    if not condition:
        return None
    return create_element(ElementKind.IF, {"condition": True}, *children)


def Show(*children: Any, when: bool, fallback: Any = None) -> Optional[Element]:
    """
    Render children when `when` is truthy, otherwise the fallback.

    Example:
        Show("Welcome back!", when=logged_in, fallback="Please log in")
    """
    if when:
        return create_element(ElementKind.SHOW, {"when": True}, *children)
    if fallback is not None:
        return create_element(ElementKind.SHOW, {"when": False}, fallback)
    return None


def Each(items: Iterable[Any], render_item: Callable[[Any, int], Any]) -> Element:
    """
    Render one node per item.

    Example:
        Each(users, lambda user, i: f"{i + 1}. {user.name}\\n")
    """
    items = list(items)
    rendered = [render_item(item, index) for index, item in enumerate(items)]
    return create_element(ElementKind.EACH, {"count": len(items)}, *rendered)


def Fragment(*children: Any) -> Element:
    """Group children without adding any structure."""
    return create_element(ElementKind.FRAGMENT, None, *children)


def Linebreak(repeat: int = 1) -> str:
    """Line breaks, a cleaner alternative to literal "\\n" children."""
    return "\n" * repeat
