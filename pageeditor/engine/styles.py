"""Inline style access and host-supplied geometry.

The engine never computes layout. Visibility is judged from inline
``style`` declarations and the ``hidden`` attribute, and geometry comes
from an optional layout provider supplied by the host.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, Optional

from bs4 import Tag  # type: ignore

from .types import BoundingBox

LayoutProvider = Callable[[Tag], Optional[BoundingBox]]

_DECLARATION_RE = re.compile(r"\s*([-\w]+)\s*:\s*([^;]+?)\s*(?:;|$)")
_ZERO_RE = re.compile(r"^0(?:\.0+)?(?:px|em|rem|%)?$")


def parse_style(value: str | None) -> Dict[str, str]:
    """Parse an inline style attribute into an ordered property mapping."""

    declarations: Dict[str, str] = {}
    if not value:
        return declarations
    for match in _DECLARATION_RE.finditer(value):
        declarations[match.group(1).lower()] = match.group(2).strip()
    return declarations


def format_style(declarations: Dict[str, str]) -> str:
    return "; ".join(f"{name}: {value}" for name, value in declarations.items())


def inline_style(node: Tag) -> Dict[str, str]:
    return parse_style(node.get("style"))


def set_style_properties(node: Tag, **properties: str | None) -> None:
    """Set or remove inline style properties; ``None`` removes the property.

    Keyword names use underscores in place of hyphens.
    """

    declarations = inline_style(node)
    for name, value in properties.items():
        prop = name.replace("_", "-")
        if value is None or value == "":
            declarations.pop(prop, None)
        else:
            declarations[prop] = value
    if declarations:
        node["style"] = format_style(declarations)
    elif node.has_attr("style"):
        del node["style"]


def _hides_subtree(node: Tag) -> bool:
    if node.has_attr("hidden"):
        return True
    style = inline_style(node)
    if style.get("display", "").lower() == "none":
        return True
    if style.get("visibility", "").lower() in {"hidden", "collapse"}:
        return True
    return False


def _declares_zero_size(style: Dict[str, str]) -> bool:
    width = style.get("width", "").lower()
    height = style.get("height", "").lower()
    return bool(_ZERO_RE.match(width)) or bool(_ZERO_RE.match(height))


def is_rendered(node: Tag) -> bool:
    """Return False when the node or an ancestor opts out of rendering."""

    current: Optional[Tag] = node
    while current is not None and getattr(current, "name", None):
        if _hides_subtree(current):
            return False
        current = current.parent
    return True


def is_visible(node: Tag, layout: LayoutProvider | None = None) -> tuple[bool, Optional[BoundingBox]]:
    """Return ``(visible, box)`` for ``node`` using inline style and the host layout."""

    box = layout(node) if layout is not None else None
    if not is_rendered(node):
        return False, box
    style = inline_style(node)
    opacity = style.get("opacity", "").strip()
    if opacity:
        try:
            if float(opacity) == 0.0:
                return False, box
        except ValueError:
            pass
    if _declares_zero_size(style):
        return False, box
    if box is not None and box.is_empty:
        return False, box
    return True, box
