"""Attach and remove editing markers on scanned nodes."""

from __future__ import annotations

from typing import Iterable, List, Optional

from bs4 import Tag  # type: ignore

from .document import Node, scan_root
from .scanner import IDENTITY_ATTR
from .styles import LayoutProvider
from .types import BoundingBox, CandidateElement

ORIGINAL_TEXT_ATTR = "data-original-text"
ELEMENT_TYPE_ATTR = "data-element-type"
PRIORITY_ATTR = "data-edit-priority"
ROLLBACK_ATTR = "data-original-content"

MARKER_ATTRS = (
    IDENTITY_ATTR,
    ORIGINAL_TEXT_ATTR,
    ELEMENT_TYPE_ATTR,
    PRIORITY_ATTR,
    "data-editable",
    "data-edit-ready",
    "data-edit-listener",
    ROLLBACK_ATTR,
)


def tag(candidates: Iterable[CandidateElement]) -> None:
    """Write identity markers onto each candidate's node, overwriting old ones."""

    for candidate in candidates:
        node = candidate.node
        node[IDENTITY_ATTR] = candidate.identity
        node[ORIGINAL_TEXT_ATTR] = candidate.text
        node[ELEMENT_TYPE_ATTR] = candidate.tag_name
        node[PRIORITY_ATTR] = str(candidate.priority_score)


def untag(root: Optional[Node]) -> None:
    """Strip every editing marker from tagged nodes under ``root``."""

    if root is None:
        return
    for node in root.find_all(attrs={IDENTITY_ATTR: True}):
        for attr in MARKER_ATTRS:
            if node.has_attr(attr):
                del node[attr]


def tagged_nodes(root: Optional[Node]) -> List[Tag]:
    if root is None:
        return []
    return root.find_all(attrs={IDENTITY_ATTR: True})


def find_by_identity(root: Optional[Node], identity: str) -> Optional[Tag]:
    """Return the node carrying ``identity`` or ``None``."""

    if root is None or not identity:
        return None
    return root.find(attrs={IDENTITY_ATTR: identity})


def find_at_point(
    root: Optional[Node],
    x: float,
    y: float,
    layout: LayoutProvider,
) -> Optional[Tag]:
    """Return the tagged node under the point ``(x, y)``.

    The deepest node whose host box contains the point is resolved to
    itself when tagged, otherwise to its nearest tagged ancestor.
    """

    base = scan_root(root)
    if base is None:
        return None

    hit: Optional[Tag] = None
    for node in base.find_all(True):
        box = layout(node)
        if box is not None and box.contains(x, y):
            hit = node
    if hit is None:
        return None

    current: Optional[Tag] = hit
    while current is not None and current is not base:
        if current.has_attr(IDENTITY_ATTR):
            return current
        current = current.parent
    return None


def tagged_in_viewport(
    root: Optional[Node],
    width: float,
    height: float,
    layout: LayoutProvider,
) -> List[Tag]:
    """Return tagged nodes whose host box intersects the viewport."""

    viewport = BoundingBox(0, 0, width, height)
    visible: List[Tag] = []
    for node in tagged_nodes(root):
        box = layout(node)
        if box is None:
            continue
        if box.y < viewport.bottom and box.bottom > 0 and box.x < viewport.right and box.right > 0:
            visible.append(node)
    return visible
