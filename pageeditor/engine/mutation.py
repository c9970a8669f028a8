"""Direct text updates on tagged nodes with one level of rollback."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

from bs4 import Tag  # type: ignore

from .document import Node, is_attached
from .styles import is_visible
from .tagger import ROLLBACK_ATTR, find_by_identity
from .types import BatchResult, ValidationResult

logger = logging.getLogger(__name__)

EXCLUDED_CONTAINERS = "script, style, noscript"


def update_one(root: Optional[Node], identity: str, new_text: str) -> bool:
    """Replace the text of the node tagged ``identity``.

    The text present before the call is stored on the node as its rollback
    marker. Returns False when no node carries the identity.
    """

    node = find_by_identity(root, identity)
    if node is None:
        logger.warning("Element with ID %s not found", identity)
        return False

    node[ROLLBACK_ATTR] = node.get_text()
    node.string = new_text
    logger.info("Updated element %s with new content", identity)
    return True


def update_batch(root: Optional[Node], updates: Iterable[Mapping[str, Any]]) -> BatchResult:
    """Apply ``update_one`` for each ``{identity, content}`` item in order.

    Failures are counted and do not undo earlier successful updates.
    """

    success = 0
    failed = 0
    for item in updates:
        identity = item.get("identity") or item.get("elementId") or ""
        content = item.get("content", "")
        if update_one(root, str(identity), "" if content is None else str(content)):
            success += 1
        else:
            failed += 1
    return BatchResult(success=success, failed=failed)


def rollback(root: Optional[Node], identity: str) -> bool:
    """Restore the text saved by the last update and drop the marker."""

    node = find_by_identity(root, identity)
    if node is None or not node.has_attr(ROLLBACK_ATTR):
        return False
    node.string = node[ROLLBACK_ATTR]
    del node[ROLLBACK_ATTR]
    return True


def validate(node: Optional[Tag]) -> ValidationResult:
    """Check whether ``node`` can be edited in place."""

    if node is None:
        return ValidationResult(is_valid=False, reasons=["Element is not connected to the document"])

    reasons: List[str] = []
    if not is_attached(node):
        reasons.append("Element is not connected to the document")

    if not node.get_text().strip():
        reasons.append("Element has no text content")

    visible, _ = is_visible(node)
    if not visible:
        reasons.append("Element is not visible")

    if node.css.closest(EXCLUDED_CONTAINERS) is not None:
        reasons.append("Element is in excluded container")

    if node.css.closest('[contenteditable="true"]') is not None:
        reasons.append("Element is already contenteditable")

    return ValidationResult(is_valid=not reasons, reasons=reasons)
