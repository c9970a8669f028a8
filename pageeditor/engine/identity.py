"""Stable identities for editable nodes."""

from __future__ import annotations

import re

from bs4 import Tag  # type: ignore

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")

FINGERPRINT_LENGTH = 30


def content_fingerprint(text: str) -> str:
    """Return the first 30 alphanumeric characters of ``text``, lower-cased."""

    cleaned = _NON_ALNUM_RE.sub("", text or "")[:FINGERPRINT_LENGTH].lower()
    return cleaned or "empty"


def sibling_position(node: Tag) -> int:
    """Return the index of ``node`` among its parent's element children."""

    parent = node.parent
    if parent is None:
        return 0
    for index, sibling in enumerate(parent.find_all(True, recursive=False)):
        if sibling is node:
            return index
    return 0


def identify(
    tag_name: str,
    parent_tag_name: str | None,
    text: str,
    sibling_index: int,
    scan_index: int,
) -> str:
    """Derive the identity string for a candidate node.

    Identical inputs produce identical identities; two nodes sharing tag,
    parent tag, text prefix, sibling position and scan position collide.
    """

    parent = (parent_tag_name or "").lower() or "root"
    return "-".join(
        [
            tag_name.lower(),
            parent,
            content_fingerprint(text),
            str(sibling_index),
            str(scan_index),
        ]
    )
