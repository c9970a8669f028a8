"""Detection and prioritisation of editable nodes."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from bs4 import Tag  # type: ignore

from .config import EngineConfig, load_config
from .document import Node, ancestors_until, scan_root
from .identity import identify, sibling_position
from .styles import LayoutProvider, is_visible
from .types import CandidateElement

logger = logging.getLogger(__name__)

IDENTITY_ATTR = "data-editable-id"

DEFAULT_EXCLUDE_SELECTORS = [
    "script",
    "style",
    "noscript",
    '[contenteditable="true"]',
]

DEFAULT_INCLUDE_SELECTORS = [
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "p",
    "span",
    "div",
    "button",
    "a",
    "li",
    "td",
    "th",
    "figcaption",
    "blockquote",
    "cite",
    "label",
    '[role="heading"]',
    '[role="button"]',
    '[role="link"]',
    ".text-content",
    ".editable-text",
    ".content",
]

_HEADING_RE = re.compile(r"^h[1-6]$")
_WHITESPACE_ONLY_RE = re.compile(r"^\s*$")
_SYMBOLS_ONLY_RE = re.compile(r"^[^\w\s]*$")

_TITLE_CLASSES = {"title", "heading"}
_BUTTON_CLASSES = {"button", "cta"}
_CONTENT_CLASSES = {"text-content", "editable-text"}


@dataclass
class ScanOptions:
    """Tunable filters for a scan."""

    min_text_length: int = 2
    max_text_length: int = 1000
    exclude_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_SELECTORS))
    include_selectors: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_SELECTORS))
    prioritize_headings: bool = True
    skip_nested_elements: bool = True
    layout: Optional[LayoutProvider] = None
    max_depth: Optional[int] = None


def scan(
    root: Optional[Node],
    options: ScanOptions | None = None,
    config: EngineConfig | None = None,
) -> List[CandidateElement]:
    """Return editable candidates under ``root`` ordered by priority.

    Nodes are evaluated descendants first so that, when nested elements are
    skipped, a container is never accepted once one of its descendants has
    been. Nodes whose identity a tagged node already carries are skipped.
    Ties keep document order.
    """

    opts = options or ScanOptions()
    engine_config = config or load_config(None)
    base = scan_root(root)
    if base is None or not opts.include_selectors:
        return []

    started = time.perf_counter()
    matches: Sequence[Tag] = base.select(", ".join(opts.include_selectors))
    exclude = ", ".join(opts.exclude_selectors)
    max_depth = opts.max_depth if opts.max_depth is not None else int(engine_config.get("max_depth", 10))

    processed: Set[int] = set()
    accepted: List[CandidateElement] = []
    taken = {str(tagged[IDENTITY_ATTR]) for tagged in base.find_all(attrs={IDENTITY_ATTR: True})}

    for scan_index in reversed(range(len(matches))):
        node = matches[scan_index]
        if id(node) in processed:
            continue
        if exclude and node.css.closest(exclude) is not None:
            continue
        if node.has_attr(IDENTITY_ATTR):
            # Previously tagged nodes keep their containers out of this scan.
            if opts.skip_nested_elements:
                _mark_ancestors(node, base, processed)
            continue

        candidate = _evaluate(node, scan_index, base, opts, engine_config, max_depth)
        if candidate is None:
            continue
        if candidate.identity in taken:
            # A tagged node already owns this identity.
            logger.debug("Skipping %s: identity already in use", candidate.identity)
            if opts.skip_nested_elements:
                _mark_ancestors(node, base, processed)
            continue

        accepted.append(candidate)
        processed.add(id(node))
        if opts.skip_nested_elements:
            _mark_ancestors(node, base, processed)

    accepted.sort(key=lambda item: item.scan_index)
    accepted.sort(key=lambda item: item.priority_score, reverse=True)

    elapsed = (time.perf_counter() - started) * 1000
    logger.debug("Element detection completed in %.2fms, found %d elements", elapsed, len(accepted))
    return accepted


def _mark_ancestors(node: Tag, base: Node, processed: Set[int]) -> None:
    for ancestor in ancestors_until(node, base):
        processed.add(id(ancestor))


def _evaluate(
    node: Tag,
    scan_index: int,
    base: Node,
    opts: ScanOptions,
    config: EngineConfig,
    max_depth: int,
) -> Optional[CandidateElement]:
    text = node.get_text().strip()
    visible, box = is_visible(node, opts.layout)
    if not visible or not has_valid_text(text, opts.min_text_length, opts.max_text_length):
        return None

    depth = element_depth(node, base)
    if opts.skip_nested_elements and depth > max_depth:
        return None

    tag_name = node.name.lower()
    parent = node.parent
    parent_name = parent.name.lower() if isinstance(parent, Tag) and parent.name != "[document]" else "root"
    identity = identify(tag_name, parent_name, text, sibling_position(node), scan_index)

    return CandidateElement(
        node=node,
        identity=identity,
        tag_name=tag_name,
        text=text,
        priority_score=priority_score(node, text, depth, opts.prioritize_headings, config),
        is_visible=True,
        bounding_box=box,
        parent_tag_name=parent_name,
        depth=depth,
        scan_index=scan_index,
    )


def has_valid_text(text: str, min_length: int = 2, max_length: int = 1000) -> bool:
    if not min_length <= len(text) <= max_length:
        return False
    if _WHITESPACE_ONLY_RE.match(text):
        return False
    return not _SYMBOLS_ONLY_RE.match(text)


def element_depth(node: Tag, base: Node | None) -> int:
    """Count the ancestors strictly between ``node`` and ``base``."""

    return sum(1 for _ in ancestors_until(node, base))


def priority_score(
    node: Tag,
    text: str,
    depth: int,
    prioritize_headings: bool,
    config: EngineConfig,
) -> int:
    """Return the non-negative editing priority for ``node``."""

    tag_name = node.name.lower()
    score = config.tag_priority(tag_name)

    if prioritize_headings and _HEADING_RE.match(tag_name):
        score += config.boost("heading")

    if len(text) < int(config.get("short_text_length", 50)):
        score += config.boost("short_text")
    elif len(text) > int(config.get("long_text_length", 200)):
        score += config.boost("long_text")

    classes = set(node.get("class") or [])
    if classes & _TITLE_CLASSES:
        score += config.boost("title_class")
    if classes & _BUTTON_CLASSES:
        score += config.boost("button_class")
    if classes & _CONTENT_CLASSES:
        score += config.boost("content_class")

    start = int(config.get("depth_penalty_start", 5))
    if depth > start:
        score -= (depth - start) * int(config.get("depth_penalty_step", 2))

    role = node.get("role")
    if role == "heading":
        score += config.boost("role_heading")
    elif role == "button":
        score += config.boost("role_button")

    return max(0, score)
