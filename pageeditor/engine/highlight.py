"""Hover, selection and editing highlights for tagged nodes.

``apply_highlight`` styles exactly one node and never coordinates with
others. ``HighlightController`` owns the per-identity states of an editing
session and keeps at most one identity in the editing state.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from bs4 import Tag  # type: ignore

from .config import EngineConfig, load_config
from .document import Node
from .scanner import IDENTITY_ATTR
from .styles import set_style_properties
from .tagger import find_by_identity
from .types import HighlightState

logger = logging.getLogger(__name__)

HOVER_CLASS = "edit-hover"
SELECTED_CLASS = "edit-selected"
EDITING_CLASS = "edit-editing"
HIGHLIGHT_CLASSES = (HOVER_CLASS, SELECTED_CLASS, EDITING_CLASS)

TRANSITION = "all 0.2s cubic-bezier(0.4, 0, 0.2, 1)"
INTERACTION_ATTRS = ("tabindex", "role", "aria-label")


def _tint(color: str, alpha: float) -> str:
    """Return ``color`` at ``alpha`` opacity.

    Hex colours become ``rgba()``; named and functional colours are mixed
    with transparent instead.
    """

    value = color.strip().lstrip("#")
    if color.strip().startswith("#") and len(value) in (3, 6):
        if len(value) == 3:
            value = "".join(char * 2 for char in value)
        try:
            red, green, blue = (int(value[index:index + 2], 16) for index in (0, 2, 4))
        except ValueError:
            pass
        else:
            return f"rgba({red}, {green}, {blue}, {alpha})"
    return f"color-mix(in srgb, {color.strip()} {round(alpha * 100)}%, transparent)"


def _remove_classes(node: Tag) -> None:
    classes = [name for name in (node.get("class") or []) if name not in HIGHLIGHT_CLASSES]
    if classes:
        node["class"] = classes
    elif node.has_attr("class"):
        del node["class"]


def _add_class(node: Tag, name: str) -> None:
    classes = list(node.get("class") or [])
    classes.append(name)
    node["class"] = classes


def apply_highlight(node: Tag, state: HighlightState) -> None:
    """Style ``node`` for the strongest flag set in ``state``.

    Editing wins over selected, which wins over hovered; with no flag set
    the highlight styling is cleared. Outline and fill use ``state.color``.
    """

    _remove_classes(node)

    if state.is_editing:
        _add_class(node, EDITING_CLASS)
        set_style_properties(
            node,
            outline=f"3px solid {state.color}",
            background_color=_tint(state.color, 0.1),
            z_index=str(state.z_index + 20),
        )
    elif state.is_selected:
        _add_class(node, SELECTED_CLASS)
        set_style_properties(
            node,
            outline=f"3px solid {state.color}",
            background_color=_tint(state.color, 0.05),
            z_index=str(state.z_index + 10),
        )
    elif state.is_hovered:
        _add_class(node, HOVER_CLASS)
        set_style_properties(
            node,
            outline=f"2px dashed {state.color}",
            background_color=_tint(state.color, 0.08),
            z_index=str(state.z_index),
        )
    else:
        set_style_properties(node, outline=None, background_color=None, z_index=None)

    set_style_properties(node, transition=TRANSITION)


def clear_all(root: Optional[Node]) -> None:
    """Remove highlight classes and inline highlight styles under ``root``."""

    if root is None:
        return
    selector = ", ".join(f".{name}" for name in HIGHLIGHT_CLASSES)
    for node in root.select(selector):
        _remove_classes(node)
        set_style_properties(node, outline=None, background_color=None, z_index=None, transition=None)


def bind_interaction(node: Tag, identity: str) -> Callable[[], None]:
    """Make ``node`` keyboard reachable as an edit target.

    Returns a callable that puts back the attribute values the node had
    before, removing the ones it did not have.
    """

    previous = {attr: node.get(attr) for attr in INTERACTION_ATTRS}
    preview = node.get_text()[:50]
    node["tabindex"] = "0"
    node["role"] = "button"
    node["aria-label"] = f"Edit text: {preview}..."
    logger.debug("Bound interaction attributes for %s", identity)

    def cleanup() -> None:
        for attr, value in previous.items():
            if value is not None:
                node[attr] = value
            elif node.has_attr(attr):
                del node[attr]

    return cleanup


class HighlightController:
    """Track interaction states for one document and apply them to nodes."""

    def __init__(self, root: Node, config: EngineConfig | None = None) -> None:
        self.root = root
        self.config = config or load_config(None)
        self.states: Dict[str, HighlightState] = {}

    @property
    def editing_identity(self) -> Optional[str]:
        for identity, state in self.states.items():
            if state.is_editing:
                return identity
        return None

    def hover(self, identity: str) -> bool:
        return self._set(identity, is_hovered=True, color=self.config.color("hover"))

    def select(self, identity: str) -> bool:
        return self._set(identity, is_selected=True, color=self.config.color("selected"))

    def edit(self, identity: str) -> bool:
        """Put ``identity`` into the editing state, demoting any other editor.

        Other editors are found from the ``edit-editing`` class in the tree,
        so a document highlighted by an earlier controller is covered too.
        """

        target = find_by_identity(self.root, identity)
        if target is not None:
            for node in self.root.select(f".{EDITING_CLASS}"):
                if node is target:
                    continue
                other = node.get(IDENTITY_ATTR, "")
                logger.info("Ending edit on %s before editing %s", other or node.name, identity)
                apply_highlight(node, HighlightState(identity=other))
                self.states.pop(other, None)
        return self._set(identity, is_editing=True, color=self.config.color("editing"))

    def clear(self, identity: str) -> bool:
        return self._set(identity)

    def reset(self) -> None:
        clear_all(self.root)
        self.states.clear()

    def _set(self, identity: str, **flags) -> bool:
        node = find_by_identity(self.root, identity)
        if node is None:
            logger.warning("Highlight target %s not found", identity)
            self.states.pop(identity, None)
            return False
        state = HighlightState(
            identity=identity,
            z_index=int(self.config.get("base_z_index", 1000)),
            **flags,
        )
        apply_highlight(node, state)
        if state.is_active:
            self.states[identity] = state
        else:
            self.states.pop(identity, None)
        return True
