"""Typed suggestion actions.

Each concrete ``(type, target)`` pair the executor knows is its own
variant carrying its own payload. Anything else parses to
``UnknownAction`` so callers can log and skip it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .types import SuggestionActionSpec

ADD = "add"
MODIFY = "modify"
REPLACE = "replace"

# Action values the analyzer emits and the executor understands.
SECTION_CTA = "cta"
SECTION_FREE_TRIAL = "free-trial"
SECTION_TESTIMONIALS = "testimonials"
CSS_SHADOW = "shadow"
CSS_RESPONSIVE = "responsive"
CONTENT_DETAILS = "details"


@dataclass(frozen=True)
class AddHeading:
    text: str = ""


@dataclass(frozen=True)
class AddMeta:
    name: str = "description"


@dataclass(frozen=True)
class AddSection:
    template: str


@dataclass(frozen=True)
class AddStylesheet:
    block: str


@dataclass(frozen=True)
class AddContent:
    template: str = CONTENT_DETAILS


@dataclass(frozen=True)
class FillImageAlt:
    pass


@dataclass(frozen=True)
class StrengthenButtons:
    pass


@dataclass(frozen=True)
class ModifyStylesheet:
    value: str = ""


@dataclass(frozen=True)
class SemanticStructure:
    pass


@dataclass(frozen=True)
class LabelInteractive:
    pass


@dataclass(frozen=True)
class ReplaceContent:
    target: str
    value: str = ""


@dataclass(frozen=True)
class UnknownAction:
    type: str
    target: str


SuggestionAction = Union[
    AddHeading,
    AddMeta,
    AddSection,
    AddStylesheet,
    AddContent,
    FillImageAlt,
    StrengthenButtons,
    ModifyStylesheet,
    SemanticStructure,
    LabelInteractive,
    ReplaceContent,
    UnknownAction,
]

KNOWN_ACTIONS: Tuple[type, ...] = (
    AddHeading,
    AddMeta,
    AddSection,
    AddStylesheet,
    AddContent,
    FillImageAlt,
    StrengthenButtons,
    ModifyStylesheet,
    SemanticStructure,
    LabelInteractive,
    ReplaceContent,
)


def parse_action(spec: SuggestionActionSpec) -> SuggestionAction:
    """Map a raw action triple onto its typed variant."""

    action_type = (spec.type or "").strip().lower()
    target = (spec.target or "").strip().lower()
    value = (spec.value or "").strip()

    if action_type == ADD:
        if target == "h1":
            return AddHeading(text=value)
        if target == "meta":
            return AddMeta()
        if target == "section":
            return AddSection(template=value)
        if target == "css":
            return AddStylesheet(block=value)
        if target == "content":
            return AddContent(template=value or CONTENT_DETAILS)
    elif action_type == MODIFY:
        if target == "img":
            return FillImageAlt()
        if target == "button":
            return StrengthenButtons()
        if target == "css":
            return ModifyStylesheet(value=value)
        if target == "html":
            return SemanticStructure()
        if target == "interactive":
            return LabelInteractive()
    elif action_type == REPLACE:
        return ReplaceContent(target=target, value=value)

    return UnknownAction(type=action_type, target=target)
