"""Typed data structures shared by the editing engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from bs4 import Tag  # type: ignore


@dataclass(frozen=True)
class BoundingBox:
    """Host-supplied geometry for a node, in viewport pixels."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


@dataclass(frozen=True)
class CandidateElement:
    """A node judged eligible for in-place editing during one scan."""

    node: Tag = field(repr=False, compare=False)
    identity: str
    tag_name: str
    text: str
    priority_score: int
    is_visible: bool
    bounding_box: Optional[BoundingBox]
    parent_tag_name: str
    depth: int
    scan_index: int

    def to_dict(self) -> Dict[str, Any]:
        box = asdict(self.bounding_box) if self.bounding_box else None
        return {
            "identity": self.identity,
            "tag_name": self.tag_name,
            "text": self.text,
            "priority_score": self.priority_score,
            "is_visible": self.is_visible,
            "bounding_box": box,
            "parent_tag_name": self.parent_tag_name,
            "depth": self.depth,
        }


@dataclass
class HighlightState:
    """Visual interaction flags for a single identity."""

    identity: str
    is_hovered: bool = False
    is_selected: bool = False
    is_editing: bool = False
    color: str = "#3b82f6"
    z_index: int = 1000

    @property
    def is_active(self) -> bool:
        return self.is_hovered or self.is_selected or self.is_editing


@dataclass(frozen=True)
class SuggestionActionSpec:
    """Raw ``{type, target, value}`` action attached to a suggestion."""

    type: str
    target: str
    value: str = ""


@dataclass(frozen=True)
class Suggestion:
    """Structured improvement proposal produced by the analyzer."""

    id: str
    type: str
    category: str
    title: str
    description: str
    impact: str
    confidence: float
    priority: int
    action: SuggestionActionSpec
    reasoning: str
    preview: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Suggestion":
        action = data.get("action") or {}
        return cls(
            id=str(data.get("id", "")),
            type=str(data.get("type", "")),
            category=str(data.get("category", "")),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            impact=str(data.get("impact", "low")),
            confidence=float(data.get("confidence", 0.0)),
            priority=int(data.get("priority", 0)),
            action=SuggestionActionSpec(
                type=str(action.get("type", "")),
                target=str(action.get("target", "")),
                value=str(action.get("value", "") or ""),
            ),
            reasoning=str(data.get("reasoning", "")),
            preview=data.get("preview"),
        )


@dataclass(frozen=True)
class AnalysisIssue:
    severity: str
    category: str
    message: str
    fix: str


@dataclass(frozen=True)
class AnalysisOpportunity:
    type: str
    category: str
    impact: str
    effort: str
    description: str


@dataclass(frozen=True)
class ContentAnalysis:
    """Scores and findings from one analysis run."""

    content_score: int
    design_score: int
    structure_score: int
    seo_score: int
    performance_score: int
    overall_score: int
    issues: List[AnalysisIssue] = field(default_factory=list)
    opportunities: List[AnalysisOpportunity] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BusinessContext:
    """Optional business framing used for contextual suggestions."""

    industry: str = ""
    target_audience: str = ""
    business_goal: str = ""
    competitive_advantage: List[str] = field(default_factory=list)
    tone: str = "professional"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BusinessContext":
        advantages = data.get("competitive_advantage") or []
        if isinstance(advantages, str):
            advantages = [advantages]
        return cls(
            industry=str(data.get("industry", "")),
            target_audience=str(data.get("target_audience", "")),
            business_goal=str(data.get("business_goal", "")),
            competitive_advantage=[str(item) for item in advantages],
            tone=str(data.get("tone", "professional")),
        )


@dataclass(frozen=True)
class BatchResult:
    success: int
    failed: int


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    reasons: List[str]


@dataclass(frozen=True)
class ApplyResult:
    """Updated document and stylesheet after applying one suggestion."""

    html: str
    css: str
    applied: bool
