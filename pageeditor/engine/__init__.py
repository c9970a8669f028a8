"""In-place editing engine: scanning, tagging, highlighting, mutation and suggestions."""

from .analyzer import analyze, generate_suggestions
from .executor import apply
from .highlight import HighlightController, apply_highlight, bind_interaction, clear_all
from .mutation import rollback, update_batch, update_one, validate
from .scanner import ScanOptions, scan
from .tagger import find_at_point, find_by_identity, tag, tagged_in_viewport, untag

__all__ = [
    "HighlightController",
    "ScanOptions",
    "analyze",
    "apply",
    "apply_highlight",
    "bind_interaction",
    "clear_all",
    "find_at_point",
    "find_by_identity",
    "generate_suggestions",
    "rollback",
    "scan",
    "tag",
    "tagged_in_viewport",
    "untag",
    "update_batch",
    "update_one",
    "validate",
]
