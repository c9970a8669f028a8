"""Shared fixtures for engine tests."""

from __future__ import annotations

from typing import Optional

import pytest
from bs4 import BeautifulSoup, Tag

from pageeditor.engine.config import load_config
from pageeditor.engine.document import parse_html
from pageeditor.engine.types import BoundingBox, Suggestion, SuggestionActionSpec


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


def make_document(body: str) -> BeautifulSoup:
    return parse_html(f"<!DOCTYPE html><html><head></head><body>{body}</body></html>")


def box_from_attr(node: Tag) -> Optional[BoundingBox]:
    """Layout provider reading ``data-box="x,y,w,h"`` written into test markup."""

    raw = node.get("data-box")
    if not raw:
        return None
    x, y, width, height = (float(part) for part in raw.split(","))
    return BoundingBox(x, y, width, height)


def make_suggestion(
    action_type: str,
    target: str,
    value: str = "",
    *,
    id: str = "suggestion_test",
) -> Suggestion:
    return Suggestion(
        id=id,
        type="content",
        category="marketing",
        title="Test suggestion",
        description="Used by tests.",
        impact="medium",
        confidence=0.5,
        priority=50,
        action=SuggestionActionSpec(type=action_type, target=target, value=value),
        reasoning="Testing.",
    )
