"""Configuration helpers for the editing engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def tag_priority(self, tag_name: str) -> int:
        priorities = self.raw.get("tag_priorities", {})
        return int(priorities.get(tag_name, self.raw.get("default_tag_priority", 5)))

    def boost(self, name: str) -> int:
        boosts = self.raw.get("boosts", {})
        return int(boosts.get(name, 0))

    def penalty(self, score: str, rule: str) -> int:
        penalties = self.raw.get("penalties", {})
        return int(penalties.get(score, {}).get(rule, 0))

    def color(self, state: str) -> str:
        colors = self.raw.get("highlight_colors", {})
        return colors.get(state, "#3b82f6")


DEFAULTS: Dict[str, Any] = {
    "max_depth": 10,
    "depth_penalty_start": 5,
    "depth_penalty_step": 2,
    "short_text_length": 50,
    "long_text_length": 200,
    "default_tag_priority": 5,
    "tag_priorities": {
        "h1": 100,
        "h2": 90,
        "h3": 80,
        "h4": 70,
        "h5": 60,
        "h6": 50,
        "p": 40,
        "button": 35,
        "a": 30,
        "span": 25,
        "div": 20,
        "li": 15,
        "th": 12,
        "td": 10,
    },
    "boosts": {
        "heading": 20,
        "short_text": 10,
        "long_text": -5,
        "title_class": 15,
        "button_class": 10,
        "content_class": 8,
        "role_heading": 15,
        "role_button": 10,
    },
    "highlight_colors": {
        "hover": "#3b82f6",
        "selected": "#3b82f6",
        "editing": "#10b981",
    },
    "base_z_index": 1000,
    "min_word_count": 100,
    "thin_word_count": 50,
    "suggest_word_count": 200,
    "min_title_length": 10,
    "max_css_length": 50000,
    "max_inline_styles": 10,
    "min_headings": 2,
    "min_cta_elements": 2,
    "penalties": {
        "content": {
            "low_word_count": 20,
            "thin_word_count": 30,
            "missing_h1": 15,
            "multiple_h1": 10,
            "missing_alt": 10,
        },
        "design": {
            "no_color": 20,
            "no_responsive": 15,
            "no_font_family": 10,
            "no_spacing": 10,
        },
        "structure": {
            "no_semantic": 25,
            "few_headings": 15,
        },
        "seo": {
            "weak_title": 20,
            "no_description": 15,
            "no_keywords": 5,
        },
        "performance": {
            "large_css": 15,
            "inline_styles": 10,
            "unoptimized_images": 10,
        },
    },
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults."""

    data: Dict[str, Any] = DEFAULTS.copy()
    for key in ("tag_priorities", "boosts", "highlight_colors"):
        data[key] = dict(DEFAULTS[key])
    data["penalties"] = {name: dict(rules) for name, rules in DEFAULTS["penalties"].items()}

    if path is not None and Path(path).exists():
        with Path(path).open("r", encoding="utf-8") as stream:
            user = yaml.safe_load(stream) or {}
        merge_into(data, user)

    return EngineConfig(data)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value
