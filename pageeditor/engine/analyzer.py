"""Heuristic content-quality scoring and suggestion generation.

Every rule is a fixed, deterministic check over the parsed markup and the
raw stylesheet text. Scores start at 100, lose fixed penalties and are
clamped to ``[0, 100]``.
"""

from __future__ import annotations

import re
import uuid
from typing import List, Optional

from bs4 import BeautifulSoup, Tag  # type: ignore

from . import actions
from .config import EngineConfig, load_config
from .document import body_or_root, parse_html
from .types import (
    AnalysisIssue,
    AnalysisOpportunity,
    BusinessContext,
    ContentAnalysis,
    Suggestion,
    SuggestionActionSpec,
)

SEMANTIC_TAGS = ["header", "nav", "main", "section", "article", "footer"]
HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
CTA_SELECTOR = "button, .button, .btn"
CTA_SUGGESTION_SELECTOR = "button, .button, .btn, .cta"
INTERACTIVE_SELECTOR = "button, input, select, textarea"
STRONG_CTA_WORDS = ("now", "free", "limited")
OPTIMIZED_IMAGE_MARKERS = ("webp", "optimized")
TRIAL_MARKERS = ("free trial", "trial", "free demo")
TESTIMONIAL_MARKERS = ("testimonial", "customer", "case stud")
SMB_AUDIENCE_RE = re.compile(r"\b(small|medium|smb|sme)\b|small and medium|mid-sized", re.IGNORECASE)


def _clamp(score: int) -> int:
    return max(0, min(100, score))


def _page_text(soup: BeautifulSoup) -> str:
    return body_or_root(soup).get_text(" ")


def word_count(soup: BeautifulSoup) -> int:
    return len(_page_text(soup).split())


def images_missing_alt(soup: BeautifulSoup) -> List[Tag]:
    return [image for image in soup.find_all("img") if not image.get("alt")]


def _has_semantic_container(soup: BeautifulSoup) -> bool:
    return soup.find(SEMANTIC_TAGS) is not None


def analyze(html: str, css: str = "", config: EngineConfig | None = None) -> ContentAnalysis:
    """Score ``html``/``css`` and list critical issues and opportunities."""

    engine_config = config or load_config(None)
    soup = parse_html(html)
    css = css or ""

    content = content_score(soup, engine_config)
    design = design_score(css, engine_config)
    structure = structure_score(soup, engine_config)
    seo = seo_score(soup, engine_config)
    performance = performance_score(soup, css, engine_config)
    overall = _clamp(round((content + design + structure + seo + performance) / 5))

    return ContentAnalysis(
        content_score=content,
        design_score=design,
        structure_score=structure,
        seo_score=seo,
        performance_score=performance,
        overall_score=overall,
        issues=identify_issues(soup),
        opportunities=identify_opportunities(soup, engine_config),
    )


def content_score(soup: BeautifulSoup, config: EngineConfig) -> int:
    score = 100
    words = word_count(soup)
    if words < int(config.get("min_word_count", 100)):
        score -= config.penalty("content", "low_word_count")
    if words < int(config.get("thin_word_count", 50)):
        score -= config.penalty("content", "thin_word_count")

    h1_count = len(soup.find_all("h1"))
    if h1_count == 0:
        score -= config.penalty("content", "missing_h1")
    if h1_count > 1:
        score -= config.penalty("content", "multiple_h1")

    if images_missing_alt(soup):
        score -= config.penalty("content", "missing_alt")
    return _clamp(score)


def design_score(css: str, config: EngineConfig) -> int:
    score = 100
    if "color" not in css and "background" not in css:
        score -= config.penalty("design", "no_color")
    if "@media" not in css and "responsive" not in css:
        score -= config.penalty("design", "no_responsive")
    if "font-family" not in css:
        score -= config.penalty("design", "no_font_family")
    if "margin" not in css and "padding" not in css:
        score -= config.penalty("design", "no_spacing")
    return _clamp(score)


def structure_score(soup: BeautifulSoup, config: EngineConfig) -> int:
    score = 100
    if not _has_semantic_container(soup):
        score -= config.penalty("structure", "no_semantic")
    if len(soup.find_all(HEADING_TAGS)) < int(config.get("min_headings", 2)):
        score -= config.penalty("structure", "few_headings")
    return _clamp(score)


def seo_score(soup: BeautifulSoup, config: EngineConfig) -> int:
    score = 100
    title = soup.find("title")
    if title is None or len(title.get_text()) < int(config.get("min_title_length", 10)):
        score -= config.penalty("seo", "weak_title")
    if soup.find("meta", attrs={"name": "description"}) is None:
        score -= config.penalty("seo", "no_description")
    if soup.find("meta", attrs={"name": "keywords"}) is None:
        score -= config.penalty("seo", "no_keywords")
    return _clamp(score)


def performance_score(soup: BeautifulSoup, css: str, config: EngineConfig) -> int:
    score = 100
    if len(css) > int(config.get("max_css_length", 50000)):
        score -= config.penalty("performance", "large_css")
    if len(soup.find_all(style=True)) > int(config.get("max_inline_styles", 10)):
        score -= config.penalty("performance", "inline_styles")

    for image in soup.find_all("img"):
        src = image.get("src") or ""
        if src and not any(marker in src for marker in OPTIMIZED_IMAGE_MARKERS):
            score -= config.penalty("performance", "unoptimized_images")
            break
    return _clamp(score)


def identify_issues(soup: BeautifulSoup) -> List[AnalysisIssue]:
    issues: List[AnalysisIssue] = []
    if soup.find("h1") is None:
        issues.append(
            AnalysisIssue(
                severity="critical",
                category="seo",
                message="No H1 heading found",
                fix="Add an H1 heading for the main title",
            )
        )

    missing = images_missing_alt(soup)
    if missing:
        noun = "image is" if len(missing) == 1 else "images are"
        issues.append(
            AnalysisIssue(
                severity="warning",
                category="accessibility",
                message=f"{len(missing)} {noun} missing an alt attribute",
                fix="Add a descriptive alt attribute to every image",
            )
        )
    return issues


def identify_opportunities(soup: BeautifulSoup, config: EngineConfig) -> List[AnalysisOpportunity]:
    opportunities: List[AnalysisOpportunity] = []
    if len(soup.select(CTA_SELECTOR)) < int(config.get("min_cta_elements", 2)):
        opportunities.append(
            AnalysisOpportunity(
                type="enhancement",
                category="marketing",
                impact="high",
                effort="low",
                description="Add more call-to-action buttons to lift conversions",
            )
        )
    return opportunities


def _suggestion(
    type: str,
    category: str,
    title: str,
    description: str,
    impact: str,
    confidence: float,
    priority: int,
    action: SuggestionActionSpec,
    reasoning: str,
    preview: str | None = None,
) -> Suggestion:
    return Suggestion(
        id=f"suggestion_{uuid.uuid4().hex}",
        type=type,
        category=category,
        title=title,
        description=description,
        impact=impact,
        confidence=confidence,
        priority=priority,
        action=action,
        reasoning=reasoning,
        preview=preview,
    )


def generate_suggestions(
    html: str,
    css: str = "",
    business_context: Optional[BusinessContext] = None,
    config: EngineConfig | None = None,
) -> List[Suggestion]:
    """Return improvement suggestions for the page, highest priority first."""

    engine_config = config or load_config(None)
    soup = parse_html(html)
    css = css or ""

    suggestions: List[Suggestion] = []
    suggestions.extend(content_suggestions(soup, engine_config))
    suggestions.extend(design_suggestions(css))
    suggestions.extend(structure_suggestions(soup))
    suggestions.extend(seo_suggestions(soup))
    suggestions.extend(conversion_suggestions(soup, engine_config))
    suggestions.extend(accessibility_suggestions(soup))
    if business_context is not None:
        suggestions.extend(contextual_suggestions(soup, business_context))

    suggestions.sort(key=lambda item: item.priority, reverse=True)
    return suggestions


def content_suggestions(soup: BeautifulSoup, config: EngineConfig) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    if soup.find("h1") is None:
        suggestions.append(
            _suggestion(
                type="content",
                category="marketing",
                title="Add a main title (H1)",
                description="Add a clear H1 title to help search engines and visitors.",
                impact="high",
                confidence=0.95,
                priority=90,
                action=SuggestionActionSpec(type=actions.ADD, target="h1", value=""),
                reasoning="The H1 states the page's main topic and matters for SEO.",
            )
        )

    if word_count(soup) < int(config.get("suggest_word_count", 200)):
        suggestions.append(
            _suggestion(
                type="content",
                category="marketing",
                title="Add more content",
                description="More detailed copy builds trust and improves search visibility.",
                impact="medium",
                confidence=0.8,
                priority=70,
                action=SuggestionActionSpec(type=actions.ADD, target="content", value=actions.CONTENT_DETAILS),
                reasoning="Substantial content is valuable to both search engines and visitors.",
            )
        )
    return suggestions


def design_suggestions(css: str) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    if "box-shadow" not in css and "drop-shadow" not in css:
        suggestions.append(
            _suggestion(
                type="design",
                category="ux",
                title="Add shadow effects to cards",
                description="Give elements depth for a more modern, polished look.",
                impact="medium",
                confidence=0.75,
                priority=60,
                action=SuggestionActionSpec(type=actions.ADD, target="css", value=actions.CSS_SHADOW),
                reasoning="Shadows create visual hierarchy and a professional impression.",
                preview="box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);",
            )
        )

    if "@media" not in css:
        suggestions.append(
            _suggestion(
                type="design",
                category="technical",
                title="Add responsive breakpoints",
                description="Optimise the layout for mobile devices.",
                impact="high",
                confidence=0.9,
                priority=85,
                action=SuggestionActionSpec(type=actions.ADD, target="css", value=actions.CSS_RESPONSIVE),
                reasoning="Most traffic is mobile, so responsive layouts are essential.",
            )
        )
    return suggestions


def structure_suggestions(soup: BeautifulSoup) -> List[Suggestion]:
    if _has_semantic_container(soup):
        return []
    return [
        _suggestion(
            type="structure",
            category="technical",
            title="Use semantic HTML elements",
            description="Improve the structure with header, main and section elements.",
            impact="medium",
            confidence=0.85,
            priority=65,
            action=SuggestionActionSpec(type=actions.MODIFY, target="html", value="semantic"),
            reasoning="Semantic elements improve accessibility and SEO.",
        )
    ]


def seo_suggestions(soup: BeautifulSoup) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    if soup.find("meta", attrs={"name": "description"}) is None:
        suggestions.append(
            _suggestion(
                type="seo",
                category="technical",
                title="Add a meta description",
                description="Add a meta description to improve how the page appears in search results.",
                impact="high",
                confidence=0.9,
                priority=80,
                action=SuggestionActionSpec(type=actions.ADD, target="meta", value="description"),
                reasoning="The meta description strongly influences click-through from search results.",
            )
        )

    missing = images_missing_alt(soup)
    if missing:
        suggestions.append(
            _suggestion(
                type="seo",
                category="compliance",
                title="Add alt text to images",
                description=f"{len(missing)} image(s) lack an alt attribute. Add one for SEO and accessibility.",
                impact="medium",
                confidence=0.95,
                priority=75,
                action=SuggestionActionSpec(type=actions.MODIFY, target="img", value="alt-text"),
                reasoning="Alt text helps search engines understand images and improves accessibility.",
            )
        )
    return suggestions


def conversion_suggestions(soup: BeautifulSoup, config: EngineConfig) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    cta_elements = soup.select(CTA_SUGGESTION_SELECTOR)
    cta_texts = [element.get_text().lower() for element in cta_elements]
    has_strong_cta = any(word in text for text in cta_texts for word in STRONG_CTA_WORDS)

    if len(cta_elements) < int(config.get("min_cta_elements", 2)):
        suggestions.append(
            _suggestion(
                type="conversion",
                category="marketing",
                title="Add another call-to-action",
                description="Place several call-to-action points on the page to create more conversion opportunities.",
                impact="high",
                confidence=0.85,
                priority=88,
                action=SuggestionActionSpec(type=actions.ADD, target="section", value=actions.SECTION_CTA),
                reasoning="More call-to-action points give visitors more chances to act.",
                preview='<button class="bg-blue-500 text-white px-6 py-3 rounded-lg">Start Now</button>',
            )
        )

    if cta_elements and not has_strong_cta:
        suggestions.append(
            _suggestion(
                type="conversion",
                category="marketing",
                title="Strengthen call-to-action copy",
                description='Use strong action words such as "now", "free" or "limited".',
                impact="medium",
                confidence=0.8,
                priority=70,
                action=SuggestionActionSpec(type=actions.MODIFY, target="button", value="cta-copy"),
                reasoning="Copy that conveys urgency or value raises click-through rates.",
            )
        )
    return suggestions


def accessibility_suggestions(soup: BeautifulSoup) -> List[Suggestion]:
    unlabeled = [
        element
        for element in soup.select(INTERACTIVE_SELECTOR)
        if not element.get("aria-label") and not element.get("aria-labelledby")
    ]
    if not unlabeled:
        return []
    return [
        _suggestion(
            type="accessibility",
            category="compliance",
            title="Add ARIA labels",
            description="Label interactive elements so screen readers can announce them.",
            impact="medium",
            confidence=0.9,
            priority=65,
            action=SuggestionActionSpec(type=actions.MODIFY, target="interactive", value="aria-labels"),
            reasoning="ARIA labels make the page usable for visually impaired visitors.",
        )
    ]


def contextual_suggestions(soup: BeautifulSoup, context: BusinessContext) -> List[Suggestion]:
    suggestions: List[Suggestion] = []
    text = _page_text(soup).lower()

    if context.industry.strip().lower() == "saas":
        if not any(marker in text for marker in TRIAL_MARKERS):
            suggestions.append(
                _suggestion(
                    type="conversion",
                    category="marketing",
                    title="Add a free trial section",
                    description="Free trials are an effective conversion tool for SaaS products.",
                    impact="high",
                    confidence=0.9,
                    priority=92,
                    action=SuggestionActionSpec(type=actions.ADD, target="section", value=actions.SECTION_FREE_TRIAL),
                    reasoning="SaaS buyers prefer to try the product before paying.",
                )
            )

    if SMB_AUDIENCE_RE.search(context.target_audience or ""):
        if not any(marker in text for marker in TESTIMONIAL_MARKERS):
            suggestions.append(
                _suggestion(
                    type="conversion",
                    category="marketing",
                    title="Add customer testimonials",
                    description="Trust matters to small and medium businesses. Show customer stories and results.",
                    impact="high",
                    confidence=0.85,
                    priority=85,
                    action=SuggestionActionSpec(type=actions.ADD, target="section", value=actions.SECTION_TESTIMONIALS),
                    reasoning="Decision makers at smaller companies look for peers' success stories.",
                )
            )
    return suggestions
