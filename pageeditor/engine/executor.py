"""Apply a single suggestion to a document and its stylesheet.

Handlers work on a freshly parsed copy of the markup, so a failure inside
one handler never leaves the caller's document half-modified.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Tuple

from bs4 import BeautifulSoup  # type: ignore

from . import templates
from .actions import (
    AddContent,
    AddHeading,
    AddMeta,
    AddSection,
    AddStylesheet,
    FillImageAlt,
    LabelInteractive,
    ModifyStylesheet,
    ReplaceContent,
    SemanticStructure,
    StrengthenButtons,
    SuggestionAction,
    UnknownAction,
    parse_action,
)
from .document import body_or_root, ensure_head, parse_html, serialize
from .exceptions import SuggestionApplyError
from .types import ApplyResult, Suggestion

logger = logging.getLogger(__name__)

Handler = Callable[[BeautifulSoup, str, SuggestionAction], Tuple[bool, str]]

CTA_SELECTOR = "button, .button, .btn"
INTERACTIVE_SELECTOR = "button, input, select, textarea"
STRONG_CTA_WORDS = ("now", "free")


def apply(html: str, css: str, suggestion: Suggestion) -> ApplyResult:
    """Apply ``suggestion`` and return the updated markup and styles.

    Unknown actions and handlers that find nothing to change return the
    inputs untouched with ``applied`` set to False.
    """

    action = parse_action(suggestion.action)
    if isinstance(action, UnknownAction):
        logger.warning(
            "Unknown suggestion action %s/%s for %s",
            action.type,
            action.target,
            suggestion.id,
        )
        return ApplyResult(html=html, css=css, applied=False)

    handler = _HANDLERS[type(action)]
    try:
        soup = parse_html(html)
        changed, updated_css = handler(soup, css, action)
        updated_html = serialize(soup) if changed else html
    except Exception as exc:
        logger.exception("Error applying suggestion %s", suggestion.id)
        raise SuggestionApplyError(suggestion.id, str(exc)) from exc

    if not changed:
        return ApplyResult(html=html, css=css, applied=False)
    logger.info("Applied suggestion %s (%s)", suggestion.id, type(action).__name__)
    return ApplyResult(html=updated_html, css=updated_css, applied=True)


def _add_heading(soup: BeautifulSoup, css: str, action: AddHeading) -> Tuple[bool, str]:
    if soup.find("h1") is not None:
        logger.info("H1 already exists; skipping")
        return False, css
    heading = soup.new_tag("h1")
    heading["class"] = templates.HEADING_CLASS
    heading.string = action.text or templates.DEFAULT_HEADING
    body_or_root(soup).insert(0, heading)
    return True, css


def _add_meta(soup: BeautifulSoup, css: str, action: AddMeta) -> Tuple[bool, str]:
    if soup.find("meta", attrs={"name": action.name}) is not None:
        return False, css
    meta = soup.new_tag("meta", attrs={"name": action.name, "content": templates.META_DESCRIPTION})
    ensure_head(soup).append(meta)
    return True, css


def _append_fragment(soup: BeautifulSoup, markup: str) -> bool:
    fragment = BeautifulSoup(markup, "html.parser")
    section = fragment.find(True)
    if section is None:
        return False
    body_or_root(soup).append(section.extract())
    return True


def _add_section(soup: BeautifulSoup, css: str, action: AddSection) -> Tuple[bool, str]:
    markup = templates.SECTION_TEMPLATES.get(action.template)
    if markup is None:
        logger.warning("Unknown section template %r", action.template)
        return False, css
    return _append_fragment(soup, markup), css


def _add_content(soup: BeautifulSoup, css: str, action: AddContent) -> Tuple[bool, str]:
    markup = templates.CONTENT_TEMPLATES.get(action.template)
    if markup is None:
        logger.warning("Unknown content template %r", action.template)
        return False, css
    return _append_fragment(soup, markup), css


def _add_stylesheet(soup: BeautifulSoup, css: str, action: AddStylesheet) -> Tuple[bool, str]:
    block = templates.CSS_BLOCKS.get(action.block)
    if block is None:
        logger.warning("Unknown stylesheet block %r", action.block)
        return False, css
    return True, css + block


def _fill_image_alt(soup: BeautifulSoup, css: str, action: FillImageAlt) -> Tuple[bool, str]:
    changed = False
    for index, image in enumerate(soup.find_all("img")):
        if not image.get("alt"):
            image["alt"] = f"Image {index + 1} description"
            changed = True
    return changed, css


def _stronger_label(text: str) -> str | None:
    lowered = text.lower()
    if any(word in lowered for word in STRONG_CTA_WORDS):
        return None
    if "apply" in lowered:
        return "Apply Now"
    if "start" in lowered or "begin" in lowered:
        return "Start Now"
    if "register" in lowered or "sign up" in lowered:
        return "Sign Up Free"
    return None


def _strengthen_buttons(soup: BeautifulSoup, css: str, action: StrengthenButtons) -> Tuple[bool, str]:
    changed = False
    for button in soup.select(CTA_SELECTOR):
        label = _stronger_label(button.get_text())
        if label is not None:
            button.string = label
            changed = True
    return changed, css


def _modify_stylesheet(soup: BeautifulSoup, css: str, action: ModifyStylesheet) -> Tuple[bool, str]:
    # No stylesheet rewrites are defined yet.
    return False, css


def _semantic_structure(soup: BeautifulSoup, css: str, action: SemanticStructure) -> Tuple[bool, str]:
    changed = False
    for container in soup.select('div.section, div[class*="section"]'):
        container.name = "section"
        changed = True

    if soup.select_one(".main-content, .content, main") is None:
        first = body_or_root(soup).find(True, recursive=False)
        if first is not None:
            first.wrap(soup.new_tag("main"))
            changed = True
    return changed, css


def _label_interactive(soup: BeautifulSoup, css: str, action: LabelInteractive) -> Tuple[bool, str]:
    changed = False
    for index, element in enumerate(soup.select(INTERACTIVE_SELECTOR)):
        if element.get("aria-label") or element.get("aria-labelledby"):
            continue
        element["aria-label"] = f"{element.name.lower()} element {index + 1}"
        changed = True
    return changed, css


def _replace_content(soup: BeautifulSoup, css: str, action: ReplaceContent) -> Tuple[bool, str]:
    logger.info("Replace action for target %r has no transformation; leaving document unchanged", action.target)
    return False, css


_HANDLERS: Dict[type, Handler] = {
    AddHeading: _add_heading,
    AddMeta: _add_meta,
    AddSection: _add_section,
    AddStylesheet: _add_stylesheet,
    AddContent: _add_content,
    FillImageAlt: _fill_image_alt,
    StrengthenButtons: _strengthen_buttons,
    ModifyStylesheet: _modify_stylesheet,
    SemanticStructure: _semantic_structure,
    LabelInteractive: _label_interactive,
    ReplaceContent: _replace_content,
}
