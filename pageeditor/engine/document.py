"""Parsing and serialization helpers shared by engine stages."""

from __future__ import annotations

from typing import Optional, Union

from bs4 import BeautifulSoup, Tag  # type: ignore

Node = Union[BeautifulSoup, Tag]


def parse_html(html: str) -> BeautifulSoup:
    """Parse ``html`` into a tolerant tree, preferring lxml."""

    try:
        return BeautifulSoup(html or "", "lxml")
    except Exception:
        # Fallback to html.parser if lxml isn't installed
        return BeautifulSoup(html or "", "html.parser")


def serialize(soup: BeautifulSoup) -> str:
    """Return the markup for the whole parsed document."""

    return str(soup)


def document_of(node: Tag) -> Optional[BeautifulSoup]:
    """Return the ``BeautifulSoup`` object owning ``node`` or ``None`` if detached."""

    current: Optional[Tag] = node
    while current is not None:
        if isinstance(current, BeautifulSoup):
            return current
        current = current.parent
    return None


def body_or_root(soup: BeautifulSoup) -> Node:
    """Return ``<body>`` when the parser produced one, else the document itself."""

    body = soup.find("body")
    return body if body is not None else soup


def scan_root(root: Optional[Node]) -> Optional[Node]:
    """Resolve the node a scan walks from; documents scan from their body."""

    if root is None:
        return None
    if isinstance(root, BeautifulSoup):
        return body_or_root(root)
    return root


def ensure_head(soup: BeautifulSoup) -> Tag:
    """Return ``<head>``, creating it when the parser did not."""

    head = soup.find("head")
    if head is not None:
        return head
    head = soup.new_tag("head")
    html = soup.find("html")
    if html is not None:
        html.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def is_attached(node: Optional[Tag]) -> bool:
    """Return True when ``node`` still belongs to a parsed document."""

    if node is None:
        return False
    if isinstance(node, BeautifulSoup):
        return True
    return document_of(node) is not None


def ancestors_until(node: Tag, root: Optional[Node]):
    """Yield strict ancestors of ``node`` stopping before ``root``."""

    parent = node.parent
    while parent is not None and parent is not root and not isinstance(parent, BeautifulSoup):
        yield parent
        parent = parent.parent
