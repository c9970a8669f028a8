from __future__ import annotations

from pageeditor.engine.scanner import IDENTITY_ATTR, scan
from pageeditor.engine.tagger import (
    ELEMENT_TYPE_ATTR,
    ORIGINAL_TEXT_ATTR,
    PRIORITY_ATTR,
    ROLLBACK_ATTR,
    find_at_point,
    find_by_identity,
    tag,
    tagged_in_viewport,
    tagged_nodes,
    untag,
)

from .conftest import box_from_attr, make_document


def test_tag_writes_markers():
    soup = make_document("<h1>Welcome</h1><p>Short text</p>")
    candidates = scan(soup)

    tag(candidates)

    heading = soup.find("h1")
    assert heading[IDENTITY_ATTR] == candidates[0].identity
    assert heading[ORIGINAL_TEXT_ATTR] == "Welcome"
    assert heading[ELEMENT_TYPE_ATTR] == "h1"
    assert heading[PRIORITY_ATTR] == str(candidates[0].priority_score)
    assert len(tagged_nodes(soup)) == 2


def test_find_by_identity_round_trips_scan_results():
    soup = make_document("<h2>Plans</h2><p>Pick one</p>")
    candidates = scan(soup)
    tag(candidates)

    for candidate in candidates:
        assert find_by_identity(soup, candidate.identity) is candidate.node
    assert find_by_identity(soup, "missing-id") is None
    assert find_by_identity(soup, "") is None


def test_untag_removes_every_marker():
    soup = make_document("<p>Short text</p>")
    tag(scan(soup))
    paragraph = soup.find("p")
    paragraph[ROLLBACK_ATTR] = "Old text"

    untag(soup)

    assert paragraph.attrs == {}
    assert tagged_nodes(soup) == []


def test_retagging_overwrites_markers():
    soup = make_document("<p>Short text</p>")
    candidates = scan(soup)
    tag(candidates)
    untag(soup)
    soup.find("p").string = "Changed copy"

    tag(scan(soup))

    assert soup.find("p")[ORIGINAL_TEXT_ATTR] == "Changed copy"


def test_find_at_point_resolves_to_nearest_tagged_ancestor():
    soup = make_document(
        '<div data-box="0,0,800,600">'
        '<p data-box="10,10,300,40">Hello <strong data-box="50,10,60,40">world</strong></p>'
        "</div>"
    )
    tag(scan(soup))
    paragraph = soup.find("p")

    assert paragraph.has_attr(IDENTITY_ATTR)
    assert find_at_point(soup, 60, 20, box_from_attr) is paragraph
    assert find_at_point(soup, 500, 500, box_from_attr) is None
    assert find_at_point(soup, 900, 900, box_from_attr) is None


def test_tagged_in_viewport_filters_by_geometry():
    soup = make_document(
        '<p data-box="0,0,100,20">Above the fold</p>'
        '<p data-box="0,700,100,20">Below the fold</p>'
        "<p>Unmeasured text</p>"
    )
    tag(scan(soup))

    visible = tagged_in_viewport(soup, 800, 600, box_from_attr)

    assert [node.get_text() for node in visible] == ["Above the fold"]
