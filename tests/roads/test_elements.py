"""Tests for raw map element parsing."""

import pytest
from pydantic import ValidationError

from roads.graph.elements import NodeElement, WayElement, parse_element, parse_elements


def test_parse_overpass_elements() -> None:
    """Test parsing a typical Overpass response element list."""
    elements = parse_elements(
        [
            {"type": "node", "id": 101, "lat": 52.1, "lon": 21.0},
            {"type": "node", "id": 102, "lat": 52.2, "lon": 21.1, "tags": {"highway": "stop"}},
            {"type": "way", "id": 7, "nodes": [101, 102], "tags": {"highway": "residential"}},
            {"type": "relation", "id": 9, "members": []},
        ]
    )

    assert len(elements) == 3
    assert isinstance(elements[0], NodeElement)
    assert elements[0].coordinate.lat == 52.1
    assert isinstance(elements[2], WayElement)
    assert elements[2].nodes == [101, 102]
    assert elements[2].oneway is False


@pytest.mark.parametrize(("tag", "expected"), [("yes", True), ("no", False), ("-1", False)])
def test_oneway_tag(tag: str, expected: bool) -> None:
    element = parse_element({"type": "way", "nodes": [1, 2], "tags": {"oneway": tag}})
    assert isinstance(element, WayElement)
    assert element.oneway is expected


def test_explicit_oneway_overrides_tags() -> None:
    element = WayElement.model_validate(
        {"nodes": [1, 2], "tags": {"oneway": "yes"}, "oneway": False}
    )
    assert element.oneway is False


def test_way_without_tags() -> None:
    element = parse_element({"type": "way", "nodes": [1, 2, 3]})
    assert isinstance(element, WayElement)
    assert element.oneway is False
    assert element.segments() == [(1, 2), (2, 3)]


def test_string_node_ids_preserved() -> None:
    element = parse_element({"type": "node", "id": "n1", "lat": 0, "lon": 0})
    assert element.id == "n1"


@pytest.mark.parametrize(
    "raw",
    [
        {"type": "node", "id": 1, "lat": 0.0},
        {"type": "node", "id": 1, "lat": "x", "lon": 0.0},
        {"type": "way", "nodes": "1,2"},
    ],
)
def test_malformed_elements_rejected(raw: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        parse_elements([raw])
