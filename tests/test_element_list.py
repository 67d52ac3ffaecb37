"""Tests for ElementList construction, lookup and ownership."""

import pytest

from pyqt_formbind.core import ABSENT
from pyqt_formbind.errors import ValidationError
from pyqt_formbind.models import Element, ElementList


def test_builds_elements_from_descriptors():
    elements = ElementList([{"type": "text", "name": "a"}, {"type": "checkbox", "name": "b"}])
    assert len(elements) == 2
    assert all(isinstance(element, Element) for element in elements)
    assert elements.at(1).type == "checkbox"


def test_single_descriptor_makes_list_of_one():
    elements = ElementList({"type": "text", "name": "only"})
    assert len(elements) == 1
    assert elements.get("only") is elements.at(0)


def test_existing_elements_are_adopted_by_reference():
    element = Element({"type": "text"})
    elements = ElementList([element])
    assert elements.at(0) is element
    assert element.owner is elements


def test_at_out_of_range_is_absent():
    elements = ElementList([{"type": "text"}])
    assert elements.at(5) is ABSENT
    assert elements.at(-2) is ABSENT
    assert elements.at(-1) is elements.at(0)


def test_invalid_descriptor_fails_without_partial_transfer():
    donor = ElementList([{"type": "text", "name": "kept"}])
    kept = donor.at(0)

    with pytest.raises(ValidationError):
        ElementList([kept, {"label": "no type"}])

    assert kept.owner is donor
    assert len(donor) == 1


def test_non_descriptor_items_are_rejected():
    with pytest.raises(ValidationError):
        ElementList(["text"])
    with pytest.raises(ValidationError):
        ElementList("text")


def test_unshift_inserts_ahead_and_reindexes():
    elements = ElementList([{"type": "option", "value": "a"}, {"type": "option", "value": "b"}])
    added = []
    elements.on("add", lambda element, element_list, index: added.append(index))

    placeholder = elements.unshift({"type": "option", "value": "", "disabled": True})

    assert elements.at(0) is placeholder
    assert [element.get("value") for element in elements] == ["", "a", "b"]
    assert elements.index_of(placeholder) == 0
    assert added == [0]


def test_membership_is_exclusive():
    source = ElementList([{"type": "text", "name": "moving"}])
    target = ElementList([{"type": "text", "name": "resident"}])
    moving = source.at(0)
    removed = []
    source.on("remove", lambda element, element_list, index: removed.append(element))

    target.append(moving)

    assert moving in target
    assert moving not in source
    assert len(source) == 0
    assert moving.owner is target
    assert removed == [moving]


def test_duplicate_keys_are_rejected():
    with pytest.raises(ValidationError, match="Duplicate element key"):
        ElementList([{"type": "text", "name": "x"}, {"type": "text", "name": "x"}])

    elements = ElementList([{"type": "text", "name": "x"}])
    with pytest.raises(ValidationError):
        elements.append({"type": "text", "name": "x"})
    assert len(elements) == 1


def test_reinserting_member_moves_it():
    elements = ElementList([{"type": "text", "name": "a"}, {"type": "text", "name": "b"}])
    b = elements.get("b")

    elements.unshift(b)

    assert elements.keys() == ["b", "a"]


def test_remove_and_where():
    elements = ElementList([
        {"type": "text", "name": "a", "group": 1},
        {"type": "text", "name": "b", "group": 2},
        {"type": "text", "name": "c", "group": 1},
    ])
    assert [element.key for element in elements.where(group=1)] == ["a", "c"]

    b = elements.remove(elements.get("b"))
    assert b.owner is None
    assert elements.get("b") is ABSENT
    with pytest.raises(ValueError):
        elements.remove(b)


def test_nested_lists_are_not_flattened():
    elements = ElementList([
        {"type": "text", "name": "title"},
        {"type": "select", "name": "size", "values": [{"value": "s"}, {"value": "m"}]},
    ])
    assert len(elements) == 2
    assert len(elements.get("size").get("values")) == 2


def test_renaming_member_to_taken_key_is_rejected():
    elements = ElementList([{"type": "text", "name": "a"}, {"type": "text", "name": "b"}])
    b = elements.get("b")

    with pytest.raises(ValidationError, match="Duplicate element key"):
        b.set("name", "a")
    with pytest.raises(ValidationError):
        b.set("id", "a")

    assert b.get("name") == "b"
    assert elements.get("a") is elements.at(0)

    b.set("name", "c")
    assert elements.keys() == ["a", "c"]


def test_renaming_detached_element_is_unchecked():
    elements = ElementList([{"type": "text", "name": "a"}, {"type": "text", "name": "b"}])
    b = elements.remove(elements.get("b"))

    b.set("name", "a")
    assert b.key == "a"
