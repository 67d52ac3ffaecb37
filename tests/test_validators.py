"""Tests for the bundled validator factories."""

from pyqt_formbind.models import Element
from pyqt_formbind.models.validators import compose, matches, max_length, min_length, one_of, required


def test_required():
    validate = required()
    assert validate(None) == "This field is required."
    assert validate("   ") == "This field is required."
    assert validate([]) == "This field is required."
    assert validate("x") is None
    assert validate(0) is None


def test_length_bounds_ignore_blank_values():
    assert min_length(3)("ab") == "Must be at least 3 characters."
    assert min_length(3)("") is None
    assert max_length(2, "Too long.")("abc") == "Too long."
    assert max_length(2)("ab") is None


def test_matches_and_one_of():
    digits = matches(r"\d+", "Digits only.")
    assert digits("123") is None
    assert digits("12a") == "Digits only."
    assert one_of(["s", "m", "l"])("xl") == "Not a valid choice."
    assert one_of(["s", "m", "l"])("m") is None


def test_compose_reports_first_failure():
    validate = compose(required("Required."), max_length(3, "Too long."))
    assert validate(None) == "Required."
    assert validate("abcd") == "Too long."
    assert validate("abc") is None


def test_validators_drive_element_error():
    element = Element({"type": "text", "validator": compose(required("Required."), min_length(2))})
    assert element.error == "Required."
    element.set("value", "a")
    assert element.error == "Must be at least 2 characters."
    element.set("value", "ab")
    assert element.is_valid
