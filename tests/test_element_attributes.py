"""Tests for the attribute contract shared by presentation types."""

import pytest

from pyqt_formbind.models import Element
from pyqt_formbind.protocols import FormBindConfig, set_form_config
from pyqt_formbind.services import ElementAttributes


def invalid_foo(value):
    if value == "foo":
        return "Invalid foo message."


def test_requires_element_model():
    from pyqt_formbind.core import ObservableModel

    with pytest.raises(TypeError, match="requires an Element model"):
        ElementAttributes(ObservableModel({"type": "text"}))


def test_attributes_skip_absent_and_false():
    element = Element({"type": "text", "id": "title", "name": "title", "disabled": False})
    assert ElementAttributes(element).attributes() == {"id": "title", "name": "title"}

    element.set("disabled", "yes")
    assert ElementAttributes(element).attributes()["disabled"] is True


def test_default_class_names():
    attrs = ElementAttributes(Element({"type": "text"}))
    assert attrs.class_names() == ["element", "type-text"]


@pytest.mark.parametrize("element_type", ["submit", "reset"])
def test_button_types_get_button_class(element_type):
    attrs = ElementAttributes(Element({"type": element_type}))
    assert attrs.class_names() == ["element", f"type-{element_type}", "type-button"]


def test_custom_class_name_replaces_default():
    attrs = ElementAttributes(Element({"type": "text"}), class_name="foo")
    assert attrs.class_names() == ["foo", "type-text"]


def test_error_class_follows_validation():
    element = Element({"type": "text", "validator": invalid_foo})
    attrs = ElementAttributes(element)

    element.set("value", "foo")
    assert "element-error" in attrs.class_names()
    assert attrs.error_label() == ("Invalid foo message.", "error")

    element.set("value", "bar")
    assert "element-error" not in attrs.class_names()
    assert attrs.error_label() is None


def test_custom_error_class():
    element = Element({"type": "text", "error_class": "myerror", "validator": invalid_foo})
    attrs = ElementAttributes(element, class_name="myelement")

    element.set("value", "foo")

    names = attrs.class_names()
    assert "myelement-myerror" in names
    assert "element-error" not in names
    assert attrs.error_label() == ("Invalid foo message.", "myerror")


def test_label_hidden_when_empty_or_unset():
    element = Element({"type": "text", "label": "Name"})
    attrs = ElementAttributes(element)
    assert attrs.label() == "Name"

    element.set("label", "")
    assert attrs.label() is None

    element.unset("label")
    assert attrs.label() is None


def test_option_attributes_mark_selected():
    select = Element({"type": "select", "value": "b", "values": [{"value": "a"}, {"value": "b"}]})
    attrs = ElementAttributes(select)
    options = [attrs.option_attributes(option, select.value) for option in select.children]
    assert options == [{"value": "a", "selected": False}, {"value": "b", "selected": True}]


def test_element_class_name_from_config():
    set_form_config(FormBindConfig(element_class_name="field", button_types=("submit", "button")))
    attrs = ElementAttributes(Element({"type": "button"}))
    assert attrs.class_names() == ["field", "type-button"]
