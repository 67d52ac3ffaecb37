"""
Attribute contract for element presentation.

Any presentation type (a Qt widget binding, an HTML renderer, a test double)
holds an ElementAttributes and delegates to it instead of re-deriving
attributes, class names and labels from the Element itself.

Class names:
    <base>                  "element" by default, or the class_name given
    type-<type>             always
    type-button             for button-like types (submit, reset)
    <base>-<error_class>    while the element has an error
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pyqt_formbind.core import ABSENT, is_absent
from pyqt_formbind.models import Element
from pyqt_formbind.protocols.form_config import get_form_config

logger = logging.getLogger(__name__)


class ElementAttributes:
    """
    Computes presentation attributes for one Element.

    Examples:
        attrs = ElementAttributes(Element({"type": "submit", "name": "go"}))
        attrs.attributes()     # {"name": "go"}
        attrs.class_names()    # ["element", "type-submit", "type-button"]
    """

    DEFAULT_ATTRIBUTE_KEYS = ('id', 'name', 'disabled')
    OPTION_ATTRIBUTE_KEYS = ('value', 'disabled')

    def __init__(self, element: Element, attribute_keys: Optional[Iterable[str]] = None,
                 class_name: Optional[str] = None):
        if not isinstance(element, Element):
            raise TypeError("ElementAttributes requires an Element model.")
        self.element = element
        self.attribute_keys = tuple(attribute_keys or self.DEFAULT_ATTRIBUTE_KEYS)
        self.class_name = class_name

    @staticmethod
    def _collect(element: Element, keys: Iterable[str]) -> Dict[str, Any]:
        attributes = {}
        for key in keys:
            value = element.get(key)
            if is_absent(value) or value is False:
                continue
            attributes[key] = True if key == 'disabled' else value
        return attributes

    def attributes(self) -> Dict[str, Any]:
        return self._collect(self.element, self.attribute_keys)

    @property
    def base_class_name(self) -> str:
        return self.class_name or get_form_config().element_class_name

    def error_class_name(self) -> str:
        return f"{self.base_class_name}-{self.element.get('error_class')}"

    def class_names(self) -> List[str]:
        element_type = self.element.type
        names = [self.base_class_name, f"type-{element_type}"]
        if element_type in get_form_config().button_types and "type-button" not in names:
            names.append("type-button")
        if not self.element.is_valid:
            names.append(self.error_class_name())
        return names

    def label(self) -> Optional[str]:
        """Label text, or None when the label is unset or empty (hidden)."""
        label = self.element.get('label')
        if is_absent(label) or label == "":
            return None
        return str(label)

    def error_label(self) -> Optional[Tuple[str, str]]:
        """(message, error_class) while the element is invalid."""
        if self.element.is_valid:
            return None
        return self.element.error, self.element.get('error_class')

    def option_attributes(self, option: Element, selected: Any = ABSENT) -> Dict[str, Any]:
        """Attributes of one child choice, marking it selected when its value matches."""
        attributes = self._collect(option, self.OPTION_ATTRIBUTE_KEYS)
        attributes['selected'] = (not is_absent(selected)) and option.get('value') == selected
        return attributes
