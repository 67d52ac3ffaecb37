"""
Element: the data model of a single form field.

Element kinds form a tagged variant. Plain kinds (text, checkbox, submit, ...)
are instances of Element itself. Grouping kinds (select, radioset, buttonset,
checkset) are instances of GroupElement, the only variant that owns a nested
ElementList of child choices.

Kind selection follows the auto-registration pattern:
    - ElementKindMeta registers every Element subclass that defines matches()
    - resolve_element_class() picks the first registered class whose
      matches(element_type) is true, falling back to Element
    - Element(descriptor) dispatches through resolve_element_class(), so
      Element({"type": "select", ...}) returns a GroupElement

Adding a kind:
    class DateElement(Element):
        @staticmethod
        def matches(element_type):
            return element_type == "date"
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from pyqt_formbind.core import ABSENT, ObservableModel, is_absent
from pyqt_formbind.errors import ValidationError
from pyqt_formbind.protocols.form_config import get_form_config

logger = logging.getLogger(__name__)


def _descriptor_attributes(descriptor: Optional[Mapping[str, Any]], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    if descriptor is not None and not isinstance(descriptor, Mapping):
        raise ValidationError(f"Element descriptor must be a mapping, got {type(descriptor).__name__}.")
    attributes = dict(descriptor or {})
    attributes.update(kwargs)
    return attributes


class ElementKindMeta(type):
    """
    Metaclass for auto-registration of Element kinds.

    All classes with a matches() method are registered and consulted by
    resolve_element_class(), most recently defined first.
    """
    _registry: List[Type] = []

    def __new__(mcs, name, bases, namespace):
        cls = super().__new__(mcs, name, bases, namespace)

        if 'matches' in namespace:
            mcs._registry.append(cls)
            logger.debug(f"Registered element kind: {name}")

        return cls

    @classmethod
    def get_registry(mcs) -> List[Type]:
        return mcs._registry.copy()


class Element(ObservableModel, metaclass=ElementKindMeta):
    """
    Observable model for one form field.

    Recognized attributes: type (required), value, label, validator,
    error_class and the derived error. Any other descriptor key is kept as an
    ordinary attribute.

    The validator is called with the current value (None when unset) at
    construction and on every change of value or validator. A result of None,
    ABSENT or "" clears error; anything else becomes the error message.
    """

    KEY_ATTRIBUTES = ('id', 'name', 'related_key')

    def __new__(cls, descriptor: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        if cls is Element:
            attributes = _descriptor_attributes(descriptor, kwargs)
            cls = resolve_element_class(attributes.get('type'))
        return super().__new__(cls)

    def __init__(self, descriptor: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        attributes = _descriptor_attributes(descriptor, kwargs)

        element_type = attributes.get('type')
        if not isinstance(element_type, str) or not element_type.strip():
            raise ValidationError("Element requires a type.")

        attributes.pop('error', None)
        if is_absent(attributes.get('error_class', ABSENT)):
            attributes['error_class'] = get_form_config().default_error_class

        super().__init__(self._prepare_attributes(attributes))
        self._owner = None

        self._refresh_error()
        # Registered first so error is current before any binding listener runs
        self.on('change:value', self._on_validated_attribute_changed)
        self.on('change:validator', self._on_validated_attribute_changed)

    def _prepare_attributes(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for kinds that normalize their descriptor."""
        return attributes

    # ========== ATTRIBUTES ==========

    def set(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        if key == 'error':
            raise AttributeError("Element error is derived from its validator and cannot be set.")
        if key == 'type' and (not isinstance(value, str) or not value.strip()):
            raise ValidationError("Element requires a type.")
        if key in self.KEY_ATTRIBUTES and self._owner is not None:
            self._owner._check_key_available(self, self._key_with(key, value))
        super().set(key, value, options)

    @property
    def type(self) -> str:
        return self.get('type')

    @property
    def value(self) -> Any:
        return self.get('value')

    @property
    def error(self) -> Any:
        return self.get('error')

    @property
    def is_valid(self) -> bool:
        return not self.has('error')

    @property
    def key(self) -> Any:
        """Stable identity inside an ElementList: id, then name, then related_key."""
        return self._key_with(None, ABSENT)

    def _key_with(self, attribute: Optional[str], value: Any) -> Any:
        """The key this element would have if ``attribute`` were set to ``value``."""
        for name in self.KEY_ATTRIBUTES:
            candidate = value if name == attribute else self.get(name)
            if not is_absent(candidate):
                return candidate
        return ABSENT

    @property
    def owner(self):
        """The ElementList this element currently belongs to, if any."""
        return self._owner

    # ========== VALIDATION ==========

    def validate(self) -> Any:
        """Re-run the validator against the current value and return the error."""
        self._refresh_error()
        return self.get('error')

    def _on_validated_attribute_changed(self, model, key, value, previous, options) -> None:
        self._refresh_error(options)

    def _refresh_error(self, options: Optional[Dict[str, Any]] = None) -> None:
        validator = self.get('validator')
        if is_absent(validator):
            error = ABSENT
        else:
            value = self.get('value')
            result = validator(None if value is ABSENT else value)
            error = ABSENT if is_absent(result) or result == "" else str(result)

        if self._store('error', error, options):
            logger.debug(f"Element {self.key!r} ({self.type}) error -> {error!r}")


class GroupElement(Element):
    """
    Grouping kind that owns a nested ElementList of child choices.

    The children come from the descriptor's ``values`` (or ``options``) array
    and are stored as the ``values`` attribute. Child descriptors without a
    type get the kind's default child type. The parent list never flattens
    these children; they are reachable only through the owning element.
    """

    CHILD_TYPES = {
        'select': 'option',
        'radioset': 'radio',
        'buttonset': 'button',
        'checkset': 'checkbox',
    }

    @staticmethod
    def matches(element_type: Any) -> bool:
        return element_type in get_form_config().grouping_types

    def _prepare_attributes(self, attributes: Dict[str, Any]) -> Dict[str, Any]:
        children = attributes.pop('options', ABSENT)
        if 'values' in attributes:
            children = attributes['values']
        attributes['values'] = self._as_element_list(children, attributes['type'])
        return attributes

    def set(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        if key == 'values':
            value = self._as_element_list(value, self.type)
        super().set(key, value, options)

    @property
    def children(self):
        return self.get('values')

    @property
    def child_type(self) -> str:
        return self.CHILD_TYPES.get(self.type, 'option')

    @classmethod
    def _as_element_list(cls, children: Any, element_type: str):
        from .element_list import ElementList

        if isinstance(children, ElementList):
            return children
        if is_absent(children):
            children = []
        elif isinstance(children, Mapping) or isinstance(children, Element):
            children = [children]

        child_type = cls.CHILD_TYPES.get(element_type, 'option')
        upgraded = []
        for child in children:
            if isinstance(child, Mapping) and 'type' not in child:
                child = dict(child, type=child_type)
            upgraded.append(child)
        return ElementList(upgraded)


def resolve_element_class(element_type: Any) -> Type[Element]:
    """Pick the Element variant for a descriptor type."""
    for kind in reversed(ElementKindMeta.get_registry()):
        if kind.matches(element_type):
            return kind
    return Element


def create_element(descriptor: Any) -> Element:
    """Return ``descriptor`` if it is already an Element, else build one."""
    if isinstance(descriptor, Element):
        return descriptor
    if not isinstance(descriptor, Mapping):
        raise ValidationError(
            f"Expected an element descriptor or Element, got {type(descriptor).__name__}."
        )
    return Element(descriptor)
