"""
Form: an ElementList plus an optional related model.

Every Element that declares a ``related_key`` mirrors that key of the related
model while the Form is bound. Reassigning ``related_model`` tears down the old
FormBinding completely before binding to the new model; Elements without a
``related_key`` keep whatever value the caller gave them.

Lifecycle:
    form = Form(elements=[...], related_model=model)   # bind
    form.set("related_model", other_model)             # rebind
    form.destroy()                                     # teardown

The Form is also a context manager that destroys itself on exit.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from pyqt_formbind.core import ABSENT, ObservableModel, SubscriptionGroup, is_absent
from pyqt_formbind.errors import ValidationError

from .binding import FormBinding
from .element_list import ElementList

logger = logging.getLogger(__name__)


class Form(ObservableModel):
    """
    Observable model owning one ElementList and an optional related model.

    Examples:
        person = ObservableModel({"first": "Ada", "last": "Lovelace"})
        form = Form(
            elements=[
                {"type": "text", "related_key": "first"},
                {"type": "text", "related_key": "last"},
                {"type": "submit", "value": "Save"},
            ],
            related_model=person,
        )
        form.elements.at(0).get("value")     # "Ada"
        person.set("first", "Augusta")        # element 0 follows
        form.elements.at(1).set("value", "King")
        person.get("last")                    # "King"
    """

    # Reassigning a distinct but equal related model still rebinds
    IDENTITY_KEYS = frozenset({'related_model'})

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        attributes = dict(attributes or {})
        attributes.update(kwargs)
        element_list = self._coerce_elements(attributes.get('elements', ABSENT))
        attributes['elements'] = element_list

        super().__init__(attributes)
        element_list._owner = self
        self._binding: Optional[FormBinding] = None
        self._destroyed = False
        self._subscriptions = SubscriptionGroup()

        try:
            self._subscriptions.add(self.on('change:related_model', self._on_related_model_changed))
            self._subscriptions.add(element_list.on('add', self._on_element_added))
            self._subscriptions.add(element_list.on('remove', self._on_element_removed))
            self._rebind(self.get('related_model'))
        except Exception:
            # No half-built Form: release everything acquired so far
            self.destroy()
            raise

    @staticmethod
    def _coerce_elements(source: Any) -> ElementList:
        if is_absent(source):
            raise ValidationError("Form requires elements.")
        if isinstance(source, ElementList):
            if len(source) == 0:
                raise ValidationError("Form requires elements.")
            if source.owner is not None:
                raise ValidationError("ElementList already belongs to another Form.")
            return source
        element_list = ElementList(source)
        if len(element_list) == 0:
            raise ValidationError("Form requires elements.")
        return element_list

    # ========== ATTRIBUTES ==========

    def set(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        if key == 'elements' and self.has('elements'):
            raise AttributeError("Form elements cannot be replaced; mutate the ElementList instead.")
        super().set(key, value, options)

    @property
    def elements(self) -> ElementList:
        return self.get('elements')

    @property
    def related_model(self) -> Any:
        return self.get('related_model')

    @property
    def binding(self) -> Optional[FormBinding]:
        """The active FormBinding, None while unbound."""
        return self._binding

    @property
    def is_bound(self) -> bool:
        return self._binding is not None

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ========== BINDING ==========

    def _on_related_model_changed(self, form, key, value, previous, options) -> None:
        logger.debug(f"Form related_model changed: {type(previous).__name__} -> {type(value).__name__}")
        self._rebind(value)

    def _rebind(self, related_model: Any) -> None:
        if self._binding is not None:
            self._binding.dispose()
            self._binding = None
        if is_absent(related_model):
            return
        binding = FormBinding(related_model)
        self._binding = binding
        binding.bind_all(self.elements)

    def _on_element_added(self, element, element_list, index) -> None:
        if self._binding is not None:
            self._binding.bind_element(element)

    def _on_element_removed(self, element, element_list, index) -> None:
        if self._binding is not None:
            self._binding.unbind_element(element)

    # ========== AGGREGATION ==========

    def values(self) -> Dict[Any, Any]:
        """Current value of every keyed element that has one."""
        return {
            element.key: element.get('value')
            for element in self.elements
            if not is_absent(element.key) and element.has('value')
        }

    def errors(self) -> Dict[Any, str]:
        """Error message per invalid element, keyed by element key or position."""
        errors = {}
        for index, element in enumerate(self.elements):
            if element.is_valid:
                continue
            key = element.key if not is_absent(element.key) else index
            errors[key] = element.error
        return errors

    def validate(self) -> bool:
        """Re-run every element validator; True when all pass."""
        for element in self.elements:
            element.validate()
        return self.is_valid

    @property
    def is_valid(self) -> bool:
        return all(element.is_valid for element in self.elements)

    # ========== LIFECYCLE ==========

    def destroy(self) -> None:
        """Release every subscription this Form holds. Idempotent."""
        if self._destroyed:
            return
        self._destroyed = True
        if self._binding is not None:
            self._binding.dispose()
            self._binding = None
        self._subscriptions.dispose()
        element_list = self.get('elements')
        if isinstance(element_list, ElementList) and element_list.owner is self:
            element_list._owner = None
        self.stop_listening()
        logger.debug("Form destroyed")

    def __enter__(self) -> 'Form':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()
