"""
Related-model binding protocol.

One ElementBinding links one Element's ``value`` to one key of a related model:

    1. pull       element.value = related_model.get(key)
    2. forward    related_model change:<key>  -> element.value
    3. backward   element change:value        -> related_model.set(key, value)

Every write a binding makes carries ``{"origin": binding}`` in its options.
Each direction ignores changes whose origin is the binding itself, compared
by identity, so a write that came from the related model is never echoed back
to it (and vice versa). Other bindings on the same related model see a
foreign origin and propagate normally.

A FormBinding is the disposable handle bundling every ElementBinding a Form
created against one related model. Rebinding disposes the whole handle before
a new one is built.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from pyqt_formbind.core import Subscription, SubscriptionGroup, is_absent
from pyqt_formbind.protocols.form_config import get_form_config

from .element import Element

logger = logging.getLogger(__name__)

# Debug flag for verbose binding logging
DEBUG_BINDING = False

ORIGIN = 'origin'


def origin_of(options: Optional[Dict[str, Any]]) -> Any:
    """The provenance token carried by a change notification, if any."""
    if not options:
        return None
    return options.get(ORIGIN)


def listen(emitter: Any, event: str, callback: Callable[..., Any]) -> Subscription:
    """Register a listener on any emitter with ``on``/``off`` and return its handle."""
    emitter.on(event, callback)
    return Subscription(emitter, event, callback)


def _tracing() -> bool:
    return DEBUG_BINDING or get_form_config().debug_binding


class BindingState(Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class ElementBinding:
    """Live two-way link between ``element.value`` and ``related_model[key]``."""

    def __init__(self, element: Element, related_model: Any, key: str):
        self.element = element
        self.related_model = related_model
        self.key = key
        self.state = BindingState.UNBOUND
        self._subscriptions = SubscriptionGroup()

    def tag(self) -> Dict[str, Any]:
        """Options marking a change as made by this binding."""
        return {ORIGIN: self}

    def bind(self) -> 'ElementBinding':
        """Connect both directions, then seed the element from the related model."""
        if self.state is BindingState.BOUND:
            return self
        self.connect()
        try:
            self.pull(self.related_model.get(self.key))
        except Exception:
            self.dispose()
            raise
        return self

    def connect(self) -> None:
        """Subscribe both directions without touching the element's value."""
        if self.state is BindingState.BOUND:
            return
        try:
            self._subscriptions.add(listen(self.related_model, f'change:{self.key}', self._on_related_changed))
            self._subscriptions.add(listen(self.element, 'change:value', self._on_element_changed))
        except Exception:
            self._subscriptions.dispose()
            raise
        self.state = BindingState.BOUND
        logger.debug(f"Bound element {self.element.key!r} to related key {self.key!r}")

    def pull(self, value: Any) -> None:
        """Seed the element with a value read from the related model."""
        self.element.set('value', value, self.tag())

    def dispose(self) -> None:
        if self.state is BindingState.UNBOUND:
            return
        self._subscriptions.dispose()
        self.state = BindingState.UNBOUND
        logger.debug(f"Unbound element {self.element.key!r} from related key {self.key!r}")

    # A binding disposed while a notification is being dispatched still sits in
    # that dispatch's listener snapshot; the state check keeps it silent.

    def _on_related_changed(self, model, key, value, previous, options) -> None:
        if self.state is not BindingState.BOUND or origin_of(options) is self:
            return
        if _tracing():
            logger.info(f"FORWARD {self.key}: {previous!r} -> {value!r}")
        self.element.set('value', value, self.tag())

    def _on_element_changed(self, element, key, value, previous, options) -> None:
        if self.state is not BindingState.BOUND or origin_of(options) is self:
            return
        if _tracing():
            logger.info(f"BACKWARD {self.key}: {previous!r} -> {value!r}")
        self.related_model.set(self.key, value, self.tag())

    def __repr__(self) -> str:
        return f"<ElementBinding {self.key!r} ({self.state.value})>"


class FormBinding:
    """
    Disposable handle for all ElementBindings against one related model.

    Examples:
        binding = FormBinding(related_model)
        binding.bind_all(form.elements)
        ...
        binding.dispose()   # no further propagation in either direction
    """

    def __init__(self, related_model: Any):
        self.related_model = related_model
        self._bindings: Dict[Element, ElementBinding] = {}
        self._disposed = False

    def bind_all(self, elements: Iterable[Element]) -> 'FormBinding':
        """
        Bind every keyed element, all or nothing.

        Every subscription is made and every related value read before any
        element is seeded, so a related model that fails part way leaves the
        elements' values untouched.
        """
        if self._disposed:
            return self
        connected = []
        try:
            for element in elements:
                key = element.get('related_key')
                if is_absent(key) or element in self._bindings:
                    continue
                binding = ElementBinding(element, self.related_model, key)
                binding.connect()
                connected.append(binding)
            seeds = [binding.related_model.get(binding.key) for binding in connected]
        except Exception:
            for binding in reversed(connected):
                binding.dispose()
            raise

        for binding in connected:
            self._bindings[binding.element] = binding
        for binding, value in zip(connected, seeds):
            binding.pull(value)
        return self

    def bind_element(self, element: Element) -> Optional[ElementBinding]:
        """Bind ``element`` if it declares a related_key; elements without one are untouched."""
        key = element.get('related_key')
        if is_absent(key) or self._disposed:
            return None
        existing = self._bindings.get(element)
        if existing is not None:
            return existing
        binding = ElementBinding(element, self.related_model, key).bind()
        self._bindings[element] = binding
        return binding

    def unbind_element(self, element: Element) -> None:
        binding = self._bindings.pop(element, None)
        if binding is not None:
            binding.dispose()

    def dispose(self) -> None:
        bindings = list(self._bindings.values())
        self._bindings.clear()
        self._disposed = True
        for binding in reversed(bindings):
            binding.dispose()
        logger.debug(f"Disposed form binding ({len(bindings)} element binding(s))")

    @property
    def bound_elements(self) -> List[Element]:
        return list(self._bindings)

    def binding_for(self, element: Element) -> Optional[ElementBinding]:
        return self._bindings.get(element)

    def __contains__(self, element: Any) -> bool:
        return element in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
