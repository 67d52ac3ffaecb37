"""
Element <-> widget binding.

Keeps one widget and one Element in sync, with the same provenance rule the
Form uses for related models:

    widget edit       -> element.set("value", v, {"origin": binding})
    element change    -> widget.set_value(v) with signals blocked,
                         unless the change came from this binding

Presentation (class names, error tooltip, enabled state) is delegated to an
ElementAttributes instance and re-applied on every element change.
"""

import logging
from typing import Any, Dict, Optional

from pyqt_formbind.core import ABSENT, SubscriptionGroup
from pyqt_formbind.models import Element, GroupElement, ORIGIN, origin_of
from pyqt_formbind.protocols.widget_protocols import (
    ChangeSignalEmitter,
    ChoiceCapable,
    PlaceholderCapable,
    ValueSettable,
)

from .choice_service import ChoiceService
from .element_attributes import ElementAttributes
from .signal_service import SignalService

logger = logging.getLogger(__name__)


class ElementWidgetBinding:
    """
    Two-way link between an Element and a Qt widget adapter.

    Examples:
        edit = LineEditAdapter()
        binding = ElementWidgetBinding(element, edit)
        element.set("value", "hello")     # edit shows "hello", no textChanged echo
        edit.setText("typed")             # element value becomes "typed"
        binding.dispose()
    """

    def __init__(self, element: Element, widget: Any, class_name: Optional[str] = None):
        if not isinstance(element, Element):
            raise TypeError("ElementWidgetBinding requires an Element model.")
        if not isinstance(widget, ValueSettable):
            raise TypeError(f"{type(widget).__name__} does not implement ValueSettable")

        self.element = element
        self.widget = widget
        self.attributes = ElementAttributes(element, class_name=class_name)
        self._subscriptions = SubscriptionGroup()
        self._connected = False
        self._disposed = False

        if isinstance(element, GroupElement) and isinstance(widget, ChoiceCapable):
            ChoiceService.populate(widget, element)
            children = element.children
            self._subscriptions.add(children.on('add', self._on_choices_changed))
            self._subscriptions.add(children.on('remove', self._on_choices_changed))
        else:
            self._push_value(element.get('value'))

        placeholder = element.get('placeholder')
        if isinstance(widget, PlaceholderCapable) and isinstance(placeholder, str):
            widget.set_placeholder(placeholder)

        self._subscriptions.add(element.on('change:value', self._on_element_value_changed))
        self._subscriptions.add(element.on('change', self._on_element_changed))
        if isinstance(widget, ChangeSignalEmitter):
            widget.connect_change_signal(self._on_widget_changed)
            self._connected = True

        self.apply_presentation()

    def tag(self) -> Dict[str, Any]:
        return {ORIGIN: self}

    # ========== WIDGET -> ELEMENT ==========

    def _on_widget_changed(self, value: Any) -> None:
        if self._disposed:
            return
        logger.debug(f"Widget edit on {self.element.key!r}: {value!r}")
        self.element.set('value', value, self.tag())

    # ========== ELEMENT -> WIDGET ==========

    def _push_value(self, value: Any) -> None:
        SignalService.update_widget_value(self.widget, None if value is ABSENT else value)

    def _on_element_value_changed(self, element, key, value, previous, options) -> None:
        if self._disposed or origin_of(options) is self:
            return
        self._push_value(value)

    def _on_element_changed(self, element, key, value, previous, options) -> None:
        if self._disposed:
            return
        self.apply_presentation()

    def _on_choices_changed(self, child, children, index) -> None:
        ChoiceService.populate(self.widget, self.element)

    def apply_presentation(self) -> None:
        """Reflect class names, error message and disabled state on the widget."""
        widget = self.widget
        widget.setProperty("class", " ".join(self.attributes.class_names()))
        error_label = self.attributes.error_label()
        widget.setToolTip(error_label[0] if error_label else "")
        widget.setEnabled(not self.element.get('disabled'))
        # Re-polish so stylesheets keyed on the class property update
        widget.style().unpolish(widget)
        widget.style().polish(widget)

    # ========== LIFECYCLE ==========

    def dispose(self) -> None:
        self._disposed = True
        self._subscriptions.dispose()
        if self._connected:
            self.widget.disconnect_change_signal(self._on_widget_changed)
            self._connected = False
        logger.debug(f"Disposed widget binding for {self.element.key!r}")
