"""
Choice Service - fills choice widgets from a grouping Element.

A grouping Element (select, radioset, ...) keeps its choices in a nested
ElementList. When the element declares a ``placeholder``, a disabled choice
with an empty value is unshifted ahead of the data-derived choices, once.
"""

import logging
from typing import Any, List, Optional, Tuple

from pyqt_formbind.core import ABSENT, is_absent
from pyqt_formbind.models import Element, GroupElement
from pyqt_formbind.protocols.widget_protocols import ChoiceCapable, ValueSettable

from .signal_service import SignalService

logger = logging.getLogger(__name__)

PLACEHOLDER_FLAG = 'placeholder_choice'


class ChoiceService:
    """Stateless helpers shared by every widget that presents choices."""

    @staticmethod
    def install_placeholder(element: GroupElement) -> Optional[Element]:
        """Unshift the placeholder choice if the element asks for one."""
        placeholder = element.get('placeholder')
        if is_absent(placeholder) or placeholder == "":
            return None

        children = element.children
        first = children.at(0)
        if first is not ABSENT and first.get(PLACEHOLDER_FLAG):
            return first

        choice = children.unshift({
            'type': element.child_type,
            'value': '',
            'label': placeholder,
            'disabled': True,
            PLACEHOLDER_FLAG: True,
        })
        logger.debug(f"Installed placeholder choice {placeholder!r} on {element.type} {element.key!r}")
        return choice

    @staticmethod
    def choices(element: GroupElement) -> List[Tuple[str, Any, bool]]:
        """(label, value, disabled) for every child, in order."""
        result = []
        for child in element.children:
            value = child.get('value')
            value = None if value is ABSENT else value
            label = child.get('label')
            if is_absent(label):
                label = "" if value is None else str(value)
            result.append((str(label), value, bool(child.get('disabled'))))
        return result

    @staticmethod
    def populate(widget: ChoiceCapable, element: GroupElement) -> None:
        """Install the placeholder, fill the widget and re-select the element value."""
        if not isinstance(element, GroupElement):
            raise TypeError(f"{element.type!r} element has no choices")
        if not isinstance(widget, ChoiceCapable):
            raise TypeError(f"{type(widget).__name__} cannot present choices")

        ChoiceService.install_placeholder(element)
        choices = ChoiceService.choices(element)
        value = element.get('value')

        def refill():
            widget.set_choices(choices)
            if isinstance(widget, ValueSettable):
                widget.set_value(None if value is ABSENT else value)

        SignalService.with_signals_blocked(widget, refill)
