"""
Service layer for element presentation.

The attribute contract shared by every presentation type, signal blocking
helpers, choice population and the Element <-> widget binding.
"""

from .element_attributes import ElementAttributes
from .signal_service import SignalService
from .choice_service import ChoiceService
from .widget_binding_service import ElementWidgetBinding

__all__ = [
    "ElementAttributes",
    "SignalService",
    "ChoiceService",
    "ElementWidgetBinding",
]
