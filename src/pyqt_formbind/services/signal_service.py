"""
Signal Service.

Context managers for widget signal blocking and value pushes that must not
be reported back as user edits.

Key features:
1. Context manager guarantees signal unblocking
2. Supports single or multiple widgets
3. Value updates go through the ValueSettable contract
"""

from contextlib import contextmanager
from typing import Any, Callable, Optional
import logging

from PyQt6.QtWidgets import QWidget

from pyqt_formbind.protocols.widget_protocols import ValueSettable

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for signal blocking around programmatic widget updates.

    Examples:
        # Block signals (context manager):
        with SignalService.block_signals(checkbox):
            checkbox.setChecked(True)

        # Multiple widgets:
        with SignalService.block_signals(widget1, widget2):
            widget1.set_value(1)
            widget2.set_value(2)

        # Push a model value without emitting a change signal:
        SignalService.update_widget_value(line_edit, "hello")
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals."""
        previous = []
        for widget in widgets:
            if widget is not None:
                previous.append((widget, widget.blockSignals(True)))
                logger.debug(f"Blocked signals on {type(widget).__name__}")

        try:
            yield
        finally:
            # Restore rather than force False so nested blocks stay blocked
            for widget, was_blocked in reversed(previous):
                widget.blockSignals(was_blocked)
                logger.debug(f"Restored signals on {type(widget).__name__}")

    @staticmethod
    def with_signals_blocked(widget: QWidget, operation: Callable[[], Any]) -> None:
        """Execute operation with widget signals blocked (lambda-based)."""
        with SignalService.block_signals(widget):
            operation()

    @staticmethod
    def update_widget_value(widget: QWidget, value: Any, setter: Optional[Callable] = None) -> None:
        """Update widget value with signals blocked."""
        with SignalService.block_signals(widget):
            if setter:
                setter(widget, value)
            elif isinstance(widget, ValueSettable):
                widget.set_value(value)
            else:
                raise ValueError(f"Cannot set a value on {type(widget).__name__}: not ValueSettable")
