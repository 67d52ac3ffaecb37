"""
Widget ABC contracts for element presentation.

Defines explicit contracts a widget must implement to be bound to an Element,
in favor of inheritance-based capabilities over duck typing.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Tuple


class ValueGettable(ABC):
    """
    ABC for widgets that can return a value.

    All input widgets must implement this to push user edits into an Element.
    """

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the current value from the widget.

        Returns:
            The widget's current value. None if no value set.
        """
        pass


class ValueSettable(ABC):
    """
    ABC for widgets that can accept a value.

    All input widgets must implement this to display an Element's value.
    """

    @abstractmethod
    def set_value(self, value: Any) -> None:
        """
        Set the widget's value.

        Args:
            value: The value to set. None clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for widgets that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        pass


class ChoiceCapable(ABC):
    """
    ABC for widgets that offer a fixed set of choices.

    Implemented by widgets that present the nested ElementList of a grouping
    Element (select, radioset).
    """

    @abstractmethod
    def set_choices(self, choices: Iterable[Tuple[str, Any, bool]]) -> None:
        """
        Replace the widget's choices.

        Args:
            choices: (label, value, disabled) triples, in display order
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that emit change signals.

    Provides explicit contract for signal connection, eliminating duck typing
    of signal names (textChanged vs stateChanged vs currentIndexChanged).
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """
        Connect callback to widget's change signal.

        The callback will be invoked whenever the widget's value changes,
        receiving the new value as its argument.
        """
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        """Disconnect a callback previously passed to connect_change_signal."""
        pass
