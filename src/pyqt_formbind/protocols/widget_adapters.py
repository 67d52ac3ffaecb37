"""
Widget adapters that wrap Qt widgets to implement the binding ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QCheckBox.isChecked() vs QComboBox.currentData()
- QLineEdit.setText() vs QCheckBox.setChecked() vs QComboBox.setCurrentIndex()
- textChanged vs stateChanged vs currentIndexChanged

All adapters implement consistent interface via ABCs:
- get_value() / set_value() for all widgets
- set_placeholder() where Qt has a placeholder concept
- connect_change_signal() / disconnect_change_signal() for all widgets
"""

from abc import ABCMeta
from typing import Any, Callable, Dict, Iterable, Tuple

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QCheckBox, QComboBox, QLineEdit

from .widget_protocols import (
    ChangeSignalEmitter,
    ChoiceCapable,
    PlaceholderCapable,
    ValueGettable,
    ValueSettable,
)

# Qt's metaclass combined with ABCMeta so adapters can inherit from both
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class _SlotRegistry:
    """Keeps the Qt slot created for each callback so it can be disconnected."""

    def _slots(self) -> Dict[Callable[[Any], None], Callable[..., None]]:
        slots = getattr(self, "_change_slots", None)
        if slots is None:
            slots = {}
            self._change_slots = slots
        return slots

    def _connect(self, signal, callback: Callable[[Any], None]) -> None:
        slot = lambda *_: callback(self.get_value())
        self._slots()[callback] = slot
        signal.connect(slot)

    def _disconnect(self, signal, callback: Callable[[Any], None]) -> None:
        slot = self._slots().pop(callback, None)
        if slot is None:
            return
        try:
            signal.disconnect(slot)
        except TypeError:
            # Signal not connected - ignore
            pass


class LineEditAdapter(QLineEdit, _SlotRegistry, ValueGettable, ValueSettable,
                      PlaceholderCapable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QLineEdit.

    - .text() -> .get_value() (empty text is None)
    - .setText() -> .set_value()
    - .setPlaceholderText() -> .set_placeholder()
    - .textChanged -> .connect_change_signal()
    """

    _widget_id = "line_edit"

    def get_value(self) -> Any:
        text = self.text().strip()
        return None if text == "" else text

    def set_value(self, value: Any) -> None:
        self.setText("" if value is None else str(value))

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._connect(self.textChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._disconnect(self.textChanged, callback)


class CheckBoxAdapter(QCheckBox, _SlotRegistry, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Adapter for QCheckBox.

    Returns bool values, treats None as False.
    """

    _widget_id = "check_box"

    def get_value(self) -> Any:
        return self.isChecked()

    def set_value(self, value: Any) -> None:
        self.setChecked(bool(value) if value is not None else False)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._connect(self.stateChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._disconnect(self.stateChanged, callback)


class ComboBoxAdapter(QComboBox, _SlotRegistry, ValueGettable, ValueSettable,
                      PlaceholderCapable, ChoiceCapable, ChangeSignalEmitter,
                      metaclass=PyQtWidgetMeta):
    """
    Adapter for QComboBox.

    Stores actual values in itemData, not just display text. Disabled choices
    (placeholders) stay visible but cannot be picked.
    """

    _widget_id = "combo_box"

    def get_value(self) -> Any:
        if self.currentIndex() < 0:
            return None
        return self.itemData(self.currentIndex())

    def set_value(self, value: Any) -> None:
        # Find index of item with matching data
        for i in range(self.count()):
            if self.itemData(i) == value:
                self.setCurrentIndex(i)
                return
        # Value not found - clear selection
        self.setCurrentIndex(-1)

    def set_placeholder(self, text: str) -> None:
        # ComboBox placeholder is shown when no selection
        self.setPlaceholderText(text)

    def set_choices(self, choices: Iterable[Tuple[str, Any, bool]]) -> None:
        self.clear()
        for label, value, disabled in choices:
            self.addItem(label, value)
            if disabled:
                self.model().item(self.count() - 1).setEnabled(False)

    def connect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._connect(self.currentIndexChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[Any], None]) -> None:
        self._disconnect(self.currentIndexChanged, callback)
