"""
Protocol definitions, widget adapters and configuration.

ABC-based widget contracts, the related-model capability protocol and the
global FormBindConfig. Qt adapters are loaded on first access so the model
tiers can be used without touching QtWidgets.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    ChoiceCapable,
    ChangeSignalEmitter,
)
from .related_model import RelatedModel
from .form_config import FormBindConfig, set_form_config, get_form_config

if TYPE_CHECKING:
    from .widget_adapters import (
        LineEditAdapter,
        CheckBoxAdapter,
        ComboBoxAdapter,
        PyQtWidgetMeta,
    )

_EXPORTS = {
    "LineEditAdapter": ("pyqt_formbind.protocols.widget_adapters", "LineEditAdapter"),
    "CheckBoxAdapter": ("pyqt_formbind.protocols.widget_adapters", "CheckBoxAdapter"),
    "ComboBoxAdapter": ("pyqt_formbind.protocols.widget_adapters", "ComboBoxAdapter"),
    "PyQtWidgetMeta": ("pyqt_formbind.protocols.widget_adapters", "PyQtWidgetMeta"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "ChoiceCapable",
    "ChangeSignalEmitter",
    "RelatedModel",
    "FormBindConfig",
    "set_form_config",
    "get_form_config",
    *_EXPORTS.keys(),
]
