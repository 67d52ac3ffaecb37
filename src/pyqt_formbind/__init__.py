"""
pyqt-formbind: reactive data binding and validation for composite forms.

Typed Element nodes are collected in ordered ElementLists, validated on every
change and bound both ways to an external related model through a Form.
A thin PyQt6 seam keeps widgets and Elements in sync.

Architecture:
- Tier 1 (Core): observable model, ABSENT sentinel, disposable subscriptions
- Tier 2 (Protocols): related-model capability, widget ABCs and adapters, config
- Tier 3 (Models): Element, ElementList, Form and the binding protocol
- Tier 4 (Services): attribute contract, signal blocking, widget binding

Key Features:
- Provenance-tagged propagation, no feedback loops
- Rebinding to a different related model at runtime with full teardown
- Grouping elements own nested choice lists
- ABC-based widget protocols (no duck typing)
"""

__version__ = "0.1.0"

from .core import ABSENT, ObservableModel, Subscription, SubscriptionGroup
from .errors import FormBindError, ValidationError
from .models import Element, GroupElement, ElementList, Form, ElementBinding, FormBinding
from .protocols import FormBindConfig, RelatedModel, get_form_config, set_form_config

__all__ = [
    "__version__",
    "ABSENT",
    "ObservableModel",
    "Subscription",
    "SubscriptionGroup",
    "FormBindError",
    "ValidationError",
    "Element",
    "GroupElement",
    "ElementList",
    "Form",
    "ElementBinding",
    "FormBinding",
    "FormBindConfig",
    "RelatedModel",
    "get_form_config",
    "set_form_config",
]
