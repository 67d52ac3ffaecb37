"""
Core observable primitives.

Pure Python, no Qt: the sentinel for unset attributes, the event emitter,
the observable key/value model and disposable subscription handles.
"""

from .observable import ABSENT, EventEmitter, ObservableModel, is_absent, values_equal
from .subscription import Subscription, SubscriptionGroup

__all__ = [
    "ABSENT",
    "EventEmitter",
    "ObservableModel",
    "is_absent",
    "values_equal",
    "Subscription",
    "SubscriptionGroup",
]
