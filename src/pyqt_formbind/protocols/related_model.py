"""
Capability contract for related models.

A Form can bind its Elements to any object exposing this capability set.
ObservableModel satisfies it; so does any adapter over an application model
that emits ``change:<key>`` with the options dict passed through.

The contract is structural and is never checked at assignment time: a related
model that lacks one of these methods fails with the plain AttributeError or
TypeError at the first call that needs it.
"""

from typing import Any, Callable, Dict, Optional, Protocol


class RelatedModel(Protocol):
    """Structural protocol for objects a Form can bind to."""

    def get(self, key: str) -> Any:
        ...

    def set(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        ...

    def on(self, event: str, callback: Callable[..., Any]) -> Any:
        ...

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        ...
