"""
Observable key/value model.

Foundation for Element, Form and any related model. Attributes are mutated only
through ``set()``; every effective change emits ``change:<key>`` followed by
``change``, synchronously and depth-first.

Listener signature for both events:
    callback(model, key, value, previous, options)

``options`` is a dict forwarded verbatim from the ``set()`` call. Bindings put
an ``origin`` token in it so a listener can tell who caused the change.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from .subscription import Subscription

logger = logging.getLogger(__name__)


class _Absent:
    """Marker for an attribute that has never been set (or was unset)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def is_absent(value: Any) -> bool:
    """True for ``ABSENT`` and ``None``."""
    return value is ABSENT or value is None


def values_equal(current: Any, new: Any) -> bool:
    """Shallow comparison used to suppress no-op changes.

    Values of different types never compare equal here, so 1 -> True and
    0 -> False are real changes.
    """
    if current is new:
        return True
    if current is ABSENT or new is ABSENT:
        return False
    if type(current) is not type(new):
        return False
    try:
        return bool(current == new)
    except Exception:
        # Objects whose __eq__ is not a plain truth value (arrays, queries)
        return False


class EventEmitter:
    """Named-event listener registry with synchronous dispatch."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

    def on(self, event: str, callback: Callable[..., Any]) -> Subscription:
        """Register ``callback`` for ``event`` and return a disposable handle."""
        self._listeners.setdefault(event, []).append(callback)
        return Subscription(self, event, callback)

    def off(self, event: Optional[str] = None, callback: Optional[Callable[..., Any]] = None) -> None:
        """Remove listeners.

        off(event, callback) removes one registration, off(event) removes every
        listener for the event, off() removes everything.
        """
        if event is None:
            self._listeners.clear()
            return
        listeners = self._listeners.get(event)
        if not listeners:
            return
        if callback is None:
            del self._listeners[event]
            return
        try:
            listeners.remove(callback)
        except ValueError:
            return
        if not listeners:
            del self._listeners[event]

    def trigger(self, event: str, *args: Any) -> None:
        # Snapshot so listeners may unsubscribe while being dispatched
        for callback in tuple(self._listeners.get(event, ())):
            callback(*args)

    def listener_count(self, event: Optional[str] = None) -> int:
        if event is not None:
            return len(self._listeners.get(event, ()))
        return sum(len(listeners) for listeners in self._listeners.values())

    def stop_listening(self) -> None:
        """Drop every listener registered on this emitter."""
        self._listeners.clear()


class ObservableModel(EventEmitter):
    """
    Key/value entity with change notification.

    Examples:
        model = ObservableModel({"foo": "A"})
        model.on("change:foo", lambda m, k, v, prev, opts: print(prev, "->", v))
        model.set("foo", "B")            # prints: A -> B
        model.get("missing")             # ABSENT
        model.update({"foo": "C", "bar": 1})
    """

    # Attributes compared by identity rather than equality when deciding
    # whether a set() is a change
    IDENTITY_KEYS: frozenset = frozenset()

    def __init__(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        super().__init__()
        self._attributes: Dict[str, Any] = {}
        initial = dict(attributes or {})
        initial.update(kwargs)
        for key, value in initial.items():
            if value is not ABSENT:
                self._attributes[key] = value

    # ========== READ ==========

    def get(self, key: str, default: Any = ABSENT) -> Any:
        return self._attributes.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._attributes

    @property
    def attributes(self) -> Mapping[str, Any]:
        return MappingProxyType(self._attributes)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._attributes)

    # ========== WRITE ==========

    def set(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        """Set one attribute. Emits only when the value actually changes."""
        self._store(key, value, options)

    def update(self, mapping: Mapping[str, Any], options: Optional[Dict[str, Any]] = None) -> None:
        """Set several attributes, each with its own notification cascade."""
        for key, value in mapping.items():
            self.set(key, value, options)

    def unset(self, key: str, options: Optional[Dict[str, Any]] = None) -> None:
        self.set(key, ABSENT, options)

    def _store(self, key: str, value: Any, options: Optional[Dict[str, Any]] = None) -> bool:
        """Write without any subclass hooks. Returns True when the value changed."""
        previous = self._attributes.get(key, ABSENT)
        if key in self.IDENTITY_KEYS:
            if previous is value:
                return False
        elif values_equal(previous, value):
            return False

        if value is ABSENT:
            del self._attributes[key]
        else:
            self._attributes[key] = value

        options = {} if options is None else options
        self.trigger(f"change:{key}", self, key, value, previous, options)
        self.trigger("change", self, key, value, previous, options)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
