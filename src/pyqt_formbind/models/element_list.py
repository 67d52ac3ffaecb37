"""
ElementList: ordered, uniquely-keyed collection of Elements.

Membership is exclusive. Adding an Element that already belongs to another
ElementList moves it: the previous list emits ``remove`` before this list
emits ``add``.

Events (listener arguments):
    add     (element, element_list, index)
    remove  (element, element_list, index)
"""

import logging
from typing import Any, Iterator, List, Mapping

from pyqt_formbind.core import ABSENT, EventEmitter, is_absent
from pyqt_formbind.errors import ValidationError

from .element import Element, create_element

logger = logging.getLogger(__name__)


class ElementList(EventEmitter):
    """
    Ordered collection of Elements.

    Examples:
        elements = ElementList([
            {"type": "text", "name": "title"},
            {"type": "select", "name": "size", "values": [{"value": "s"}, {"value": "l"}]},
        ])
        elements.at(0)            # Element for "title"
        elements.at(9)            # ABSENT
        elements.get("size")      # GroupElement, children in .get("values")
        elements.unshift({"type": "hidden", "name": "token"})
    """

    def __init__(self, source: Any = None):
        super().__init__()
        self._elements: List[Element] = []
        self._owner = None

        # Convert everything first: a bad descriptor must not leave a partial list
        elements = self._coerce_many(source)
        self._check_unique(elements)
        for element in elements:
            self._adopt(element, len(self._elements), notify=False)

    @staticmethod
    def _coerce_many(source: Any) -> List[Element]:
        if is_absent(source):
            return []
        if isinstance(source, (Element, Mapping)):
            return [create_element(source)]
        if isinstance(source, (str, bytes)):
            raise ValidationError("ElementList source must be a sequence of descriptors or Elements.")
        try:
            items = list(source)
        except TypeError:
            raise ValidationError(
                f"ElementList source must be a sequence of descriptors or Elements, got {type(source).__name__}."
            ) from None
        return [create_element(item) for item in items]

    # ========== LOOKUP ==========

    def at(self, index: int) -> Any:
        """Element at ``index`` (negative counts from the end), ABSENT when out of range."""
        if -len(self._elements) <= index < len(self._elements):
            return self._elements[index]
        return ABSENT

    def get(self, key: Any) -> Any:
        """Element whose key (id, name or related_key) equals ``key``, else ABSENT."""
        for element in self._elements:
            if not is_absent(element.key) and element.key == key:
                return element
        return ABSENT

    def index_of(self, element: Element) -> int:
        for index, candidate in enumerate(self._elements):
            if candidate is element:
                return index
        return -1

    def where(self, **attributes: Any) -> List[Element]:
        """Elements whose attributes equal every keyword given."""
        return [
            element for element in self._elements
            if all(element.get(name) == value for name, value in attributes.items())
        ]

    def keys(self) -> List[Any]:
        return [element.key for element in self._elements if not is_absent(element.key)]

    @property
    def owner(self):
        """The Form that owns this list, if any."""
        return self._owner

    # ========== MUTATION ==========

    def insert(self, index: int, item: Any) -> Element:
        """Insert a descriptor or Element at ``index`` and return the Element."""
        element = create_element(item)
        if element._owner is self:
            self._release(element)
        self._check_unique([element])
        index = max(0, min(index, len(self._elements)))
        self._adopt(element, index, notify=True)
        return element

    def unshift(self, item: Any) -> Element:
        """Insert at the front, ahead of every existing element."""
        return self.insert(0, item)

    def append(self, item: Any) -> Element:
        return self.insert(len(self._elements), item)

    add = append

    def extend(self, items: Any) -> List[Element]:
        elements = self._coerce_many(items)
        self._check_unique(elements)
        return [self.append(element) for element in elements]

    def remove(self, element: Element) -> Element:
        """Remove ``element``; raises ValueError if it is not a member."""
        if element._owner is not self:
            raise ValueError(f"{element!r} is not in this ElementList")
        self._release(element)
        return element

    def clear(self) -> None:
        for element in list(reversed(self._elements)):
            self._release(element)

    def _adopt(self, element: Element, index: int, notify: bool) -> None:
        if element._owner is not None:
            element._owner.remove(element)
        self._elements.insert(index, element)
        element._owner = self
        if notify:
            self.trigger('add', element, self, index)

    def _release(self, element: Element) -> None:
        index = self.index_of(element)
        del self._elements[index]
        element._owner = None
        self.trigger('remove', element, self, index)

    def _check_unique(self, elements: List[Element]) -> None:
        seen = {}
        for element in self._elements:
            if not is_absent(element.key):
                seen[element.key] = element
        for element in elements:
            key = element.key
            if is_absent(key):
                continue
            existing = seen.get(key)
            if existing is not None and existing is not element:
                raise ValidationError(f"Duplicate element key {key!r}.")
            seen[key] = element

    def _check_key_available(self, element: Element, key: Any) -> None:
        """Called by a member before its id, name or related_key changes."""
        if is_absent(key):
            return
        for other in self._elements:
            if other is not element and other.key == key:
                raise ValidationError(f"Duplicate element key {key!r}.")

    # ========== SEQUENCE PROTOCOL ==========

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(list(self._elements))

    def __getitem__(self, index):
        return self._elements[index]

    def __contains__(self, element: Any) -> bool:
        return any(candidate is element for candidate in self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    def __repr__(self) -> str:
        kinds = ", ".join(f"{element.type}:{element.key!r}" for element in self._elements)
        return f"ElementList([{kinds}])"
