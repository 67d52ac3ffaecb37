"""
Form data models.

Element and its grouping variant, the ElementList collection, the Form and
the related-model binding protocol that keeps them in sync.
"""

from .element import Element, GroupElement, ElementKindMeta, create_element, resolve_element_class
from .element_list import ElementList
from .binding import BindingState, ElementBinding, FormBinding, ORIGIN, origin_of
from .form import Form
from . import validators

__all__ = [
    "Element",
    "GroupElement",
    "ElementKindMeta",
    "create_element",
    "resolve_element_class",
    "ElementList",
    "BindingState",
    "ElementBinding",
    "FormBinding",
    "ORIGIN",
    "origin_of",
    "Form",
    "validators",
]
