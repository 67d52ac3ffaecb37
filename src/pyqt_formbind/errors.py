"""Exceptions raised by pyqt-formbind."""


class FormBindError(Exception):
    """Base class for all pyqt-formbind errors."""


class ValidationError(FormBindError, ValueError):
    """Raised when an Element, ElementList or Form cannot be constructed.

    Field-level validation never raises; validator results are stored on the
    Element's ``error`` attribute instead.
    """
