"""
Reusable field validators.

A validator is a pure function ``value -> message | None``. These factories
build the common ones; ``compose`` chains several and reports the first
failure. Absent values are passed to validators as None.
"""

import re
from typing import Any, Callable, Iterable, Optional

Validator = Callable[[Any], Optional[str]]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def required(message: str = "This field is required.") -> Validator:
    def validate(value: Any) -> Optional[str]:
        return message if _is_blank(value) else None
    return validate


def min_length(length: int, message: Optional[str] = None) -> Validator:
    message = message or f"Must be at least {length} characters."

    def validate(value: Any) -> Optional[str]:
        if _is_blank(value):
            return None
        return message if len(value) < length else None
    return validate


def max_length(length: int, message: Optional[str] = None) -> Validator:
    message = message or f"Must be at most {length} characters."

    def validate(value: Any) -> Optional[str]:
        if _is_blank(value):
            return None
        return message if len(value) > length else None
    return validate


def matches(pattern: str, message: str = "Invalid format.") -> Validator:
    """Full-match ``pattern`` against the string form of the value."""
    compiled = re.compile(pattern)

    def validate(value: Any) -> Optional[str]:
        if _is_blank(value):
            return None
        return None if compiled.fullmatch(str(value)) else message
    return validate


def one_of(choices: Iterable[Any], message: str = "Not a valid choice.") -> Validator:
    allowed = list(choices)

    def validate(value: Any) -> Optional[str]:
        if _is_blank(value):
            return None
        return None if value in allowed else message
    return validate


def compose(*validators: Validator) -> Validator:
    """First non-empty message wins."""
    def validate(value: Any) -> Optional[str]:
        for validator in validators:
            message = validator(value)
            if message:
                return message
        return None
    return validate
