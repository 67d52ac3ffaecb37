"""Base configuration for form binding.

Provides hooks for applications to customize element defaults and logging.
"""

from typing import Optional, Tuple
from dataclasses import dataclass


@dataclass
class FormBindConfig:
    """Base configuration for element models and their presentation.

    Applications can subclass this to provide custom configuration.

    Attributes:
        default_error_class: error_class given to Elements that do not set one
        element_class_name: base class name used by ElementAttributes
        button_types: element types that also get the "type-button" class
        grouping_types: element types that own a nested ElementList
        debug_binding: verbose tracing of binding propagation
    """

    default_error_class: str = "error"
    element_class_name: str = "element"
    button_types: Tuple[str, ...] = ("submit", "reset")
    grouping_types: Tuple[str, ...] = ("radioset", "buttonset", "select", "checkset")
    debug_binding: bool = False


# Global config instance (set by application)
_form_config: Optional[FormBindConfig] = None


def set_form_config(config: Optional[FormBindConfig]) -> None:
    """Set the global form binding configuration.

    Args:
        config: FormBindConfig instance, or None to restore the defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormBindConfig:
    """Get the current form binding configuration.

    Returns:
        Current FormBindConfig or default if not set
    """
    if _form_config is None:
        return FormBindConfig()
    return _form_config
