"""pytest configuration and fixtures for pyqt-formbind tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for widget tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default FormBindConfig."""
    from pyqt_formbind.protocols import set_form_config

    set_form_config(None)
    yield
    set_form_config(None)


@pytest.fixture
def related_model():
    from pyqt_formbind.core import ObservableModel

    return ObservableModel({"foo": "related_foo_value", "bar": "related_bar_value"})


@pytest.fixture
def bound_descriptors():
    return [
        {"type": "text", "related_key": "foo"},
        {"type": "text", "related_key": "bar"},
        {"type": "text", "value": "unchanged value"},
    ]
