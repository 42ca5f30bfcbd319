# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures for OrangeFish tests
"""

import os

import pytest

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for Qt tests."""
    from PySide6 import QtWidgets

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


class DictStore:
    """In-memory stand-in for QSettings (value/setValue only)."""

    def __init__(self, values=None):
        self.values = dict(values or {})

    def value(self, key, default=None):
        return self.values.get(key, default)

    def setValue(self, key, value):
        self.values[key] = value


@pytest.fixture
def settings_store():
    return DictStore()


@pytest.fixture
def make_store():
    """Factory for pre-populated in-memory settings stores."""
    return DictStore
