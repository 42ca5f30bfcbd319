# -*- coding: utf-8 -*-
"""
OrangeFish Settings Module
Persist application configuration using Qt's QSettings store
"""

from __future__ import annotations

from dataclasses import dataclass, field

from orangefish.core import log

ORGANIZATION = "OrangeFish"
APPLICATION = "orangefish"

_DEFAULT_BACKEND = "orangefish-backend"


@dataclass
class ViewConfig:
    """
    Application configuration for the view layer.

    Attributes:
        backend_program: Executable launched as the backend process
        backend_args: Extra command line arguments for the backend
        path_separator: Separator used to group branch/tag names into folders
        ellipsis: Marker prepended to truncated labels
        truncation_step: Characters removed per truncation iteration
        log_level: Level name for the OrangeFish logger
    """

    backend_program: str = _DEFAULT_BACKEND
    backend_args: list[str] = field(default_factory=list)
    path_separator: str = "/"
    ellipsis: str = "..."
    truncation_step: int = 4
    log_level: str = "INFO"


def get_store():
    """
    Get the QSettings store for OrangeFish

    Returns:
        QtCore.QSettings instance
    """
    from PySide6 import QtCore

    return QtCore.QSettings(ORGANIZATION, APPLICATION)


def _load_str(store, key, default):
    value = store.value(key, default)
    if value is None:
        return default
    return str(value)


def _load_positive_int(store, key, default):
    value = store.value(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError):
        log.warning(f"Invalid value for {key}: {value!r}, using {default}")
        return default
    if number <= 0:
        log.warning(f"Non-positive value for {key}: {number}, using {default}")
        return default
    return number


def _load_list(store, key):
    value = store.value(key, [])
    if value is None or value == "":
        return []
    # QSettings hands back a bare string for single-element lists
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def load_view_config(store=None) -> ViewConfig:
    """
    Load the view configuration, falling back to defaults per field.

    Args:
        store: Object with value(key, default); defaults to QSettings

    Returns:
        ViewConfig with loaded or default values
    """
    defaults = ViewConfig()
    try:
        store = store if store is not None else get_store()
    except ImportError as e:
        log.error(f"Settings store unavailable: {e}")
        return defaults

    separator = _load_str(store, "tree/separator", defaults.path_separator)
    if not separator:
        log.warning("Empty path separator in settings, using '/'")
        separator = defaults.path_separator

    config = ViewConfig(
        backend_program=_load_str(store, "backend/program", defaults.backend_program),
        backend_args=_load_list(store, "backend/args"),
        path_separator=separator,
        ellipsis=_load_str(store, "labels/ellipsis", defaults.ellipsis),
        truncation_step=_load_positive_int(
            store, "labels/truncation_step", defaults.truncation_step
        ),
        log_level=_load_str(store, "log/level", defaults.log_level),
    )
    log.debug(f"Loaded view config: {config}")
    return config


def save_view_config(config: ViewConfig, store=None):
    """
    Save the view configuration

    Args:
        config: ViewConfig to persist
        store: Object with setValue(key, value); defaults to QSettings
    """
    try:
        store = store if store is not None else get_store()
        store.setValue("backend/program", config.backend_program)
        store.setValue("backend/args", list(config.backend_args))
        store.setValue("tree/separator", config.path_separator)
        store.setValue("labels/ellipsis", config.ellipsis)
        store.setValue("labels/truncation_step", int(config.truncation_step))
        store.setValue("log/level", config.log_level)
        log.debug("Saved view config")
    except Exception as e:
        log.error(f"Failed to save view config: {e}")
