# -*- coding: utf-8 -*-
"""
Tests for app - command line options layered over saved settings
"""

import pytest

pytest.importorskip("PySide6")

from orangefish.app import apply_overrides, build_parser
from orangefish.core.settings import ViewConfig, load_view_config


def parse(*argv):
    return build_parser().parse_args(list(argv))


class TestApplyOverrides:

    def test_no_options_keep_saved_config(self, settings_store):
        saved = ViewConfig(backend_program="saved-backend", log_level="DEBUG")
        config = apply_overrides(ViewConfig(**vars(saved)), parse(), settings_store)
        assert config == saved
        assert settings_store.values == {}

    def test_options_override_without_saving(self, settings_store):
        args = parse("--backend", "git-bridge", "--backend-arg", "--repo", "--backend-arg", ".")
        config = apply_overrides(ViewConfig(), args, settings_store)
        assert config.backend_program == "git-bridge"
        assert config.backend_args == ["--repo", "."]
        assert settings_store.values == {}

    def test_save_settings_persists_overrides(self, settings_store):
        args = parse("--backend", "git-bridge", "--log-level", "WARNING", "--save-settings")
        config = apply_overrides(ViewConfig(), args, settings_store)
        assert load_view_config(settings_store) == config
        assert settings_store.values["backend/program"] == "git-bridge"
        assert settings_store.values["log/level"] == "WARNING"
