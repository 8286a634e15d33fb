"""
Tests for settings and logging setup
"""
import logging
import pytest

import sys
sys.path.insert(0, '.')

from src.core.config import Settings
from src.core.constants import DEFAULT_FALLBACK_LOCATION, DEFAULT_MAP_CENTER, REPORT_KEY_PREFIX
from src.core.logging import QUIET_LOGGERS, setup_logging


@pytest.fixture
def restore_levels():
    names = ("src",) + QUIET_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


class TestSettings:
    """Test suite for settings defaults."""

    def test_defaults_come_from_constants(self):
        config = Settings(_env_file=None)

        assert (config.fallback_latitude, config.fallback_longitude) == DEFAULT_FALLBACK_LOCATION
        assert (config.map_center_latitude, config.map_center_longitude) == DEFAULT_MAP_CENTER
        assert config.report_key_prefix == REPORT_KEY_PREFIX

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("STORE_BACKEND", "file")
        monkeypatch.setenv("ALLOW_ADMIN_REOPEN", "true")

        config = Settings(_env_file=None)

        assert config.store_backend == "file"
        assert config.allow_admin_reopen is True


class TestSetupLogging:
    """Test suite for logging configuration."""

    def test_returns_package_logger_at_configured_level(self, restore_levels):
        logger = setup_logging(Settings(_env_file=None, log_level="warning"))

        assert logger.name == "src"
        assert logger.level == logging.WARNING

    def test_explicit_level_overrides_config(self, restore_levels):
        logger = setup_logging(Settings(_env_file=None, log_level="warning"), level="debug")

        assert logger.level == logging.DEBUG

    def test_quiets_third_party_loggers_outside_debug(self, restore_levels):
        setup_logging(Settings(_env_file=None, debug=False))

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_module_loggers_inherit_package_level(self, restore_levels):
        setup_logging(Settings(_env_file=None, log_level="error"))

        assert logging.getLogger("src.reports.repository").getEffectiveLevel() == logging.ERROR
