"""Tests for settings and the logging bootstrap."""

import logging

from training_engine.core import logging as engine_logging
from training_engine.core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ADHERENCE_WEEKS_TO_TRACK", raising=False)
        monkeypatch.delenv("HEATMAP_GRID_DAYS", raising=False)
        cfg = Settings(_env_file=None)
        assert cfg.ADHERENCE_WEEKS_TO_TRACK == 12
        assert cfg.HEATMAP_GRID_DAYS == 365
        assert cfg.DEBUG is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("HEATMAP_GRID_DAYS", "90")
        monkeypatch.setenv("DEBUG", "true")
        cfg = Settings(_env_file=None)
        assert cfg.HEATMAP_GRID_DAYS == 90
        assert cfg.DEBUG is True

    def test_names_are_case_sensitive(self, monkeypatch):
        monkeypatch.delenv("HEATMAP_GRID_DAYS", raising=False)
        monkeypatch.setenv("heatmap_grid_days", "30")
        assert Settings(_env_file=None).HEATMAP_GRID_DAYS == 365


class TestConfigureLogging:
    def _capture(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
        return calls

    def test_explicit_level(self, monkeypatch):
        calls = self._capture(monkeypatch)
        engine_logging.configure_logging("warning")
        assert calls[0]["level"] == "WARNING"

    def test_debug_setting_forces_debug(self, monkeypatch):
        calls = self._capture(monkeypatch)
        monkeypatch.setattr(engine_logging.settings, "DEBUG", True)
        engine_logging.configure_logging()
        assert calls[0]["level"] == "DEBUG"

    def test_level_from_settings(self, monkeypatch):
        calls = self._capture(monkeypatch)
        monkeypatch.setattr(engine_logging.settings, "DEBUG", False)
        monkeypatch.setattr(engine_logging.settings, "LOG_LEVEL", "error")
        engine_logging.configure_logging()
        assert calls[0]["level"] == "ERROR"
