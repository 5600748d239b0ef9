"""
Tests for settings and logging setup.
"""

import logging

from transposim.config import configure_logging, settings


class TestSettings:
    """Test environment-driven settings."""

    def test_simulation_defaults(self):
        """Test default genotype and run parameters."""
        assert settings.default_genotype_length == 100
        assert settings.default_transposon_count == 1
        assert settings.default_strain == "ancestral"
        assert settings.max_population_size >= settings.default_population_size

    def test_configure_logging(self, monkeypatch):
        """Test the requested level reaches basicConfig."""
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging("debug")

        assert calls["level"] == logging.DEBUG
        assert calls["format"] == settings.log_format
