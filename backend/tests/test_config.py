"""
NoteKeep Backend — Configuration Tests
========================================

What:  Tests for Settings validators and the startup configuration check.
How:   Builds Settings directly with keyword overrides (no .env file).
"""

import pytest
from pydantic import ValidationError

from notekeep.config import Settings


def _settings(**overrides):
    return Settings(_env_file=None, **overrides)


class TestSettingsValidation:

    def test_log_level_normalized(self):
        assert _settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            _settings(log_level="chatty")

    def test_only_hmac_algorithms_allowed(self):
        assert _settings(jwt_algorithm="hs512").jwt_algorithm == "HS512"
        with pytest.raises(ValidationError):
            _settings(jwt_algorithm="RS256")

    def test_cors_origins_split(self):
        settings = _settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestProductionCheck:

    def test_placeholder_secret_rejected(self):
        with pytest.raises(ValueError, match="JWT_SECRET is not set"):
            _settings(jwt_secret="change-me-in-production").validate_required_for_production()

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError, match="shorter than 32"):
            _settings(jwt_secret="too-short").validate_required_for_production()

    def test_strong_secret_accepted(self):
        _settings(jwt_secret="s" * 48).validate_required_for_production()
