"""
TimeTracker Backend - Settings Tests
====================================
"""

import pytest
from pydantic import ValidationError

from timetracker.config import Settings


class TestSettingsValidation:
    def test_log_level_is_normalised(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_error_type_base_url_gets_trailing_slash(self):
        settings = Settings(error_type_base_url="https://errors.example.com/problems")
        assert settings.error_type_base_url == "https://errors.example.com/problems/"

    def test_ttl_must_cover_cooldown(self):
        with pytest.raises(ValidationError):
            Settings(rate_limit_cooldown_seconds=10, rate_limit_entry_ttl_seconds=5)

    def test_default_page_size_within_max(self):
        with pytest.raises(ValidationError):
            Settings(default_page_size=50, max_page_size=10)

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestProductionCheck:
    def test_passes_with_issuer_and_long_key(self):
        Settings(token_issuer="https://tt.test", token_key="k" * 32).validate_required_for_production()

    @pytest.mark.parametrize(
        "issuer,key,fragment",
        [
            ("", "k" * 32, "TOKEN_ISSUER"),
            ("https://tt.test", "", "TOKEN_KEY is not set"),
            ("https://tt.test", "short", "shorter than 32"),
        ],
    )
    def test_reports_missing_or_weak_values(self, issuer, key, fragment):
        settings = Settings(token_issuer=issuer, token_key=key)
        with pytest.raises(ValueError) as exc_info:
            settings.validate_required_for_production()
        assert fragment in str(exc_info.value)
