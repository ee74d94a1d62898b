"""
Settings Tests
"""

import pytest
from pydantic import ValidationError

from creatorshare.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.max_page_limit == 50
        assert settings.default_page_limit == 20
        assert settings.default_remix_share_percentage == 10
        assert settings.frame_message_max_age_seconds == 300
        assert settings.content_creation_limit_per_hour == 10

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_LIMIT", "100")
        monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")

        settings = Settings(_env_file=None)

        assert settings.max_page_limit == 100
        assert settings.rate_limit_enabled is False

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="https://a.com, https://b.com,")
        assert settings.cors_origins_list == ["https://a.com", "https://b.com"]

    def test_default_page_limit_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_page_limit=80, max_page_limit=50)

    def test_remix_default_within_remix_cap(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_remix_share_percentage=60)

    def test_is_production(self):
        assert Settings(_env_file=None, app_env="production").is_production is True
        assert Settings(_env_file=None, app_env="testing").is_production is False

    def test_validation_context_carries_model_limits(self):
        settings = Settings(
            _env_file=None,
            max_tags_per_content=3,
            max_tag_length=8,
            default_revenue_share_percentage=40,
        )
        assert settings.validation_context == {
            "max_tags_per_content": 3,
            "max_tag_length": 8,
            "default_revenue_share_percentage": 40.0,
        }
