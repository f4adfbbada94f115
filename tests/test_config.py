"""Tests for configuration helpers."""

from petmatch.config import Settings, parse_oauth_providers


def test_parse_oauth_providers() -> None:
    assert parse_oauth_providers("Google, github,,") == frozenset({"google", "github"})
    assert parse_oauth_providers("") == frozenset()
    assert parse_oauth_providers(None) == frozenset()


def test_settings_defaults(settings: Settings) -> None:
    assert settings.feed_page_size == 20
    assert settings.avatars_bucket == "avatars"
    assert settings.oauth_providers == "google"
    assert settings.log_level == "INFO"
