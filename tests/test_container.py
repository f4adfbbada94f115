"""Tests for container wiring."""

from petmatch.adapters.supabase_animal_repository import SupabaseAnimalRepository
from petmatch.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.auth_service.oauth_providers == frozenset({"google"})
    assert container.feed_sessions.page_size == settings.feed_page_size
    assert isinstance(
        container.feed_sessions.candidate_repository, SupabaseAnimalRepository
    )
