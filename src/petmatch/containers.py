"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import Client, ClientOptions, create_client

from petmatch.adapters.supabase_animal_repository import SupabaseAnimalRepository
from petmatch.adapters.supabase_avatar_storage import SupabaseAvatarStorage
from petmatch.adapters.supabase_identity_provider import SupabaseIdentityProvider
from petmatch.adapters.supabase_match_repository import SupabaseMatchRepository
from petmatch.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from petmatch.config import Settings, parse_oauth_providers
from petmatch.services.auth import AuthService
from petmatch.services.feed_sessions import FeedSessionStore
from petmatch.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    profile_service: ProfileService
    feed_sessions: FeedSessionStore


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )

    def auth_client() -> Client:
        return create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_service_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )

    profile_repository = SupabaseProfileRepository(supabase_client)
    identity_provider = SupabaseIdentityProvider(
        client_factory=auth_client,
        supabase_url=resolved_settings.supabase_url,
    )
    auth_service = AuthService(
        identity_provider=identity_provider,
        profile_repository=profile_repository,
        oauth_providers=parse_oauth_providers(resolved_settings.oauth_providers),
    )
    profile_service = ProfileService(
        repository=profile_repository,
        avatar_storage=SupabaseAvatarStorage(
            supabase_client, bucket=resolved_settings.avatars_bucket
        ),
    )
    feed_sessions = FeedSessionStore(
        candidate_repository=SupabaseAnimalRepository(supabase_client),
        match_repository=SupabaseMatchRepository(supabase_client),
        page_size=resolved_settings.feed_page_size,
        ttl_seconds=resolved_settings.feed_session_ttl_seconds,
    )
    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        profile_service=profile_service,
        feed_sessions=feed_sessions,
    )
