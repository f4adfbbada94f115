"""Tests for the auth service."""

import base64
import hashlib
from uuid import uuid4

import pytest

from petmatch.domain.errors import (
    DuplicateRegistrationError,
    InvalidCredentialsError,
    InvalidInputError,
    ProviderAuthError,
)
from petmatch.domain.models import UserIdentity
from petmatch.services.auth import AuthService, generate_pkce_pair, is_valid_email
from tests.conftest import FakeIdentityProvider, InMemoryProfileRepository


def _service() -> tuple[
    AuthService, FakeIdentityProvider, InMemoryProfileRepository
]:
    provider = FakeIdentityProvider()
    profiles = InMemoryProfileRepository()
    return AuthService(provider, profiles), provider, profiles


def test_register_creates_profile() -> None:
    service, _, profiles = _service()

    session = service.register(" Ada@Example.com ", "secret123", " Ada ")

    assert session.access_token is not None
    profile = profiles.profiles[session.user.id]
    assert profile.email == "ada@example.com"
    assert profile.name == "Ada"


def test_register_rejects_duplicate() -> None:
    service, _, _ = _service()
    service.register("ada@example.com", "secret123", "Ada")

    with pytest.raises(DuplicateRegistrationError):
        service.register("ada@example.com", "secret123", "Ada")


@pytest.mark.parametrize(
    ("email", "password", "name"),
    [
        ("not-an-email", "secret123", "Ada"),
        ("ada@example.com", "123", "Ada"),
        ("ada@example.com", "secret123", "   "),
    ],
)
def test_register_validates_input(email: str, password: str, name: str) -> None:
    service, provider, _ = _service()

    with pytest.raises(InvalidInputError):
        service.register(email, password, name)

    assert provider.accounts == {}


def test_authenticate_rejects_bad_password() -> None:
    service, _, _ = _service()
    service.register("ada@example.com", "secret123", "Ada")

    with pytest.raises(InvalidCredentialsError):
        service.authenticate("ada@example.com", "wrong-password")


def test_authenticate_normalizes_email() -> None:
    service, _, _ = _service()
    service.register("ada@example.com", "secret123", "Ada")

    session = service.authenticate("ADA@example.com", "secret123")

    assert session.user.email == "ada@example.com"


def test_federated_sign_in_uses_pkce_challenge() -> None:
    service, provider, _ = _service()

    redirect = service.start_federated_sign_in(
        "google", "http://localhost:8000/auth/callback"
    )

    digest = hashlib.sha256(redirect.code_verifier.encode("ascii")).digest()
    expected = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
    assert provider.last_challenge == expected
    assert redirect.url.startswith("https://auth.example.com/google")


def test_federated_sign_in_rejects_unknown_provider() -> None:
    service, _, _ = _service()

    with pytest.raises(ProviderAuthError):
        service.start_federated_sign_in("myspace", "http://localhost/auth/callback")


def test_complete_federated_sign_in_creates_missing_profile() -> None:
    service, provider, profiles = _service()
    user = UserIdentity(id=uuid4(), email="grace@example.com", display_name="Grace")
    provider.codes["code-1"] = user

    session = service.complete_federated_sign_in("code-1", "verifier")

    assert session.user == user
    assert profiles.profiles[user.id].name == "Grace"


def test_complete_federated_sign_in_keeps_existing_profile() -> None:
    service, provider, profiles = _service()
    user = UserIdentity(id=uuid4(), email="grace@example.com")
    provider.codes["code-1"] = user
    profiles.create_profile(user.id, "grace@example.com", "Grace Hopper")

    service.complete_federated_sign_in("code-1", "verifier")

    assert profiles.profiles[user.id].name == "Grace Hopper"


def test_complete_federated_sign_in_requires_verifier() -> None:
    service, _, _ = _service()

    with pytest.raises(ProviderAuthError):
        service.complete_federated_sign_in("code-1", "")


def test_current_user_without_token_is_none() -> None:
    service, _, _ = _service()

    assert service.current_user(None) is None
    assert service.current_user("unknown-token") is None


def test_generate_pkce_pair_is_random() -> None:
    first = generate_pkce_pair()
    second = generate_pkce_pair()

    assert first != second
    assert len(first[0]) >= 43


def test_is_valid_email() -> None:
    assert is_valid_email("ada@example.com")
    assert not is_valid_email("ada@")
    assert not is_valid_email("")
    assert not is_valid_email("ada..lovelace@example.com")
    assert not is_valid_email("ada@-example.com")
