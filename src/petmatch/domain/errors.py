"""Domain exceptions surfaced to the interactive caller."""


class PetMatchError(Exception):
    """Base class for application errors."""


class InvalidInputError(PetMatchError):
    """Raised when user-supplied input is rejected before any remote call."""


class IdentityError(PetMatchError):
    """Raised when an identity operation fails."""


class InvalidCredentialsError(IdentityError):
    """Raised when email and password do not match an account."""


class DuplicateRegistrationError(IdentityError):
    """Raised when an account already exists for the email."""


class ProviderAuthError(IdentityError):
    """Raised when a federated provider sign in fails."""


class CandidateFetchError(PetMatchError):
    """Raised when the candidate batch cannot be fetched."""


class ResponseEmissionError(PetMatchError):
    """Raised when a swipe response cannot be recorded."""


class NoCurrentCandidateError(PetMatchError):
    """Raised when responding to an exhausted feed session."""


class ProfileError(PetMatchError):
    """Raised when a profile row cannot be read or written."""


class ProfileNotFoundError(ProfileError):
    """Raised when no profile row exists for a user."""


class AvatarUploadError(PetMatchError):
    """Raised when an avatar cannot be stored."""
