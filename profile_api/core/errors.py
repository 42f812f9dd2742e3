"""Error taxonomy shared by the credential helper, services and routers."""

from __future__ import annotations


class ProfileError(Exception):
    """Base class for classified profile/auth outcomes.

    ``code`` is stable and used by the HTTP layer to pick a status; ``message``
    is safe to return to the caller.
    """

    code = "profile_error"
    default_message = "error when handling profile request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# -------------------------------------- profile service --------------------------------------
class RegistrationFailed(ProfileError):
    code = "registration_failed"
    default_message = "error when register a new profile"


class DataConflict(ProfileError):
    code = "data_conflict"
    default_message = "error there existing data conflicted with new data"


class ProfileNotFound(ProfileError):
    code = "profile_not_found"
    default_message = "error profile not found"


class GetProfileFailed(ProfileError):
    code = "get_profile_failed"
    default_message = "error when get user profile"


class InvalidCredentials(ProfileError):
    code = "invalid_credentials"
    default_message = "error credentials combination not match"


class LoginFailed(ProfileError):
    code = "login_failed"
    default_message = "error when try to login"


class UpdateProfileFailed(ProfileError):
    code = "update_profile_failed"
    default_message = "error when updating profile"


# -------------------------------------- credentials --------------------------------------
class NotAuthenticated(ProfileError):
    code = "not_authenticated"
    default_message = "error not authenticated"


class InvalidToken(ProfileError):
    code = "invalid_token"
    default_message = "error invalid token"


class InvalidRequest(ProfileError):
    code = "invalid_request"
    default_message = "error invalid request"


class CredentialError(Exception):
    """Raised by the credential helper; never surfaced to callers directly."""


class PasswordMismatchError(CredentialError):
    """The plaintext does not match the stored hash."""


class CredentialVerificationError(CredentialError):
    """The hash could not be checked at all (corrupt hash, backend failure)."""


class HashingFailedError(CredentialError):
    """The password hashing backend failed."""


class TokenIssueError(CredentialError):
    """A token could not be signed."""
