"""Security helpers (password hashing and bearer tokens)."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher, exceptions as argon_exc

from .config import HMAC_ALGORITHMS, Settings
from .errors import (
    CredentialVerificationError,
    HashingFailedError,
    InvalidToken,
    PasswordMismatchError,
    TokenIssueError,
)

PROFILE_ID_CLAIM = "profile_id"


class CredentialHelper:
    """Hashes/verifies passwords and issues/verifies stateless tokens.

    Shared by every request worker. The only state set after construction is
    the decoy hash, computed once on first use and never changed.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        token_ttl_seconds: int = 86400,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key is required to sign tokens")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"unsupported token algorithm: {algorithm}")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._token_ttl = token_ttl_seconds
        self._ph = PasswordHasher(time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism)
        self._decoy_hash: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialHelper":
        return cls(
            settings.jwt_key,
            algorithm=settings.jwt_algorithm,
            token_ttl_seconds=settings.token_ttl_seconds,
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    # -------------------------------------- passwords --------------------------------------
    def hash_password(self, password: str) -> str:
        """Create a salted Argon2id hash."""
        try:
            return self._ph.hash(password)
        except argon_exc.HashingError as exc:
            raise HashingFailedError(str(exc)) from exc

    def verify_password(self, password: str, stored_hash: str | None) -> None:
        """Return silently when ``password`` matches ``stored_hash``.

        Raises PasswordMismatchError for a plain mismatch and
        CredentialVerificationError for anything else (empty or corrupt hash,
        backend error), so callers can tell a bad password from a broken row.
        """
        if not stored_hash:
            raise CredentialVerificationError("stored hash is empty")
        try:
            self._ph.verify(stored_hash, password)
        except argon_exc.VerifyMismatchError as exc:
            raise PasswordMismatchError("password does not match") from exc
        except (argon_exc.VerificationError, argon_exc.InvalidHashError) as exc:
            raise CredentialVerificationError(str(exc)) from exc

    def verify_decoy(self, password: str) -> None:
        """Run one verification against a throwaway hash.

        Used when no profile matches a login so the response takes as long as
        a wrong password would. The outcome is always a mismatch and is ignored.
        """
        if self._decoy_hash is None:
            self._decoy_hash = self.hash_password(secrets.token_urlsafe(16))
        try:
            self._ph.verify(self._decoy_hash, password)
        except argon_exc.VerificationError:
            return

    # -------------------------------------- tokens --------------------------------------
    def generate_token(self, profile_id: str) -> str:
        if not isinstance(profile_id, str) or not profile_id:
            raise TokenIssueError("profile_id must be a non-empty string")
        now = datetime.now(timezone.utc)
        claims = {
            PROFILE_ID_CLAIM: profile_id,
            "iat": now,
            "exp": now + timedelta(seconds=self._token_ttl),
        }
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError) as exc:
            raise TokenIssueError(str(exc)) from exc

    def verify_token(self, token: str | None) -> str:
        """Return the profile id bound to ``token`` or raise InvalidToken."""
        if not token or not isinstance(token, str):
            raise InvalidToken()
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", PROFILE_ID_CLAIM]},
            )
        except jwt.InvalidTokenError as exc:
            raise InvalidToken() from exc
        profile_id = claims.get(PROFILE_ID_CLAIM)
        if not isinstance(profile_id, str) or not profile_id:
            raise InvalidToken()
        return profile_id
