"""
Profile use cases: registration, login, profile lookup and profile update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from profile_api.core.errors import (
    CredentialError,
    DataConflict,
    GetProfileFailed,
    InvalidCredentials,
    LoginFailed,
    PasswordMismatchError,
    ProfileNotFound,
    RegistrationFailed,
    UpdateProfileFailed,
)
from profile_api.core.security import CredentialHelper
from profile_api.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


@dataclass
class RegisterResult:
    profile_id: str


@dataclass
class LoginResult:
    token: str


@dataclass
class ProfileView:
    full_name: str
    phone_number: str


@dataclass
class ProfileService:
    """Runs the profile use cases against an injected store and credential helper.

    Register and UpdateProfile check phone-number ownership and write inside
    one store transaction. The store also carries a unique constraint on the
    phone number; a constraint violation is reported as DataConflict, which
    covers two transactions that both pass the check before either commits.
    """

    repository: ProfileRepository
    credentials: CredentialHelper

    # -------------------------------------- register --------------------------------------
    def register(self, full_name: str, phone_number: str, password: str) -> RegisterResult:
        try:
            password_hash = self.credentials.hash_password(password)
        except CredentialError as exc:
            logger.error("register: password hashing failed: %s", exc)
            raise RegistrationFailed() from exc

        with self.repository.transaction() as tx:
            try:
                existing = self.repository.get_profile_by_phone(phone_number, session=tx)
            except SQLAlchemyError as exc:
                logger.exception("register: lookup by phone number failed")
                raise RegistrationFailed() from exc
            if existing is not None:
                raise DataConflict()
            try:
                profile_id = self.repository.insert_profile(full_name, phone_number, password_hash, session=tx)
            except IntegrityError as exc:
                raise DataConflict() from exc
            except SQLAlchemyError as exc:
                logger.exception("register: insert failed")
                raise RegistrationFailed() from exc

        logger.info("registered profile %s", profile_id)
        return RegisterResult(profile_id=profile_id)

    # -------------------------------------- login --------------------------------------
    def login(self, phone_number: str, password: str) -> LoginResult:
        try:
            profile = self.repository.get_profile_by_phone(phone_number)
        except SQLAlchemyError as exc:
            logger.exception("login: lookup by phone number failed")
            raise LoginFailed() from exc
        # Unknown phone and wrong password share one outcome and one hashing cost.
        if profile is None:
            try:
                self.credentials.verify_decoy(password)
            except CredentialError as exc:
                logger.error("login: decoy verification failed: %s", exc)
                raise LoginFailed() from exc
            raise InvalidCredentials()

        try:
            self.credentials.verify_password(password, profile.password_hash)
        except PasswordMismatchError as exc:
            raise InvalidCredentials() from exc
        except CredentialError as exc:
            logger.error("login: password verification failed for profile %s: %s", profile.id, exc)
            raise LoginFailed() from exc

        try:
            token = self.credentials.generate_token(profile.id)
        except CredentialError as exc:
            logger.error("login: token signing failed for profile %s: %s", profile.id, exc)
            raise LoginFailed() from exc

        # The token only leaves this method once the counter update has
        # committed; on failure it is dropped and the login is reported failed.
        with self.repository.transaction() as tx:
            try:
                self.repository.increment_login_count(profile.id, session=tx)
            except SQLAlchemyError as exc:
                logger.exception("login: counter update failed for profile %s", profile.id)
                raise LoginFailed() from exc

        return LoginResult(token=token)

    # -------------------------------------- profile --------------------------------------
    def get_profile(self, profile_id: str) -> ProfileView:
        try:
            profile = self.repository.get_profile_by_id(profile_id)
        except SQLAlchemyError as exc:
            logger.exception("get_profile: lookup failed for profile %s", profile_id)
            raise GetProfileFailed() from exc
        if profile is None:
            raise ProfileNotFound()
        return ProfileView(full_name=profile.full_name, phone_number=profile.phone_number)

    def update_profile(self, profile_id: str, full_name: str, phone_number: str) -> None:
        with self.repository.transaction() as tx:
            try:
                existing = self.repository.get_profile_by_phone(phone_number, session=tx)
            except SQLAlchemyError as exc:
                logger.exception("update_profile: lookup by phone number failed")
                raise UpdateProfileFailed() from exc
            # Any holder counts, including the profile being updated.
            if existing is not None:
                raise DataConflict()
            try:
                updated = self.repository.update_profile_by_id(profile_id, full_name, phone_number, session=tx)
            except IntegrityError as exc:
                raise DataConflict() from exc
            except SQLAlchemyError as exc:
                logger.exception("update_profile: update failed for profile %s", profile_id)
                raise UpdateProfileFailed() from exc
            if not updated:
                raise ProfileNotFound()
