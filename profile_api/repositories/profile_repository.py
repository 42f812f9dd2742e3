"""Profile store: the repository contract and its SQLAlchemy implementation."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ContextManager, Iterator, Optional, Protocol

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from profile_api.core.config import Settings
from profile_api.db.models import Profile
from profile_api.db.session import get_session


@dataclass(frozen=True)
class ProfileRecord:
    """Detached view of a profile row."""

    id: str
    full_name: str
    phone_number: str
    password_hash: str
    success_login_count: int = 0


class ProfileRepository(Protocol):
    """Operations the profile service needs from the store.

    Lookups return ``None`` when no row matches; transport and constraint
    failures are raised as ``sqlalchemy.exc.SQLAlchemyError`` (unique
    violations as its ``IntegrityError`` subclass). Every method accepts the
    handle yielded by ``transaction()`` to run inside that transaction.
    """

    def transaction(self) -> ContextManager[object]: ...

    def insert_profile(self, full_name: str, phone_number: str, password_hash: str, session=None) -> str: ...

    def get_profile_by_id(self, profile_id: str, session=None) -> Optional[ProfileRecord]: ...

    def get_profile_by_phone(self, phone_number: str, session=None) -> Optional[ProfileRecord]: ...

    def update_profile_by_id(self, profile_id: str, full_name: str, phone_number: str, session=None) -> bool: ...

    def increment_login_count(self, profile_id: str, session=None) -> None: ...


def _to_record(entity: Profile | None) -> Optional[ProfileRecord]:
    if entity is None:
        return None
    return ProfileRecord(
        id=entity.id,
        full_name=entity.full_name,
        phone_number=entity.phone_number,
        password_hash=entity.password_hash,
        success_login_count=int(entity.success_login_count or 0),
    )


class SQLProfileRepository:
    """CRUD helpers for profile rows wrapping the SQLAlchemy session.

    ``settings`` selects the database; without it the environment is read.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Yield a session; commit on clean exit, roll back on any exception."""
        with get_session(self._settings) as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    @contextmanager
    def _use(self, session: Session | None) -> Iterator[Session]:
        # Without a caller transaction each call is its own unit of work.
        if session is not None:
            yield session
            return
        with self.transaction() as own:
            yield own

    # -------------------------- writes --------------------------
    def insert_profile(self, full_name: str, phone_number: str, password_hash: str, session: Session | None = None) -> str:
        now = datetime.now(timezone.utc)
        entity = Profile(
            full_name=full_name,
            phone_number=phone_number,
            password_hash=password_hash,
            success_login_count=0,
            created_at=now,
            updated_at=now,
        )
        with self._use(session) as db:
            db.add(entity)
            db.flush()
            return entity.id

    def update_profile_by_id(self, profile_id: str, full_name: str, phone_number: str, session: Session | None = None) -> bool:
        stmt = (
            update(Profile)
            .where(Profile.id == profile_id)
            .values(full_name=full_name, phone_number=phone_number, updated_at=datetime.now(timezone.utc))
        )
        with self._use(session) as db:
            result = db.execute(stmt)
            return result.rowcount > 0

    def increment_login_count(self, profile_id: str, session: Session | None = None) -> None:
        stmt = (
            update(Profile)
            .where(Profile.id == profile_id)
            .values(success_login_count=Profile.success_login_count + 1)
        )
        with self._use(session) as db:
            db.execute(stmt)

    # -------------------------- reads --------------------------
    def get_profile_by_id(self, profile_id: str, session: Session | None = None) -> Optional[ProfileRecord]:
        with self._use(session) as db:
            return _to_record(db.get(Profile, profile_id))

    def get_profile_by_phone(self, phone_number: str, session: Session | None = None) -> Optional[ProfileRecord]:
        stmt = select(Profile).where(Profile.phone_number == phone_number)
        with self._use(session) as db:
            return _to_record(db.execute(stmt).scalar_one_or_none())
