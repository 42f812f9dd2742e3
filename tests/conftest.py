from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the profile_api package importable when running from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from profile_api.core import config as core_config  # noqa: E402
from profile_api.core.config import Settings  # noqa: E402
from profile_api.core.security import CredentialHelper  # noqa: E402
from profile_api.db import create_tables  # noqa: E402
from profile_api.db import session as db_session  # noqa: E402
from profile_api.services.profile_service import ProfileService  # noqa: E402

from fakes import TEST_JWT_KEY, InMemoryProfileRepository  # noqa: E402


def make_settings(**overrides) -> Settings:
    values = dict(
        app_env="test",
        database_url="",
        jwt_key=TEST_JWT_KEY,
        jwt_algorithm="HS256",
        token_ttl_seconds=3600,
        argon2_time_cost=1,
        argon2_memory_cost=8,
        argon2_parallelism=1,
        db_pool_timeout=5,
        db_connect_timeout=5,
        log_level="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def credentials(settings) -> CredentialHelper:
    """Cheap Argon2 parameters so the suite stays fast."""
    return CredentialHelper.from_settings(settings)


@pytest.fixture()
def fake_repo() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture()
def service(fake_repo, credentials) -> ProfileService:
    return ProfileService(repository=fake_repo, credentials=credentials)


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point the SQL store at a temporary SQLite file and reset cached settings/engine."""
    db_file = tmp_path / "profiles.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_KEY", TEST_JWT_KEY)
    core_config.get_settings.cache_clear()
    db_session.reset_engines()

    engine = db_session.get_engine()
    create_tables.drop_all(engine)
    create_tables.create_all(engine)

    yield db_file

    create_tables.drop_all(engine)
    engine.dispose()
    db_session.reset_engines()
    core_config.get_settings.cache_clear()


@pytest.fixture()
def sql_settings(tmp_path, monkeypatch):
    """Settings naming a temporary SQLite file while DATABASE_URL stays unset."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    core_config.get_settings.cache_clear()
    db_session.reset_engines()
    configured = make_settings(database_url=f"sqlite:///{tmp_path / 'configured.db'}")

    engine = db_session.get_engine(configured)
    create_tables.create_all(engine)

    yield configured

    engine.dispose()
    db_session.reset_engines()
    core_config.get_settings.cache_clear()
