"""
Configuration helpers for the Profile API.

Settings are read once from the environment and passed down to the services,
so routers/services never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

_DEV_JWT_KEY = "dev-only-profile-api-signing-key-change-me"
# Tokens are signed with the shared secret, so only HMAC algorithms apply.
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_key: str
    jwt_algorithm: str
    token_ttl_seconds: int
    argon2_time_cost: int
    argon2_memory_cost: int
    argon2_parallelism: int
    db_pool_timeout: int
    db_connect_timeout: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    jwt_key = os.getenv("JWT_KEY", "")
    if not jwt_key:
        if app_env == "prod":
            raise RuntimeError("JWT_KEY must be configured in production.")
        jwt_key = _DEV_JWT_KEY

    jwt_algorithm = (os.getenv("JWT_ALGORITHM") or "HS256").upper()
    if jwt_algorithm not in HMAC_ALGORITHMS:
        raise RuntimeError(f"JWT_ALGORITHM must be one of {', '.join(HMAC_ALGORITHMS)}.")
    token_ttl_seconds = _int(os.getenv("TOKEN_TTL_SECONDS"), 86400)
    if token_ttl_seconds <= 0:
        raise RuntimeError("TOKEN_TTL_SECONDS must be a positive number of seconds.")

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", ""),
        jwt_key=jwt_key,
        jwt_algorithm=jwt_algorithm,
        token_ttl_seconds=token_ttl_seconds,
        argon2_time_cost=_int(os.getenv("ARGON2_TIME_COST"), 3),
        argon2_memory_cost=_int(os.getenv("ARGON2_MEMORY_COST"), 65536),
        argon2_parallelism=_int(os.getenv("ARGON2_PARALLELISM"), 4),
        db_pool_timeout=_int(os.getenv("DB_POOL_TIMEOUT"), 10),
        db_connect_timeout=_int(os.getenv("DB_CONNECT_TIMEOUT"), 5),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
