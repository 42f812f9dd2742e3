"""Schema bootstrap for the profile store (`python -m profile_api.db.create_tables`)."""
from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers Profile on Base.metadata

logger = logging.getLogger(__name__)


def create_all(engine: Engine | None = None) -> None:
    """Create the profiles table (and its phone-number unique constraint) if missing."""
    target = engine or get_engine()
    Base.metadata.create_all(bind=target)
    logger.info("profile store schema ready on %s", target.url.render_as_string(hide_password=True))


def drop_all(engine: Engine | None = None) -> None:
    Base.metadata.drop_all(bind=engine or get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Profile tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create profile tables: {exc}") from exc
