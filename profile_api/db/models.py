"""SQLAlchemy models for the profile store."""
from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text, UniqueConstraint, func

from .session import Base


def _new_profile_id() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (UniqueConstraint("phone_number", name="uq_profiles_phone_number"),)

    id = Column(String(36), primary_key=True, default=_new_profile_id)
    full_name = Column(String(60), nullable=False)
    phone_number = Column(String(32), nullable=False)
    password_hash = Column(Text, nullable=False)
    success_login_count = Column(Integer, default=0, server_default="0", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
