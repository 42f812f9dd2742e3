"""
Persistence adapters.

Services depend on the ``ProfileRepository`` contract; ``SQLProfileRepository``
is the SQLAlchemy-backed implementation used by the application.
"""

from .profile_repository import ProfileRecord, ProfileRepository, SQLProfileRepository

__all__ = ["ProfileRecord", "ProfileRepository", "SQLProfileRepository"]
