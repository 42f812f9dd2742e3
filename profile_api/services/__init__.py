"""
High-level use cases for the Profile API.

Services orchestrate the profile store and the credential helper to implement
business rules (register, login, read and update a profile). Routers call
these services instead of touching the store or the token layer directly.
"""

from .profile_service import LoginResult, ProfileService, ProfileView, RegisterResult

__all__ = ["LoginResult", "ProfileService", "ProfileView", "RegisterResult"]
