"""Profile API: registration, login and profile management over HTTP."""

__version__ = "0.1.0"
