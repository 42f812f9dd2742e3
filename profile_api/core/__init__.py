"""
Core utilities shared across the Profile API.

This package hosts configuration, logging setup, the error taxonomy and the
credential helper (password hashing and bearer tokens). Services and routers
depend on these primitives instead of reading the environment directly.
"""
