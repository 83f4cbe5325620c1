"""
Core utilities shared across the cat API.

This package hosts configuration, logging setup, password/JWT helpers and
the error taxonomy. Services and routers depend on these primitives instead of
reading the environment or raising framework exceptions directly.
"""
