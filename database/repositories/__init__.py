"""
Repository layer for database access.
"""

from .preferences_repo import PreferencesRepository

__all__ = [
    "PreferencesRepository",
]
