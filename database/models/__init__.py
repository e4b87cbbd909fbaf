"""
SQLAlchemy models for the user-preferences service.
"""

from .base import Base
from .user import User
from .user_preferences import UserPreference

__all__ = [
    "Base",
    "User",
    "UserPreference",
]
