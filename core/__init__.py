"""
Core modules for the user-preferences service.

This package contains fundamental utilities used across the application:
- config: Application settings and configuration
- exceptions: Custom exception classes
"""

from .config import Settings, fix_addr, get_settings
from .exceptions import (
    AppException,
    NotFoundError,
    ParseError,
    StorageError,
    UnknownUserError,
)

__all__ = [
    # Config
    "get_settings",
    "fix_addr",
    "Settings",
    # Exceptions
    "AppException",
    "UnknownUserError",
    "ParseError",
    "NotFoundError",
    "StorageError",
]
