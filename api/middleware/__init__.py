"""
API middleware and exception handlers.
"""

from .error_handler import bad_request, errored, handle_non_user, setup_exception_handlers

__all__ = [
    "setup_exception_handlers",
    "bad_request",
    "errored",
    "handle_non_user",
]
