"""
API routers for different endpoints.
"""

from .preferences import router as preferences_router

__all__ = [
    "preferences_router",
]
