"""
FastAPI dependency injection for database sessions, repositories and services.
"""

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_session
from database.repositories import PreferencesRepository
from services.preferences_service import PreferencesService

logger = logging.getLogger(__name__)


async def get_preferences_repository(
    session: AsyncSession = Depends(get_session),
) -> PreferencesRepository:
    """Get PreferencesRepository dependency."""
    return PreferencesRepository(session)


async def get_preferences_service(
    prefs_repo: PreferencesRepository = Depends(get_preferences_repository),
) -> PreferencesService:
    """Get PreferencesService dependency."""
    return PreferencesService(prefs_repo)
