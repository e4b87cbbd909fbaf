"""
Preferences repository: storage of per-user preference documents.

Every operation is keyed by username. Writes resolve the username to the
internal user id first and raise NotFoundError when no such user exists.
Any SQLAlchemy failure surfaces as StorageError.
"""

import logging
from uuid import UUID

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError, StorageError
from database.models import User, UserPreference

logger = logging.getLogger(__name__)


class PreferencesRepository:
    """Repository for UserPreference model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, statement):
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Preferences query failed: {e}")
            raise StorageError(message=str(e)) from e

    async def _get_user_id(self, username: str) -> UUID:
        """Resolve a username to its user id."""
        result = await self._execute(select(User.id).where(User.username == username))
        user_id = result.scalar_one_or_none()
        if user_id is None:
            raise NotFoundError(message=f"no user id found for {username}")
        return user_id

    async def is_user(self, username: str) -> bool:
        """Check whether a user with this username exists."""
        query = select(func.count(User.id)).where(User.username == username)
        result = await self._execute(query)
        return result.scalar_one() > 0

    async def has_preferences(self, username: str) -> bool:
        """
        Check whether the user has a non-empty preferences record.

        A missing row and a row with empty or NULL text both count as
        "no preferences".
        """
        query = (
            select(func.count(UserPreference.id))
            .join(User, UserPreference.user_id == User.id)
            .where(
                and_(
                    User.username == username,
                    UserPreference.preferences.is_not(None),
                    UserPreference.preferences != "",
                )
            )
        )
        result = await self._execute(query)
        return result.scalar_one() > 0

    async def get_preferences(self, username: str) -> list[UserPreference]:
        """Get the user's preference records, ordered by id."""
        query = (
            select(UserPreference)
            .join(User, UserPreference.user_id == User.id)
            .where(User.username == username)
            .order_by(UserPreference.id)
        )
        result = await self._execute(query)
        return list(result.scalars().all())

    async def insert_preferences(self, username: str, preferences: str) -> None:
        """
        Insert a new preferences record for the user.

        A row left behind with empty or NULL text reports no preferences,
        so an insert can still meet an existing row; it takes the new text
        instead of tripping the unique user_id constraint.
        """
        user_id = await self._get_user_id(username)
        statement = insert(UserPreference).values(user_id=user_id, preferences=preferences)
        await self._execute(
            statement.on_conflict_do_update(
                index_elements=[UserPreference.user_id],
                set_={"preferences": statement.excluded.preferences},
            )
        )

    async def update_preferences(self, username: str, preferences: str) -> None:
        """
        Replace the text of the user's existing record.

        Matching zero rows is not an error; callers pick insert or update
        with has_preferences().
        """
        user_id = await self._get_user_id(username)
        await self._execute(
            update(UserPreference)
            .where(UserPreference.user_id == user_id)
            .values(preferences=preferences)
        )

    async def delete_preferences(self, username: str) -> None:
        """Delete the user's record. Deleting nothing is not an error."""
        user_id = await self._get_user_id(username)
        await self._execute(delete(UserPreference).where(UserPreference.user_id == user_id))
