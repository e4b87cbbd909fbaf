"""
Preferences service.

Sits between the HTTP routes and the preferences store: checks that the
user exists, picks insert or update, and reshapes stored JSON into the
flat or wrapped wire form.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, Sequence

from core.exceptions import ParseError, UnknownUserError

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "preferences"


class PreferenceRecord(Protocol):
    """Shape of a stored preferences row."""

    id: Any
    user_id: Any
    preferences: str | None


class PreferenceStore(Protocol):
    """Storage contract the service relies on."""

    async def is_user(self, username: str) -> bool: ...

    async def has_preferences(self, username: str) -> bool: ...

    async def get_preferences(self, username: str) -> Sequence[PreferenceRecord]: ...

    async def insert_preferences(self, username: str, preferences: str) -> None: ...

    async def update_preferences(self, username: str, preferences: str) -> None: ...

    async def delete_preferences(self, username: str) -> None: ...


def dumps(data: dict[str, Any]) -> bytes:
    """Serialize compactly, without ASCII escaping or a trailing newline."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def normalize_preferences(data: dict[str, Any]) -> dict[str, Any]:
    """
    Unwrap {"preferences": {...}} to its inner object; pass others through.

    When "preferences" holds an object, any sibling keys are dropped.
    """
    inner = data.get(PREFERENCES_KEY)
    if isinstance(inner, dict):
        return inner
    return data


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _loads(text: str | bytes, status_code: int | None) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise ParseError(message=f"error parsing preferences: {e}", status_code=status_code) from e


def _require_object(parsed: Any, status_code: int | None) -> dict[str, Any]:
    if not isinstance(parsed, dict):
        raise ParseError(message="preferences must be a JSON object", status_code=status_code)
    return normalize_preferences(parsed)


def parse_preferences(text: str | bytes) -> dict[str, Any]:
    """
    Parse a request body into a normalized preferences object.

    Raises ParseError for malformed JSON and for anything that is not an
    object (arrays, scalars, null).
    """
    return _require_object(_loads(text, None), None)


def convert(record: PreferenceRecord, wrapped: bool) -> dict[str, Any]:
    """
    Turn a stored record into its wire representation.

    Empty text, or text that parses to null, yields an empty object.
    Unparseable stored text is a server-side ParseError.
    """
    prefs: dict[str, Any] = {}
    if record.preferences:
        parsed = _loads(record.preferences, 500)
        if parsed is not None:
            prefs = _require_object(parsed, 500)

    if wrapped:
        return {PREFERENCES_KEY: prefs}
    return prefs


class PreferencesService:
    """Orchestrates preference reads and writes for one request."""

    def __init__(self, store: PreferenceStore):
        self.store = store

    async def _require_user(self, username: str) -> None:
        if not await self.store.is_user(username):
            logger.info(f"User {username} does not exist")
            raise UnknownUserError(username)

    async def fetch(self, username: str, wrapped: bool) -> bytes:
        """Return the user's preferences, flat or under a "preferences" key."""
        await self._require_user(username)

        records = await self.store.get_preferences(username)
        if not records:
            prefs = {PREFERENCES_KEY: {}} if wrapped else {}
            return dumps(prefs)

        # At most one record per user is enforced by the schema; take the
        # last if that ever fails to hold.
        return dumps(convert(records[-1], wrapped))

    async def write(self, username: str, body: str | bytes, method: str = "PUT") -> bytes:
        """
        Store the request body as the user's preferences.

        PUT and POST behave identically: insert when nothing is stored,
        update otherwise. Returns the wrapped document.
        """
        await self._require_user(username)

        prefs = parse_preferences(body)
        serialized = dumps(prefs).decode("utf-8")

        if await self.store.has_preferences(username):
            logger.info(f"{method}: updating preferences for {username}")
            await self.store.update_preferences(username, serialized)
        else:
            logger.info(f"{method}: inserting preferences for {username}")
            await self.store.insert_preferences(username, serialized)

        return dumps({PREFERENCES_KEY: prefs})

    async def remove(self, username: str) -> None:
        """Delete the user's preferences. Deleting nothing succeeds."""
        await self._require_user(username)

        logger.info(f"Deleting preferences for {username}")
        await self.store.delete_preferences(username)
