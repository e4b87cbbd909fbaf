"""
Preferences router.

Endpoints:
- GET    /{username} - Get the user's preferences (flat form)
- PUT    /{username} - Insert or replace the user's preferences
- POST   /{username} - Same as PUT
- DELETE /{username} - Delete the user's preferences
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import get_preferences_service
from services.preferences_service import PreferencesService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["preferences"])

JSON_MEDIA_TYPE = "application/json"


@router.get("/{username}")
async def get_preferences(
    username: str,
    service: PreferencesService = Depends(get_preferences_service),
) -> Response:
    """Return the stored preferences, or {} when nothing is stored."""
    body = await service.fetch(username, wrapped=False)
    return Response(content=body, media_type=JSON_MEDIA_TYPE)


@router.api_route("/{username}", methods=["PUT", "POST"])
async def put_preferences(
    username: str,
    request: Request,
    service: PreferencesService = Depends(get_preferences_service),
) -> Response:
    """
    Store the request body as the user's preferences.

    The body may be the preferences object itself or the same object under
    a "preferences" key. Responds with the wrapped form.
    """
    raw = await request.body()
    body = await service.write(username, raw, method=request.method)
    return Response(content=body, media_type=JSON_MEDIA_TYPE)


@router.delete("/{username}")
async def delete_preferences(
    username: str,
    service: PreferencesService = Depends(get_preferences_service),
) -> Response:
    await service.remove(username)
    return Response(status_code=200)
