"""Home page web routes: room overview and Drive upload."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.core.config import settings
from roombill.core.exceptions import ApiError, ApiUnavailable
from roombill.services.readings import latest_records, records_for_room
from roombill.web.template_config import templates

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    client: RemoteApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Room list with each room's latest reading."""
    error = None
    room_summaries = []
    try:
        rooms = await client.list_rooms()
        records = await client.list_electric_records()
    except (ApiError, ApiUnavailable) as e:
        error = str(e)
    else:
        latest = latest_records(records)
        for room in rooms:
            room_summaries.append(
                {
                    "room": room,
                    "latest": latest.get(room.id),
                    "records_count": len(records_for_room(records, room.id)),
                }
            )

    return templates.TemplateResponse(
        request,
        "home/index.html",
        {
            "active_tab": "home",
            "room_summaries": room_summaries,
            "error": error,
        },
    )


@router.get("/upload", response_model=None)
async def upload_to_drive() -> RedirectResponse:
    """Hand over to the remote API's Google Drive OAuth flow."""
    logger.info("Redirecting to Drive upload at %s", settings.google_auth_url)
    return RedirectResponse(settings.google_auth_url, status_code=303)
