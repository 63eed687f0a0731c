"""Laundry statistics web routes."""

import re

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.core.exceptions import ApiError, ApiUnavailable
from roombill.schemas.electric import MONTH_PATTERN
from roombill.services.laundry import (
    average_loads,
    current_month,
    month_options,
    rooms_without_laundry,
    sorted_stats,
    total_loads,
)
from roombill.web.dependencies import add_flash_message
from roombill.web.template_config import templates

router = APIRouter()


def _resolve_month(month: str | None) -> str:
    if month and re.match(MONTH_PATTERN, month):
        return month
    return current_month()


@router.get("/", response_class=HTMLResponse)
async def laundry_stats(
    request: Request,
    month: str | None = None,
    client: RemoteApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Display laundry usage per room for a month."""
    month = _resolve_month(month)
    rooms = []
    stats = []
    error = None
    try:
        rooms = await client.list_rooms()
        stats = sorted_stats(await client.laundry_stats(month))
    except (ApiError, ApiUnavailable) as e:
        error = f"Could not load laundry data: {e}"

    return templates.TemplateResponse(
        request,
        "laundry/index.html",
        {
            "active_tab": "laundry",
            "month": month,
            "month_options": month_options(month),
            "stats": stats,
            "idle_rooms": rooms_without_laundry(rooms, stats),
            "total_loads": total_loads(stats),
            "average_loads": average_loads(stats),
            "rooms_count": len(rooms),
            "error": error,
        },
    )


@router.post("/{room_id}", response_model=None)
async def record_laundry(
    request: Request,
    room_id: int,
    month: str = Form(""),
    client: RemoteApiClient = Depends(get_api_client),
) -> RedirectResponse:
    """Record one laundry machine use for a room."""
    month = _resolve_month(month)
    try:
        await client.save_laundry(room_id)
    except (ApiError, ApiUnavailable) as e:
        add_flash_message(request, f"Could not record laundry: {e}", "error")
    else:
        add_flash_message(request, f"Recorded a laundry load for room {room_id}", "success")
    return RedirectResponse(f"/laundry/?month={month}", status_code=303)
