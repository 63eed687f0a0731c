"""Meter reading input web routes."""

from decimal import Decimal, InvalidOperation

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.core.exceptions import ApiError, ApiUnavailable, InvalidInput
from roombill.services.readings import (
    Drafts,
    add_draft,
    changed_drafts,
    drafts_from_session,
    drafts_to_session,
    remove_draft,
    save_items,
    update_draft_end,
)
from roombill.web.dependencies import add_flash_message
from roombill.web.template_config import templates

router = APIRouter()

SESSION_KEY = "reading_drafts"


def _apply_form_ends(drafts: Drafts, form_data) -> Drafts:
    """Copy end values typed into the form onto the drafts."""
    for draft in drafts:
        raw = form_data.get(f"end_{draft.room_id}")
        if raw is None or not str(raw).strip():
            continue
        try:
            value = Decimal(str(raw))
        except InvalidOperation:
            continue
        if not value.is_finite():
            continue
        drafts = update_draft_end(drafts, draft.room_id, value)
    return drafts


def _action_room_id(action: str) -> int:
    """Room id carried by a "remove:<room id>" action."""
    try:
        return int(action.split(":", 1)[1])
    except ValueError:
        raise InvalidInput(f"Unknown room in action {action!r}") from None


@router.get("/", response_class=HTMLResponse, response_model=None)
async def reading_input_page(
    request: Request,
    client: RemoteApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Display the reading input form."""
    drafts = drafts_from_session(request.session.get(SESSION_KEY))
    rooms = []
    error = None
    try:
        rooms = await client.list_rooms()
    except (ApiError, ApiUnavailable) as e:
        error = str(e)

    return templates.TemplateResponse(
        request,
        "readings/input.html",
        {
            "active_tab": "input",
            "drafts": drafts,
            "rooms": rooms,
            "room_names": {r.id: r.room_name for r in rooms},
            "error": error,
        },
    )


@router.post("/", response_model=None)
async def reading_input_submit(
    request: Request,
    client: RemoteApiClient = Depends(get_api_client),
) -> RedirectResponse:
    """Apply a form action (add, remove:<room id>, save) to the drafts."""
    form_data = await request.form()
    action = str(form_data.get("action", ""))
    drafts = _apply_form_ends(drafts_from_session(request.session.get(SESSION_KEY)), form_data)

    try:
        if action == "add":
            rooms = await client.list_rooms()
            records = await client.list_electric_records()
            drafts = add_draft(drafts, rooms, records)
        elif action.startswith("remove:"):
            drafts = remove_draft(drafts, _action_room_id(action))
        elif action == "save":
            drafts = await _save(request, client, drafts)
    except InvalidInput as e:
        add_flash_message(request, str(e), "info")
    except (ApiError, ApiUnavailable) as e:
        add_flash_message(request, f"Could not reach the billing service: {e}", "error")

    request.session[SESSION_KEY] = drafts_to_session(drafts)
    return RedirectResponse("/readings/", status_code=303)


async def _save(request: Request, client: RemoteApiClient, drafts: Drafts) -> Drafts:
    """Submit changed drafts and return what is left in the form."""
    if not drafts:
        raise InvalidInput("Add at least one reading first")

    records = await client.list_electric_records()
    changed = changed_drafts(drafts, records)
    if not changed:
        raise InvalidInput("Nothing has changed since the last saved readings")

    await client.save_electric(save_items(changed))
    add_flash_message(request, f"Saved {len(changed)} readings", "success")
    return ()
