"""Monthly electricity bill calculator web routes."""

from decimal import Decimal, InvalidOperation

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.core.exceptions import ApiError, ApiUnavailable, InvalidInput
from roombill.schemas.electric import AllocationRequest, AllocationResult
from roombill.services.billing import calculate_bill
from roombill.services.laundry import current_month
from roombill.services.readings import calculator_inputs
from roombill.web.template_config import templates

router = APIRouter()


def _parse_amount(raw: str) -> Decimal | None:
    """Read a number typed into the form; blank means not given."""
    if not raw.strip():
        return None
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        value = None
    if value is None or not value.is_finite():
        raise InvalidInput(f"{raw!r} is not a number.")
    return value


async def _render(
    request: Request,
    client: RemoteApiClient,
    total_money: str,
    total_electric: str,
    month: str,
    calculate: bool,
) -> HTMLResponse:
    error = None
    result: AllocationResult | None = None
    rooms = []
    electrics = []

    try:
        rooms = await client.list_rooms()
        records = await client.list_electric_records()
        electrics = calculator_inputs(rooms, records)
    except (ApiError, ApiUnavailable) as e:
        error = f"Could not load room data: {e}"

    if calculate and error is None:
        try:
            money = _parse_amount(total_money)
            electric = _parse_amount(total_electric)
        except InvalidInput as e:
            error = str(e)
        else:
            if not money or not electric or not electrics:
                error = "Enter the total bill and total kWh, and make sure rooms have readings."
        if error is None:
            try:
                allocation_request = AllocationRequest(
                    total_money=money,
                    total_electric=electric,
                    month=month,
                    electrics=electrics,
                )
                result = await calculate_bill(client, allocation_request)
            except ValidationError:
                error = "Month must be written as YYYY-MM."
            except InvalidInput as e:
                error = str(e)
            except (ApiError, ApiUnavailable) as e:
                error = f"Calculation failed: {e}"

    return templates.TemplateResponse(
        request,
        "calculator/index.html",
        {
            "active_tab": "calculate",
            "room_names": {r.id: r.room_name for r in rooms},
            "has_rooms": bool(rooms),
            "electrics": electrics,
            "total_money": total_money,
            "total_electric": total_electric,
            "month": month,
            "result": result,
            "error": error,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def calculator_page(
    request: Request,
    client: RemoteApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Display the calculator seeded with each room's latest readings."""
    return await _render(request, client, "", "", current_month(), calculate=False)


@router.post("/", response_class=HTMLResponse)
async def calculator_submit(
    request: Request,
    total_money: str = Form(""),
    total_electric: str = Form(""),
    month: str = Form(""),
    client: RemoteApiClient = Depends(get_api_client),
) -> HTMLResponse:
    """Split the bill across rooms and show the breakdown."""
    return await _render(
        request, client, total_money, total_electric, month or current_month(), calculate=True
    )
