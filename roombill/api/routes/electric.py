"""Electricity bill allocation routes."""

from fastapi import APIRouter, Depends, HTTPException, status

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.core.exceptions import ApiError, ApiUnavailable, InvalidInput
from roombill.schemas.electric import AllocationRequest, AllocationResult
from roombill.services.billing import calculate_bill

router = APIRouter(prefix="/electric", tags=["electric"])


@router.post("/calculate", response_model=AllocationResult)
async def calculate(
    data: AllocationRequest,
    client: RemoteApiClient = Depends(get_api_client),
) -> AllocationResult:
    """Split a monthly electricity bill across rooms.

    The calculation works as follows:
    1. Price per kWh is total money divided by total kWh
    2. Each room's own consumption is its end reading minus its start reading
    3. Whatever the rooms did not consume is the shared pool (laundry, common areas)
    4. The pool is split across rooms by the configured share policy
    5. Each room pays (own consumption + pool share) * price per kWh
    """
    try:
        return await calculate_bill(client, data)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (ApiError, ApiUnavailable) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Billing service error: {e}",
        ) from e
