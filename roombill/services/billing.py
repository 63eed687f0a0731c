"""Monthly bill calculation, run in-process or on the remote API."""

from roombill.clients.remote_api import RemoteApiClient
from roombill.core.config import settings
from roombill.schemas.electric import AllocationRequest, AllocationResult
from roombill.services.allocation import allocate
from roombill.services.share_policy import get_share_policy


async def calculate_bill(
    client: RemoteApiClient,
    request: AllocationRequest,
    backend: str | None = None,
) -> AllocationResult:
    """Compute the room split for a monthly bill.

    The local backend resolves room names from the remote room directory and
    applies the configured share policy. Raises InvalidInput for impossible
    requests, ApiError or ApiUnavailable when the remote API fails.
    """
    backend = backend or settings.ALLOCATION_BACKEND
    if backend == "remote":
        return await client.calculate_electric(request)

    rooms = await client.list_rooms()
    room_names = {room.id: room.room_name for room in rooms}
    return allocate(request, room_names, get_share_policy(settings.SHARE_POLICY))
