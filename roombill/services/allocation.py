"""Monthly electricity cost allocation across rooms."""

import logging
from collections.abc import Mapping
from decimal import Decimal

from roombill.core.exceptions import InvalidInput
from roombill.schemas.electric import AllocationRequest, AllocationResult, RoomAllocation
from roombill.services.share_policy import EqualSharePolicy, SharePolicy

logger = logging.getLogger(__name__)


def room_display_name(room_names: Mapping[int, str], room_id: int) -> str:
    """Resolve a room name, falling back to a label built from the id."""
    return room_names.get(room_id) or f"Room {room_id}"


def validate_request(request: AllocationRequest) -> list[Decimal]:
    """Check an allocation request and return each room's own consumption.

    Raises InvalidInput when a bill total is missing or not positive, the
    room list is empty, a room appears twice, a room's end reading is below
    its start, or the rooms together consumed more than the metered total.
    """
    if request.total_money is None or request.total_money <= 0:
        raise InvalidInput("Total money must be greater than zero")
    if request.total_electric is None or request.total_electric <= 0:
        raise InvalidInput("Total electricity must be greater than zero")
    if not request.electrics:
        raise InvalidInput("At least one room reading is required")

    seen: set[int] = set()
    own_consumptions: list[Decimal] = []
    for entry in request.electrics:
        if entry.room_id in seen:
            raise InvalidInput(f"Room {entry.room_id} appears more than once")
        seen.add(entry.room_id)

        consumption = entry.own_consumption
        if consumption < 0:
            raise InvalidInput(
                f"Room {entry.room_id} end reading ({entry.end_electric}) "
                f"is below its start reading ({entry.start_electric})"
            )
        own_consumptions.append(consumption)

    total_own = sum(own_consumptions, Decimal("0"))
    if total_own > request.total_electric:
        raise InvalidInput(
            f"Rooms consumed {total_own} kWh, more than the metered total "
            f"of {request.total_electric} kWh"
        )
    return own_consumptions


def allocate(
    request: AllocationRequest,
    room_names: Mapping[int, str],
    policy: SharePolicy | None = None,
) -> AllocationResult:
    """Split a monthly electricity bill across rooms.

    price_per_unit = total_money / total_electric
    shared pool    = total_electric - sum(own consumption)
    room total     = own consumption + the room's share of the pool
    room cost      = room total * price_per_unit

    Rooms are returned in request order.
    """
    policy = policy or EqualSharePolicy()
    try:
        own_consumptions = validate_request(request)
    except InvalidInput as e:
        logger.info("Rejected allocation for %s: %s", request.month, e)
        raise

    price_per_unit = request.total_money / request.total_electric
    share_electric = request.total_electric - sum(own_consumptions, Decimal("0"))
    shares = policy.split(share_electric, own_consumptions)

    details: list[RoomAllocation] = []
    for entry, own, share in zip(request.electrics, own_consumptions, shares):
        total_used = own + share
        details.append(
            RoomAllocation(
                room_id=entry.room_id,
                room_name=room_display_name(room_names, entry.room_id),
                shared_electric=share,
                total_electric_used=total_used,
                total_money=total_used * price_per_unit,
            )
        )

    return AllocationResult(
        price_per_unit=price_per_unit,
        share_electric=share_electric,
        share_money=share_electric * price_per_unit,
        electric_details=details,
    )
