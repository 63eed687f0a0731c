"""Meter reading helpers for the rooms, input and calculator pages.

Draft lists for the reading input form are immutable tuples. Every update
returns a new tuple (append, replace by room id, filter by room id).
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from roombill.core.exceptions import InvalidInput
from roombill.schemas.electric import ElectricRecord, ElectricSaveItem, RoomElectricInput
from roombill.schemas.room import Room


class ReadingDraft(BaseModel):
    """An unsaved end reading for one room."""

    model_config = ConfigDict(frozen=True)

    room_id: int
    start_electric: Decimal
    end_electric: Decimal
    updated_at: datetime | None = None


Drafts = tuple[ReadingDraft, ...]


def records_for_room(records: Iterable[ElectricRecord], room_id: int) -> list[ElectricRecord]:
    """Get a room's readings, oldest first."""
    return sorted((r for r in records if r.room_id == room_id), key=lambda r: r.created_at)


def latest_records(records: Iterable[ElectricRecord]) -> dict[int, ElectricRecord]:
    """Map each room id to its most recently created reading."""
    latest: dict[int, ElectricRecord] = {}
    for record in records:
        current = latest.get(record.room_id)
        if current is None or record.created_at > current.created_at:
            latest[record.room_id] = record
    return latest


def calculator_inputs(
    rooms: Iterable[Room],
    records: Iterable[ElectricRecord],
) -> list[RoomElectricInput]:
    """Seed the calculator with each room's latest start and end values.

    Rooms without history start at zero.
    """
    latest = latest_records(records)
    inputs = []
    for room in rooms:
        record = latest.get(room.id)
        inputs.append(
            RoomElectricInput(
                room_id=room.id,
                start_electric=record.start_electric if record else Decimal("0"),
                end_electric=record.end_electric if record else Decimal("0"),
            )
        )
    return inputs


def add_draft(
    drafts: Drafts,
    rooms: list[Room],
    records: Iterable[ElectricRecord],
) -> Drafts:
    """Append a draft for the first room that does not have one yet.

    The new draft starts from the room's latest end reading, which is both
    the start of the new period and the default end value.
    """
    if not rooms:
        raise InvalidInput("There are no rooms to add")

    used = {d.room_id for d in drafts}
    room = next((r for r in rooms if r.id not in used), None)
    if room is None:
        raise InvalidInput("All rooms have already been added")

    record = latest_records(records).get(room.id)
    last_end = record.end_electric if record else Decimal("0")
    draft = ReadingDraft(
        room_id=room.id,
        start_electric=last_end,
        end_electric=last_end,
        updated_at=record.updated_at if record else None,
    )
    return (*drafts, draft)


def remove_draft(drafts: Drafts, room_id: int) -> Drafts:
    """Drop the draft for a room."""
    return tuple(d for d in drafts if d.room_id != room_id)


def update_draft_end(drafts: Drafts, room_id: int, end_electric: Decimal) -> Drafts:
    """Replace the end value of a room's draft."""
    return tuple(
        d.model_copy(update={"end_electric": end_electric}) if d.room_id == room_id else d
        for d in drafts
    )


def changed_drafts(drafts: Drafts, records: Iterable[ElectricRecord]) -> Drafts:
    """Keep drafts whose end value differs from the latest recorded end value."""
    latest = latest_records(records)

    def last_end(room_id: int) -> Decimal:
        record = latest.get(room_id)
        return record.end_electric if record else Decimal("0")

    return tuple(d for d in drafts if d.end_electric != last_end(d.room_id))


def save_items(drafts: Drafts) -> list[ElectricSaveItem]:
    """Convert drafts to the remote save payload."""
    return [ElectricSaveItem(room_id=d.room_id, electric=d.end_electric) for d in drafts]


def drafts_to_session(drafts: Drafts) -> list[dict]:
    """Serialize drafts for storage in the session cookie."""
    return [d.model_dump(mode="json") for d in drafts]


def drafts_from_session(data: list[dict] | None) -> Drafts:
    """Restore drafts stored with drafts_to_session."""
    return tuple(ReadingDraft.model_validate(item) for item in data or [])
