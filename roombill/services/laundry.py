"""Laundry usage summaries."""

from datetime import date

from roombill.schemas.laundry import LaundryStats
from roombill.schemas.room import Room


def current_month(today: date | None = None) -> str:
    """Return today's month as YYYY-MM."""
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


def month_options(month: str) -> list[str]:
    """List the twelve YYYY-MM months of the year containing ``month``."""
    year = month.split("-")[0]
    return [f"{year}-{m:02d}" for m in range(1, 13)]


def total_loads(stats: list[LaundryStats]) -> int:
    """Total machine uses across all rooms."""
    return sum(s.count for s in stats)


def average_loads(stats: list[LaundryStats]) -> float:
    """Average machine uses per room that appears in the stats."""
    if not stats:
        return 0.0
    return round(total_loads(stats) / len(stats), 1)


def sorted_stats(stats: list[LaundryStats]) -> list[LaundryStats]:
    """Return stats with each room's events in chronological order."""
    return [
        s.model_copy(update={"detail_time": sorted(s.detail_time, key=lambda r: r.created_at)})
        for s in stats
    ]


def rooms_without_laundry(rooms: list[Room], stats: list[LaundryStats]) -> list[Room]:
    """Rooms that have no entry in the month's stats."""
    seen = {s.room_id for s in stats}
    return [r for r in rooms if r.id not in seen]
