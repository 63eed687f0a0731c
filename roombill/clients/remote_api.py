"""Client for the remote billing API that owns rooms, readings and laundry events."""

import logging
from typing import Any

import httpx
from fastapi import Request
from pydantic import TypeAdapter

from roombill.core.exceptions import ApiError, ApiUnavailable
from roombill.schemas.electric import (
    AllocationRequest,
    AllocationResult,
    ElectricRecord,
    ElectricSaveItem,
)
from roombill.schemas.laundry import LaundryStats
from roombill.schemas.room import Room

logger = logging.getLogger(__name__)

OK = "ok"

_rooms_adapter = TypeAdapter(list[Room])
_records_adapter = TypeAdapter(list[ElectricRecord])
_laundry_adapter = TypeAdapter(list[LaundryStats])


class RemoteApiClient:
    """Async wrapper around the remote API endpoints."""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    @classmethod
    def create(
        cls,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "RemoteApiClient":
        """Build a client with its own connection pool."""
        http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )
        return cls(http)

    async def aclose(self) -> None:
        await self.http.aclose()

    async def __aenter__(self) -> "RemoteApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded body.

        JSON bodies are decoded; any other successful body is reported as "ok".
        """
        try:
            response = await self.http.request(method, endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Remote API %s %s failed: %s", method, endpoint, e)
            raise ApiUnavailable(f"Network error: {e}") from e

        if response.is_error:
            logger.warning(
                "Remote API %s %s returned %s", method, endpoint, response.status_code
            )
            raise ApiError(response.status_code, f"HTTP error! status: {response.status_code}")

        if "application/json" in response.headers.get("content-type", ""):
            return response.json()
        return OK

    async def list_rooms(self) -> list[Room]:
        """Get the room directory."""
        data = await self.request("GET", "/api/room/list")
        return _rooms_adapter.validate_python(data)

    async def list_electric_records(self) -> list[ElectricRecord]:
        """Get the full meter reading history, without deleted records."""
        data = await self.request("GET", "/api/electric/list")
        return [r for r in _records_adapter.validate_python(data) if not r.deleted]

    async def save_electric(self, items: list[ElectricSaveItem]) -> None:
        """Submit new end readings; each one starts a new record on the remote side."""
        payload = [item.model_dump(mode="json", by_alias=True) for item in items]
        result = await self.request("POST", "/api/electric/save", json=payload)
        if result != OK:
            raise ApiError(200, f"Unexpected save response: {result!r}")
        logger.info("Saved %d electricity readings", len(items))

    async def calculate_electric(self, request: AllocationRequest) -> AllocationResult:
        """Run the allocation on the remote API."""
        payload = request.model_dump(mode="json", by_alias=True)
        data = await self.request("POST", "/api/electric/calculate", json=payload)
        return AllocationResult.model_validate(data)

    async def laundry_stats(self, month: str) -> list[LaundryStats]:
        """Get per-room laundry usage for a YYYY-MM month."""
        data = await self.request("GET", "/api/laundry/stats", params={"month": month})
        return _laundry_adapter.validate_python(data)

    async def save_laundry(self, room_id: int) -> None:
        """Record one laundry machine use for a room."""
        await self.request("GET", "/api/laundry/save", params={"roomId": room_id})
        logger.info("Recorded laundry use for room %s", room_id)


def get_api_client(request: Request) -> RemoteApiClient:
    """Dependency for getting the client opened by the application lifespan."""
    return request.app.state.api_client
