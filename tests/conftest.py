"""Shared fixtures: an in-memory stand-in for the remote billing API."""

import json
from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from roombill.clients.remote_api import RemoteApiClient, get_api_client
from roombill.main import app

REMOTE_URL = "http://remote.test"


class RemoteStub:
    """Serves the remote API endpoints from plain Python lists."""

    def __init__(self) -> None:
        self.rooms = [
            {"id": 1, "roomName": "Room A"},
            {"id": 2, "roomName": "Room B"},
        ]
        self.records = [
            {
                "id": 10,
                "roomId": 1,
                "startElectric": 50,
                "endElectric": 100,
                "month": "2025-06",
                "createdAt": "2025-06-30T08:00:00",
                "updatedAt": "2025-06-30T08:00:00",
                "deleted": False,
            },
            {
                "id": 11,
                "roomId": 1,
                "startElectric": 100,
                "endElectric": 200,
                "month": "2025-07",
                "createdAt": "2025-07-31T08:00:00",
                "updatedAt": "2025-07-31T09:30:00",
                "deleted": False,
            },
            {
                "id": 12,
                "roomId": 2,
                "startElectric": 50,
                "endElectric": 120,
                "month": "2025-07",
                "createdAt": "2025-07-31T08:05:00",
                "updatedAt": "2025-07-31T08:05:00",
                "deleted": False,
            },
        ]
        self.laundry = [
            {
                "roomId": 1,
                "roomName": "Room A",
                "count": 2,
                "detailTime": [
                    {"id": 7, "roomId": 1, "createdAt": "2025-07-20T19:00:00"},
                    {"id": 3, "roomId": 1, "createdAt": "2025-07-02T08:15:00"},
                ],
            },
        ]
        self.saved: list[list[dict]] = []
        self.laundry_saved: list[int] = []
        self.calculate_requests: list[dict] = []
        self.calculate_response: dict = {}
        self.fail_status: int | None = None
        self.unreachable = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_status is not None:
            return httpx.Response(self.fail_status, text="boom")

        path = request.url.path
        if path == "/api/room/list":
            return httpx.Response(200, json=self.rooms)
        if path == "/api/electric/list":
            return httpx.Response(200, json=self.records)
        if path == "/api/electric/save":
            self.saved.append(json.loads(request.content))
            return httpx.Response(200, text="ok")
        if path == "/api/electric/calculate":
            self.calculate_requests.append(json.loads(request.content))
            return httpx.Response(200, json=self.calculate_response)
        if path == "/api/laundry/stats":
            month = request.url.params["month"]
            return httpx.Response(200, json=self.laundry if month == "2025-07" else [])
        if path == "/api/laundry/save":
            self.laundry_saved.append(int(request.url.params["roomId"]))
            return httpx.Response(200, text="ok")
        return httpx.Response(404)

    def api_client(self) -> RemoteApiClient:
        return RemoteApiClient.create(REMOTE_URL, 5.0, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def remote() -> RemoteStub:
    """Fresh remote API state for each test."""
    return RemoteStub()


@pytest.fixture
def client(remote: RemoteStub) -> Iterator[TestClient]:
    """Create a test client wired to the remote stub."""
    api_client = remote.api_client()
    app.dependency_overrides[get_api_client] = lambda: api_client
    with TestClient(app) as c:
        yield c
        c.portal.call(api_client.aclose)
    app.dependency_overrides.clear()
