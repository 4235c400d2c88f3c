"""Test doubles for App Store Connect SDK tests."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

BASE_URL = "https://api.test.local/v1"
ISSUER = "57246542-96fe-1a63-e053-0824d011072a"
KEY_ID = "2X9R4HXF34"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class CountingSigner:
    """Signer returning ``token-<n>`` and recording every call."""

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.calls: list[tuple[dict[str, Any], dict[str, Any]]] = []
        self.fail_with = fail_with
        self.on_call: Callable[[], None] | None = None
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return len(self.calls)

    def __call__(
        self,
        header: dict[str, Any],
        claims: dict[str, Any],
        private_key: bytes,
    ) -> str:
        if self.on_call is not None:
            self.on_call()
        with self._lock:
            self.calls.append((header, claims))
            n = len(self.calls)
        if self.fail_with is not None:
            raise self.fail_with
        return f"token-{n}"


class FakeApi:
    """In-memory App Store Connect API.

    Routes are keyed by ``(method, path)``; unknown routes answer 404 with
    an error document. Every request is recorded.
    """

    base_url = BASE_URL

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        body: Any = None,
        text: str | None = None,
    ) -> None:
        """Serve a fixed response."""

        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status, text=text)
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        self._routes[(method, self._path(path))] = handler

    def add_handler(
        self,
        method: str,
        path: str,
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> None:
        self._routes[(method, self._path(path))] = handler

    def _path(self, path: str) -> str:
        return httpx.URL(f"{BASE_URL}{path}").path

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(
                404,
                json=self.error_document("404", "NOT_FOUND", "Not found", request.url.path),
            )
        return handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def sync_client(self) -> httpx.Client:
        return httpx.Client(transport=self.transport())

    def async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport())

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    # Payload builders

    @staticmethod
    def device(device_id: str, name: str | None = None) -> dict[str, Any]:
        return {
            "type": "devices",
            "id": device_id,
            "attributes": {
                "name": name or f"Device {device_id}",
                "platform": "IOS",
                "udid": f"udid-{device_id}",
                "deviceClass": "IPHONE",
                "status": "ENABLED",
                "model": "iPhone 15",
                "addedDate": "2024-05-01T10:00:00Z",
            },
            "links": {"self": f"{BASE_URL}/devices/{device_id}"},
        }

    @staticmethod
    def bundle_id(bundle_id: str, identifier: str = "com.example.app") -> dict[str, Any]:
        return {
            "type": "bundleIds",
            "id": bundle_id,
            "attributes": {
                "name": "Example",
                "identifier": identifier,
                "platform": "IOS",
                "seedId": "TEAM123456",
            },
            "links": {"self": f"{BASE_URL}/bundleIds/{bundle_id}"},
        }

    @staticmethod
    def user(user_id: str) -> dict[str, Any]:
        return {
            "type": "users",
            "id": user_id,
            "attributes": {
                "username": f"{user_id}@example.com",
                "firstName": "Ada",
                "lastName": "Lovelace",
                "roles": ["DEVELOPER"],
                "allAppsVisible": False,
                "provisioningAllowed": True,
            },
            "relationships": {
                "visibleApps": {
                    "links": {
                        "self": f"{BASE_URL}/users/{user_id}/relationships/visibleApps",
                        "related": f"{BASE_URL}/users/{user_id}/visibleApps",
                    }
                }
            },
            "links": {"self": f"{BASE_URL}/users/{user_id}"},
        }

    @staticmethod
    def page(
        data: list[dict[str, Any]],
        *,
        self_url: str,
        next_url: str | None = None,
        total: int | None = None,
        limit: int = 2,
    ) -> dict[str, Any]:
        links: dict[str, Any] = {"self": self_url}
        if next_url is not None:
            links["next"] = next_url
        return {
            "data": data,
            "links": links,
            "meta": {"paging": {"total": len(data) if total is None else total, "limit": limit}},
        }

    @staticmethod
    def entity(data: dict[str, Any]) -> dict[str, Any]:
        return {"data": data, "links": {"self": data["links"]["self"]}}

    @staticmethod
    def error_document(status: str, code: str, title: str, detail: str) -> dict[str, Any]:
        return {"errors": [{"status": status, "code": code, "title": title, "detail": detail}]}

    def serve_device_pages(self, pages: list[list[str]]) -> None:
        """Serve ``/devices`` as consecutive pages selected by a ``cursor`` param."""
        total = sum(len(ids) for ids in pages)

        def handler(request: httpx.Request) -> httpx.Response:
            index = int(request.url.params.get("cursor", "0"))
            next_url = (
                f"{BASE_URL}/devices?cursor={index + 1}&limit=2"
                if index + 1 < len(pages)
                else None
            )
            body = self.page(
                [self.device(i) for i in pages[index]],
                self_url=str(request.url),
                next_url=next_url,
                total=total,
            )
            return httpx.Response(200, json=body)

        self.add_handler("GET", "/devices", handler)


def json_body(request: httpx.Request) -> Any:
    """Decode the JSON body of a recorded request."""
    return json.loads(request.content)


