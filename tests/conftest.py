"""Shared fixtures: settings, credential stores and a fake backend."""

from __future__ import annotations

import json
from collections import defaultdict
from itertools import count
from typing import Any, Callable
from urllib.parse import parse_qsl

import httpx
import pytest

from permitdesk.adapters.api import PermitDeskApi
from permitdesk.adapters.credential_store import InMemoryCredentialStore
from permitdesk.adapters.http_client import ApiClient
from permitdesk.core.config import AppSettings
from permitdesk.core.domain.credentials import CredentialRecord
from permitdesk.core.domain.models import Domain, Role, User

BASE_URL = "http://api.test"
TOKEN = "tok-123"

Handler = Callable[[httpx.Request], httpx.Response]


def envelope(data: Any, *, message: str = "OK", meta: dict[str, int] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True, "message": message, "data": data}
    if meta is not None:
        body["meta"] = meta
    return body


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, api_url=BASE_URL)


@pytest.fixture
def admin_user() -> User:
    return User(
        id=1,
        role_id=1,
        username="admin",
        email="admin@example.com",
        full_name="Site Admin",
        role=Role(id=1, code="ADM", name="Administrator"),
    )


@pytest.fixture
def head_office() -> Domain:
    return Domain(id=1, code="HQ", name="Head Office")


@pytest.fixture
def signed_in_store(admin_user: User, head_office: Domain) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(CredentialRecord(token=TOKEN, user=admin_user, domain=head_office))


@pytest.fixture
def empty_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


class Recorder:
    """Mock transport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, payload: Any = None, *, content: bytes | None = None) -> None:
        self.status_code = status_code
        self.payload = envelope(None) if payload is None else payload
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client(settings: AppSettings) -> Callable[..., ApiClient]:
    def factory(handler: Handler, store: InMemoryCredentialStore | None = None) -> ApiClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ApiClient(settings, store if store is not None else InMemoryCredentialStore(), client=http)

    return factory


@pytest.fixture
def make_api(settings: AppSettings) -> Callable[..., PermitDeskApi]:
    def factory(handler: Handler, store: InMemoryCredentialStore | None = None) -> PermitDeskApi:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return PermitDeskApi.from_settings(
            settings,
            store=store if store is not None else InMemoryCredentialStore(),
            http_client=http,
        )

    return factory


class FakeBackend:
    """Tiny in-memory stand-in for the permit backend.

    Supports login and generic CRUD on ``/<resource>[/<id>]``. Anything else
    answers 404 with the error envelope. Like the real backend, login returns
    `default_domain` and an empty list comes back as ``"data": null``.
    """

    def __init__(self, user: User) -> None:
        self.user = user
        self.valid_tokens = {TOKEN}
        self.tables: dict[str, dict[int, dict[str, Any]]] = defaultdict(dict)
        self._ids = count(1)
        self._clock = count(1)

    def _error(self, status: int, code: str, message: str) -> httpx.Response:
        return httpx.Response(status, json={"success": False, "error": {"code": code, "message": message}, "trace_id": "t-1"})

    def _stamp(self) -> str:
        return f"2026-01-01T00:00:{next(self._clock):02d}Z"

    def __call__(self, request: httpx.Request) -> httpx.Response:
        parts = [p for p in request.url.path.split("/") if p]

        if parts == ["auth", "login"] and request.method == "POST":
            creds = json_body(request)
            if creds.get("password") != "secret":
                return self._error(401, "INVALID_CREDENTIALS", "invalid username or password")
            return httpx.Response(
                200,
                json=envelope(
                    {
                        "token": TOKEN,
                        "user": self.user.model_dump(mode="json"),
                        "default_domain": {"id": 1, "code": "HQ", "name": "Head Office", "is_active": True},
                    }
                ),
            )

        auth = request.headers.get("Authorization", "")
        if auth.removeprefix("Bearer ") not in self.valid_tokens:
            return self._error(401, "UNAUTHORIZED", "invalid or expired token")

        table = self.tables[parts[0]]

        if len(parts) == 1 and request.method == "GET":
            query = dict(parse_qsl(request.url.query.decode()))
            filters = {k: v for k, v in query.items() if k not in ("page", "limit")}
            rows = [row for row in table.values() if all(str(row.get(k)) == v for k, v in filters.items())]
            page, limit = int(query.get("page", 1)), int(query.get("limit", 10))
            window = rows[(page - 1) * limit : page * limit]
            return httpx.Response(200, json=envelope(window or None, meta={"page": page, "limit": limit, "total": len(rows)}))

        if len(parts) == 1 and request.method == "POST":
            now = self._stamp()
            row = {**json_body(request), "id": next(self._ids), "created_at": now, "updated_at": now}
            table[row["id"]] = row
            return httpx.Response(201, json=envelope(row, message="created"))

        if len(parts) == 2 and parts[1].isdigit():
            row_id = int(parts[1])
            if row_id not in table:
                return self._error(404, "NOT_FOUND", f"{parts[0]} {row_id} not found")
            if request.method == "GET":
                return httpx.Response(200, json=envelope(table[row_id]))
            if request.method == "PUT":
                table[row_id] = {**table[row_id], **json_body(request), "updated_at": self._stamp()}
                return httpx.Response(200, json=envelope(table[row_id]))
            if request.method == "DELETE":
                del table[row_id]
                return httpx.Response(200, json=envelope(None, message="deleted"))

        return self._error(404, "NOT_FOUND", "route not found")


@pytest.fixture
def fake_backend(admin_user: User) -> FakeBackend:
    return FakeBackend(admin_user)
