"""End-to-end flows against the in-memory fake backend."""

import pytest

from permitdesk.core.domain.requests import DomainRequest, LoginRequest, RoleRequest
from permitdesk.core.errors import ApiRequestError
from permitdesk.core.services.auth_gate import AuthGate, GateState


class Navigator:
    def __init__(self):
        self.target = None

    def replace(self, target):
        self.target = target


@pytest.mark.asyncio
async def test_login_create_then_fetch(make_api, empty_store, fake_backend):
    api = make_api(fake_backend, empty_store)

    await api.auth.login(LoginRequest(username="admin", password="secret"))
    created = await api.domains.create(DomainRequest(code="OPS", name="Operations", description="Field ops"))
    fetched = await api.domains.get_by_id(created.id)

    assert fetched == created
    assert fetched.description == "Field ops"


@pytest.mark.asyncio
async def test_paging_through_a_list(make_api, signed_in_store, fake_backend):
    api = make_api(fake_backend, signed_in_store)
    for i in range(3):
        await api.roles.create(RoleRequest(code=f"R{i}", name=f"Role {i}"))

    first = await api.roles.get_all({"page": 1, "limit": 2})
    second = await api.roles.get_all({"page": 2, "limit": 2})

    assert [r.code for r in first.data] == ["R0", "R1"]
    assert [r.code for r in second.data] == ["R2"]
    assert first.meta.total == 3


@pytest.mark.asyncio
async def test_not_found_carries_the_backend_message(make_api, signed_in_store, fake_backend):
    api = make_api(fake_backend, signed_in_store)

    with pytest.raises(ApiRequestError) as exc_info:
        await api.permits.get_by_id(404)

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "permits 404 not found"
    assert signed_in_store.is_authenticated


@pytest.mark.asyncio
async def test_stale_token_signs_out_and_gate_redirects(make_api, signed_in_store, fake_backend):
    api = make_api(fake_backend, signed_in_store)
    fake_backend.valid_tokens.clear()

    with pytest.raises(ApiRequestError) as exc_info:
        await api.tasks.get_all()

    assert exc_info.value.is_unauthorized
    assert signed_in_store.load() is None

    navigator = Navigator()
    result = AuthGate(signed_in_store, navigator).evaluate(True, "/tasks")
    assert result.state is GateState.REDIRECTING
    assert navigator.target == "/signin?from=/tasks"


@pytest.mark.asyncio
async def test_login_keeps_default_domain(make_api, empty_store, fake_backend):
    api = make_api(fake_backend, empty_store)

    await api.auth.login(LoginRequest(username="admin", password="secret"))

    assert empty_store.domain.code == "HQ"


@pytest.mark.asyncio
async def test_filter_without_matches_returns_an_empty_page(make_api, signed_in_store, fake_backend):
    api = make_api(fake_backend, signed_in_store)
    await api.domains.create(DomainRequest(code="OPS", name="Operations"))

    result = await api.domains.get_all({"name": "nomatch"})

    assert result.data == []
    assert result.meta.total == 0
