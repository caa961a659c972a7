"""Autenticación: login, logout, perfil y cambio de dominio.

Por qué aquí:
- El login es el único punto que escribe credenciales; token, usuario y
  dominio se guardan en el store en un solo paso.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from permitdesk.adapters.http_client import ApiClient
from permitdesk.core.domain.credentials import CredentialRecord
from permitdesk.core.domain.envelope import unwrap_data
from permitdesk.core.domain.models import Domain, LoginResponse, SwitchDomainResponse, User
from permitdesk.core.domain.requests import LoginRequest, SwitchDomainRequest

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, client: ApiClient) -> None:
        self._client = client
        self._store = client.store

    async def login(self, credentials: LoginRequest | Mapping[str, Any]) -> LoginResponse:
        payload = await self._client.post("/auth/login", credentials, False)
        login = unwrap_data(payload, LoginResponse)
        self._store.commit(
            CredentialRecord(
                token=login.token,
                user=login.user,
                domain=login.current_domain or login.default_domain,
            )
        )
        logger.info("Signed in as %s", login.user.username)
        return login

    async def logout(self) -> None:
        self._store.clear()

    async def get_profile(self) -> User:
        payload = await self._client.get("/auth/profile")
        return unwrap_data(payload, User)

    async def update_profile(self, data: BaseModel | Mapping[str, Any]) -> User:
        payload = await self._client.put("/auth/profile", data)
        return unwrap_data(payload, User)

    async def switch_domain(self, domain_id: int) -> SwitchDomainResponse:
        """Pide un token para otro dominio y lo deja como actual."""

        payload = await self._client.post("/auth/switch-domain", SwitchDomainRequest(domain_id=domain_id))
        switched = unwrap_data(payload, SwitchDomainResponse)
        self._store.commit(
            CredentialRecord(token=switched.token, user=self._store.user, domain=switched.current_domain)
        )
        return switched

    def get_stored_user(self) -> User | None:
        return self._store.user

    def get_stored_domain(self) -> Domain | None:
        return self._store.domain

    def is_authenticated(self) -> bool:
        return self._store.is_authenticated

    def has_role(self, allowed_roles: Iterable[str]) -> bool:
        user = self._store.user
        if user is None or user.role is None:
            return False
        return user.role.name in set(allowed_roles)
