"""Usuarios: CRUD, cambio de contraseña y pertenencia a dominios."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import User


class UserService(ResourceService[User]):
    path = "/users"
    entity = User

    async def change_password(self, user_id: int, data: BaseModel | Mapping[str, Any]) -> Any:
        return await self._action(f"{self._item_path(user_id)}/change-password", data)

    # Pertenencia a dominios ----------------------------------------------------

    async def add_domain(self, user_id: int, domain_id: int, *, is_default: bool = False) -> Any:
        return await self._action(
            f"{self._item_path(user_id)}/domains",
            {"domain_id": domain_id, "is_default": is_default},
        )

    async def remove_domain(self, user_id: int, domain_id: int) -> Any:
        return await self._action(f"{self._item_path(user_id)}/domains/{domain_id}", method="DELETE")

    async def set_default_domain(self, user_id: int, domain_id: int) -> Any:
        return await self._action(
            f"{self._item_path(user_id)}/domains/{domain_id}/set-default",
            {},
            method="PUT",
        )

    # Pertenencia a dominio + rol -----------------------------------------------

    async def add_domain_role(self, user_id: int, domain_id: int, role_id: int, *, is_default: bool = False) -> Any:
        return await self._action(
            f"{self._item_path(user_id)}/domain-roles",
            {"domain_id": domain_id, "role_id": role_id, "is_default": is_default},
        )

    async def remove_domain_role(self, user_id: int, domain_id: int, role_id: int) -> Any:
        return await self._action(
            f"{self._item_path(user_id)}/domain-roles/{domain_id}/{role_id}",
            method="DELETE",
        )

    async def set_default_domain_role(self, user_id: int, domain_id: int, role_id: int) -> Any:
        return await self._action(
            f"{self._item_path(user_id)}/domain-roles/{domain_id}/{role_id}/set-default",
            {},
            method="PUT",
        )
