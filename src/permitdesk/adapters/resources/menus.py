from __future__ import annotations

from typing import Any, Sequence

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import Menu


class MenuService(ResourceService[Menu]):
    path = "/menus"
    entity = Menu

    async def get_user_menus(self) -> list[Menu]:
        """Árbol de menús visible para el rol del usuario autenticado."""

        return await self._get_list(f"{self.path}/user")

    async def assign_roles(self, menu_id: int, role_ids: Sequence[int]) -> Any:
        return await self._action(f"{self._item_path(menu_id)}/roles", {"role_ids": list(role_ids)})
