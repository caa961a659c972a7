"""Proyectos: CRUD, listados por dominio/usuario y cambios de estado."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.envelope import unwrap_data
from permitdesk.core.domain.models import Project, UserBasic


class ProjectService(ResourceService[Project]):
    path = "/projects"
    entity = Project

    async def get_by_domain_id(self, domain_id: int) -> list[Project]:
        return await self._get_list(f"/domains/{domain_id}/projects")

    async def get_by_user_id(self, user_id: int) -> list[Project]:
        return await self._get_list(f"/users/{user_id}/projects")

    async def get_users(self, project_id: int) -> list[UserBasic]:
        return await self._get_list(f"{self._item_path(project_id)}/users", UserBasic)

    async def change_status(self, project_id: int, data: BaseModel | Mapping[str, Any]) -> Project:
        payload = await self._client.post(f"{self._item_path(project_id)}/change-status", data)
        return unwrap_data(payload, Project)
