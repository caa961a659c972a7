from __future__ import annotations

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import Reference, ReferenceCategory


class ReferenceService(ResourceService[Reference]):
    path = "/references"
    entity = Reference

    async def get_by_category_id(self, category_id: int) -> list[Reference]:
        return await self._get_list(f"/reference-categories/{category_id}/references")

    async def get_by_module_id(self, module_id: int) -> list[Reference]:
        return await self._get_list(f"/modules/{module_id}/references")


class ReferenceCategoryService(ResourceService[ReferenceCategory]):
    path = "/reference-categories"
    entity = ReferenceCategory

    async def get_by_module_id(self, module_id: int) -> list[ReferenceCategory]:
        return await self._get_list(f"/modules/{module_id}/categories")
