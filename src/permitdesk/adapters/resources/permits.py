"""Permisos: CRUD más búsqueda y subida/descarga de documentos."""

from __future__ import annotations

from typing import IO, Any

from permitdesk.adapters.resources.base import QueryParams, ResourceService, with_query
from permitdesk.core.domain.envelope import ApiResponse, decode_envelope, unwrap_data
from permitdesk.core.domain.models import Permit


class PermitService(ResourceService[Permit]):
    path = "/permits"
    entity = Permit

    async def search(self, params: QueryParams = None) -> ApiResponse[list[Any]]:
        payload = await self._client.get(with_query(f"{self.path}/search", params))
        return decode_envelope(payload, list[Permit])

    async def upload_document(
        self,
        permit_id: int,
        filename: str,
        content: bytes | IO[bytes],
        content_type: str = "application/octet-stream",
    ) -> Any:
        payload = await self._client.post(
            f"{self._item_path(permit_id)}/upload",
            files={"file": (filename, content, content_type)},
        )
        return unwrap_data(payload, Any, allow_none=True)

    async def download_document(self, permit_id: int) -> bytes:
        return await self._client.get_bytes(f"{self._item_path(permit_id)}/download")

    async def preview_document(self, permit_id: int) -> bytes:
        return await self._client.get_bytes(f"{self._item_path(permit_id)}/preview")
