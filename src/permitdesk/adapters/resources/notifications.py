"""Notificaciones: recordatorios de vencimiento de permisos del usuario."""

from __future__ import annotations

from typing import Any, Sequence

from permitdesk.adapters.resources.base import QueryParams, ResourceService, build_query, with_query
from permitdesk.core.domain.envelope import ApiResponse, decode_envelope, unwrap_data
from permitdesk.core.domain.models import Notification, UnreadCount


class NotificationService(ResourceService[Notification]):
    path = "/notifications"
    entity = Notification

    async def get_all(self, params: QueryParams = None, *, page: int = 1, limit: int = 10) -> ApiResponse[list[Any]]:
        # Sin ningún filtro definido se pide siempre una página acotada.
        if not build_query(params):
            params = {"page": page, "limit": limit}
        payload = await self._client.get(with_query(self.path, params))
        return decode_envelope(payload, list[Notification])

    async def get_unread(self) -> list[Notification]:
        return await self._get_list(f"{self.path}/unread")

    async def get_unread_count(self) -> int:
        payload = await self._client.get(f"{self.path}/unread/count")
        return unwrap_data(payload, UnreadCount).count

    async def mark_as_read(self, notification_ids: Sequence[int]) -> Any:
        return await self._action(f"{self.path}/read", {"notification_ids": list(notification_ids)})

    async def mark_all_as_read(self) -> Any:
        return await self._action(f"{self.path}/read/all")
