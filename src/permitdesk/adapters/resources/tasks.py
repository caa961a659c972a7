"""Tareas: CRUD con adjuntos, solicitudes de aprobación y acciones de flujo.

Nota: create, update, in-review y revision llevan archivos adjuntos, así que
salen como form data (partes `files`) en vez de JSON. El resto de acciones es JSON.
"""

from __future__ import annotations

from typing import IO, Any, Mapping, Sequence

from pydantic import BaseModel

from permitdesk.adapters.resources.base import QueryParams, ResourceService, stringify, with_query
from permitdesk.core.domain.envelope import ApiResponse, decode_envelope, unwrap_data
from permitdesk.core.domain.models import Task

Upload = tuple[str, bytes | IO[bytes], str]


def _form_fields(data: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    raw = data.model_dump(mode="json", exclude_none=True) if isinstance(data, BaseModel) else dict(data)
    return {key: stringify(value) for key, value in raw.items() if value is not None}


def _file_parts(files: Sequence[Upload] | None) -> list[tuple[str, Upload]] | None:
    if not files:
        return None
    return [("files", upload) for upload in files]


class TaskService(ResourceService[Task]):
    path = "/tasks"
    entity = Task

    async def get_all_requests(self, params: QueryParams = None) -> ApiResponse[list[Any]]:
        """Tareas que siguen en el circuito de aprobación (pendiente, rechazada, aprobada)."""

        payload = await self._client.get(with_query("/task-requests", params))
        return decode_envelope(payload, list[Task])

    async def get_by_code(self, code: str) -> Task:
        payload = await self._client.get(f"{self.path}/code/{code}")
        return unwrap_data(payload, Task)

    async def create(
        self,
        data: BaseModel | Mapping[str, Any],
        files: Sequence[Upload] | None = None,
    ) -> Task:
        payload = await self._client.post(self.path, form=_form_fields(data), files=_file_parts(files))
        return unwrap_data(payload, Task)

    async def update(
        self,
        item_id: int,
        data: BaseModel | Mapping[str, Any],
        files: Sequence[Upload] | None = None,
        deleted_file_ids: Sequence[int] | None = None,
    ) -> Task:
        form: dict[str, Any] = _form_fields(data)
        if deleted_file_ids:
            form["deleted_file_ids[]"] = [str(file_id) for file_id in deleted_file_ids]
        payload = await self._client.put(self._item_path(item_id), form=form, files=_file_parts(files))
        return unwrap_data(payload, Task)

    async def change_status(self, task_id: int, data: BaseModel | Mapping[str, Any]) -> Any:
        return await self._action(f"{self._item_path(task_id)}/change-status", data)

    async def change_type(self, task_id: int, data: BaseModel | Mapping[str, Any]) -> Any:
        return await self._action(f"{self._item_path(task_id)}/change-type", data)

    async def set_reason(self, task_id: int, data: BaseModel | Mapping[str, Any]) -> Any:
        return await self._action(f"{self._item_path(task_id)}/set-reason", data)

    async def in_review(
        self,
        task_id: int,
        data: BaseModel | Mapping[str, Any],
        files: Sequence[Upload] | None = None,
    ) -> Any:
        payload = await self._client.post(
            f"{self._item_path(task_id)}/in-review",
            form=_form_fields(data),
            files=_file_parts(files),
        )
        return unwrap_data(payload, Any, allow_none=True)

    async def set_revision(
        self,
        task_id: int,
        data: BaseModel | Mapping[str, Any],
        files: Sequence[Upload] | None = None,
    ) -> Any:
        payload = await self._client.post(
            f"{self._item_path(task_id)}/set-revision",
            form=_form_fields(data),
            files=_file_parts(files),
        )
        return unwrap_data(payload, Any, allow_none=True)

    async def approve(self, task_id: int, approval_id: int, data: BaseModel | Mapping[str, Any] | None = None) -> Any:
        return await self._action(f"{self._item_path(task_id)}/approvals/{approval_id}/approve", data or {})

    async def reject(self, task_id: int, approval_id: int, data: BaseModel | Mapping[str, Any] | None = None) -> Any:
        return await self._action(f"{self._item_path(task_id)}/approvals/{approval_id}/reject", data or {})
