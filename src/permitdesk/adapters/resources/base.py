"""Servicio genérico de recursos.

Un builder parametrizado (path del recurso + modelo de entidad) da las cinco
operaciones estándar; los módulos por recurso lo heredan y solo agregan sus
endpoints extra.

Convención de unwrap:
- `get_all` devuelve el sobre decodificado para conservar `meta` al paginar.
- El resto de llamadas devuelve el `data` del sobre.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Mapping, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel

from permitdesk.adapters.http_client import ApiClient
from permitdesk.core.domain.envelope import ApiResponse, decode_envelope, unwrap_data

EntityT = TypeVar("EntityT", bound=BaseModel)

QueryParams = BaseModel | Mapping[str, Any] | None


def stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: QueryParams) -> str:
    """Codifica cada filtro definido, en el orden en que los pasó el llamador."""

    if params is None:
        return ""
    if isinstance(params, BaseModel):
        items = params.model_dump(exclude_none=True).items()
    else:
        items = params.items()
    pairs = [(key, stringify(value)) for key, value in items if value is not None]
    return urlencode(pairs)


def with_query(path: str, params: QueryParams) -> str:
    query = build_query(params)
    return f"{path}?{query}" if query else path


class ResourceService(Generic[EntityT]):
    """CRUD sobre ``/<resource>`` para un tipo de entidad."""

    path: ClassVar[str]
    entity: ClassVar[type[BaseModel]]

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def _item_path(self, item_id: int | str) -> str:
        return f"{self.path}/{item_id}"

    async def get_all(self, params: QueryParams = None) -> ApiResponse[list[Any]]:
        payload = await self._client.get(with_query(self.path, params))
        return decode_envelope(payload, list[self.entity])

    async def get_by_id(self, item_id: int) -> EntityT:
        payload = await self._client.get(self._item_path(item_id))
        return unwrap_data(payload, self.entity)

    async def create(self, data: BaseModel | Mapping[str, Any]) -> EntityT:
        payload = await self._client.post(self.path, data)
        return unwrap_data(payload, self.entity)

    async def update(self, item_id: int, data: BaseModel | Mapping[str, Any]) -> EntityT:
        payload = await self._client.put(self._item_path(item_id), data)
        return unwrap_data(payload, self.entity)

    async def delete(self, item_id: int) -> Any:
        payload = await self._client.delete(self._item_path(item_id))
        return unwrap_data(payload, Any, allow_none=True)

    # Helpers para subclases -------------------------------------------------

    async def _get_list(self, endpoint: str, model: type[BaseModel] | None = None) -> list[Any]:
        payload = await self._client.get(endpoint)
        return unwrap_data(payload, list[model or self.entity])

    async def _action(self, endpoint: str, body: Any = None, *, method: str = "POST") -> Any:
        payload = await self._client.request(method, endpoint, body=body)
        return unwrap_data(payload, Any, allow_none=True)
