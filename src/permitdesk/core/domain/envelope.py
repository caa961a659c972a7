"""Sobres de respuesta comunes a todos los endpoints.

Éxito: ``{success, message, data, meta?, trace_id?}``.
Error: ``{success: false, error: {code, message, details?}, trace_id?}``.

Nota: el backend serializa una lista vacía como ``"data": null`` (o lo omite); al
decodificar un tipo ``list[...]`` eso se lee como ``[]``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, get_origin

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from permitdesk.core.errors import EnvelopeError

T = TypeVar("T")


class PageMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int = Field(..., ge=0)
    limit: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class ApiResponse(BaseModel, Generic[T]):
    """Sobre de recurso alrededor de cada payload exitoso."""

    model_config = ConfigDict(extra="ignore")

    success: bool = Field(
        default=True,
        description="Flag de éxito del servidor; siempre true en respuestas 2xx.",
    )
    message: str = Field(
        default="",
        description="Mensaje de estado legible.",
    )
    data: T = Field(
        default=None,
        description="Payload del recurso (entidad o lista ordenada); puede ser null.",
    )
    meta: PageMeta | None = Field(
        default=None,
        description="Metadata de paginación, solo en listados que la devuelven.",
    )
    trace_id: str | None = None


class ApiErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    message: str | None = None
    details: Any = None


class ApiErrorEnvelope(BaseModel):
    """Sobre de error; también se tolera la forma simple ``{message}``."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    message: str | None = None
    error: ApiErrorBody | None = None
    trace_id: str | None = None

    def resolved_message(self) -> str | None:
        if self.message:
            return self.message
        if self.error is not None and self.error.message:
            return self.error.message
        return None


def decode_envelope(payload: Any, data_type: Any = Any) -> ApiResponse[Any]:
    """Valida `payload` como ``ApiResponse[data_type]``.

    Por qué:
    - Si la forma del servidor se aparta del contrato, falla con
      `EnvelopeError` en vez de devolver un dict sin tipar.
    """

    if get_origin(data_type) is list and isinstance(payload, dict) and payload.get("data") is None:
        payload = {**payload, "data": []}

    try:
        return ApiResponse[data_type].model_validate(payload)
    except ValidationError as exc:
        raise EnvelopeError(
            f"Response does not match ApiResponse[{_type_name(data_type)}]: {exc.error_count()} error(s)",
            payload=payload,
        ) from exc


def unwrap_data(payload: Any, data_type: Any = Any, *, allow_none: bool = False) -> Any:
    """Decodifica el sobre y devuelve solo su ``data``."""

    envelope = decode_envelope(payload, data_type)
    if envelope.data is None and not allow_none:
        raise EnvelopeError(
            f"Response envelope carries no data (expected {_type_name(data_type)})",
            payload=payload,
        )
    return envelope.data


def _type_name(data_type: Any) -> str:
    # `list[Domain].__name__` es "list"; los alias genéricos se muestran completos.
    if get_origin(data_type) is not None:
        return repr(data_type)
    return getattr(data_type, "__name__", None) or str(data_type)
