"""Wrapper de httpx: punto único de entrada para cada llamada al backend.

Por qué un wrapper:
- Estandariza base URL, headers, bearer auth y normalización de errores para
  que todos los servicios de recursos se comporten igual.
- Facilita testing: se puede inyectar un `httpx.AsyncClient` con transporte mock.

Garantías:
- Como máximo una llamada de red por invocación: sin reintentos ni cancelación.
- El único efecto secundario es sobre el store de credenciales (se limpia en 401).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel, ValidationError

from permitdesk.core.config import AppSettings
from permitdesk.core.domain.envelope import ApiErrorEnvelope
from permitdesk.core.errors import ApiRequestError
from permitdesk.core.interfaces.credential_store import CredentialStore

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults del proyecto.

    Por qué un builder:
    - Centraliza timeout y headers para que todas las llamadas se comporten igual.
    - En tests se puede pasar un `transport` (`httpx.MockTransport`).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": JSON_CONTENT_TYPE,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def serialize_body(body: Any) -> Any:
    """Convierte un payload (modelo pydantic, mapping, lista, ...) en datos listos para JSON."""

    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}


def _error_from_response(response: httpx.Response, payload: Any) -> ApiRequestError:
    fallback = f"HTTP error! status: {response.status_code}"
    if not isinstance(payload, dict):
        return ApiRequestError(fallback, status_code=response.status_code)

    try:
        envelope = ApiErrorEnvelope.model_validate(payload)
    except ValidationError:
        return ApiRequestError(fallback, status_code=response.status_code)

    error = envelope.error
    return ApiRequestError(
        envelope.resolved_message() or fallback,
        status_code=response.status_code,
        code=error.code if error else None,
        details=error.details if error else None,
        trace_id=envelope.trace_id,
    )


class ApiClient:
    """Cliente tipado para el backend de permisos.

    Usar como async context manager, o llamar a `aclose()` al terminar, para
    liberar el pool de conexiones.
    """

    def __init__(
        self,
        settings: AppSettings,
        store: CredentialStore,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._store = store
        self._base_url = settings.api_url.rstrip("/")
        self._client = client or build_async_client(settings)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def store(self) -> CredentialStore:
        return self._store

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, *, require_auth: bool, is_multipart: bool, overrides: Mapping[str, str] | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        # El boundary multipart lo escribe httpx.
        if not is_multipart:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        if require_auth:
            token = self._store.token
            if token:
                headers["Authorization"] = f"Bearer {token}"

        if overrides:
            headers.update(overrides)
        return headers

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        body: Any = None,
        form: Mapping[str, Any] | None = None,
        files: Any = None,
        require_auth: bool = True,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        url = f"{self._base_url}{endpoint}"
        is_multipart = form is not None or files is not None

        kwargs: dict[str, Any] = {
            "headers": self._headers(require_auth=require_auth, is_multipart=is_multipart, overrides=headers),
        }
        if is_multipart:
            kwargs["data"] = dict(form or {})
            if files is not None:
                kwargs["files"] = files
        elif body is not None:
            kwargs["content"] = json.dumps(serialize_body(body))

        logger.debug("%s %s", method, url)
        response = await self._client.request(method, url, **kwargs)
        logger.debug("%s %s -> %s", method, url, response.status_code)

        if not response.is_success:
            payload = _parse_json(response)
            if response.status_code == 401:
                logger.warning("Backend answered 401 for %s %s; clearing stored credentials", method, endpoint)
                self._store.clear()
            raise _error_from_response(response, payload)

        return response

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        body: Any = None,
        form: Mapping[str, Any] | None = None,
        files: Any = None,
        require_auth: bool = True,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Hace una petición y devuelve el JSON parseado sin tocar."""

        response = await self._send(
            method,
            endpoint,
            body=body,
            form=form,
            files=files,
            require_auth=require_auth,
            headers=headers,
        )
        return _parse_json(response)

    async def get(self, endpoint: str, *, require_auth: bool = True, headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("GET", endpoint, require_auth=require_auth, headers=headers)

    async def post(
        self,
        endpoint: str,
        body: Any = None,
        require_auth: bool = True,
        *,
        form: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request(
            "POST", endpoint, body=body, form=form, files=files, require_auth=require_auth, headers=headers
        )

    async def put(
        self,
        endpoint: str,
        body: Any = None,
        require_auth: bool = True,
        *,
        form: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request(
            "PUT", endpoint, body=body, form=form, files=files, require_auth=require_auth, headers=headers
        )

    async def delete(self, endpoint: str, require_auth: bool = True, *, headers: Mapping[str, str] | None = None) -> Any:
        return await self.request("DELETE", endpoint, require_auth=require_auth, headers=headers)

    async def get_bytes(
        self,
        endpoint: str,
        *,
        require_auth: bool = True,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """GET de un recurso binario (descarga/preview de documentos)."""

        response = await self._send("GET", endpoint, require_auth=require_auth, headers=headers)
        return response.content
