"""Implementaciones del store de credenciales.

El formato replica las tres claves fijas del storage del navegador para el que
se diseñó el backend:

- ``auth_token``: bearer token opaco
- ``user_data``: snapshot del usuario serializado como texto JSON
- ``selected_domain``: dominio seleccionado serializado como texto JSON

Por qué dos implementaciones:
- `FileCredentialStore` sobrevive entre invocaciones de la CLI (durable, por usuario).
- `InMemoryCredentialStore` es el objeto de sesión para tests y para embeber el
  cliente en un proceso de larga vida.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError

from permitdesk.core.domain.credentials import CredentialRecord
from permitdesk.core.domain.models import Domain, User
from permitdesk.core.errors import CredentialStoreError

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
USER_KEY = "user_data"
DOMAIN_KEY = "selected_domain"


def record_to_entries(record: CredentialRecord) -> dict[str, str]:
    entries = {TOKEN_KEY: record.token}
    if record.user is not None:
        entries[USER_KEY] = record.user.model_dump_json()
    if record.domain is not None:
        entries[DOMAIN_KEY] = record.domain.model_dump_json()
    return entries


def entries_to_record(entries: dict[str, str]) -> CredentialRecord | None:
    token = entries.get(TOKEN_KEY)
    if not token:
        return None

    user = None
    raw_user = entries.get(USER_KEY)
    if raw_user:
        try:
            user = User.model_validate_json(raw_user)
        except ValidationError:
            logger.warning("Ignoring unreadable cached user snapshot")

    domain = None
    raw_domain = entries.get(DOMAIN_KEY)
    if raw_domain:
        try:
            domain = Domain.model_validate_json(raw_domain)
        except ValidationError:
            logger.warning("Ignoring unreadable selected domain")

    return CredentialRecord(token=token, user=user, domain=domain)


class BaseCredentialStore:
    """Lectores comunes sobre `_read_entries` / `_write_entries`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def _read_entries(self) -> dict[str, str]:
        raise NotImplementedError

    def _write_entries(self, entries: dict[str, str]) -> None:
        raise NotImplementedError

    def load(self) -> CredentialRecord | None:
        with self._lock:
            entries = self._read_entries()
        return entries_to_record(entries)

    def commit(self, record: CredentialRecord) -> None:
        entries = record_to_entries(record)
        with self._lock:
            self._write_entries(entries)

    def clear(self) -> None:
        with self._lock:
            self._write_entries({})

    @property
    def token(self) -> str | None:
        record = self.load()
        return record.token if record else None

    @property
    def user(self) -> User | None:
        record = self.load()
        return record.user if record else None

    @property
    def domain(self) -> Domain | None:
        record = self.load()
        return record.domain if record else None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class InMemoryCredentialStore(BaseCredentialStore):
    def __init__(self, record: CredentialRecord | None = None) -> None:
        super().__init__()
        self._entries: dict[str, str] = record_to_entries(record) if record else {}

    def _read_entries(self) -> dict[str, str]:
        return dict(self._entries)

    def _write_entries(self, entries: dict[str, str]) -> None:
        self._entries = dict(entries)


class FileCredentialStore(BaseCredentialStore):
    """Store en archivo JSON; cada escritura reemplaza el archivo completo de forma atómica."""

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_entries(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Credentials file %s is unreadable; treating as signed out", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if k in (TOKEN_KEY, USER_KEY, DOMAIN_KEY) and isinstance(v, str)}

    def _write_entries(self, entries: dict[str, str]) -> None:
        if not entries:
            try:
                self._path.unlink(missing_ok=True)
            except OSError as exc:
                raise CredentialStoreError(f"Could not remove {self._path}: {exc}") from exc
            return

        payload = json.dumps(entries, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".credentials-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise CredentialStoreError(f"Could not write {self._path}: {exc}") from exc
