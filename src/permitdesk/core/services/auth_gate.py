"""Auth gate: decide si una página puede renderizarse o debe redirigir.

El gate lee el store de credenciales directamente, sin pasar por el cliente
HTTP. Nunca redirige por su cuenta cuando una petición falla con 401: el
cliente limpia el store y la siguiente evaluación (siguiente carga de página,
siguiente comando de la CLI) lo detecta aquí.

Estados: CHECKING -> REDIRECTING | SETTLED. Un path nuevo o un valor nuevo de
`require_auth` vuelve a CHECKING; nada más sale de SETTLED.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

from permitdesk.core.domain.models import Domain, User
from permitdesk.core.interfaces.credential_store import CredentialStore
from permitdesk.core.interfaces.navigator import Navigator


class GateState(str, Enum):
    CHECKING = "checking"
    REDIRECTING = "redirecting"
    SETTLED = "settled"


@dataclass(frozen=True)
class GateResult:
    """Resultado de una evaluación, más el snapshot de sesión que renderiza el llamador."""

    state: GateState
    target: str | None
    is_authenticated: bool
    user: User | None = None
    domain: Domain | None = None

    @property
    def is_checking(self) -> bool:
        return self.state is not GateState.SETTLED


class AuthGate:
    def __init__(
        self,
        store: CredentialStore,
        navigator: Navigator,
        *,
        signin_path: str = "/signin",
        home_path: str = "/",
    ) -> None:
        self._store = store
        self._navigator = navigator
        self._signin_path = signin_path
        self._home_path = home_path
        self._state = GateState.CHECKING
        self._key: tuple[bool, str] | None = None
        self._last: GateResult | None = None

    @property
    def state(self) -> GateState:
        return self._state

    def signin_target(self, current_path: str) -> str:
        return f"{self._signin_path}?from={quote(current_path, safe='/')}"

    def evaluate(self, require_auth: bool, current_path: str) -> GateResult:
        key = (require_auth, current_path)
        if key == self._key and self._last is not None and self._state is GateState.SETTLED:
            return self._last

        self._key = key
        self._state = GateState.CHECKING

        record = self._store.load()
        authenticated = record is not None
        user = record.user if record else None
        domain = record.domain if record else None

        target: str | None = None
        if require_auth and not authenticated:
            target = self.signin_target(current_path)
        elif not require_auth and authenticated:
            target = self._home_path

        if target is not None:
            self._state = GateState.REDIRECTING
            self._navigator.replace(target)
        else:
            self._state = GateState.SETTLED

        self._last = GateResult(
            state=self._state,
            target=target,
            is_authenticated=authenticated,
            user=user,
            domain=domain,
        )
        return self._last
