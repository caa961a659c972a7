"""`PermitDeskApi`: un cliente HTTP, un store de credenciales, todos los servicios.

Por qué una fachada:
- La capa de UI (aquí, la CLI) maneja un solo objeto en vez de cablear doce
  servicios a mano.
- El store se inyecta una vez y lo comparten cliente, servicios y auth gate:
  un 401 visto por cualquier servicio queda visible para todos.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from permitdesk.adapters.credential_store import FileCredentialStore
from permitdesk.adapters.http_client import ApiClient
from permitdesk.adapters.resources import (
    AuthService,
    DivisionService,
    DomainService,
    MenuService,
    NotificationService,
    PermitService,
    PermitTypeService,
    ProjectService,
    ReferenceCategoryService,
    ReferenceService,
    ResourceService,
    RoleService,
    TaskService,
    UserService,
)
from permitdesk.core.config import AppSettings
from permitdesk.core.interfaces.credential_store import CredentialStore


@dataclass
class PermitDeskApi:
    client: ApiClient
    auth: AuthService = field(init=False)
    domains: DomainService = field(init=False)
    divisions: DivisionService = field(init=False)
    permit_types: PermitTypeService = field(init=False)
    permits: PermitService = field(init=False)
    projects: ProjectService = field(init=False)
    tasks: TaskService = field(init=False)
    users: UserService = field(init=False)
    roles: RoleService = field(init=False)
    menus: MenuService = field(init=False)
    references: ReferenceService = field(init=False)
    reference_categories: ReferenceCategoryService = field(init=False)
    notifications: NotificationService = field(init=False)

    def __post_init__(self) -> None:
        c = self.client
        self.auth = AuthService(c)
        self.domains = DomainService(c)
        self.divisions = DivisionService(c)
        self.permit_types = PermitTypeService(c)
        self.permits = PermitService(c)
        self.projects = ProjectService(c)
        self.tasks = TaskService(c)
        self.users = UserService(c)
        self.roles = RoleService(c)
        self.menus = MenuService(c)
        self.references = ReferenceService(c)
        self.reference_categories = ReferenceCategoryService(c)
        self.notifications = NotificationService(c)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        store: CredentialStore | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> PermitDeskApi:
        settings = settings or AppSettings()
        store = store or FileCredentialStore(settings.resolved_credentials_path())
        return cls(client=ApiClient(settings, store, client=http_client))

    @property
    def store(self) -> CredentialStore:
        return self.client.store

    def resource(self, name: str) -> ResourceService:
        """Busca un servicio CRUD por su nombre en la CLI (`permits`, `permit-types`, ...)."""

        attr = name.strip().lower().replace("-", "_")
        service = getattr(self, attr, None) if attr in RESOURCE_NAMES else None
        if not isinstance(service, ResourceService):
            raise KeyError(name)
        return service

    async def __aenter__(self) -> PermitDeskApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()


RESOURCE_NAMES: tuple[str, ...] = (
    "domains",
    "divisions",
    "permit_types",
    "permits",
    "projects",
    "tasks",
    "users",
    "roles",
    "menus",
    "references",
    "reference_categories",
    "notifications",
)
