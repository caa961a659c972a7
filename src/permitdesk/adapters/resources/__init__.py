"""Servicios de recursos (uno por recurso del backend).

Por qué un paquete:
- Agrupa los módulos por recurso; cada uno extiende
  `permitdesk.adapters.resources.base.ResourceService`.
"""

from permitdesk.adapters.resources.auth import AuthService
from permitdesk.adapters.resources.base import ResourceService, build_query, with_query
from permitdesk.adapters.resources.divisions import DivisionService
from permitdesk.adapters.resources.domains import DomainService
from permitdesk.adapters.resources.menus import MenuService
from permitdesk.adapters.resources.notifications import NotificationService
from permitdesk.adapters.resources.permit_types import PermitTypeService
from permitdesk.adapters.resources.permits import PermitService
from permitdesk.adapters.resources.projects import ProjectService
from permitdesk.adapters.resources.references import ReferenceCategoryService, ReferenceService
from permitdesk.adapters.resources.roles import RoleService
from permitdesk.adapters.resources.tasks import TaskService
from permitdesk.adapters.resources.users import UserService

__all__ = [
    "AuthService",
    "DivisionService",
    "DomainService",
    "MenuService",
    "NotificationService",
    "PermitService",
    "PermitTypeService",
    "ProjectService",
    "ReferenceCategoryService",
    "ReferenceService",
    "ResourceService",
    "RoleService",
    "TaskService",
    "UserService",
    "build_query",
    "with_query",
]
