"""Modelos de dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde del wire: una forma del servidor que se
  aparta del contrato falla de forma visible en vez de filtrar dicts a medio tipar.
- Documentación autocontenida vía `Field` sin acoplar el Core a ninguna
  librería de I/O.

Notas:
- Todas las relaciones son ids de clave foránea; los modelos `*Preview` son los
  snapshots desnormalizados que el servidor adjunta al lado.
- Los timestamps se guardan como los strings ISO-8601 que envía el servidor.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ApiModel(BaseModel):
    """Base de todo modelo del wire: los campos desconocidos del servidor se ignoran."""

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Previews (objetos anidados abreviados)
# ---------------------------------------------------------------------------


class UserBasic(ApiModel):
    id: int
    username: str
    full_name: str | None = None
    email: str | None = None
    role_id: int | None = None
    is_active: bool | None = None


class DomainPreview(ApiModel):
    id: int
    code: str | None = None
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


class DivisionPreview(ApiModel):
    id: int
    domain_id: int | None = None
    code: str | None = None
    name: str | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PermitTypePreview(ApiModel):
    id: int
    division_id: int | None = None
    name: str | None = None
    risk_point: str | None = None
    default_application_type: str | None = None
    default_validity_period: str | None = None
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    division: DivisionPreview | None = None


class RolePreview(ApiModel):
    id: int
    name: str | None = None
    code: str | None = None


class ReferencePreview(ApiModel):
    id: int
    name: str | None = None


class ProjectPreview(ApiModel):
    id: int
    code: str | None = None
    name: str | None = None


class PermitPreview(ApiModel):
    id: int
    name: str | None = None
    permit_no: str | None = None
    expiry_date: str | None = None


class ModulePreview(ApiModel):
    id: int
    name: str | None = None


# ---------------------------------------------------------------------------
# Entidades
# ---------------------------------------------------------------------------


class Domain(ApiModel):
    """Tenant de primer nivel; cada permiso, proyecto y tarea pertenece a uno."""

    id: int
    code: str
    name: str
    description: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class Division(ApiModel):
    id: int
    domain_id: int
    name: str
    code: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    domain: DomainPreview | None = None


class PermitType(ApiModel):
    id: int
    name: str
    code: str | None = None
    description: str | None = None
    division_id: int | None = None
    risk_point: str | None = None
    default_application_type: str | None = None
    default_validity_period: str | None = None
    notes: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    division: DivisionPreview | None = None


class Permit(ApiModel):
    """Permiso regulatorio con su ventana de vigencia y sus responsables."""

    id: int
    domain_id: int
    division_id: int | None = None
    permit_type_id: int
    name: str
    application_type: str | None = None
    permit_no: str
    effective_date: str | None = Field(
        default=None,
        description="Fecha ISO-8601 en que el permiso entra en vigencia.",
    )
    expiry_date: str | None = Field(
        default=None,
        description="Fecha ISO-8601 en que vence el permiso; dispara las notificaciones de vencimiento.",
    )
    effective_term: str | None = None
    responsible_person_id: int | None = None
    responsible_doc_person_id: int | None = None
    doc_name: str | None = None
    doc_number: str | None = None
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    domain: DomainPreview | None = None
    division: DivisionPreview | None = None
    permit_type: PermitTypePreview | None = None
    responsible_person: UserBasic | None = None
    responsible_doc_person: UserBasic | None = None


class ReferenceCategory(ApiModel):
    id: int
    module_id: int
    name: str
    description: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    module: ModulePreview | None = None


class Reference(ApiModel):
    """Valor de catálogo (estado de tarea, prioridad, estado de aprobación, ...) dentro de una categoría."""

    id: int
    reference_category_id: int
    name: str
    description: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    reference_category: ReferenceCategory | None = None


class Role(ApiModel):
    id: int
    code: str
    name: str
    category: str | None = None
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class UserDomainRole(ApiModel):
    id: int | None = None
    user_id: int | None = None
    domain_id: int
    role_id: int | None = None
    is_default: bool = False
    domain: DomainPreview | None = None
    role: RolePreview | None = None


class User(ApiModel):
    id: int
    role_id: int | None = None
    username: str
    email: str | None = None
    full_name: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    role: Role | None = None
    domains: list[Domain] | None = None
    domain_roles: list[UserDomainRole] | None = None


class Project(ApiModel):
    id: int
    domain_id: int
    name: str
    code: str | None = None
    description: str | None = None
    status: bool = True
    project_status_id: int | None = None
    started_at: str | None = None
    finished_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    domain: DomainPreview | None = None
    project_status: ReferencePreview | None = None
    users: list[UserBasic] | None = None


class MenuRole(RolePreview):
    pass


class Menu(ApiModel):
    id: int
    name: str
    path: str
    icon: str | None = None
    parent_id: int | None = None
    order_index: int = 0
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    roles: list[MenuRole] | None = None
    children: list[Menu] | None = None


class TaskFile(ApiModel):
    id: int
    task_id: int | None = None
    file_type_id: int | None = None
    file_name: str | None = None
    file_path: str | None = None
    created_at: str | None = None


class ApprovalTask(ApiModel):
    id: int
    task_id: int
    sequence: int
    approved_by: int | None = None
    approval_status_id: int | None = None
    approval_date: str | None = None
    note: str | None = None
    status: bool = True
    created_at: str | None = None
    updated_at: str | None = None
    approver: UserBasic | None = None
    approved_by_user: UserBasic | None = None
    approval_status: ReferencePreview | None = None


class Task(ApiModel):
    """Unidad de trabajo dentro de un proyecto, con su rastro de aprobaciones."""

    id: int
    domain_id: int | None = None
    project_id: int
    code: str | None = None
    title: str
    description: str | None = None
    description_before: str | None = None
    description_after: str | None = None
    reason: str | None = None
    revision: str | None = None
    status: bool = True
    status_id: int | None = None
    priority_id: int | None = None
    type_id: int | None = None
    stack_id: int | None = None
    assigned_id: int | None = None
    created_by: int | None = None
    updated_by: int | None = None
    approved_by: int | None = None
    completed_by: int | None = None
    done_by: int | None = None
    approval_status_id: int | None = None
    start_date: str | None = None
    due_date: str | None = None
    completed_date: str | None = None
    approval_date: str | None = None
    done_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    project: ProjectPreview | None = None
    status_task: ReferencePreview | None = None
    priority: ReferencePreview | None = None
    type: ReferencePreview | None = None
    stack: ReferencePreview | None = None
    assignee: UserBasic | None = None
    creator: UserBasic | None = None
    approval_status: ReferencePreview | None = None
    task_files: list[TaskFile] | None = None
    approval_tasks: list[ApprovalTask] | None = None


NotificationType = Literal["expiry_reminder", "expiry_warning", "expired"]


class Notification(ApiModel):
    id: int
    user_id: int
    permit_id: int | None = None
    type: NotificationType | str
    title: str
    message: str
    is_read: bool = False
    read_at: str | None = None
    created_at: str | None = None
    permit: PermitPreview | None = None


class UnreadCount(ApiModel):
    count: int = Field(..., ge=0)


class LoginResponse(ApiModel):
    """Respuesta de `/auth/login`.

    El backend envía `default_domain`; la variante con `current_domain` también se acepta.
    """

    token: str = Field(..., min_length=1)
    user: User
    default_domain: Domain | None = None
    current_domain: Domain | None = None
    current_role: Role | None = None
    domains: list[UserDomainRole] = Field(default_factory=list)


class SwitchDomainResponse(ApiModel):
    token: str = Field(..., min_length=1)
    current_domain: Domain
    current_role: Role | None = None


JsonDict = dict[str, Any]
