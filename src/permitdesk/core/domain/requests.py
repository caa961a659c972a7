"""Payloads de request y filtros de listado.

Notas:
- Los payloads se serializan con ``exclude_none=True``: los campos opcionales
  que el llamador omitió nunca llegan al wire.
- Los modelos de filtro conservan el orden de declaración de sus campos, que es
  el orden de los parámetros en el query string.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(RequestModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    domain_id: int | None = None


class SwitchDomainRequest(RequestModel):
    domain_id: int


class UpdateProfileRequest(RequestModel):
    username: str | None = None
    email: str | None = None
    full_name: str | None = None
    phone_number: str | None = None
    nip: str | None = None


class ChangePasswordRequest(RequestModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Dominios, divisiones, tipos de permiso
# ---------------------------------------------------------------------------


class DomainRequest(RequestModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None
    is_active: bool | None = None


class DomainListParams(RequestModel):
    code: str | None = None
    name: str | None = None
    is_active: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


class DivisionRequest(RequestModel):
    domain_id: int
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str | None = None


class DivisionListParams(RequestModel):
    domain_id: int | None = None
    name: str | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


class PermitTypeRequest(RequestModel):
    name: str = Field(..., min_length=1)
    code: str | None = None
    description: str | None = None
    division_id: int | None = None
    risk_point: str | None = None
    default_application_type: str | None = None
    default_validity_period: str | None = None
    notes: str | None = None


class PermitTypeListParams(RequestModel):
    division_id: int | None = None
    name: str | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Permisos
# ---------------------------------------------------------------------------


class PermitCreateRequest(RequestModel):
    domain_id: int
    division_id: int | None = None
    permit_type_id: int
    name: str = Field(..., min_length=1)
    application_type: str
    permit_no: str = Field(..., min_length=1)
    effective_date: str
    expiry_date: str
    effective_term: str | None = None
    responsible_person_id: int | None = None
    responsible_doc_person_id: int | None = None
    doc_name: str | None = None
    doc_number: str | None = None
    status: str


class PermitUpdateRequest(PermitCreateRequest):
    pass


class PermitListParams(RequestModel):
    domain_id: int | None = None
    division_id: int | None = None
    permit_type_id: int | None = None
    name: str | None = None
    application_type: str | None = None
    permit_no: str | None = None
    responsible_person: str | None = None
    status: str | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Proyectos
# ---------------------------------------------------------------------------


class ProjectCreateRequest(RequestModel):
    domain_id: int
    name: str = Field(..., min_length=1)
    code: str | None = None
    description: str | None = None
    status: bool | None = None
    project_status_id: int | None = None
    user_ids: list[int] | None = None


class ProjectUpdateRequest(RequestModel):
    name: str | None = None
    code: str | None = None
    description: str | None = None
    status: bool | None = None
    project_status_id: int | None = None
    user_ids: list[int] | None = None


class ProjectStatusChangeRequest(RequestModel):
    status_id: int


class ProjectListParams(RequestModel):
    domain_id: int | None = None
    project_status_id: int | None = None
    name: str | None = None
    code: str | None = None
    status: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Referencias
# ---------------------------------------------------------------------------


class ReferenceCategoryRequest(RequestModel):
    module_id: int
    name: str = Field(..., min_length=1)
    description: str | None = None
    is_active: bool | None = None


class ReferenceCategoryListParams(RequestModel):
    module_id: int | None = None
    name: str | None = None
    is_active: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ReferenceRequest(RequestModel):
    reference_category_id: int
    name: str = Field(..., min_length=1)
    description: str | None = None
    is_active: bool | None = None


class ReferenceListParams(RequestModel):
    reference_category_id: int | None = None
    module_id: int | None = None
    name: str | None = None
    is_active: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Roles, menús, usuarios
# ---------------------------------------------------------------------------


class RoleRequest(RequestModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str | None = None
    description: str | None = None


class RoleListParams(RequestModel):
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class MenuRequest(RequestModel):
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    icon: str | None = None
    parent_id: int | None = None
    order_index: int = 0
    role_ids: list[int] | None = None


class MenuListParams(RequestModel):
    name: str | None = None
    path: str | None = None
    is_active: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


class UserRequest(RequestModel):
    role_id: int
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    is_active: bool | None = None
    domain_ids: list[int] = Field(default_factory=list)


class UserUpdateRequest(RequestModel):
    role_id: int | None = None
    username: str | None = None
    email: str | None = None
    password: str | None = None
    full_name: str | None = None
    is_active: bool | None = None
    domain_ids: list[int] | None = None


class UserListParams(RequestModel):
    domain_id: int | None = None
    role_id: int | None = None
    username: str | None = None
    email: str | None = None
    full_name: str | None = None
    is_active: bool | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


# ---------------------------------------------------------------------------
# Tareas
# ---------------------------------------------------------------------------


class TaskCreateRequest(RequestModel):
    project_id: int
    title: str = Field(..., min_length=1)
    description: str
    priority_id: int
    stack_id: int
    assigned_id: int | None = None
    due_date: str | None = None


class TaskUpdateRequest(TaskCreateRequest):
    description_before: str | None = None
    description_after: str | None = None
    type_id: int | None = None


class TaskListParams(RequestModel):
    search: str | None = None
    project_id: int | None = None
    status_id: int | None = None
    approval_status_id: int | None = None
    assigned_id: int | None = None
    start_date: str | None = None
    end_date: str | None = None
    page: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=1)


class TaskChangeStatusRequest(RequestModel):
    status_id: int


class TaskChangeTypeRequest(RequestModel):
    type_id: int


class TaskInReviewRequest(RequestModel):
    description_before: str
    description_after: str


class TaskReasonRequest(RequestModel):
    reason: str = Field(..., min_length=1)


class TaskRevisionRequest(RequestModel):
    revision: str = Field(..., min_length=1)


class ApprovalRequest(RequestModel):
    note: str | None = None
