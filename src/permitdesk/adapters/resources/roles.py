from __future__ import annotations

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import Role


class RoleService(ResourceService[Role]):
    path = "/roles"
    entity = Role
