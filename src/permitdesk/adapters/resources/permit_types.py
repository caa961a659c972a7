from __future__ import annotations

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import PermitType


class PermitTypeService(ResourceService[PermitType]):
    path = "/permit-types"
    entity = PermitType
