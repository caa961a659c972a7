from __future__ import annotations

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import Division


class DivisionService(ResourceService[Division]):
    path = "/divisions"
    entity = Division
