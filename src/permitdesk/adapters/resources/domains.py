"""Dominios: CRUD simple sobre `/domains`."""

from __future__ import annotations

from permitdesk.adapters.resources.base import ResourceService
from permitdesk.core.domain.models import Domain


class DomainService(ResourceService[Domain]):
    path = "/domains"
    entity = Domain
