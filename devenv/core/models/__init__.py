"""
Domain models — Pydantic types for dev-env.

All models are re-exported here for convenient access:

    from devenv.core.models import Registry, Service, Project
"""

from devenv.core.models.catalog import CatalogTemplate
from devenv.core.models.project import Project
from devenv.core.models.registry import Registry
from devenv.core.models.service import Service

__all__ = [
    "CatalogTemplate",
    "Project",
    "Registry",
    "Service",
]
