"""
Service commands — user-defined services and the predefined catalog.
"""

from __future__ import annotations

import logging

from devenv.core.context import Workspace
from devenv.core.errors import DevEnvError
from devenv.core.models.catalog import CatalogTemplate
from devenv.core.models.service import Service
from devenv.core.services import catalog, registry_ops

logger = logging.getLogger(__name__)


def add_service(ws: Workspace, service: Service) -> Service:
    with ws.store.transaction() as registry:
        return registry_ops.add_service(registry, service)


def update_service(ws: Workspace, service: Service) -> Service:
    with ws.store.transaction() as registry:
        return registry_ops.update_service(registry, service)


def remove_service(ws: Workspace, name: str) -> list[str]:
    """Remove a service, detach it from projects, drop its container.

    Returns:
        Slugs of projects the service was detached from.
    """
    with ws.store.transaction() as registry:
        detached = registry_ops.remove_service(registry, name)

    # The container may not exist; removal is best-effort
    manifest = ws.layout.manifest_path
    if manifest.is_file():
        try:
            ws.orchestrator.remove_service(manifest, name)
        except DevEnvError as e:
            logger.warning("Could not remove container for '%s': %s", name, e)
    return detached


def list_services(ws: Workspace) -> list[Service]:
    with ws.store.read() as registry:
        return [s.model_copy(deep=True) for s in registry.sorted_services()]


def get_service(ws: Workspace, name: str) -> Service | None:
    with ws.store.read() as registry:
        service = registry.services.get(name)
        return service.model_copy(deep=True) if service else None


# ── Catalog ─────────────────────────────────────────────────────


def list_catalog() -> list[CatalogTemplate]:
    return catalog.list_templates()


def add_catalog_service(ws: Workspace, template_name: str) -> Service:
    """Expand a catalog template and add it like any other service."""
    service = catalog.expand(catalog.get_template(template_name), ws.base_domain)
    return add_service(ws, service)
