"""
Project commands — add, remove, update, attach and detach services.
"""

from __future__ import annotations

import logging

from devenv.core.context import Workspace
from devenv.core.models.project import Project
from devenv.core.services import project_files, registry_ops

logger = logging.getLogger(__name__)


def add_project(
    ws: Workspace,
    name: str,
    environment: dict[str, str] | None = None,
) -> Project:
    """Register a project and provision its folder and nginx file."""
    with ws.store.transaction() as registry:
        project = registry_ops.add_project(registry, name, ws.base_domain, environment)
        project_files.create_project_dir(ws.layout, project.slug, name)
        project_files.create_nginx_config(ws.layout, project.slug)
    return project


def remove_project(ws: Workspace, name: str) -> Project:
    """Unregister a project, then delete its nginx file and folder.

    Files go only once the registry change is saved, so a failed save
    leaves the project registered with its files intact.
    """
    with ws.store.transaction() as registry:
        project = registry_ops.remove_project(registry, name)
    project_files.remove_project_files(ws.layout, project.slug)
    return project


def update_project(ws: Workspace, name: str, environment: dict[str, str]) -> Project:
    with ws.store.transaction() as registry:
        return registry_ops.update_project_environment(registry, name, environment)


def attach_service(ws: Workspace, project_name: str, service_name: str) -> bool:
    with ws.store.transaction() as registry:
        return registry_ops.attach_service(registry, project_name, service_name)


def detach_service(ws: Workspace, project_name: str, service_name: str) -> bool:
    with ws.store.transaction() as registry:
        return registry_ops.detach_service(registry, project_name, service_name)


def list_projects(ws: Workspace) -> list[Project]:
    with ws.store.read() as registry:
        return [p.model_copy(deep=True) for p in registry.sorted_projects()]


def get_project(ws: Workspace, name: str) -> Project | None:
    with ws.store.read() as registry:
        project = registry_ops.get_project(registry, name)
        return project.model_copy(deep=True) if project else None
