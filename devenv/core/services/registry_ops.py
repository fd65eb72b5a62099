"""
Registry operations — validated mutations of a Registry.

Each function validates first and only then mutates, so a raised
error always leaves the registry untouched. No I/O happens here:
provisioning and persistence are the use-case layer's job.
"""

from __future__ import annotations

import logging

from devenv.core.models.project import Project
from devenv.core.models.registry import Registry
from devenv.core.models.service import Service
from devenv.core.services import validation
from devenv.core.services.slug import normalize_slug

logger = logging.getLogger(__name__)


def project_url(slug: str, base_domain: str) -> str:
    return f"https://{slug}.{base_domain}"


# ── Services ────────────────────────────────────────────────────


def add_service(registry: Registry, service: Service) -> Service:
    validation.validate_new_service(registry, service)
    registry.services[service.name] = service
    logger.info("Service added: %s (%s)", service.name, service.image)
    return service


def update_service(registry: Registry, service: Service) -> Service:
    validation.validate_service_update(registry, service)
    registry.services[service.name] = service
    logger.info("Service updated: %s", service.name)
    return service


def remove_service(registry: Registry, name: str) -> list[str]:
    """Remove a service and detach it from every project.

    Returns:
        Slugs of the projects it was detached from.
    """
    validation.validate_service_removal(registry, name)
    detached = registry.projects_using(name)
    for project in registry.projects.values():
        project.services = [s for s in project.services if s != name]
    del registry.services[name]
    logger.info("Service removed: %s (detached from %d project(s))", name, len(detached))
    return detached


# ── Projects ────────────────────────────────────────────────────


def add_project(
    registry: Registry,
    name: str,
    base_domain: str,
    environment: dict[str, str] | None = None,
) -> Project:
    slug = normalize_slug(name)
    validation.validate_new_project(registry, name, slug)
    project = Project(
        name=name,
        slug=slug,
        url=project_url(slug, base_domain),
        environment=dict(environment or {}),
    )
    registry.projects[slug] = project
    logger.info("Project added: %s → %s", name, project.url)
    return project


def remove_project(registry: Registry, name: str) -> Project:
    slug = normalize_slug(name)
    validation.require_project(registry, name, slug)
    project = registry.projects.pop(slug)
    logger.info("Project removed: %s", slug)
    return project


def update_project_environment(
    registry: Registry, name: str, environment: dict[str, str],
) -> Project:
    slug = normalize_slug(name)
    validation.require_project(registry, name, slug)
    project = registry.projects[slug]
    project.environment = dict(environment)
    return project


def attach_service(registry: Registry, project_name: str, service_name: str) -> bool:
    """Attach a service to a project.

    Returns:
        False when it was already attached (no-op), True otherwise.
    """
    validation.require_service(registry, service_name)
    slug = normalize_slug(project_name)
    validation.require_project(registry, project_name, slug)
    project = registry.projects[slug]
    if service_name in project.services:
        return False
    project.services.append(service_name)
    return True


def detach_service(registry: Registry, project_name: str, service_name: str) -> bool:
    """Detach a service from a project. Returns False if it was not attached."""
    slug = normalize_slug(project_name)
    validation.require_project(registry, project_name, slug)
    project = registry.projects[slug]
    if service_name not in project.services:
        return False
    project.services = [s for s in project.services if s != service_name]
    return True


def get_project(registry: Registry, name: str) -> Project | None:
    return registry.projects.get(normalize_slug(name))
