"""
Dependency validator — referential checks run before any mutation.

Every function here is read-only: it inspects a Registry and either
returns or raises. Mutations live in ``registry_ops``.

Self-dependency is rejected, and so is any longer cycle. Compose
handles cyclic ``depends_on`` badly, so catching it here keeps a bad
registry from ever reaching the manifest.
"""

from __future__ import annotations

from devenv.core.errors import (
    DependencyCycleError,
    DuplicateNameError,
    DuplicateSlugError,
    InvalidNameError,
    SelfDependencyError,
    ServiceInUseError,
    UnknownDependencyError,
    UnknownProjectError,
    UnknownServiceError,
)
from devenv.core.models.registry import Registry
from devenv.core.models.service import Service


def validate_new_service(registry: Registry, service: Service) -> None:
    """Check that *service* can be added.

    Raises:
        DuplicateNameError: Name already taken.
        SelfDependencyError: Service lists itself.
        UnknownDependencyError: A dependency is not registered.
    """
    if service.name in registry.services:
        raise DuplicateNameError(service.name)
    _check_dependencies(registry, service)


def validate_service_update(registry: Registry, service: Service) -> None:
    """Check that *service* can replace the existing entry of the same name.

    Raises:
        UnknownServiceError: No service by that name.
        SelfDependencyError / UnknownDependencyError: Bad dependency.
        DependencyCycleError: The new edges would close a cycle.
    """
    if service.name not in registry.services:
        raise UnknownServiceError(service.name)
    _check_dependencies(registry, service)

    graph = {name: list(svc.dependencies) for name, svc in registry.services.items()}
    graph[service.name] = list(service.dependencies)
    cycle = find_cycle(graph)
    if cycle:
        raise DependencyCycleError(cycle)


def validate_service_removal(registry: Registry, name: str) -> None:
    """Check that *name* exists and nothing else depends on it.

    Project attachments do not block removal; they are dropped.

    Raises:
        UnknownServiceError: No service by that name.
        ServiceInUseError: Other services depend on it.
    """
    if name not in registry.services:
        raise UnknownServiceError(name)
    dependents = registry.dependents_of(name)
    if dependents:
        raise ServiceInUseError(name, dependents)


def validate_new_project(registry: Registry, name: str, slug: str) -> None:
    if not slug:
        raise InvalidNameError(name)
    if slug in registry.projects:
        raise DuplicateSlugError(name, slug)


def require_project(registry: Registry, name: str, slug: str) -> None:
    if slug not in registry.projects:
        raise UnknownProjectError(name)


def require_service(registry: Registry, name: str) -> None:
    if name not in registry.services:
        raise UnknownServiceError(name)


def find_cycle(graph: dict[str, list[str]]) -> list[str] | None:
    """Return one dependency cycle as a closed path, or None.

    Edges to names missing from *graph* are ignored. Iterative, so
    chains of any depth are fine.
    """
    done: set[str] = set()

    for start in sorted(graph):
        if start in done:
            continue
        path = [start]
        on_path = {start}
        stack = [iter(graph[start])]
        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                node = path.pop()
                on_path.discard(node)
                done.add(node)
                stack.pop()
            elif dep in on_path:
                return path[path.index(dep):] + [dep]
            elif dep in graph and dep not in done:
                path.append(dep)
                on_path.add(dep)
                stack.append(iter(graph[dep]))
    return None


def _check_dependencies(registry: Registry, service: Service) -> None:
    for dep in service.dependencies:
        if dep == service.name:
            raise SelfDependencyError(service.name)
        if dep not in registry.services:
            raise UnknownDependencyError(dep)
