"""
Compose manifest compiler — Registry → docker-compose document.

Pure: reads the registry, returns a dict. Output order is fixed (proxy,
services by name, projects by slug, networks, volumes) so the same
registry always renders to the same bytes.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from devenv.core.errors import SerializationError
from devenv.core.models.project import Project
from devenv.core.models.registry import Registry
from devenv.core.models.service import Service

logger = logging.getLogger(__name__)

COMPOSE_VERSION = "3"
NETWORK_NAME = "dev_env_network"

PROXY_SERVICE = "traefik"
PROXY_IMAGE = "traefik:latest"
PROXY_PORTS = ("80:80", "443:443", "8080:8080")
PROXY_VOLUMES = (
    "/var/run/docker.sock:/var/run/docker.sock",
    "./traefik/config:/etc/traefik",
    "./traefik/certs:/etc/certs",
)

RUNTIME_PREFIX = "php"
RUNTIME_IMAGE = "php:8.2-fpm"
SERVER_PREFIX = "nginx"
SERVER_IMAGE = "nginx:latest"
DOCUMENT_ROOT = "/var/www/html"
SERVER_INCLUDE = "/etc/nginx/conf.d/default.conf"

LABEL_PREFIX = "traefik."


def runtime_service_name(slug: str) -> str:
    return f"{RUNTIME_PREFIX}_{slug}"


def server_service_name(slug: str) -> str:
    return f"{SERVER_PREFIX}_{slug}"


def compile_manifest(registry: Registry) -> dict[str, Any]:
    """Fold the registry into a compose document.

    Returns:
        Mapping with ``version``, ``services``, ``networks`` and, when
        any service mounts a named volume, ``volumes``.
    """
    services: dict[str, Any] = {PROXY_SERVICE: _proxy_entry()}

    for service in registry.sorted_services():
        services[service.name] = _service_entry(service)

    for project in registry.sorted_projects():
        services[runtime_service_name(project.slug)] = _runtime_entry(project)
        services[server_service_name(project.slug)] = _server_entry(project)

    manifest: dict[str, Any] = {
        "version": COMPOSE_VERSION,
        "services": services,
        "networks": {NETWORK_NAME: {"driver": "bridge"}},
    }

    volumes = _named_volumes(registry)
    if volumes:
        manifest["volumes"] = volumes

    logger.debug(
        "Compiled manifest: %d service(s), %d named volume(s)",
        len(services), len(volumes),
    )
    return manifest


def render_manifest(manifest: dict[str, Any]) -> str:
    """Serialize a compiled manifest to YAML text.

    Raises:
        SerializationError: If the document cannot be encoded.
    """
    try:
        return yaml.safe_dump(
            manifest,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise SerializationError(f"Failed to generate Docker Compose file: {e}") from e


def generate_compose(registry: Registry) -> str:
    """compile + render in one call."""
    return render_manifest(compile_manifest(registry))


# ── Entries ─────────────────────────────────────────────────────


def _proxy_entry() -> dict[str, Any]:
    return {
        "image": PROXY_IMAGE,
        "restart": "always",
        "ports": list(PROXY_PORTS),
        "volumes": list(PROXY_VOLUMES),
        "networks": [NETWORK_NAME],
    }


def _service_entry(service: Service) -> dict[str, Any]:
    spec: dict[str, Any] = {"image": service.image}

    if service.ports:
        spec["ports"] = list(service.ports)
    if service.volumes:
        spec["volumes"] = list(service.volumes)
    if service.dependencies:
        spec["depends_on"] = list(service.dependencies)

    environment, labels = split_config(service.config)
    if environment:
        spec["environment"] = environment
    if labels:
        spec["labels"] = labels

    spec["networks"] = [NETWORK_NAME]
    return spec


def _runtime_entry(project: Project) -> dict[str, Any]:
    spec: dict[str, Any] = {
        "image": RUNTIME_IMAGE,
        "volumes": [f"./projects/{project.slug}:{DOCUMENT_ROOT}"],
    }
    if project.environment:
        spec["environment"] = dict(sorted(project.environment.items()))
    spec["networks"] = [NETWORK_NAME]
    return spec


def _server_entry(project: Project) -> dict[str, Any]:
    router = project.slug
    return {
        "image": SERVER_IMAGE,
        "volumes": [
            f"./projects/{project.slug}:{DOCUMENT_ROOT}",
            f"./nginx/{project.slug}.conf:{SERVER_INCLUDE}",
        ],
        "networks": [NETWORK_NAME],
        "labels": {
            "traefik.enable": "true",
            f"traefik.http.routers.{router}.rule": f"Host(`{project.hostname}`)",
            f"traefik.http.routers.{router}.tls": "true",
        },
        "depends_on": [runtime_service_name(project.slug)],
    }


# ── Helpers ─────────────────────────────────────────────────────


def split_config(config: dict[str, str]) -> tuple[dict[str, str], dict[str, str]]:
    """Separate plain environment variables from ``traefik.*`` labels.

    Both halves are key-sorted.
    """
    environment: dict[str, str] = {}
    labels: dict[str, str] = {}
    for key in sorted(config):
        if key.startswith(LABEL_PREFIX):
            labels[key] = config[key]
        else:
            environment[key] = config[key]
    return environment, labels


def _named_volumes(registry: Registry) -> dict[str, dict]:
    volumes: dict[str, dict] = {}
    for service in registry.sorted_services():
        for name in service.named_volumes():
            volumes.setdefault(name, {})
    return volumes
