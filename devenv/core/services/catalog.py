"""
Predefined service catalog — one-step database, cache, admin tools.

Expansion into a Service is pure. A template that needs proxy routing
gets traefik labels in its config instead of a host port; a template
that doesn't keeps its declared port unused (it is reachable on the
shared network only).
"""

from __future__ import annotations

from devenv.core.errors import UnknownTemplateError
from devenv.core.models.catalog import CatalogTemplate
from devenv.core.models.service import Service

_CATALOG: tuple[CatalogTemplate, ...] = (
    CatalogTemplate(
        name="mysql8",
        image="mysql:8",
        description="MySQL 8 Database Server",
        port=3306,
        requires_traefik=False,
        environment={
            "MYSQL_ROOT_PASSWORD": "root_password",
            "MYSQL_DATABASE": "dev_db",
            "MYSQL_USER": "dev_user",
            "MYSQL_PASSWORD": "dev_password",
            "MYSQL_ROOT_HOST": "%",
        },
        volumes=["mysql8_data:/var/lib/mysql"],
    ),
    CatalogTemplate(
        name="Redis",
        image="redis:latest",
        description="Redis Server",
        port=6379,
        requires_traefik=False,
    ),
    CatalogTemplate(
        name="PhpMyAdmin",
        image="phpmyadmin/phpmyadmin",
        description="PhpMyAdmin Database Management",
        port=80,
        requires_traefik=True,
        environment={
            "PMA_HOSTS": "mysql8",
            "MYSQL_ROOT_PASSWORD": "root_password",
        },
    ),
    CatalogTemplate(
        name="MailHog",
        image="mailhog/mailhog",
        description="SMTP Testing Server",
        port=8025,
        requires_traefik=True,
    ),
)


def list_templates() -> list[CatalogTemplate]:
    """All templates, in catalog order."""
    return [t.model_copy(deep=True) for t in _CATALOG]


def get_template(name: str) -> CatalogTemplate:
    for template in _CATALOG:
        if template.name == name:
            return template.model_copy(deep=True)
    raise UnknownTemplateError(name)


def proxy_hostname(template: CatalogTemplate, base_domain: str) -> str:
    return f"{template.name.lower()}.{base_domain}"


def expand(template: CatalogTemplate, base_domain: str) -> Service:
    """Turn a template into a concrete, global Service."""
    config = dict(template.environment)

    if template.port is not None and template.requires_traefik:
        router = template.name.lower()
        config.update({
            "traefik.enable": "true",
            f"traefik.http.routers.{router}.rule": f"Host(`{proxy_hostname(template, base_domain)}`)",
            f"traefik.http.services.{router}.loadbalancer.server.port": str(template.port),
        })

    return Service(
        name=template.name,
        image=template.image,
        ports=[],
        volumes=list(template.volumes),
        is_global=True,
        dependencies=[],
        config=config,
    )
