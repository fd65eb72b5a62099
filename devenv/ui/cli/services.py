"""
CLI commands for services and the predefined catalog.

Thin wrappers over ``devenv.core.use_cases.services``.
"""

from __future__ import annotations

import json

import click
from pydantic import ValidationError

from devenv.core.models.service import Service
from devenv.ui.cli.helpers import get_workspace, handle_errors, parse_pairs


def _build_service(
    name: str,
    image: str,
    ports: tuple[str, ...],
    volumes: tuple[str, ...],
    depends_on: tuple[str, ...],
    config: tuple[str, ...],
) -> Service:
    try:
        return Service(
            name=name,
            image=image,
            ports=list(ports),
            volumes=list(volumes),
            dependencies=list(depends_on),
            config=parse_pairs(config, "--config"),
        )
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e


_service_options = [
    click.option("--port", "-p", "ports", multiple=True, metavar="HOST:CONTAINER",
                 help="Port mapping (repeatable)."),
    click.option("--volume", "-v", "volumes", multiple=True, metavar="SOURCE:TARGET",
                 help="Named volume or host path mount (repeatable)."),
    click.option("--depends-on", "-d", "depends_on", multiple=True, metavar="SERVICE",
                 help="Service this one requires (repeatable)."),
    click.option("--config", "-c", "config", multiple=True, metavar="KEY=VALUE",
                 help="Environment variable or traefik.* label (repeatable)."),
]


def service_options(func):  # type: ignore[no-untyped-def]
    for option in reversed(_service_options):
        func = option(func)
    return func


@click.group()
def service() -> None:
    """Shared services — databases, caches, admin tools."""


@service.command("add")
@click.argument("name")
@click.option("--image", "-i", required=True, help="Container image, e.g. postgres:16.")
@service_options
@click.pass_context
@handle_errors
def add(ctx: click.Context, name: str, image: str, ports: tuple[str, ...], volumes: tuple[str, ...],
        depends_on: tuple[str, ...], config: tuple[str, ...]) -> None:
    """Register a new service."""
    from devenv.core.use_cases.services import add_service

    svc = add_service(get_workspace(ctx), _build_service(name, image, ports, volumes, depends_on, config))
    click.secho(f"✅ Service '{svc.name}' added ({svc.image})", fg="green")


@service.command("update")
@click.argument("name")
@click.option("--image", "-i", required=True, help="Container image.")
@service_options
@click.pass_context
@handle_errors
def update(ctx: click.Context, name: str, image: str, ports: tuple[str, ...], volumes: tuple[str, ...],
           depends_on: tuple[str, ...], config: tuple[str, ...]) -> None:
    """Replace an existing service definition."""
    from devenv.core.use_cases.services import get_service, update_service

    ws = get_workspace(ctx)
    svc = _build_service(name, image, ports, volumes, depends_on, config)
    existing = get_service(ws, name)
    if existing is not None:
        svc.is_global = existing.is_global
    update_service(ws, svc)
    click.secho(f"✅ Service '{name}' updated", fg="green")


@service.command("remove")
@click.argument("name")
@click.pass_context
@handle_errors
def remove(ctx: click.Context, name: str) -> None:
    """Remove a service (fails while other services depend on it)."""
    from devenv.core.use_cases.services import remove_service

    detached = remove_service(get_workspace(ctx), name)
    click.secho(f"🗑️  Service '{name}' removed", fg="green")
    if detached:
        click.echo(f"   Detached from: {', '.join(detached)}")


@service.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_(ctx: click.Context, as_json: bool) -> None:
    """List services."""
    from devenv.core.use_cases.services import list_services

    services = list_services(get_workspace(ctx))

    if as_json:
        click.echo(json.dumps([s.model_dump(by_alias=True) for s in services], indent=2))
        return

    if not services:
        click.secho("No services yet. Try: devenv catalog list", fg="yellow")
        return

    click.secho(f"🧩 Services ({len(services)}):", fg="cyan", bold=True)
    for s in services:
        marker = " (catalog)" if s.is_global else ""
        click.echo(f"   • {s.name:<20} {s.image}{marker}")
        if s.ports:
            click.echo(f"     Ports: {', '.join(s.ports)}")
        if s.dependencies:
            click.echo(f"     Depends on: {', '.join(s.dependencies)}")


@service.command("show")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show one service."""
    from devenv.core.use_cases.services import get_service

    svc = get_service(get_workspace(ctx), name)
    if svc is None:
        click.secho(f"❌ Service '{name}' does not exist", fg="red", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(svc.model_dump(by_alias=True), indent=2))
        return

    click.secho(f"🧩 {svc.name}", fg="cyan", bold=True)
    click.echo(f"   Image:   {svc.image}")
    click.echo(f"   Ports:   {', '.join(svc.ports) or '-'}")
    click.echo(f"   Volumes: {', '.join(svc.volumes) or '-'}")
    click.echo(f"   Depends: {', '.join(svc.dependencies) or '-'}")
    for key, value in sorted(svc.config.items()):
        click.echo(f"   {key}={value}")


# ── Catalog ─────────────────────────────────────────────────────


@click.group()
def catalog() -> None:
    """Predefined services you can add in one step."""


@catalog.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog_list(as_json: bool) -> None:
    """List predefined services."""
    from devenv.core.use_cases.services import list_catalog

    templates = list_catalog()
    if as_json:
        click.echo(json.dumps([t.model_dump() for t in templates], indent=2))
        return

    click.secho("📚 Catalog:", fg="cyan", bold=True)
    for t in templates:
        routed = " [https]" if t.requires_traefik else ""
        click.echo(f"   • {t.name:<12} {t.image:<24} {t.description}{routed}")


@catalog.command("add")
@click.argument("name")
@click.pass_context
@handle_errors
def catalog_add(ctx: click.Context, name: str) -> None:
    """Add a predefined service by name."""
    from devenv.core.use_cases.services import add_catalog_service

    svc = add_catalog_service(get_workspace(ctx), name)
    click.secho(f"✅ Service '{svc.name}' added from catalog", fg="green")
