"""
CLI commands for projects.

Thin wrappers over ``devenv.core.use_cases.projects``.
"""

from __future__ import annotations

import json

import click

from devenv.ui.cli.helpers import get_workspace, handle_errors, parse_pairs


@click.group()
def project() -> None:
    """PHP projects — add, remove, configure, attach services."""


@project.command("add")
@click.argument("name")
@click.option("--env", "-e", "env_pairs", multiple=True, metavar="KEY=VALUE",
              help="Project environment variable (repeatable).")
@click.pass_context
@handle_errors
def add(ctx: click.Context, name: str, env_pairs: tuple[str, ...]) -> None:
    """Create a project and its folder, served at https://<slug>.<domain>."""
    from devenv.core.use_cases.projects import add_project

    created = add_project(get_workspace(ctx), name, parse_pairs(env_pairs))
    click.secho(f"✅ Project '{created.name}' created", fg="green")
    click.echo(f"   Slug: {created.slug}")
    click.echo(f"   URL:  {created.url}")


@project.command("remove")
@click.argument("name")
@click.pass_context
@handle_errors
def remove(ctx: click.Context, name: str) -> None:
    """Delete a project, its folder and its nginx config."""
    from devenv.core.use_cases.projects import remove_project

    removed = remove_project(get_workspace(ctx), name)
    click.secho(f"🗑️  Project '{removed.name}' removed", fg="green")


@project.command("update")
@click.argument("name")
@click.option("--env", "-e", "env_pairs", multiple=True, metavar="KEY=VALUE",
              help="Replaces the whole project environment (repeatable).")
@click.pass_context
@handle_errors
def update(ctx: click.Context, name: str, env_pairs: tuple[str, ...]) -> None:
    """Replace a project's environment variables."""
    from devenv.core.use_cases.projects import update_project

    updated = update_project(get_workspace(ctx), name, parse_pairs(env_pairs))
    click.secho(f"✅ Project '{updated.slug}' updated ({len(updated.environment)} variable(s))", fg="green")


@project.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_(ctx: click.Context, as_json: bool) -> None:
    """List projects."""
    from devenv.core.use_cases.projects import list_projects

    projects = list_projects(get_workspace(ctx))

    if as_json:
        click.echo(json.dumps([p.model_dump() for p in projects], indent=2))
        return

    if not projects:
        click.secho("No projects yet. Create one with: devenv project add <name>", fg="yellow")
        return

    click.secho(f"📁 Projects ({len(projects)}):", fg="cyan", bold=True)
    for p in projects:
        click.echo(f"   • {p.name:<30} {p.url}")
        if p.services:
            click.echo(f"     Services: {', '.join(p.services)}")


@project.command("show")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show one project."""
    from devenv.core.use_cases.projects import get_project

    found = get_project(get_workspace(ctx), name)
    if found is None:
        click.secho(f"❌ Project '{name}' does not exist", fg="red", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(found.model_dump(), indent=2))
        return

    click.secho(f"📁 {found.name}", fg="cyan", bold=True)
    click.echo(f"   Slug:     {found.slug}")
    click.echo(f"   URL:      {found.url}")
    click.echo(f"   Services: {', '.join(found.services) or '-'}")
    for key, value in sorted(found.environment.items()):
        click.echo(f"   {key}={value}")


@project.command("attach")
@click.argument("project_name")
@click.argument("service_name")
@click.pass_context
@handle_errors
def attach(ctx: click.Context, project_name: str, service_name: str) -> None:
    """Attach a service to a project."""
    from devenv.core.use_cases.projects import attach_service

    if attach_service(get_workspace(ctx), project_name, service_name):
        click.secho(f"🔗 {service_name} attached to {project_name}", fg="green")
    else:
        click.echo(f"{service_name} is already attached to {project_name}")


@project.command("detach")
@click.argument("project_name")
@click.argument("service_name")
@click.pass_context
@handle_errors
def detach(ctx: click.Context, project_name: str, service_name: str) -> None:
    """Detach a service from a project."""
    from devenv.core.use_cases.projects import detach_service

    if detach_service(get_workspace(ctx), project_name, service_name):
        click.secho(f"✂️  {service_name} detached from {project_name}", fg="green")
    else:
        click.echo(f"{service_name} is not attached to {project_name}")
