"""
CLI commands for the running environment — compose file, proxy, up/down.

Thin wrappers over ``devenv.core.use_cases.environment``.
"""

from __future__ import annotations

import json

import click

from devenv.ui.cli.helpers import get_workspace, handle_errors


@click.group()
def compose() -> None:
    """docker-compose.yml generation."""


@compose.command("generate")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of writing the file.")
@click.pass_context
@handle_errors
def compose_generate(ctx: click.Context, to_stdout: bool) -> None:
    """Compile services and projects into docker-compose.yml."""
    from devenv.core.use_cases.environment import generate_manifest, write_manifest

    ws = get_workspace(ctx)
    if to_stdout:
        click.echo(generate_manifest(ws), nl=False)
        return

    path = write_manifest(ws)
    click.secho(f"📝 Wrote {path}", fg="green")


@click.group()
def proxy() -> None:
    """Traefik edge proxy configuration."""


@proxy.command("init")
@click.pass_context
@handle_errors
def proxy_init(ctx: click.Context) -> None:
    """Create traefik.toml and the wildcard certificate if missing."""
    from devenv.core.use_cases.environment import bootstrap_proxy

    result = bootstrap_proxy(get_workspace(ctx))
    if not result.changed:
        click.echo("Proxy configuration already in place.")
        return
    for path in result.written:
        click.secho(f"📝 {path}", fg="green")


@click.group()
def env() -> None:
    """Start, stop and inspect the environment."""


@env.command("up")
@click.option("--no-generate", is_flag=True, help="Use the existing docker-compose.yml as is.")
@click.pass_context
@handle_errors
def env_up(ctx: click.Context, no_generate: bool) -> None:
    """Generate config and start every container."""
    from devenv.core.use_cases.environment import start_environment

    output = start_environment(get_workspace(ctx), regenerate=not no_generate)
    if output:
        click.echo(output)
    click.secho("▶️  Environment started successfully", fg="green")


@env.command("down")
@click.pass_context
@handle_errors
def env_down(ctx: click.Context) -> None:
    """Stop and remove every container."""
    from devenv.core.use_cases.environment import stop_environment

    output = stop_environment(get_workspace(ctx))
    if output:
        click.echo(output)
    click.secho("⏹️  Environment stopped successfully", fg="green")


@env.command("status")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def env_status(ctx: click.Context, as_json: bool) -> None:
    """Docker and environment state."""
    from devenv.core.use_cases.environment import environment_status

    status = environment_status(get_workspace(ctx))
    if as_json:
        click.echo(json.dumps(status.to_dict(), indent=2))
        return

    def mark(flag: bool) -> str:
        return "✅" if flag else "❌"

    click.secho("🐳 Environment", fg="cyan", bold=True)
    click.echo(f"   Docker installed: {mark(status.engine_installed)}")
    click.echo(f"   Docker running:   {mark(status.engine_running)}")
    click.echo(f"   Compose file:     {mark(status.manifest_exists)}  {status.manifest_path}")
    click.echo(f"   Environment up:   {mark(status.environment_running)}")
