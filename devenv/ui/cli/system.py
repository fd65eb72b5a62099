"""
CLI commands for the host machine — hosts file, system facts, reset.
"""

from __future__ import annotations

import json

import click

from devenv.ui.cli.helpers import get_workspace, handle_errors


@click.group()
def hosts() -> None:
    """Hosts-file entries for project hostnames."""


@hosts.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--block", "block_only", is_flag=True,
              help="Print only the missing lines, ready to append to the hosts file.")
@click.pass_context
@handle_errors
def hosts_check(ctx: click.Context, as_json: bool, block_only: bool) -> None:
    """Show which 127.0.0.1 entries are present."""
    from devenv.core.services.hosts import hosts_block
    from devenv.core.use_cases.system import check_hosts

    ws = get_workspace(ctx)
    entries = check_hosts(ws)
    block = hosts_block([e for e, p in entries if not p])

    if block_only:
        click.echo(block, nl=False)
        return

    if as_json:
        click.echo(json.dumps([{"entry": e, "present": p} for e, p in entries], indent=2))
        return

    for entry, present in entries:
        click.echo(f"   {'✅' if present else '❌'} {entry}")

    if block:
        click.echo()
        click.secho(f"⚠️  Append this to {ws.platform.hosts_path} (requires admin rights):", fg="yellow")
        click.echo()
        click.echo(block, nl=False)


@click.group()
def system() -> None:
    """Host machine information."""


@system.command("info")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def system_info(ctx: click.Context, as_json: bool) -> None:
    """OS, CPU, memory and Docker availability."""
    from devenv.core.use_cases.system import system_info as _info

    info = _info(get_workspace(ctx))
    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    memory = info.get("memory_total")
    click.secho("💻 System", fg="cyan", bold=True)
    click.echo(f"   OS:      {info['os']} {info['os_version']} ({info['arch']})")
    click.echo(f"   Host:    {info['hostname']}")
    click.echo(f"   CPUs:    {info['cpu_count']}")
    click.echo(f"   Memory:  {f'{memory / 1024 ** 3:.1f} GiB' if memory else 'unknown'}")
    click.echo(f"   Docker:  {'running' if info['docker_running'] else 'installed' if info['docker_installed'] else 'not found'}")


@click.command()
@click.confirmation_option(prompt="Delete all services and projects from the registry?")
@click.pass_context
@handle_errors
def reset(ctx: click.Context) -> None:
    """Forget every service and project (project folders are kept)."""
    from devenv.core.use_cases.system import reset as _reset

    _reset(get_workspace(ctx))
    click.secho("🧹 Configuration reset", fg="green")
