"""
dev-env — CLI entrypoint.

Usage:
    python -m devenv.main --help
    devenv project add "My Blog"
    devenv catalog add mysql8
    devenv env up
"""

from __future__ import annotations

from pathlib import Path

import click

from devenv import __version__
from devenv.core.config.loader import resolve_config_dir
from devenv.core.observability.logging_config import (
    resolve_level,
    resolve_log_file,
    set_request_logging,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="devenv")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config-dir",
    "config_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Config directory (default: DEVENV_CONFIG_DIR or ~/.config/dev-env).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_dir: str | None,
) -> None:
    """dev-env — local HTTPS environments for PHP projects."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = Path(config_dir) if config_dir else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=resolve_log_file(resolve_config_dir(ctx.obj["config_dir"])),
    )


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=1420, type=int, help="Port.")
@click.option("--mock", is_flag=True, help="Use mock docker, certificate and OS adapters.")
@click.option("--access-log", is_flag=True, help="Log every HTTP request.")
@click.pass_context
def web(ctx: click.Context, host: str, port: int, mock: bool, access_log: bool) -> None:
    """Serve the JSON API for the desktop front-end."""
    from devenv.core.use_cases.environment import ShutdownGuard
    from devenv.ui.cli.helpers import get_workspace
    from devenv.ui.web.server import create_app, run_server

    if mock:
        from devenv.adapters.mock import MockCertificates, MockOrchestrator, MockPlatform
        from devenv.core.config.loader import load_settings
        from devenv.core.context import Workspace

        settings = load_settings(ctx.obj.get("config_dir"))
        ctx.obj["workspace"] = Workspace.open(
            settings,
            orchestrator=MockOrchestrator(),
            certs=MockCertificates(),
            platform=MockPlatform(settings.config_dir / "hosts"),
        )

    if access_log:
        set_request_logging(True)

    ws = get_workspace(ctx)
    guard = ShutdownGuard(ws)
    guard.install()

    click.secho(f"🌐 dev-env API on http://{host}:{port}", fg="cyan")
    run_server(create_app(ws, guard=guard), host=host, port=port)


# ── Sub-groups ──────────────────────────────────────────────────

from devenv.ui.cli.environment import compose, env, proxy  # noqa: E402
from devenv.ui.cli.projects import project  # noqa: E402
from devenv.ui.cli.services import catalog, service  # noqa: E402
from devenv.ui.cli.system import hosts, reset, system  # noqa: E402

cli.add_command(project)
cli.add_command(service)
cli.add_command(catalog)
cli.add_command(compose)
cli.add_command(proxy)
cli.add_command(env)
cli.add_command(hosts)
cli.add_command(system)
cli.add_command(reset)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
