"""
Shared CLI plumbing — workspace lookup, error display, KEY=VALUE parsing.
"""

from __future__ import annotations

import functools
import sys
from collections.abc import Callable
from typing import Any

import click

from devenv.core.context import Workspace
from devenv.core.errors import DevEnvError


def get_workspace(ctx: click.Context) -> Workspace:
    """Open the workspace on first use and cache it on the root context."""
    obj = ctx.find_root().ensure_object(dict)
    ws = obj.get("workspace")
    if ws is None:
        from devenv.core.config.loader import load_settings

        ws = Workspace.open(load_settings(obj.get("config_dir")))
        obj["workspace"] = ws
    return ws


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Print DevEnvError as a red one-liner and exit 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except DevEnvError as e:
            click.secho(f"❌ {e}", fg="red", err=True)
            sys.exit(1)

    return wrapper


def parse_pairs(values: tuple[str, ...], option: str = "--env") -> dict[str, str]:
    """Turn ``("A=1", "B=2")`` into ``{"A": "1", "B": "2"}``."""
    pairs: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got '{raw}'", param_hint=option)
        pairs[key.strip()] = value
    return pairs
