"""
Project provisioning — the folder and nginx file behind each project.

Created on project add (only if absent, so user edits survive) and
deleted on project remove.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from devenv.core.config.layout import Layout, ensure_dir
from devenv.core.errors import IOFailure
from devenv.core.services.generators.nginx import render_index_php, render_nginx_config

logger = logging.getLogger(__name__)


def create_project_dir(layout: Layout, slug: str, display_name: str) -> Path:
    """Create ``projects/<slug>/`` with a starter index.php."""
    project_dir = layout.project_dir(slug)
    if project_dir.exists():
        return project_dir

    ensure_dir(project_dir)
    try:
        (project_dir / "index.php").write_text(render_index_php(display_name), encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"Failed to create index.php: {e}") from e
    logger.info("Created project directory %s", project_dir)
    return project_dir


def create_nginx_config(layout: Layout, slug: str) -> Path:
    """Write ``nginx/<slug>.conf`` unless it already exists."""
    ensure_dir(layout.nginx_dir)
    path = layout.nginx_config_path(slug)
    if path.exists():
        return path

    try:
        path.write_text(render_nginx_config(slug), encoding="utf-8")
    except OSError as e:
        raise IOFailure(f"Failed to write nginx config: {e}") from e
    logger.info("Created nginx config %s", path)
    return path


def remove_project_files(layout: Layout, slug: str) -> None:
    """Delete the nginx file (must succeed) and the folder (best-effort)."""
    config_path = layout.nginx_config_path(slug)
    if config_path.exists():
        try:
            config_path.unlink()
        except OSError as e:
            raise IOFailure(f"Failed to remove Nginx config for project '{slug}': {e}") from e

    project_dir = layout.project_dir(slug)
    if project_dir.exists():
        try:
            shutil.rmtree(project_dir)
        except OSError as e:
            logger.warning("Could not remove project directory '%s': %s", project_dir, e)
