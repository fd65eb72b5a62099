"""
System commands — hosts-file check, machine facts, full reset.
"""

from __future__ import annotations

import logging
import shutil
from typing import Any

from devenv.core.config.layout import ensure_dir
from devenv.core.context import Workspace
from devenv.core.errors import IOFailure
from devenv.core.services import hosts

logger = logging.getLogger(__name__)


def check_hosts(ws: Workspace) -> list[tuple[str, bool]]:
    with ws.store.read() as registry:
        return hosts.check_hosts_entries(ws.platform.hosts_path, registry, ws.base_domain)


def missing_hosts(ws: Workspace) -> list[str]:
    with ws.store.read() as registry:
        return hosts.missing_hosts_entries(ws.platform.hosts_path, registry, ws.base_domain)


def missing_hosts_block(ws: Workspace) -> str:
    return hosts.hosts_block(missing_hosts(ws))


def system_info(ws: Workspace) -> dict[str, Any]:
    info = ws.platform.system_info()
    info["platform"] = ws.platform.name
    info["docker_installed"] = ws.orchestrator.is_installed()
    info["docker_running"] = info["docker_installed"] and ws.orchestrator.is_engine_available()
    return info


def reset(ws: Workspace) -> None:
    """Delete the config directory and start over with an empty registry.

    The environment directory (project sources) is kept.
    """
    with ws.store.read():
        config_dir = ws.layout.config_dir
        if config_dir.exists():
            try:
                shutil.rmtree(config_dir)
            except OSError as e:
                raise IOFailure(f"Failed to remove config directory: {e}") from e
        ensure_dir(config_dir)
        ensure_dir(ws.layout.env_dir)
        ws.store.reset()
    logger.info("Configuration reset (%s)", config_dir)
