"""
Hosts-file checks — which hostnames still need a 127.0.0.1 entry.

Read-only: editing the hosts file needs elevated privileges, so the
user is told what to add instead.
"""

from __future__ import annotations

import logging
from pathlib import Path

from devenv.core.errors import IOFailure
from devenv.core.models.registry import Registry
from devenv.core.services import catalog

logger = logging.getLogger(__name__)

LOOPBACK = "127.0.0.1"
BLOCK_HEADER = "# dev-env"


def required_hostnames(registry: Registry, base_domain: str) -> list[str]:
    """Base domain, dashboard, proxied catalog services, then projects."""
    names = [base_domain, f"traefik.{base_domain}"]
    for template in catalog.list_templates():
        if template.requires_traefik and template.port is not None:
            names.append(catalog.proxy_hostname(template, base_domain))
    for project in registry.sorted_projects():
        names.append(project.hostname)

    unique: list[str] = []
    for name in names:
        if name not in unique:
            unique.append(name)
    return unique


def check_hosts_entries(
    hosts_path: Path, registry: Registry, base_domain: str,
) -> list[tuple[str, bool]]:
    """Return ``(entry, present)`` for every required entry."""
    try:
        content = hosts_path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise IOFailure(f"Failed to read hosts file: {e}") from e

    mapped = _mapped_hostnames(content)
    return [
        (f"{LOOPBACK} {name}", name in mapped)
        for name in required_hostnames(registry, base_domain)
    ]


def missing_hosts_entries(
    hosts_path: Path, registry: Registry, base_domain: str,
) -> list[str]:
    missing = [entry for entry, present in check_hosts_entries(hosts_path, registry, base_domain) if not present]
    if missing:
        logger.info("%d hosts entr(y/ies) missing from %s", len(missing), hosts_path)
    return missing


def hosts_block(entries: list[str]) -> str:
    """Lines ready to append to the hosts file, or "" when nothing is missing."""
    if not entries:
        return ""
    return "\n".join([BLOCK_HEADER, *entries]) + "\n"


def _mapped_hostnames(content: str) -> set[str]:
    """Hostnames mapped to the loopback address, comments ignored."""
    names: set[str] = set()
    for line in content.splitlines():
        fields = line.split("#", 1)[0].split()
        if len(fields) >= 2 and fields[0] == LOOPBACK:
            names.update(fields[1:])
    return names
