"""
Edge routing bootstrap — make sure traefik can start.

Creates the traefik config and certs directories, writes the default
``traefik.toml`` and a self-signed wildcard certificate. Existing files
are never overwritten: delete them to regenerate. Safe to call on every
start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from devenv.adapters.base import CertificateAdapter
from devenv.core.config.layout import Layout, ensure_dir
from devenv.core.errors import IOFailure
from devenv.core.services.generators.traefik import render_traefik_config

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    """Files written by one bootstrap call (empty when nothing was missing)."""

    written: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.written)

    def to_dict(self) -> dict:
        return {"ok": True, "written": self.written, "changed": self.changed}


def ensure_bootstrap(layout: Layout, certs: CertificateAdapter) -> BootstrapResult:
    """Create whatever part of the edge proxy setup is missing.

    Raises:
        IOFailure: Directory or file creation failed, or the certificate
            could not be synthesized. Not retried.
    """
    result = BootstrapResult()
    ensure_dir(layout.traefik_config_dir)
    ensure_dir(layout.traefik_certs_dir)

    config_path = layout.traefik_config_path
    if not config_path.exists():
        try:
            config_path.write_text(render_traefik_config(layout.base_domain), encoding="utf-8")
        except OSError as e:
            raise IOFailure(f"Failed to write Traefik config: {e}") from e
        logger.info("Wrote %s", config_path)
        result.written.append(str(config_path))

    if not layout.cert_path.exists() or not layout.key_path.exists():
        domain = layout.base_domain
        certs.generate_self_signed(
            subject=f"*.{domain}",
            sans=[f"*.{domain}", domain],
            key_path=layout.key_path,
            cert_path=layout.cert_path,
        )
        logger.info("Generated wildcard certificate for *.%s", domain)
        result.written.extend([str(layout.cert_path), str(layout.key_path)])

    return result
