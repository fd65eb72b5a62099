"""
Filesystem layout — every path dev-env reads or writes.

Two roots: the config directory (registry, settings) and the
environment directory (compose file, project sources, nginx and
traefik config). Directory accessors create on first use.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from devenv.core.config.loader import Settings
from devenv.core.errors import IOFailure

REGISTRY_FILE = "config.json"
MANIFEST_FILE = "docker-compose.yml"


@dataclass(frozen=True)
class Layout:
    """Resolved paths for one dev-env installation."""

    config_dir: Path
    env_dir: Path
    base_domain: str

    @classmethod
    def from_settings(cls, settings: Settings) -> Layout:
        return cls(
            config_dir=Path(settings.config_dir),
            env_dir=Path(settings.env_dir),
            base_domain=settings.base_domain,
        )

    # ── Config side ─────────────────────────────────────────────

    @property
    def registry_path(self) -> Path:
        return self.config_dir / REGISTRY_FILE

    # ── Environment side ────────────────────────────────────────

    @property
    def manifest_path(self) -> Path:
        return self.env_dir / MANIFEST_FILE

    @property
    def projects_dir(self) -> Path:
        return self.env_dir / "projects"

    @property
    def nginx_dir(self) -> Path:
        return self.env_dir / "nginx"

    @property
    def traefik_config_dir(self) -> Path:
        return self.env_dir / "traefik" / "config"

    @property
    def traefik_certs_dir(self) -> Path:
        return self.env_dir / "traefik" / "certs"

    @property
    def traefik_config_path(self) -> Path:
        return self.traefik_config_dir / "traefik.toml"

    @property
    def cert_path(self) -> Path:
        return self.traefik_certs_dir / f"{self.base_domain}.crt"

    @property
    def key_path(self) -> Path:
        return self.traefik_certs_dir / f"{self.base_domain}.key"

    def project_dir(self, slug: str) -> Path:
        return self.projects_dir / slug

    def nginx_config_path(self, slug: str) -> Path:
        return self.nginx_dir / f"{slug}.conf"

    # ── Creation ────────────────────────────────────────────────

    def ensure_dirs(self) -> None:
        """Create the config and environment roots if missing."""
        ensure_dir(self.config_dir)
        ensure_dir(self.env_dir)


def ensure_dir(path: Path) -> Path:
    """mkdir -p, surfacing failures as IOFailure."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(f"Failed to create directory {path}: {e}") from e
    return path
