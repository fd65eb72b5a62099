"""
Adapter base — contracts between the core and the outside world.

The core only talks to the container engine, the certificate tooling
and the operating system through these interfaces. Tests substitute
in-memory fakes; production wiring lives in ``devenv.core.context``.

Unlike the pure core, adapter methods raise ``IOFailure`` or
``EngineUnavailableError`` on failure; nothing is retried.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class OrchestratorAdapter(ABC):
    """Applies and tears down a compose manifest."""

    @abstractmethod
    def is_installed(self) -> bool:
        """Whether the engine CLI is on PATH. Never raises."""

    @abstractmethod
    def is_engine_available(self) -> bool:
        """Whether the engine daemon answers. Never raises."""

    @abstractmethod
    def is_running(self, manifest_path: Path) -> bool:
        """Whether any container of the manifest is up."""

    @abstractmethod
    def apply(self, manifest_path: Path) -> str:
        """Start (or converge) the environment. Returns captured output."""

    @abstractmethod
    def teardown(self, manifest_path: Path, timeout: int | None = None) -> str:
        """Stop and remove the environment's containers."""

    @abstractmethod
    def remove_service(self, manifest_path: Path, service: str) -> None:
        """Stop and remove one service's container."""


class CertificateAdapter(ABC):
    """Produces TLS key pairs."""

    @abstractmethod
    def generate_self_signed(
        self,
        subject: str,
        sans: list[str],
        key_path: Path,
        cert_path: Path,
    ) -> None:
        """Write a PEM key and a self-signed PEM certificate."""


class PlatformAdapter(ABC):
    """Operating-system specifics, one implementation per platform."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform identifier ('posix', 'windows')."""

    @property
    @abstractmethod
    def hosts_path(self) -> Path:
        """Location of the system hosts file."""

    @abstractmethod
    def engine_probe_command(self) -> list[str]:
        """Command whose exit status tells whether the engine is running."""

    @abstractmethod
    def system_info(self) -> dict[str, Any]:
        """OS, architecture, CPU and memory facts. Never raises."""
