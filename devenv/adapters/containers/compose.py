"""
Docker Compose adapter — applies the generated manifest.

Uses the docker CLI (``docker compose``), never the Docker API.
stdout/stderr are captured; on failure stderr becomes the error text.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from devenv.adapters.base import OrchestratorAdapter
from devenv.core.errors import EngineUnavailableError, IOFailure

logger = logging.getLogger(__name__)


class ComposeCLI(OrchestratorAdapter):
    """Run ``docker compose`` against one manifest file.

    Args:
        probe_command: Command used by is_engine_available (platform-specific).
        timeout: Default timeout in seconds for compose calls.
    """

    def __init__(self, probe_command: list[str] | None = None, timeout: int = 300) -> None:
        self.probe_command = probe_command or ["docker", "info"]
        self.timeout = timeout

    def is_installed(self) -> bool:
        return shutil.which("docker") is not None

    def is_engine_available(self) -> bool:
        try:
            result = subprocess.run(
                self.probe_command,
                capture_output=True,
                text=True,
                timeout=15,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Engine probe failed: %s", e)
            return False
        return result.returncode == 0

    def is_running(self, manifest_path: Path) -> bool:
        if not manifest_path.is_file():
            return False
        result = self._compose(manifest_path, "ps", "-q", timeout=30)
        return bool(result.stdout.strip())

    def apply(self, manifest_path: Path) -> str:
        result = self._compose(manifest_path, "up", "-d")
        return self._checked(result, "Failed to start environment")

    def teardown(self, manifest_path: Path, timeout: int | None = None) -> str:
        result = self._compose(manifest_path, "down", timeout=timeout)
        return self._checked(result, "Failed to stop environment")

    def remove_service(self, manifest_path: Path, service: str) -> None:
        self._checked(
            self._compose(manifest_path, "rm", "--stop", "--force", service, timeout=60),
            f"Failed to remove container '{service}'",
        )

    # ── Internals ───────────────────────────────────────────────

    def _compose(
        self,
        manifest_path: Path,
        *args: str,
        timeout: int | None = None,
    ) -> subprocess.CompletedProcess[str]:
        cmd = ["docker", "compose", "-f", str(manifest_path), *args]
        timeout = timeout or self.timeout
        logger.debug("Running: %s (timeout=%ss)", " ".join(cmd), timeout)
        try:
            return subprocess.run(
                cmd,
                cwd=str(manifest_path.parent),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise EngineUnavailableError("Docker CLI not found. Is Docker installed?") from e
        except subprocess.TimeoutExpired as e:
            raise IOFailure(f"docker compose {args[0]} timed out after {timeout}s") from e
        except OSError as e:
            raise IOFailure(f"docker compose {args[0]} failed: {e}") from e

    @staticmethod
    def _checked(result: subprocess.CompletedProcess[str], message: str) -> str:
        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise IOFailure(f"{message}: {detail}")
        return result.stdout.strip()
