"""
Environment commands — compile, write, start, stop, inspect.

Also home of the shutdown guard: when this process started the
environment, an interrupt or normal exit tears it down again.
"""

from __future__ import annotations

import atexit
import logging
import signal
import sys
import threading
from dataclasses import dataclass
from pathlib import Path

from devenv.core.context import Workspace
from devenv.core.errors import DevEnvError, EngineUnavailableError, IOFailure, NotFoundError
from devenv.core.services.edge_bootstrap import BootstrapResult, ensure_bootstrap
from devenv.core.services.generators.compose import generate_compose

logger = logging.getLogger(__name__)


@dataclass
class EnvironmentStatus:
    engine_installed: bool = False
    engine_running: bool = False
    environment_running: bool = False
    manifest_exists: bool = False
    manifest_path: str = ""

    def to_dict(self) -> dict:
        return {
            "engine_installed": self.engine_installed,
            "engine_running": self.engine_running,
            "environment_running": self.environment_running,
            "manifest_exists": self.manifest_exists,
            "manifest_path": self.manifest_path,
        }


def generate_manifest(ws: Workspace) -> str:
    """Compile the registry to compose YAML (nothing is written)."""
    with ws.store.read() as registry:
        return generate_compose(registry)


def write_manifest(ws: Workspace) -> Path:
    """Compile and write docker-compose.yml into the environment dir."""
    with ws.store.read() as registry:
        content = "# Generated by dev-env — do not edit, changes are overwritten\n"
        content += generate_compose(registry)
        path = ws.layout.manifest_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise IOFailure(f"Failed to save docker-compose.yml: {e}") from e
    logger.info("Wrote %s", path)
    return path


def manifest_exists(ws: Workspace) -> bool:
    return ws.layout.manifest_path.is_file()


def bootstrap_proxy(ws: Workspace) -> BootstrapResult:
    return ensure_bootstrap(ws.layout, ws.certs)


def start_environment(
    ws: Workspace,
    *,
    regenerate: bool = True,
    guard: ShutdownGuard | None = None,
) -> str:
    """Bring the environment up.

    Args:
        regenerate: Rewrite the manifest and bootstrap the proxy first.
        guard: Shutdown guard to arm once the environment is up.

    Raises:
        NotFoundError: No manifest and regenerate=False.
        EngineUnavailableError: Docker is not running.
        IOFailure: ``docker compose up`` failed.
    """
    if regenerate:
        write_manifest(ws)
        bootstrap_proxy(ws)

    manifest = ws.layout.manifest_path
    if not manifest.is_file():
        raise NotFoundError("Docker Compose file not found. Generate configuration first.")
    if not ws.orchestrator.is_engine_available():
        raise EngineUnavailableError("Docker is not running. Please start it first.")

    output = ws.orchestrator.apply(manifest)
    if guard is not None:
        guard.mark_started()
    logger.info("Environment started from %s", manifest)
    return output


def stop_environment(ws: Workspace, *, guard: ShutdownGuard | None = None) -> str:
    manifest = ws.layout.manifest_path
    if not manifest.is_file():
        raise NotFoundError("Docker Compose file not found. Generate configuration first.")

    output = ws.orchestrator.teardown(manifest)
    if guard is not None:
        guard.mark_stopped()
    logger.info("Environment stopped")
    return output


def environment_status(ws: Workspace) -> EnvironmentStatus:
    manifest = ws.layout.manifest_path
    status = EnvironmentStatus(
        engine_installed=ws.orchestrator.is_installed(),
        manifest_exists=manifest.is_file(),
        manifest_path=str(manifest),
    )
    if status.engine_installed:
        status.engine_running = ws.orchestrator.is_engine_available()
    if status.engine_running and status.manifest_exists:
        try:
            status.environment_running = ws.orchestrator.is_running(manifest)
        except DevEnvError as e:
            logger.warning("Cannot query environment state: %s", e)
    return status


class ShutdownGuard:
    """Tear the environment down when the process exits.

    Installed once per process. Teardown only happens if the
    environment was started through this guard, is bounded by
    ``teardown_timeout`` and never raises.
    """

    def __init__(self, ws: Workspace) -> None:
        self.ws = ws
        self._started = False
        self._installed = False
        self._lock = threading.Lock()

    @property
    def started(self) -> bool:
        return self._started

    def install(self) -> None:
        if self._installed:
            return
        atexit.register(self.teardown)
        if threading.current_thread() is threading.main_thread():
            for sig in (signal.SIGINT, signal.SIGTERM):
                signal.signal(sig, self._on_signal)
        self._installed = True
        logger.debug("Shutdown guard installed")

    def mark_started(self) -> None:
        with self._lock:
            self._started = True

    def mark_stopped(self) -> None:
        with self._lock:
            self._started = False

    def teardown(self) -> None:
        with self._lock:
            if not self._started:
                return
            self._started = False

        manifest = self.ws.layout.manifest_path
        logger.warning("Stopping environment before exit...")
        try:
            self.ws.orchestrator.teardown(manifest, timeout=self.ws.settings.teardown_timeout)
        except DevEnvError as e:
            logger.warning("Teardown on exit failed: %s", e)

    def _on_signal(self, signum: int, _frame: object) -> None:
        logger.info("Received signal %d", signum)
        self.teardown()
        sys.exit(0)
