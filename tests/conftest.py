"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from devenv.adapters.mock import MockCertificates, MockOrchestrator, MockPlatform
from devenv.core.config.loader import Settings
from devenv.core.context import Workspace
from devenv.core.models import Registry, Service
from devenv.core.services import registry_ops


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary directory."""
    return Settings(
        base_domain="local.test",
        config_dir=tmp_path / "config",
        env_dir=tmp_path / "env",
    )


@pytest.fixture
def orchestrator() -> MockOrchestrator:
    return MockOrchestrator()


@pytest.fixture
def certs() -> MockCertificates:
    return MockCertificates()


@pytest.fixture
def hosts_file(tmp_path: Path) -> Path:
    path = tmp_path / "hosts"
    path.write_text("127.0.0.1 localhost\n")
    return path


@pytest.fixture
def workspace(
    settings: Settings,
    orchestrator: MockOrchestrator,
    certs: MockCertificates,
    hosts_file: Path,
) -> Workspace:
    """A fully wired workspace with mock adapters."""
    return Workspace.open(
        settings,
        orchestrator=orchestrator,
        certs=certs,
        platform=MockPlatform(hosts_file),
    )


@pytest.fixture
def registry() -> Registry:
    """Registry with a database, a cache depending on it, and one project."""
    reg = Registry()
    registry_ops.add_service(reg, Service(
        name="db",
        image="postgres:16",
        volumes=["db_data:/var/lib/postgresql/data"],
        config={"POSTGRES_PASSWORD": "secret"},
    ))
    registry_ops.add_service(reg, Service(
        name="cache",
        image="redis:7",
        ports=["6379:6379"],
        dependencies=["db"],
    ))
    registry_ops.add_project(reg, "My Blog", "local.test")
    return reg
