"""
Workspace — everything a command needs, owned in one place.

Built once by whichever entry point starts the process:

    - CLI:   main.py → Workspace.open()
    - Web:   server.create_app(workspace)
    - Tests: Workspace.open(settings, orchestrator=Fake(), certs=Fake())

Nothing in the core reaches for global state; commands receive the
workspace explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from devenv.adapters.base import CertificateAdapter, OrchestratorAdapter, PlatformAdapter
from devenv.core.config.layout import Layout
from devenv.core.config.loader import Settings, load_settings
from devenv.core.store import RegistryStore


@dataclass
class Workspace:
    settings: Settings
    layout: Layout
    store: RegistryStore
    orchestrator: OrchestratorAdapter
    certs: CertificateAdapter
    platform: PlatformAdapter

    @property
    def base_domain(self) -> str:
        return self.settings.base_domain

    @classmethod
    def open(
        cls,
        settings: Settings | None = None,
        *,
        orchestrator: OrchestratorAdapter | None = None,
        certs: CertificateAdapter | None = None,
        platform: PlatformAdapter | None = None,
    ) -> Workspace:
        """Resolve settings, create the base directories, load the registry."""
        settings = settings or load_settings()
        layout = Layout.from_settings(settings)
        layout.ensure_dirs()

        if platform is None:
            from devenv.adapters.platform import current_platform

            platform = current_platform()
        if orchestrator is None:
            from devenv.adapters.containers.compose import ComposeCLI

            orchestrator = ComposeCLI(
                probe_command=platform.engine_probe_command(),
                timeout=settings.compose_timeout,
            )
        if certs is None:
            from devenv.adapters.certs.self_signed import SelfSignedCertificateGenerator

            certs = SelfSignedCertificateGenerator()

        return cls(
            settings=settings,
            layout=layout,
            store=RegistryStore.load(layout.registry_path),
            orchestrator=orchestrator,
            certs=certs,
            platform=platform,
        )
