"""
Tests for the edge proxy bootstrap — traefik.toml and certificates.
"""

import tomllib
from pathlib import Path

import pytest

from devenv.adapters.mock import MockCertificates
from devenv.core.config.layout import Layout
from devenv.core.errors import IOFailure
from devenv.core.services.edge_bootstrap import ensure_bootstrap
from devenv.core.services.generators.traefik import render_traefik_config


@pytest.fixture
def layout(tmp_path: Path) -> Layout:
    return Layout(config_dir=tmp_path / "config", env_dir=tmp_path / "env", base_domain="local.test")


class TestTraefikConfig:
    def test_valid_toml(self):
        data = tomllib.loads(render_traefik_config("local.test"))
        assert data["api"] == {"dashboard": True, "insecure": True}
        assert data["log"]["level"] == "INFO"

    def test_docker_provider(self):
        docker = tomllib.loads(render_traefik_config("local.test"))["providers"]["docker"]
        assert docker["exposedByDefault"] is False
        assert docker["network"] == "dev_env_network"

    def test_entrypoints_redirect(self):
        entry = tomllib.loads(render_traefik_config("local.test"))["entryPoints"]
        assert entry["web"]["address"] == ":80"
        redirect = entry["web"]["http"]["redirections"]["entryPoint"]
        assert redirect["to"] == "websecure"
        assert redirect["scheme"] == "https"
        assert redirect["permanent"] is True
        assert entry["websecure"]["address"] == ":443"

    def test_tls(self):
        tls = tomllib.loads(render_traefik_config("dev.example"))["tls"]
        assert tls["certificates"][0] == {
            "certFile": "/etc/certs/dev.example.crt",
            "keyFile": "/etc/certs/dev.example.key",
        }
        assert tls["domains"][0] == {"main": "*.dev.example", "sans": ["dev.example"]}


class TestEnsureBootstrap:
    def test_first_call_writes_everything(self, layout: Layout):
        certs = MockCertificates()
        result = ensure_bootstrap(layout, certs)

        assert layout.traefik_config_path.is_file()
        assert layout.cert_path.is_file()
        assert layout.key_path.is_file()
        assert len(result.written) == 3
        assert certs.calls == [{"subject": "*.local.test", "sans": ["*.local.test", "local.test"]}]

    def test_second_call_writes_nothing(self, layout: Layout):
        certs = MockCertificates()
        ensure_bootstrap(layout, certs)
        before = layout.traefik_config_path.stat().st_mtime_ns

        result = ensure_bootstrap(layout, certs)

        assert result.written == []
        assert result.changed is False
        assert len(certs.calls) == 1
        assert layout.traefik_config_path.stat().st_mtime_ns == before

    def test_existing_config_not_overwritten(self, layout: Layout):
        layout.traefik_config_dir.mkdir(parents=True)
        layout.traefik_config_path.write_text("# custom\n")
        ensure_bootstrap(layout, MockCertificates())
        assert layout.traefik_config_path.read_text() == "# custom\n"

    def test_missing_key_regenerates_pair(self, layout: Layout):
        certs = MockCertificates()
        ensure_bootstrap(layout, certs)
        layout.key_path.unlink()
        result = ensure_bootstrap(layout, certs)
        assert len(certs.calls) == 2
        assert str(layout.key_path) in result.written

    def test_certificate_failure_surfaces(self, layout: Layout):
        with pytest.raises(IOFailure):
            ensure_bootstrap(layout, MockCertificates(fail=True))
        # Config was written before the certificate step
        assert layout.traefik_config_path.is_file()
