"""
Tests for persistence — the registry file.
"""

import json
from pathlib import Path

import pytest

from devenv.core.errors import IOFailure
from devenv.core.models import Registry, Service
from devenv.core.persistence.registry_file import load_registry, save_registry


class TestRegistryFile:
    """Tests for registry file persistence."""

    def test_save_and_load(self, tmp_path: Path, registry: Registry):
        """Registry roundtrips through save/load."""
        path = tmp_path / "config.json"
        save_registry(registry, path)
        assert path.is_file()

        loaded = load_registry(path)
        assert loaded == registry
        assert loaded.services["cache"].dependencies == ["db"]
        assert loaded.projects["my-blog"].url == "https://my-blog.local.test"

    def test_load_missing_returns_empty(self, tmp_path: Path):
        """Missing file returns an empty registry."""
        loaded = load_registry(tmp_path / "nonexistent.json")
        assert loaded.services == {}
        assert loaded.projects == {}

    def test_load_corrupt_returns_empty(self, tmp_path: Path):
        """Corrupt JSON returns an empty registry."""
        path = tmp_path / "corrupt.json"
        path.write_text("not json at all {{{")
        assert load_registry(path) == Registry()

    def test_load_wrong_shape_returns_empty(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"services": ["not", "a", "map"]}))
        assert load_registry(path) == Registry()

    def test_global_flag_key(self, tmp_path: Path):
        """The on-disk key is 'global'."""
        path = tmp_path / "config.json"
        reg = Registry(services={"mysql8": Service(name="mysql8", image="mysql:8.0", is_global=True)})
        save_registry(reg, path)

        data = json.loads(path.read_text())
        assert data["services"]["mysql8"]["global"] is True
        assert "is_global" not in data["services"]["mysql8"]
        assert load_registry(path).services["mysql8"].is_global is True

    def test_reads_hand_written_file(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "services": {
                "db": {"name": "db", "image": "mysql:8.0", "global": False},
            },
            "projects": {
                "shop": {"name": "Shop", "slug": "shop", "url": "https://shop.local.test"},
            },
        }))
        loaded = load_registry(path)
        assert loaded.services["db"].ports == []
        assert loaded.projects["shop"].services == []

    def test_save_creates_directories(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "config.json"
        save_registry(Registry(), path)
        assert path.is_file()

    def test_no_temp_files_left(self, tmp_path: Path, registry: Registry):
        save_registry(registry, tmp_path / "config.json")
        save_registry(registry, tmp_path / "config.json")
        assert [p.name for p in tmp_path.iterdir()] == ["config.json"]

    def test_unwritable_location(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        with pytest.raises(IOFailure):
            save_registry(Registry(), blocker / "config.json")
