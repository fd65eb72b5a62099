"""
Tests for project provisioning — folder, index.php, nginx server block.
"""

from pathlib import Path

import pytest

from devenv.core.config.layout import Layout
from devenv.core.services import project_files
from devenv.core.services.generators.nginx import render_index_php, render_nginx_config


@pytest.fixture
def layout(tmp_path: Path) -> Layout:
    return Layout(config_dir=tmp_path / "config", env_dir=tmp_path / "env", base_domain="local.test")


class TestNginxConfig:
    def test_upstream_is_runtime_service(self):
        conf = render_nginx_config("my-blog")
        assert "fastcgi_pass php_my-blog:9000;" in conf
        assert "listen 80;" in conf
        assert "root /var/www/html;" in conf

    def test_braces_balanced(self):
        conf = render_nginx_config("x")
        assert conf.count("{") == conf.count("}")


class TestIndexPhp:
    def test_names_project(self):
        assert "Project: My Blog" in render_index_php("My Blog")

    def test_quotes_escaped(self):
        assert "Project: Bob\\'s Shop" in render_index_php("Bob's Shop")


class TestProvisioning:
    def test_create_project_dir(self, layout: Layout):
        path = project_files.create_project_dir(layout, "my-blog", "My Blog")
        assert path == layout.env_dir / "projects" / "my-blog"
        assert "My Blog" in (path / "index.php").read_text()

    def test_existing_dir_untouched(self, layout: Layout):
        path = layout.project_dir("my-blog")
        path.mkdir(parents=True)
        (path / "index.php").write_text("<?php // mine")
        project_files.create_project_dir(layout, "my-blog", "My Blog")
        assert (path / "index.php").read_text() == "<?php // mine"

    def test_create_nginx_config(self, layout: Layout):
        path = project_files.create_nginx_config(layout, "my-blog")
        assert path == layout.env_dir / "nginx" / "my-blog.conf"
        assert "php_my-blog" in path.read_text()

    def test_existing_nginx_config_untouched(self, layout: Layout):
        layout.nginx_dir.mkdir(parents=True)
        layout.nginx_config_path("x").write_text("custom")
        project_files.create_nginx_config(layout, "x")
        assert layout.nginx_config_path("x").read_text() == "custom"

    def test_remove(self, layout: Layout):
        project_files.create_project_dir(layout, "x", "X")
        project_files.create_nginx_config(layout, "x")
        project_files.remove_project_files(layout, "x")
        assert not layout.project_dir("x").exists()
        assert not layout.nginx_config_path("x").exists()

    def test_remove_missing_is_fine(self, layout: Layout):
        project_files.remove_project_files(layout, "never-created")
