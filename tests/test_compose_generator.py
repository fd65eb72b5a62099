"""
Tests for the compose manifest compiler.

Pure unit tests: Registry in → compose dict / YAML out.
No subprocess, no Docker daemon required.
"""

import yaml

from devenv.core.models import Registry, Service
from devenv.core.services import catalog, registry_ops
from devenv.core.services.generators.compose import (
    NETWORK_NAME,
    compile_manifest,
    generate_compose,
    render_manifest,
)


def _registry_with(*services: Service) -> Registry:
    reg = Registry()
    for svc in services:
        registry_ops.add_service(reg, svc)
    return reg


class TestProxyEntry:
    def test_empty_registry(self):
        manifest = compile_manifest(Registry())
        assert list(manifest) == ["version", "services", "networks"]
        assert manifest["version"] == "3"
        assert list(manifest["services"]) == ["traefik"]

    def test_traefik(self):
        traefik = compile_manifest(Registry())["services"]["traefik"]
        assert traefik["image"] == "traefik:latest"
        assert traefik["restart"] == "always"
        assert traefik["ports"] == ["80:80", "443:443", "8080:8080"]
        assert traefik["volumes"] == [
            "/var/run/docker.sock:/var/run/docker.sock",
            "./traefik/config:/etc/traefik",
            "./traefik/certs:/etc/certs",
        ]
        assert traefik["networks"] == [NETWORK_NAME]

    def test_network(self):
        assert compile_manifest(Registry())["networks"] == {NETWORK_NAME: {"driver": "bridge"}}


class TestServiceEntries:
    def test_empty_lists_omitted(self):
        manifest = compile_manifest(_registry_with(Service(name="redis", image="redis:7")))
        entry = manifest["services"]["redis"]
        assert entry == {"image": "redis:7", "networks": [NETWORK_NAME]}
        assert "ports" not in entry
        assert "volumes" not in entry
        assert "depends_on" not in entry
        assert "environment" not in entry

    def test_full_entry(self, registry: Registry):
        services = compile_manifest(registry)["services"]
        assert services["cache"]["ports"] == ["6379:6379"]
        assert services["cache"]["depends_on"] == ["db"]
        assert services["db"]["environment"] == {"POSTGRES_PASSWORD": "secret"}
        assert services["db"]["volumes"] == ["db_data:/var/lib/postgresql/data"]

    def test_services_sorted_by_name(self):
        reg = _registry_with(Service(name="zeta", image="z"), Service(name="alpha", image="a"))
        assert list(compile_manifest(reg)["services"])[:3] == ["traefik", "alpha", "zeta"]

    def test_traefik_config_becomes_labels(self):
        svc = catalog.expand(catalog.get_template("PhpMyAdmin"), "local.test")
        entry = compile_manifest(_registry_with(svc))["services"]["PhpMyAdmin"]
        assert entry["labels"]["traefik.enable"] == "true"
        assert "traefik.enable" not in entry["environment"]
        assert entry["environment"]["PMA_HOSTS"] == "mysql8"
        assert "ports" not in entry


class TestProjectEntries:
    def test_my_blog(self):
        reg = Registry()
        project = registry_ops.add_project(reg, "My Blog", "local.test")
        assert project.slug == "my-blog"
        assert project.url == "https://my-blog.local.test"

        services = compile_manifest(reg)["services"]
        php = services["php_my-blog"]
        nginx = services["nginx_my-blog"]

        assert php["image"] == "php:8.2-fpm"
        assert php["volumes"] == ["./projects/my-blog:/var/www/html"]
        assert php["networks"] == [NETWORK_NAME]
        assert "environment" not in php

        assert nginx["image"] == "nginx:latest"
        assert nginx["volumes"] == [
            "./projects/my-blog:/var/www/html",
            "./nginx/my-blog.conf:/etc/nginx/conf.d/default.conf",
        ]
        assert nginx["depends_on"] == ["php_my-blog"]
        assert nginx["labels"] == {
            "traefik.enable": "true",
            "traefik.http.routers.my-blog.rule": "Host(`my-blog.local.test`)",
            "traefik.http.routers.my-blog.tls": "true",
        }

    def test_routers_unique_per_project(self):
        reg = Registry()
        registry_ops.add_project(reg, "One", "local.test")
        registry_ops.add_project(reg, "Two", "local.test")
        services = compile_manifest(reg)["services"]
        assert "traefik.http.routers.one.rule" in services["nginx_one"]["labels"]
        assert "traefik.http.routers.two.rule" in services["nginx_two"]["labels"]

    def test_project_environment_on_runtime(self):
        reg = Registry()
        registry_ops.add_project(reg, "Shop", "local.test", {"APP_ENV": "dev"})
        assert compile_manifest(reg)["services"]["php_shop"]["environment"] == {"APP_ENV": "dev"}

    def test_projects_after_services(self, registry: Registry):
        assert list(compile_manifest(registry)["services"]) == [
            "traefik", "cache", "db", "php_my-blog", "nginx_my-blog",
        ]


class TestNamedVolumes:
    def test_named_volume_registered(self):
        reg = _registry_with(Service(name="c", image="x", volumes=["cache_data:/data"]))
        assert compile_manifest(reg)["volumes"] == {"cache_data": {}}

    def test_host_paths_ignored(self):
        reg = _registry_with(
            Service(name="a", image="x", volumes=["./app:/data"]),
            Service(name="b", image="x", volumes=["/srv/data:/data"]),
        )
        assert "volumes" not in compile_manifest(reg)

    def test_deduplicated_across_services(self):
        reg = _registry_with(
            Service(name="a", image="x", volumes=["shared:/a"]),
            Service(name="b", image="x", volumes=["shared:/b", "./local:/c"]),
        )
        assert compile_manifest(reg)["volumes"] == {"shared": {}}


class TestRender:
    def test_yaml_roundtrip(self, registry: Registry):
        content = generate_compose(registry)
        assert yaml.safe_load(content) == compile_manifest(registry)

    def test_empty_volume_rendered_as_mapping(self):
        reg = _registry_with(Service(name="c", image="x", volumes=["cache_data:/data"]))
        assert "cache_data: {}" in render_manifest(compile_manifest(reg))

    def test_deterministic(self, registry: Registry):
        assert generate_compose(registry) == generate_compose(registry.model_copy(deep=True))

    def test_key_order_preserved(self, registry: Registry):
        content = generate_compose(registry)
        assert content.index("version:") < content.index("services:") < content.index("networks:")
        assert content.index("traefik:") < content.index("php_my-blog:")
