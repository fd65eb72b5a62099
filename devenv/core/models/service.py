"""
Service model — a reusable infrastructure component.

Services are shared by every project in the environment: a database,
a cache, an admin UI. Each one becomes a single entry in the compose
manifest, keyed by ``name``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Service(BaseModel):
    """A container definition the environment runs alongside projects.

    Attributes:
        name:         Registry key and compose service name.
        image:        Container image reference.
        ports:        ``"host:container"`` mappings; empty means internal only.
        volumes:      ``"source:target"`` mounts (named volume or host path).
        is_global:    True for services expanded from the catalog.
        dependencies: Names of other services this one requires.
        config:       Environment variables and ``traefik.*`` proxy labels.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    image: str
    ports: list[str] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    is_global: bool = Field(default=False, alias="global")
    dependencies: list[str] = Field(default_factory=list)
    config: dict[str, str] = Field(default_factory=dict)

    @field_validator("name", "image")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("dependencies")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        seen: list[str] = []
        for dep in value:
            if dep not in seen:
                seen.append(dep)
        return seen

    def named_volumes(self) -> list[str]:
        """Mount sources that are named volumes rather than host paths."""
        names: list[str] = []
        for volume in self.volumes:
            source = volume.split(":", 1)[0]
            if source and not source.startswith((".", "/")) and source not in names:
                names.append(source)
        return names
