"""
Catalog template model — a ready-made service blueprint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CatalogTemplate(BaseModel):
    """A predefined service the user can add in one step.

    ``port`` is only used when ``requires_traefik`` is set: the service
    is then reached through the edge proxy instead of a host port.
    """

    name: str
    image: str
    description: str = ""
    port: int | None = None
    requires_traefik: bool = False
    environment: dict[str, str] = Field(default_factory=dict)
    volumes: list[str] = Field(default_factory=list)
