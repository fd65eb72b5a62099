"""
Project model — a PHP web application served on its own hostname.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Project(BaseModel):
    """A web application environment.

    ``slug`` is derived from ``name`` once, at creation, and is the key
    for everything else: registry entry, project folder, nginx file,
    proxy router and hostname. ``url`` is stored, not recomputed, so
    changing the base domain later does not move existing projects.
    """

    name: str
    slug: str
    services: list[str] = Field(default_factory=list)
    url: str
    environment: dict[str, str] = Field(default_factory=dict)

    @property
    def hostname(self) -> str:
        """The URL without its scheme."""
        for scheme in ("https://", "http://"):
            if self.url.startswith(scheme):
                return self.url[len(scheme):]
        return self.url
