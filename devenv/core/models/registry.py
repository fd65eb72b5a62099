"""
Registry — the single document holding every service and project.

Serialized to ``config.json`` in the config directory and loaded on
every start. Deleting it resets the tool to an empty environment.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from devenv.core.models.project import Project
from devenv.core.models.service import Service


class Registry(BaseModel):
    """Services keyed by name, projects keyed by slug."""

    services: dict[str, Service] = Field(default_factory=dict)
    projects: dict[str, Project] = Field(default_factory=dict)

    def sorted_services(self) -> list[Service]:
        return [self.services[name] for name in sorted(self.services)]

    def sorted_projects(self) -> list[Project]:
        return [self.projects[slug] for slug in sorted(self.projects)]

    def dependents_of(self, name: str) -> list[str]:
        """Names of other services listing *name* as a dependency."""
        return sorted(
            svc.name
            for svc in self.services.values()
            if svc.name != name and name in svc.dependencies
        )

    def projects_using(self, name: str) -> list[str]:
        """Slugs of projects that have *name* attached."""
        return sorted(p.slug for p in self.projects.values() if name in p.services)
