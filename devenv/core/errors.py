"""
Error taxonomy — every failure the core can report.

Each error carries a ``kind`` string so that surfaces (CLI, web API)
can present it without matching on class names.
"""

from __future__ import annotations


class DevEnvError(Exception):
    """Base class for all dev-env failures."""

    kind = "error"

    def to_dict(self) -> dict:
        return {"error": str(self), "kind": self.kind}


class ConfigError(DevEnvError):
    """Raised when settings are invalid or unreadable."""

    kind = "config_error"


# ── Identity collisions ─────────────────────────────────────────


class DuplicateNameError(DevEnvError):
    """A service with this name already exists."""

    kind = "duplicate_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Service with name '{name}' already exists")
        self.name = name


class DuplicateSlugError(DevEnvError):
    """A project normalizing to this slug already exists."""

    kind = "duplicate_slug"

    def __init__(self, name: str, slug: str) -> None:
        super().__init__(f"Project with name '{name}' already exists (slug '{slug}')")
        self.name = name
        self.slug = slug


# ── Missing references ──────────────────────────────────────────


class NotFoundError(DevEnvError):
    """Reference to something that does not exist."""

    kind = "not_found"


class UnknownServiceError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Service '{name}' does not exist")
        self.name = name


class UnknownProjectError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Project '{name}' does not exist")
        self.name = name


class UnknownTemplateError(NotFoundError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Predefined service '{name}' not found")
        self.name = name


# ── Dependency graph ────────────────────────────────────────────


class UnknownDependencyError(DevEnvError):
    """A dependency names a service that is not in the registry."""

    kind = "unknown_dependency"

    def __init__(self, dependency: str, message: str | None = None) -> None:
        super().__init__(message or f"Dependency '{dependency}' does not exist")
        self.dependency = dependency


class SelfDependencyError(UnknownDependencyError):
    """A service lists itself as a dependency."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Service '{name}' cannot depend on itself")


class DependencyCycleError(DevEnvError):
    """Dependencies would form a cycle."""

    kind = "dependency_cycle"

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(f"Dependency cycle: {' -> '.join(cycle)}")
        self.cycle = cycle


class ServiceInUseError(DevEnvError):
    """Service cannot be removed while other services depend on it."""

    kind = "service_in_use"

    def __init__(self, name: str, dependents: list[str]) -> None:
        super().__init__(
            f"Service '{name}' is a dependency for: {', '.join(dependents)}. "
            "Remove these dependencies first."
        )
        self.name = name
        self.dependents = dependents


# ── Internal / environment ──────────────────────────────────────


class SerializationError(DevEnvError):
    """A manifest or config document could not be encoded."""

    kind = "serialization_failure"


class IOFailure(DevEnvError):
    """Filesystem or subprocess failure. Wraps the underlying message."""

    kind = "io_failure"


class EngineUnavailableError(DevEnvError):
    """The container engine is missing or not running."""

    kind = "engine_unavailable"


class InvalidNameError(DevEnvError):
    """A display name normalizes to an empty slug."""

    kind = "invalid_name"

    def __init__(self, name: str) -> None:
        super().__init__(f"Name '{name}' has no usable characters")
        self.name = name
