"""
Registry store — the one shared, lock-guarded Registry.

Every command runs inside ``read()`` or ``transaction()``. A
transaction works on a copy and commits only after the copy has been
persisted, so a validation error or a failed write leaves the live
registry exactly as it was.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from devenv.core.models.registry import Registry
from devenv.core.persistence.registry_file import load_registry, save_registry

logger = logging.getLogger(__name__)


class RegistryStore:
    """Owns the in-memory Registry and its on-disk copy.

    Args:
        registry: Initial contents (default: empty).
        path: config.json location. None keeps the store memory-only.
    """

    def __init__(self, registry: Registry | None = None, path: Path | None = None) -> None:
        self._registry = registry or Registry()
        self.path = path
        self._lock = threading.RLock()

    @classmethod
    def load(cls, path: Path) -> RegistryStore:
        return cls(load_registry(path), path)

    @contextmanager
    def read(self) -> Iterator[Registry]:
        """Hold the lock and expose the live registry. Do not mutate it."""
        with self._lock:
            yield self._registry

    @contextmanager
    def transaction(self) -> Iterator[Registry]:
        """Hold the lock, yield a draft, persist and commit it on success."""
        with self._lock:
            draft = self._registry.model_copy(deep=True)
            yield draft
            if self.path is not None:
                save_registry(draft, self.path)
            self._registry = draft

    def snapshot(self) -> Registry:
        with self._lock:
            return self._registry.model_copy(deep=True)

    def reset(self) -> None:
        """Drop everything in memory (the file is the caller's business)."""
        with self._lock:
            self._registry = Registry()
            logger.info("Registry reset")
