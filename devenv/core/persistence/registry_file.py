"""
Registry persistence — atomic read/write for the Registry.

The registry is stored as JSON in ``<config_dir>/config.json``. Writes
are atomic (write to temp file, then rename) so a crash mid-write never
leaves a truncated file behind.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

from devenv.core.errors import IOFailure, SerializationError
from devenv.core.models.registry import Registry

logger = logging.getLogger(__name__)


def load_registry(path: Path) -> Registry:
    """Load the registry from a JSON file.

    Args:
        path: Path to config.json.

    Returns:
        Registry. A missing or unreadable file yields an empty registry.
    """
    if not path.is_file():
        logger.info("No registry at %s — starting fresh", path)
        return Registry()

    try:
        raw = path.read_text(encoding="utf-8")
        registry = Registry.model_validate(json.loads(raw))
        logger.debug(
            "Loaded registry from %s (%d services, %d projects)",
            path, len(registry.services), len(registry.projects),
        )
        return registry
    except json.JSONDecodeError as e:
        logger.warning("Corrupt registry file %s: %s — starting fresh", path, e)
        return Registry()
    except Exception as e:
        logger.warning("Cannot load registry from %s: %s — starting fresh", path, e)
        return Registry()


def save_registry(registry: Registry, path: Path) -> None:
    """Save the registry to a JSON file (atomic write).

    Raises:
        SerializationError: If the registry cannot be encoded.
        IOFailure: If the file cannot be written.
    """
    try:
        data = registry.model_dump(mode="json", by_alias=True)
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize config: {e}") from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=".config_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            tmp.replace(path)
            logger.debug("Registry saved to %s", path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
    except OSError as e:
        logger.error("Failed to save registry to %s: %s", path, e)
        raise IOFailure(f"Failed to save config file: {e}") from e
