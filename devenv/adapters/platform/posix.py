"""Linux and macOS capabilities."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any

from devenv.adapters.base import PlatformAdapter
from devenv.adapters.platform.common import base_info

logger = logging.getLogger(__name__)


class PosixPlatform(PlatformAdapter):
    """Reads /proc/meminfo on Linux, sysctl on macOS."""

    def __init__(self, meminfo_path: Path = Path("/proc/meminfo")) -> None:
        self.meminfo_path = meminfo_path

    @property
    def name(self) -> str:
        return "posix"

    @property
    def hosts_path(self) -> Path:
        return Path("/etc/hosts")

    def engine_probe_command(self) -> list[str]:
        return ["docker", "info"]

    def system_info(self) -> dict[str, Any]:
        info = base_info()
        info["memory_total"] = self._memory_total()
        return info

    def _memory_total(self) -> int | None:
        if self.meminfo_path.is_file():
            try:
                for line in self.meminfo_path.read_text().splitlines():
                    if line.startswith("MemTotal:"):
                        # "MemTotal:       16318596 kB"
                        return int(line.split()[1]) * 1024
            except (OSError, ValueError, IndexError) as e:
                logger.debug("Cannot parse %s: %s", self.meminfo_path, e)
            return None

        try:
            r = subprocess.run(
                ["sysctl", "-n", "hw.memsize"],
                capture_output=True, text=True, timeout=5,
            )
            if r.returncode == 0 and r.stdout.strip().isdigit():
                return int(r.stdout.strip())
        except (OSError, subprocess.TimeoutExpired):
            pass

        try:
            return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        except (ValueError, OSError, AttributeError):
            return None
