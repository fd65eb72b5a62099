"""Windows capabilities."""

from __future__ import annotations

import ctypes
import logging
import os
from pathlib import Path
from typing import Any

from devenv.adapters.base import PlatformAdapter
from devenv.adapters.platform.common import base_info

logger = logging.getLogger(__name__)


class _MemoryStatus(ctypes.Structure):
    _fields_ = [
        ("dwLength", ctypes.c_ulong),
        ("dwMemoryLoad", ctypes.c_ulong),
        ("ullTotalPhys", ctypes.c_ulonglong),
        ("ullAvailPhys", ctypes.c_ulonglong),
        ("ullTotalPageFile", ctypes.c_ulonglong),
        ("ullAvailPageFile", ctypes.c_ulonglong),
        ("ullTotalVirtual", ctypes.c_ulonglong),
        ("ullAvailVirtual", ctypes.c_ulonglong),
        ("ullAvailExtendedVirtual", ctypes.c_ulonglong),
    ]


class WindowsPlatform(PlatformAdapter):

    @property
    def name(self) -> str:
        return "windows"

    @property
    def hosts_path(self) -> Path:
        root = os.environ.get("SystemRoot", r"C:\Windows")
        return Path(root) / "System32" / "drivers" / "etc" / "hosts"

    def engine_probe_command(self) -> list[str]:
        return ["cmd", "/C", "docker info"]

    def system_info(self) -> dict[str, Any]:
        info = base_info()
        info["memory_total"] = self._memory_total()
        return info

    def _memory_total(self) -> int | None:
        try:
            status = _MemoryStatus()
            status.dwLength = ctypes.sizeof(_MemoryStatus)
            if ctypes.windll.kernel32.GlobalMemoryStatusEx(ctypes.byref(status)):  # type: ignore[attr-defined]
                return int(status.ullTotalPhys)
        except (AttributeError, OSError) as e:
            logger.debug("GlobalMemoryStatusEx unavailable: %s", e)
        return None
