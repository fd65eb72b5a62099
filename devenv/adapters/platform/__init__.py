"""
Platform capabilities — selected once at startup.

    from devenv.adapters.platform import current_platform
    platform = current_platform()
"""

from __future__ import annotations

import sys

from devenv.adapters.base import PlatformAdapter
from devenv.adapters.platform.posix import PosixPlatform
from devenv.adapters.platform.windows import WindowsPlatform


def current_platform() -> PlatformAdapter:
    if sys.platform.startswith("win"):
        return WindowsPlatform()
    return PosixPlatform()


__all__ = ["PosixPlatform", "WindowsPlatform", "current_platform"]
