"""Facts every platform reports the same way."""

from __future__ import annotations

import os
import platform
import socket
from typing import Any


def base_info() -> dict[str, Any]:
    return {
        "os": platform.system(),
        "os_version": platform.release(),
        "arch": platform.machine(),
        "hostname": socket.gethostname(),
        "cpu_count": os.cpu_count() or 0,
        "python_version": platform.python_version(),
    }
