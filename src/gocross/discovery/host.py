"""Host operating-system family detection."""

import sys
from enum import Enum


class HostFamily(Enum):
    """Filesystem/executable conventions of the machine we run on."""

    WINDOWS = "windows"
    UNIX = "unix"

    def __str__(self) -> str:
        return self.value


def detect_host_family() -> HostFamily:
    """Return the host family for the running interpreter."""
    if sys.platform == "win32":
        return HostFamily.WINDOWS
    return HostFamily.UNIX


def executable_name(base_name: str, host_family: HostFamily) -> str:
    """Return the on-disk executable file name (adds .exe on Windows)."""
    if host_family is HostFamily.WINDOWS and not base_name.lower().endswith(".exe"):
        return f"{base_name}.exe"
    return base_name
