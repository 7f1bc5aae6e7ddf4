"""Subprocess utilities for platform-safe toolchain execution.

Wraps subprocess.run so every toolchain call gets the same treatment:
- CREATE_NO_WINDOW on Windows (no console window flashing)
- stdin redirected to DEVNULL (the child never steals terminal input)
- stderr merged into stdout, decoded as text with replacement characters
"""

import subprocess
import sys
from pathlib import Path
from typing import Any, Optional


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: subprocess.CREATE_NO_WINDOW (prevents console window)
        - Other platforms: 0 (no special flags)
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def run_combined(
    cmd: list[str],
    cwd: Optional[Path] = None,
    env: Optional[dict[str, str]] = None,
    **kwargs: Any,
) -> subprocess.CompletedProcess:
    """Run a command to completion and capture combined stdout/stderr.

    Args:
        cmd: Command and arguments
        cwd: Working directory for the child process
        env: Full environment for the child process (None inherits ours)
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess whose stdout holds the interleaved output text and
        whose stderr is None.

    Raises:
        OSError: If the executable cannot be launched
    """
    default_flags = get_subprocess_creation_flags()
    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags

    if "stdin" not in kwargs:
        kwargs["stdin"] = subprocess.DEVNULL

    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd is not None else None,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
        check=False,
        **kwargs,
    )
