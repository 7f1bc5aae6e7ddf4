"""Environment construction for cross-compiling with the Go toolchain.

The child process inherits the caller's environment; three variables are
layered on top to declare the cross-compilation target:

- CGO_ENABLED=0 (pure Go build, no C toolchain for the target needed)
- GOOS=<target os>
- GOARCH=<target arch>
"""

import os
from typing import Mapping, Optional


def cross_compile_overlay(goos: str, goarch: str) -> dict[str, str]:
    """Return the environment variables that select the build target."""
    return {
        "CGO_ENABLED": "0",
        "GOOS": goos,
        "GOARCH": goarch,
    }


def get_build_env(overlay: Mapping[str, str], base: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Return a copy of the base environment with overlay applied.

    Args:
        overlay: Variables to set, overriding inherited values
        base: Environment to start from (defaults to os.environ)

    Returns:
        A new dict; neither base nor os.environ is modified.
    """
    env = dict(os.environ if base is None else base)
    env.update(overlay)
    return env
