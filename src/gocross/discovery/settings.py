"""Discovery heuristics and their environment overrides.

The depth ceiling and the single level of install-directory nesting under
a volume root are fixed heuristics; they live here as constants so they
can be tuned without touching the strategies. Per-run overrides:

- GOCROSS_MAX_DEPTH: depth ceiling for the bounded volume scan (default 4)
- GOCROSS_MAX_NODES: directory-listing ceiling per scan root (default 50000, 0 disables)
- GOCROSS_SCAN_TIMEOUT: seconds allowed per scan root (default 60, 0 disables)
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from gocross.discovery.search import DEFAULT_MAX_DEPTH, TraversalBudget

DEFAULT_VOLUME_NESTING = 1
DEFAULT_MAX_NODES = 50_000
DEFAULT_SCAN_TIMEOUT = 60.0

# Secondary bounds where 0 means "no limit"
_ZERO_MEANS_UNLIMITED = frozenset({"max_nodes", "scan_timeout"})

# Install directories probed under every volume root, in order
DEFAULT_INSTALL_DIRS: tuple[tuple[str, ...], ...] = (
    ("Go",),
    ("Program Files", "Go"),
    ("Program Files (x86)", "Go"),
)


@dataclass(frozen=True)
class LocatorSettings:
    """Tunable discovery heuristics.

    Attributes:
        max_depth: Depth ceiling for the bounded scan of install directories
        volume_nesting: Directory levels below a volume root examined for bin/go.exe
        max_nodes: Directory-listing ceiling per bounded scan (None = unlimited)
        scan_timeout: Seconds allowed per bounded scan (None = unlimited)
        install_dirs: Relative install directories scanned under each volume root
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    volume_nesting: int = DEFAULT_VOLUME_NESTING
    max_nodes: Optional[int] = DEFAULT_MAX_NODES
    scan_timeout: Optional[float] = DEFAULT_SCAN_TIMEOUT
    install_dirs: tuple[tuple[str, ...], ...] = DEFAULT_INSTALL_DIRS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LocatorSettings":
        """Build settings from GOCROSS_* environment variables.

        Raises:
            ValueError: If a variable is set but is not a valid number
        """
        env = os.environ if environ is None else environ
        max_depth = _env_number(env, "GOCROSS_MAX_DEPTH", int)
        max_nodes = _env_number(env, "GOCROSS_MAX_NODES", int)
        timeout = _env_number(env, "GOCROSS_SCAN_TIMEOUT", float)
        return cls(
            max_depth=DEFAULT_MAX_DEPTH if max_depth is None else max_depth,
            max_nodes=DEFAULT_MAX_NODES if max_nodes is None else (max_nodes or None),
            scan_timeout=DEFAULT_SCAN_TIMEOUT if timeout is None else (timeout or None),
        )

    def with_overrides(self, **changes: Optional[float]) -> "LocatorSettings":
        """Return a copy with every non-None keyword applied.

        A zero max_nodes or scan_timeout removes that bound, as it does for
        the GOCROSS_* variables.
        """
        applied = {}
        for key, value in changes.items():
            if value is None:
                continue
            if key in _ZERO_MEANS_UNLIMITED and not value:
                value = None
            applied[key] = value
        return replace(self, **applied)

    def traversal_budget(self) -> TraversalBudget:
        """Return the budget used for each bounded scan."""
        return TraversalBudget(
            max_depth=self.max_depth,
            max_nodes=self.max_nodes,
            max_seconds=self.scan_timeout,
        )


def _env_number(env: Mapping[str, str], key: str, kind: type):
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None
