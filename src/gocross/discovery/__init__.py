"""Go toolchain discovery.

Public entry points:
- ToolchainLocator: ordered, cost-increasing discovery of the go executable
- BoundedDepthSearch: depth-limited file search (gocross.discovery.search.search
  is the one-call form)
- DriveLetterVolumeEnumerator: volume roots on Windows-like hosts
"""

from gocross.discovery.host import HostFamily, detect_host_family
from gocross.discovery.locator import (
    LocateResult,
    SearchStrategy,
    StrategyKind,
    ToolchainLocator,
    locate_toolchain,
)
from gocross.discovery.search import (
    BoundedDepthSearch,
    CancellationToken,
    TraversalBudget,
)
from gocross.discovery.settings import LocatorSettings
from gocross.discovery.volumes import DriveLetterVolumeEnumerator, volume_enumerator_for_host

__all__ = [
    "BoundedDepthSearch",
    "CancellationToken",
    "DriveLetterVolumeEnumerator",
    "HostFamily",
    "LocateResult",
    "LocatorSettings",
    "SearchStrategy",
    "StrategyKind",
    "ToolchainLocator",
    "TraversalBudget",
    "detect_host_family",
    "locate_toolchain",
    "volume_enumerator_for_host",
]
