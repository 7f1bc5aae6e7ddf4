"""Go toolchain locator.

Finds the ``go`` executable by trying strategies in increasing cost order
and returning the first hit:

1. search-path: the executable name on PATH (shutil.which, so PATHEXT is
   honoured on Windows)
2. fixed-paths: conventional install locations for the host family
3. volume-subdirs (Windows only): ``<volume>/<dir>/bin/go.exe`` for every
   directory directly under each volume root
4. volume-scan (Windows only): bounded-depth scan of a few likely install
   directories under each volume root

A missing toolchain is a normal outcome: locate() returns None. Filesystem
errors inside a strategy only mean "no match from this strategy".
"""

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Mapping, Optional, Sequence

from gocross.discovery.host import HostFamily, detect_host_family, executable_name
from gocross.discovery.search import BoundedDepthSearch, CancellationToken
from gocross.discovery.settings import LocatorSettings
from gocross.discovery.volumes import DriveLetterVolumeEnumerator, volume_enumerator_for_host
from gocross.errors import ToolchainNotFoundError

logger = logging.getLogger(__name__)

GO_EXECUTABLE = "go"

UNIX_FIXED_PATHS = (
    Path("/usr/local/go/bin/go"),
    Path("/usr/bin/go"),
    Path("/usr/local/bin/go"),
)

WINDOWS_FIXED_PATHS = (
    Path("C:\\Go\\bin\\go.exe"),
    Path("C:\\Program Files\\Go\\bin\\go.exe"),
    Path("C:\\Program Files (x86)\\Go\\bin\\go.exe"),
)

# Sentinel: pick the volume enumerator from the host family
_HOST_DEFAULT = object()


class StrategyKind(Enum):
    """Kinds of discovery strategy."""

    SEARCH_PATH = "search-path"
    FIXED_PATH = "fixed-paths"
    VOLUME_SUBDIR = "volume-subdirs"
    BOUNDED_SCAN = "volume-scan"


@dataclass(frozen=True)
class SearchStrategy:
    """One discovery step.

    Attributes:
        kind: What the strategy does
        cost: Cost tier; strategies run in increasing cost order
        probe: Callable returning a verified executable path or None
    """

    kind: StrategyKind
    cost: int
    probe: Callable[[], Optional[Path]]

    @property
    def name(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class LocateResult:
    """Outcome of a discovery run."""

    path: Optional[Path]
    strategy: Optional[str]
    tried: tuple[str, ...]

    @property
    def found(self) -> bool:
        return self.path is not None


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


class ToolchainLocator:
    """Locates the Go toolchain executable on this machine."""

    def __init__(
        self,
        settings: Optional[LocatorSettings] = None,
        host_family: Optional[HostFamily] = None,
        environ: Optional[Mapping[str, str]] = None,
        search_path: Optional[str] = None,
        fixed_paths: Optional[Sequence[Path]] = None,
        volume_enumerator=_HOST_DEFAULT,
        cancel: Optional[CancellationToken] = None,
        base_name: str = GO_EXECUTABLE,
    ):
        """Initialize the locator.

        Args:
            settings: Discovery heuristics (defaults to LocatorSettings())
            host_family: Host conventions to follow (defaults to the running host)
            environ: Environment used for USERPROFILE (defaults to os.environ)
            search_path: PATH-style string for the search-path strategy (None = PATH)
            fixed_paths: Override the conventional install locations
            volume_enumerator: Object with list_volume_roots(), or None to disable
                the volume strategies (defaults to the host's enumerator)
            cancel: Token that aborts discovery between and inside scans
            base_name: Executable name without extension
        """
        self.settings = settings or LocatorSettings()
        self.host_family = host_family or detect_host_family()
        self.environ = os.environ if environ is None else environ
        self.search_path = search_path
        self.cancel = cancel
        self.base_name = base_name
        self.executable_name = executable_name(base_name, self.host_family)
        self._fixed_paths = fixed_paths
        if volume_enumerator is _HOST_DEFAULT:
            volume_enumerator = volume_enumerator_for_host(self.host_family)
        self.volume_enumerator: Optional[DriveLetterVolumeEnumerator] = volume_enumerator

    def strategies(self) -> list[SearchStrategy]:
        """Return the strategies for this host, cheapest first."""
        strategies = [
            SearchStrategy(StrategyKind.SEARCH_PATH, 0, self._probe_search_path),
            SearchStrategy(StrategyKind.FIXED_PATH, 1, self._probe_fixed_paths),
        ]
        if self.host_family is HostFamily.WINDOWS and self.volume_enumerator is not None:
            strategies.append(SearchStrategy(StrategyKind.VOLUME_SUBDIR, 2, self._probe_volume_subdirs))
            strategies.append(SearchStrategy(StrategyKind.BOUNDED_SCAN, 3, self._probe_volume_scan))
        return sorted(strategies, key=lambda s: s.cost)

    def locate(self) -> Optional[Path]:
        """Return the toolchain executable path, or None if nothing matched."""
        return self.locate_with_strategy().path

    def locate_with_strategy(self) -> LocateResult:
        """Run the strategies in order and report which one matched."""
        tried: list[str] = []
        for strategy in self.strategies():
            if self._cancelled():
                logger.debug("Toolchain discovery cancelled")
                break
            tried.append(strategy.name)
            try:
                path = strategy.probe()
            except OSError as e:
                logger.debug(f"Strategy {strategy.name} failed: {e}")
                path = None
            if path is not None:
                logger.debug(f"Strategy {strategy.name} found {path}")
                return LocateResult(path=path, strategy=strategy.name, tried=tuple(tried))
            logger.debug(f"Strategy {strategy.name}: no match")
        return LocateResult(path=None, strategy=None, tried=tuple(tried))

    def require(self) -> Path:
        """Return the toolchain path.

        Raises:
            ToolchainNotFoundError: If every strategy came up empty
        """
        result = self.locate_with_strategy()
        if result.path is None:
            raise ToolchainNotFoundError(self.executable_name, list(result.tried))
        return result.path

    def fixed_paths(self) -> list[Path]:
        """Return the conventional install locations for this host."""
        if self._fixed_paths is not None:
            return list(self._fixed_paths)
        if self.host_family is HostFamily.UNIX:
            return list(UNIX_FIXED_PATHS)
        paths = list(WINDOWS_FIXED_PATHS)
        profile = self.environ.get("USERPROFILE")
        if profile:
            paths.append(Path(profile) / "Go" / "bin" / "go.exe")
        return paths

    def _cancelled(self) -> bool:
        return self.cancel is not None and self.cancel.cancelled

    def _probe_search_path(self) -> Optional[Path]:
        found = shutil.which(self.base_name, path=self.search_path)
        if found is None:
            return None
        path = Path(os.path.abspath(found))
        return path if _is_file(path) else None

    def _probe_fixed_paths(self) -> Optional[Path]:
        for path in self.fixed_paths():
            if _is_file(path):
                return path
        return None

    def _volume_roots(self) -> list[Path]:
        if self.volume_enumerator is None:
            return []
        return self.volume_enumerator.list_volume_roots()

    def _probe_volume_subdirs(self) -> Optional[Path]:
        for root in self._volume_roots():
            for install_dir in _nested_dirs(root, self.settings.volume_nesting):
                candidate = install_dir / "bin" / self.executable_name
                if _is_file(candidate):
                    return candidate
        return None

    def _probe_volume_scan(self) -> Optional[Path]:
        targets = {self.executable_name, self.base_name}
        searcher = BoundedDepthSearch(self.settings.traversal_budget(), cancel=self.cancel)
        for root in self._volume_roots():
            for parts in self.settings.install_dirs:
                if self._cancelled():
                    return None
                scan_root = root.joinpath(*parts)
                found = searcher.search(scan_root, targets)
                if found is not None:
                    return found
        return None


def _nested_dirs(root: Path, levels: int) -> Iterator[Path]:
    """Yield directories exactly `levels` below root, skipping unreadable ones."""
    if levels <= 0:
        return
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug(f"Cannot list {root}: {e}")
        return

    children: list[Path] = []
    for entry in entries:
        try:
            if entry.is_dir():
                children.append(Path(entry.path))
        except OSError as e:
            logger.debug(f"Skipping unreadable entry {entry.path}: {e}")

    for child in children:
        if levels == 1:
            yield child
        else:
            yield from _nested_dirs(child, levels - 1)


def locate_toolchain(settings: Optional[LocatorSettings] = None, cancel: Optional[CancellationToken] = None) -> Optional[Path]:
    """Locate the Go toolchain on the running host."""
    return ToolchainLocator(settings=settings, cancel=cancel).locate()
