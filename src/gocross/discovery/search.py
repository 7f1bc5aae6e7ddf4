"""Bounded-depth file search.

Walks a directory subtree looking for the first file whose name is in a
target set, without descending past a depth ceiling.

Depth is counted in path segments below the scan root: the root itself is
depth 0, its immediate subdirectories depth 1, and so on. A file counts as
being at the depth of the directory that contains it, so with max_depth=4
a file inside ``root/a/b/c/d/`` is found but one inside ``root/a/b/c/d/e/``
is not.

Besides the depth ceiling, a scan can be limited by the number of
directories listed and by wall-clock time, and can be cancelled from
another thread through a CancellationToken. Any of those ends the scan
with no match.

Traversal order:
    Entries are sorted by name. Files of a directory are checked before any
    of its subdirectories is entered, and subdirectories are walked
    depth-first. Symlinked directories are not followed.
"""

import logging
import os
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Collection, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 4


class CancellationToken:
    """Cooperative cancellation flag shared between a scan and its caller. Thread-safe."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """True once cancel() has been called."""
        return self._event.is_set()


@dataclass(frozen=True)
class TraversalBudget:
    """Limits for a bounded scan.

    Attributes:
        max_depth: Deepest directory level (below the root) that is listed
        max_nodes: Maximum number of directories listed, or None for no limit
        max_seconds: Maximum wall-clock time for the scan, or None for no limit
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_nodes: Optional[int] = None
    max_seconds: Optional[float] = None


class StopReason(Enum):
    """Why a scan ended."""

    FOUND = "found"
    EXHAUSTED = "exhausted"
    NODE_LIMIT = "node_limit"
    TIME_LIMIT = "time_limit"
    CANCELLED = "cancelled"
    NO_ROOT = "no_root"


@dataclass
class SearchStats:
    """Counters describing the most recent scan."""

    dirs_visited: int = 0
    deepest_visited: int = -1
    entries_skipped: int = 0
    stop_reason: Optional[StopReason] = None


class BoundedDepthSearch:
    """Depth-limited search for a file by name."""

    def __init__(
        self,
        budget: Optional[TraversalBudget] = None,
        cancel: Optional[CancellationToken] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the search.

        Args:
            budget: Depth, node and time limits (defaults to depth 4, no other limits)
            cancel: Optional token checked before each directory is listed
            clock: Monotonic time source
        """
        self.budget = budget or TraversalBudget()
        self.cancel = cancel
        self._clock = clock
        self.stats = SearchStats()

    def search(self, root: Union[str, Path], target_names: Collection[str]) -> Optional[Path]:
        """Search root's subtree for a file named in target_names.

        Args:
            root: Directory to scan; a missing root is treated as empty
            target_names: Acceptable file names (exact match)

        Returns:
            Path of the first matching file, or None
        """
        self.stats = SearchStats()
        root = Path(root)
        if not root.is_dir():
            self.stats.stop_reason = StopReason.NO_ROOT
            return None

        names = frozenset(target_names)
        max_depth = self.budget.max_depth
        deadline = None
        if self.budget.max_seconds is not None:
            deadline = self._clock() + self.budget.max_seconds

        # (directory, depth) pairs; popped from the end for depth-first order
        stack: list[tuple[str, int]] = [(str(root), 0)]
        while stack:
            reason = self._check_limits(deadline)
            if reason is not None:
                self.stats.stop_reason = reason
                logger.debug(f"Scan of {root} stopped early: {reason.value} after {self.stats.dirs_visited} directories")
                return None

            directory, depth = stack.pop()
            if depth > max_depth:
                continue

            try:
                with os.scandir(directory) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                self.stats.entries_skipped += 1
                logger.debug(f"Skipping unreadable directory {directory}: {e}")
                continue

            self.stats.dirs_visited += 1
            self.stats.deepest_visited = max(self.stats.deepest_visited, depth)

            subdirs: list[str] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.name in names and entry.is_file():
                        self.stats.stop_reason = StopReason.FOUND
                        return Path(entry.path)
                except OSError as e:
                    self.stats.entries_skipped += 1
                    logger.debug(f"Skipping unreadable entry {entry.path}: {e}")

            if depth + 1 <= max_depth:
                for subdir in reversed(subdirs):
                    stack.append((subdir, depth + 1))

        self.stats.stop_reason = StopReason.EXHAUSTED
        return None

    def _check_limits(self, deadline: Optional[float]) -> Optional[StopReason]:
        if self.cancel is not None and self.cancel.cancelled:
            return StopReason.CANCELLED
        if self.budget.max_nodes is not None and self.stats.dirs_visited >= self.budget.max_nodes:
            return StopReason.NODE_LIMIT
        if deadline is not None and self._clock() >= deadline:
            return StopReason.TIME_LIMIT
        return None


def search(
    root: Union[str, Path],
    target_names: Collection[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    cancel: Optional[CancellationToken] = None,
) -> Optional[Path]:
    """Search root for a file named in target_names, at most max_depth levels down."""
    return BoundedDepthSearch(TraversalBudget(max_depth=max_depth), cancel=cancel).search(root, target_names)
