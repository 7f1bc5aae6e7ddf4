"""Unit tests for the bounded-depth file search."""

import itertools
import os

import pytest

import gocross.discovery.search as search_module
from gocross.discovery.search import (
    BoundedDepthSearch,
    CancellationToken,
    StopReason,
    TraversalBudget,
    search,
)

TARGETS = {"go.exe", "go"}


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    return path


def _depth_below(root, path):
    rel = os.path.relpath(path, root)
    return 0 if rel == "." else len(rel.split(os.sep))


def _deep_tree(root, levels):
    """Create root/d1/d2/.../d<levels> and return the deepest directory."""
    current = root
    for i in range(1, levels + 1):
        current = current / f"d{i}"
    current.mkdir(parents=True)
    return current


class TestDepthBound:
    """Depth ceiling behaviour."""

    def test_finds_file_in_root(self, tmp_path):
        """A file directly in the root is at depth 0."""
        target = _touch(tmp_path / "go")
        assert search(tmp_path, TARGETS, max_depth=0) == target

    def test_finds_file_at_max_depth(self, tmp_path):
        """A file in a directory exactly max_depth levels down is found."""
        target = _touch(_deep_tree(tmp_path, 4) / "go.exe")
        assert search(tmp_path, TARGETS, max_depth=4) == target

    def test_file_beyond_max_depth_is_not_found(self, tmp_path):
        """A file one level past the ceiling is absent."""
        _touch(_deep_tree(tmp_path, 5) / "go.exe")
        assert search(tmp_path, TARGETS, max_depth=4) is None

    @pytest.mark.parametrize("max_depth", [0, 1, 2, 3, 4, 5])
    def test_never_lists_directories_deeper_than_max_depth(self, tmp_path, max_depth):
        """No directory below the ceiling is ever listed."""
        _deep_tree(tmp_path, 8)
        listed = []
        real_scandir = os.scandir

        def recording_scandir(path):
            listed.append(path)
            return real_scandir(path)

        searcher = BoundedDepthSearch(TraversalBudget(max_depth=max_depth))
        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(search_module.os, "scandir", recording_scandir)
            assert searcher.search(tmp_path, TARGETS) is None

        assert max(_depth_below(tmp_path, p) for p in listed) == max_depth
        assert searcher.stats.deepest_visited == max_depth
        assert searcher.stats.stop_reason is StopReason.EXHAUSTED

    def test_negative_depth_lists_nothing(self, tmp_path):
        """A negative ceiling prunes even the root."""
        _touch(tmp_path / "go")
        assert search(tmp_path, TARGETS, max_depth=-1) is None

    def test_pruned_branch_does_not_stop_siblings(self, tmp_path):
        """A pruned deep branch still lets a shallow sibling branch be searched."""
        _deep_tree(tmp_path / "a", 6)
        target = _touch(tmp_path / "b" / "bin" / "go")
        assert search(tmp_path, TARGETS, max_depth=2) == target


class TestMatching:
    """Matching and traversal order."""

    def test_nonexistent_root_returns_none(self, tmp_path):
        """A missing root is an empty subtree, not an error."""
        searcher = BoundedDepthSearch()
        assert searcher.search(tmp_path / "missing", TARGETS) is None
        assert searcher.stats.stop_reason is StopReason.NO_ROOT

    def test_root_that_is_a_file_returns_none(self, tmp_path):
        """A root that is a regular file yields no match."""
        root = _touch(tmp_path / "go")
        assert search(root, TARGETS) is None

    def test_ignores_directories_with_target_name(self, tmp_path):
        """Only files match; a directory named 'go' is descended into instead."""
        (tmp_path / "go").mkdir()
        target = _touch(tmp_path / "go" / "bin" / "go")
        assert search(tmp_path, TARGETS) == target

    def test_ignores_other_file_names(self, tmp_path):
        """Names must match exactly."""
        _touch(tmp_path / "bin" / "gofmt")
        _touch(tmp_path / "bin" / "go.exe.bak")
        assert search(tmp_path, TARGETS) is None

    def test_files_checked_before_subdirectories(self, tmp_path):
        """A match in a directory wins over matches further down."""
        _touch(tmp_path / "a" / "go")
        target = _touch(tmp_path / "go")
        assert search(tmp_path, TARGETS) == target

    def test_sorted_depth_first_order(self, tmp_path):
        """Subdirectories are walked in name order, depth first."""
        first = _touch(tmp_path / "a" / "x" / "go")
        _touch(tmp_path / "b" / "go")
        assert search(tmp_path, TARGETS) == first

    def test_stops_at_first_match(self, tmp_path):
        """Once a match is found no further directories are listed."""
        _touch(tmp_path / "a" / "go")
        for name in ("b", "c", "d"):
            (tmp_path / name / "sub").mkdir(parents=True)

        searcher = BoundedDepthSearch()
        assert searcher.search(tmp_path, TARGETS) == tmp_path / "a" / "go"
        assert searcher.stats.stop_reason is StopReason.FOUND
        # root and a only
        assert searcher.stats.dirs_visited == 2

    def test_accepts_string_root(self, tmp_path):
        """The root may be given as a string."""
        target = _touch(tmp_path / "bin" / "go.exe")
        assert search(str(tmp_path), TARGETS) == target

    def test_package_exposes_search_submodule(self):
        """gocross.discovery.search resolves to the submodule, not the function."""
        import gocross.discovery

        assert gocross.discovery.search is search_module
        assert search_module.search is search


class TestEntryErrors:
    """Unreadable entries are skipped."""

    def test_unreadable_directory_is_skipped(self, tmp_path, monkeypatch):
        """A directory that cannot be listed does not abort the search."""
        _touch(tmp_path / "a" / "go")
        target = _touch(tmp_path / "b" / "go")
        blocked = str(tmp_path / "a")
        real_scandir = os.scandir

        def guarded_scandir(path):
            if os.fspath(path) == blocked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        monkeypatch.setattr(search_module.os, "scandir", guarded_scandir)
        searcher = BoundedDepthSearch()
        assert searcher.search(tmp_path, TARGETS) == target
        assert searcher.stats.entries_skipped == 1

    def test_broken_symlink_is_skipped(self, tmp_path):
        """A dangling link with the target name is not a match."""
        try:
            os.symlink(tmp_path / "nowhere", tmp_path / "go")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        target = _touch(tmp_path / "real" / "go")
        assert search(tmp_path, TARGETS) == target

    def test_symlinked_directories_are_not_followed(self, tmp_path):
        """Directory links are not traversed."""
        outside = tmp_path / "outside"
        _touch(outside / "go")
        root = tmp_path / "root"
        root.mkdir()
        try:
            os.symlink(outside, root / "link", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        assert search(root, TARGETS) is None


class TestSecondaryBounds:
    """Node ceiling, time ceiling and cancellation."""

    def test_node_limit_stops_scan(self, tmp_path):
        """The scan gives up after max_nodes directories."""
        _touch(tmp_path / "a" / "b" / "go")
        searcher = BoundedDepthSearch(TraversalBudget(max_depth=4, max_nodes=2))
        assert searcher.search(tmp_path, TARGETS) is None
        assert searcher.stats.stop_reason is StopReason.NODE_LIMIT
        assert searcher.stats.dirs_visited == 2

    def test_node_limit_large_enough_allows_match(self, tmp_path):
        """A generous node limit does not change the result."""
        target = _touch(tmp_path / "a" / "b" / "go")
        searcher = BoundedDepthSearch(TraversalBudget(max_depth=4, max_nodes=3))
        assert searcher.search(tmp_path, TARGETS) == target

    def test_time_limit_stops_scan(self, tmp_path):
        """The scan gives up once the deadline passes."""
        _touch(tmp_path / "a" / "b" / "go")
        ticks = itertools.count(start=0.0, step=1.0)
        searcher = BoundedDepthSearch(
            TraversalBudget(max_depth=4, max_seconds=1.5),
            clock=lambda: next(ticks),
        )
        assert searcher.search(tmp_path, TARGETS) is None
        assert searcher.stats.stop_reason is StopReason.TIME_LIMIT

    def test_cancelled_token_stops_scan(self, tmp_path):
        """A cancelled token ends the scan with no match."""
        _touch(tmp_path / "go")
        token = CancellationToken()
        token.cancel()
        searcher = BoundedDepthSearch(cancel=token)
        assert searcher.search(tmp_path, TARGETS) is None
        assert searcher.stats.stop_reason is StopReason.CANCELLED
        assert searcher.stats.dirs_visited == 0

    def test_token_starts_uncancelled(self):
        token = CancellationToken()
        assert token.cancelled is False
        token.cancel()
        assert token.cancelled is True
