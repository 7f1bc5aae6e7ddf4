"""Pytest configuration and fixtures for gocross tests."""

import stat
import sys

import pytest

from gocross import output


@pytest.fixture(autouse=True)
def reset_output_module():
    """Reset the output module's global state after each test."""
    yield
    output._output_stream = None
    output._output_file = None
    output._verbose = False


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr are always restored after each test."""
    yield
    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__


@pytest.fixture
def make_executable():
    """Return a helper that creates an executable file (parents included)."""

    def _make(path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\nexit 0\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def empty_search_path(tmp_path):
    """A PATH-style string pointing only at an empty directory."""
    empty = tmp_path / "empty_path_dir"
    empty.mkdir()
    return str(empty)
