"""Tests for build_env - cross-compilation environment construction."""

import os

from gocross.build_env import cross_compile_overlay, get_build_env


def test_overlay_contents():
    assert cross_compile_overlay("linux", "arm64") == {"CGO_ENABLED": "0", "GOOS": "linux", "GOARCH": "arm64"}


def test_overlay_wins_over_inherited_values():
    base = {"PATH": "/usr/bin", "GOOS": "plan9", "CGO_ENABLED": "1"}
    env = get_build_env(cross_compile_overlay("windows", "amd64"), base=base)
    assert env == {"PATH": "/usr/bin", "GOOS": "windows", "GOARCH": "amd64", "CGO_ENABLED": "0"}


def test_base_is_not_modified():
    base = {"PATH": "/usr/bin"}
    get_build_env({"GOOS": "linux"}, base=base)
    assert base == {"PATH": "/usr/bin"}


def test_defaults_to_process_environment():
    env = get_build_env({"GOCROSS_TEST_MARKER": "1"})
    assert env is not os.environ
    assert "GOCROSS_TEST_MARKER" not in os.environ
    for key in os.environ:
        assert key in env
