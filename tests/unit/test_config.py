"""Tests for run configuration and project path resolution."""

from pathlib import Path

import pytest

from gocross.config import (
    DEFAULT_BASE_NAME,
    DEFAULT_GOARCH,
    DEFAULT_GOOS,
    DEFAULT_SOURCE_FILE,
    BuildConfig,
    build_config,
    resolve_project_dir,
)
from gocross.errors import InvalidPathError


class TestResolveProjectDir:
    def test_blank_means_cwd(self, tmp_path):
        assert resolve_project_dir("", cwd=tmp_path) == tmp_path
        assert resolve_project_dir(None, cwd=tmp_path) == tmp_path
        assert resolve_project_dir("   ", cwd=tmp_path) == tmp_path

    def test_relative_path_resolved_against_cwd(self, tmp_path):
        (tmp_path / "app").mkdir()
        resolved = resolve_project_dir("app", cwd=tmp_path)
        assert resolved == tmp_path / "app"
        assert resolved.is_absolute()

    def test_dot_dot_is_normalised(self, tmp_path):
        (tmp_path / "a").mkdir()
        assert resolve_project_dir("a/..", cwd=tmp_path) == tmp_path

    def test_absolute_path(self, tmp_path):
        assert resolve_project_dir(str(tmp_path), cwd=Path("/")) == tmp_path

    def test_missing_directory(self, tmp_path):
        with pytest.raises(InvalidPathError, match="does not exist"):
            resolve_project_dir("missing", cwd=tmp_path)

    def test_file_is_not_a_directory(self, tmp_path):
        (tmp_path / "main.go").touch()
        with pytest.raises(InvalidPathError, match="not a directory"):
            resolve_project_dir("main.go", cwd=tmp_path)

    def test_nul_byte(self, tmp_path):
        with pytest.raises(InvalidPathError):
            resolve_project_dir("bad\0path", cwd=tmp_path)


class TestBuildConfig:
    def test_defaults_applied(self, tmp_path):
        config = build_config(cwd=tmp_path)
        assert config == BuildConfig(
            project_dir=tmp_path,
            source_file=DEFAULT_SOURCE_FILE,
            goos=DEFAULT_GOOS,
            goarch=DEFAULT_GOARCH,
            base_name=DEFAULT_BASE_NAME,
        )
        assert (config.source_file, config.goos, config.goarch, config.base_name) == ("main.go", "windows", "amd64", "main")

    def test_blank_values_take_defaults(self, tmp_path):
        config = build_config(source_file="  ", goos="", goarch=None, base_name="", cwd=tmp_path)
        assert config.goos == "windows"
        assert config.base_name == "main"

    def test_values_are_stripped(self, tmp_path):
        config = build_config(goos=" linux ", goarch="arm64\n", base_name=" app", cwd=tmp_path)
        assert (config.goos, config.goarch, config.base_name) == ("linux", "arm64", "app")

    def test_to_target(self, tmp_path):
        target = build_config(goos="linux", goarch="amd64", base_name="app", cwd=tmp_path).to_target()
        assert target.output_path == tmp_path / "app-linux-amd64"
        assert target.source_path == tmp_path / "main.go"

    def test_invalid_project_dir(self, tmp_path):
        with pytest.raises(InvalidPathError):
            build_config(project_dir=str(tmp_path / "nope"))
