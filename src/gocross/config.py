"""Run configuration for gocross.

BuildConfig is the explicit record the core consumes. Defaults are applied
here, at the boundary, so discovery and the build never look at
interactive state.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gocross.build.target import BuildTarget
from gocross.errors import InvalidPathError

DEFAULT_SOURCE_FILE = "main.go"
DEFAULT_GOOS = "windows"
DEFAULT_GOARCH = "amd64"
DEFAULT_BASE_NAME = "main"


@dataclass(frozen=True)
class BuildConfig:
    """Fully-resolved parameters for one build.

    Attributes:
        project_dir: Absolute project directory
        source_file: Source file name relative to project_dir
        goos: Target operating system
        goarch: Target architecture
        base_name: Base output file name
    """

    project_dir: Path
    source_file: str = DEFAULT_SOURCE_FILE
    goos: str = DEFAULT_GOOS
    goarch: str = DEFAULT_GOARCH
    base_name: str = DEFAULT_BASE_NAME

    def to_target(self) -> BuildTarget:
        """Return the BuildTarget described by this configuration."""
        return BuildTarget(
            project_dir=self.project_dir,
            source_file=self.source_file,
            goos=self.goos,
            goarch=self.goarch,
            base_name=self.base_name,
        )


def resolve_project_dir(raw_path: Optional[str], cwd: Optional[Path] = None) -> Path:
    """Resolve user input to an absolute project directory.

    Args:
        raw_path: User input; blank or None means the current directory
        cwd: Directory relative paths are resolved against (defaults to os.getcwd())

    Returns:
        Absolute path of an existing directory

    Raises:
        InvalidPathError: If the path cannot be made absolute or is not a directory
    """
    text = (raw_path or "").strip()
    try:
        base = Path(cwd) if cwd is not None else Path(os.getcwd())
        if not text:
            resolved = base
        else:
            candidate = Path(os.path.expanduser(text))
            resolved = Path(os.path.abspath(candidate if candidate.is_absolute() else base / candidate))
        is_dir = resolved.is_dir()
        exists = resolved.exists()
    except (OSError, ValueError) as e:
        raise InvalidPathError(text, str(e)) from e

    if not is_dir:
        reason = "not a directory" if exists else "directory does not exist"
        raise InvalidPathError(text or str(resolved), reason)
    return resolved


def build_config(
    project_dir: Optional[str] = None,
    source_file: Optional[str] = None,
    goos: Optional[str] = None,
    goarch: Optional[str] = None,
    base_name: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> BuildConfig:
    """Create a BuildConfig, applying defaults to missing or blank values.

    Raises:
        InvalidPathError: If project_dir cannot be resolved
    """
    return BuildConfig(
        project_dir=resolve_project_dir(project_dir, cwd=cwd),
        source_file=_or_default(source_file, DEFAULT_SOURCE_FILE),
        goos=_or_default(goos, DEFAULT_GOOS),
        goarch=_or_default(goarch, DEFAULT_GOARCH),
        base_name=_or_default(base_name, DEFAULT_BASE_NAME),
    )


def _or_default(value: Optional[str], default: str) -> str:
    value = (value or "").strip()
    return value or default
