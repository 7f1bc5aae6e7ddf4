"""Build target description and output-name derivation."""

from dataclasses import dataclass
from pathlib import Path

WINDOWS_GOOS = "windows"
WINDOWS_EXE_SUFFIX = ".exe"
OUTPUT_NAME_SEPARATOR = "-"


@dataclass(frozen=True)
class BuildTarget:
    """What to build and for which platform.

    Attributes:
        project_dir: Absolute project directory (build working directory)
        source_file: Source file, relative to project_dir or absolute
        goos: Target operating system identifier (e.g. "linux", "windows")
        goarch: Target architecture identifier (e.g. "amd64", "arm64")
        base_name: Base of the output file name (e.g. "main")
    """

    project_dir: Path
    source_file: str
    goos: str
    goarch: str
    base_name: str

    def __post_init__(self) -> None:
        for field_name in ("source_file", "goos", "goarch", "base_name"):
            if not getattr(self, field_name):
                raise ValueError(f"BuildTarget.{field_name} must not be empty")

    @property
    def platform(self) -> str:
        """Target as 'os/arch'."""
        return f"{self.goos}/{self.goarch}"

    @property
    def output_name(self) -> str:
        """Canonical artifact file name: base-os-arch, plus .exe for Windows targets."""
        name = OUTPUT_NAME_SEPARATOR.join((self.base_name, self.goos, self.goarch))
        if self.goos == WINDOWS_GOOS and not name.endswith(WINDOWS_EXE_SUFFIX):
            name += WINDOWS_EXE_SUFFIX
        return name

    @property
    def output_path(self) -> Path:
        """Absolute path the artifact is written to."""
        return self.project_dir / self.output_name

    @property
    def source_path(self) -> Path:
        """Absolute path of the source file."""
        return self.project_dir / self.source_file
