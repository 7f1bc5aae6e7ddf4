"""Go build invocation.

Turns a located toolchain and a BuildTarget into a structured
InvocationDescriptor, validates it, runs it synchronously and reports a
BuildResult. Nothing is retried; a failed build never reports an artifact.

Command shape:
    <go> build -ldflags "-s -w" -o <project>/<name> <project>/<source>

with CGO_ENABLED=0, GOOS and GOARCH layered over the inherited environment
and the project directory as working directory.
"""

import logging
import shlex
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional

from gocross.build.target import BuildTarget
from gocross.build_env import cross_compile_overlay, get_build_env
from gocross.errors import BuildInvocationError, InvalidInvocationError
from gocross.subprocess_utils import run_combined

logger = logging.getLogger(__name__)

BUILD_SUBCOMMAND = "build"
# Strip the symbol table (-s) and DWARF debug info (-w)
STRIP_LDFLAGS = "-s -w"


@dataclass(frozen=True)
class InvocationDescriptor:
    """Everything needed to launch one toolchain process.

    Attributes:
        executable: Toolchain executable
        args: Arguments after the executable
        env_overlay: Variables set on top of the inherited environment
        cwd: Working directory
    """

    executable: Path
    args: tuple[str, ...]
    env_overlay: Mapping[str, str] = field(default_factory=dict)
    cwd: Optional[Path] = None

    @property
    def command(self) -> list[str]:
        """Full argument vector, executable first."""
        return [str(self.executable), *self.args]

    def describe(self) -> str:
        """Shell-style rendering of the command, for display only."""
        overlay = " ".join(f"{k}={shlex.quote(v)}" for k, v in self.env_overlay.items())
        cmd = shlex.join(self.command)
        return f"{overlay} {cmd}" if overlay else cmd

    def validate(self) -> None:
        """Check the descriptor before launch.

        Raises:
            InvalidInvocationError: If the executable is missing, the working
                directory does not exist, or a value contains a NUL byte
        """
        if not self.executable.is_file():
            raise InvalidInvocationError(f"Toolchain executable not found: {self.executable}", self.executable)
        if self.cwd is not None and not self.cwd.is_dir():
            raise InvalidInvocationError(f"Working directory does not exist: {self.cwd}", self.executable)
        for arg in self.args:
            if "\0" in arg:
                raise InvalidInvocationError(f"Argument contains a NUL byte: {arg!r}", self.executable)
        for key, value in self.env_overlay.items():
            if not key or "=" in key or "\0" in key or "\0" in value:
                raise InvalidInvocationError(f"Invalid environment entry: {key!r}={value!r}", self.executable)


@dataclass(frozen=True)
class BuildResult:
    """Outcome of one build invocation.

    Attributes:
        success: True iff the process exited with status 0
        output: Combined stdout/stderr text, verbatim
        artifact_path: Built binary, only set on success
        returncode: Process exit status, None if it never started
        error: Failure detail (launch error or exit status), None on success
        duration: Wall-clock seconds spent in the process
    """

    success: bool
    output: str
    artifact_path: Optional[Path]
    returncode: Optional[int] = None
    error: Optional[str] = None
    duration: float = 0.0

    def raise_for_status(self) -> None:
        """Raise BuildInvocationError if the build failed."""
        if not self.success:
            raise BuildInvocationError(self.error or "Build failed", output=self.output, returncode=self.returncode)


Runner = Callable[..., subprocess.CompletedProcess]


class BuildInvoker:
    """Runs ``go build`` for a BuildTarget."""

    def __init__(
        self,
        runner: Runner = run_combined,
        base_env: Optional[Mapping[str, str]] = None,
        ldflags: str = STRIP_LDFLAGS,
    ):
        """Initialize the invoker.

        Args:
            runner: Callable with run_combined's signature (injected in tests)
            base_env: Environment the overlay is applied to (defaults to os.environ)
            ldflags: Linker flags passed via -ldflags
        """
        self._runner = runner
        self._base_env = base_env
        self.ldflags = ldflags

    def describe(self, toolchain_path: Path, target: BuildTarget) -> InvocationDescriptor:
        """Build the invocation descriptor for target."""
        return InvocationDescriptor(
            executable=Path(toolchain_path),
            args=(
                BUILD_SUBCOMMAND,
                "-ldflags",
                self.ldflags,
                "-o",
                str(target.output_path),
                str(target.source_path),
            ),
            env_overlay=cross_compile_overlay(target.goos, target.goarch),
            cwd=target.project_dir,
        )

    def invoke(self, toolchain_path: Path, target: BuildTarget) -> BuildResult:
        """Build target with the toolchain at toolchain_path.

        Never raises for build problems; they are reported in the result.
        """
        descriptor = self.describe(toolchain_path, target)
        try:
            descriptor.validate()
        except InvalidInvocationError as e:
            logger.debug(f"Invocation rejected: {e}")
            return BuildResult(success=False, output="", artifact_path=None, error=str(e))

        logger.debug(f"Running: {descriptor.describe()} (cwd={descriptor.cwd})")
        env = get_build_env(descriptor.env_overlay, base=self._base_env)
        start = time.time()
        try:
            completed = self._runner(descriptor.command, cwd=descriptor.cwd, env=env)
        except OSError as e:
            duration = time.time() - start
            logger.debug(f"Failed to launch {descriptor.executable}: {e}")
            return BuildResult(
                success=False,
                output="",
                artifact_path=None,
                error=f"Failed to start {descriptor.executable}: {e}",
                duration=duration,
            )
        duration = time.time() - start

        output = completed.stdout or ""
        returncode = completed.returncode
        if returncode == 0:
            logger.debug(f"Build succeeded in {duration:.2f}s")
            return BuildResult(
                success=True,
                output=output,
                artifact_path=target.output_path,
                returncode=0,
                duration=duration,
            )

        logger.debug(f"Build failed with exit status {returncode} in {duration:.2f}s")
        return BuildResult(
            success=False,
            output=output,
            artifact_path=None,
            returncode=returncode,
            error=f"{descriptor.executable.name} exited with status {returncode}",
            duration=duration,
        )
