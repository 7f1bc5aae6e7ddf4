"""Exception types raised by gocross.

Discovery never raises for a missing toolchain on its own; callers that
need a hard failure use ToolchainLocator.require(), which raises
ToolchainNotFoundError.
"""

from pathlib import Path
from typing import Optional


class GoCrossError(Exception):
    """Base class for all gocross errors."""

    pass


class ToolchainNotFoundError(GoCrossError):
    """Raised when every discovery strategy is exhausted without a match."""

    def __init__(self, executable_name: str, strategies: Optional[list[str]] = None):
        self.executable_name = executable_name
        self.strategies = strategies or []
        tried = f" (tried: {', '.join(self.strategies)})" if self.strategies else ""
        super().__init__(f"Could not find '{executable_name}' executable{tried}. Install Go and make sure it is on PATH.")


class InvalidPathError(GoCrossError):
    """Raised when a user-supplied project path cannot be resolved."""

    def __init__(self, raw_path: str, reason: str):
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"Invalid path '{raw_path}': {reason}")


class BuildInvocationError(GoCrossError):
    """Raised when the toolchain process fails to start or exits non-zero.

    Attributes:
        output: Combined stdout/stderr text captured from the process
        returncode: Exit status, or None if the process never started
    """

    def __init__(self, message: str, output: str = "", returncode: Optional[int] = None):
        self.output = output
        self.returncode = returncode
        super().__init__(message)


class InvalidInvocationError(BuildInvocationError):
    """Raised when an invocation descriptor fails validation before launch."""

    def __init__(self, message: str, executable: Optional[Path] = None):
        self.executable = executable
        super().__init__(message)
