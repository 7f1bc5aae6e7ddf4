"""
Centralized console output module for gocross.

All user-facing output is prefixed with the elapsed time since program
launch in MM:SS.cc format (minutes:seconds.centiseconds), which makes it
easy to see whether time went into toolchain discovery or the build.

Example output:
    00:00.01 gocross v0.1.0
    00:00.02 Go toolchain: /usr/local/go/bin/go
    00:00.03 ===== Build =====
    00:00.03       Project: /home/me/app
    00:00.03       Target:  linux/amd64

Usage:
    from gocross.output import log, log_detail, init_timer

    init_timer()
    log("Locating Go toolchain...")
    log_detail("Strategy: search-path")

The compiler's own output is relayed with log_raw(), which writes it
verbatim without timestamps.
"""

import sys
import time
from typing import Optional, TextIO

# Global state for the timer
_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = False
_output_file: Optional[TextIO] = None


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Initialize the program timer.

    If not called explicitly, it will be called automatically on first log.

    Args:
        output_stream: Optional output stream (defaults to the current sys.stdout)
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """
    Set verbose mode for logging.

    Args:
        verbose: If True, verbose_only messages are printed as well.
    """
    global _verbose
    _verbose = verbose


def set_output_file(output_file: Optional[TextIO]) -> None:
    """
    Set a file to receive all log output (in addition to the console).

    Args:
        output_file: File object to receive output, or None to disable file output
    """
    global _output_file
    _output_file = output_file


def get_elapsed() -> float:
    """Get elapsed time in seconds since timer initialization."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    """Format the current elapsed time as MM:SS.cc."""
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _write(text: str) -> None:
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(text)
    stream.flush()
    if _output_file is not None:
        _output_file.write(text)
        _output_file.flush()


def _print(message: str) -> None:
    _write(f"{format_timestamp()} {message}\n")


def log(message: str, verbose_only: bool = False) -> None:
    """
    Log a message with timestamp.

    Args:
        message: Message to log
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(message)


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """
    Log an indented detail message.

    Args:
        message: Detail message
        indent: Number of spaces to indent (default 6)
        verbose_only: If True, only print if verbose mode is enabled
    """
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_section(title: str) -> None:
    """Log a section banner, e.g. '===== Build ====='."""
    _print(f"===== {title} =====")


def log_header(title: str, version: str) -> None:
    """
    Log the program header.

    Args:
        title: Program title
        version: Version string
    """
    _print(f"{title} v{version}")
    _print("")


def log_raw(text: str) -> None:
    """
    Write text verbatim, without timestamp.

    Used for the toolchain's combined output so it is relayed exactly as
    produced. A trailing newline is added when missing.
    """
    if not text:
        return
    _write(text if text.endswith("\n") else text + "\n")


def log_error(message: str) -> None:
    """Log an error message."""
    _print(f"ERROR: {message}")


def log_success(message: str) -> None:
    """Log a success message."""
    _print(message)
