"""
Command-line interface for gocross.

    gocross build      Locate Go and cross-compile a program (prompts for parameters)
    gocross locate     Print where the Go toolchain was found
"""

import argparse
import logging
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, NoReturn, Optional, TextIO

from rich.console import Console

from gocross import __version__
from gocross.build import BuildInvoker
from gocross.config import build_config
from gocross.discovery import LocateResult, LocatorSettings, ToolchainLocator
from gocross.errors import GoCrossError, InvalidPathError
from gocross.output import (
    init_timer,
    log,
    log_detail,
    log_error,
    log_header,
    log_raw,
    log_section,
    log_success,
    set_output_file,
    set_verbose,
)
from gocross.prompts import prompt_build_config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


@dataclass
class DiscoveryArgs:
    """Discovery overrides shared by all commands."""

    max_depth: Optional[int] = None
    max_nodes: Optional[int] = None
    scan_timeout: Optional[float] = None


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    project_dir: Optional[str] = None
    source: Optional[str] = None
    goos: Optional[str] = None
    goarch: Optional[str] = None
    name: Optional[str] = None
    no_input: bool = False
    verbose: bool = False
    discovery: Optional[DiscoveryArgs] = None


@dataclass
class LocateArgs:
    """Arguments for the locate command."""

    verbose: bool = False
    discovery: Optional[DiscoveryArgs] = None


def _console() -> Console:
    return Console(highlight=False)


def _banner(style: str, text: str) -> None:
    _console().print(f"[{style}]{text}[/{style}]")


def _settings(discovery: Optional[DiscoveryArgs]) -> LocatorSettings:
    settings = LocatorSettings.from_env()
    if discovery is None:
        return settings
    return settings.with_overrides(
        max_depth=discovery.max_depth,
        max_nodes=discovery.max_nodes,
        scan_timeout=discovery.scan_timeout,
    )


def _locate(discovery: Optional[DiscoveryArgs]) -> LocateResult:
    log("Locating Go toolchain...")
    result = ToolchainLocator(settings=_settings(discovery)).locate_with_strategy()
    if result.path is None:
        print()
        _banner("bold red", "✗ Go toolchain not found")
        print()
        print("Could not find the go executable. Install Go and make sure it is on PATH.")
        log_detail(f"Tried: {', '.join(result.tried)}", verbose_only=True)
    return result


def build_command(args: BuildArgs, input_fn: Callable[[str], str] = input) -> int:
    """Cross-compile a Go program.

    Examples:
        gocross build                                   # prompt for everything
        gocross build --goos linux --goarch arm64       # prompt for the rest
        gocross build --no-input -p ~/src/app --name app

    Returns:
        Process exit status
    """
    try:
        # Parameters first: an invalid project path must stop us before any discovery
        if args.no_input:
            config = build_config(
                project_dir=args.project_dir,
                source_file=args.source,
                goos=args.goos,
                goarch=args.goarch,
                base_name=args.name,
            )
        else:
            config = prompt_build_config(
                input_fn=input_fn,
                project_dir=args.project_dir,
                source_file=args.source,
                goos=args.goos,
                goarch=args.goarch,
                base_name=args.name,
            )

        located = _locate(args.discovery)
        if located.path is None:
            return EXIT_FAILURE
        log(f"Go toolchain: {located.path}")
        log_detail(f"Found by: {located.strategy}", verbose_only=True)

        target = config.to_target()
        print()
        log_section("Build")
        log_detail(f"Project: {target.project_dir}")
        log_detail(f"Source:  {target.source_path}")
        log_detail(f"Target:  {target.platform}")
        log_detail(f"Output:  {target.output_path}")
        print()

        invoker = BuildInvoker()
        log_detail(f"Command: {invoker.describe(located.path, target).describe()}", verbose_only=True)
        result = invoker.invoke(located.path, target)
        log_raw(result.output)

        if result.success:
            print()
            _banner("bold green", "✓ Build successful!")
            print()
            log_success(f"Output file: {result.artifact_path}")
            log_detail(f"Build time: {result.duration:.2f}s", verbose_only=True)
            return EXIT_OK

        print()
        _banner("bold red", "✗ Build failed!")
        print()
        log_error(result.error or "build failed")
        return EXIT_FAILURE

    except InvalidPathError as e:
        print()
        _banner("bold red", "✗ Error: Invalid project path")
        print()
        print(str(e))
        return EXIT_FAILURE

    except KeyboardInterrupt:
        print()
        _banner("bold yellow", "✗ Build interrupted")
        return EXIT_INTERRUPTED

    except (GoCrossError, ValueError) as e:
        print()
        _banner("bold red", "✗ Error")
        print()
        print(str(e))
        return EXIT_FAILURE

    except Exception as e:
        print()
        _banner("bold red", "✗ Unexpected error")
        print()
        print(f"{type(e).__name__}: {e}")
        if args.verbose:
            print()
            print("Traceback:")
            print(traceback.format_exc())
        return EXIT_FAILURE


def locate_command(args: LocateArgs) -> int:
    """Print the discovered Go toolchain path and the strategy that found it."""
    try:
        located = _locate(args.discovery)
    except KeyboardInterrupt:
        print()
        _banner("bold yellow", "✗ Discovery interrupted")
        return EXIT_INTERRUPTED
    except ValueError as e:
        log_error(str(e))
        return EXIT_FAILURE

    if located.path is None:
        return EXIT_FAILURE
    log(f"Go toolchain: {located.path}")
    log_detail(f"Found by: {located.strategy}")
    return EXIT_OK


def _configure_logging(verbose: bool, log_file: Optional[TextIO]) -> list[logging.Handler]:
    """Attach console (and optional file) handlers to the root logger; returns them for removal."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_handler = logging.StreamHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        handlers.append(file_handler)
    return handlers


def _wait_for_enter() -> None:
    """Keep a double-clicked console window open on Windows."""
    try:
        input("\nDone. Press Enter to exit...")
    except (EOFError, KeyboardInterrupt):
        pass


def _add_discovery_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Depth ceiling for the bounded install-directory scan (default: 4)",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=None,
        help="Directory-listing ceiling per scanned directory (default: 50000, 0 = unlimited)",
    )
    parser.add_argument(
        "--scan-timeout",
        type=float,
        default=None,
        help="Seconds allowed per scanned directory (default: 60, 0 = unlimited)",
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write all output to this file",
    )
    parser.add_argument(
        "--no-pause",
        action="store_true",
        help="Do not wait for Enter before exiting on Windows",
    )
    _add_discovery_arguments(parser)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gocross",
        description="Locate a Go toolchain and cross-compile a program for windows, linux or macOS",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gocross {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        help="Cross-compile a Go source file",
    )
    build_parser.add_argument(
        "-p",
        "--project-dir",
        default=None,
        help="Project directory (default: current directory)",
    )
    build_parser.add_argument(
        "-s",
        "--source",
        default=None,
        help="Source file relative to the project directory (default: main.go)",
    )
    build_parser.add_argument(
        "--goos",
        default=None,
        help="Target operating system, e.g. windows, linux, darwin (default: windows)",
    )
    build_parser.add_argument(
        "--goarch",
        default=None,
        help="Target architecture, e.g. amd64, arm64 (default: amd64)",
    )
    build_parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Base name of the output file (default: main)",
    )
    build_parser.add_argument(
        "--no-input",
        action="store_true",
        help="Do not prompt; use defaults for anything not given",
    )
    _add_common_arguments(build_parser)

    locate_parser = subparsers.add_parser(
        "locate",
        help="Show where the Go toolchain is installed",
    )
    _add_common_arguments(locate_parser)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """gocross entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(EXIT_OK)

    init_timer()
    set_verbose(parsed_args.verbose)

    log_file = None
    if parsed_args.log_file is not None:
        try:
            log_file = open(parsed_args.log_file, "w", encoding="utf-8")
        except OSError as e:
            print()
            _banner("bold red", "✗ Error: Cannot open log file")
            print()
            print(str(e))
            _exit(parsed_args, EXIT_FAILURE)
        set_output_file(log_file)
    handlers = _configure_logging(parsed_args.verbose, log_file)

    discovery = DiscoveryArgs(
        max_depth=parsed_args.max_depth,
        max_nodes=parsed_args.max_nodes,
        scan_timeout=parsed_args.scan_timeout,
    )

    try:
        log_header("gocross", __version__)
        if parsed_args.command == "build":
            args = BuildArgs(
                project_dir=parsed_args.project_dir,
                source=parsed_args.source,
                goos=parsed_args.goos,
                goarch=parsed_args.goarch,
                name=parsed_args.name,
                no_input=parsed_args.no_input,
                verbose=parsed_args.verbose,
                discovery=discovery,
            )
            exit_code = build_command(args)
        else:
            exit_code = locate_command(LocateArgs(verbose=parsed_args.verbose, discovery=discovery))
    finally:
        for handler in handlers:
            logging.getLogger().removeHandler(handler)
        if log_file is not None:
            set_output_file(None)
            log_file.close()

    _exit(parsed_args, exit_code)


def _exit(parsed_args: argparse.Namespace, exit_code: int) -> NoReturn:
    if sys.platform == "win32" and not parsed_args.no_pause and sys.stdin.isatty():
        _wait_for_enter()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
