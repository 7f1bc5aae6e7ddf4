"""Interactive collection of build parameters.

Each prompt shows its default; pressing Enter accepts it. Values already
supplied on the command line are not asked for again. The result is a
BuildConfig; nothing downstream reads from the terminal.
"""

from pathlib import Path
from typing import Callable, Optional

from gocross.config import (
    DEFAULT_BASE_NAME,
    DEFAULT_GOARCH,
    DEFAULT_GOOS,
    DEFAULT_SOURCE_FILE,
    BuildConfig,
    build_config,
    resolve_project_dir,
)

InputFn = Callable[[str], str]

PROJECT_PROMPT = "Go project directory (blank for current directory): "
SOURCE_PROMPT = f"Go source file to build (default {DEFAULT_SOURCE_FILE}): "
GOOS_PROMPT = f"Target GOOS, e.g. windows / linux / darwin (default {DEFAULT_GOOS}): "
GOARCH_PROMPT = f"Target GOARCH, e.g. amd64 / arm64 (default {DEFAULT_GOARCH}): "
NAME_PROMPT = f"Base name of the output file (default {DEFAULT_BASE_NAME}): "


def _ask(input_fn: InputFn, prompt: str, preset: Optional[str]) -> Optional[str]:
    if preset is not None:
        return preset
    try:
        return input_fn(prompt).strip()
    except EOFError:
        # Closed stdin behaves like pressing Enter
        return None


def prompt_build_config(
    input_fn: InputFn = input,
    project_dir: Optional[str] = None,
    source_file: Optional[str] = None,
    goos: Optional[str] = None,
    goarch: Optional[str] = None,
    base_name: Optional[str] = None,
    cwd: Optional[Path] = None,
) -> BuildConfig:
    """Ask for any build parameter not already given.

    The project directory is asked for and validated first, so an invalid
    path stops the session before the remaining questions.

    Args:
        input_fn: Prompt function (defaults to builtin input)
        project_dir, source_file, goos, goarch, base_name: Values that skip their prompt
        cwd: Directory relative project paths resolve against

    Returns:
        BuildConfig with defaults applied to blank answers

    Raises:
        InvalidPathError: If the project directory cannot be resolved
    """
    raw_project = _ask(input_fn, PROJECT_PROMPT, project_dir)
    resolved_project = resolve_project_dir(raw_project, cwd=cwd)

    return build_config(
        project_dir=str(resolved_project),
        source_file=_ask(input_fn, SOURCE_PROMPT, source_file),
        goos=_ask(input_fn, GOOS_PROMPT, goos),
        goarch=_ask(input_fn, GOARCH_PROMPT, goarch),
        base_name=_ask(input_fn, NAME_PROMPT, base_name),
    )
