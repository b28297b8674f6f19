"""Git command runner for GitWrap.

Runs the git executable once per call (spawn, wait, collect output) and
turns failures into ExternalToolError carrying git's own diagnostic.

Execution Context:
    Library module - imported by repository

Dependencies:
    - subprocess: Process invocation
    - gitwrap_core.config: Executable path, working directory, environment

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping

from gitwrap_core.config import GitConfig
from gitwrap_core.config import current_config
from gitwrap_core.errors import ExternalToolError
from gitwrap_core.models import ShellResult

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------

FAILURE_PREFIXES = ("fatal:", "error:")


# ---- Output Checking ----------------------------------------------------------------------------------------

def checking_fatality(
        text: str,
) -> str:
    """Trim git output and raise if it reports a failure.

    Args:
        text: Raw output.

    Returns:
        Trimmed output.

    Raises:
        ExternalToolError: If the output starts with 'fatal:' or 'error:'.
    """
    tidy = text.strip()
    if tidy.startswith(FAILURE_PREFIXES):
        raise ExternalToolError(tidy)
    return tidy


# ---- Invocation ---------------------------------------------------------------------------------------------

def run_git(
        *args: str,
        config: GitConfig | None = None,
        stdin: str | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
) -> ShellResult:
    """Run one git command and collect its output.

    Args:
        *args: Git subcommand and arguments.
        config: Settings to run with (defaults to the current config).
        stdin: Text passed verbatim on standard input.
        env: Extra environment for this call only.
        check: Raise on a non-zero exit status.

    Returns:
        ShellResult with exit status and captured output.

    Raises:
        ExternalToolError: If git cannot be started, times out, or exits
            non-zero while check is set.
    """
    config = config or current_config()
    command = [config.git_path, *args]
    process_env = {**os.environ, **config.env, **(env or {})}

    logger.debug(f"Running {command} in {config.work_dir or os.getcwd()}")
    try:
        completed = subprocess.run(
            command,
            input=stdin,
            capture_output=True,
            text=True,
            cwd=config.work_dir,
            env=process_env,
            timeout=config.timeout,
            check=False,
        )
    except FileNotFoundError as spawn_error:
        msg = f"git executable not found: {config.git_path}"
        raise ExternalToolError(msg, command=command) from spawn_error
    except subprocess.TimeoutExpired as timeout_error:
        msg = f"{' '.join(command)} timed out after {config.timeout} seconds"
        raise ExternalToolError(msg, command=command) from timeout_error

    result = ShellResult(
        args=tuple(command),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

    if check and not result.ok:
        diagnostic = result.stderr.strip() or result.stdout.strip()
        logger.warning(f"{' '.join(command)} exited with {result.returncode}: {diagnostic}")
        raise ExternalToolError(diagnostic, returncode=result.returncode, command=command)

    return result


def git_output(
        *args: str,
        config: GitConfig | None = None,
        stdin: str | None = None,
        env: Mapping[str, str] | None = None,
        trim: bool = True,
) -> str:
    """Run git and return its checked standard output.

    Args:
        *args: Git subcommand and arguments.
        config: Settings to run with (defaults to the current config).
        stdin: Text passed verbatim on standard input.
        env: Extra environment for this call only.
        trim: Strip surrounding whitespace. Listings whose rows carry
            significant leading or trailing blanks pass False.

    Returns:
        Standard output, trimmed unless trim is False.

    Raises:
        ExternalToolError: If git fails or its output starts with
            'fatal:' or 'error:'.
    """
    result = run_git(*args, config=config, stdin=stdin, env=env)
    tidy = checking_fatality(result.stdout)
    return tidy if trim else result.stdout
