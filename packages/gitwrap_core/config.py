"""Configuration for GitWrap.

Holds the settings every git invocation needs (executable path,
working directory, extra environment) and scopes them dynamically:
`with_git` and `with_repo` install a modified configuration for the
duration of a block and restore the outer one on exit. The current
configuration lives in a context variable, so threads and async tasks
each see their own.

Execution Context:
    Library module - imported by shell runner, repository and CLI

Dependencies:
    - python-dotenv: Load environment variables from .env file

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType

from dotenv import load_dotenv

from gitwrap_core.errors import ValidationError

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------

DEFAULT_GIT_PATH = "git"

ENV_GIT_PATH = "GITWRAP_GIT_PATH"
ENV_WORK_DIR = "GITWRAP_WORK_DIR"
ENV_TIMEOUT = "GITWRAP_TIMEOUT"


# ---- Config Class -------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class GitConfig:
    """Settings applied to every git invocation.

    Attributes:
        git_path: Name or path of the git executable.
        work_dir: Directory git runs in (None for the process cwd).
        env: Extra environment variables layered over os.environ.
        timeout: Seconds before an invocation is abandoned (None waits).
    """

    git_path: str = DEFAULT_GIT_PATH
    work_dir: Path | None = None
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout: float | None = None

    def __post_init__(
            self,
    ) -> None:
        if self.work_dir is not None and not isinstance(self.work_dir, Path):
            object.__setattr__(self, "work_dir", Path(self.work_dir))
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    def with_git(
            self,
            git_path: str,
    ) -> GitConfig:
        """Copy with another git executable."""
        return replace(self, git_path=git_path)

    def with_work_dir(
            self,
            work_dir: Path | str | None,
    ) -> GitConfig:
        """Copy with another working directory (None keeps this one)."""
        if work_dir is None:
            return self
        return replace(self, work_dir=Path(work_dir))

    def with_env(
            self,
            **env: str,
    ) -> GitConfig:
        """Copy with additional environment variables."""
        return replace(self, env={**self.env, **env})


# ---- Environment Loading ------------------------------------------------------------------------------------

def _load_env_file(
        env_path: Path | None = None,
) -> None:
    """Load environment variables from .env file.

    Searches for .env file in:
    1. Specified path (if provided)
    2. Current working directory
    3. Parent directories (up to 3 levels)

    Args:
        env_path: Explicit path to .env file (optional).
    """
    if env_path:
        if env_path.exists():
            load_dotenv(env_path, override=True)
        return

    current = Path.cwd()
    for candidate_dir in [current, *list(current.parents)[:3]]:
        candidate = candidate_dir / ".env"
        if candidate.exists():
            logger.debug(f"Loading environment from {candidate}")
            load_dotenv(candidate, override=True)
            return


def load_config(
        env_path: Path | str | None = None,
) -> GitConfig:
    """Build a configuration from the environment.

    Reads GITWRAP_GIT_PATH, GITWRAP_WORK_DIR and GITWRAP_TIMEOUT after
    loading a .env file.

    Args:
        env_path: Explicit path to .env file (optional).

    Returns:
        GitConfig with environment overrides applied.

    Raises:
        ValidationError: If GITWRAP_TIMEOUT is not a number.
    """
    _load_env_file(Path(env_path) if env_path else None)

    timeout = None
    raw_timeout = os.getenv(ENV_TIMEOUT)
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError as timeout_error:
            msg = f"{ENV_TIMEOUT} must be a number of seconds, got '{raw_timeout}'"
            raise ValidationError(msg, raw=raw_timeout) from timeout_error

    work_dir = os.getenv(ENV_WORK_DIR)
    return GitConfig(
        git_path=os.getenv(ENV_GIT_PATH) or DEFAULT_GIT_PATH,
        work_dir=Path(work_dir) if work_dir else None,
        timeout=timeout,
    )


# ---- Scoped Configuration -----------------------------------------------------------------------------------

_current: ContextVar[GitConfig | None] = ContextVar("gitwrap_config", default=None)


def current_config() -> GitConfig:
    """Return the configuration in effect for the calling context."""
    config = _current.get()
    return config if config is not None else GitConfig()


@contextmanager
def using_config(
        config: GitConfig,
) -> Iterator[GitConfig]:
    """Make config current for the duration of the block.

    Args:
        config: Configuration to install.

    Yields:
        The installed configuration.
    """
    token = _current.set(config)
    try:
        yield config
    finally:
        _current.reset(token)


@contextmanager
def with_git(
        git_path: str,
) -> Iterator[GitConfig]:
    """Run the block with another git executable."""
    with using_config(current_config().with_git(git_path)) as config:
        yield config


@contextmanager
def with_repo(
        repo: Path | str | None,
) -> Iterator[GitConfig]:
    """Run the block inside repository directory repo.

    A repo of None keeps the current working directory.
    """
    with using_config(current_config().with_work_dir(repo)) as config:
        yield config
