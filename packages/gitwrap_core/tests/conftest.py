"""Shared test configuration and fixtures for gitwrap_core tests.

Provides:
- Sample object ids and tree entries reused across test modules.
- ``completed``: builds ``subprocess.CompletedProcess`` results for tests
  that patch ``subprocess.run``.
- ``git_repo``: a real repository in a temporary directory, isolated from
  the user's git configuration. Tests using it are skipped when no ``git``
  executable is on PATH.
"""
from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from gitwrap_core.config import GitConfig
from gitwrap_core.models import ObjectKind
from gitwrap_core.models import TreeEntry
from gitwrap_core.repository import Repository
from gitwrap_core.repository import init_repository


# ---------------------------------------------------------------------------
# Well-known object ids (the empty blob)
# ---------------------------------------------------------------------------

EMPTY_BLOB = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def readme_entry() -> TreeEntry:
    """Blob entry for an empty README.md."""
    return TreeEntry(mode="100644", kind=ObjectKind.BLOB, object_id=EMPTY_BLOB, name="README.md")


@pytest.fixture
def completed() -> Callable[..., subprocess.CompletedProcess]:
    """Factory for fake subprocess results."""
    def _completed(
            stdout: str = "",
            stderr: str = "",
            returncode: int = 0,
    ) -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr=stderr)

    return _completed


@pytest.fixture
def isolated_config() -> GitConfig:
    """Config that ignores system and global git settings."""
    return GitConfig(env={"GIT_CONFIG_NOSYSTEM": "1", "GIT_CONFIG_GLOBAL": os.devnull})


@pytest.fixture
def git_repo(tmp_path: Path, isolated_config: GitConfig) -> Repository:
    """Freshly initialized repository."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    return init_repository(tmp_path / "repo", config=isolated_config)
