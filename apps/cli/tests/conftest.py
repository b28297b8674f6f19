"""Shared fixtures for GitWrap CLI tests.

Provides:
- ``runner``: click CliRunner.
- ``populated_repo``: a real repository with one commit on main and a
  feature branch. Skipped when no ``git`` executable is on PATH.
"""
from __future__ import annotations

import os
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitwrap_core.config import GitConfig
from gitwrap_core.repository import Repository
from gitwrap_core.repository import init_repository


@pytest.fixture
def runner() -> CliRunner:
    """CLI runner."""
    return CliRunner()


@pytest.fixture
def populated_repo(tmp_path: Path) -> Repository:
    """Repository with README.md and notes.txt committed on main."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    config = GitConfig(env={"GIT_CONFIG_NOSYSTEM": "1", "GIT_CONFIG_GLOBAL": os.devnull})
    repo = init_repository(tmp_path / "repo", config=config)

    readme = repo.hash_object("# Demo\n", write=True)
    notes = repo.hash_object("notes\n", write=True)
    tree = repo.make_tree([
        (None, "blob", readme, "README.md"),
        (None, "blob", notes, "notes.txt"),
    ])
    commit = repo.commit_tree(
        tree,
        "Initial commit\n",
        author="Test User",
        committer="Test User",
        author_email="test@example.com",
        committer_email="test@example.com",
    )
    repo.update_ref("refs/heads/main", commit)
    repo.new_branch("feature", commit)
    return repo
