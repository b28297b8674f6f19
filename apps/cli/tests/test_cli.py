"""Tests for the GitWrap command-line interface.

Covers the click commands end to end against a real repository, and
the entry-spec helper on its own.

Execution Context:
    Test module - run via pytest from repo root

Dependencies:
    - pytest
    - click.testing
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gitwrap_cli import __version__
from gitwrap_cli.commands.utils import parse_entry_spec
from gitwrap_cli.main import cli
from gitwrap_core.errors import ValidationError
from gitwrap_core.models import ObjectKind
from gitwrap_core.models import TreeEntry
from gitwrap_core.repository import Repository

EMPTY_BLOB = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"


def _invoke(runner: CliRunner, repo: Repository, *args: str):
    return runner.invoke(cli, ["--repo", str(repo.root), *args])


# ---- parse_entry_spec() ----------------------------------------------------------


class TestParseEntrySpec:
    """Tests for parse_entry_spec helper."""

    def test_without_mode(self) -> None:
        """KIND:SHA:NAME leaves the mode to the kind default."""
        entry = parse_entry_spec(f"blob:{EMPTY_BLOB}:README.md")
        assert entry == TreeEntry(mode=None, kind=ObjectKind.BLOB, object_id=EMPTY_BLOB, name="README.md")

    def test_with_mode(self) -> None:
        """A leading six-digit field is the mode."""
        entry = parse_entry_spec(f"100755:blob:{EMPTY_BLOB}:run.sh")
        assert entry.mode == "100755"
        assert entry.effective_mode == "100755"

    def test_name_with_colons(self) -> None:
        """Colons after the object id belong to the name."""
        entry = parse_entry_spec(f"blob:{EMPTY_BLOB}:a:b:c")
        assert entry.name == "a:b:c"

    def test_bad_kind(self) -> None:
        """Unknown kinds are rejected."""
        with pytest.raises(ValidationError, match="Invalid object type"):
            parse_entry_spec(f"file:{EMPTY_BLOB}:x")

    def test_missing_fields(self) -> None:
        """Too few fields are rejected."""
        with pytest.raises(ValidationError):
            parse_entry_spec("blob:README.md")


# ---- gitwrap (group) -------------------------------------------------------------


class TestGroup:
    """Tests for global options."""

    def test_version(self, runner: CliRunner) -> None:
        """--version prints the CLI version."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_not_a_repository(self, runner: CliRunner) -> None:
        """Commands fail cleanly outside a repository."""
        with patch("gitwrap_cli.commands.utils.find_repository", return_value=None):
            result = runner.invoke(cli, ["refs"])
        assert result.exit_code == 1
        assert "Not a git repository" in result.output

    def test_bad_timeout_setting(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        """An invalid GITWRAP_TIMEOUT is reported."""
        monkeypatch.setenv("GITWRAP_TIMEOUT", "later")
        result = runner.invoke(cli, ["refs"])
        assert result.exit_code == 1
        assert "GITWRAP_TIMEOUT" in result.output


# ---- gitwrap ls-tree -------------------------------------------------------------


class TestLsTree:
    """Tests for ls-tree command."""

    def test_lists_entries(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Entries of the main tree are shown."""
        result = _invoke(runner, populated_repo, "ls-tree", "main")
        assert result.exit_code == 0, result.output
        assert "README.md" in result.output
        assert "notes.txt" in result.output

    def test_bad_tree(self, runner: CliRunner, populated_repo: Repository) -> None:
        """git's diagnostic is shown for a bad tree."""
        result = _invoke(runner, populated_repo, "ls-tree", "a" * 40)
        assert result.exit_code == 1
        assert "ls-tree failed" in result.output
        assert "fatal:" in result.output


# ---- gitwrap refs ----------------------------------------------------------------


class TestRefs:
    """Tests for refs command."""

    def test_lists_refs(self, runner: CliRunner, populated_repo: Repository) -> None:
        """All refs are listed."""
        result = _invoke(runner, populated_repo, "refs")
        assert result.exit_code == 0, result.output
        assert "refs/heads/main" in result.output
        assert "refs/heads/feature" in result.output

    def test_single_ref(self, runner: CliRunner, populated_repo: Repository) -> None:
        """A single ref prints its commit."""
        commit = populated_repo.ref_to_commit("refs/heads/main")
        result = _invoke(runner, populated_repo, "refs", "refs/heads/main")
        assert result.exit_code == 0, result.output
        assert commit in result.output

    def test_missing_ref(self, runner: CliRunner, populated_repo: Repository) -> None:
        """A missing ref fails."""
        result = _invoke(runner, populated_repo, "refs", "refs/heads/missing")
        assert result.exit_code == 1
        assert "No commit for ref refs/heads/missing" in result.output


# ---- gitwrap branch --------------------------------------------------------------


class TestBranch:
    """Tests for branch command."""

    def test_lists_branches(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Branches are listed."""
        result = _invoke(runner, populated_repo, "branch")
        assert result.exit_code == 0, result.output
        assert "feature" in result.output
        assert "main" in result.output
        assert "  feature" in result.output.splitlines()

    def test_contains_filter(self, runner: CliRunner, populated_repo: Repository) -> None:
        """--contains passes through to git."""
        result = _invoke(runner, populated_repo, "branch", "--contains", "main")
        assert result.exit_code == 0, result.output
        assert "feature" in result.output

    def test_single_filter_only(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Two filters are a usage error."""
        result = _invoke(runner, populated_repo, "branch", "--merged", "main", "--contains", "main")
        assert result.exit_code == 2


# ---- gitwrap add-to-tree ---------------------------------------------------------


class TestAddToTree:
    """Tests for add-to-tree command."""

    def test_dry_run_prints_payload(self, runner: CliRunner, populated_repo: Repository) -> None:
        """--dry-run prints the mktree input with the override last."""
        notes = populated_repo.ls_tree("main")[1]
        result = _invoke(
            runner,
            populated_repo,
            "add-to-tree",
            "--dry-run",
            "main^{tree}",
            f"blob:{EMPTY_BLOB}:README.md",
        )
        assert result.exit_code == 0, result.output
        assert result.output == (
            f"100644 blob {notes.object_id}\tnotes.txt\n"
            f"100644 blob {EMPTY_BLOB}\tREADME.md\n"
        )

    def test_writes_tree(self, runner: CliRunner, populated_repo: Repository) -> None:
        """The merged tree is written and its id printed."""
        empty = populated_repo.hash_object("", write=True)
        result = _invoke(runner, populated_repo, "add-to-tree", "main^{tree}", f"blob:{empty}:empty.txt")
        assert result.exit_code == 0, result.output

        new_tree = result.output.split()[0]
        names = [entry.name for entry in populated_repo.ls_tree(new_tree)]
        assert names == ["README.md", "empty.txt", "notes.txt"]

    def test_bad_entry(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Malformed entries are reported."""
        result = _invoke(runner, populated_repo, "add-to-tree", "main^{tree}", "blob:nothex:x")
        assert result.exit_code == 1
        assert "Invalid object id" in result.output


# ---- gitwrap resolve -------------------------------------------------------------


class TestResolve:
    """Tests for resolve command."""

    def test_resolves_commit_and_tree(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Both ids are printed."""
        commit = populated_repo.to_commit("main")
        tree = populated_repo.commit_to_tree(commit)
        result = _invoke(runner, populated_repo, "resolve", "main")
        assert result.exit_code == 0, result.output
        assert commit in result.output
        assert tree in result.output

    def test_unknown_revision(self, runner: CliRunner, populated_repo: Repository) -> None:
        """Unknown revisions fail."""
        result = _invoke(runner, populated_repo, "resolve", "nope")
        assert result.exit_code == 1
        assert "does not name a single commit" in result.output
