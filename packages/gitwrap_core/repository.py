"""Git repository façade for GitWrap.

Exposes git plumbing and porcelain commands as typed methods on a
Repository bound to one configuration. Output with a grammar is
decoded through gitwrap_core.protocol and gitwrap_core.tree; simple
commands pass git's output through after checking it for failures.

Execution Context:
    Library module - imported by CLI commands

Dependencies:
    - gitwrap_core.config: Per-repository settings
    - gitwrap_core.shell: Git invocation
    - gitwrap_core.protocol, gitwrap_core.tree: Output decoding

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Sequence
from pathlib import Path

from gitwrap_core.config import GitConfig
from gitwrap_core.config import current_config
from gitwrap_core.errors import ExternalToolError
from gitwrap_core.errors import NotFoundError
from gitwrap_core.errors import ValidationError
from gitwrap_core.models import Branch
from gitwrap_core.models import BranchFilter
from gitwrap_core.models import ObjectKind
from gitwrap_core.models import RebaseAction
from gitwrap_core.models import RefMapping
from gitwrap_core.models import TreeEntry
from gitwrap_core.objects import ensure_sha
from gitwrap_core.objects import is_sha
from gitwrap_core.protocol import parse_branch_list
from gitwrap_core.protocol import parse_commit_tree
from gitwrap_core.protocol import reverse_line_map
from gitwrap_core.shell import checking_fatality
from gitwrap_core.shell import git_output
from gitwrap_core.shell import run_git
from gitwrap_core.tree import format_entries
from gitwrap_core.tree import merge_tree
from gitwrap_core.tree import parse_tree_listing

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------

GIT_DIR = ".git"


# ---- Repository Class ---------------------------------------------------------------------------------------

class Repository:
    """Runs git commands against one repository.

    Attributes:
        config: Settings every command runs with. Its work_dir is the
            repository root (None for the process cwd).
    """

    def __init__(
            self,
            root: Path | str | None = None,
            config: GitConfig | None = None,
    ) -> None:
        """Bind a repository.

        Args:
            root: Repository directory (overrides config.work_dir).
            config: Settings to use (defaults to the current config).
        """
        base = config or current_config()
        self.config = base.with_work_dir(root)

    def __repr__(
            self,
    ) -> str:
        return f"Repository({str(self.root)!r})"

    @property
    def root(
            self,
    ) -> Path:
        """Directory git runs in."""
        return (self.config.work_dir or Path.cwd()).resolve()

    def _git(
            self,
            *args: str,
            stdin: str | None = None,
            env: dict[str, str] | None = None,
            trim: bool = True,
    ) -> str:
        return git_output(*args, config=self.config, stdin=stdin, env=env, trim=trim)

    # ---- Repository State -----------------------------------------------------------------------------------

    def exists(
            self,
    ) -> bool:
        """Check if root holds a .git directory or file."""
        return (self.root / GIT_DIR).exists()

    def init(
            self,
    ) -> str:
        """Create the root directory if needed and run `git init`.

        Returns:
            Git's output.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        return self._git("init")

    def status(
            self,
    ) -> str:
        """Return `git status` output."""
        return self._git("status")

    # ---- Object Operations ----------------------------------------------------------------------------------

    def object_exists(
            self,
            sha: str,
    ) -> bool:
        """Check whether an object is stored in the repository."""
        result = run_git("cat-file", "-e", sha, config=self.config, check=False)
        return result.ok

    def object_size(
            self,
            sha: str,
    ) -> int:
        """Return the size of an object in bytes."""
        output = self._git("cat-file", "-s", sha)
        try:
            return int(output)
        except ValueError as size_error:
            msg = f"Unexpected object size {output!r}."
            raise ValidationError(msg, raw=output) from size_error

    def object_type(
            self,
            sha: str,
    ) -> ObjectKind:
        """Return the kind of an object."""
        return ObjectKind.parse(self._git("cat-file", "-t", sha))

    def cat_object(
            self,
            sha: str,
            kind: ObjectKind | str = ObjectKind.BLOB,
    ) -> str:
        """Return the contents of an object.

        Args:
            sha: Object id or revision.
            kind: Expected object kind.

        Returns:
            Object contents, untrimmed.
        """
        kind_name = ObjectKind.parse(kind).value
        result = run_git("cat-file", kind_name, sha, config=self.config)
        return result.stdout

    def hash_object(
            self,
            content: str,
            path: str | None = None,
            write: bool = False,
            filters: bool = True,
    ) -> str:
        """Hash content as a blob.

        Args:
            content: Blob contents.
            path: Path whose attributes select filters.
            write: Store the object in the repository.
            filters: Apply clean filters; False passes --no-filters.

        Returns:
            Object id.

        Raises:
            ValidationError: If path is combined with filters=False.
        """
        if path and not filters:
            msg = "Cannot combine path with no-filters."
            raise ValidationError(msg, raw=path)

        args = ["hash-object", "--stdin"]
        if path:
            args += ["--path", path]
        if write:
            args.append("-w")
        if not filters:
            args.append("--no-filters")
        return ensure_sha(self._git(*args, stdin=content))

    def to_commit(
            self,
            rev: str,
    ) -> str:
        """Resolve anything git accepts as a revision to an object id.

        Raises:
            NotFoundError: If rev does not name a single object.
        """
        result = run_git("rev-parse", "--verify", rev, config=self.config, check=False)
        commit = result.stdout.strip()
        if result.ok and is_sha(commit):
            return commit

        diagnostic = result.stderr.strip() or commit
        msg = f"{rev} does not name a single commit. Error was:\n{diagnostic}"
        raise NotFoundError(msg, raw=diagnostic)

    def commit_tree(
            self,
            tree: str,
            message: str,
            parent: str | None = None,
            author: str | None = None,
            committer: str | None = None,
            author_email: str | None = None,
            committer_email: str | None = None,
    ) -> str:
        """Create a commit object for a tree.

        Args:
            tree: Tree object id.
            message: Commit message (sent on stdin).
            parent: Parent commit id.
            author: Author name.
            committer: Committer name.
            author_email: Author email.
            committer_email: Committer email.

        Returns:
            New commit id.
        """
        identity = {
            "GIT_AUTHOR_NAME": author,
            "GIT_AUTHOR_EMAIL": author_email,
            "GIT_COMMITTER_NAME": committer,
            "GIT_COMMITTER_EMAIL": committer_email,
        }
        env = {key: value for key, value in identity.items() if value is not None}

        args = ["commit-tree", tree]
        if parent:
            args += ["-p", parent]
        return ensure_sha(self._git(*args, stdin=message, env=env))

    # ---- Tree Operations ------------------------------------------------------------------------------------

    def make_tree(
            self,
            entries: Iterable[TreeEntry | Sequence[str | None]],
    ) -> str:
        """Write a tree object from entries with `git mktree`.

        Args:
            entries: TreeEntry values or (mode, kind, object_id, name)
                sequences. A mode of None uses the kind default.

        Returns:
            New tree id.
        """
        return ensure_sha(self._git("mktree", stdin=format_entries(entries)))

    def ls_tree(
            self,
            tree: str | None,
    ) -> list[TreeEntry]:
        """List the entries of a tree (non-recursive).

        Raises:
            ValidationError: If tree is None.
        """
        if tree is None:
            msg = "None passed to ls-tree."
            raise ValidationError(msg)
        # Names may end in blanks, so the listing is decoded untrimmed.
        return parse_tree_listing(self._git("ls-tree", tree, trim=False))

    def adding_to_tree(
            self,
            tree: str | None,
            new_entries: Iterable[TreeEntry | Sequence[str | None]],
    ) -> list[TreeEntry]:
        """Return the listing of tree with new_entries merged in.

        New entries replace old entries of the same name. A tree of None
        starts from an empty listing. Not recursive.
        """
        old_listing = self.ls_tree(tree) if tree is not None else []
        return merge_tree(old_listing, new_entries)

    def tree_contents(
            self,
            tree: str,
            predicate: Callable[[TreeEntry], bool] | None = None,
    ) -> dict[str, str]:
        """Return entry name to contents for a tree.

        Args:
            tree: Tree id or tree-ish.
            predicate: Entry filter, e.g. `lambda e: e.is_blob`.

        Returns:
            Mapping of entry name to object contents.
        """
        entries = self.ls_tree(tree)
        return {
            entry.name: self.cat_object(entry.object_id)
            for entry in entries
            if predicate is None or predicate(entry)
        }

    def commit_to_tree(
            self,
            commit: str | None,
    ) -> str | None:
        """Return the tree id of a commit, or None for None."""
        if commit is None:
            return None
        return parse_commit_tree(self.cat_object(commit, ObjectKind.COMMIT))

    # ---- Ref Operations -------------------------------------------------------------------------------------

    def _show_ref(
            self,
            *refs: str,
    ) -> RefMapping:
        # show-ref exits 1 with no output when nothing matches
        result = run_git("show-ref", *refs, config=self.config, check=False)
        if result.returncode == 1 and not result.stdout.strip():
            return {}
        if not result.ok:
            diagnostic = result.stderr.strip() or result.stdout.strip()
            raise ExternalToolError(diagnostic, returncode=result.returncode, command=result.args)
        return reverse_line_map(checking_fatality(result.stdout))

    def refs_to_commits(
            self,
    ) -> RefMapping:
        """Return every ref mapped to the object it points to."""
        return self._show_ref()

    def ref_to_commit(
            self,
            ref: str,
    ) -> str | None:
        """Return the commit for a full ref name such as 'refs/heads/main'."""
        return self._show_ref(ref).get(ref)

    def ensure_ref_to_commit(
            self,
            ref: str,
    ) -> str:
        """Return the commit for ref.

        Raises:
            NotFoundError: If ref does not exist.
        """
        commit = self.ref_to_commit(ref)
        if commit is None:
            msg = f"No commit for ref {ref} in repo {self.root}."
            raise NotFoundError(msg, raw=ref)
        return commit

    def update_ref(
            self,
            ref: str,
            commit: str,
    ) -> str:
        """Point ref at commit."""
        return self._git("update-ref", ref, commit)

    def check_ref_format(
            self,
            name: str,
            branch: bool = False,
    ) -> str:
        """Validate a ref name with `git check-ref-format`.

        Raises:
            ExternalToolError: If git rejects the name.
        """
        if branch:
            return self._git("check-ref-format", "--branch", name)
        return self._git("check-ref-format", name)

    def check_branch_name(
            self,
            name: str,
    ) -> str:
        """Validate a branch name, returning git's expansion of it."""
        return self.check_ref_format(name, branch=True)

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def new_branch(
            self,
            name: str,
            start_point: str | None = None,
    ) -> str:
        """Create a branch at start_point (default HEAD)."""
        if start_point:
            return self._git("branch", name, start_point)
        return self._git("branch", name)

    def branch_list(
            self,
            branch_filter: BranchFilter | str | None = None,
            commit: str | None = None,
    ) -> list[Branch]:
        """List local branches with the current one marked.

        Args:
            branch_filter: merged, no-merged or contains.
            commit: Commit the filter applies to (required with a filter).

        Returns:
            Branches in git's order.

        Raises:
            ValidationError: If the filter is unknown or lacks a commit.
        """
        args = ["branch", "--no-color"]
        if branch_filter is not None:
            option = BranchFilter.parse(branch_filter)
            if not commit:
                msg = f"`git branch {option.value}` requires a commit"
                raise ValidationError(msg, raw=option.value)
            args += [option.value, commit]

        # Every row starts with a two-character marker, so keep leading blanks.
        return parse_branch_list(self._git(*args, trim=False))

    def branches(
            self,
            branch_filter: BranchFilter | str | None = None,
            commit: str | None = None,
    ) -> list[str]:
        """List local branch names (see branch_list)."""
        return [branch.name for branch in self.branch_list(branch_filter, commit)]

    def branch_exists(
            self,
            name: str,
    ) -> bool:
        """Check if a local branch exists."""
        return name in set(self.branches())

    # ---- Porcelain Operations -------------------------------------------------------------------------------

    def checkout(
            self,
            branch: str,
    ) -> str:
        """Check out branch."""
        return self._git("checkout", branch)

    def merge_current(
            self,
            remote: str,
    ) -> str:
        """Merge remote into the current branch."""
        return self._git("merge", remote)

    def pull(
            self,
            remote: str,
    ) -> str:
        """Pull from remote into the current branch."""
        return self._git("pull", remote)

    def push(
            self,
            to: str,
            refspecs: str | Sequence[str] | None = None,
            all_branches: bool = False,
            mirror: bool = False,
            tags: bool = False,
    ) -> str:
        """Push to a remote with `git push --porcelain`.

        Only the first of all_branches, mirror and tags that is set is passed.

        Args:
            to: Remote name or URL.
            refspecs: One refspec or a sequence of them.
            all_branches: Push all branches (--all).
            mirror: Mirror all refs.
            tags: Push tags.

        Returns:
            Git's porcelain output.
        """
        args = ["push", "--porcelain"]
        if all_branches:
            args.append("--all")
        elif mirror:
            args.append("--mirror")
        elif tags:
            args.append("--tags")
        args.append(to)

        if isinstance(refspecs, str):
            args.append(refspecs)
        elif refspecs:
            args.extend(refspecs)
        return self._git(*args)

    def rebase(
            self,
            upstream: str,
            branch: str | None = None,
    ) -> str:
        """Rebase branch (default current) onto upstream."""
        if branch:
            return self._git("rebase", upstream, branch)
        return self._git("rebase", upstream)

    def rebase_control(
            self,
            action: RebaseAction | str,
    ) -> str:
        """Continue, skip or abort an interrupted rebase."""
        return self._git("rebase", RebaseAction.parse(action).value)


# ---- Module Functions ---------------------------------------------------------------------------------------

def find_repository(
        start_path: Path | str | None = None,
        config: GitConfig | None = None,
) -> Repository | None:
    """Find a git repository in current or parent directories.

    Args:
        start_path: Directory to start searching from.
        config: Settings for the returned repository.

    Returns:
        Repository if found, None otherwise.
    """
    base = config or current_config()
    current = Path(start_path or base.work_dir or Path.cwd()).resolve()

    while True:
        if (current / GIT_DIR).exists():
            return Repository(current, config=base)
        if current == current.parent:
            return None
        current = current.parent


def init_repository(
        path: Path | str | None = None,
        config: GitConfig | None = None,
) -> Repository:
    """Initialize a new git repository.

    Args:
        path: Directory for new repository (defaults to cwd).
        config: Settings for the repository.

    Returns:
        Initialized Repository.
    """
    repo = Repository(path or Path.cwd(), config=config)
    output = repo.init()
    logger.debug(output)
    return repo
