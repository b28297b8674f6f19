"""Data models for GitWrap.

Defines the value types produced by decoding git output: object kinds,
tree entries, branch rows and the result of a single git invocation.
All parsed values are immutable once built.

Execution Context:
    Library module - imported by other gitwrap_core modules

Dependencies:
    - dataclasses: Data class decorators
    - enum: Enumerated kinds and options

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any
from typing import TypeAlias

from gitwrap_core.errors import ValidationError
from gitwrap_core.objects import ensure_sha


# ---- Type Aliases -------------------------------------------------------------------------------------------

RefMapping: TypeAlias = dict[str, str]

MODE_PATTERN = re.compile(r"[0-9]{6}")


# ---- Enumerations -------------------------------------------------------------------------------------------

class ObjectKind(str, Enum):
    """The four git object kinds."""

    BLOB = "blob"
    TREE = "tree"
    COMMIT = "commit"
    TAG = "tag"

    @classmethod
    def parse(
            cls,
            value: Any,
    ) -> ObjectKind:
        """Normalize a caller-supplied kind token.

        Args:
            value: An ObjectKind or one of 'blob', 'tree', 'commit', 'tag'.

        Returns:
            Matching ObjectKind.

        Raises:
            ValidationError: If value names no object kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        msg = f"Invalid object type '{value}'."
        raise ValidationError(msg, raw=str(value))

    @property
    def default_mode(
            self,
    ) -> str:
        """Tree mode used when an entry does not carry one."""
        if self is ObjectKind.BLOB:
            return "100644"
        return "040000"


class BranchFilter(str, Enum):
    """Filters accepted by `git branch` listings."""

    MERGED = "--merged"
    NO_MERGED = "--no-merged"
    CONTAINS = "--contains"

    @classmethod
    def parse(
            cls,
            value: Any,
    ) -> BranchFilter:
        """Accept a member, its option text or its bare name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            token = value.strip().lstrip("-").replace("_", "-").lower()
            for member in cls:
                if member.value == f"--{token}":
                    return member
        msg = f"Unrecognized option to `git branch`: {value}"
        raise ValidationError(msg, raw=str(value))


class RebaseAction(str, Enum):
    """Ways to resume an interrupted rebase."""

    CONTINUE = "--continue"
    SKIP = "--skip"
    ABORT = "--abort"

    @classmethod
    def parse(
            cls,
            value: Any,
    ) -> RebaseAction:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            token = value.strip().lstrip("-").lower()
            for member in cls:
                if member.value == f"--{token}":
                    return member
        msg = f"Invalid rebase keyword {value!r}"
        raise ValidationError(msg, raw=str(value))


def git_kind(
        value: Any,
) -> str:
    """Return the canonical kind name for value (e.g. 'blob')."""
    return ObjectKind.parse(value).value


# ---- Data Model Classes -------------------------------------------------------------------------------------

@dataclass(frozen=True)
class TreeEntry:
    """One row of a tree listing.

    Attributes:
        mode: Six-digit permission mode, or None for the kind default.
        kind: Object kind the entry points to.
        object_id: 40-character object id.
        name: Entry name. May contain spaces and tabs, never a newline.
    """

    mode: str | None
    kind: ObjectKind
    object_id: str
    name: str

    def __post_init__(
            self,
    ) -> None:
        object.__setattr__(self, "kind", ObjectKind.parse(self.kind))
        ensure_sha(self.object_id)

        if self.mode is not None and not (
                isinstance(self.mode, str) and MODE_PATTERN.fullmatch(self.mode)
        ):
            msg = f"Invalid tree entry mode '{self.mode}'."
            raise ValidationError(msg, raw=str(self.mode))

        if not isinstance(self.name, str) or "\n" in self.name:
            msg = f"Invalid tree entry name {self.name!r}."
            raise ValidationError(msg, raw=str(self.name))

    @property
    def effective_mode(
            self,
    ) -> str:
        """Mode written to mktree: the explicit mode or the kind default."""
        return self.mode if self.mode is not None else self.kind.default_mode

    @property
    def is_blob(
            self,
    ) -> bool:
        """Check if the entry points to a blob."""
        return self.kind is ObjectKind.BLOB

    def to_dict(
            self,
    ) -> dict[str, Any]:
        """Convert entry to dictionary.

        Returns:
            Dictionary with mode, kind, object and name keys.
        """
        return {
            "mode": self.mode,
            "kind": self.kind.value,
            "object": self.object_id,
            "name": self.name,
        }

    @classmethod
    def from_dict(
            cls,
            data: dict[str, Any],
    ) -> TreeEntry:
        """Create entry from dictionary.

        Args:
            data: Dictionary with mode, kind, object and name keys.

        Returns:
            TreeEntry instance.
        """
        return cls(
            mode=data.get("mode"),
            kind=data["kind"],
            object_id=data["object"],
            name=data["name"],
        )


@dataclass(frozen=True)
class Branch:
    """One row of a branch listing.

    Attributes:
        name: Branch name (e.g., 'main', 'feature/x').
        current: True for the checked-out branch.
    """

    name: str
    current: bool = False


@dataclass(frozen=True)
class ShellResult:
    """Collected output of a single git invocation.

    Attributes:
        args: Full argument vector, executable first.
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(
            self,
    ) -> bool:
        """Check if the process exited with status 0."""
        return self.returncode == 0
