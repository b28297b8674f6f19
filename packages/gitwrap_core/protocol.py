"""Line protocol decoding for git text output.

Splits raw git output into records and decodes the line formats of
`show-ref`, `git branch` and the header of `cat-file commit`. All
functions are pure and raise ValidationError on the first malformed
line instead of skipping it.

Execution Context:
    Library module - imported by tree codec and repository

Dependencies:
    - gitwrap_core.models: Branch and RefMapping types
    - gitwrap_core.objects: Object id validation

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

from collections.abc import Iterator

from gitwrap_core.errors import ValidationError
from gitwrap_core.models import Branch
from gitwrap_core.models import RefMapping
from gitwrap_core.objects import ensure_sha


# ---- Record Splitting ---------------------------------------------------------------------------------------

def iter_lines(
        text: str,
) -> Iterator[str]:
    """Yield the non-blank lines of text.

    Args:
        text: Raw tool output.

    Records end at a line feed only. Other line-break characters, such
    as a carriage return, stay inside the record.

    Yields:
        Each line without its terminator. Lines are not trimmed.
    """
    for line in text.split("\n"):
        if line.strip():
            yield line


def split_space(
        line: str,
) -> tuple[str, str]:
    """Split a line at its first space.

    Args:
        line: A 'head rest' line. The rest may contain more spaces.

    Returns:
        Tuple of (head, rest).

    Raises:
        ValidationError: If line contains no space.
    """
    head, sep, rest = line.partition(" ")
    if not sep:
        msg = f"Expected a space-separated line, got {line!r}."
        raise ValidationError(msg, raw=line)
    return head, rest


def split_fields(
        line: str,
        sep: str,
        count: int,
) -> list[str]:
    """Split a delimited row into exactly count fields.

    The last field keeps any further separators.

    Args:
        line: Row text.
        sep: Field separator.
        count: Expected number of fields.

    Returns:
        List of count fields.

    Raises:
        ValidationError: If the row has fewer fields.
    """
    fields = line.split(sep, count - 1)
    if len(fields) != count:
        msg = f"Expected {count} fields separated by {sep!r}, got {line!r}."
        raise ValidationError(msg, raw=line)
    return fields


# ---- Reverse Index ------------------------------------------------------------------------------------------

def reverse_line_map(
        text: str,
) -> RefMapping:
    """Build a key to value mapping from 'value key' lines.

    This is the native order of `git show-ref` output (object id, then
    ref name); the mapping is keyed by the second half. Later duplicate
    keys overwrite earlier ones.

    Args:
        text: Multi-line 'value key' text.

    Returns:
        Mapping from key to value.

    Raises:
        ValidationError: If a non-blank line contains no space.
    """
    mapping: RefMapping = {}
    for line in iter_lines(text):
        value, key = split_space(line)
        mapping[key] = value
    return mapping


# ---- Branch Listings ----------------------------------------------------------------------------------------

def parse_branch_list(
        text: str,
) -> list[Branch]:
    """Decode `git branch --no-color` output.

    Each line carries a two-character prefix: '* ' for the current
    branch, two spaces otherwise ('+ ' for a branch checked out in
    another worktree).

    Args:
        text: Branch listing output.

    Returns:
        Branches in listing order.

    Raises:
        ValidationError: If a line is too short to hold a name.
    """
    branches = []
    for line in iter_lines(text):
        if len(line) < 3:
            msg = f"Malformed branch line {line!r}."
            raise ValidationError(msg, raw=line)
        branches.append(Branch(name=line[2:], current=line.startswith("*")))
    return branches


def branch_names(
        text: str,
) -> list[str]:
    """Decode a branch listing to plain names."""
    return [branch.name for branch in parse_branch_list(text)]


# ---- Commit Bodies ------------------------------------------------------------------------------------------

def parse_commit_tree(
        body: str,
) -> str:
    """Extract the tree id from a `cat-file commit` body.

    Args:
        body: Raw commit object text. Its first line is 'tree <id>'.

    Returns:
        The tree object id.

    Raises:
        ValidationError: If the first line does not name a tree.
    """
    first_line = next(iter_lines(body), None)
    if first_line is None:
        msg = "Empty commit body."
        raise ValidationError(msg, raw=body)

    what, sha = split_space(first_line)
    if what != "tree":
        msg = f"Value is a {what}, not a tree."
        raise ValidationError(msg, raw=first_line)
    return ensure_sha(sha)
