"""Tree entry codec and tree merging for GitWrap.

Decodes `git ls-tree` rows into TreeEntry values, encodes entries into
the `git mktree` input format, and merges a tree listing with new
entries at a single directory level.

Row grammar (one per line):

    MODE SP KIND SP OBJECTID TAB NAME

MODE is six digits, KIND a lowercase word, OBJECTID 40 lowercase hex
digits and NAME everything after the first tab.

Execution Context:
    Library module - imported by repository and CLI

Dependencies:
    - gitwrap_core.models: TreeEntry and ObjectKind
    - gitwrap_core.protocol: Line splitting

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from collections.abc import Sequence

from gitwrap_core.errors import ValidationError
from gitwrap_core.models import TreeEntry
from gitwrap_core.protocol import iter_lines


# ---- Constants ----------------------------------------------------------------------------------------------

ENTRY_PATTERN = re.compile(r"([0-9]{6}) ([a-z]+) ([0-9a-f]{40})\t(.*)", re.DOTALL)


# ---- Codec Functions ----------------------------------------------------------------------------------------

def parse_entry(
        line: str,
) -> TreeEntry:
    """Decode one ls-tree row.

    The whole row is matched in one pass, since NAME may itself contain
    spaces and tabs. A single trailing newline is accepted.

    Args:
        line: Row text.

    Returns:
        Decoded TreeEntry.

    Raises:
        ValidationError: If the row does not match the grammar or names
            an unknown object kind.
    """
    row = line[:-1] if line.endswith("\n") else line
    match = ENTRY_PATTERN.fullmatch(row)
    if match is None:
        msg = f"Malformed tree entry {line!r}."
        raise ValidationError(msg, raw=line)

    mode, kind, object_id, name = match.groups()
    return TreeEntry(mode=mode, kind=kind, object_id=object_id, name=name)


def _coerce_entry(
        entry: TreeEntry | Sequence[str | None],
) -> TreeEntry:
    if isinstance(entry, TreeEntry):
        return entry
    if isinstance(entry, str) or len(entry) != 4:
        msg = f"Expected a tree entry or (mode, kind, object, name), got {entry!r}."
        raise ValidationError(msg, raw=str(entry))
    mode, kind, object_id, name = entry
    return TreeEntry(mode=mode, kind=kind, object_id=object_id, name=name)


def format_entry(
        entry: TreeEntry | Sequence[str | None],
) -> str:
    """Encode one entry as a newline-terminated mktree row.

    Args:
        entry: TreeEntry or (mode, kind, object_id, name) sequence. A
            mode of None uses the kind default.

    Returns:
        Row text.

    Raises:
        ValidationError: If the entry's kind or object id is invalid.
    """
    tree_entry = _coerce_entry(entry)
    return (
        f"{tree_entry.effective_mode} {tree_entry.kind.value} "
        f"{tree_entry.object_id}\t{tree_entry.name}\n"
    )


def format_entries(
        entries: Iterable[TreeEntry | Sequence[str | None]],
) -> str:
    """Encode entries as the complete mktree input."""
    return "".join(format_entry(entry) for entry in entries)


def parse_tree_listing(
        text: str,
) -> list[TreeEntry]:
    """Decode full ls-tree output, one entry per non-blank line."""
    return [parse_entry(line) for line in iter_lines(text)]


# ---- Merge Functions ----------------------------------------------------------------------------------------

def merge_tree(
        base: Iterable[TreeEntry] | None,
        overrides: Iterable[TreeEntry | Sequence[str | None]],
) -> list[TreeEntry]:
    """Combine a tree listing with new entries.

    Base entries whose name is not overridden come first, in base
    order, followed by every override. An overridden name therefore
    moves to the end instead of keeping its base position. Subtrees are
    not descended into.

    Args:
        base: Existing tree entries (None or empty for a new tree).
        overrides: Entries to add or replace, matched by name.

    Returns:
        Merged entry list.
    """
    new_entries = [_coerce_entry(entry) for entry in overrides]
    old_entries = list(base or [])
    if not old_entries:
        return new_entries

    names = {entry.name for entry in new_entries}
    kept = [entry for entry in old_entries if entry.name not in names]
    return kept + new_entries
