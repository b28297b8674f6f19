"""GitWrap branch command.

Lists local branches, optionally filtered by a commit.

Execution Context:
    CLI command - invoked via `gitwrap branch`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitwrap_core: Repository branch listing

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import click
from rich.console import Console

from gitwrap_core.models import BranchFilter

from .utils import get_repo

console = Console()


# ---- Branch Command -----------------------------------------------------------------------------------------

@click.command()
@click.option(
    "--merged",
    metavar="COMMIT",
    default=None,
    help="Only branches merged into COMMIT.",
)
@click.option(
    "--no-merged",
    metavar="COMMIT",
    default=None,
    help="Only branches not merged into COMMIT.",
)
@click.option(
    "--contains",
    metavar="COMMIT",
    default=None,
    help="Only branches containing COMMIT.",
)
@click.pass_context
def branch(
        ctx: click.Context,
        merged: str | None,
        no_merged: str | None,
        contains: str | None,
) -> None:
    """List branches.

    The current branch is marked with '*'. At most one filter may be
    given.

    Examples:
        gitwrap branch
        gitwrap branch --merged main
        gitwrap branch --contains 1a2b3c4d
    """
    filters = [
        (option, commit)
        for option, commit in (
            (BranchFilter.MERGED, merged),
            (BranchFilter.NO_MERGED, no_merged),
            (BranchFilter.CONTAINS, contains),
        )
        if commit
    ]
    if len(filters) > 1:
        raise click.UsageError("Use only one of --merged, --no-merged and --contains")

    try:
        repo = get_repo(ctx)
        branch_filter, commit = filters[0] if filters else (None, None)
        branches = repo.branch_list(branch_filter, commit)

        if not branches:
            console.print("[dim]No branches yet[/dim]")
            return

        for entry in branches:
            if entry.current:
                console.print(f"[green]* {entry.name}[/green]")
            else:
                console.print(f"  {entry.name}")

    except Exception as branch_error:
        msg = f"Branch listing failed: {branch_error}"
        raise click.ClickException(msg) from branch_error
