"""GitWrap resolve command.

Execution Context:
    CLI command - invoked via `gitwrap resolve REV`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitwrap_core: Revision and tree lookup

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import click
from rich.console import Console

from .utils import get_repo

console = Console()


# ---- Resolve Command ----------------------------------------------------------------------------------------

@click.command()
@click.argument("rev")
@click.pass_context
def resolve(
        ctx: click.Context,
        rev: str,
) -> None:
    """Print the commit REV names and that commit's tree.

    Examples:
        gitwrap resolve HEAD
        gitwrap resolve main~2
    """
    try:
        repo = get_repo(ctx)
        commit = repo.to_commit(rev)
        tree = repo.commit_to_tree(commit)

        console.print(f"[bold]commit[/bold] [cyan]{commit}[/cyan]")
        console.print(f"[bold]tree[/bold]   [cyan]{tree}[/cyan]")

    except Exception as resolve_error:
        msg = f"Resolve failed: {resolve_error}"
        raise click.ClickException(msg) from resolve_error
