"""GitWrap refs command.

Maps refs to the commits they point to.

Execution Context:
    CLI command - invoked via `gitwrap refs [REF]`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitwrap_core: Repository ref lookup

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .utils import get_repo

console = Console()


# ---- Refs Command -------------------------------------------------------------------------------------------

@click.command()
@click.argument(
    "ref",
    required=False,
)
@click.pass_context
def refs(
        ctx: click.Context,
        ref: str | None,
) -> None:
    """Show refs and their commits.

    Without arguments, lists every ref. With a full REF name, prints
    the commit it points to and fails if it does not exist.

    Examples:
        gitwrap refs
        gitwrap refs refs/heads/main
    """
    try:
        repo = get_repo(ctx)

        if ref:
            console.print(repo.ensure_ref_to_commit(ref))
            return

        mapping = repo.refs_to_commits()
        if not mapping:
            console.print("[dim]No refs yet[/dim]")
            return

        table = Table(title="Refs")
        table.add_column("Ref", style="green")
        table.add_column("Commit", style="cyan", no_wrap=True)
        for name, commit in sorted(mapping.items()):
            table.add_row(name, commit)
        console.print(table)

    except Exception as refs_error:
        msg = f"Refs lookup failed: {refs_error}"
        raise click.ClickException(msg) from refs_error
