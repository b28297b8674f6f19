"""GitWrap ls-tree command.

Shows the entries of a tree object.

Execution Context:
    CLI command - invoked via `gitwrap ls-tree TREE`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitwrap_core: Repository and tree decoding

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


# ---- Ls-Tree Command ----------------------------------------------------------------------------------------

@click.command("ls-tree")
@click.argument("tree")
@click.option(
    "--blobs-only",
    is_flag=True,
    help="Only show blob entries.",
)
@click.pass_context
def ls_tree(
        ctx: click.Context,
        tree: str,
        blobs_only: bool,
) -> None:
    """List the entries of TREE.

    TREE may be a tree id or any tree-ish git accepts (e.g. HEAD).

    Examples:
        gitwrap ls-tree HEAD
        gitwrap ls-tree --blobs-only 4b825dc6
    """
    try:
        repo = get_repo(ctx)
        entries = repo.ls_tree(tree)
        if blobs_only:
            entries = [entry for entry in entries if entry.is_blob]

        if not entries:
            console.print("[dim]Empty tree[/dim]")
            return

        table = Table(title=f"Tree {tree}")
        table.add_column("Mode", style="dim")
        table.add_column("Kind")
        table.add_column("Object", style="cyan", no_wrap=True)
        table.add_column("Name", style="green")

        for entry in entries:
            table.add_row(entry.effective_mode, entry.kind.value, entry.object_id, entry.name)

        console.print(table)

    except Exception as ls_tree_error:
        msg = f"ls-tree failed: {ls_tree_error}"
        raise click.ClickException(msg) from ls_tree_error
