"""GitWrap add-to-tree command.

Writes a new tree made of an existing tree plus replacement entries.

Execution Context:
    CLI command - invoked via `gitwrap add-to-tree TREE ENTRY...`

Dependencies:
    - click: CLI framework
    - rich: Terminal output
    - gitwrap_core: Tree merging and mktree

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import click
from rich.console import Console

from gitwrap_core.tree import format_entries

from .utils import get_repo
from .utils import parse_entry_spec

console = Console()


# ---- Add-To-Tree Command ------------------------------------------------------------------------------------

@click.command("add-to-tree")
@click.argument("tree")
@click.argument(
    "entries",
    nargs=-1,
    required=True,
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the mktree input instead of writing the tree.",
)
@click.pass_context
def add_to_tree(
        ctx: click.Context,
        tree: str,
        entries: tuple[str, ...],
        dry_run: bool,
) -> None:
    """Write TREE with ENTRIES added or replaced.

    Each ENTRY is [MODE:]KIND:SHA:NAME. Entries replace tree entries of
    the same name. Subtrees are not descended into.

    Examples:
        gitwrap add-to-tree HEAD^{tree} blob:e69de29b...:README.md
        gitwrap add-to-tree HEAD^{tree} 100755:blob:e69de29b...:run.sh
    """
    try:
        new_entries = [parse_entry_spec(spec) for spec in entries]
        repo = get_repo(ctx)
        merged = repo.adding_to_tree(tree, new_entries)

        if dry_run:
            click.echo(format_entries(merged), nl=False)
            return

        new_tree = repo.make_tree(merged)
        console.print(f"[green]{new_tree}[/green]")
        console.print(f"[dim]{len(merged)} entries[/dim]")

    except Exception as add_error:
        msg = f"add-to-tree failed: {add_error}"
        raise click.ClickException(msg) from add_error
