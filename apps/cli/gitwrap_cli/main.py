"""GitWrap CLI entry point.

Orchestrator for the GitWrap command-line interface. Builds the git
configuration from global options and registers all command modules.

Execution Context:
    CLI application - run via `python -m gitwrap_cli.main` or `gitwrap` command

Dependencies:
    - click: CLI framework
    - gitwrap_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import sys

import click

from gitwrap_cli import __version__
from gitwrap_cli.commands.add_to_tree import add_to_tree
from gitwrap_cli.commands.branch import branch
from gitwrap_cli.commands.ls_tree import ls_tree
from gitwrap_cli.commands.refs import refs
from gitwrap_cli.commands.resolve import resolve
from gitwrap_cli.commands.utils import configure_logging
from gitwrap_core.config import load_config
from gitwrap_core.errors import GitWrapError


# ---- CLI Group ----------------------------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, prog_name="gitwrap")
@click.option(
    "--git",
    "git_path",
    default=None,
    help="Path to the git executable (default: GITWRAP_GIT_PATH or 'git').",
)
@click.option(
    "--repo",
    "repo_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Repository directory (default: GITWRAP_WORK_DIR or current directory).",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, exists=True),
    default=None,
    help="Load settings from this .env file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every git invocation.",
)
@click.pass_context
def cli(
        ctx: click.Context,
        git_path: str | None,
        repo_dir: str | None,
        env_file: str | None,
        verbose: bool,
) -> None:
    """GitWrap - Typed access to git objects and refs.

    Reads git's tree, ref and branch listings and writes new trees
    from an existing one plus replacement entries.
    """
    if verbose:
        configure_logging()

    try:
        config = load_config(env_file)
    except GitWrapError as config_error:
        raise click.ClickException(str(config_error)) from config_error

    if git_path:
        config = config.with_git(git_path)
    ctx.obj = config.with_work_dir(repo_dir)


# ---- Register Commands --------------------------------------------------------------------------------------

cli.add_command(ls_tree)
cli.add_command(refs)
cli.add_command(branch)
cli.add_command(add_to_tree)
cli.add_command(resolve)


# ---- Main Function ------------------------------------------------------------------------------------------

def main() -> int:
    """Main entry point for GitWrap CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        cli()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
