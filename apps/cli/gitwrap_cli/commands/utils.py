"""Utility functions for GitWrap CLI commands.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - click: Context access and errors
    - rich: Log rendering
    - gitwrap_core: Repository lookup and entry parsing

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from gitwrap_core.config import GitConfig
from gitwrap_core.config import current_config
from gitwrap_core.models import MODE_PATTERN
from gitwrap_core.models import TreeEntry
from gitwrap_core.protocol import split_fields
from gitwrap_core.repository import Repository
from gitwrap_core.repository import find_repository


def configure_logging() -> None:
    """Send DEBUG logs to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def get_config(
        ctx: click.Context,
) -> GitConfig:
    """Return the configuration built by the CLI group."""
    config = ctx.find_object(GitConfig)
    return config if config is not None else current_config()


def get_repo(
        ctx: click.Context,
) -> Repository:
    """Find the repository the command runs against.

    Args:
        ctx: Click context carrying the GitConfig.

    Returns:
        Repository containing the configured directory.

    Raises:
        click.ClickException: If no repository is found.
    """
    config = get_config(ctx)
    repo = find_repository(config=config)
    if repo is None:
        raise click.ClickException("Not a git repository")
    return repo


def parse_entry_spec(
        spec: str,
) -> TreeEntry:
    """Parse a command-line entry of the form [MODE:]KIND:SHA:NAME.

    NAME may contain colons.

    Args:
        spec: Entry text.

    Returns:
        TreeEntry with mode None when MODE is omitted.
    """
    mode = None
    head, sep, rest = spec.partition(":")
    if sep and MODE_PATTERN.fullmatch(head):
        mode, spec = head, rest

    kind, object_id, name = split_fields(spec, ":", 3)
    return TreeEntry(mode=mode, kind=kind, object_id=object_id, name=name)
