"""GitWrap Core Library.

Typed façade over the git command-line tool: decoders for git's text
output formats, tree entry encoding and merging, scoped configuration
and a Repository class wrapping plumbing and porcelain commands.

Execution Context:
    Library package - imported by CLI and other applications

Dependencies:
    - python-dotenv: .env configuration loading
    - git: External executable (on PATH or configured)

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

from gitwrap_core.config import GitConfig
from gitwrap_core.config import current_config
from gitwrap_core.config import load_config
from gitwrap_core.config import with_git
from gitwrap_core.config import with_repo
from gitwrap_core.errors import ExternalToolError
from gitwrap_core.errors import GitWrapError
from gitwrap_core.errors import NotFoundError
from gitwrap_core.errors import ValidationError
from gitwrap_core.models import Branch
from gitwrap_core.models import ObjectKind
from gitwrap_core.models import TreeEntry
from gitwrap_core.objects import is_sha
from gitwrap_core.protocol import reverse_line_map
from gitwrap_core.repository import Repository
from gitwrap_core.tree import format_entry
from gitwrap_core.tree import merge_tree
from gitwrap_core.tree import parse_entry

__version__ = "0.1.0"

__all__ = [
    "Branch",
    "ExternalToolError",
    "GitConfig",
    "GitWrapError",
    "NotFoundError",
    "ObjectKind",
    "Repository",
    "TreeEntry",
    "ValidationError",
    "__version__",
    "current_config",
    "format_entry",
    "is_sha",
    "load_config",
    "merge_tree",
    "parse_entry",
    "reverse_line_map",
    "with_git",
    "with_repo",
]
