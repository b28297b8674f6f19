"""Error types for GitWrap.

A small closed family of exceptions raised by the codecs, the command
runner and the repository façade. Every error keeps the raw text that
caused it so callers can branch on the exception type instead of
parsing messages.

Execution Context:
    Library module - imported by every other gitwrap_core module

Dependencies:
    - None (standard library only)

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

from collections.abc import Sequence


# ---- Base Error ---------------------------------------------------------------------------------------------

class GitWrapError(Exception):
    """Base class for all GitWrap errors.

    Attributes:
        raw: The offending input fragment or tool diagnostic.
    """

    def __init__(
            self,
            message: str,
            raw: str | None = None,
    ) -> None:
        super().__init__(message)
        self.raw = raw


# ---- Error Variants -----------------------------------------------------------------------------------------

class ValidationError(GitWrapError, ValueError):
    """Malformed object id, object kind, tree row, ref line or argument."""


class ExternalToolError(GitWrapError, RuntimeError):
    """The git executable reported a failure.

    The message always embeds the verbatim diagnostic printed by git.

    Attributes:
        raw: Diagnostic text exactly as git printed it (trimmed).
        returncode: Process exit status, when known.
        command: Argument vector of the failed invocation, when known.
    """

    def __init__(
            self,
            diagnostic: str,
            returncode: int | None = None,
            command: Sequence[str] | None = None,
    ) -> None:
        super().__init__(f"Git error: {diagnostic}", raw=diagnostic)
        self.returncode = returncode
        self.command = tuple(command) if command is not None else None


class NotFoundError(GitWrapError, LookupError):
    """A ref or revision does not resolve to an object."""
