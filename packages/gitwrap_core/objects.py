"""Object identity checks for GitWrap.

Execution Context:
    Library module - imported by models, protocol and repository

Dependencies:
    - re: Object id pattern

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

import re
from typing import Any

from gitwrap_core.errors import ValidationError


# ---- Constants ----------------------------------------------------------------------------------------------

SHA_LENGTH = 40

# Lowercase only: abbreviated or uppercase hashes are rejected.
SHA_PATTERN = re.compile(r"[0-9a-f]{40}")


# ---- Validation Functions -----------------------------------------------------------------------------------

def is_sha(
        value: Any,
) -> str | None:
    """Check whether a value is a full 40-character object id.

    Only 0-9 and a-f are accepted, not A-F.

    Args:
        value: Candidate object id.

    Returns:
        The value itself if it is a valid object id, None otherwise.
    """
    if isinstance(value, str) and SHA_PATTERN.fullmatch(value):
        return value
    return None


def ensure_sha(
        value: Any,
) -> str:
    """Return a valid object id or raise.

    Args:
        value: Candidate object id.

    Returns:
        The validated object id.

    Raises:
        ValidationError: If value is not 40 lowercase hex characters.
    """
    sha = is_sha(value)
    if sha is None:
        msg = f"Invalid object id '{value}'."
        raise ValidationError(msg, raw=str(value))
    return sha
