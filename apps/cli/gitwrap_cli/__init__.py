"""GitWrap CLI Application.

Command-line interface over the gitwrap_core façade: inspect trees and
refs, list branches and write merged trees without hand-building git
plumbing input.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - gitwrap_core: Core library

Metadata:
    Version: 0.1.0
    Author: GitWrap Team
"""
from __future__ import annotations

__version__ = "0.1.0"
