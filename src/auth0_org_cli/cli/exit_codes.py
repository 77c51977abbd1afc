"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit: assignments ran, or the operator chose a no-op."""

GENERAL_ERROR: int = 1
"""A known OrgCliError was caught, or the user was not found."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

USAGE_ERROR: int = 64
"""Missing or malformed command-line argument (BSD ``EX_USAGE``)."""

CONFIGURATION_ERROR: int = 78
"""Missing or invalid tenant configuration (BSD ``EX_CONFIG``)."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
