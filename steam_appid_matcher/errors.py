"""Exceptions raised by the matcher components.

Components raise; only the CLI turns these into a process exit status.
"""

from __future__ import annotations


class MatcherError(RuntimeError):
    """Base class for fatal errors that abort a matching run."""


class ConfigError(MatcherError):
    """Configuration file missing, unreadable or failing validation."""


class InputFileError(MatcherError):
    """Input file missing, unreadable or of an unsupported type."""


class CatalogFetchError(MatcherError):
    """Steam app list unreachable or malformed."""
