"""Exception hierarchy shared by the store, ranking and CLI layers."""

from __future__ import annotations


class WdError(Exception):
    """Base class for every error surfaced to the command line."""


class ConfigError(WdError):
    """Invalid configuration value or unreadable config file."""


class HistoryStoreError(WdError):
    """Hard I/O failure while reading or writing the history file."""


class PathResolutionError(WdError):
    """A path given on the command line could not be canonicalised."""


class UnrepresentablePathError(WdError, ValueError):
    """A history entry cannot be encoded as text for comparison."""
