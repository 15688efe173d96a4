from __future__ import annotations


class SortableColumnsError(Exception):
    """Base class for sortable column failures."""


class ConfigurationError(SortableColumnsError, ValueError):
    """Raised for unknown option keys or unusable configuration values."""


class MissingColumnError(SortableColumnsError, ValueError):
    """Raised when a column link cannot resolve the column to sort by."""


class UnknownColumnError(SortableColumnsError, KeyError):
    """Raised when a dataset is sorted by a column it does not expose."""

    def __str__(self) -> str:
        # KeyError quotes its message otherwise.
        return str(self.args[0]) if self.args else ""
