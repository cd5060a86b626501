from __future__ import annotations


class ViewerError(Exception):
    """Base error for the expression viewer."""


class LoadError(ViewerError):
    """Raised when an input source is unreachable or answers with a failure status."""


class SelectionError(ViewerError):
    """Raised when a plot is requested for an empty or unmatched gene selection."""


class AccessUnavailableError(ViewerError):
    """Raised when the hashing primitive used by the access gate is unavailable."""
