from __future__ import annotations

"""
Error Taxonomy.

Structural and configuration failures abort a run before anything is
touched; per-artifact failures never surface as exceptions (see the
reconciler).
"""


class DepPruneError(Exception):
    """Base class for every error raised by depprune."""


class UsageError(DepPruneError):
    """Malformed command-line invocation."""


class BuildEnvironmentError(DepPruneError):
    """
    Required build environment is missing or unusable.

    Raised when the platform identifier or project root cannot be
    resolved, or when a directory cannot be mapped to an object root.
    """


class PreconditionError(DepPruneError):
    """An operation was invoked from the wrong working directory."""


class LayoutError(DepPruneError, ValueError):
    """A path does not follow the object-directory naming convention."""
