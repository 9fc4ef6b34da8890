"""Exceptions raised by the reconcile module."""

from __future__ import annotations


class ReconcileError(Exception):
    """Base error for failures that abort a reconciliation run."""


class MalformedArtifactPathError(ReconcileError, ValueError):
    """A candidate file path cannot be mapped to an artifact coordinate."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class RepositoryScanError(ReconcileError):
    """The local repository tree could not be read."""


class ArchiveError(ReconcileError):
    """The archive could not be created, written or finalized."""
