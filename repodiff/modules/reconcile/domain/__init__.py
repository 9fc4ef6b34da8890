from .constants import CANDIDATE_SUFFIXES, SNAPSHOT_MARKER
from .coordinate import (
    ArtifactCoordinate,
    DisplayFormat,
    parse_artifact_path,
    to_display,
    to_remote_path,
)
from .errors import (
    ArchiveError,
    MalformedArtifactPathError,
    ReconcileError,
    RepositoryScanError,
)
from .models import ArchiveResult, MissingEntry, ReconcileReport

__all__ = [
    "ArtifactCoordinate",
    "DisplayFormat",
    "parse_artifact_path",
    "to_display",
    "to_remote_path",
    "CANDIDATE_SUFFIXES",
    "SNAPSHOT_MARKER",
    "ReconcileError",
    "MalformedArtifactPathError",
    "RepositoryScanError",
    "ArchiveError",
    "ArchiveResult",
    "MissingEntry",
    "ReconcileReport",
]
