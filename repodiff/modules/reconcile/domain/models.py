"""Result models produced by a reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .coordinate import ArtifactCoordinate, DisplayFormat, to_display


@dataclass(frozen=True)
class MissingEntry:
    """A local artifact the remote repository does not serve."""

    coordinate: ArtifactCoordinate

    @property
    def path(self) -> str:
        return to_display(self.coordinate, DisplayFormat.PATH)


@dataclass
class ReconcileReport:
    """Outcome of probing every local coordinate against the remote."""

    total: int
    missing: List[MissingEntry] = field(default_factory=list)
    unreachable: int = 0
    skipped: int = 0
    cancelled: bool = False
    elapsed: float = 0.0

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def missing_paths(self) -> List[str]:
        return [entry.path for entry in self.missing]


@dataclass
class ArchiveResult:
    destination: str
    written: List[str] = field(default_factory=list)
    omitted: List[str] = field(default_factory=list)
