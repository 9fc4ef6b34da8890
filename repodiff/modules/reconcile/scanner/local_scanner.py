"""Walk a local repository tree and collect artifact coordinates."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, Iterable, List, Set, Union

from repodiff.modules.reconcile.domain import (
    CANDIDATE_SUFFIXES,
    ArtifactCoordinate,
    MalformedArtifactPathError,
    RepositoryScanError,
    parse_artifact_path,
)


class LocalRepositoryScanner:
    """Depth-first scan of a Maven-style directory tree.

    Unreadable directories abort the scan with :class:`RepositoryScanError`;
    a single file whose path cannot be parsed is logged and skipped.
    """

    def __init__(self, suffixes: Iterable[str] = CANDIDATE_SUFFIXES) -> None:
        self.suffixes = tuple(suffixes)
        self.log = logging.getLogger(self.__class__.__name__)
        self.malformed: List[str] = []

    def is_candidate(self, name: str) -> bool:
        return name.endswith(self.suffixes)

    def scan(
        self,
        root: Union[str, Path],
        excluded_groups: AbstractSet[str] = frozenset(),
    ) -> Set[ArtifactCoordinate]:
        root_path = Path(root)
        self.log.info("Scanning local-path (%s)...", root_path)
        self.log.info("Ignoring artifacts in group (%s)", sorted(excluded_groups))
        if not root_path.is_dir():
            raise RepositoryScanError(f"Local repository {root_path} is not a readable directory")

        self.malformed = []
        coordinates: Set[ArtifactCoordinate] = set()
        directories = [root_path]
        while directories:
            current = directories.pop()
            try:
                with os.scandir(current) as entries:
                    for entry in entries:
                        if entry.is_dir(follow_symlinks=False):
                            directories.append(Path(entry.path))
                        elif self.is_candidate(entry.name):
                            coordinate = self._parse(entry.path, root_path, excluded_groups)
                            if coordinate is not None:
                                coordinates.add(coordinate)
            except OSError as exc:
                raise RepositoryScanError(f"Unable to read directory {current}: {exc}") from exc

        self.log.info("Found %d dependencies in local repository.", len(coordinates))
        if self.malformed:
            self.log.warning("Skipped %d files with unrecognised paths.", len(self.malformed))
        return coordinates

    def _parse(self, path: str, root: Path, excluded_groups: AbstractSet[str]):
        try:
            return parse_artifact_path(path, root, excluded_groups)
        except MalformedArtifactPathError as exc:
            self.log.warning("Ignoring %s: %s", path, exc.reason)
            self.malformed.append(exc.path)
            return None
