"""Artifact coordinates and the path codec for Maven-style repository layouts.

A repository stores every file as::

    <group-dirs>/<artifactid>/<version>/<artifactid>-<version>[-<classifier>].<extension>

``parse_artifact_path`` maps such a path to an :class:`ArtifactCoordinate` and
``to_remote_path`` maps it back.  The file name is split by removing the
``<artifactid>-<version>`` prefix, not by matching a grammar, so a classifier
that itself contains a ``.`` is read up to the *last* dot only.  A coordinate
that carries both a classifier and a dotted extension therefore does not
survive a round trip.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, List, Optional, Union

from repodiff.logging_config import TRACE
from .constants import MIN_PATH_SEGMENTS, SNAPSHOT_MARKER
from .errors import MalformedArtifactPathError

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class DisplayFormat(str, Enum):
    PATH = "path"
    SHORT = "short"
    LONG = "long"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "DisplayFormat":
        """Resolve a user supplied label; anything unknown renders as LONG."""
        try:
            return cls((label or "").strip().lower())
        except ValueError:
            return cls.LONG


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Identity of one file in the repository, immutable and hashable so scans can collect it in a set."""

    groupid: str
    artifactid: str
    version: str
    extension: str
    classifier: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("groupid", "artifactid", "version", "extension"):
            if not getattr(self, name):
                raise ValueError(f"artifact coordinate requires a non-empty {name}")
        if self.classifier == "":
            object.__setattr__(self, "classifier", None)

    @property
    def file_name(self) -> str:
        stem = f"{self.artifactid}-{self.version}"
        if self.classifier:
            stem = f"{stem}-{self.classifier}"
        return f"{stem}.{self.extension}"

    @property
    def path_segments(self) -> List[str]:
        group_path = self.groupid.replace(".", "/")
        return [group_path, self.artifactid, self.version, self.file_name]


def _normalize(path: PathLike) -> str:
    return os.fspath(path).replace("\\", "/")


def _relative_to_root(path: str, repository_root: str) -> str:
    root = repository_root.rstrip("/")
    if root and path.startswith(root) and path[len(root):len(root) + 1] in ("", "/"):
        path = path[len(root):]
    return path[1:] if path.startswith("/") else path


def parse_artifact_path(
    path: PathLike,
    repository_root: PathLike = "",
    excluded_groups: AbstractSet[str] = frozenset(),
) -> Optional[ArtifactCoordinate]:
    """Derive the coordinate of ``path`` inside ``repository_root``.

    Returns ``None`` for snapshot versions and for groups listed in
    ``excluded_groups``.  Raises :class:`MalformedArtifactPathError` when the
    path is too short or the file name does not start with
    ``<artifactid>-<version>``.
    """

    relative = _relative_to_root(_normalize(path), _normalize(repository_root))
    parts = relative.split("/")
    if len(parts) < MIN_PATH_SEGMENTS or not all(parts):
        raise MalformedArtifactPathError(
            relative, "expected <group>/<artifact>/<version>/<file>"
        )

    groupid = ".".join(parts[:-3])
    artifactid, version, file_name = parts[-3], parts[-2], parts[-1]

    if groupid in excluded_groups:
        log.debug("Skipping excluded group %s (%s)", groupid, relative)
        return None

    if SNAPSHOT_MARKER in version:
        log.debug("Skipping snapshot %s", relative)
        return None

    prefix = f"{artifactid}-{version}"
    if not file_name.startswith(prefix):
        raise MalformedArtifactPathError(relative, f"file name does not start with {prefix!r}")
    remainder = file_name[len(prefix):]

    if remainder.startswith("-"):
        classifier, dot, extension = remainder[1:].rpartition(".")
        if not dot:
            classifier, extension = "", ""
    elif remainder.startswith("."):
        classifier, extension = "", remainder[1:]
    else:
        raise MalformedArtifactPathError(relative, f"unexpected text after {prefix!r}")
    if not extension:
        raise MalformedArtifactPathError(relative, "file name has no extension")

    coordinate = ArtifactCoordinate(
        groupid=groupid,
        artifactid=artifactid,
        version=version,
        extension=extension,
        classifier=classifier or None,
    )
    log.log(TRACE, "%s --> %s", relative, coordinate)
    return coordinate


def to_remote_path(coordinate: ArtifactCoordinate) -> str:
    return "/".join(coordinate.path_segments)


def to_display(coordinate: ArtifactCoordinate, display_format: Union[DisplayFormat, str]) -> str:
    if not isinstance(display_format, DisplayFormat):
        display_format = DisplayFormat.from_label(display_format)

    if display_format is DisplayFormat.PATH:
        return to_remote_path(coordinate)
    if display_format is DisplayFormat.SHORT:
        return ":".join(
            (
                coordinate.groupid,
                coordinate.artifactid,
                coordinate.version,
                coordinate.classifier or "",
                coordinate.extension,
            )
        )

    pairs = [
        ("group", coordinate.groupid),
        ("artifact", coordinate.artifactid),
        ("version", coordinate.version),
    ]
    if coordinate.classifier:
        pairs.append(("classifier", coordinate.classifier))
    pairs.append(("type", coordinate.extension))
    return ", ".join(f"{key}:{value}" for key, value in pairs)
