"""Write missing artifacts into a tar archive."""

from __future__ import annotations

import contextlib
import logging
import tarfile
from pathlib import Path
from typing import Iterable, Union

from repodiff.modules.reconcile.domain import ArchiveError, ArchiveResult

_COMPRESSION_MODES = (
    ((".tar.gz", ".tgz"), "w:gz"),
    ((".tar.bz2", ".tbz2"), "w:bz2"),
    ((".tar.xz", ".txz"), "w:xz"),
)


def archive_mode(destination: Path) -> str:
    name = destination.name.lower()
    for suffixes, mode in _COMPRESSION_MODES:
        if name.endswith(suffixes):
            return mode
    return "w"


class ArchivePackager:
    """Stream files from the local repository into a single archive.

    Entries are written in sorted order under their repository-relative path.
    A source file that cannot be opened is omitted with a warning; failing to
    create, write or close the archive raises :class:`ArchiveError`.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(self.__class__.__name__)

    def package(
        self,
        root: Union[str, Path],
        relative_paths: Iterable[str],
        destination: Union[str, Path],
    ) -> ArchiveResult:
        root_path = Path(root)
        dest_path = Path(destination)
        result = ArchiveResult(destination=str(dest_path))
        self.log.info("Writing archive file (%s)...", dest_path)

        try:
            archive = tarfile.open(dest_path, archive_mode(dest_path))
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(f"Unable to create archive {dest_path}: {exc}") from exc

        try:
            for item in sorted(relative_paths):
                full_path = root_path / item
                self.log.debug("Archiving file: %s", full_path)
                try:
                    handle = open(full_path, "rb")
                except OSError as exc:
                    self.log.warning("Unable to open file (%s) - omitted from archive: %s", full_path, exc)
                    result.omitted.append(item)
                    continue
                with handle:
                    info = archive.gettarinfo(arcname=item, fileobj=handle)
                    archive.addfile(info, handle)
                result.written.append(item)
        except (OSError, tarfile.TarError) as exc:
            with contextlib.suppress(OSError, tarfile.TarError):
                archive.close()
            self._discard(dest_path)
            raise ArchiveError(f"Problem writing archive {dest_path} (partial file removed): {exc}") from exc

        try:
            archive.close()
        except (OSError, tarfile.TarError) as exc:
            raise ArchiveError(f"Problem finishing archive {dest_path}: {exc}") from exc

        self.log.info(
            "Archived %d files to %s (%d omitted).", len(result.written), dest_path, len(result.omitted)
        )
        return result

    def _discard(self, dest_path: Path) -> None:
        try:
            dest_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            self.log.error("Unable to remove partial archive %s: %s", dest_path, exc)
