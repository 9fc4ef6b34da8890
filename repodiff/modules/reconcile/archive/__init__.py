from .packager import ArchivePackager, archive_mode

__all__ = ["ArchivePackager", "archive_mode"]
