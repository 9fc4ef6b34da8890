"""Run orchestration: scan, probe, and optionally archive."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from repodiff.modules.reconcile.archive import ArchivePackager
from repodiff.modules.reconcile.domain import ArchiveResult, ReconcileReport
from repodiff.modules.reconcile.scanner import LocalRepositoryScanner
from repodiff.settings import Settings
from .engine import ReconciliationEngine


@dataclass
class RunSummary:
    report: ReconcileReport
    archive: Optional[ArchiveResult] = None
    elapsed: float = 0.0


class ReconcileService:
    """Find local artifacts missing from the remote and package them on request."""

    def __init__(
        self,
        settings: Settings,
        *,
        scanner: LocalRepositoryScanner,
        engine: ReconciliationEngine,
        packager: ArchivePackager,
    ) -> None:
        self.settings = settings
        self.scanner = scanner
        self.engine = engine
        self.packager = packager
        self.log = logging.getLogger(self.__class__.__name__)

    def run(self, cancel_event: Optional[threading.Event] = None) -> RunSummary:
        started = time.monotonic()
        local_path = self.settings.local_path or ""
        coordinates = self.scanner.scan(local_path, frozenset(self.settings.ignored_groups))
        report = self.engine.find_missing(
            coordinates,
            cancel_event=cancel_event,
            deadline=self.settings.deadline_seconds,
        )
        summary = RunSummary(report=report)

        if self.settings.archive_path:
            if report.cancelled:
                self.log.warning("Archive %s reflects a partial check only.", self.settings.archive_path)
            summary.archive = self.packager.package(
                local_path, report.missing_paths, self.settings.archive_path
            )

        summary.elapsed = time.monotonic() - started
        return summary
