"""Concurrent presence check of local coordinates against a remote repository."""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, List, Optional, Protocol

from repodiff.modules.reconcile.domain import (
    ArtifactCoordinate,
    MissingEntry,
    ReconcileReport,
    to_remote_path,
)
from repodiff.modules.reconcile.domain.constants import PROGRESS_LOG_INTERVAL
from repodiff.modules.reconcile.probe import ProbeOutcome


class Prober(Protocol):
    def probe(self, coordinate: ArtifactCoordinate) -> ProbeOutcome:  # pragma: no cover - interface
        ...


class ProbeTally:
    """Running count of finished probes, safe to bump from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._done = 0

    def increment(self) -> int:
        with self._lock:
            self._done += 1
            return self._done

    @property
    def done(self) -> int:
        with self._lock:
            return self._done


class ReconciliationEngine:
    """Fan probes out over a bounded thread pool and collect the misses."""

    def __init__(
        self,
        prober: Prober,
        *,
        workers: Optional[int] = None,
        progress_interval: int = PROGRESS_LOG_INTERVAL,
    ) -> None:
        self.prober = prober
        self.workers = max(1, workers or os.cpu_count() or 1)
        self.progress_interval = max(1, progress_interval)
        self.log = logging.getLogger(self.__class__.__name__)

    def find_missing(
        self,
        coordinates: Iterable[ArtifactCoordinate],
        *,
        cancel_event: Optional[threading.Event] = None,
        deadline: Optional[float] = None,
    ) -> ReconcileReport:
        """Probe every coordinate and return the absent ones sorted by path.

        ``deadline`` is a budget in seconds.  Once it expires, or once
        ``cancel_event`` is set, no further probes are issued; probes already
        in flight run to completion and the report is marked cancelled.
        """

        started = time.monotonic()
        ordered = sorted(set(coordinates), key=to_remote_path)
        stop = cancel_event or threading.Event()
        expires_at = started + deadline if deadline is not None else None
        tally = ProbeTally()
        report = ReconcileReport(total=len(ordered))
        if not ordered:
            return report

        def _probe_one(coordinate: ArtifactCoordinate) -> Optional[ProbeOutcome]:
            if expires_at is not None and time.monotonic() >= expires_at:
                stop.set()
            if stop.is_set():
                return None
            outcome = self.prober.probe(coordinate)
            done = tally.increment()
            if done % self.progress_interval == 0:
                self.log.info("Checked %d of %d dependencies...", done, len(ordered))
            return outcome

        max_workers = min(self.workers, len(ordered))
        self.log.info("Probing %d dependencies with %d workers", len(ordered), max_workers)
        missing: List[MissingEntry] = []
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="probe") as executor:
            future_map = {executor.submit(_probe_one, coordinate): coordinate for coordinate in ordered}
            try:
                for future in as_completed(future_map):
                    outcome = future.result()
                    if outcome is None:
                        report.skipped += 1
                        continue
                    if outcome is ProbeOutcome.PRESENT:
                        continue
                    if outcome is ProbeOutcome.UNREACHABLE:
                        report.unreachable += 1
                    missing.append(MissingEntry(future_map[future]))
            except BaseException:
                stop.set()
                for future in future_map:
                    future.cancel()
                raise

        missing.sort(key=lambda entry: entry.path)
        report.missing = missing
        report.cancelled = stop.is_set()
        report.elapsed = time.monotonic() - started
        if report.cancelled:
            self.log.warning(
                "Reconciliation stopped early: %d of %d dependencies not checked.",
                report.skipped,
                report.total,
            )
        if report.unreachable:
            self.log.warning("%d dependencies could not be checked (transport failure).", report.unreachable)
        return report
