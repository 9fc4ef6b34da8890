"""Wire the reconcile services from one Settings instance."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import httpx

from repodiff.modules.reconcile.archive import ArchivePackager
from repodiff.modules.reconcile.probe import RemoteProber
from repodiff.modules.reconcile.scanner import LocalRepositoryScanner
from repodiff.modules.reconcile.service import ReconcileService, ReconciliationEngine
from .settings import Settings


@dataclass
class ServiceContainer:
    """Scanner, prober, engine and packager for one reconciliation run."""

    settings: Settings
    client: Optional[httpx.Client] = None
    scanner: LocalRepositoryScanner = field(init=False)
    prober: RemoteProber = field(init=False)
    engine: ReconciliationEngine = field(init=False)
    packager: ArchivePackager = field(init=False)
    reconcile_service: ReconcileService = field(init=False)

    def __post_init__(self) -> None:
        self.scanner = LocalRepositoryScanner()
        self.prober = RemoteProber.from_settings(self.settings, client=self.client)
        self.engine = ReconciliationEngine(self.prober, workers=self.settings.workers)
        self.packager = ArchivePackager()
        self.reconcile_service = ReconcileService(
            self.settings,
            scanner=self.scanner,
            engine=self.engine,
            packager=self.packager,
        )

    def close(self) -> None:
        self.prober.close()

    def __enter__(self) -> "ServiceContainer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
