"""HTTP client that checks whether artifacts exist in a remote repository."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

import httpx

from repodiff.modules.reconcile.domain import ArtifactCoordinate, to_remote_path
from repodiff.settings import Settings


class ProbeOutcome(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    UNREACHABLE = "unreachable"


class RemoteProber:
    """Issue one HEAD request per artifact against a remote repository.

    The prober holds no per-probe state, so a single instance (and its
    ``httpx.Client`` connection pool) can be shared by every worker thread.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
        auth: Optional[Tuple[str, str]] = None,
        verify: bool = True,
        max_connections: int = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.log = logging.getLogger(self.__class__.__name__)
        self._auth = auth
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout,
            verify=verify,
            limits=httpx.Limits(max_connections=max_connections),
        )

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[httpx.Client] = None) -> "RemoteProber":
        auth = None
        if settings.remote_username and settings.remote_password:
            auth = (settings.remote_username, settings.remote_password)
        return cls(
            settings.remote_url or "",
            client=client,
            timeout=settings.request_timeout,
            auth=auth,
            verify=settings.verify_tls,
            max_connections=settings.workers,
        )

    def build_url(self, coordinate: ArtifactCoordinate) -> str:
        return f"{self.base_url}/{to_remote_path(coordinate)}"

    def probe(self, coordinate: ArtifactCoordinate) -> ProbeOutcome:
        url = self.build_url(coordinate)
        self.log.debug("Checking remote repo (%s) for dependency (%s)...", self.base_url, coordinate)
        try:
            response = self._client.head(url, auth=self._auth)
        except httpx.TransportError as exc:
            self.log.warning("Remote check failed for %s: %s: %s", url, exc.__class__.__name__, exc)
            return ProbeOutcome.UNREACHABLE

        if response.is_success:
            return ProbeOutcome.PRESENT
        self.log.debug("Remote answered %d for %s", response.status_code, url)
        return ProbeOutcome.ABSENT

    def exists(self, coordinate: ArtifactCoordinate) -> bool:
        return self.probe(coordinate) is ProbeOutcome.PRESENT

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RemoteProber":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
