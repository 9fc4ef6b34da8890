from .remote_prober import ProbeOutcome, RemoteProber

__all__ = ["ProbeOutcome", "RemoteProber"]
