"""Reconcile a local Maven-style repository against a remote one."""

__version__ = "0.3.0"
