from .local_scanner import LocalRepositoryScanner

__all__ = ["LocalRepositoryScanner"]
