"""Errors surfaced to callers of the scan API."""


class ScanRootError(RuntimeError):
    """Root directory does not exist, is not a directory, or cannot be opened."""
    pass
