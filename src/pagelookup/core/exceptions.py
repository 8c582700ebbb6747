"""Custom exceptions for pagelookup."""


class PageLookupError(Exception):
    """Base exception for all pagelookup errors."""

    pass


class ConfigError(PageLookupError):
    """Configuration could not be loaded or is invalid."""

    pass


class SnapshotError(PageLookupError):
    """Index snapshot could not be read or is malformed."""

    def __init__(self, path: str, reason: str):
        """Initialize exception with snapshot path and reason.

        Args:
            path: Path to the snapshot that failed to load.
            reason: Human-readable description of the failure.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid index snapshot {path}: {reason}")


class IndexUnavailableError(PageLookupError):
    """Index reader is not loaded or has been closed."""

    pass
