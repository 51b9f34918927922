"""Custom exceptions for pkgdrift."""


class PkgDriftError(Exception):
    """Base exception for all pkgdrift errors."""


class ComponentFileError(PkgDriftError):
    """Raised when a components file cannot be read or fails validation."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid components file {path}: {reason}")
