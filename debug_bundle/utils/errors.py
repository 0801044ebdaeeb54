"""Error hierarchy for Debug Bundle."""

from typing import Optional


class DebugBundleError(Exception):
    """Base exception for all Debug Bundle errors."""

    pass


class DuplicateNameError(DebugBundleError):
    """Raised when a source name is already registered."""

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message or f'source "{name}" is already registered')
        self.name = name


class SourceWriteError(DebugBundleError):
    """Raised when a source fails while its archive entry is written.

    The build that raised it is abandoned; no archive bytes are returned.
    """

    def __init__(self, name: str, cause: BaseException):
        super().__init__(f'source "{name}" failed: {cause}')
        self.name = name
        self.cause = cause


class ConstructionError(DebugBundleError):
    """Raised when a diagnostic source cannot be created."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"unable to create {source}: {reason}")
        self.source = source
        self.reason = reason
