"""
Error kinds raised by the HMPI core.

Every error is a ValueError so callers that only care about "bad input"
can catch that; the presentation layer catches HMPIError and shows the
message as-is.
"""

from typing import List, Optional


class HMPIError(ValueError):
    """Base class for all domain errors."""


class ValidationError(HMPIError):
    """A single raw sample broke a domain rule."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class ImportFormatError(HMPIError):
    """The batch as a whole is structurally unusable."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class ImportEmptyError(HMPIError):
    """A batch was parsed but not a single record survived validation."""

    def __init__(self, error_count: int = 0):
        super().__init__("No valid samples found in the file")
        self.error_count = error_count


class DomainComputeError(HMPIError):
    """The engine cannot produce a finite HMPI for the given input."""
