"""
Core module for the HMPI Analyzer.
Contains data models, the reference table, the HMPI engine, validation
and the in-memory sample store.
"""

from core.models import MetalKey, Category, Sample, Result
from core.errors import (
    HMPIError,
    ValidationError,
    ImportFormatError,
    ImportEmptyError,
    DomainComputeError,
)
from core.hmpi import HMPIScore, compute, categorize
from core.validator import validate
from core.store import SampleStore

__all__ = [
    # Models
    "MetalKey",
    "Category",
    "Sample",
    "Result",
    # Errors
    "HMPIError",
    "ValidationError",
    "ImportFormatError",
    "ImportEmptyError",
    "DomainComputeError",
    # Engine
    "HMPIScore",
    "compute",
    "categorize",
    "validate",
    "SampleStore",
]
