"""
Data loaders for the HMPI Analyzer.

Includes:
- CSV / JSON batch import of groundwater samples
"""

from loaders.batch import (
    BatchImportResult,
    RecordError,
    import_batch,
    import_records,
    parse_csv,
    parse_json,
)

__all__ = [
    "BatchImportResult",
    "RecordError",
    "import_batch",
    "import_records",
    "parse_csv",
    "parse_json",
]
