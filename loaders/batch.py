"""
Batch Importer - bulk sample input from CSV text or JSON records.

Each record is validated on its own; a bad record is logged and counted
but never aborts the batch. Structural problems (unknown format, missing
CSV columns, malformed JSON) fail the whole import before any record is
looked at.
"""

import io
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from core.errors import ImportEmptyError, ImportFormatError, ValidationError
from core.models import MetalKey, Sample
from core.validator import validate

log = logging.getLogger(__name__)


REQUIRED_COLUMNS = ["sampleName", "latitude", "longitude"] + [m.value for m in MetalKey]

SUPPORTED_KINDS = ("csv", "json")


@dataclass
class RecordError:
    """Why one record in a batch was rejected."""
    index: int  # 1-based position in the batch
    field: str
    message: str


@dataclass
class BatchImportResult:
    """Outcome of a batch import."""
    imported: List[Sample] = field(default_factory=list)
    errors: List[RecordError] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.imported)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def summary(self) -> str:
        text = f"Successfully imported {self.success_count} samples"
        if self.error_count:
            text += f" ({self.error_count} errors)"
        return text


# ═══════════════════════════════════════════════════════════════════════════
# PARSERS
# ═══════════════════════════════════════════════════════════════════════════
def parse_csv(content: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into raw records.

    The header must name every column in REQUIRED_COLUMNS (any order, extra
    columns are ignored). All cells are kept as trimmed strings; numeric
    parsing is the validator's job.

    Raises:
        ImportFormatError: on empty input, unreadable CSV or missing columns.
    """
    if not content or not content.strip():
        raise ImportFormatError("File is empty")

    try:
        df = pd.read_csv(
            io.StringIO(content.strip()),
            dtype=str,
            keep_default_na=False,
            index_col=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ImportFormatError(f"Could not parse CSV: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ImportFormatError(f"Missing required columns: {', '.join(missing)}", missing=missing)

    df = df.fillna("")
    for column in df.columns:
        df[column] = df[column].astype(str).str.strip()
    return df.to_dict(orient="records")


def parse_json(content: str) -> List[Mapping[str, Any]]:
    """
    Parse a JSON array of sample objects.

    Raises:
        ImportFormatError: when the text is not JSON or not an array.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ImportFormatError("Data must be an array of samples")
    return data


def detect_kind(kind: str) -> str:
    """
    Normalize a format hint.

    Accepts 'csv'/'json' or a file name ending in .csv/.json.
    """
    hint = (kind or "").strip().lower()
    for supported in SUPPORTED_KINDS:
        if hint == supported or hint.endswith(f".{supported}"):
            return supported
    raise ImportFormatError("Unsupported file format. Please use CSV or JSON.")


# ═══════════════════════════════════════════════════════════════════════════
# IMPORT
# ═══════════════════════════════════════════════════════════════════════════
def _to_raw(record: Mapping[str, Any], index: int) -> Dict[str, Any]:
    """Map an import record onto the validator's raw field names."""
    raw = {
        "name": record.get("sampleName") or f"Sample {index}",
        "latitude": record.get("latitude"),
        "longitude": record.get("longitude"),
    }
    for metal in MetalKey:
        raw[metal.value] = record.get(metal.value)
    return raw


def import_records(records: Sequence[Any]) -> BatchImportResult:
    """
    Validate every record of a batch independently.

    Args:
        records: Sequence of mappings with sampleName, latitude, longitude
                 and one entry per metal.

    Returns:
        BatchImportResult holding the valid Samples and the rejections.

    Raises:
        ImportEmptyError: when not a single record is valid.
    """
    result = BatchImportResult()

    for index, record in enumerate(records, start=1):
        if not isinstance(record, Mapping):
            log.warning(f"Error processing sample {index}: record is not an object")
            result.errors.append(RecordError(index, "record", "Record is not an object"))
            continue
        try:
            sample = validate(_to_raw(record, index))
        except ValidationError as e:
            log.warning(f"Error processing sample {index}: {e}")
            result.errors.append(RecordError(index, e.field, str(e)))
            continue
        result.imported.append(sample)

    if result.success_count == 0:
        raise ImportEmptyError(result.error_count)

    log.info(result.summary())
    return result


def import_batch(content: str, kind: str) -> BatchImportResult:
    """Parse file content of the given kind and import its records."""
    fmt = detect_kind(kind)
    if fmt == "csv":
        records = parse_csv(content)
    else:
        records = parse_json(content)
    return import_records(records)
