"""
CSV export of HMPI results, and the mapping that lets an exported file be
fed back through the batch importer.
"""

import io
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd

from core.models import MetalKey, Result

EXPORT_COLUMNS = [
    "Sample Name", "Latitude", "Longitude", "HMPI", "Category", "Dominant Metal",
] + [m.symbol for m in MetalKey]

# Export header -> import field
IMPORT_FIELD_MAP = {
    "Sample Name": "sampleName",
    "Latitude": "latitude",
    "Longitude": "longitude",
    **{m.symbol: m.value for m in MetalKey},
}


def _number(value: Optional[float]) -> str:
    # repr() round-trips floats exactly
    return "" if value is None else repr(float(value))


def results_to_rows(results: Iterable[Result]) -> List[Dict[str, str]]:
    rows = []
    for result in results:
        row = {
            "Sample Name": result.name,
            "Latitude": _number(result.latitude),
            "Longitude": _number(result.longitude),
            "HMPI": f"{result.hmpi:.2f}",
            "Category": result.category.value,
            "Dominant Metal": result.dominant_label,
        }
        for metal in MetalKey:
            row[metal.symbol] = _number(result.metals.get(metal))
        rows.append(row)
    return rows


def export_csv(results: Iterable[Result]) -> str:
    """Render results as CSV text, one row per result, header first."""
    df = pd.DataFrame(results_to_rows(results), columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, lineterminator="\n")


def export_filename(day: Optional[date] = None) -> str:
    """Download name for an export, e.g. 'hmpi_results_2024-03-01.csv'."""
    day = day or date.today()
    return f"hmpi_results_{day.isoformat()}.csv"


def export_rows_to_records(content: str) -> List[Dict[str, str]]:
    """
    Read an exported CSV back as batch-import records.

    HMPI, category and dominant metal columns are dropped; they are derived
    values and get recalculated after import.
    """
    df = pd.read_csv(
        io.StringIO(content),
        dtype=str,
        keep_default_na=False,
        index_col=False,
    )
    df = df.rename(columns=IMPORT_FIELD_MAP)
    keep = [c for c in IMPORT_FIELD_MAP.values() if c in df.columns]
    return df[keep].fillna("").to_dict(orient="records")
