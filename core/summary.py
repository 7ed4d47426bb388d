"""
Result views for tables, charts and the map.

Read-only helpers over lists of Results: counting, filtering, sorting,
per-metal breakdowns and the min/max extents charts and maps scale to.
None of these touch the store.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from core import reference
from core.models import Category, MetalKey, Result

FILTER_ALL = "all"

SORT_ORDERS = ("default", "hmpi-desc", "hmpi-asc", "name")

MAP_PADDING_FRACTION = 0.1
MAP_MIN_PADDING_DEG = 0.01


@dataclass(frozen=True)
class MetalBreakdown:
    """One row of the sample details table."""
    metal: MetalKey
    concentration: float
    standard: float
    ratio: float

    @property
    def exceeds_limit(self) -> bool:
        return self.ratio > 1


@dataclass(frozen=True)
class MapBounds:
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @property
    def center_latitude(self) -> float:
        return (self.min_latitude + self.max_latitude) / 2

    @property
    def center_longitude(self) -> float:
        return (self.min_longitude + self.max_longitude) / 2


def category_counts(results: Sequence[Result]) -> Dict[str, int]:
    """Number of results per category, zero-filled."""
    counts = {c.value: 0 for c in Category}
    for result in results:
        counts[result.category.value] += 1
    return counts


def filter_results(results: Sequence[Result], category: str = FILTER_ALL) -> List[Result]:
    """Keep results of one category, or all of them for 'all'."""
    if category == FILTER_ALL:
        return list(results)
    wanted = Category(category)
    return [r for r in results if r.category == wanted]


def sort_results(results: Sequence[Result], order: str = "default") -> List[Result]:
    """Return a sorted copy. 'default' keeps the given order."""
    if order == "hmpi-desc":
        return sorted(results, key=lambda r: r.hmpi, reverse=True)
    if order == "hmpi-asc":
        return sorted(results, key=lambda r: r.hmpi)
    if order == "name":
        return sorted(results, key=lambda r: r.name.casefold())
    if order == "default":
        return list(results)
    raise ValueError(f"Unknown sort order '{order}'")


def metal_breakdown(result: Result) -> List[MetalBreakdown]:
    """Concentration vs. standard for every metal of a result."""
    rows = []
    for metal, concentration in result.metals.items():
        std = reference.standard(metal)
        rows.append(MetalBreakdown(metal, concentration, std, concentration / std))
    return rows


def hmpi_range(results: Sequence[Result]) -> Optional[Tuple[float, float]]:
    """(min, max) HMPI over the results, for chart axis scaling."""
    if not results:
        return None
    values = [r.hmpi for r in results]
    return min(values), max(values)


def map_bounds(results: Sequence[Result]) -> Optional[MapBounds]:
    """
    Padded extent of all located results.

    Pads each axis by 10% of its span, or by a fixed 0.01 degrees when
    all points share that coordinate.
    """
    located = [r for r in results if r.has_location]
    if not located:
        return None

    lats = [r.latitude for r in located]
    lons = [r.longitude for r in located]

    def _pad(low: float, high: float) -> Tuple[float, float]:
        span = high - low
        pad = span * MAP_PADDING_FRACTION if span > 0 else MAP_MIN_PADDING_DEG
        return low - pad, high + pad

    min_lat, max_lat = _pad(min(lats), max(lats))
    min_lon, max_lon = _pad(min(lons), max(lons))
    return MapBounds(min_lat, max_lat, min_lon, max_lon)


def results_frame(results: Sequence[Result]) -> pd.DataFrame:
    """Results as a DataFrame for tables and charts."""
    columns = ["sample_id", "name", "latitude", "longitude", "hmpi", "category",
               "dominant_metal", "computed_at"] + [m.value for m in MetalKey]
    return pd.DataFrame([r.to_dict() for r in results], columns=columns)
