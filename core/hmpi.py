"""
HMPI Engine

Computes the Heavy Metal Pollution Index for a set of concentrations:

    hmpi = Σ(Ci / Si × Wi × 100) / Σ(Wi)

Where Ci is the measured concentration, Si the regulatory standard and Wi
the metal's weight. Only metals present in the input take part, so the
index is a weighted mean of "percent of limit" values and is unaffected by
omitted metals.
"""

import math
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from core import reference
from core.errors import DomainComputeError
from core.models import Category, MetalKey

log = logging.getLogger(__name__)


# Category upper bounds, inclusive.
SAFE_MAX = 100.0
MODERATE_MAX = 200.0


@dataclass(frozen=True)
class HMPIScore:
    """Engine output for one set of concentrations."""
    hmpi: float
    category: Category
    dominant_metal: Optional[MetalKey]
    ratios: Dict[MetalKey, float] = field(default_factory=dict)


def categorize(hmpi: float) -> Category:
    """Bucket an HMPI value. Exactly 100 is safe, exactly 200 is moderate."""
    if hmpi <= SAFE_MAX:
        return Category.SAFE
    if hmpi <= MODERATE_MAX:
        return Category.MODERATE
    return Category.HAZARDOUS


def dominant_metal(metals: Mapping[MetalKey, float]) -> Optional[MetalKey]:
    """
    The metal with the strictly largest concentration/standard ratio.

    Ties keep the first metal in canonical order. A sample where every
    ratio is zero has no dominant metal.
    """
    max_ratio = 0.0
    dominant = None
    for metal in MetalKey:
        if metal not in metals:
            continue
        ratio = metals[metal] / reference.standard(metal)
        if ratio > max_ratio:
            max_ratio = ratio
            dominant = metal
    return dominant


def compute(metals: Mapping[MetalKey, float]) -> HMPIScore:
    """
    Calculate HMPI, category and dominant metal.

    Args:
        metals: MetalKey -> concentration in mg/L. Missing metals are skipped.

    Returns:
        HMPIScore with the per-metal ratios used.

    Raises:
        DomainComputeError: when no metal matched the reference table or the
            result is not a finite number.
    """
    sum_weighted_ratio = 0.0
    sum_weight = 0.0
    ratios = {}

    for metal in MetalKey:
        if metal not in metals:
            continue
        ratio = metals[metal] / reference.standard(metal)
        w = reference.weight(metal)
        ratios[metal] = ratio
        sum_weighted_ratio += ratio * w * 100
        sum_weight += w

    if sum_weight == 0:
        raise DomainComputeError("Cannot compute HMPI: no known metal concentrations were given")

    hmpi = sum_weighted_ratio / sum_weight
    if not math.isfinite(hmpi):
        raise DomainComputeError(f"Cannot compute HMPI: result is not finite ({hmpi})")

    return HMPIScore(
        hmpi=hmpi,
        category=categorize(hmpi),
        dominant_metal=dominant_metal(metals),
        ratios=ratios,
    )
