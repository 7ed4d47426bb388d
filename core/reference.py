"""
Metal Reference Table

Regulatory limits (WHO drinking-water guideline values) and the relative
weight each metal carries in the pollution index, plus the display
metadata shown in the metal info panel.
"""

from dataclasses import dataclass
from types import MappingProxyType

from core.models import MetalKey


@dataclass(frozen=True)
class MetalInfo:
    """Human-facing description of a metal."""
    name: str
    effects: str
    sources: str
    limit: str


@dataclass(frozen=True)
class MetalReference:
    """Standard (mg/L) and index weight for one metal."""
    key: MetalKey
    standard: float
    weight: float
    info: MetalInfo


# ═══════════════════════════════════════════════════════════════════════════
# REFERENCE TABLE
# ═══════════════════════════════════════════════════════════════════════════
_TABLE = {
    MetalKey.CD: MetalReference(
        key=MetalKey.CD,
        standard=0.003,
        weight=0.20,
        info=MetalInfo(
            name="Cadmium",
            effects="Kidney damage, bone disease, cancer risk",
            sources="Industrial discharge, mining, batteries",
            limit="0.003 mg/L (WHO)",
        ),
    ),
    MetalKey.PB: MetalReference(
        key=MetalKey.PB,
        standard=0.01,
        weight=0.20,
        info=MetalInfo(
            name="Lead",
            effects="Neurological damage, developmental issues, cardiovascular problems",
            sources="Old pipes, paint, industrial processes",
            limit="0.01 mg/L (WHO)",
        ),
    ),
    MetalKey.CR: MetalReference(
        key=MetalKey.CR,
        standard=0.05,
        weight=0.15,
        info=MetalInfo(
            name="Chromium",
            effects="Skin irritation, respiratory problems, cancer risk",
            sources="Industrial processes, leather tanning, steel production",
            limit="0.05 mg/L (WHO)",
        ),
    ),
    MetalKey.CU: MetalReference(
        key=MetalKey.CU,
        standard=2.0,
        weight=0.15,
        info=MetalInfo(
            name="Copper",
            effects="Gastrointestinal distress, liver damage (high doses)",
            sources="Plumbing, mining, agricultural runoff",
            limit="2.0 mg/L (WHO)",
        ),
    ),
    MetalKey.ZN: MetalReference(
        key=MetalKey.ZN,
        standard=3.0,
        weight=0.15,
        info=MetalInfo(
            name="Zinc",
            effects="Nausea, vomiting, immune system effects (high doses)",
            sources="Galvanized pipes, mining, industrial discharge",
            limit="3.0 mg/L (WHO)",
        ),
    ),
    MetalKey.NI: MetalReference(
        key=MetalKey.NI,
        standard=0.07,
        weight=0.15,
        info=MetalInfo(
            name="Nickel",
            effects="Allergic reactions, respiratory issues, cancer risk",
            sources="Industrial processes, mining, stainless steel",
            limit="0.07 mg/L (WHO)",
        ),
    ),
}


def check_table(table) -> None:
    """Every MetalKey must be covered; a gap is a configuration error."""
    missing = [m.value for m in MetalKey if m not in table]
    if missing:
        raise RuntimeError(f"Reference table is missing metals: {', '.join(missing)}")


check_table(_TABLE)

REFERENCE_TABLE = MappingProxyType(_TABLE)


def standard(metal: MetalKey) -> float:
    """Regulatory limit in mg/L."""
    return REFERENCE_TABLE[metal].standard


def weight(metal: MetalKey) -> float:
    """Relative importance of the metal in the index."""
    return REFERENCE_TABLE[metal].weight


def info(metal: MetalKey) -> MetalInfo:
    return REFERENCE_TABLE[metal].info
