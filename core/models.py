"""
Core data models for the HMPI Analyzer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional


class MetalKey(Enum):
    """
    The closed set of heavy metals the index is computed over.

    Declaration order is the canonical iteration order used everywhere
    (engine, validator, export columns).
    """
    CD = "cd"
    PB = "pb"
    CR = "cr"
    CU = "cu"
    ZN = "zn"
    NI = "ni"

    @property
    def symbol(self) -> str:
        """Chemical symbol as printed in tables and exports, e.g. 'Cd'."""
        return self.value.capitalize()


class Category(Enum):
    """Risk classification bucket for an HMPI value."""
    SAFE = "safe"
    MODERATE = "moderate"
    HAZARDOUS = "hazardous"


def _freeze(metals: Mapping[MetalKey, float]) -> Mapping[MetalKey, float]:
    return MappingProxyType({key: metals[key] for key in MetalKey if key in metals})


@dataclass(frozen=True)
class Sample:
    """
    A single groundwater measurement.

    Built by the validator; never mutated afterwards. Coordinates are in
    decimal degrees, concentrations in mg/L.
    """
    id: str
    name: str
    metals: Mapping[MetalKey, float]
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, "metals", _freeze(self.metals))

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class Result:
    """
    The HMPI outcome for one sample.

    Carries a copy of the sample's metals and coordinates so that views and
    exports never need to look the sample up again.
    """
    sample_id: str
    name: str
    hmpi: float
    category: Category
    dominant_metal: Optional[MetalKey]  # None when no metal exceeds a zero ratio
    metals: Mapping[MetalKey, float]
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    computed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        object.__setattr__(self, "metals", _freeze(self.metals))

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def dominant_label(self) -> str:
        """Dominant metal as shown to users: 'CD', 'PB', ... or 'N/A'."""
        if self.dominant_metal is None:
            return "N/A"
        return self.dominant_metal.value.upper()

    def to_dict(self) -> Dict:
        return {
            "sample_id": self.sample_id,
            "name": self.name,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "hmpi": self.hmpi,
            "category": self.category.value,
            "dominant_metal": self.dominant_label,
            "computed_at": self.computed_at.isoformat(),
            **{key.value: value for key, value in self.metals.items()},
        }
