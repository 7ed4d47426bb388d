"""
Sample Validator

Turns a raw record (form submission or one row of an import) into a
Sample. Raw values may be numbers or numeric strings; everything past this
boundary works with MetalKey and float only.

Rules are checked in a fixed order and the first failure wins:
    1. name is non-empty after trimming
    2. every metal parses as a finite number >= 0
    3. latitude, when given, lies in [-90, 90]
    4. longitude, when given, lies in [-180, 180]

A latitude without a longitude (or the reverse) is accepted and stored
as-is; such samples simply never appear on the map.
"""

import math
import uuid
import logging
from typing import Any, Mapping, Optional

from core import reference
from core.errors import ValidationError
from core.models import MetalKey, Sample

log = logging.getLogger(__name__)


LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def new_sample_id() -> str:
    """Fresh opaque identifier for a sample."""
    return uuid.uuid4().hex


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a raw numeric value.

    Returns None for anything that is not a finite real number: blanks,
    booleans, non-numeric strings, NaN and infinities.
    """
    if isinstance(value, bool) or _is_blank(value):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_coordinate(raw: Mapping[str, Any], field: str, bounds) -> Optional[float]:
    value = raw.get(field)
    if _is_blank(value):
        return None

    low, high = bounds
    label = field.capitalize()
    number = parse_number(value)
    if number is None:
        raise ValidationError(field, f"{label} must be a number (got {value!r})")
    if number < low or number > high:
        raise ValidationError(field, f"{label} must be between {low:g} and {high:g} degrees")
    return number


def validate(raw: Mapping[str, Any], sample_id: Optional[str] = None) -> Sample:
    """
    Validate a raw record and build a Sample.

    Args:
        raw: Mapping with 'name' (or 'sampleName'), optional 'latitude' and
             'longitude', and one entry per metal keyed by its lowercase
             symbol ('cd', 'pb', 'cr', 'cu', 'zn', 'ni').
        sample_id: Identifier to use; a fresh one is generated if omitted.

    Returns:
        An immutable Sample.

    Raises:
        ValidationError: naming the first field that broke a rule.
    """
    name = raw.get("name", raw.get("sampleName"))
    if name is not None and not isinstance(name, str):
        raise ValidationError("name", f"Sample name must be text (got {name!r})")
    if not name or not name.strip():
        raise ValidationError("name", "Sample name is required")

    metals = {}
    for metal in MetalKey:
        value = raw.get(metal.value)
        concentration = parse_number(value)
        if concentration is None or concentration < 0:
            metal_name = reference.info(metal).name
            raise ValidationError(
                metal.value,
                f"Invalid {metal.value.upper()} ({metal_name}) concentration: "
                f"must be a number >= 0 (got {value!r})",
            )
        metals[metal] = concentration

    latitude = _parse_coordinate(raw, "latitude", LATITUDE_RANGE)
    longitude = _parse_coordinate(raw, "longitude", LONGITUDE_RANGE)

    if (latitude is None) != (longitude is None):
        log.debug(f"Sample '{name.strip()}' has only one coordinate; it will not be mapped")

    return Sample(
        id=sample_id or new_sample_id(),
        name=name.strip(),
        metals=metals,
        latitude=latitude,
        longitude=longitude,
    )
