import pytest
from core.errors import ValidationError
from core.models import MetalKey
from core.validator import validate, parse_number


def make_raw(**overrides):
    raw = {
        "name": "Well 1",
        "latitude": "21.1458",
        "longitude": "79.0882",
        "cd": "0.002", "pb": "0.015", "cr": "0.03",
        "cu": "0.3", "zn": "1.2", "ni": "0.01",
    }
    raw.update(overrides)
    return raw


def test_valid_sample():
    sample = validate(make_raw())
    assert sample.name == "Well 1"
    assert sample.metals[MetalKey.PB] == 0.015
    assert sample.latitude == 21.1458
    assert sample.longitude == 79.0882
    assert sample.id


def test_ids_are_unique():
    assert validate(make_raw()).id != validate(make_raw()).id


def test_explicit_id():
    assert validate(make_raw(), sample_id="fixed").id == "fixed"


def test_numbers_accepted():
    sample = validate(make_raw(cd=0, pb=1, latitude=0, longitude=0.0))
    assert sample.metals[MetalKey.CD] == 0.0
    assert sample.latitude == 0.0


def test_sample_name_alias_and_trim():
    raw = make_raw()
    del raw["name"]
    raw["sampleName"] = "  Site A  "
    assert validate(raw).name == "Site A"


@pytest.mark.parametrize("name", ["", "   ", None])
def test_name_required(name):
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(name=name))
    assert exc.value.field == "name"
    assert "required" in str(exc.value)


@pytest.mark.parametrize("name", [123, 4.5, ["Well"]])
def test_non_text_name_rejected(name):
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(name=name))
    assert exc.value.field == "name"
    assert "must be text" in str(exc.value)
    assert repr(name) in str(exc.value)


def test_negative_cadmium_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(cd="-0.1"))
    assert exc.value.field == "cd"
    assert "Cadmium" in str(exc.value)


@pytest.mark.parametrize("value", ["abc", "", None, "nan", "inf", True])
def test_non_numeric_metal_rejected(value):
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(zn=value))
    assert exc.value.field == "zn"


def test_first_failure_wins():
    """Name is checked before metals, metals before coordinates."""
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(name="", cd="-1", latitude="95"))
    assert exc.value.field == "name"

    with pytest.raises(ValidationError) as exc:
        validate(make_raw(pb="-1", ni="-1", latitude="95"))
    assert exc.value.field == "pb"


def test_latitude_range():
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(latitude="91"))
    assert exc.value.field == "latitude"
    assert validate(make_raw(latitude="-90")).latitude == -90.0
    assert validate(make_raw(latitude="90")).latitude == 90.0


def test_longitude_range():
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(longitude="-180.5"))
    assert exc.value.field == "longitude"
    assert validate(make_raw(longitude="180")).longitude == 180.0


def test_malformed_coordinate_rejected():
    with pytest.raises(ValidationError) as exc:
        validate(make_raw(latitude="north"))
    assert exc.value.field == "latitude"


def test_coordinates_optional():
    sample = validate(make_raw(latitude="", longitude=None))
    assert sample.latitude is None
    assert sample.longitude is None
    assert not sample.has_location


def test_single_coordinate_kept():
    """One coordinate without the other is accepted as-is."""
    sample = validate(make_raw(longitude=""))
    assert sample.latitude == 21.1458
    assert sample.longitude is None
    assert not sample.has_location


def test_parse_number():
    assert parse_number(" 1.5 ") == 1.5
    assert parse_number(3) == 3.0
    assert parse_number("1e-3") == 0.001
    assert parse_number("x") is None
    assert parse_number(False) is None
