import pytest
from core.models import Category, MetalKey, Result
from core.summary import (
    category_counts, filter_results, hmpi_range, map_bounds,
    metal_breakdown, results_frame, sort_results,
)


def make_result(sample_id, hmpi, category, name=None, lat=None, lon=None):
    return Result(
        sample_id=sample_id, name=name or sample_id, hmpi=hmpi, category=category,
        dominant_metal=MetalKey.CD, metals={MetalKey.CD: 0.006, MetalKey.CU: 1.0},
        latitude=lat, longitude=lon,
    )


@pytest.fixture
def results():
    return [
        make_result("1", 80.0, Category.SAFE, name="beta", lat=10.0, lon=20.0),
        make_result("2", 250.0, Category.HAZARDOUS, name="Alpha", lat=12.0, lon=24.0),
        make_result("3", 150.0, Category.MODERATE, name="gamma"),
        make_result("4", 50.0, Category.SAFE, name="delta", lat=11.0),
    ]


def test_category_counts(results):
    assert category_counts(results) == {"safe": 2, "moderate": 1, "hazardous": 1}
    assert category_counts([]) == {"safe": 0, "moderate": 0, "hazardous": 0}


def test_filter(results):
    assert [r.sample_id for r in filter_results(results, "safe")] == ["1", "4"]
    assert len(filter_results(results, "all")) == 4
    with pytest.raises(ValueError):
        filter_results(results, "toxic")


def test_sort(results):
    assert [r.sample_id for r in sort_results(results, "hmpi-desc")] == ["2", "3", "1", "4"]
    assert [r.sample_id for r in sort_results(results, "hmpi-asc")] == ["4", "1", "3", "2"]
    assert [r.name for r in sort_results(results, "name")] == ["Alpha", "beta", "delta", "gamma"]
    assert [r.sample_id for r in sort_results(results)] == ["1", "2", "3", "4"]


def test_sort_does_not_mutate(results):
    original = list(results)
    sort_results(results, "hmpi-desc")
    assert results == original


def test_sort_unknown_order(results):
    with pytest.raises(ValueError):
        sort_results(results, "random")


def test_metal_breakdown(results):
    rows = metal_breakdown(results[0])
    assert [r.metal for r in rows] == [MetalKey.CD, MetalKey.CU]
    assert rows[0].ratio == pytest.approx(2.0)
    assert rows[0].exceeds_limit
    assert rows[1].ratio == pytest.approx(0.5)
    assert not rows[1].exceeds_limit


def test_hmpi_range(results):
    assert hmpi_range(results) == (50.0, 250.0)
    assert hmpi_range([]) is None


def test_map_bounds(results):
    """Only results with both coordinates are mapped."""
    bounds = map_bounds(results)
    assert bounds.min_latitude == pytest.approx(9.8)
    assert bounds.max_latitude == pytest.approx(12.2)
    assert bounds.min_longitude == pytest.approx(19.6)
    assert bounds.max_longitude == pytest.approx(24.4)
    assert bounds.center_latitude == pytest.approx(11.0)


def test_map_bounds_single_point():
    bounds = map_bounds([make_result("1", 10.0, Category.SAFE, lat=5.0, lon=5.0)])
    assert bounds.min_latitude == pytest.approx(4.99)
    assert bounds.max_longitude == pytest.approx(5.01)


def test_map_bounds_none(results):
    assert map_bounds(results[2:3]) is None


def test_results_frame(results):
    df = results_frame(results)
    assert len(df) == 4
    assert list(df["category"]) == ["safe", "hazardous", "moderate", "safe"]
    assert "cd" in df.columns
    assert results_frame([]).empty
