import pytest
from core.errors import DomainComputeError
from core.models import Category, MetalKey, Sample
from core.store import SampleStore
from core.reference import standard


def make_sample(sample_id, name=None, factor=1.0):
    metals = {m: standard(m) * factor for m in MetalKey}
    return Sample(id=sample_id, name=name or sample_id, metals=metals)


@pytest.fixture
def store():
    s = SampleStore()
    s.add(make_sample("a", factor=0.5))
    s.add(make_sample("b", factor=1.5))
    s.add(make_sample("c", factor=3.0))
    return s


def test_add_preserves_order(store):
    assert [s.id for s in store.samples] == ["a", "b", "c"]
    assert len(store) == 3
    assert "b" in store


def test_duplicate_id_rejected(store):
    with pytest.raises(ValueError):
        store.add(make_sample("a"))


def test_recompute(store):
    result = store.recompute("b")
    assert result.sample_id == "b"
    assert result.hmpi == pytest.approx(150.0)
    assert result.category == Category.MODERATE
    assert store.get_result("b") is result


def test_recompute_replaces(store):
    """Recalculating never duplicates a result."""
    first = store.recompute("a")
    second = store.recompute("a")
    assert len(store.results) == 1
    assert store.get_result("a") is second
    assert second is not first


def test_recompute_unknown_is_noop(store):
    assert store.recompute("missing") is None
    assert store.results == []


def test_recompute_all_in_order(store):
    results = store.recompute_all()
    assert [r.sample_id for r in results] == ["a", "b", "c"]
    assert [r.category for r in results] == [Category.SAFE, Category.MODERATE, Category.HAZARDOUS]


def test_results_keep_first_calculation_order(store):
    store.recompute("c")
    store.recompute("a")
    store.recompute("c")
    assert [r.sample_id for r in store.results] == ["c", "a"]


def test_result_copies_sample_fields():
    s = SampleStore()
    sample = Sample(id="x", name="Well X", metals={MetalKey.PB: 0.02},
                    latitude=10.0, longitude=20.0)
    s.add(sample)
    result = s.recompute("x")
    assert result.name == "Well X"
    assert result.latitude == 10.0
    assert result.longitude == 20.0
    assert result.metals == sample.metals
    assert result.dominant_metal == MetalKey.PB


def test_remove_deletes_sample_and_result(store):
    store.recompute("b")
    assert store.remove("b") is True
    assert "b" not in store
    assert store.get_result("b") is None
    assert store.recompute("b") is None
    assert store.get_result("b") is None


def test_remove_unknown(store):
    assert store.remove("missing") is False
    assert len(store) == 3


def test_clear(store):
    store.recompute_all()
    store.clear()
    assert len(store) == 0
    assert store.results == []


def test_compute_error_leaves_store_unchanged():
    """A sample the engine cannot score never gets a result."""
    s = SampleStore()
    s.add(Sample(id="empty", name="No metals", metals={}))
    with pytest.raises(ValueError):
        s.recompute("empty")
    assert s.get_result("empty") is None


def test_recompute_all_is_all_or_nothing():
    """One unscorable sample means no new results are stored."""
    s = SampleStore()
    s.add(make_sample("ok", factor=0.5))
    s.add(Sample(id="huge", name="Overflow", metals={m: 1e308 for m in MetalKey}))
    s.add(make_sample("ok2", factor=2.0))

    with pytest.raises(DomainComputeError):
        s.recompute_all()
    assert s.results == []


def test_recompute_all_failure_keeps_previous_results():
    s = SampleStore()
    s.add(make_sample("ok", factor=0.5))
    previous = s.recompute("ok")
    s.add(Sample(id="huge", name="Overflow", metals={m: 1e308 for m in MetalKey}))

    with pytest.raises(DomainComputeError):
        s.recompute_all()
    assert s.results == [previous]
