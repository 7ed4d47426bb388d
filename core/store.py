"""
Sample Store

In-memory home for the samples of one analysis session and the HMPI
results computed from them. The owner creates one store per session and
hands it to whatever needs it; there is no module-level instance.
"""

import logging
from typing import Dict, List, Optional

from core import hmpi
from core.models import Result, Sample

log = logging.getLogger(__name__)


class SampleStore:
    """
    Ordered samples plus at most one Result per sample id.

    Samples keep insertion order (it is the display order). Results keep
    the order in which each sample was first calculated; recalculating a
    sample replaces its Result in place.

    Usage:
        store = SampleStore()
        store.add(sample)
        store.recompute(sample.id)
        store.recompute_all()
    """

    def __init__(self):
        self._samples: Dict[str, Sample] = {}
        self._results: Dict[str, Result] = {}

    def __len__(self) -> int:
        return len(self._samples)

    def __contains__(self, sample_id: str) -> bool:
        return sample_id in self._samples

    @property
    def samples(self) -> List[Sample]:
        return list(self._samples.values())

    @property
    def results(self) -> List[Result]:
        return list(self._results.values())

    def get_sample(self, sample_id: str) -> Optional[Sample]:
        return self._samples.get(sample_id)

    def get_result(self, sample_id: str) -> Optional[Result]:
        return self._results.get(sample_id)

    def add(self, sample: Sample) -> None:
        """Append a sample. Ids are unique within a store."""
        if sample.id in self._samples:
            raise ValueError(f"Sample {sample.id} already exists")
        self._samples[sample.id] = sample
        log.debug(f"Added sample {sample.id} ('{sample.name}')")

    def add_many(self, samples: List[Sample]) -> None:
        for sample in samples:
            self.add(sample)

    def remove(self, sample_id: str) -> bool:
        """Remove a sample and its result. Returns False if the id is unknown."""
        sample = self._samples.pop(sample_id, None)
        self._results.pop(sample_id, None)
        if sample is None:
            return False
        log.debug(f"Removed sample {sample_id}")
        return True

    def _build_result(self, sample: Sample) -> Result:
        score = hmpi.compute(sample.metals)
        return Result(
            sample_id=sample.id,
            name=sample.name,
            hmpi=score.hmpi,
            category=score.category,
            dominant_metal=score.dominant_metal,
            metals=sample.metals,
            latitude=sample.latitude,
            longitude=sample.longitude,
        )

    def recompute(self, sample_id: str) -> Optional[Result]:
        """
        Run the engine on one sample and upsert its Result.

        An unknown id is silently ignored and returns None. Engine errors
        propagate and leave any previous Result untouched.
        """
        sample = self._samples.get(sample_id)
        if sample is None:
            log.debug(f"Recompute skipped: no sample {sample_id}")
            return None

        result = self._build_result(sample)
        self._results[sample.id] = result
        return result

    def recompute_all(self) -> List[Result]:
        """
        Recompute every sample in insertion order.

        All scores are computed before any Result is stored, so an engine
        error on one sample leaves every existing Result as it was.
        """
        results = [self._build_result(sample) for sample in self._samples.values()]
        for result in results:
            self._results[result.sample_id] = result
        log.info(f"Calculated HMPI for {len(results)} samples")
        return results

    def clear(self) -> None:
        """Drop all samples and results."""
        count = len(self._samples)
        self._samples.clear()
        self._results.clear()
        log.info(f"Cleared {count} samples")
