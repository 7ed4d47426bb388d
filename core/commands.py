"""
Analysis Session - the command interface the UI talks to.

Every handler runs to completion and either returns its outcome or raises
an HMPIError for the caller to display.
"""

import logging
from typing import Any, List, Mapping

from core.errors import HMPIError
from core.export import export_csv
from core.models import Result, Sample
from core.store import SampleStore
from core.validator import validate
from loaders.batch import BatchImportResult, import_batch

log = logging.getLogger(__name__)

CALCULATE_ALL = "all"


class AnalysisSession:
    """
    Binds UI events to the core for one store.

    Usage:
        session = AnalysisSession(SampleStore())
        session.on_sample_submitted({"name": "Well 1", "cd": "0.001", ...})
        session.on_batch_file_loaded(text, "samples.csv")
        session.on_calculate_requested("all")
    """

    def __init__(self, store: SampleStore):
        self.store = store

    def on_sample_submitted(self, raw: Mapping[str, Any]) -> Sample:
        """Validate a manually entered sample and add it to the store."""
        sample = validate(raw)
        self.store.add(sample)
        log.info(f"Sample '{sample.name}' added")
        return sample

    def on_batch_file_loaded(self, content: str, kind: str) -> BatchImportResult:
        """Import a CSV/JSON file and add every valid sample."""
        batch = import_batch(content, kind)
        self.store.add_many(batch.imported)
        return batch

    def on_calculate_requested(self, target: str = CALCULATE_ALL) -> List[Result]:
        """Calculate one sample by id, or every sample for 'all'."""
        if target == CALCULATE_ALL:
            return self.store.recompute_all()
        result = self.store.recompute(target)
        return [result] if result is not None else []

    def on_remove_requested(self, sample_id: str) -> bool:
        return self.store.remove(sample_id)

    def on_clear_requested(self) -> None:
        self.store.clear()

    def export(self) -> str:
        results = self.store.results
        if not results:
            raise HMPIError("No results to export")
        return export_csv(results)
