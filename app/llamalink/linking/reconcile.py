"""Reconciliation run orchestration.

A run enumerates the source, builds the duplicate index once, processes
the selected models strictly one after another, and finally cleans the
destination tree once. Cleanup never runs between models, so the tree a
model sees depends only on the models processed before it.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from llamalink.core.config import LinkSettings
from llamalink.linking.cleanup import CleanupWalker
from llamalink.linking.index import LinkIndex
from llamalink.linking.planner import LinkPlanner
from llamalink.models.decision import CleanupResult, LinkDecision, LinkResult
from llamalink.models.model import Model, filter_by_size
from llamalink.sources.base import ModelSource

logger = logging.getLogger(__name__)

ResultCallback = Callable[[LinkResult], None]


@dataclass(slots=True)
class RunReport:
    """Outcome of one reconciliation run.

    Attributes:
        results: One LinkResult per processed model, in processing order.
        cleanup: Results of the end-of-run cleanup (empty if skipped).
        cancelled: Whether the run stopped before processing every model.
    """

    results: list[LinkResult] = field(default_factory=list)
    cleanup: list[CleanupResult] = field(default_factory=list)
    cancelled: bool = False

    def count(self, decision: LinkDecision) -> int:
        """Count results with the given decision."""
        return sum(1 for r in self.results if r.decision == decision)

    @property
    def failures(self) -> list[LinkResult]:
        """Results that failed (rejections included)."""
        return [r for r in self.results if r.failed]

    @property
    def changed(self) -> bool:
        """Whether the run modified the destination tree."""
        return any(r.changed for r in self.results) or any(
            r.success and not r.dry_run for r in self.cleanup
        )


class Reconciler:
    """Runs reconciliation of a model source into the destination tree.

    Args:
        settings: Store locations and naming settings.
        source: Model source (read-only ground truth).
        dry_run: If True, plan and report without modifying anything.
        cleanup: If True, run the cleanup walker once after all models.
    """

    def __init__(
        self,
        settings: LinkSettings,
        source: ModelSource,
        *,
        dry_run: bool = False,
        cleanup: bool = True,
    ) -> None:
        self._settings = settings
        self._source = source
        self._dry_run = dry_run
        self._cleanup = cleanup
        self._cancelled = False

    def list_models(
        self,
        min_bytes: int | None = None,
        max_bytes: int | None = None,
    ) -> list[Model]:
        """Enumerate the source and apply the size range.

        Raises:
            EnumerationError: If the source cannot be enumerated.
        """
        models = self._source.list_models()
        selected = filter_by_size(models, min_bytes, max_bytes)
        logger.debug("%d of %d model(s) within size range", len(selected), len(models))
        return selected

    def cancel(self) -> None:
        """Stop before the next model; the current one runs to completion."""
        self._cancelled = True

    def run(self, models: Sequence[Model], on_result: ResultCallback | None = None) -> RunReport:
        """Reconcile the given models in order.

        Args:
            models: Models to process, in processing order.
            on_result: Called with each LinkResult as soon as it is known.

        Returns:
            RunReport with every per-model result and the cleanup results.
        """
        self._cancelled = False
        index = LinkIndex.build(self._settings.dest_root, self._settings.extension)
        planner = LinkPlanner(self._settings, self._source, index, dry_run=self._dry_run)
        report = RunReport()

        for model in models:
            if self._cancelled:
                logger.info("Run cancelled before %s", model.name)
                report.cancelled = True
                break

            logger.debug("Selected model: %s", model.name)
            result = planner.process(model)
            report.results.append(result)
            if on_result is not None:
                on_result(result)

        if self._cleanup:
            walker = CleanupWalker(self._settings, dry_run=self._dry_run)
            report.cleanup = walker.cleanup()

        return report
