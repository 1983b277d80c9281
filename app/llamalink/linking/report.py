"""Read-only report of the destination tree against the source.

Combines a dry run of every model with a scan for model files that
are not links and for links the cleanup walker would remove.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from llamalink.core.config import LinkSettings
from llamalink.linking.reconcile import Reconciler
from llamalink.linking.tree import EntryType, iter_tree
from llamalink.linking.validator import is_valid_link_at
from llamalink.models.decision import LinkResult
from llamalink.models.model import Model
from llamalink.sources.base import ModelSource


@dataclass(frozen=True, slots=True)
class StateReport:
    """Snapshot of what a link run would do.

    Attributes:
        results: Dry-run result per model, in processing order.
        unlinked_files: Regular model files in the tree that are not links.
        broken_links: Links failing the validity policy.
    """

    results: tuple[LinkResult, ...]
    unlinked_files: tuple[Path, ...]
    broken_links: tuple[Path, ...]

    @property
    def pending(self) -> list[LinkResult]:
        """Results that a real run would act on."""
        return [r for r in self.results if r.plan.is_mutating]


def build_report(
    settings: LinkSettings,
    source: ModelSource,
    models: Sequence[Model],
) -> StateReport:
    """Build a report without modifying the filesystem.

    Args:
        settings: Store locations and naming settings.
        source: Model source used to resolve backing files.
        models: Models to plan for.

    Returns:
        StateReport for the current destination tree.
    """
    run = Reconciler(settings, source, dry_run=True, cleanup=False).run(models)

    unlinked: list[Path] = []
    broken: list[Path] = []
    for path, entry_type in iter_tree(settings.dest_root):
        if entry_type == EntryType.FILE and path.name.endswith(settings.extension):
            unlinked.append(path)
        elif entry_type == EntryType.SYMLINK and not is_valid_link_at(path, settings.extension):
            broken.append(path)

    return StateReport(
        results=tuple(run.results),
        unlinked_files=tuple(unlinked),
        broken_links=tuple(broken),
    )
