"""Link decision models.

This module defines the per-model decision produced by the link planner,
the outcome of applying it, and the outcome of a single cleanup removal.
None of these are persisted: the destination tree is the only state.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class LinkDecision(Enum):
    """What the planner decided to do for one model.

    Attributes:
        CREATE: No link exists yet; create directory and link.
        SKIP: A valid link to the backing file is already in place.
        REPAIR: Something other than a valid link to the backing file
            occupies the link path; replace it.
        DEDUPLICATE: Another destination already links the backing file;
            remove this model's destination directory instead.
        REJECT: The model cannot be linked this run.
    """

    CREATE = "create"
    SKIP = "skip"
    REPAIR = "repair"
    DEDUPLICATE = "deduplicate"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class LinkPlan:
    """A decision for one model against the current destination tree.

    Attributes:
        model: Model identifier.
        decision: Planned decision.
        backing_path: Resolved backing file (None if resolution failed).
        dest_dir: Per-model destination directory (None if rejected early).
        link_path: Destination link location (None if rejected early).
        reason: Human-readable explanation.
        canonical_link: Surviving link for the backing file (DEDUPLICATE only).
        duplicate_links: Other links to the backing file, removed once this
            model's link is in place.
    """

    model: str
    decision: LinkDecision
    backing_path: Path | None = None
    dest_dir: Path | None = None
    link_path: Path | None = None
    reason: str | None = None
    canonical_link: Path | None = None
    duplicate_links: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        """Validate plan data after initialization."""
        if self.decision in (LinkDecision.CREATE, LinkDecision.REPAIR):
            if self.backing_path is None or self.link_path is None or self.dest_dir is None:
                msg = f"{self.decision.value} plan requires backing, directory and link paths"
                raise ValueError(msg)
        if self.decision == LinkDecision.DEDUPLICATE and (
            self.canonical_link is None or self.dest_dir is None
        ):
            msg = "deduplicate plan requires a canonical link and a directory"
            raise ValueError(msg)
        if self.duplicate_links and self.link_path is None:
            msg = "duplicate links can only be removed next to a link path"
            raise ValueError(msg)

    @property
    def is_mutating(self) -> bool:
        """Check if applying this plan may change the filesystem."""
        return bool(self.duplicate_links) or self.decision in (
            LinkDecision.CREATE,
            LinkDecision.REPAIR,
            LinkDecision.DEDUPLICATE,
        )


@dataclass(frozen=True, slots=True)
class LinkResult:
    """Result of applying a link plan.

    Attributes:
        plan: The plan that was applied.
        success: Whether the plan completed (REJECT never does).
        changed: Whether the filesystem was modified.
        message: Optional success message or additional information.
        error: Optional error message if the plan failed.
        dry_run: Whether this was a dry-run (no actual mutation).
    """

    plan: LinkPlan
    success: bool
    changed: bool = False
    message: str | None = None
    error: str | None = None
    dry_run: bool = False

    @property
    def failed(self) -> bool:
        """Check if the plan failed."""
        return not self.success

    @property
    def decision(self) -> LinkDecision:
        """Shortcut to the planned decision."""
        return self.plan.decision


class CleanupKind(str, Enum):
    """Kind of entry removed by the cleanup walker."""

    BROKEN_LINK = "broken_link"
    LINK = "link"
    EMPTY_DIR = "empty_dir"


@dataclass(frozen=True, slots=True)
class CleanupResult:
    """Result of a single cleanup removal.

    Attributes:
        path: Absolute path that was operated on.
        kind: What kind of entry it was.
        success: Whether the removal completed successfully.
        error: Error message if the removal failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual removal).
    """

    path: str
    kind: CleanupKind
    success: bool
    error: str | None = None
    dry_run: bool = False
