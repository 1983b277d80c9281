"""Per-model link planning and application.

The planner turns one model into a :class:`LinkPlan` by looking at the
resolved backing file and the current destination tree, then applies
that plan. Every failure is confined to the model being processed and
comes back as a failed :class:`LinkResult`.
"""

import logging
import os
import shutil
from pathlib import Path

from llamalink.core.config import LinkSettings
from llamalink.linking.index import LinkIndex
from llamalink.linking.naming import map_model_name
from llamalink.linking.validator import is_valid_link, read_link_target
from llamalink.models.decision import LinkDecision, LinkPlan, LinkResult
from llamalink.models.model import Model
from llamalink.sources.base import ModelSource, ResolutionError

logger = logging.getLogger(__name__)


class LinkPlanner:
    """Plans and applies destination links for models.

    Args:
        settings: Store locations and naming settings.
        source: Model source used to resolve backing files.
        index: Duplicate index for this run. Built from the destination
            tree on first use if not given.
        dry_run: If True, apply() reports what it would do without
            touching the filesystem.
    """

    def __init__(
        self,
        settings: LinkSettings,
        source: ModelSource,
        index: LinkIndex | None = None,
        *,
        dry_run: bool = False,
    ) -> None:
        self._settings = settings
        self._source = source
        self._index = index
        self._dry_run = dry_run

    @property
    def index(self) -> LinkIndex:
        """Duplicate index used by this planner."""
        if self._index is None:
            self._index = LinkIndex.build(self._settings.dest_root, self._settings.extension)
        return self._index

    def process(self, model: Model) -> LinkResult:
        """Plan and apply in one step."""
        return self.apply(self.plan(model))

    def plan(self, model: Model) -> LinkPlan:
        """Decide what to do for one model.

        Args:
            model: Model to reconcile.

        Returns:
            LinkPlan with the decision and the paths involved.
        """
        name = model.name

        try:
            resolved = self._source.resolve(name)
        except ResolutionError as e:
            logger.warning("Cannot resolve %s: %s", name, e)
            return LinkPlan(model=name, decision=LinkDecision.REJECT, reason=str(e))

        backing = Path(os.path.abspath(resolved))
        problem = self._check_backing(backing)
        if problem is not None:
            logger.warning("Rejecting %s: %s", name, problem)
            return LinkPlan(
                model=name,
                decision=LinkDecision.REJECT,
                backing_path=backing,
                reason=problem,
            )

        mapped = map_model_name(name, self._settings.dir_suffix)
        if not mapped.file_base:
            return LinkPlan(
                model=name,
                decision=LinkDecision.REJECT,
                backing_path=backing,
                reason="Model name maps to an empty file name",
            )

        dest_dir = self._settings.dest_root / mapped.author / mapped.dir_name
        link_path = dest_dir / f"{mapped.file_base}{self._settings.extension}"

        def make(decision: LinkDecision, reason: str, canonical: Path | None = None) -> LinkPlan:
            logger.debug("%s: %s (%s)", name, decision.value, reason)
            duplicates: tuple[Path, ...] = ()
            if decision != LinkDecision.DEDUPLICATE:
                duplicates = tuple(p for p in self.index.links_to(backing) if p != link_path)
            return LinkPlan(
                model=name,
                decision=decision,
                backing_path=backing,
                dest_dir=dest_dir,
                link_path=link_path,
                reason=reason,
                canonical_link=canonical,
                duplicate_links=duplicates,
            )

        stale_reason: str | None = None
        if os.path.lexists(link_path):
            if link_path.is_symlink():
                target = read_link_target(link_path)
                if target == backing and is_valid_link(link_path, target, self._settings.extension):
                    canonical = self.index.canonical(backing)
                    if canonical is None:
                        self.index.add(backing, link_path)
                    elif canonical != link_path:
                        return make(
                            LinkDecision.DEDUPLICATE,
                            f"Already linked from {canonical}",
                            canonical,
                        )
                    return make(LinkDecision.SKIP, "Already linked")
                stale_reason = f"Replacing stale link to {target}"
            else:
                kind = "directory" if link_path.is_dir() else "regular file"
                stale_reason = f"Replacing {kind} at the link path"

        canonical = self.index.canonical(backing)
        if canonical is not None and canonical != link_path:
            return make(LinkDecision.DEDUPLICATE, f"Already linked from {canonical}", canonical)

        if stale_reason is not None:
            return make(LinkDecision.REPAIR, stale_reason)
        return make(LinkDecision.CREATE, "Not linked yet")

    def apply(self, plan: LinkPlan) -> LinkResult:
        """Carry out a plan.

        Once this model's link is in place, any other link to the same
        backing file listed in the plan is removed.

        Args:
            plan: Plan produced by :meth:`plan`.

        Returns:
            LinkResult describing what happened.
        """
        if plan.decision == LinkDecision.REJECT:
            return LinkResult(plan=plan, success=False, error=plan.reason)

        if plan.decision == LinkDecision.SKIP and not plan.duplicate_links:
            return LinkResult(plan=plan, success=True, message="Already linked")

        if self._dry_run:
            return self._simulate(plan)

        if plan.decision == LinkDecision.DEDUPLICATE:
            return self._remove_duplicate(plan)

        if plan.decision == LinkDecision.SKIP:
            result = LinkResult(plan=plan, success=True, message="Already linked")
        else:
            result = self._link(plan)

        if result.failed or not plan.duplicate_links:
            return result
        return self._remove_other_links(plan, result)

    def _check_backing(self, backing: Path) -> str | None:
        """Return why a backing path cannot be linked, or None if it can."""
        try:
            if backing.is_symlink():
                return f"Model path is a symbolic link: {backing}"
            if not backing.exists():
                return f"Model path does not exist: {backing}"
            if backing.is_dir():
                return f"Model path is a directory: {backing}"
        except OSError as e:
            return f"Cannot inspect model path {backing}: {e}"
        return None

    def _removal_scope(self, link: Path, keep: Path) -> Path:
        """Return what goes when an extra link to a backing file is removed.

        Normally that is the link's whole model directory. A link lying in
        the destination root or in an author directory is removed on its
        own, and so is one sharing a directory with the link being kept.
        """
        directory = link.parent
        try:
            depth = len(directory.relative_to(self._settings.dest_root).parts)
        except ValueError:
            return link
        if depth < 2 or keep.is_relative_to(directory):
            return link
        return directory

    def _simulate(self, plan: LinkPlan) -> LinkResult:
        """Record a mutating plan in the index without touching the disk.

        Keeping the index current lets a dry run predict the duplicate
        decisions of later models exactly as a real run would.
        """
        if plan.decision == LinkDecision.DEDUPLICATE:
            dest_dir = _required(plan.dest_dir, "destination directory", plan)
            if not os.path.lexists(dest_dir):
                return LinkResult(
                    plan=plan,
                    success=True,
                    message=f"Already linked from {plan.canonical_link}",
                    dry_run=True,
                )
            self.index.discard_under(dest_dir)
            logger.info("Dry-run: would remove duplicated model directory %s", dest_dir)
            return LinkResult(
                plan=plan,
                success=True,
                message=f"Would remove duplicated model directory {dest_dir}",
                dry_run=True,
            )

        link_path = _required(plan.link_path, "link path", plan)
        if plan.decision == LinkDecision.SKIP:
            message = "Already linked"
        else:
            backing = _required(plan.backing_path, "backing path", plan)
            self.index.discard(link_path)
            self.index.add(backing, link_path)
            message = f"Would link {link_path} -> {backing}"

        for link in plan.duplicate_links:
            self.index.discard_under(self._removal_scope(link, link_path))
        if plan.duplicate_links:
            message += f"; would remove {len(plan.duplicate_links)} duplicated link(s)"

        logger.info("Dry-run: %s", message)
        return LinkResult(plan=plan, success=True, message=message, dry_run=True)

    def _link(self, plan: LinkPlan) -> LinkResult:
        """Create (or re-create) the destination link."""
        backing = _required(plan.backing_path, "backing path", plan)
        link_path = _required(plan.link_path, "link path", plan)
        dest_dir = _required(plan.dest_dir, "destination directory", plan)
        changed = False

        if plan.decision == LinkDecision.REPAIR:
            # Only an empty directory may be replaced
            try:
                if link_path.is_dir() and not link_path.is_symlink():
                    link_path.rmdir()
                else:
                    link_path.unlink()
                changed = True
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Failed to remove %s: %s", link_path, e)
                return LinkResult(
                    plan=plan,
                    success=False,
                    error=f"Failed to remove {link_path}: {e}",
                )
            self.index.discard(link_path)

        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Failed to create directory %s: %s", dest_dir, e)
            return LinkResult(
                plan=plan,
                success=False,
                changed=changed,
                error=f"Failed to create directory {dest_dir}: {e}",
            )

        try:
            os.symlink(backing, link_path)
        except OSError as e:
            logger.warning("Failed to symlink %s: %s", plan.model, e)
            return LinkResult(
                plan=plan,
                success=False,
                changed=changed,
                error=f"Failed to symlink {plan.model}: {e}",
            )

        self.index.add(backing, link_path)
        logger.info("Symlinked %s to %s", plan.model, link_path)
        return LinkResult(
            plan=plan,
            success=True,
            changed=True,
            message=f"Symlinked {plan.model} to {link_path}",
        )

    def _remove_other_links(self, plan: LinkPlan, result: LinkResult) -> LinkResult:
        """Remove every other link to the backing file after this model's link is in place."""
        link_path = _required(plan.link_path, "link path", plan)
        removed = 0

        for link in plan.duplicate_links:
            scope = self._removal_scope(link, link_path)
            if not os.path.lexists(scope):
                continue
            try:
                _remove_entry(scope)
            except OSError as e:
                logger.warning("Failed to remove duplicated link %s: %s", link, e)
                return LinkResult(
                    plan=plan,
                    success=False,
                    changed=result.changed or removed > 0,
                    error=f"Failed to remove duplicated link {link}: {e}",
                )
            self.index.discard_under(scope)
            logger.info("Removed duplicated link %s", scope)
            removed += 1

        message = result.message
        if removed:
            message = f"{message}; removed {removed} duplicated link(s)"
        return LinkResult(
            plan=plan,
            success=True,
            changed=result.changed or removed > 0,
            message=message,
        )

    def _remove_duplicate(self, plan: LinkPlan) -> LinkResult:
        """Remove a model's destination directory made redundant by another link."""
        dest_dir = _required(plan.dest_dir, "destination directory", plan)
        canonical = _required(plan.canonical_link, "canonical link", plan)

        if not os.path.lexists(dest_dir):
            return LinkResult(
                plan=plan,
                success=True,
                message=f"Already linked from {canonical}",
            )

        # Never delete the directory holding the surviving link
        if canonical.is_relative_to(dest_dir):
            return self._remove_own_link(plan)

        try:
            _remove_entry(dest_dir)
        except OSError as e:
            logger.warning("Failed to remove duplicated model directory %s: %s", dest_dir, e)
            return LinkResult(
                plan=plan,
                success=False,
                error=f"Failed to remove duplicated model directory {dest_dir}: {e}",
            )

        self.index.discard_under(dest_dir)
        logger.info("Removed duplicated model directory %s", dest_dir)
        return LinkResult(
            plan=plan,
            success=True,
            changed=True,
            message=f"Removed duplicated model directory {dest_dir}",
        )

    def _remove_own_link(self, plan: LinkPlan) -> LinkResult:
        """Remove only this model's link when it shares a directory with the canonical one."""
        link_path = plan.link_path
        if link_path is None or link_path == plan.canonical_link or not link_path.is_symlink():
            return LinkResult(
                plan=plan,
                success=True,
                message=f"Already linked from {plan.canonical_link}",
            )
        try:
            link_path.unlink()
        except OSError as e:
            return LinkResult(
                plan=plan,
                success=False,
                error=f"Failed to remove duplicated link {link_path}: {e}",
            )
        self.index.discard(link_path)
        return LinkResult(
            plan=plan,
            success=True,
            changed=True,
            message=f"Removed duplicated link {link_path}",
        )


def _required(path: Path | None, what: str, plan: LinkPlan) -> Path:
    """Return a path the plan must carry for its decision."""
    if path is None:
        msg = f"{plan.decision.value} plan for {plan.model} has no {what}"
        raise ValueError(msg)
    return path


def _remove_entry(path: Path) -> None:
    """Remove a file, a link, or a whole directory tree."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)
