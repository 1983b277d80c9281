"""Shared Rich display functions for link and cleanup results.

Provides reusable table builders and summary printers used by the
link, report and cleanup commands.
"""

from rich.table import Table

from llamalink.models.decision import CleanupKind, CleanupResult, LinkDecision, LinkResult
from llamalink.utils.formatting import console, print_success, print_warning

# Decision -> (label, style)
_DECISION_STYLES: dict[LinkDecision, tuple[str, str]] = {
    LinkDecision.CREATE: ("+link", "linked"),
    LinkDecision.SKIP: ("=skip", "skipped"),
    LinkDecision.REPAIR: ("~repair", "repaired"),
    LinkDecision.DEDUPLICATE: ("-dedupe", "removed"),
    LinkDecision.REJECT: ("!reject", "error"),
}

_CLEANUP_LABELS: dict[CleanupKind, str] = {
    CleanupKind.BROKEN_LINK: "broken link",
    CleanupKind.LINK: "link",
    CleanupKind.EMPTY_DIR: "empty dir",
}


def format_result_line(result: LinkResult) -> str:
    """Format one link result as a single line of Rich markup.

    Args:
        result: Result to format.

    Returns:
        Markup string like ``+link  acme/foo:7b  Symlinked ...``.
    """
    label, style = _DECISION_STYLES[result.decision]
    if result.failed:
        style = "error"
        if result.decision != LinkDecision.REJECT:
            label = "!fail"
        detail = f"[error]{result.error or 'Unknown error'}[/error]"
    else:
        detail = f"[muted]{result.message or result.plan.reason or ''}[/muted]"
    return f"[{style}]{label:<8}[/{style}] [model.name]{result.plan.model}[/] {detail}"


def create_results_table(results: list[LinkResult], dry_run: bool = False) -> Table:
    """Create a Rich table with one row per model.

    Args:
        results: Link results in processing order.
        dry_run: Whether these are dry-run results (changes table title).

    Returns:
        Rich Table configured for results display.
    """
    title = "Planned Links (Dry Run)" if dry_run else "Link Results"

    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Decision", width=10, justify="center")
    table.add_column("Model", no_wrap=True)
    table.add_column("Link")
    table.add_column("Details")

    for result in results:
        label, style = _DECISION_STYLES[result.decision]
        if result.failed:
            style = "error"
            details = result.error or "Unknown error"
        else:
            details = result.message or result.plan.reason or ""

        link = str(result.plan.link_path) if result.plan.link_path else "-"
        table.add_row(
            f"[{style}]{label}[/{style}]",
            f"[model.name]{result.plan.model}[/]",
            f"[muted]{link}[/muted]",
            f"[muted]{details}[/muted]",
        )

    return table


def create_cleanup_table(results: list[CleanupResult]) -> Table:
    """Create a Rich table displaying cleanup removals.

    Args:
        results: Cleanup results.

    Returns:
        Rich Table configured for cleanup display.
    """
    table = Table(title="Cleanup", show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Kind", width=12)
    table.add_column("Status", width=10)
    table.add_column("Details", style="dim")

    for r in results:
        if r.dry_run:
            status = "[info]dry-run[/]"
            detail = "Would remove"
        elif r.success:
            status = "[success]removed[/]"
            detail = ""
        else:
            status = "[error]failed[/]"
            detail = r.error or "Unknown error"
        table.add_row(r.path, _CLEANUP_LABELS[r.kind], status, detail)

    return table


def print_results_summary(results: list[LinkResult]) -> None:
    """Print counts per decision and any failures.

    Args:
        results: Link results.
    """
    parts: list[str] = []
    for decision, (_, style) in _DECISION_STYLES.items():
        count = sum(1 for r in results if r.decision == decision)
        if count:
            parts.append(f"[{style}]{count} {decision.value}[/{style}]")

    if parts:
        console.print(f"\nSummary: {', '.join(parts)}")

    failed = sum(1 for r in results if r.failed)
    if failed:
        print_warning(f"{failed} model(s) could not be linked.")
    elif results:
        print_success(f"All {len(results)} model(s) reconciled.")


def print_cleanup_summary(results: list[CleanupResult]) -> None:
    """Print a one-line cleanup summary.

    Args:
        results: Cleanup results.
    """
    dry_count = sum(1 for r in results if r.dry_run)
    fail_count = sum(1 for r in results if not r.success)
    success_count = sum(1 for r in results if r.success and not r.dry_run)

    if not results:
        console.print("[dim]Destination tree is clean.[/dim]")
    elif dry_count:
        console.print(f"[info]Dry-run: {dry_count} entries would be removed.[/]")
    elif fail_count:
        print_warning(f"{success_count} removed, {fail_count} failed")
    else:
        print_success(f"Removed {success_count} entries.")
