"""Unit tests for shared result display helpers."""

from pathlib import Path

from llamalink.cli.display import (
    create_cleanup_table,
    create_results_table,
    format_result_line,
    print_cleanup_summary,
    print_results_summary,
)
from llamalink.core.theme import get_theme
from llamalink.models.decision import (
    CleanupKind,
    CleanupResult,
    LinkDecision,
    LinkPlan,
    LinkResult,
)
from rich.console import Console


def _result(decision: LinkDecision, success: bool = True, **kwargs) -> LinkResult:
    paths = {}
    if decision in (LinkDecision.CREATE, LinkDecision.REPAIR):
        paths = {
            "backing_path": Path("/blobs/sha256-a"),
            "dest_dir": Path("/lm/acme/foo-7b-GGUF"),
            "link_path": Path("/lm/acme/foo-7b-GGUF/foo-7b.gguf"),
        }
    if decision == LinkDecision.DEDUPLICATE:
        paths = {
            "canonical_link": Path("/lm/acme/foo-7b-GGUF/foo-7b.gguf"),
            "dest_dir": Path("/lm/acme/foo-latest-GGUF"),
        }
    plan = LinkPlan(model="acme/foo:7b", decision=decision, **paths)
    return LinkResult(plan=plan, success=success, **kwargs)


def _render(renderable) -> str:
    console = Console(width=200, record=True, theme=get_theme())
    console.print(renderable)
    return console.export_text()


class TestFormatResultLine:
    """Tests for format_result_line function."""

    def test_success_line(self) -> None:
        line = format_result_line(_result(LinkDecision.CREATE, message="Symlinked"))

        assert "+link" in line
        assert "acme/foo:7b" in line
        assert "Symlinked" in line

    def test_failed_link_shows_fail_label(self) -> None:
        line = format_result_line(_result(LinkDecision.CREATE, success=False, error="denied"))

        assert "!fail" in line
        assert "denied" in line

    def test_reject_keeps_reject_label(self) -> None:
        line = format_result_line(_result(LinkDecision.REJECT, success=False, error="gone"))

        assert "!reject" in line


class TestTables:
    """Tests for table builders."""

    def test_results_table_titles(self) -> None:
        results = [_result(LinkDecision.CREATE), _result(LinkDecision.SKIP)]

        assert create_results_table(results).title == "Link Results"
        assert create_results_table(results, dry_run=True).title == "Planned Links (Dry Run)"
        assert create_results_table(results).row_count == 2

    def test_cleanup_table_rows(self) -> None:
        results = [
            CleanupResult(path="/lm/a.gguf", kind=CleanupKind.BROKEN_LINK, success=True),
            CleanupResult(path="/lm/b", kind=CleanupKind.EMPTY_DIR, success=False, error="busy"),
        ]

        text = _render(create_cleanup_table(results))

        assert "broken link" in text
        assert "busy" in text


class TestSummaries:
    """Tests for summary printers."""

    def test_results_summary_counts(self, capsys) -> None:
        print_results_summary(
            [
                _result(LinkDecision.CREATE, changed=True),
                _result(LinkDecision.REJECT, success=False, error="x"),
            ]
        )

        out = capsys.readouterr()
        assert "1 create" in out.out
        assert "1 model(s) could not be linked" in out.err

    def test_cleanup_summary_clean(self, capsys) -> None:
        print_cleanup_summary([])

        assert "clean" in capsys.readouterr().out
