"""Unit tests for the read-only state report."""

from llamalink.linking.report import build_report
from llamalink.models.decision import LinkDecision
from llamalink.models.model import Model


class TestBuildReport:
    """Tests for build_report function."""

    def test_reports_without_changing_tree(self, settings, source, make_blob, tmp_path) -> None:
        source.paths["acme/foo:7b"] = make_blob("aaa")
        (settings.dest_root / "real.gguf").write_bytes(b"GGUF")
        broken = settings.dest_root / "old.gguf"
        broken.symlink_to(tmp_path / "gone")

        state = build_report(settings, source, [Model("acme/foo:7b")])

        assert [r.decision for r in state.results] == [LinkDecision.CREATE]
        assert len(state.pending) == 1
        assert state.unlinked_files == (settings.dest_root / "real.gguf",)
        assert state.broken_links == (broken,)
        assert not (settings.dest_root / "acme").exists()
        assert broken.is_symlink()

    def test_in_sync_tree(self, settings, source, make_blob) -> None:
        blob = make_blob("aaa")
        source.paths["acme/foo:7b"] = blob
        link = settings.dest_root / "acme" / "foo-7b-GGUF" / "foo-7b.gguf"
        link.parent.mkdir(parents=True)
        link.symlink_to(blob)

        state = build_report(settings, source, [Model("acme/foo:7b")])

        assert state.pending == []
        assert state.broken_links == ()
        assert state.unlinked_files == ()
