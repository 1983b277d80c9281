"""Unit tests for the report command."""

from pathlib import Path
from unittest.mock import patch

import pytest
from llamalink.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.mark.usefixtures("isolated_home")
class TestReportCommand:
    """Tests for llamalink report."""

    def _invoke(self, ollama_dir: Path, lmstudio_dir: Path, source):
        with patch("llamalink.cli.commands.report.get_source", return_value=source):
            return runner.invoke(
                app,
                ["--ollama-dir", str(ollama_dir), "--lm-dir", str(lmstudio_dir), "report"],
            )

    def test_pending_models(self, ollama_dir, lmstudio_dir, source, make_blob) -> None:
        source.paths["llama3:8b"] = make_blob("a")

        result = self._invoke(ollama_dir, lmstudio_dir, source)

        assert result.exit_code == 0
        assert "1 model(s) pending" in result.output
        assert list(lmstudio_dir.iterdir()) == []

    def test_in_sync(self, ollama_dir, lmstudio_dir, source, make_blob) -> None:
        blob = make_blob("a")
        source.paths["llama3:8b"] = blob
        link = lmstudio_dir / "unknown" / "llama3-8b-GGUF" / "llama3-8b.gguf"
        link.parent.mkdir(parents=True)
        link.symlink_to(blob)

        result = self._invoke(ollama_dir, lmstudio_dir, source)

        assert result.exit_code == 0
        assert "in sync" in result.output

    def test_broken_links_reported(self, ollama_dir, lmstudio_dir, source, tmp_path) -> None:
        (lmstudio_dir / "old.gguf").symlink_to(tmp_path / "gone")

        result = self._invoke(ollama_dir, lmstudio_dir, source)

        assert result.exit_code == 0
        assert "Broken link" in result.output
        assert (lmstudio_dir / "old.gguf").is_symlink()
