"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from llamalink.core.config import LinkSettings
from llamalink.models.model import Model
from llamalink.sources.base import ModelSource, ResolutionError


class StaticModelSource(ModelSource):
    """In-memory model source mapping names to backing paths."""

    def __init__(
        self,
        paths: dict[str, Path] | None = None,
        sizes: dict[str, int] | None = None,
    ) -> None:
        self.paths: dict[str, Path] = dict(paths or {})
        self.sizes: dict[str, int] = dict(sizes or {})
        self.resolved: list[str] = []

    @property
    def name(self) -> str:
        return "static"

    def is_available(self) -> bool:
        return True

    def list_models(self) -> list[Model]:
        return [Model(name=n, size_bytes=self.sizes.get(n)) for n in self.paths]

    def resolve(self, name: str) -> Path:
        self.resolved.append(name)
        if name not in self.paths:
            raise ResolutionError(f"Model path not found for {name}")
        return self.paths[name]


@pytest.fixture
def ollama_dir(tmp_path: Path) -> Path:
    """Fake Ollama store with a blobs directory."""
    blobs = tmp_path / "ollama" / "blobs"
    blobs.mkdir(parents=True)
    return tmp_path / "ollama"


@pytest.fixture
def lmstudio_dir(tmp_path: Path) -> Path:
    """Empty LM Studio models directory."""
    path = tmp_path / "lmstudio"
    path.mkdir()
    return path


@pytest.fixture
def settings(ollama_dir: Path, lmstudio_dir: Path) -> LinkSettings:
    """Link settings over the fake stores."""
    return LinkSettings(source_root=ollama_dir, dest_root=lmstudio_dir)


@pytest.fixture
def make_blob(ollama_dir: Path):
    """Factory writing a blob file into the fake Ollama store."""

    def _make(digest: str, content: bytes = b"GGUF") -> Path:
        path = ollama_dir / "blobs" / f"sha256-{digest}"
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def mock_ollama_list_output() -> str:
    """Sample ollama list output for testing."""
    return """NAME                      ID              SIZE      MODIFIED
llama3:8b                 365c0bd3c000    4.7 GB    2 weeks ago
acme/foo:7b               a1b2c3d4e5f6    3.8 GB    3 days ago
codellama:13b             9f438cb9cd58    7.4 GB    5 months ago
tinyllama:latest          2644915ede35    637 MB    7 weeks ago"""


@pytest.fixture
def mock_modelfile_output() -> str:
    """Sample ollama show --modelfile output for testing."""
    return """# Modelfile generated by "ollama show"
# To build a new Modelfile based on this, replace FROM with:
# FROM llama3:8b

FROM /home/user/.ollama/models/blobs/sha256-00e1317cbf74
TEMPLATE \"\"\"{{ .Prompt }}\"\"\"
PARAMETER stop "<|eot_id|>"
"""


@pytest.fixture
def source() -> StaticModelSource:
    """Empty in-memory model source; tests register models on ``paths``."""
    return StaticModelSource()


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and XDG_CONFIG_HOME at a scratch directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.delenv("OLLAMA_MODELS", raising=False)
    return home
