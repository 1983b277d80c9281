"""Unit tests for the config commands."""

from pathlib import Path

import pytest
from llamalink.cli.main import app
from llamalink.core.config import load_config
from llamalink.core.paths import get_config_path
from typer.testing import CliRunner

runner = CliRunner()


@pytest.mark.usefixtures("isolated_home")
class TestConfigCommands:
    """Tests for llamalink config."""

    def test_show_defaults(self) -> None:
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "cleanup" in result.output
        assert "command_timeout" in result.output

    def test_set_and_show(self) -> None:
        result = runner.invoke(app, ["config", "set", "cleanup", "false"])

        assert result.exit_code == 0
        assert load_config().cleanup is False

    def test_set_unknown_key(self) -> None:
        result = runner.invoke(app, ["config", "set", "colour", "blue"])

        assert result.exit_code == 1
        assert "Unknown config key" in result.output

    def test_path(self, isolated_home: Path) -> None:
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.output.strip() == str(get_config_path())

    def test_broken_config_exits(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text("cleanup = [")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
