"""Unit tests for shell utilities."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from llamalink.utils.shell import CommandResult, command_exists, run_command


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success_on_zero_exit(self) -> None:
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="boom", returncode=1).success is False

    def test_detail_prefers_stderr(self) -> None:
        result = CommandResult(stdout="", stderr="  model not found\n", returncode=1)

        assert result.detail == "model not found"

    def test_detail_falls_back_to_exit_code(self) -> None:
        assert CommandResult(stdout="", stderr="", returncode=3).detail == "exit code 3"


class TestRunCommand:
    """Tests for run_command."""

    @patch("llamalink.utils.shell.subprocess.run")
    def test_captures_text_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="NAME\n", stderr="", returncode=0)

        result = run_command(["ollama", "list"], timeout=5.0)

        assert result == CommandResult(stdout="NAME\n", stderr="", returncode=0)
        kwargs = mock_run.call_args.kwargs
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        assert kwargs["timeout"] == 5.0

    @patch("llamalink.utils.shell.subprocess.run")
    def test_non_zero_exit_is_returned(self, mock_run: MagicMock) -> None:
        mock_run.return_value = MagicMock(stdout="", stderr="server not running", returncode=1)

        result = run_command(["ollama", "list"])

        assert result.success is False
        assert "check" not in mock_run.call_args.kwargs

    @patch("llamalink.utils.shell.subprocess.run")
    def test_timeout_propagates(self, mock_run: MagicMock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="ollama", timeout=1)

        with pytest.raises(subprocess.TimeoutExpired):
            run_command(["ollama", "list"], timeout=1)

    def test_missing_executable_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            run_command(["definitely-not-a-real-command-xyz"])


class TestCommandExists:
    """Tests for command_exists."""

    def test_found(self) -> None:
        with patch("llamalink.utils.shell.shutil.which", return_value="/usr/bin/ollama"):
            assert command_exists("ollama") is True

    def test_missing(self) -> None:
        with patch("llamalink.utils.shell.shutil.which", return_value=None):
            assert command_exists("ollama") is False
