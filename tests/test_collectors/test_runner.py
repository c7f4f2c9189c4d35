"""
Тесты CommandRunner (subprocess подменяется).
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from usb_collector.collectors.runner import CommandResult, CommandRunner
from usb_collector.core.exceptions import CommandError

RUN_PATH = "usb_collector.collectors.runner.subprocess.run"


class TestCommandRunner:
    """Запуск команд."""

    def test_success(self):
        completed = MagicMock(returncode=0, stdout="Bus 001 ...\n", stderr="")
        with patch(RUN_PATH, return_value=completed) as run:
            result = CommandRunner().run(["lsusb"])

        assert result.ok
        assert result.stdout == "Bus 001 ...\n"
        run.assert_called_once_with(
            ["lsusb"], capture_output=True, text=True, timeout=None, check=False,
        )

    def test_timeout_passed(self):
        completed = MagicMock(returncode=0, stdout="", stderr="")
        with patch(RUN_PATH, return_value=completed) as run:
            CommandRunner(timeout=5).run(["lsusb"])
        assert run.call_args.kwargs["timeout"] == 5

    def test_non_zero_exit(self):
        completed = MagicMock(returncode=3, stdout="", stderr="boom")
        with patch(RUN_PATH, return_value=completed):
            result = CommandRunner().run(["lsusb"])

        assert not result.ok
        assert result.exit_code == 3
        assert result.stderr == "boom"

    def test_spawn_failure(self):
        """Команды нет в PATH — результат с кодом 1, не исключение."""
        with patch(RUN_PATH, side_effect=FileNotFoundError("No such file: 'lsusb'")):
            result = CommandRunner().run(["lsusb"])

        assert result.exit_code == 1
        assert "No such file" in result.stderr

    def test_timeout_expired(self):
        with patch(RUN_PATH, side_effect=subprocess.TimeoutExpired(["lsusb"], 5)):
            with pytest.raises(CommandError) as exc_info:
                CommandRunner(timeout=5).run(["lsusb"])
        assert exc_info.value.command == ["lsusb"]


class TestCommandResult:
    """Тесты CommandResult."""

    def test_raise_for_status_ok(self):
        CommandResult(["lsusb"], stdout="x").raise_for_status()

    def test_raise_for_status_error(self):
        result = CommandResult(["ioreg", "-p", "IOUSB"], stderr="failed", exit_code=2)
        with pytest.raises(CommandError) as exc_info:
            result.raise_for_status()

        error = exc_info.value
        assert error.exit_code == 2
        assert error.stderr == "failed"
        assert error.details["command"] == "ioreg -p IOUSB"
