"""
Запуск команд перечисления USB устройств.

Граница с ОС: команда выполняется до завершения (блокирующе),
возвращается stdout/stderr/код возврата. Разбор вывода не здесь.

Пример использования:
    runner = CommandRunner(timeout=30)
    result = runner.run(["lsusb"])
    if result.ok:
        print(result.stdout)
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional

from ..core.exceptions import CommandError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Результат выполнения команды.

    Attributes:
        command: Команда с аргументами
        stdout: Стандартный вывод
        stderr: Вывод ошибок
        exit_code: Код возврата
    """
    command: List[str]
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def raise_for_status(self) -> None:
        """Бросает CommandError если код возврата ненулевой."""
        if not self.ok:
            raise CommandError(
                f"Command failed: {' '.join(self.command)} (exit code {self.exit_code})",
                command=self.command,
                stderr=self.stderr,
                exit_code=self.exit_code,
            )


class CommandRunner:
    """
    Запуск внешней команды через subprocess.

    Команда, которую не удалось запустить (нет в PATH, нет прав),
    возвращается как результат с кодом 1 и текстом ошибки в stderr.

    Attributes:
        timeout: Таймаут в секундах (None: без таймаута)
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: List[str]) -> CommandResult:
        """
        Выполняет команду.

        Args:
            command: Команда с аргументами

        Returns:
            CommandResult

        Raises:
            CommandError: Команда не завершилась за timeout
        """
        logger.debug(f"Запуск: {' '.join(command)}")

        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise CommandError(
                f"Command timed out after {self.timeout}s: {' '.join(command)}",
                command=command,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"Не удалось запустить {command[0]}: {e}")
            return CommandResult(command=command, stderr=str(e), exit_code=1)

        logger.debug(f"{command[0]}: код возврата {completed.returncode}")
        return CommandResult(
            command=command,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
        )
