"""
Контекст выполнения для отслеживания запусков.

RunContext создаётся в CLI и прокидывается в команды:
- run_id: идентификатор запуска (попадает в каждую запись лога)
- dry_run: режим симуляции (файл проекта не перезаписывается)
- project_dir: папка проекта со strux.json

Пример использования:
    ctx = RunContext.create(command="usb add", dry_run=True)
    set_current_context(ctx)
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Literal, Optional

logger = logging.getLogger(__name__)

TriggerSource = Literal["cli", "test"]


@dataclass
class RunContext:
    """
    Контекст выполнения операции.

    Attributes:
        run_id: Уникальный идентификатор запуска (timestamp или UUID)
        started_at: Время начала выполнения
        dry_run: Режим симуляции (без записи в файл проекта)
        triggered_by: Источник запуска (cli/test)
        command: Команда CLI которая была вызвана
        project_dir: Папка проекта
    """

    run_id: str
    started_at: datetime
    dry_run: bool = False
    triggered_by: TriggerSource = "cli"
    command: str = ""
    project_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def create(
        cls,
        dry_run: bool = False,
        triggered_by: TriggerSource = "cli",
        command: str = "",
        project_dir: Optional[Path] = None,
        use_timestamp_id: bool = True,
    ) -> "RunContext":
        """
        Создаёт новый контекст выполнения.

        Args:
            dry_run: Режим симуляции
            triggered_by: Источник запуска
            command: Название команды CLI
            project_dir: Папка проекта (default: текущая)
            use_timestamp_id: Использовать timestamp вместо UUID

        Returns:
            RunContext: Новый контекст
        """
        started_at = datetime.now()

        if use_timestamp_id:
            # Формат: 2026-03-14T12-30-22
            run_id = started_at.strftime("%Y-%m-%dT%H-%M-%S")
        else:
            run_id = str(uuid.uuid4())[:8]

        ctx = cls(
            run_id=run_id,
            started_at=started_at,
            dry_run=dry_run,
            triggered_by=triggered_by,
            command=command,
            project_dir=Path(project_dir) if project_dir else Path.cwd(),
        )

        logger.debug(f"Created RunContext: {ctx.run_id} (dry_run={dry_run})")
        return ctx

    @property
    def elapsed_seconds(self) -> float:
        """Время выполнения в секундах."""
        return (datetime.now() - self.started_at).total_seconds()

    def __str__(self) -> str:
        dry = " [DRY-RUN]" if self.dry_run else ""
        return f"RunContext({self.run_id}{dry})"


# Глобальный контекст для случаев когда нет явного прокидывания
_current_context: Optional[RunContext] = None


def get_current_context() -> Optional[RunContext]:
    """Возвращает текущий глобальный контекст."""
    return _current_context


def set_current_context(ctx: Optional[RunContext]) -> None:
    """Устанавливает текущий глобальный контекст."""
    global _current_context
    _current_context = ctx


class RunContextFilter(logging.Filter):
    """
    Logging filter: добавляет run_id текущего контекста в каждую запись.

    Подключается к handlers в setup_logging_from_config, поэтому
    run_id есть и у записей обычных logging.getLogger() логгеров.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "run_id", None) is None:
            ctx = get_current_context()
            record.run_id = ctx.run_id if ctx else None
        return True
