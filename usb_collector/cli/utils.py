"""
Утилиты CLI.

Общие функции для команд: создание коллектора и загрузка файла
проекта по настройкам из config.yaml, вывод результата сверки.
"""

import logging
from typing import List

from ..collectors import CommandRunner, UsbCollector
from ..config import config
from ..core.context import RunContext
from ..core.domain import ReconcileResult
from ..core.models import SelectionChoice
from ..core.project import ProjectConfig, load_project_config

logger = logging.getLogger(__name__)


def get_collector() -> UsbCollector:
    """UsbCollector с таймаутом и PowerShell из config.yaml."""
    runner = CommandRunner(timeout=config.detection.command_timeout)
    return UsbCollector(runner=runner, powershell=config.detection.powershell)


def get_project_config(ctx: RunContext) -> ProjectConfig:
    """
    Загружает файл проекта из папки проекта контекста.

    Raises:
        ProjectConfigNotFoundError: Файла нет
        ProjectConfigMalformedError: Файл не JSON
    """
    return load_project_config(
        ctx.project_dir,
        filename=config.project.config_file,
        section=config.project.section,
        usb_field=config.project.usb_field,
    )


def print_device_list(choices: List[SelectionChoice]) -> None:
    """Нумерованный список устройств."""
    for index, choice in enumerate(choices, 1):
        print(f"  {index}. {choice.title}")


def log_changes(result: ReconcileResult) -> None:
    """Каждое изменение отдельной строкой лога."""
    for change in result.added:
        logger.info(f"Добавлено: {change.label}")
    for change in result.removed:
        logger.info(f"Удалено: {change.label}")
    for change in result.dropped:
        logger.warning(f"Пропущен невалидный ключ: {change.key}")


def print_dry_run(result: ReconcileResult, project: ProjectConfig) -> None:
    """Отчёт dry-run: что было бы записано."""
    print(f"\n[DRY-RUN] {project.name} не изменён")
    print(result.format_detailed())
    print(f"Было бы выбрано устройств: {len(result.devices)}")
