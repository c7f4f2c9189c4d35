"""
Команды USB: usb add, usb list.

usb add (и просто usb):
    обнаружение → дедупликация → выбор из настроенных и новых →
    сверка → запись файла проекта

usb list:
    список настроенных устройств (имена из обнаружения, если
    удалось) → по желанию выбор устройств для удаления
"""

import logging
from typing import Optional

from ...collectors import UsbCollector
from ...core.context import RunContext
from ...core.domain import ReconcileResult, UsbReconciler
from ...core.exceptions import UsbCollectorError, format_error_for_log
from ...core.models import DeviceSet
from ...core.project import ProjectConfig
from ..selector import ConsoleSelector
from ..utils import (
    get_collector,
    get_project_config,
    log_changes,
    print_device_list,
    print_dry_run,
)

logger = logging.getLogger(__name__)


def _apply(result: ReconcileResult, project: ProjectConfig, ctx: RunContext, summary: str) -> bool:
    """
    Записывает новый список если есть изменения.

    Тот же набор ключей тоже записывается, если в файле записи
    не в канонической форме.

    Returns:
        bool: True если файл записан
    """
    log_changes(result)
    logger.debug(f"Результат сверки: {result.to_dict()}")

    if not result.has_changes:
        if not project.needs_rewrite(result.devices):
            print(f"Изменений нет, {project.name} не изменён")
            return False
        logger.info(f"Записи USB в {project.name} будут приведены к канонической форме")

    if ctx.dry_run:
        print_dry_run(result, project)
        return False

    project.set_usb_devices(result.devices)
    project.save()
    print(summary)
    return True


def cmd_usb_add(
    args,
    ctx: Optional[RunContext] = None,
    collector: Optional[UsbCollector] = None,
    selector=None,
) -> None:
    """
    Обработчик команды usb add.

    Args:
        args: Аргументы командной строки
        ctx: Контекст выполнения
        collector: Коллектор (по умолчанию из config.yaml)
        selector: Интерактивный выбор (по умолчанию ConsoleSelector)

    Raises:
        CommandError: Команда обнаружения завершилась с ошибкой
        UnsupportedPlatformError: Неизвестная ОС
        ProjectConfigError: Файл проекта не найден или невалиден
    """
    ctx = ctx or RunContext.create(dry_run=getattr(args, "dry_run", False), command="usb add")
    collector = collector or get_collector()
    selector = selector or ConsoleSelector()

    logger.info("Обнаружение USB устройств...")
    detected = collector.collect_unique()
    if not detected:
        logger.warning("USB устройства не обнаружены, файл проекта не изменён")
        return

    project = get_project_config(ctx)
    reconciler = UsbReconciler(project.get_usb_devices(), detected)

    selection = selector.select("Select USB devices to pass through", reconciler.build_choices())
    result = reconciler.reconcile(selection)

    if result.no_selection:
        print(f"Ничего не выбрано, {project.name} не изменён")
        return

    _apply(
        result,
        project,
        ctx,
        summary=f"Updated {project.name} ({len(result.devices)} devices selected)",
    )


def cmd_usb_list(
    args,
    ctx: Optional[RunContext] = None,
    collector: Optional[UsbCollector] = None,
    selector=None,
) -> None:
    """
    Обработчик команды usb list.

    Обнаружение здесь только для имён устройств: любая ошибка
    обнаружения пишется в DEBUG и не мешает показать список.

    Args:
        args: Аргументы командной строки (no_detect)
        ctx: Контекст выполнения
        collector: Коллектор (по умолчанию из config.yaml)
        selector: Интерактивный выбор (по умолчанию ConsoleSelector)

    Raises:
        ProjectConfigError: Файл проекта не найден или невалиден
    """
    ctx = ctx or RunContext.create(dry_run=getattr(args, "dry_run", False), command="usb list")
    selector = selector or ConsoleSelector()

    project = get_project_config(ctx)
    existing = project.get_usb_devices()

    detected: DeviceSet = {}
    if existing and not getattr(args, "no_detect", False):
        try:
            detected = (collector or get_collector()).collect_unique()
        except UsbCollectorError as e:
            logger.debug(f"Имена устройств не определены: {format_error_for_log(e)}")

    if not existing:
        print(f"USB устройства не настроены в {project.name}")
        return

    reconciler = UsbReconciler(existing, detected)
    choices = reconciler.build_removal_choices()

    print(f"USB устройства в {project.name}:")
    print_device_list(choices)

    if not selector.confirm("Remove any devices?", default=False):
        return

    selection = selector.select("Select USB devices to remove", choices)
    result = reconciler.reconcile_removal(selection)

    if result.no_selection:
        print(f"Ничего не выбрано, {project.name} не изменён")
        return

    _apply(
        result,
        project,
        ctx,
        summary=f"Updated {project.name} ({len(result.devices)} devices configured)",
    )
