"""
CLI модуль usb_collector.

Структура:
- utils.py: общие утилиты (get_collector, get_project_config)
- selector.py: интерактивный выбор в консоли
- commands/: обработчики команд
  - usb.py: usb add, usb list

Примеры использования:
    python -m usb_collector usb              # = usb add
    python -m usb_collector usb add --dry-run
    python -m usb_collector usb list --no-detect
    python -m usb_collector -p ~/apps/kiosk usb list
"""

import argparse
import logging
import sys
from typing import List, Optional

from .commands import cmd_usb_add, cmd_usb_list

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """
    Создаёт парсер аргументов командной строки.

    Returns:
        ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog="usb_collector",
        description="Обнаружение USB устройств и выбор устройств для проброса в strux.json",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  %(prog)s usb                    # обнаружить и выбрать устройства
  %(prog)s usb add --dry-run      # показать изменения без записи
  %(prog)s usb list               # список настроенных устройств
  %(prog)s -p ../app usb list --no-detect
        """,
    )

    # Общие аргументы
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Подробный вывод (DEBUG)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Путь к файлу конфигурации YAML (default: config.yaml)",
    )
    parser.add_argument(
        "-p",
        "--project-dir",
        default=None,
        help="Папка проекта со strux.json (default: текущая)",
    )

    # Подкоманды
    subparsers = parser.add_subparsers(dest="command", help="Команды")

    # === USB ===
    usb_parser = subparsers.add_parser(
        "usb",
        help="USB устройства проекта (без подкоманды = add)",
    )
    usb_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        help="Показать изменения без записи в файл проекта",
    )

    usb_subparsers = usb_parser.add_subparsers(dest="usb_command", help="Подкоманды usb")

    # usb add
    add_parser = usb_subparsers.add_parser(
        "add",
        help="Обнаружить устройства и обновить список в файле проекта",
    )
    add_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Показать изменения без записи в файл проекта",
    )

    # usb list
    list_parser = usb_subparsers.add_parser(
        "list",
        help="Показать настроенные устройства и удалить ненужные",
    )
    list_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Показать изменения без записи в файл проекта",
    )
    list_parser.add_argument(
        "--no-detect",
        action="store_true",
        help="Не определять имена устройств",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Главная функция CLI."""
    from ..config import config, load_config
    from ..core.context import RunContext, set_current_context
    from ..core.exceptions import UsbCollectorError, format_error_for_log
    from ..core.logging import LogConfig, setup_logging_from_config

    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.command != "usb":
        parser.print_help()
        return

    usb_command = args.usb_command or "add"
    dry_run = getattr(args, "dry_run", False)

    ctx = RunContext.create(
        dry_run=dry_run,
        triggered_by="cli",
        command=f"usb {usb_command}",
        project_dir=args.project_dir,
    )
    set_current_context(ctx)

    try:
        # Загружаем конфигурацию из YAML (если есть)
        load_config(args.config)
    except UsbCollectorError as e:
        setup_logging_from_config(LogConfig(level=logging.DEBUG if args.verbose else logging.INFO))
        logger.error(format_error_for_log(e))
        sys.exit(1)

    # Приоритет: -v флаг > config.yaml > INFO по умолчанию
    log_config = LogConfig.from_dict(config.logging.to_dict())
    if args.verbose:
        log_config.level = logging.DEBUG
    setup_logging_from_config(log_config)

    logger.debug(f"Run started: {ctx} (command={ctx.command})")

    try:
        if usb_command == "list":
            cmd_usb_list(args, ctx)
        else:
            cmd_usb_add(args, ctx)
    except UsbCollectorError as e:
        logger.error(format_error_for_log(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nПрервано")
        sys.exit(130)

    logger.debug(f"Run completed: {ctx.run_id} ({ctx.elapsed_seconds:.1f}s)")


__all__ = [
    "cmd_usb_add",
    "cmd_usb_list",
    "setup_parser",
    "main",
]
