"""
Core модули USB Collector.

- constants: нормализация VID/PID, платформы и команды
- models: UsbDevice, PersistedUsbDevice, SelectionChoice
- domain: дедупликация и сверка с файлом проекта
- project: файл проекта (strux.json)
- RunContext: контекст выполнения
- Logging: human-readable/JSON логирование
- exceptions: иерархия ошибок
"""

from .context import RunContext, get_current_context, set_current_context
from .exceptions import (
    UsbCollectorError,
    CommandError,
    UnsupportedPlatformError,
    ConfigError,
    ProjectConfigError,
    ProjectConfigNotFoundError,
    ProjectConfigMalformedError,
    format_error_for_log,
)
from .logging import LogConfig, get_logger, setup_logging_from_config
from .models import UsbDevice, PersistedUsbDevice, SelectionChoice, DeviceSet

__all__ = [
    # Context
    "RunContext",
    "get_current_context",
    "set_current_context",
    # Exceptions
    "UsbCollectorError",
    "CommandError",
    "UnsupportedPlatformError",
    "ConfigError",
    "ProjectConfigError",
    "ProjectConfigNotFoundError",
    "ProjectConfigMalformedError",
    "format_error_for_log",
    # Logging
    "LogConfig",
    "get_logger",
    "setup_logging_from_config",
    # Models
    "UsbDevice",
    "PersistedUsbDevice",
    "SelectionChoice",
    "DeviceSet",
]
