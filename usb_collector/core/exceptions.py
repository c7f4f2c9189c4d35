"""
Типизированные исключения для USB Collector.

Иерархия:
    UsbCollectorError (базовый)
    ├── CommandError (команда перечисления USB завершилась с ошибкой)
    ├── UnsupportedPlatformError (нет стратегии для текущей ОС)
    └── ConfigError (конфигурация утилиты config.yaml)
        └── ProjectConfigError (файл проекта strux.json)
            ├── ProjectConfigNotFoundError (файл не найден)
            └── ProjectConfigMalformedError (невалидный JSON)

Ошибки парсинга вывода НЕ выбрасываются: парсеры пропускают
битые строки/записи и возвращают частичный результат.

Пример использования:
    from usb_collector.core.exceptions import CommandError

    try:
        devices = collector.collect()
    except CommandError as e:
        logger.error(f"{e.command}: {e.stderr}")
"""

from typing import Optional, List


class UsbCollectorError(Exception):
    """
    Базовое исключение для всех ошибок USB Collector.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class CommandError(UsbCollectorError):
    """
    Команда перечисления USB не запустилась или вернула ненулевой код.

    Attributes:
        command: Команда с аргументами
        stderr: Вывод stderr (если есть)
        exit_code: Код возврата

    Пример:
        raise CommandError("lsusb failed", command=["lsusb"], stderr="not found", exit_code=127)
    """

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        stderr: str = "",
        exit_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.command = command or []
        self.stderr = stderr
        self.exit_code = exit_code
        details = details or {}
        if self.command:
            details["command"] = " ".join(self.command)
        if exit_code is not None:
            details["exit_code"] = exit_code
        super().__init__(message, details)


class UnsupportedPlatformError(UsbCollectorError):
    """
    Для текущей ОС нет стратегии обнаружения USB.

    Пример:
        raise UnsupportedPlatformError(platform="sunos5")
    """

    def __init__(self, platform: str, details: Optional[dict] = None):
        self.platform = platform
        super().__init__(f"Unsupported platform: {platform}", details)


class ConfigError(UsbCollectorError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Invalid value", config_file="config.yaml", key="logging.level")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


class ProjectConfigError(ConfigError):
    """Ошибка файла проекта (strux.json)."""
    pass


class ProjectConfigNotFoundError(ProjectConfigError):
    """
    Файл проекта не найден.

    Пример:
        raise ProjectConfigNotFoundError(config_file="/tmp/app/strux.json")
    """

    def __init__(self, config_file: str, details: Optional[dict] = None):
        name = config_file.replace("\\", "/").rsplit("/", 1)[-1]
        super().__init__(
            f"{name} not found; must be run inside a project directory",
            config_file=config_file,
            details=details,
        )


class ProjectConfigMalformedError(ProjectConfigError):
    """Файл проекта не является валидным JSON."""
    pass


def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, CommandError) and error.stderr:
        return f"{error} - {error.stderr.strip()}"
    if isinstance(error, UsbCollectorError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
