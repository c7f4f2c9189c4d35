"""
Загрузчик конфигурации из config.yaml.

Предоставляет доступ к настройкам через точку:
    config.project.config_file
    config.detection.command_timeout
    config.logging.level
"""

import os
import logging
from typing import Any, Optional

import yaml

from .core.config_schema import validate_config
from .core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Файлы конфигурации в текущей папке, в порядке поиска
CONFIG_SEARCH_PATHS = [
    "config.yaml",
    "config.yml",
    ".usb_collector.yaml",
]

# Переменная окружения для имени файла проекта
ENV_PROJECT_FILE = "USB_COLLECTOR_PROJECT_FILE"


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: dict = None):
        self._data = data or {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            super().__setattr__(name, value)
        else:
            self._data[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def to_dict(self) -> dict:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Дефолты, поверх них config.yaml, поверх него переменные окружения.

    Пример:
        config.project.config_file       # "strux.json"
        config.project.section           # "qemu"
        config.detection.powershell      # "powershell.exe"
    """

    def __init__(self, config_file: Optional[str] = None, load: bool = True):
        self.reset()
        if load:
            self._load_yaml(config_file)
        self._load_env()

    def _get_defaults(self) -> dict:
        """Значения по умолчанию."""
        return {
            "project": {
                "config_file": "strux.json",
                "section": "qemu",
                "usb_field": "usb",
            },
            "detection": {
                "command_timeout": None,
                "powershell": "powershell.exe",
            },
            "logging": {
                "level": "INFO",
                "json_format": False,
                "console": True,
                "file_path": None,
                "rotation": "size",
                "max_bytes": 10 * 1024 * 1024,
                "backup_count": 5,
                "when": "midnight",
                "interval": 1,
            },
        }

    def _load_yaml(self, config_file: Optional[str] = None) -> None:
        """
        Загружает настройки из YAML файла.

        Raises:
            ConfigError: Явно указанный файл не найден или YAML невалиден
        """
        if config_file:
            if not os.path.exists(config_file):
                raise ConfigError("Config file not found", config_file=config_file)
        else:
            for path in CONFIG_SEARCH_PATHS:
                if os.path.exists(path):
                    config_file = path
                    break

        if not config_file:
            return

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Ошибка чтения конфигурации: {e}", config_file=config_file)

        if not isinstance(yaml_data, dict):
            raise ConfigError("Конфигурация должна быть YAML-словарём", config_file=config_file)

        # Мержим с дефолтами
        self._merge_dict(self._data, yaml_data)
        self.config_file = config_file
        logger.debug(f"Конфигурация загружена из {config_file}")

    def _load_env(self) -> None:
        """Загружает настройки из переменных окружения."""
        project_file = os.getenv(ENV_PROJECT_FILE)
        project = self._data.get("project")
        # Секция не словарь (project: null): ошибку покажет validate_config
        if project_file and isinstance(project, dict):
            project["config_file"] = project_file

    def _merge_dict(self, base: dict, override: dict) -> None:
        """Рекурсивно мержит словари."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_dict(base[key], value)
            else:
                base[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def to_dict(self) -> dict:
        return self._data

    def reset(self) -> None:
        """Сбрасывает к значениям по умолчанию."""
        self._data = self._get_defaults()
        self.config_file = None

    def reload(self, config_file: Optional[str] = None) -> None:
        """Перезагружает конфигурацию."""
        self.reset()
        self._load_yaml(config_file)
        self._load_env()


# Глобальный экземпляр (дефолты, файл читается в load_config)
config = Config(load=False)


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Загружает и валидирует конфигурацию.

    Args:
        config_file: Путь к YAML файлу (опционально)

    Returns:
        Config: Объект конфигурации

    Raises:
        ConfigError: Файл не читается или не проходит валидацию
    """
    config.reload(config_file)
    validate_config(config.to_dict(), config_file=config.config_file)
    return config
