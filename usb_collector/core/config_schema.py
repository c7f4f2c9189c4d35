"""
Pydantic схемы для валидации config.yaml.

Валидация происходит при загрузке конфигурации.
Ошибки валидации выбрасывают ConfigError.

Пример использования:
    from usb_collector.core.config_schema import validate_config

    config_dict = yaml.safe_load(open("config.yaml"))
    validated = validate_config(config_dict)  # raises ConfigError on failure
"""

from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .exceptions import ConfigError


class ProjectSection(BaseModel):
    """Где в проекте хранится список USB устройств."""
    config_file: str = "strux.json"
    section: str = Field(default="qemu", min_length=1)
    usb_field: str = Field(default="usb", min_length=1)

    @field_validator("config_file")
    @classmethod
    def validate_config_file(cls, v: str) -> str:
        """Имя файла, а не путь: файл ищется в папке проекта."""
        if not v or "/" in v or "\\" in v:
            raise PydanticCustomError(
                "invalid_config_file",
                "project.config_file должен быть именем файла без пути",
            )
        return v


class DetectionConfig(BaseModel):
    """Настройки обнаружения USB устройств."""
    # None: без таймаута
    command_timeout: Optional[float] = Field(default=None, gt=0)
    powershell: str = Field(default="powershell.exe", min_length=1)


class LoggingConfig(BaseModel):
    """Настройки логирования."""
    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    json_format: bool = False
    console: bool = True
    file_path: Optional[str] = None
    rotation: str = Field(default="size", pattern="^(size|time|none)$")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)  # min 1KB
    backup_count: int = Field(default=5, ge=1, le=100)
    when: str = "midnight"
    interval: int = Field(default=1, ge=1)


class AppConfig(BaseModel):
    """Полная конфигурация приложения."""
    project: ProjectSection = Field(default_factory=ProjectSection)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config_dict: dict, config_file: Optional[str] = None) -> AppConfig:
    """
    Валидирует словарь конфигурации.

    Args:
        config_dict: Словарь из YAML (смерженный с дефолтами)
        config_file: Путь к файлу (для сообщения об ошибке)

    Returns:
        AppConfig: Валидированная конфигурация

    Raises:
        ConfigError: При ошибке валидации
    """
    try:
        return AppConfig(**config_dict)
    except ValidationError as e:
        error_msg = str(e)
        key = None
        errors = e.errors()
        if errors:
            first_error = errors[0]
            key = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", "Unknown error")
            error_msg = f"{key}: {msg}"

        raise ConfigError(
            message=f"Ошибка валидации конфигурации: {error_msg}",
            config_file=config_file or "config.yaml",
            key=key,
        )
