"""
Файл проекта (strux.json), граница хранения списка USB устройств.

Файл читается один раз в начале команды и записывается не больше
одного раза в конце, целиком. Кроме списка устройств ничего не меняется.

Структура (интересующая часть):
    {
      "name": "my-app",
      "qemu": {
        "usb": [{"vendor_id": "046d", "product_id": "c52b"}]
      }
    }

Пример использования:
    project = load_project_config(Path("."))
    existing = project.get_usb_devices()
    project.set_usb_devices(result.devices)
    project.save()
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .constants import canonical_usb_id
from .exceptions import (
    ProjectConfigError,
    ProjectConfigMalformedError,
    ProjectConfigNotFoundError,
)
from .models import PersistedUsbDevice

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_FILE = "strux.json"
DEFAULT_SECTION = "qemu"
DEFAULT_USB_FIELD = "usb"


class ProjectConfig:
    """
    Загруженный файл проекта.

    Attributes:
        path: Путь к файлу
        data: Документ целиком
        section: Объект со списком устройств ("qemu")
        usb_field: Поле списка ("usb")
    """

    def __init__(
        self,
        path: Path,
        data: Dict[str, Any],
        section: str = DEFAULT_SECTION,
        usb_field: str = DEFAULT_USB_FIELD,
    ):
        self.path = Path(path)
        self.data = data
        self.section = section
        self.usb_field = usb_field

    @property
    def name(self) -> str:
        return self.path.name

    def _raw_entries(self) -> List[Any]:
        section = self.data.get(self.section)
        if section is None:
            return []
        if not isinstance(section, dict):
            logger.warning(f"{self.name}: '{self.section}' не объект, список USB пуст")
            return []
        entries = section.get(self.usb_field)
        if entries is None:
            return []
        if not isinstance(entries, list):
            logger.warning(f"{self.name}: '{self.section}.{self.usb_field}' не массив, список USB пуст")
            return []
        return entries

    def get_usb_devices(self) -> List[PersistedUsbDevice]:
        """
        Настроенные устройства с нормализацией идентификаторов.

        Исторические записи ("0x046D", 1133) приводятся к канонической
        форме. Записи, где VID или PID не распознаны, пропускаются.

        Returns:
            List[PersistedUsbDevice]: В порядке файла
        """
        devices = []

        for entry in self._raw_entries():
            if not isinstance(entry, dict):
                logger.warning(f"{self.name}: пропущена запись USB {entry!r}")
                continue

            vendor_id = canonical_usb_id(entry.get("vendor_id"))
            product_id = canonical_usb_id(entry.get("product_id"))
            if not vendor_id or not product_id:
                logger.warning(f"{self.name}: пропущена запись USB с невалидным ID {entry!r}")
                continue

            devices.append(PersistedUsbDevice(vendor_id, product_id))

        return devices

    def set_usb_devices(self, devices: Iterable[PersistedUsbDevice]) -> None:
        """
        Заменяет список устройств целиком (в памяти, без записи).

        Raises:
            ProjectConfigMalformedError: Секция есть, но это не объект
        """
        section = self.data.setdefault(self.section, {})
        if not isinstance(section, dict):
            raise ProjectConfigMalformedError(
                f"'{self.section}' in {self.name} is not an object",
                config_file=str(self.path),
                key=self.section,
            )
        section[self.usb_field] = [device.to_dict() for device in devices]

    def needs_rewrite(self, devices: Iterable[PersistedUsbDevice]) -> bool:
        """
        Отличается ли записанный список от канонической формы devices.

        Исторические записи ("0x046D", 50475), дубликаты и невалидные
        записи дают True даже при том же наборе ключей.
        """
        section = self.data.get(self.section)
        current = section.get(self.usb_field) if isinstance(section, dict) else None
        return current != [device.to_dict() for device in devices]

    def to_json(self) -> str:
        """Документ в форме для записи: отступ 2 и перевод строки в конце."""
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    def save(self) -> None:
        """
        Записывает документ целиком.

        Raises:
            ProjectConfigError: Ошибка записи
        """
        try:
            self.path.write_text(self.to_json(), encoding="utf-8")
        except OSError as e:
            raise ProjectConfigError(f"Cannot write {self.name}: {e}", config_file=str(self.path))
        logger.debug(f"Записан {self.path}")


def load_project_config(
    project_dir: Optional[Path] = None,
    filename: str = DEFAULT_PROJECT_FILE,
    section: str = DEFAULT_SECTION,
    usb_field: str = DEFAULT_USB_FIELD,
) -> ProjectConfig:
    """
    Читает файл проекта из папки проекта.

    Args:
        project_dir: Папка проекта (default: текущая)
        filename: Имя файла проекта
        section: Объект со списком устройств
        usb_field: Поле списка

    Returns:
        ProjectConfig

    Raises:
        ProjectConfigNotFoundError: Файла нет
        ProjectConfigMalformedError: Не JSON или не JSON-объект
        ProjectConfigError: Файл не читается
    """
    path = Path(project_dir or Path.cwd()) / filename

    if not path.is_file():
        raise ProjectConfigNotFoundError(config_file=str(path))

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectConfigError(f"Cannot read {filename}: {e}", config_file=str(path))

    try:
        data = json.loads(content)
    except ValueError as e:
        raise ProjectConfigMalformedError(
            f"{filename} is not valid JSON: {e}",
            config_file=str(path),
        )

    if not isinstance(data, dict):
        raise ProjectConfigMalformedError(
            f"{filename} must contain a JSON object",
            config_file=str(path),
        )

    logger.debug(f"Загружен {path}")
    return ProjectConfig(path, data, section=section, usb_field=usb_field)
