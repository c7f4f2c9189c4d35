"""
Data Models для USB Collector.

Типизированные dataclasses вместо Dict[str, Any].

Использование:
    from usb_collector.core.models import UsbDevice, PersistedUsbDevice

    # Создаётся парсером
    device = UsbDevice("046d", "c52b", "USB Receiver")

    # Ключ для дедупликации и diff
    print(device.key)  # "046d:c52b"

    # Форма для strux.json (без description)
    entry = PersistedUsbDevice.from_key(device.key)
    data = entry.to_dict()  # {"vendor_id": "046d", "product_id": "c52b"}
"""

from dataclasses import dataclass
from typing import Optional, Dict

from .constants import make_device_key, split_device_key

# Подпись по умолчанию для устройств без имени
DEFAULT_DEVICE_LABEL: str = "USB device"


@dataclass
class UsbDevice:
    """
    Обнаруженное USB устройство.

    Создаётся парсером только если оба идентификатора валидны.

    Attributes:
        vendor_id: VID (4 hex, нижний регистр)
        product_id: PID (4 hex, нижний регистр)
        description: Имя устройства (если ОС его сообщила)
    """
    vendor_id: str
    product_id: str
    description: Optional[str] = None

    @property
    def key(self) -> str:
        """Ключ устройства "vid:pid"."""
        return make_device_key(self.vendor_id, self.product_id)

    def format_label(self, suffix: str = "") -> str:
        """
        Подпись для меню выбора.

        Args:
            suffix: Суффикс (" [configured]", " [new]")

        Returns:
            str: "Logitech USB Receiver (046d:c52b) [new]"
        """
        label = self.description or DEFAULT_DEVICE_LABEL
        return f"{label} ({self.key}){suffix}"


@dataclass(frozen=True)
class PersistedUsbDevice:
    """
    Запись USB устройства в файле проекта.

    Имя устройства не сохраняется, оно определяется заново при каждом запуске.

    Attributes:
        vendor_id: VID (4 hex, нижний регистр)
        product_id: PID (4 hex, нижний регистр)
    """
    vendor_id: str
    product_id: str

    @property
    def key(self) -> str:
        """Ключ устройства "vid:pid"."""
        return make_device_key(self.vendor_id, self.product_id)

    @classmethod
    def from_key(cls, key: str) -> Optional["PersistedUsbDevice"]:
        """
        Создаёт запись из ключа "vid:pid" с повторной нормализацией.

        Returns:
            PersistedUsbDevice или None если ключ не проходит нормализацию
        """
        parts = split_device_key(key)
        if parts is None:
            return None
        return cls(vendor_id=parts[0], product_id=parts[1])

    def to_dict(self) -> Dict[str, str]:
        """Форма для strux.json."""
        return {"vendor_id": self.vendor_id, "product_id": self.product_id}


@dataclass
class SelectionChoice:
    """
    Вариант в меню выбора.

    Attributes:
        title: Подпись для оператора
        value: Ключ устройства
        selected: Выбран по умолчанию
    """
    title: str
    value: str
    selected: bool = False


# Набор устройств: ключ → устройство, порядок вставки сохраняется
DeviceSet = Dict[str, UsbDevice]
