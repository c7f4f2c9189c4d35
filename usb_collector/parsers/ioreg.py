"""
Парсер `ioreg -p IOUSB -l -w 0` (macOS, fallback для system_profiler).

Текстовое дерево:
    +-o Root  <class IORegistryEntry, ...>
      +-o USB Receiver@14200000  <class IOUSBHostDevice, ...>
      | {
      |   "idProduct" = 50475
      |   "USB Product Name" = "USB Receiver"
      |   "idVendor" = 1133
      | }

Строка узла ("+-o", "| +-o", "| | +-o") начинает новое устройство,
предыдущее при этом сбрасывается. Строка "}" тоже сбрасывает текущее.
Значения idVendor/idProduct: "0x..." или десятичные, передаются
в нормализатор как есть.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from ..core.constants import normalize_usb_id
from ..core.models import UsbDevice

logger = logging.getLogger(__name__)

# Префиксы строк узлов дерева (по уровню вложенности)
NODE_PREFIXES = ("+-o", "| +-o", "| | +-o")

NODE_NAME_RE = re.compile(r"-o\s+(.+?)@")
VENDOR_RE = re.compile(r'"idVendor"\s*=\s*(0x[0-9a-fA-F]+|\d+)')
PRODUCT_RE = re.compile(r'"idProduct"\s*=\s*(0x[0-9a-fA-F]+|\d+)')
PRODUCT_NAME_RE = re.compile(r'"USB Product Name"\s*=\s*"(.+?)"')


@dataclass
class _PendingDevice:
    """Накопленные поля текущего узла."""
    vendor: Optional[str] = None
    product: Optional[str] = None
    name: Optional[str] = None

    def flush(self, devices: List[UsbDevice]) -> None:
        """Добавляет устройство если оба ID валидны и очищает состояние."""
        vendor_id = normalize_usb_id(self.vendor)
        product_id = normalize_usb_id(self.product)
        if vendor_id and product_id:
            devices.append(UsbDevice(vendor_id, product_id, self.name))
        elif self.vendor or self.product:
            logger.debug(f"ioreg: пропущен узел {self.name!r} (vendor={self.vendor}, product={self.product})")
        self.vendor = None
        self.product = None
        self.name = None


def parse_ioreg_output(output: str) -> List[UsbDevice]:
    """
    Парсит текстовое дерево ioreg.

    Args:
        output: Сырой вывод ioreg

    Returns:
        List[UsbDevice]: Устройства в порядке вывода
    """
    devices: List[UsbDevice] = []
    pending = _PendingDevice()

    for raw_line in (output or "").splitlines():
        line = raw_line.strip()

        if line.startswith(NODE_PREFIXES):
            pending.flush(devices)
            name_match = NODE_NAME_RE.search(line)
            if name_match:
                pending.name = name_match.group(1).strip()
            continue

        vendor_match = VENDOR_RE.search(line)
        if vendor_match:
            pending.vendor = vendor_match.group(1)

        product_match = PRODUCT_RE.search(line)
        if product_match:
            pending.product = product_match.group(1)

        name_match = PRODUCT_NAME_RE.search(line)
        if name_match:
            pending.name = name_match.group(1)

        if line == "}":
            pending.flush(devices)

    # Последний узел без закрывающей "}"
    pending.flush(devices)
    return devices
