"""
Парсер вывода lsusb (Linux).

Формат строки:
    Bus 001 Device 003: ID 046d:c52b Logitech, Inc. Unifying Receiver

ID всегда в hex, поэтому в нормализатор передаётся с префиксом 0x.
Строки без "ID xxxx:xxxx" игнорируются.
"""

import logging
from typing import List

from ..core.constants import HEX_PREFIX, normalize_usb_id
from ..core.models import UsbDevice
from .textfsm_parser import parse_with_template

logger = logging.getLogger(__name__)

LSUSB_TEMPLATE = "linux_lsusb.textfsm"


def parse_lsusb_output(output: str) -> List[UsbDevice]:
    """
    Парсит вывод lsusb.

    Args:
        output: Сырой вывод lsusb

    Returns:
        List[UsbDevice]: Устройства в порядке вывода (с дубликатами)
    """
    devices = []

    for row in parse_with_template(output, LSUSB_TEMPLATE):
        vendor_id = normalize_usb_id(HEX_PREFIX + row.get("vendor_id", ""))
        product_id = normalize_usb_id(HEX_PREFIX + row.get("product_id", ""))
        if not vendor_id or not product_id:
            logger.debug(f"lsusb: пропущена запись {row}")
            continue

        description = (row.get("description") or "").strip() or None
        devices.append(UsbDevice(vendor_id, product_id, description))

    return devices
