"""
Парсер `system_profiler SPUSBDataType -json` (macOS).

Структура вывода (дерево):
    {"SPUSBDataType": [
        {"_name": "USB31Bus", "_items": [
            {"_name": "USB Receiver", "vendor_id": "0x046d  (Logitech Inc.)",
             "product_id": "0xc52b", "_items": [...]}
        ]}
    ]}

Хабы и контроллеры без VID/PID пропускаются, но их дети обходятся.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.constants import normalize_usb_id
from ..core.models import UsbDevice

logger = logging.getLogger(__name__)

ROOT_KEY = "SPUSBDataType"

# Варианты имён полей, в порядке приоритета
VENDOR_ID_KEYS = ("vendor_id", "idVendor", "vendor-id")
PRODUCT_ID_KEYS = ("product_id", "idProduct", "product-id")
NAME_KEY = "_name"
CHILDREN_KEYS = ("_items", "items")

# Защита от бесконечной рекурсии на патологическом JSON
MAX_TREE_DEPTH = 32


def _get_value(record: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[Union[str, int, float]]:
    """Первое значение-строка или число по списку ключей."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return value
    return None


def _walk(items: List[Any], devices: List[UsbDevice], depth: int) -> None:
    if depth > MAX_TREE_DEPTH:
        logger.warning(f"system_profiler: превышена глубина дерева ({MAX_TREE_DEPTH}), ветка пропущена")
        return

    for item in items:
        if not isinstance(item, dict):
            continue

        vendor_id = normalize_usb_id(_get_value(item, VENDOR_ID_KEYS))
        product_id = normalize_usb_id(_get_value(item, PRODUCT_ID_KEYS))
        name = item.get(NAME_KEY)
        description = name if isinstance(name, str) else None

        if vendor_id and product_id:
            devices.append(UsbDevice(vendor_id, product_id, description))

        for children_key in CHILDREN_KEYS:
            children = item.get(children_key)
            if isinstance(children, list):
                _walk(children, devices, depth + 1)
                break


def parse_system_profiler_output(output: str) -> List[UsbDevice]:
    """
    Парсит JSON вывод system_profiler.

    Невалидный JSON или отсутствие SPUSBDataType: пустой список.

    Args:
        output: Сырой вывод system_profiler

    Returns:
        List[UsbDevice]: Устройства в порядке обхода дерева
    """
    devices: List[UsbDevice] = []

    try:
        parsed = json.loads(output)
    except (TypeError, ValueError, RecursionError) as e:
        logger.debug(f"system_profiler: невалидный JSON: {e}")
        return devices

    root = parsed.get(ROOT_KEY) if isinstance(parsed, dict) else None
    if not isinstance(root, list):
        logger.debug(f"system_profiler: нет массива {ROOT_KEY}")
        return devices

    _walk(root, devices, depth=0)
    return devices
