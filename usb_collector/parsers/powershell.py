"""
Парсер вывода Get-PnpDevice (Windows, PowerShell ConvertTo-Json).

ConvertTo-Json отдаёт один объект если устройство одно, иначе массив:
    [{"InstanceId": "USB\\VID_045E&PID_07A5\\6&...", "FriendlyName": "Microsoft Receiver"}]

VID/PID извлекаются из InstanceId регуляркой без учёта регистра.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from ..core.constants import HEX_PREFIX, normalize_usb_id
from ..core.models import UsbDevice

logger = logging.getLogger(__name__)

# Варианты имён полей, в порядке приоритета
INSTANCE_ID_KEYS = ("InstanceId", "InstanceID", "Instance")
NAME_KEYS = ("FriendlyName", "Name")

VID_PID_RE = re.compile(r"VID_([0-9A-F]{4}).*PID_([0-9A-F]{4})", re.IGNORECASE)


def _first_string(record: Dict[str, Any], keys: Tuple[str, ...]) -> Optional[str]:
    """Первая непустая строка по списку ключей."""
    for key in keys:
        value = record.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def parse_powershell_output(output: str) -> List[UsbDevice]:
    """
    Парсит JSON вывод Get-PnpDevice.

    Невалидный JSON: пустой список. Объекты без VID_/PID_ в InstanceId
    (корневые хабы, контроллеры) пропускаются.

    Args:
        output: Сырой вывод powershell

    Returns:
        List[UsbDevice]: Устройства в порядке вывода
    """
    devices: List[UsbDevice] = []

    try:
        parsed = json.loads(output)
    except (TypeError, ValueError) as e:
        logger.debug(f"powershell: невалидный JSON: {e}")
        return devices

    records = parsed if isinstance(parsed, list) else [parsed]

    for record in records:
        if not isinstance(record, dict):
            continue

        instance_id = _first_string(record, INSTANCE_ID_KEYS)
        if not instance_id:
            continue

        match = VID_PID_RE.search(instance_id)
        if not match:
            logger.debug(f"powershell: нет VID/PID в {instance_id!r}")
            continue

        vendor_id = normalize_usb_id(HEX_PREFIX + match.group(1))
        product_id = normalize_usb_id(HEX_PREFIX + match.group(2))
        if not vendor_id or not product_id:
            continue

        devices.append(UsbDevice(vendor_id, product_id, _first_string(record, NAME_KEYS)))

    return devices
