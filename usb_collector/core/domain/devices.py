"""
Domain logic для обнаруженных USB устройств.

Дедупликация по ключу "vid:pid". Не зависит от ОС и команд,
работает с тем, что вернули парсеры.
"""

import logging
from typing import Dict, Iterable

from ..constants import canonical_usb_id, make_device_key
from ..models import DeviceSet, UsbDevice

logger = logging.getLogger(__name__)


def dedupe_devices(devices: Iterable[UsbDevice]) -> DeviceSet:
    """
    Схлопывает устройства с одинаковым ключом "vid:pid".

    Два одинаковых устройства дают один ключ. Побеждает первое
    вхождение (вместе с его description), порядок сохраняется.
    Идентификаторы нормализуются повторно, записи с невалидными
    идентификаторами отбрасываются.

    Args:
        devices: Устройства от парсера (в порядке вывода)

    Returns:
        DeviceSet: Ключ → устройство
    """
    result: DeviceSet = {}

    for device in devices:
        vendor_id = canonical_usb_id(device.vendor_id)
        product_id = canonical_usb_id(device.product_id)
        if not vendor_id or not product_id:
            logger.debug(f"Пропущено устройство с невалидным ID: {device.vendor_id}:{device.product_id}")
            continue

        key = make_device_key(vendor_id, product_id)
        if key in result:
            continue

        result[key] = UsbDevice(vendor_id, product_id, device.description)

    return result


def build_name_map(device_set: DeviceSet) -> Dict[str, str]:
    """Ключ → имя устройства (только для устройств с именем)."""
    return {
        key: device.description
        for key, device in device_set.items()
        if device.description
    }
