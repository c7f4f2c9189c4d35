"""
Domain Layer для USB Collector.

Бизнес-логика отделена от обнаружения (collectors).
Collectors только запускают команды и парсят вывод, Domain обрабатывает.

- dedupe_devices: дедупликация по ключу "vid:pid"
- UsbReconciler: сверка с файлом проекта (добавление/удаление)

Использование:
    from usb_collector.core.domain import dedupe_devices, UsbReconciler

    device_set = dedupe_devices(raw_devices)
    reconciler = UsbReconciler(existing, device_set)
"""

from .devices import dedupe_devices, build_name_map
from .reconcile import (
    ChangeType,
    DeviceChange,
    ReconcileResult,
    UsbReconciler,
    format_device_key,
)

__all__ = [
    "dedupe_devices",
    "build_name_map",
    "ChangeType",
    "DeviceChange",
    "ReconcileResult",
    "UsbReconciler",
    "format_device_key",
]
