"""
USB Collector - обнаружение USB устройств для проброса в виртуальную машину.

Модуль предоставляет:
- Обнаружение USB устройств на Linux (lsusb), macOS (system_profiler/ioreg)
  и Windows (PowerShell Get-PnpDevice)
- Нормализацию VID/PID к виду "046d"
- Сверку обнаруженных устройств со списком в strux.json

Примеры использования:
    # CLI
    python -m usb_collector usb
    python -m usb_collector usb list

    # Python API
    from usb_collector import UsbCollector, UsbReconciler

    detected = UsbCollector().collect_unique()
    reconciler = UsbReconciler(existing=[], detected=detected)
    result = reconciler.reconcile(list(detected))
"""

__version__ = "1.0.0"

from .collectors import UsbCollector
from .core.domain import UsbReconciler, dedupe_devices
from .core.constants import normalize_usb_id

__all__ = [
    "UsbCollector",
    "UsbReconciler",
    "dedupe_devices",
    "normalize_usb_id",
]
