"""
Константы USB Collector.

Модули:
- usb_ids: нормализация VID/PID, ключи устройств
- platforms: платформы хоста и команды перечисления USB
"""

from .usb_ids import (
    USB_ID_WIDTH,
    HEX_PREFIX,
    AMBIGUOUS_DECIMAL_THRESHOLD,
    DEVICE_KEY_SEPARATOR,
    normalize_usb_id,
    canonical_usb_id,
    make_device_key,
    split_device_key,
)
from .platforms import (
    PLATFORM_LINUX,
    PLATFORM_MACOS,
    PLATFORM_WINDOWS,
    LSUSB_COMMAND,
    SYSTEM_PROFILER_COMMAND,
    IOREG_COMMAND,
    POWERSHELL_USB_ARGS,
    DEFAULT_POWERSHELL,
    get_host_platform,
)

__all__ = [
    # usb_ids
    "USB_ID_WIDTH",
    "HEX_PREFIX",
    "AMBIGUOUS_DECIMAL_THRESHOLD",
    "DEVICE_KEY_SEPARATOR",
    "normalize_usb_id",
    "canonical_usb_id",
    "make_device_key",
    "split_device_key",
    # platforms
    "PLATFORM_LINUX",
    "PLATFORM_MACOS",
    "PLATFORM_WINDOWS",
    "LSUSB_COMMAND",
    "SYSTEM_PROFILER_COMMAND",
    "IOREG_COMMAND",
    "POWERSHELL_USB_ARGS",
    "DEFAULT_POWERSHELL",
    "get_host_platform",
]
