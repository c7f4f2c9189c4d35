"""
Платформы хоста и команды перечисления USB.

Linux: lsusb, macOS: system_profiler (fallback ioreg),
Windows: PowerShell Get-PnpDevice.
"""

import sys
from typing import Dict, List, Optional

from ..exceptions import UnsupportedPlatformError

# =============================================================================
# ПЛАТФОРМЫ ХОСТА
# =============================================================================

PLATFORM_LINUX: str = "linux"
PLATFORM_MACOS: str = "darwin"
PLATFORM_WINDOWS: str = "win32"

# Префикс sys.platform → платформа
# cygwin/msys ставят PowerShell из Windows, поэтому тоже win32
HOST_PLATFORM_PREFIXES: Dict[str, str] = {
    "linux": PLATFORM_LINUX,
    "darwin": PLATFORM_MACOS,
    "win32": PLATFORM_WINDOWS,
    "cygwin": PLATFORM_WINDOWS,
    "msys": PLATFORM_WINDOWS,
}


# =============================================================================
# КОМАНДЫ ПЕРЕЧИСЛЕНИЯ USB
# =============================================================================

LSUSB_COMMAND: List[str] = ["lsusb"]

SYSTEM_PROFILER_COMMAND: List[str] = ["system_profiler", "SPUSBDataType", "-json"]

IOREG_COMMAND: List[str] = ["ioreg", "-p", "IOUSB", "-l", "-w", "0"]

# Аргументы PowerShell (исполняемый файл берётся из config.detection.powershell)
POWERSHELL_USB_ARGS: List[str] = [
    "-NoLogo",
    "-NoProfile",
    "-Command",
    "Get-PnpDevice -Class USB -PresentOnly | "
    "Select-Object InstanceId,FriendlyName | "
    "ConvertTo-Json -Compress",
]

DEFAULT_POWERSHELL: str = "powershell.exe"


def get_host_platform(platform: Optional[str] = None) -> str:
    """
    Определяет платформу хоста для выбора стратегии обнаружения.

    Args:
        platform: Значение sys.platform (по умолчанию текущее)

    Returns:
        str: linux / darwin / win32

    Raises:
        UnsupportedPlatformError: Если платформа неизвестна

    Examples:
        >>> get_host_platform("linux2")
        'linux'
        >>> get_host_platform("cygwin")
        'win32'
    """
    raw = platform if platform is not None else sys.platform
    for prefix, host in HOST_PLATFORM_PREFIXES.items():
        if raw.lower().startswith(prefix):
            return host
    raise UnsupportedPlatformError(platform=raw)
