"""
Парсеры вывода команд перечисления USB устройств.

Каждый парсер: функция parse(output) -> List[UsbDevice]:
- parse_lsusb_output: lsusb (Linux, TextFSM шаблон)
- parse_system_profiler_output: system_profiler SPUSBDataType -json (macOS)
- parse_ioreg_output: ioreg -p IOUSB (macOS, fallback)
- parse_powershell_output: Get-PnpDevice | ConvertTo-Json (Windows)

Парсеры никогда не бросают исключений на битом вводе: невалидная
строка или запись пропускается, невалидный JSON даёт пустой список.

Пример использования:
    from usb_collector.parsers import USB_PARSERS

    devices = USB_PARSERS["lsusb"](raw_output)
"""

from typing import Callable, Dict, List

from ..core.models import UsbDevice
from .ioreg import parse_ioreg_output
from .lsusb import parse_lsusb_output
from .powershell import parse_powershell_output
from .system_profiler import parse_system_profiler_output

# Источник вывода → парсер
USB_PARSERS: Dict[str, Callable[[str], List[UsbDevice]]] = {
    "lsusb": parse_lsusb_output,
    "system_profiler": parse_system_profiler_output,
    "ioreg": parse_ioreg_output,
    "powershell": parse_powershell_output,
}

__all__ = [
    "USB_PARSERS",
    "parse_lsusb_output",
    "parse_system_profiler_output",
    "parse_ioreg_output",
    "parse_powershell_output",
]
