"""
Обнаружение USB устройств.

- CommandRunner: запуск команды перечисления (subprocess)
- UsbCollector: выбор стратегии по платформе хоста, парсинг вывода
"""

from .runner import CommandResult, CommandRunner
from .usb import UsbCollector

__all__ = ["CommandResult", "CommandRunner", "UsbCollector"]
