"""
Обнаружение USB устройств на текущем хосте.

Стратегия выбирается по платформе хоста:
- linux: lsusb
- darwin: system_profiler -json, при ошибке или пустом результате ioreg
- win32: PowerShell Get-PnpDevice

Пример использования:
    collector = UsbCollector()
    device_set = collector.collect_unique()   # {"046d:c52b": UsbDevice(...)}

    # Тесты: подменный runner и платформа
    collector = UsbCollector(runner=FakeRunner(...), platform="darwin")
"""

from typing import Callable, Dict, List, Optional

from ..core.constants import (
    DEFAULT_POWERSHELL,
    IOREG_COMMAND,
    LSUSB_COMMAND,
    PLATFORM_LINUX,
    PLATFORM_MACOS,
    PLATFORM_WINDOWS,
    POWERSHELL_USB_ARGS,
    SYSTEM_PROFILER_COMMAND,
    get_host_platform,
)
from ..core.domain import dedupe_devices
from ..core.logging import get_logger
from ..core.models import DeviceSet, UsbDevice
from ..parsers import USB_PARSERS
from .runner import CommandRunner

logger = get_logger(__name__)


class UsbCollector:
    """
    Запуск команды перечисления и разбор её вывода.

    Ненулевой код возврата: CommandError (кроме system_profiler,
    для которого есть fallback на ioreg). Пустой результат:
    предупреждение, не ошибка.

    Attributes:
        runner: Запуск команд (CommandRunner или подмена в тестах)
        platform: sys.platform хоста (None: текущий)
        powershell: Исполняемый файл PowerShell
    """

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        platform: Optional[str] = None,
        powershell: str = DEFAULT_POWERSHELL,
    ):
        self.runner = runner or CommandRunner()
        self.platform = platform
        self.powershell = powershell

        # Платформа хоста → стратегия
        self._strategies: Dict[str, Callable[[], List[UsbDevice]]] = {
            PLATFORM_LINUX: self._detect_linux,
            PLATFORM_MACOS: self._detect_macos,
            PLATFORM_WINDOWS: self._detect_windows,
        }

    def collect(self) -> List[UsbDevice]:
        """
        Обнаруживает устройства (с дубликатами, в порядке вывода).

        Raises:
            UnsupportedPlatformError: Нет стратегии для платформы хоста
            CommandError: Команда завершилась с ошибкой
        """
        host = get_host_platform(self.platform)
        logger.debug(f"Обнаружение USB устройств, платформа {host}", host=host)
        return self._strategies[host]()

    def collect_unique(self) -> DeviceSet:
        """Обнаруживает устройства и схлопывает дубликаты по "vid:pid"."""
        devices = self.collect()
        device_set = dedupe_devices(devices)
        logger.debug(f"Обнаружено устройств: {len(devices)}, уникальных: {len(device_set)}")
        return device_set

    def _run_and_parse(self, command: List[str], source: str) -> List[UsbDevice]:
        result = self.runner.run(command)
        result.raise_for_status()

        devices = USB_PARSERS[source](result.stdout)
        if not devices:
            logger.warning(f"USB устройства не обнаружены через {source}", source=source)
        return devices

    def _detect_linux(self) -> List[UsbDevice]:
        return self._run_and_parse(LSUSB_COMMAND, "lsusb")

    def _detect_macos(self) -> List[UsbDevice]:
        result = self.runner.run(SYSTEM_PROFILER_COMMAND)
        if result.ok:
            devices = USB_PARSERS["system_profiler"](result.stdout)
            if devices:
                return devices
            logger.debug("system_profiler не вернул устройств, пробуем ioreg", source="system_profiler")
        else:
            logger.warning(
                f"system_profiler завершился с кодом {result.exit_code}, пробуем ioreg",
                source="system_profiler",
            )

        return self._run_and_parse(IOREG_COMMAND, "ioreg")

    def _detect_windows(self) -> List[UsbDevice]:
        return self._run_and_parse([self.powershell] + POWERSHELL_USB_ARGS, "powershell")
