"""
Domain Layer для сверки USB устройств с файлом проекта.

Чистые функции сравнения, не зависят от ОС, файлов и ввода оператора.
Определяют что добавлено, что удалено и каким будет новый список.

Пример использования:
    from usb_collector.core.domain.reconcile import UsbReconciler

    reconciler = UsbReconciler(existing=project.get_usb_devices(), detected=device_set)
    choices = reconciler.build_choices()
    selection = selector.select("Select USB devices", choices)

    result = reconciler.reconcile(selection)
    print(result.summary())          # "usb: +1 add, -1 remove"
    if result.has_changes:
        project.set_usb_devices(result.devices)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from ..models import DeviceSet, PersistedUsbDevice, SelectionChoice, UsbDevice
from .devices import build_name_map

SUFFIX_CONFIGURED = " [configured]"
SUFFIX_NEW = " [new]"


class ChangeType(str, Enum):
    """Тип изменения."""
    ADD = "add"
    REMOVE = "remove"
    # Ключ не прошёл повторную нормализацию и исключён из списка.
    # Это не удаление: устройства с таким ключом в файле не было.
    DROP = "drop"


def format_device_key(key: str, name: Optional[str] = None) -> str:
    """
    Ключ для отчёта: "046d:c52b (Logitech USB Receiver)" или "046d:c52b".
    """
    return f"{key} ({name})" if name else key


@dataclass
class DeviceChange:
    """
    Изменение одного устройства.

    Attributes:
        key: Ключ "vid:pid"
        change_type: add/remove/drop
        name: Имя устройства из текущего обнаружения (если есть)
    """
    key: str
    change_type: ChangeType
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return format_device_key(self.key, self.name)

    def __str__(self) -> str:
        if self.change_type == ChangeType.ADD:
            return f"+ {self.label}"
        elif self.change_type == ChangeType.REMOVE:
            return f"- {self.label}"
        else:
            return f"! {self.label} (invalid id, skipped)"

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь."""
        return {
            "key": self.key,
            "change_type": self.change_type.value,
            "name": self.name,
        }


@dataclass
class ReconcileResult:
    """
    Результат сверки.

    Новый список вычисляется полностью до записи в файл.

    Attributes:
        existing_keys: Ключи из файла проекта (в порядке файла)
        devices: Новый список для файла проекта
        added: Выбранные устройства, которых не было в файле
        removed: Устройства из файла, которые не выбраны
        dropped: Выбранные ключи, не прошедшие нормализацию
        no_selection: Оператор ничего не выбрал, файл не трогаем
    """
    existing_keys: List[str] = field(default_factory=list)
    devices: List[PersistedUsbDevice] = field(default_factory=list)
    added: List[DeviceChange] = field(default_factory=list)
    removed: List[DeviceChange] = field(default_factory=list)
    dropped: List[DeviceChange] = field(default_factory=list)
    no_selection: bool = False

    @property
    def final_keys(self) -> List[str]:
        return [device.key for device in self.devices]

    @property
    def total_changes(self) -> int:
        """Количество добавленных и удалённых устройств."""
        return len(self.added) + len(self.removed)

    @property
    def has_changes(self) -> bool:
        """Нужно ли перезаписывать файл проекта."""
        if self.no_selection:
            return False
        return self.total_changes > 0

    def summary(self) -> str:
        """Краткая сводка изменений."""
        if self.no_selection:
            return "usb: nothing selected, no changes"

        parts = []
        if self.added:
            parts.append(f"+{len(self.added)} add")
        if self.removed:
            parts.append(f"-{len(self.removed)} remove")
        if self.dropped:
            parts.append(f"!{len(self.dropped)} dropped")

        if not parts:
            return "usb: no changes"

        return f"usb: {', '.join(parts)}"

    def format_detailed(self) -> str:
        """Детальный вывод изменений."""
        lines = [self.summary(), ""]

        if self.added:
            lines.append("ADD:")
            for change in self.added:
                lines.append(f"  {change}")

        if self.removed:
            lines.append("REMOVE:")
            for change in self.removed:
                lines.append(f"  {change}")

        if self.dropped:
            lines.append("DROPPED:")
            for change in self.dropped:
                lines.append(f"  {change}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь."""
        return {
            "devices": [device.to_dict() for device in self.devices],
            "added": [c.to_dict() for c in self.added],
            "removed": [c.to_dict() for c in self.removed],
            "dropped": [c.to_dict() for c in self.dropped],
            "no_selection": self.no_selection,
        }


class UsbReconciler:
    """
    Сверка настроенных и обнаруженных USB устройств.

    Два режима:
    - reconcile: выбор из объединения (настроенные + обнаруженные),
      новый список = выбранное
    - reconcile_removal: выбор из настроенных что удалить,
      новый список = настроенные минус выбранное

    Example:
        reconciler = UsbReconciler(existing, detected)
        result = reconciler.reconcile(["046d:c52b", "045e:07a5"])
        for change in result.added:
            print(change)  # "+ 045e:07a5 (Microsoft Receiver)"
    """

    def __init__(
        self,
        existing: Iterable[PersistedUsbDevice],
        detected: Optional[DeviceSet] = None,
    ):
        """
        Args:
            existing: Устройства из файла проекта
            detected: Обнаруженные устройства (после дедупликации)
        """
        self.detected: DeviceSet = dict(detected or {})
        self.names = build_name_map(self.detected)

        # Ключи файла проекта без повторов, в порядке файла
        self.existing: Dict[str, PersistedUsbDevice] = {}
        for entry in existing:
            self.existing.setdefault(entry.key, entry)

    @property
    def existing_keys(self) -> List[str]:
        return list(self.existing)

    def _label(self, key: str, suffix: str = "") -> str:
        device = self.existing.get(key) or self.detected.get(key)
        return UsbDevice(device.vendor_id, device.product_id, self.names.get(key)).format_label(suffix)

    def build_choices(self) -> List[SelectionChoice]:
        """
        Варианты для выбора: сначала настроенные (выбраны), затем новые.

        Returns:
            List[SelectionChoice]: Объединение настроенных и обнаруженных
        """
        choices = [
            SelectionChoice(title=self._label(key, SUFFIX_CONFIGURED), value=key, selected=True)
            for key in self.existing
        ]
        choices.extend(
            SelectionChoice(title=self._label(key, SUFFIX_NEW), value=key, selected=False)
            for key in self.detected
            if key not in self.existing
        )
        return choices

    def build_removal_choices(self) -> List[SelectionChoice]:
        """Варианты для удаления: только настроенные, ничего не выбрано."""
        return [
            SelectionChoice(title=self._label(key), value=key, selected=False)
            for key in self.existing
        ]

    def reconcile(self, selection: Iterable[str]) -> ReconcileResult:
        """
        Новый список = выбранные ключи.

        added = выбранные − настроенные, removed = настроенные − выбранные.
        Ключ, не прошедший нормализацию, попадает в dropped и в файл не пишется.
        Пустой выбор: no_selection, файл не меняется.

        Args:
            selection: Ключи "vid:pid", выбранные оператором

        Returns:
            ReconcileResult
        """
        selected = list(dict.fromkeys(selection))
        result = ReconcileResult(existing_keys=self.existing_keys)

        if not selected:
            result.no_selection = True
            result.devices = list(self.existing.values())
            return result

        final: Dict[str, PersistedUsbDevice] = {}
        for key in selected:
            entry = PersistedUsbDevice.from_key(key)
            if entry is None:
                result.dropped.append(DeviceChange(key, ChangeType.DROP))
                continue
            final.setdefault(entry.key, entry)

        result.devices = list(final.values())

        for key in final:
            if key not in self.existing:
                result.added.append(DeviceChange(key, ChangeType.ADD, self.names.get(key)))

        for key in self.existing:
            if key not in final:
                result.removed.append(DeviceChange(key, ChangeType.REMOVE, self.names.get(key)))

        return result

    def reconcile_removal(self, selected_for_removal: Iterable[str]) -> ReconcileResult:
        """
        Новый список = настроенные − выбранные для удаления.

        Ничего не выбрано: no_selection, файл не меняется.

        Args:
            selected_for_removal: Ключи "vid:pid" для удаления

        Returns:
            ReconcileResult
        """
        to_remove = set(selected_for_removal)
        result = ReconcileResult(existing_keys=self.existing_keys)

        if not to_remove:
            result.no_selection = True
            result.devices = list(self.existing.values())
            return result

        for key, entry in self.existing.items():
            if key in to_remove:
                result.removed.append(DeviceChange(key, ChangeType.REMOVE, self.names.get(key)))
            else:
                result.devices.append(entry)

        return result
