"""
Интерактивный выбор в консоли.

Оператору показывается нумерованный список, выбор номерами:
    Select USB devices (Enter: оставить отмеченные, 0: ничего):
      1. [x] USB Receiver (046d:c52b) [configured]
      2. [ ] Microsoft Receiver (045e:07a5) [new]
    > 1 2

Команды получают selector аргументом, в тестах подменяется.
"""

import re
from typing import Callable, List, Optional

from ..core.models import SelectionChoice

SPLIT_RE = re.compile(r"[,\s]+")

NONE_ANSWERS = ("0", "-", "none")
YES_ANSWERS = ("y", "yes", "д", "да")
NO_ANSWERS = ("n", "no", "н", "нет")


class ConsoleSelector:
    """
    Выбор через input()/print().

    Attributes:
        input_func: Функция чтения строки (по умолчанию input)
        output_func: Функция вывода (по умолчанию print)
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[..., None] = print,
    ):
        self.input_func = input_func
        self.output_func = output_func

    def _parse_numbers(self, answer: str, count: int) -> Optional[List[int]]:
        numbers = []
        for part in SPLIT_RE.split(answer.strip()):
            if not part:
                continue
            if not part.isdigit():
                return None
            number = int(part)
            if number < 1 or number > count:
                return None
            if number not in numbers:
                numbers.append(number)
        return numbers

    def select(self, message: str, choices: List[SelectionChoice]) -> List[str]:
        """
        Множественный выбор.

        Пустой ввод оставляет отмеченные по умолчанию, "0": ничего не выбрано.
        Конец ввода (Ctrl+D): ничего не выбрано.

        Args:
            message: Заголовок
            choices: Варианты

        Returns:
            List[str]: value выбранных вариантов в порядке списка
        """
        if not choices:
            return []

        self.output_func(f"{message} (Enter: оставить отмеченные, 0: ничего):")
        for index, choice in enumerate(choices, 1):
            mark = "x" if choice.selected else " "
            self.output_func(f"  {index}. [{mark}] {choice.title}")

        while True:
            try:
                answer = self.input_func("> ").strip().lower()
            except EOFError:
                return []

            if not answer:
                return [choice.value for choice in choices if choice.selected]
            if answer in NONE_ANSWERS:
                return []

            numbers = self._parse_numbers(answer, len(choices))
            if numbers is None:
                self.output_func(f"Введите номера от 1 до {len(choices)} через пробел или запятую")
                continue

            return [choice.value for index, choice in enumerate(choices, 1) if index in numbers]

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Вопрос да/нет.

        Args:
            message: Вопрос
            default: Ответ на пустой ввод

        Returns:
            bool
        """
        hint = "[Y/n]" if default else "[y/N]"
        while True:
            try:
                answer = self.input_func(f"{message} {hint}: ").strip().lower()
            except EOFError:
                return default

            if not answer:
                return default
            if answer in YES_ANSWERS:
                return True
            if answer in NO_ANSWERS:
                return False
