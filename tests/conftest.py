"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- load_fixture: Загрузка захваченного вывода команд из файлов
- FakeRunner: Подмена CommandRunner с заранее заданными ответами
- ScriptedSelector: Подмена интерактивного выбора
- project_dir: Временная папка проекта со strux.json
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from usb_collector.collectors.runner import CommandResult
from usb_collector.config import ENV_PROJECT_FILE, config as app_config
from usb_collector.core.context import RunContext


class FakeRunner:
    """
    Подмена CommandRunner.

    Ответы задаются по имени команды (первый элемент списка):
        FakeRunner({"lsusb": CommandResult(["lsusb"], stdout="...")})

    Все вызовы сохраняются в calls.
    """

    def __init__(self, responses: Optional[Dict[str, CommandResult]] = None):
        self.responses = responses or {}
        self.calls: List[List[str]] = []

    def run(self, command: List[str]) -> CommandResult:
        self.calls.append(list(command))
        response = self.responses.get(command[0])
        if response is None:
            return CommandResult(command=command, stderr=f"{command[0]}: not found", exit_code=127)
        return response

    @property
    def commands(self) -> List[str]:
        """Имена запущенных команд по порядку."""
        return [call[0] for call in self.calls]


class ScriptedSelector:
    """
    Подмена ConsoleSelector.

    selections — ответы на select() по очереди; None означает
    "оставить отмеченные по умолчанию". confirms — ответы на confirm().
    """

    def __init__(self, selections=None, confirms=None):
        self.selections = list(selections or [])
        self.confirms = list(confirms or [])
        self.select_calls = []
        self.confirm_calls = []

    def select(self, message, choices):
        self.select_calls.append((message, list(choices)))
        answer = self.selections.pop(0) if self.selections else None
        if answer is None:
            return [choice.value for choice in choices if choice.selected]
        return list(answer)

    def confirm(self, message, default=False):
        self.confirm_calls.append(message)
        return self.confirms.pop(0) if self.confirms else default


@pytest.fixture
def fixtures_dir() -> Path:
    """Возвращает путь к директории fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir):
    """
    Fixture для загрузки захваченного вывода команд.

    Usage:
        output = load_fixture("linux", "lsusb.txt")

    Args:
        platform: Папка хоста (linux, macos, windows)
        filename: Имя файла с данными

    Returns:
        str: Содержимое файла
    """
    def _load(platform: str, filename: str) -> str:
        fixture_path = fixtures_dir / platform / filename
        if not fixture_path.exists():
            pytest.skip(f"Fixture не найден: {fixture_path}")
        return fixture_path.read_text(encoding="utf-8")
    return _load


@pytest.fixture
def fake_runner():
    """Фабрика FakeRunner: fake_runner({"lsusb": result})."""
    return FakeRunner


@pytest.fixture
def scripted_selector():
    """Фабрика ScriptedSelector: scripted_selector(selections=[...], confirms=[...])."""
    return ScriptedSelector


@pytest.fixture
def ok_result():
    """Фабрика успешного CommandResult."""
    def _make(command: List[str], stdout: str) -> CommandResult:
        return CommandResult(command=command, stdout=stdout, exit_code=0)
    return _make


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """
    Временная папка проекта со strux.json.

    В проекте настроено одно устройство 046d:c52b и есть посторонние поля.
    """
    document = {
        "name": "kiosk",
        "version": "0.3.1",
        "qemu": {
            "memory": "2G",
            "usb": [{"vendor_id": "046d", "product_id": "c52b"}],
        },
    }
    (tmp_path / "strux.json").write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def read_project(project_dir):
    """Читает strux.json из временной папки проекта."""
    def _read() -> dict:
        return json.loads((project_dir / "strux.json").read_text(encoding="utf-8"))
    return _read


@pytest.fixture
def run_ctx(project_dir) -> RunContext:
    """RunContext для тестов команд."""
    return RunContext.create(triggered_by="test", command="usb add", project_dir=project_dir)


def pytest_configure(config):
    """Регистрация custom markers для pytest."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (быстрые, без внешних зависимостей)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (требуют fixtures)"
    )


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Глобальная конфигурация — дефолты до и после каждого теста."""
    monkeypatch.delenv(ENV_PROJECT_FILE, raising=False)
    app_config.reset()
    yield
    app_config.reset()
