"""
Тесты команд usb add / usb list.

Обнаружение — через FakeRunner с захваченным выводом lsusb,
выбор — через ScriptedSelector. Файл проекта — во временной папке.
"""

from argparse import Namespace

import pytest

from usb_collector.cli.commands import cmd_usb_add, cmd_usb_list
from usb_collector.collectors import CommandResult, UsbCollector
from usb_collector.core.constants import LSUSB_COMMAND
from usb_collector.core.context import RunContext
from usb_collector.core.exceptions import ProjectConfigNotFoundError


@pytest.fixture
def linux_collector(fake_runner, ok_result, load_fixture):
    """Коллектор Linux, lsusb отдаёт захваченный вывод."""
    runner = fake_runner({"lsusb": ok_result(LSUSB_COMMAND, load_fixture("linux", "lsusb.txt"))})
    return UsbCollector(runner=runner, platform="linux")


def _usb_keys(document: dict) -> list:
    return [f"{d['vendor_id']}:{d['product_id']}" for d in document["qemu"]["usb"]]


class TestUsbAdd:
    """usb add: обнаружение, выбор, запись."""

    def test_choices_offered(self, run_ctx, linux_collector, scripted_selector):
        selector = scripted_selector(selections=[None])
        cmd_usb_add(Namespace(), run_ctx, linux_collector, selector)

        message, choices = selector.select_calls[0]
        assert message == "Select USB devices to pass through"
        assert [c.value for c in choices] == [
            "046d:c52b", "1d6b:0003", "0bda:5411", "0781:5581", "1a86:7523", "1d6b:0002",
        ]
        assert choices[0].selected
        assert choices[0].title.endswith("(046d:c52b) [configured]")
        assert not any(c.selected for c in choices[1:])
        assert choices[4].title == "USB device (1a86:7523) [new]"

    def test_add_device(self, run_ctx, linux_collector, scripted_selector, read_project, capsys):
        selector = scripted_selector(selections=[["046d:c52b", "0781:5581"]])
        cmd_usb_add(Namespace(), run_ctx, linux_collector, selector)

        document = read_project()
        assert _usb_keys(document) == ["046d:c52b", "0781:5581"]
        assert document["qemu"]["usb"][1] == {"vendor_id": "0781", "product_id": "5581"}
        assert "Updated strux.json (2 devices selected)" in capsys.readouterr().out

    def test_other_fields_preserved(self, run_ctx, linux_collector, scripted_selector, read_project):
        selector = scripted_selector(selections=[["0bda:5411"]])
        cmd_usb_add(Namespace(), run_ctx, linux_collector, selector)

        document = read_project()
        assert document["name"] == "kiosk"
        assert document["version"] == "0.3.1"
        assert document["qemu"]["memory"] == "2G"
        assert _usb_keys(document) == ["0bda:5411"]

    def test_empty_selection_keeps_file(self, run_ctx, project_dir, linux_collector, scripted_selector, capsys):
        before = (project_dir / "strux.json").read_bytes()
        cmd_usb_add(Namespace(), run_ctx, linux_collector, scripted_selector(selections=[[]]))

        assert (project_dir / "strux.json").read_bytes() == before
        assert "Ничего не выбрано" in capsys.readouterr().out

    def test_unchanged_selection_not_written(self, run_ctx, project_dir, linux_collector, scripted_selector, capsys):
        before = (project_dir / "strux.json").read_bytes()
        cmd_usb_add(Namespace(), run_ctx, linux_collector, scripted_selector(selections=[None]))

        assert (project_dir / "strux.json").read_bytes() == before
        assert "Изменений нет" in capsys.readouterr().out

    def test_historical_entries_rewritten(self, run_ctx, project_dir, linux_collector, scripted_selector, read_project):
        """Тот же набор устройств, но записи не канонические: файл переписывается."""
        (project_dir / "strux.json").write_text(
            '{"qemu": {"usb": [{"vendor_id": "0x046D", "product_id": 50475}]}}\n',
            encoding="utf-8",
        )

        cmd_usb_add(Namespace(), run_ctx, linux_collector, scripted_selector(selections=[None]))

        assert read_project()["qemu"]["usb"] == [{"vendor_id": "046d", "product_id": "c52b"}]

    def test_duplicate_entries_rewritten(self, run_ctx, project_dir, linux_collector, scripted_selector, read_project):
        (project_dir / "strux.json").write_text(
            '{"qemu": {"usb": ['
            '{"vendor_id": "046d", "product_id": "c52b"}, '
            '{"vendor_id": "046d", "product_id": "c52b"}, '
            '{"vendor_id": "xyz", "product_id": "c52b"}]}}\n',
            encoding="utf-8",
        )

        cmd_usb_add(Namespace(), run_ctx, linux_collector, scripted_selector(selections=[None]))

        assert _usb_keys(read_project()) == ["046d:c52b"]

    def test_historical_entries_dry_run(self, project_dir, linux_collector, scripted_selector):
        (project_dir / "strux.json").write_text(
            '{"qemu": {"usb": [{"vendor_id": "0x046D", "product_id": 50475}]}}\n',
            encoding="utf-8",
        )
        ctx = RunContext.create(dry_run=True, triggered_by="test", project_dir=project_dir)
        before = (project_dir / "strux.json").read_bytes()

        cmd_usb_add(Namespace(), ctx, linux_collector, scripted_selector(selections=[None]))

        assert (project_dir / "strux.json").read_bytes() == before

    def test_nothing_detected(self, run_ctx, project_dir, fake_runner, ok_result, scripted_selector):
        runner = fake_runner({"lsusb": ok_result(LSUSB_COMMAND, "")})
        selector = scripted_selector()
        before = (project_dir / "strux.json").read_bytes()

        cmd_usb_add(Namespace(), run_ctx, UsbCollector(runner=runner, platform="linux"), selector)

        assert selector.select_calls == []
        assert (project_dir / "strux.json").read_bytes() == before

    def test_dry_run(self, project_dir, linux_collector, scripted_selector, capsys):
        ctx = RunContext.create(dry_run=True, triggered_by="test", project_dir=project_dir)
        before = (project_dir / "strux.json").read_bytes()

        cmd_usb_add(Namespace(), ctx, linux_collector, scripted_selector(selections=[["0781:5581"]]))

        assert (project_dir / "strux.json").read_bytes() == before
        out = capsys.readouterr().out
        assert "[DRY-RUN]" in out
        assert "+ 0781:5581 (SanDisk Corp. Ultra)" in out
        assert "- 046d:c52b (Logitech, Inc. Unifying Receiver)" in out

    def test_missing_project_file(self, tmp_path, linux_collector, scripted_selector):
        ctx = RunContext.create(triggered_by="test", project_dir=tmp_path)
        with pytest.raises(ProjectConfigNotFoundError) as exc_info:
            cmd_usb_add(Namespace(), ctx, linux_collector, scripted_selector())
        assert "strux.json not found" in str(exc_info.value)

    def test_project_without_section(self, tmp_path, linux_collector, scripted_selector):
        (tmp_path / "strux.json").write_text('{"name": "bare"}\n', encoding="utf-8")
        ctx = RunContext.create(triggered_by="test", project_dir=tmp_path)

        cmd_usb_add(Namespace(), ctx, linux_collector, scripted_selector(selections=[["1a86:7523"]]))

        text = (tmp_path / "strux.json").read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert '"vendor_id": "1a86"' in text


class TestUsbList:
    """usb list: показ и удаление."""

    def test_remove_device(self, run_ctx, project_dir, linux_collector, scripted_selector, read_project, capsys):
        (project_dir / "strux.json").write_text(
            '{"qemu": {"usb": ['
            '{"vendor_id": "046d", "product_id": "c52b"}, '
            '{"vendor_id": "0781", "product_id": "5581"}]}}\n',
            encoding="utf-8",
        )
        selector = scripted_selector(selections=[["046d:c52b"]], confirms=[True])

        cmd_usb_list(Namespace(no_detect=False), run_ctx, linux_collector, selector)

        assert _usb_keys(read_project()) == ["0781:5581"]
        out = capsys.readouterr().out
        assert "USB устройства в strux.json:" in out
        assert "  1. Logitech, Inc. Unifying Receiver (046d:c52b)" in out
        assert "Updated strux.json (1 devices configured)" in out

    def test_removal_choices_unselected(self, run_ctx, linux_collector, scripted_selector):
        selector = scripted_selector(selections=[None], confirms=[True])
        cmd_usb_list(Namespace(no_detect=False), run_ctx, linux_collector, selector)

        message, choices = selector.select_calls[0]
        assert message == "Select USB devices to remove"
        assert [c.value for c in choices] == ["046d:c52b"]
        assert not choices[0].selected
        assert "[configured]" not in choices[0].title

    def test_decline_confirm(self, run_ctx, project_dir, linux_collector, scripted_selector):
        selector = scripted_selector(confirms=[False])
        before = (project_dir / "strux.json").read_bytes()

        cmd_usb_list(Namespace(no_detect=False), run_ctx, linux_collector, selector)

        assert selector.confirm_calls == ["Remove any devices?"]
        assert selector.select_calls == []
        assert (project_dir / "strux.json").read_bytes() == before

    def test_nothing_selected_for_removal(self, run_ctx, project_dir, linux_collector, scripted_selector):
        before = (project_dir / "strux.json").read_bytes()
        cmd_usb_list(
            Namespace(no_detect=False), run_ctx, linux_collector,
            scripted_selector(selections=[[]], confirms=[True]),
        )
        assert (project_dir / "strux.json").read_bytes() == before

    def test_no_devices_configured(self, tmp_path, linux_collector, scripted_selector, capsys):
        (tmp_path / "strux.json").write_text('{"qemu": {"usb": []}}\n', encoding="utf-8")
        ctx = RunContext.create(triggered_by="test", project_dir=tmp_path)
        selector = scripted_selector()

        cmd_usb_list(Namespace(no_detect=False), ctx, linux_collector, selector)

        assert "USB устройства не настроены в strux.json" in capsys.readouterr().out
        assert selector.confirm_calls == []
        assert linux_collector.runner.calls == []

    def test_no_detect(self, run_ctx, linux_collector, scripted_selector, capsys):
        cmd_usb_list(Namespace(no_detect=True), run_ctx, linux_collector, scripted_selector(confirms=[False]))

        assert linux_collector.runner.calls == []
        assert "  1. USB device (046d:c52b)" in capsys.readouterr().out

    def test_detection_failure_ignored(self, run_ctx, fake_runner, scripted_selector, capsys):
        runner = fake_runner({"lsusb": CommandResult(LSUSB_COMMAND, stderr="boom", exit_code=1)})
        collector = UsbCollector(runner=runner, platform="linux")

        cmd_usb_list(Namespace(no_detect=False), run_ctx, collector, scripted_selector(confirms=[False]))

        assert "  1. USB device (046d:c52b)" in capsys.readouterr().out

    def test_dry_run_removal(self, project_dir, linux_collector, scripted_selector, capsys):
        ctx = RunContext.create(dry_run=True, triggered_by="test", project_dir=project_dir)
        before = (project_dir / "strux.json").read_bytes()

        cmd_usb_list(
            Namespace(no_detect=False), ctx, linux_collector,
            scripted_selector(selections=[["046d:c52b"]], confirms=[True]),
        )

        assert (project_dir / "strux.json").read_bytes() == before
        assert "[DRY-RUN]" in capsys.readouterr().out
