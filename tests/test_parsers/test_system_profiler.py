"""
Тесты парсера system_profiler SPUSBDataType -json.
"""

import json

import pytest

from usb_collector.core.models import UsbDevice
from usb_collector.parsers import parse_system_profiler_output
from usb_collector.parsers.system_profiler import MAX_TREE_DEPTH


def tree(*items):
    return json.dumps({"SPUSBDataType": list(items)})


class TestSystemProfilerParser:
    """Обход дерева устройств."""

    def test_nested_devices(self):
        output = tree({
            "_name": "USB31Bus",
            "_items": [{
                "_name": "USB Receiver",
                "vendor_id": "0x046d  (Logitech Inc.)",
                "product_id": "0xc52b",
            }],
        })
        assert parse_system_profiler_output(output) == [UsbDevice("046d", "c52b", "USB Receiver")]

    def test_alternative_field_names(self):
        output = tree(
            {"_name": "A", "idVendor": 1133, "idProduct": 50475},
            {"_name": "B", "vendor-id": "0x0781", "product-id": "0x5581"},
        )
        assert [d.key for d in parse_system_profiler_output(output)] == ["046d:c52b", "0781:5581"]

    def test_first_present_field_wins(self):
        output = tree({"vendor_id": "0x046d", "idVendor": "0x0781", "product_id": "0xc52b"})
        assert parse_system_profiler_output(output)[0].vendor_id == "046d"

    def test_items_alias(self):
        output = tree({"_name": "Bus", "items": [{"vendor_id": "0x046d", "product_id": "0xc52b"}]})
        assert [d.key for d in parse_system_profiler_output(output)] == ["046d:c52b"]

    def test_device_with_children(self):
        """Хаб с ID тоже устройство, его дети обходятся после него."""
        output = tree({
            "_name": "Hub",
            "vendor_id": "0x0bda",
            "product_id": "0x5411",
            "_items": [{"_name": "Receiver", "vendor_id": "0x046d", "product_id": "0xc52b"}],
        })
        assert [d.key for d in parse_system_profiler_output(output)] == ["0bda:5411", "046d:c52b"]

    def test_partial_ids_dropped(self):
        output = tree(
            {"_name": "No product", "vendor_id": "0x046d"},
            {"_name": "Bad vendor", "vendor_id": "apple_vendor_id", "product_id": "0x1234"},
            {"_name": "Bool", "vendor_id": True, "product_id": "0x1234"},
        )
        assert parse_system_profiler_output(output) == []

    def test_missing_name(self):
        devices = parse_system_profiler_output(tree({"vendor_id": "0x046d", "product_id": "0xc52b"}))
        assert devices[0].description is None

    @pytest.mark.parametrize("output", [
        "",
        "{not json",
        "[]",
        "null",
        '{"SPUSBDataType": {}}',
        '{"SPOtherType": []}',
        '{"SPUSBDataType": [1, "x", null]}',
    ])
    def test_malformed_input_returns_empty(self, output):
        assert parse_system_profiler_output(output) == []

    def test_depth_guard(self):
        """Слишком глубокое дерево не роняет парсер."""
        node = {"vendor_id": "0x046d", "product_id": "0xc52b"}
        for _ in range(MAX_TREE_DEPTH + 10):
            node = {"_name": "Hub", "_items": [node]}
        assert parse_system_profiler_output(tree(node)) == []

    def test_within_depth_limit(self):
        node = {"vendor_id": "0x046d", "product_id": "0xc52b"}
        for _ in range(MAX_TREE_DEPTH - 1):
            node = {"_name": "Hub", "_items": [node]}
        assert [d.key for d in parse_system_profiler_output(tree(node))] == ["046d:c52b"]


class TestSystemProfilerFixture:
    """Захваченный вывод system_profiler."""

    def test_fixture(self, load_fixture):
        devices = parse_system_profiler_output(load_fixture("macos", "system_profiler.json"))

        assert devices == [
            UsbDevice("0bda", "5411", "USB2.0 Hub"),
            UsbDevice("046d", "c52b", "USB Receiver"),
            UsbDevice("0781", "5581", "Ultra"),
            UsbDevice("046d", "c52b", "USB Receiver"),
        ]
