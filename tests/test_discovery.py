from __future__ import annotations

import asyncio

import pytest

from raspimcu.core import discovery
from raspimcu.core.discovery import (
    dedupe_by_id,
    default_search_roots,
    filter_rp2040_devices,
    find_mounted_boards,
    is_rp2040_device,
    list_devices,
    list_serial_ports,
    normalize_hex,
)
from raspimcu.models import SerialDevice, StorageDevice


@pytest.mark.parametrize("value", ["0x2e8a", "2e8a", "2E8A", "0X2E8A", 0x2E8A])
def test_normalize_hex_is_canonical(value):
    assert normalize_hex(value) == "2E8A"


def test_normalize_hex_pads_and_handles_none():
    assert normalize_hex("3") == "0003"
    assert normalize_hex(4) == "0004"
    assert normalize_hex(None) is None


def test_serial_device_classification():
    assert is_rp2040_device(SerialDevice(id="COM3", vendor_id="2E8A"))
    assert not is_rp2040_device(SerialDevice(id="COM4", vendor_id="1234"))
    assert not is_rp2040_device(SerialDevice(id="COM5"))


def test_storage_device_classification():
    pico = StorageDevice(
        id="storage:/media/RPI-RP2", mount_point="/media/RPI-RP2", board_id="RPI-RP2"
    )
    feather = StorageDevice(
        id="storage:/media/FTHR", mount_point="/media/FTHR", board_id="SAMD21"
    )
    by_model = StorageDevice(
        id="storage:/media/x", mount_point="/media/x", model="Raspberry Pi Pico W"
    )
    by_info = StorageDevice(
        id="storage:/media/y", mount_point="/media/y", info_file="Chip: RP2040"
    )

    assert is_rp2040_device(pico)
    assert not is_rp2040_device(feather)
    assert is_rp2040_device(by_model)
    assert is_rp2040_device(by_info)
    assert filter_rp2040_devices([feather, pico]) == [pico]


def test_pico_hint_needs_word_boundary():
    device = StorageDevice(id="storage:/m", mount_point="/m", model="Picobello")

    assert not is_rp2040_device(device)


def test_dedupe_keeps_first_seen():
    first = SerialDevice(id="/dev/ttyACM0", vendor_id="2E8A", manufacturer="first")
    second = SerialDevice(id="/dev/ttyACM0", vendor_id="2E8A", manufacturer="second")
    other = SerialDevice(id="/dev/ttyACM1", vendor_id="2E8A")

    merged = dedupe_by_id([first, other, second])

    assert merged == [first, other]


def test_list_serial_ports_filters_foreign_vendors(make_port, monkeypatch):
    ports = [
        make_port("/dev/ttyACM0"),
        make_port("/dev/ttyUSB0", vid=0x10C4, pid=0xEA60),
        make_port("/dev/ttyS0", vid=None, pid=None, description="n/a"),
    ]
    monkeypatch.setattr(discovery.list_ports, "comports", lambda: ports)

    devices = list_serial_ports()

    assert [device.id for device in devices] == ["/dev/ttyACM0", "/dev/ttyS0"]
    pico = devices[0]
    assert pico.vendor_id == "2E8A"
    assert pico.product_id == "0005"
    assert pico.serial_number == "E66038B713849D31"
    assert pico.description == "Board in FS mode"
    unknown = devices[1]
    assert unknown.friendly_name is None
    assert unknown.description == "MicroPython"


def test_list_serial_ports_wraps_enumeration_failure(monkeypatch):
    def _boom():
        raise OSError("access denied")

    monkeypatch.setattr(discovery.list_ports, "comports", _boom)

    with pytest.raises(RuntimeError, match="Unable to enumerate serial ports"):
        list_serial_ports()


def test_default_search_roots_per_platform():
    assert default_search_roots("darwin") == ["/Volumes"]
    windows = default_search_roots("win32")
    assert windows[0] == "A:\\"
    assert len(windows) == 26
    assert default_search_roots("linux") == ["/media", "/run/media", "/mnt"]


def test_find_mounted_boards_scans_root_and_children(tmp_path, pico_volume):
    (tmp_path / "USB-STICK").mkdir()

    boards, errors = find_mounted_boards([str(tmp_path), str(tmp_path / "missing")])

    assert errors == []
    assert [board.mount_point for board in boards] == [str(pico_volume)]


def test_find_mounted_boards_detects_root_itself(pico_volume):
    boards, _ = find_mounted_boards([str(pico_volume)])

    assert [board.board_id for board in boards] == ["RPI-RP2"]


def test_list_devices_merges_serial_before_storage(
    make_port, monkeypatch, tmp_path, pico_volume
):
    monkeypatch.setattr(
        discovery.list_ports,
        "comports",
        lambda: [make_port("/dev/ttyACM0"), make_port("/dev/ttyS0", vid=None)],
    )
    other = tmp_path / "FEATHERBOOT"
    other.mkdir()
    (other / "INFO_UF2.TXT").write_text("Board-ID: SAMD21\nModel: Feather M0\n")

    result = asyncio.run(list_devices([str(tmp_path), str(tmp_path)]))

    assert result.errors == []
    # ports without a vendor id pass the enumeration but not classification
    assert [device.id for device in result.devices] == [
        "/dev/ttyACM0",
        f"storage:{pico_volume}",
    ]


def test_list_devices_records_serial_failure(monkeypatch, pico_volume):
    def _boom():
        raise OSError("udev unavailable")

    monkeypatch.setattr(discovery.list_ports, "comports", _boom)

    result = asyncio.run(list_devices([str(pico_volume.parent)]))

    assert [error.source for error in result.errors] == ["serial"]
    assert "udev unavailable" in result.errors[0].message
    assert len(result.devices) == 1
    assert result.devices[0].type == "storage"


def test_list_devices_records_unreadable_root(monkeypatch, tmp_path):
    monkeypatch.setattr(discovery.list_ports, "comports", lambda: [])

    def _unreadable(root: str):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(discovery, "scan_root", _unreadable)

    result = asyncio.run(list_devices([str(tmp_path)]))

    assert result.devices == []
    assert [error.source for error in result.errors] == ["storage"]


def test_list_devices_on_empty_host(monkeypatch, tmp_path):
    monkeypatch.setattr(discovery.list_ports, "comports", lambda: [])

    result = asyncio.run(list_devices([str(tmp_path)]))

    assert result.devices == []
    assert result.errors == []


def test_list_devices_accepts_extra_vendor_ids(make_port, monkeypatch):
    monkeypatch.setattr(
        discovery.list_ports,
        "comports",
        lambda: [make_port("/dev/ttyACM0"), make_port("/dev/ttyACM1", vid=0x239A)],
    )

    result = asyncio.run(list_devices([], vendor_ids={"2E8A", "239A"}))

    assert [device.id for device in result.devices] == ["/dev/ttyACM0", "/dev/ttyACM1"]
