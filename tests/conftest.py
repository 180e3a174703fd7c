from __future__ import annotations

from types import SimpleNamespace

import pytest

from raspimcu.config import get_settings


@pytest.fixture(autouse=True)
def _isolate_settings_env(tmp_path_factory, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("RASPIMCU_CONFIG", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOGLEVEL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _make_port(
    device: str = "/dev/ttyACM0",
    vid: int | None = 0x2E8A,
    pid: int | None = 0x0005,
    serial_number: str | None = "E66038B713849D31",
    manufacturer: str | None = "MicroPython",
    description: str = "Board in FS mode",
) -> SimpleNamespace:
    return SimpleNamespace(
        device=device,
        vid=vid,
        pid=pid,
        hwid="USB VID:PID=2E8A:0005",
        serial_number=serial_number,
        manufacturer=manufacturer,
        description=description,
        location="1-1:1.0",
    )


@pytest.fixture
def make_port():
    return _make_port


@pytest.fixture
def pico_volume(tmp_path):
    volume = tmp_path / "RPI-RP2"
    volume.mkdir()
    (volume / "INFO_UF2.TXT").write_text(
        "UF2 Bootloader v3.0\nModel: Raspberry Pi RP2\nBoard-ID: RPI-RP2\n"
    )
    (volume / "INDEX.HTM").write_text("<html></html>")
    return volume
