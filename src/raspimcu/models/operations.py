"""Option and result models for device operations."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_TOOL_TIMEOUT = 10.0


class RebootOptions(BaseModel):
    """Arguments for ``picotool reboot -f``.

    Fields left as ``None`` are not passed to picotool at all.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    serial_number: str | None = None
    bus: int | None = Field(default=None, ge=0)
    address: int | None = Field(default=None, ge=0)
    drive: str | None = None
    picotool_path: str | None = None
    timeout: float = Field(default=DEFAULT_TOOL_TIMEOUT, gt=0)


class FirmwareDownload(BaseModel):
    """Result of copying a UF2 image off a mounted board."""

    source: str
    destination: str


class MicroPythonTransfer(BaseModel):
    """Result of an mpremote copy."""

    source: str
    target: str
