"""Device models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SERIAL_FALLBACK_DESCRIPTION = "Raspberry Pi MCU (serial mode)"
STORAGE_FALLBACK_DESCRIPTION = "Raspberry Pi MCU (filesystem mode)"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SerialDevice(_CamelModel):
    """Board exposing a USB serial endpoint."""

    id: str
    type: Literal["serial"] = "serial"
    status: Literal["serial"] = "serial"
    path: str | None = None
    manufacturer: str | None = None
    serial_number: str | None = None
    vendor_id: str | None = None
    product_id: str | None = None
    location_id: str | None = None
    friendly_name: str | None = None
    description: str = SERIAL_FALLBACK_DESCRIPTION


class StorageDevice(_CamelModel):
    """Board exposing a UF2 mass-storage volume."""

    id: str
    type: Literal["storage"] = "storage"
    status: Literal["fs"] = "fs"
    mount_point: str
    board_id: str | None = None
    model: str | None = None
    info_file: str | None = None
    description: str = STORAGE_FALLBACK_DESCRIPTION


Device = Annotated[SerialDevice | StorageDevice, Field(discriminator="type")]


class DiscoveryError(_CamelModel):
    """Non-fatal failure of one discovery source."""

    source: Literal["serial", "storage"]
    message: str


class EnumerationResult(_CamelModel):
    devices: list[Device] = Field(default_factory=list)
    errors: list[DiscoveryError] = Field(default_factory=list)


class DeviceReport(EnumerationResult):
    """JSON payload of the ``devices`` command."""

    generated_at: datetime
