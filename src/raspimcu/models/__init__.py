"""Data models for raspimcu."""

from raspimcu.models.device import (
    SERIAL_FALLBACK_DESCRIPTION,
    STORAGE_FALLBACK_DESCRIPTION,
    Device,
    DeviceReport,
    DiscoveryError,
    EnumerationResult,
    SerialDevice,
    StorageDevice,
)
from raspimcu.models.operations import (
    DEFAULT_TOOL_TIMEOUT,
    FirmwareDownload,
    MicroPythonTransfer,
    RebootOptions,
)

__all__ = [
    "DEFAULT_TOOL_TIMEOUT",
    "SERIAL_FALLBACK_DESCRIPTION",
    "STORAGE_FALLBACK_DESCRIPTION",
    "Device",
    "DeviceReport",
    "DiscoveryError",
    "EnumerationResult",
    "FirmwareDownload",
    "MicroPythonTransfer",
    "RebootOptions",
    "SerialDevice",
    "StorageDevice",
]
