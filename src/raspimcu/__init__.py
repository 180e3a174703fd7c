"""raspimcu - discover Raspberry Pi microcontroller boards and move files and firmware to them."""

from __future__ import annotations

from importlib.metadata import version

from .config import DiscoveryConfig, Settings, ToolConfig, get_settings
from .core import (
    copy_from_device,
    copy_to_device,
    download_firmware,
    get_picotool_version,
    list_devices,
    probe_volume,
    read_info_file,
    reboot_to_filesystem_mode,
    resolve_within_mount,
    upload_firmware,
)
from .errors import (
    ExecutableNotFoundError,
    InvalidPathError,
    NotFoundError,
    RaspiMcuError,
    ToolUnavailableError,
)
from .models import (
    DeviceReport,
    DiscoveryError,
    EnumerationResult,
    RebootOptions,
    SerialDevice,
    StorageDevice,
)

__all__ = [
    "DeviceReport",
    "DiscoveryConfig",
    "DiscoveryError",
    "EnumerationResult",
    "ExecutableNotFoundError",
    "InvalidPathError",
    "NotFoundError",
    "RaspiMcuError",
    "RebootOptions",
    "SerialDevice",
    "Settings",
    "StorageDevice",
    "ToolConfig",
    "ToolUnavailableError",
    "__version__",
    "copy_from_device",
    "copy_to_device",
    "download_firmware",
    "get_picotool_version",
    "get_settings",
    "list_devices",
    "probe_volume",
    "read_info_file",
    "reboot_to_filesystem_mode",
    "resolve_within_mount",
    "upload_firmware",
]

__version__ = version("raspimcu")
