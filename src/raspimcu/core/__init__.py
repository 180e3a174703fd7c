from __future__ import annotations

from .discovery import (
    BOOTSEL_PRODUCT_IDS,
    RASPBERRY_PI_VENDOR_IDS,
    default_search_roots,
    filter_rp2040_devices,
    find_mounted_boards,
    is_rp2040_device,
    list_devices,
    list_serial_ports,
    normalize_hex,
)
from .firmware import download_firmware, read_info_file, upload_firmware
from .micropython import (
    download_from_micropython,
    run_micropython,
    upload_to_micropython,
)
from .picotool import get_picotool_version, reboot_to_filesystem_mode
from .transfer import (
    copy_from_device,
    copy_to_device,
    ensure_mount_point,
    resolve_within_mount,
)
from .volumes import probe_volume

__all__ = [
    "BOOTSEL_PRODUCT_IDS",
    "RASPBERRY_PI_VENDOR_IDS",
    "copy_from_device",
    "copy_to_device",
    "default_search_roots",
    "download_firmware",
    "download_from_micropython",
    "ensure_mount_point",
    "filter_rp2040_devices",
    "find_mounted_boards",
    "get_picotool_version",
    "is_rp2040_device",
    "list_devices",
    "list_serial_ports",
    "normalize_hex",
    "probe_volume",
    "read_info_file",
    "reboot_to_filesystem_mode",
    "resolve_within_mount",
    "run_micropython",
    "upload_firmware",
    "upload_to_micropython",
]
