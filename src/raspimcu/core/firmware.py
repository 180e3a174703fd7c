"""UF2 image upload and download on a mounted board."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from raspimcu.errors import InvalidPathError, NotFoundError
from raspimcu.models import FirmwareDownload

from .transfer import ensure_mount_point, resolve_within_mount
from .volumes import INFO_FILENAME

logger = logging.getLogger(__name__)

UF2_SUFFIX = ".uf2"


def is_uf2_name(name: str | Path | None) -> bool:
    return bool(name) and str(name).lower().endswith(UF2_SUFFIX)


def _require_uf2(name: str | Path | None, context: str) -> None:
    if not is_uf2_name(name):
        raise InvalidPathError(f"{context} must reference a .uf2 file.")


def upload_firmware(
    firmware_path: str | Path,
    mount_point: str | Path,
    target_filename: str | None = None,
) -> Path:
    """Copy a UF2 image onto the board volume, which starts flashing on most boards."""
    resolved_firmware = Path(os.path.abspath(firmware_path))
    if not resolved_firmware.is_file():
        raise NotFoundError(f"Firmware file not found: {firmware_path}")
    _require_uf2(resolved_firmware, "Firmware path")

    resolved_mount = ensure_mount_point(mount_point)
    target = target_filename or resolved_firmware.name
    _require_uf2(target, "Target filename")
    destination = resolve_within_mount(resolved_mount, target)
    destination.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("Uploading %s -> %s", resolved_firmware, destination)
    shutil.copyfile(resolved_firmware, destination)
    return destination


def find_firmware_file(mount_point: str | Path) -> str | None:
    try:
        entries = sorted(entry.name for entry in Path(mount_point).iterdir())
    except OSError:
        return None
    for name in entries:
        if is_uf2_name(name):
            return name
    return None


def download_firmware(
    mount_point: str | Path,
    destination: str | Path,
    filename: str | None = None,
) -> FirmwareDownload:
    resolved_mount = ensure_mount_point(mount_point)
    source_name = filename or find_firmware_file(resolved_mount)
    if not source_name:
        raise NotFoundError(
            "No UF2 firmware file found on the device. "
            "Specify --name to pick one explicitly."
        )
    _require_uf2(source_name, "Source filename")

    source = resolve_within_mount(resolved_mount, source_name)
    if not source.is_file():
        raise NotFoundError(f"Firmware file not found on device: {source_name}")

    resolved_destination = Path(os.path.abspath(destination))
    resolved_destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, resolved_destination)
    return FirmwareDownload(source=source_name, destination=str(resolved_destination))


def read_info_file(mount_point: str | Path) -> str | None:
    resolved_mount = ensure_mount_point(mount_point)
    info_path = resolve_within_mount(resolved_mount, INFO_FILENAME)
    if not info_path.exists():
        return None
    return info_path.read_text(encoding="utf-8", errors="replace").strip()
