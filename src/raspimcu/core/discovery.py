from __future__ import annotations

import asyncio
import logging
import re
import string
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from serial.tools import list_ports
from serial.tools.list_ports_common import ListPortInfo

from raspimcu.models import (
    SERIAL_FALLBACK_DESCRIPTION,
    Device,
    DiscoveryError,
    EnumerationResult,
    SerialDevice,
    StorageDevice,
)

from .volumes import probe_volume

logger = logging.getLogger(__name__)

RASPBERRY_PI_VENDOR_IDS = frozenset({"2E8A"})
BOOTSEL_PRODUCT_IDS = frozenset({"0003", "0004"})

RP2040_STORAGE_HINTS = (
    re.compile(r"RP2040", re.IGNORECASE),
    re.compile(r"RPI[-_ ]?RP2", re.IGNORECASE),
    re.compile(r"\bPICO\b", re.IGNORECASE),
)

# pyserial fills unknown descriptive fields with this placeholder
_PYSERIAL_UNKNOWN = "n/a"


def normalize_hex(value: int | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, int):
        return f"{value:04X}"
    text = str(value).strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if not text:
        return None
    return text.upper().zfill(4)


def _clean(value: str | None) -> str | None:
    if value is None or value == _PYSERIAL_UNKNOWN or not value.strip():
        return None
    return value


def _serial_device_from_port(port: ListPortInfo) -> SerialDevice:
    vendor_id = normalize_hex(port.vid)
    product_id = normalize_hex(port.pid)
    hwid = _clean(port.hwid)
    friendly_name = _clean(port.description)
    manufacturer = _clean(port.manufacturer)
    device_id = (
        port.device or hwid or f"{vendor_id or 'unknown'}:{product_id or 'unknown'}"
    )
    return SerialDevice(
        id=device_id,
        path=port.device or None,
        manufacturer=manufacturer,
        serial_number=_clean(port.serial_number),
        vendor_id=vendor_id,
        product_id=product_id,
        location_id=_clean(port.location),
        friendly_name=friendly_name,
        description=friendly_name or manufacturer or SERIAL_FALLBACK_DESCRIPTION,
    )


def list_serial_ports(
    vendor_ids: Iterable[str] = RASPBERRY_PI_VENDOR_IDS,
) -> list[SerialDevice]:
    """List serial ports, dropping those reported with a foreign vendor id.

    Ports that report no vendor id at all are kept.
    """
    accepted = set(vendor_ids)
    try:
        ports = list_ports.comports()
    except Exception as exc:
        raise RuntimeError(f"Unable to enumerate serial ports: {exc}") from exc

    devices: list[SerialDevice] = []
    for port in ports:
        device = _serial_device_from_port(port)
        if device.vendor_id and device.vendor_id not in accepted:
            logger.debug("Ignoring %s (vendor %s)", device.id, device.vendor_id)
            continue
        devices.append(device)
    return devices


def default_search_roots(platform: str | None = None) -> list[str]:
    platform = platform or sys.platform
    if platform == "darwin":
        return ["/Volumes"]
    if platform == "win32":
        return [f"{letter}:\\" for letter in string.ascii_uppercase]
    return ["/media", "/run/media", "/mnt"]


def scan_root(root: str) -> tuple[list[StorageDevice], DiscoveryError | None]:
    """Probe ``root`` and its immediate children.

    A missing root yields nothing; an unreadable one yields an error entry.
    """
    path = Path(root)
    try:
        if not path.is_dir():
            return [], None
        boards: list[StorageDevice] = []
        own = probe_volume(path)
        if own is not None:
            boards.append(own)
        for child in sorted(path.iterdir()):
            board = probe_volume(child)
            if board is not None:
                boards.append(board)
    except OSError as exc:
        logger.debug("Cannot scan %s: %s", root, exc)
        return [], DiscoveryError(
            source="storage", message=f"Unable to scan {root}: {exc}"
        )
    return boards, None


def dedupe_by_id(devices: Iterable[Device]) -> list[Device]:
    seen: dict[str, Device] = {}
    for device in devices:
        seen.setdefault(device.id, device)
    return list(seen.values())


def find_mounted_boards(
    search_roots: Sequence[str] | None = None,
) -> tuple[list[StorageDevice], list[DiscoveryError]]:
    roots = default_search_roots() if search_roots is None else search_roots
    boards: list[StorageDevice] = []
    errors: list[DiscoveryError] = []
    for root in roots:
        found, error = scan_root(root)
        boards.extend(found)
        if error is not None:
            errors.append(error)
    return boards, errors


def is_rp2040_storage_device(device: StorageDevice) -> bool:
    haystacks = (device.board_id, device.model, device.info_file)
    return any(
        value and any(hint.search(value) for hint in RP2040_STORAGE_HINTS)
        for value in haystacks
    )


def is_rp2040_device(
    device: Device, vendor_ids: Iterable[str] = RASPBERRY_PI_VENDOR_IDS
) -> bool:
    if isinstance(device, SerialDevice):
        vendor_id = normalize_hex(device.vendor_id)
        return vendor_id is not None and vendor_id in set(vendor_ids)
    if isinstance(device, StorageDevice):
        return is_rp2040_storage_device(device)
    return False


def filter_rp2040_devices(
    devices: Iterable[Device], vendor_ids: Iterable[str] = RASPBERRY_PI_VENDOR_IDS
) -> list[Device]:
    accepted = set(vendor_ids)
    return [device for device in devices if is_rp2040_device(device, accepted)]


async def list_devices(
    search_roots: Sequence[str] | None = None,
    vendor_ids: Iterable[str] | None = None,
) -> EnumerationResult:
    """Discover boards over serial and mass storage.

    A failure in one source is recorded in ``errors`` and never aborts the
    other. Roots are scanned concurrently but merged in the order given.
    """
    accepted = set(RASPBERRY_PI_VENDOR_IDS if vendor_ids is None else vendor_ids)
    result = EnumerationResult()

    try:
        roots = list(default_search_roots() if search_roots is None else search_roots)
    except Exception as exc:
        roots = []
        result.errors.append(DiscoveryError(source="storage", message=str(exc)))

    serial_task = asyncio.to_thread(list_serial_ports, accepted)
    root_tasks = [asyncio.to_thread(scan_root, root) for root in roots]
    serial_outcome, *root_outcomes = await asyncio.gather(
        serial_task, *root_tasks, return_exceptions=True
    )

    discovered: list[Device] = []
    if isinstance(serial_outcome, BaseException):
        if not isinstance(serial_outcome, Exception):
            raise serial_outcome
        logger.debug("Serial discovery failed: %s", serial_outcome)
        result.errors.append(
            DiscoveryError(source="serial", message=str(serial_outcome))
        )
    else:
        discovered.extend(serial_outcome)

    for root, outcome in zip(roots, root_outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            result.errors.append(
                DiscoveryError(
                    source="storage", message=f"Unable to scan {root}: {outcome}"
                )
            )
            continue
        boards, error = outcome
        discovered.extend(boards)
        if error is not None:
            result.errors.append(error)

    result.devices = filter_rp2040_devices(dedupe_by_id(discovered), accepted)
    logger.debug(
        "Discovery complete: %d device(s), %d error(s)",
        len(result.devices),
        len(result.errors),
    )
    return result
