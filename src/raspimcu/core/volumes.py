"""Recognise UF2 bootloader volumes by their marker files."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from raspimcu.models import STORAGE_FALLBACK_DESCRIPTION, StorageDevice

logger = logging.getLogger(__name__)

INFO_FILENAME = "INFO_UF2.TXT"
INDEX_FILENAME = "INDEX.HTM"


def extract_info_value(info_text: str, key: str) -> str | None:
    """Return the value of a ``Key: value`` line, matching the key case-insensitively."""
    if not info_text:
        return None
    pattern = re.compile(
        rf"^[ \t]*{re.escape(key)}[ \t]*:(.*)$", re.IGNORECASE | re.MULTILINE
    )
    match = pattern.search(info_text)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def _read_info_text(info_path: Path) -> str:
    try:
        return info_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Could not read %s: %s", info_path, exc)
        return ""


def probe_volume(path: str | Path) -> StorageDevice | None:
    """Return a storage device when ``path`` looks like a UF2 volume, else ``None``."""
    volume = Path(path)
    try:
        if not volume.is_dir():
            return None
        info_path = volume / INFO_FILENAME
        has_info = info_path.is_file()
        if not has_info and not (volume / INDEX_FILENAME).exists():
            return None
    except OSError as exc:
        logger.debug("Skipping %s: %s", volume, exc)
        return None

    info_text = _read_info_text(info_path) if has_info else ""
    board_id = extract_info_value(info_text, "Board-ID")
    model = extract_info_value(info_text, "Model")

    logger.debug("UF2 volume at %s (board=%s, model=%s)", volume, board_id, model)
    return StorageDevice(
        id=f"storage:{volume}",
        mount_point=str(volume),
        board_id=board_id,
        model=model,
        info_file=info_text.strip() or None,
        description=model or board_id or STORAGE_FALLBACK_DESCRIPTION,
    )
