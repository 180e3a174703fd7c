"""Copy files to and from a mounted board volume."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

from raspimcu.errors import InvalidPathError, NotFoundError

logger = logging.getLogger(__name__)


def _case_fold(path: str) -> str:
    return path.lower() if sys.platform == "win32" else path


def ensure_mount_point(mount_point: str | Path) -> Path:
    if not str(mount_point):
        raise NotFoundError("A mount point is required.")
    path = Path(mount_point)
    if not path.is_dir():
        raise NotFoundError(f"Mount point not found or not a directory: {mount_point}")
    return Path(os.path.abspath(path))


def resolve_within_mount(
    mount_point: str | Path, target_path: str | Path = "."
) -> Path:
    """Resolve ``target_path`` against the mount and reject escapes.

    The check compares normalised path strings. Symlinks inside the mount
    are not followed, so a link pointing outside it is not detected.
    """
    absolute_mount = os.path.abspath(mount_point)
    resolved = os.path.abspath(os.path.join(absolute_mount, target_path))
    mount_key = _case_fold(absolute_mount)
    resolved_key = _case_fold(resolved)
    # a sibling such as /media/RPI-RP2-old must not pass for /media/RPI-RP2
    prefix = mount_key if mount_key.endswith(os.sep) else mount_key + os.sep
    if resolved_key != mount_key and not resolved_key.startswith(prefix):
        raise InvalidPathError(
            f"Path {target_path} escapes the mount point {mount_point}"
        )
    return Path(resolved)


def copy_path(source: Path, destination: Path) -> None:
    """Copy a file or directory tree, overwriting what is already there."""
    if source.is_dir():
        destination.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, destination, dirs_exist_ok=True)
    else:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)


def copy_to_device(
    source: str | Path, mount_point: str | Path, target_path: str | None = None
) -> Path:
    resolved_mount = ensure_mount_point(mount_point)
    resolved_source = Path(os.path.abspath(source))
    if not resolved_source.exists():
        raise NotFoundError(f"Source path does not exist: {source}")

    target = target_path if target_path and target_path.strip() else None
    destination = resolve_within_mount(resolved_mount, target or resolved_source.name)
    logger.debug("Copying %s -> %s", resolved_source, destination)
    copy_path(resolved_source, destination)
    return destination


def copy_from_device(
    mount_point: str | Path, source_path: str, destination: str | Path
) -> Path:
    resolved_mount = ensure_mount_point(mount_point)
    resolved_source = resolve_within_mount(resolved_mount, source_path)
    resolved_destination = Path(os.path.abspath(destination))
    if not resolved_source.exists():
        raise NotFoundError(f"Source path on device does not exist: {source_path}")

    logger.debug("Copying %s -> %s", resolved_source, resolved_destination)
    copy_path(resolved_source, resolved_destination)
    return resolved_destination
