"""Drive a MicroPython board over serial through ``mpremote``."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from raspimcu.errors import NotFoundError
from raspimcu.models import MicroPythonTransfer

from .tools import resolve_executable, run_tool

MPREMOTE = "mpremote"


def _require_port(port: str | None) -> str:
    if not port:
        raise ValueError(
            "A serial port path is required to communicate with a MicroPython device."
        )
    return port


def format_remote_path(remote_path: str | None) -> str:
    if not remote_path:
        raise ValueError("A remote path on the MicroPython device is required.")
    return remote_path if remote_path.startswith(":") else f":{remote_path}"


def _run(
    args: list[str],
    mpremote_path: str | None,
    timeout: float | None,
    interactive: bool = False,
) -> str:
    command = resolve_executable(MPREMOTE, mpremote_path)
    return run_tool(MPREMOTE, command, args, timeout=timeout, interactive=interactive)


def upload_to_micropython(
    port: str,
    source: str | Path,
    target: str,
    mpremote_path: str | None = None,
    timeout: float | None = None,
) -> MicroPythonTransfer:
    resolved_source = Path(os.path.abspath(source))
    if not resolved_source.exists():
        raise NotFoundError(f"Source path does not exist: {source}")

    remote_target = format_remote_path(target)
    args = ["connect", _require_port(port), "fs", "cp"]
    if resolved_source.is_dir():
        args.append("-r")
    args += [str(resolved_source), remote_target]

    _run(args, mpremote_path, timeout)
    return MicroPythonTransfer(source=str(resolved_source), target=remote_target)


def download_from_micropython(
    port: str,
    remote_path: str,
    destination: str | Path,
    recursive: bool = False,
    mpremote_path: str | None = None,
    timeout: float | None = None,
) -> MicroPythonTransfer:
    remote_source = format_remote_path(remote_path)
    final_destination = Path(os.path.abspath(destination))
    if final_destination.is_dir():
        final_destination = final_destination / PurePosixPath(remote_source[1:]).name
    final_destination.parent.mkdir(parents=True, exist_ok=True)

    args = ["connect", _require_port(port), "fs", "cp"]
    if recursive:
        args.append("-r")
    args += [remote_source, str(final_destination)]

    _run(args, mpremote_path, timeout)
    return MicroPythonTransfer(source=remote_source, target=str(final_destination))


def run_micropython(
    port: str,
    code: str | None = None,
    mpremote_path: str | None = None,
    timeout: float | None = None,
) -> str:
    """Execute ``code`` and return its output, or open an interactive REPL."""
    base = ["connect", _require_port(port)]
    if code:
        return _run([*base, "exec", code], mpremote_path, timeout)
    return _run([*base, "repl"], mpremote_path, None, interactive=True)
