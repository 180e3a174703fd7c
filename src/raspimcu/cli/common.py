from __future__ import annotations

import os
import subprocess
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from raspimcu.config import Settings, get_settings, resolve_config_path
from raspimcu.errors import RaspiMcuError

DEBUG_ENV_VAR = "DEBUG"

HANDLED_ERRORS = (RaspiMcuError, OSError, ValueError, subprocess.SubprocessError)


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV_VAR))


def error_message(exc: BaseException) -> str:
    """First line of the failure, with the tool's own stderr for failed commands."""
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = exc.stderr
        if isinstance(stderr, bytes):
            stderr = stderr.decode(errors="replace")
        lines = [line.strip() for line in (stderr or "").splitlines() if line.strip()]
        if lines:
            tool = Path(str(exc.cmd[0] if isinstance(exc.cmd, list) else exc.cmd)).name
            return f"{tool} exited with status {exc.returncode}: {lines[-1]}"
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        return f"Invalid {field}: {first['msg']}" if field else first["msg"]
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Turn operation failures into one red stderr line and exit code 1."""
    try:
        yield
    except HANDLED_ERRORS as exc:
        typer.secho(error_message(exc), fg=typer.colors.RED, err=True)
        if debug_enabled():
            Console(stderr=True).print_exception()
        raise typer.Exit(1) from exc
