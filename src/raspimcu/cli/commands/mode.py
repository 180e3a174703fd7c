from __future__ import annotations

from typing import Annotated

import typer

from raspimcu.cli.common import exit_on_error, load_settings_or_exit
from raspimcu.core import get_picotool_version, reboot_to_filesystem_mode
from raspimcu.models import RebootOptions


PicotoolOption = Annotated[
    str | None,
    typer.Option(
        "--picotool", "--tool-path", "-p", help="Custom picotool executable"
    ),
]


def put_fs(
    serial: Annotated[
        str | None,
        typer.Option("--serial", "-s", help="Target a specific device serial number"),
    ] = None,
    bus: Annotated[
        int | None, typer.Option("--bus", "-b", min=0, help="USB bus number")
    ] = None,
    address: Annotated[
        int | None,
        typer.Option("--address", "-a", min=0, help="USB device address on the bus"),
    ] = None,
    drive: Annotated[
        str | None,
        typer.Option("--drive", "-d", help="Explicit drive name for picotool"),
    ] = None,
    picotool: PicotoolOption = None,
    timeout_ms: Annotated[
        int | None,
        typer.Option("--timeout", min=1, help="Timeout in milliseconds"),
    ] = None,
) -> None:
    """Use picotool to reboot a device into filesystem (BOOTSEL) mode."""
    settings = load_settings_or_exit()
    with exit_on_error():
        options = RebootOptions(
            serial_number=serial,
            bus=bus,
            address=address,
            drive=drive,
            picotool_path=picotool or settings.picotool.path,
            timeout=(
                timeout_ms / 1000
                if timeout_ms is not None
                else settings.picotool.timeout
            ),
        )
        output = reboot_to_filesystem_mode(options)

    if output:
        typer.echo(output)
    typer.echo("Reboot command sent. Check your mounted volumes for the UF2 drive.")


def picotool_version(
    picotool: PicotoolOption = None,
) -> None:
    """Show the installed picotool version."""
    settings = load_settings_or_exit()
    with exit_on_error():
        output = get_picotool_version(
            picotool or settings.picotool.path, timeout=settings.picotool.timeout
        )
    typer.echo(output)


def register(app: typer.Typer) -> None:
    app.command("put-fs")(put_fs)
    app.command("picotool-version")(picotool_version)
