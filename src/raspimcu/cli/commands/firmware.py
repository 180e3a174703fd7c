from __future__ import annotations

from typing import Annotated

import typer

from raspimcu.cli.common import exit_on_error
from raspimcu.core import download_firmware, read_info_file, upload_firmware

app = typer.Typer(
    help="Manage UF2 firmware images on Raspberry Pi MCUs.", no_args_is_help=True
)


@app.command("upload")
def upload(
    firmware_path: Annotated[str, typer.Argument(help="Local .uf2 image")],
    mount_point: Annotated[str, typer.Argument(help="Mounted device volume")],
    name: Annotated[
        str | None, typer.Option("--name", "-n", help="Rename the firmware file on the device")
    ] = None,
) -> None:
    """Upload a UF2 firmware image to the device."""
    with exit_on_error():
        destination = upload_firmware(firmware_path, mount_point, target_filename=name)
    typer.echo(f"Firmware uploaded to {destination}")


@app.command("download")
def download(
    mount_point: Annotated[str, typer.Argument(help="Mounted device volume")],
    destination: Annotated[str, typer.Argument(help="Local destination file")],
    name: Annotated[
        str | None,
        typer.Option(
            "--name", "-n", help="Firmware filename on the device (auto-detected if omitted)"
        ),
    ] = None,
) -> None:
    """Download a UF2 firmware image from the device to the local machine."""
    with exit_on_error():
        result = download_firmware(mount_point, destination, filename=name)
    typer.echo(f"Firmware {result.source} saved to {result.destination}")


@app.command("info")
def info(
    mount_point: Annotated[str, typer.Argument(help="Mounted device volume")],
) -> None:
    """Read the INFO_UF2.TXT metadata from a mounted device."""
    with exit_on_error():
        text = read_info_file(mount_point)
    if text is None:
        typer.echo("INFO_UF2.TXT not found. Make sure the device is in filesystem mode.")
    else:
        typer.echo(text)
