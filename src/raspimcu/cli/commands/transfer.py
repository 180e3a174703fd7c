from __future__ import annotations

from typing import Annotated

import typer

from raspimcu.cli.common import exit_on_error
from raspimcu.core import copy_from_device, copy_to_device


def push(
    source: Annotated[str, typer.Argument(help="Local file or directory")],
    mount_point: Annotated[str, typer.Argument(help="Mounted device volume")],
    target_path: Annotated[
        str | None, typer.Argument(help="Path on the device (defaults to source name)")
    ] = None,
) -> None:
    """Copy a file or directory to a device mounted in filesystem mode."""
    with exit_on_error():
        destination = copy_to_device(source, mount_point, target_path=target_path)
    typer.echo(f"Copied {source} -> {destination}")


def pull(
    mount_point: Annotated[str, typer.Argument(help="Mounted device volume")],
    source_path: Annotated[str, typer.Argument(help="Path on the device")],
    destination: Annotated[str, typer.Argument(help="Local destination")],
) -> None:
    """Copy a file or directory from the device to the local machine."""
    with exit_on_error():
        resolved = copy_from_device(mount_point, source_path, destination)
    typer.echo(f"Copied {source_path} -> {resolved}")


def register(app: typer.Typer) -> None:
    app.command()(push)
    app.command()(pull)
