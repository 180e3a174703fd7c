from __future__ import annotations

from typing import Annotated

import typer

from raspimcu.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands import firmware as firmware_cmd
from .commands import mpy as mpy_cmd
from .commands.devices import register as register_devices
from .commands.init import register as register_init
from .commands.mode import register as register_mode
from .commands.transfer import register as register_transfer

app = typer.Typer(
    help="Manage Raspberry Pi microcontroller boards from the command line.",
    no_args_is_help=True,
)

app.add_typer(config_cmd.app, name="config", help="Inspect configuration.")
app.add_typer(firmware_cmd.app, name="firmware")
app.add_typer(mpy_cmd.app, name="mpy")

register_init(app)
register_devices(app)
register_mode(app)
register_transfer(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """raspimcu CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"raspimcu version {get_version('raspimcu')}")
        raise typer.Exit()
