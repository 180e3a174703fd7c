from __future__ import annotations

from typing import Annotated

import typer

from raspimcu.cli.common import exit_on_error, load_settings_or_exit
from raspimcu.core import (
    download_from_micropython,
    run_micropython,
    upload_to_micropython,
)

app = typer.Typer(
    help="Work with MicroPython boards in serial mode via mpremote.",
    no_args_is_help=True,
)

MpremoteOption = Annotated[
    str | None, typer.Option("--mpremote", help="Custom mpremote executable")
]


@app.command("put")
def put(
    port: Annotated[str, typer.Argument(help="Serial port, e.g. /dev/ttyACM0")],
    source: Annotated[str, typer.Argument(help="Local file or directory")],
    target: Annotated[str, typer.Argument(help="Path on the device")],
    mpremote: MpremoteOption = None,
) -> None:
    """Copy a local file or directory onto the board's filesystem."""
    settings = load_settings_or_exit()
    with exit_on_error():
        result = upload_to_micropython(
            port,
            source,
            target,
            mpremote_path=mpremote or settings.mpremote.path,
            timeout=settings.mpremote.timeout,
        )
    typer.echo(f"Uploaded {result.source} -> {result.target}")


@app.command("get")
def get(
    port: Annotated[str, typer.Argument(help="Serial port, e.g. /dev/ttyACM0")],
    remote_path: Annotated[str, typer.Argument(help="Path on the device")],
    destination: Annotated[str, typer.Argument(help="Local destination")],
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Copy a directory tree")
    ] = False,
    mpremote: MpremoteOption = None,
) -> None:
    """Copy a file from the board's filesystem to the local machine."""
    settings = load_settings_or_exit()
    with exit_on_error():
        result = download_from_micropython(
            port,
            remote_path,
            destination,
            recursive=recursive,
            mpremote_path=mpremote or settings.mpremote.path,
            timeout=settings.mpremote.timeout,
        )
    typer.echo(f"Downloaded {result.source} -> {result.target}")


@app.command("exec")
def exec_code(
    port: Annotated[str, typer.Argument(help="Serial port, e.g. /dev/ttyACM0")],
    code: Annotated[str, typer.Argument(help="Python source to execute")],
    mpremote: MpremoteOption = None,
) -> None:
    """Execute a snippet on the board and print its output."""
    settings = load_settings_or_exit()
    with exit_on_error():
        output = run_micropython(
            port,
            code,
            mpremote_path=mpremote or settings.mpremote.path,
            timeout=settings.mpremote.timeout,
        )
    if output:
        typer.echo(output)


@app.command("repl")
def repl(
    port: Annotated[str, typer.Argument(help="Serial port, e.g. /dev/ttyACM0")],
    mpremote: MpremoteOption = None,
) -> None:
    """Open an interactive REPL on the board."""
    settings = load_settings_or_exit()
    with exit_on_error():
        run_micropython(port, mpremote_path=mpremote or settings.mpremote.path)
