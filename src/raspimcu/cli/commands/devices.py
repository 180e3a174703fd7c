from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from raspimcu.cli.common import exit_on_error, load_settings_or_exit
from raspimcu.core import RASPBERRY_PI_VENDOR_IDS, list_devices
from raspimcu.models import DeviceReport, EnumerationResult, SerialDevice
from raspimcu.utils.redaction import Redactor

logger = logging.getLogger(__name__)


def _render_table(
    result: EnumerationResult, redactor: Redactor, console: Console
) -> None:
    if not result.devices:
        console.print("No Raspberry Pi MCUs detected.")
    else:
        table = Table()
        table.add_column("ID", style="cyan")
        table.add_column("Status", style="green")
        table.add_column("Location")
        table.add_column("Serial / Board")
        table.add_column("Description")

        for device in result.devices:
            if isinstance(device, SerialDevice):
                location = redactor.redact_path(device.path)
                ident = redactor.redact_serial(device.serial_number)
            else:
                location = redactor.redact_path(device.mount_point)
                ident = device.board_id or ""
            table.add_row(
                redactor.redact_path(device.id),
                device.status,
                location,
                ident,
                device.description,
            )

        console.print(table)
        console.print(f"\n[green]Found {len(result.devices)} device(s)[/green]")

    if result.errors:
        console.print("[yellow]Warnings:[/yellow]")
        for entry in result.errors:
            console.print(f"  [{entry.source}] {entry.message}", markup=False)


def devices(
    as_json: Annotated[
        bool, typer.Option("--json", help="Output device information as JSON")
    ] = False,
    roots: Annotated[
        list[str] | None,
        typer.Option("--root", help="Directory to search for mounted volumes"),
    ] = None,
    redact: Annotated[
        bool, typer.Option("--redact", help="Redact serial numbers and user paths")
    ] = False,
) -> None:
    """List connected Raspberry Pi MCUs and their status."""
    settings = load_settings_or_exit()
    search_roots = roots or settings.discovery.search_roots or None
    vendor_ids = set(RASPBERRY_PI_VENDOR_IDS) | set(settings.discovery.extra_vendor_ids)
    logger.info("Searching roots=%s vendors=%s", search_roots, sorted(vendor_ids))

    with exit_on_error():
        result = asyncio.run(list_devices(search_roots, vendor_ids))

    if as_json:
        report = DeviceReport(
            devices=result.devices,
            errors=result.errors,
            generated_at=datetime.now(timezone.utc),
        )
        typer.echo(json.dumps(report.to_json_dict(), indent=2))
        return

    _render_table(result, Redactor(enabled=redact), Console())


def register(app: typer.Typer) -> None:
    app.command()(devices)
