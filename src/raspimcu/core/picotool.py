from __future__ import annotations

from raspimcu.models import RebootOptions

from .tools import resolve_executable, run_tool

PICOTOOL = "picotool"


def build_reboot_args(options: RebootOptions) -> list[str]:
    args = ["reboot", "-f"]
    if options.serial_number:
        args += ["--serial", options.serial_number]
    if options.bus is not None:
        args += ["--bus", str(options.bus)]
    if options.address is not None:
        args += ["--address", str(options.address)]
    if options.drive:
        args += ["--drive", options.drive]
    return args


def reboot_to_filesystem_mode(options: RebootOptions | None = None) -> str:
    """Ask picotool to reboot a board into BOOTSEL (UF2 mass-storage) mode."""
    options = options or RebootOptions()
    command = resolve_executable(PICOTOOL, options.picotool_path)
    return run_tool(
        PICOTOOL, command, build_reboot_args(options), timeout=options.timeout
    )


def get_picotool_version(
    picotool_path: str | None = None, timeout: float | None = None
) -> str:
    command = resolve_executable(PICOTOOL, picotool_path)
    return run_tool(PICOTOOL, command, ["version"], timeout=timeout)
