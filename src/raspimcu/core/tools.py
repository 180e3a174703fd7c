"""Run external helper binaries (picotool, mpremote)."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from raspimcu.errors import ExecutableNotFoundError, ToolUnavailableError

logger = logging.getLogger(__name__)


def resolve_executable(default_name: str, custom_path: str | None = None) -> str:
    if not custom_path:
        return default_name
    if not Path(custom_path).exists():
        raise ExecutableNotFoundError(
            f"Specified {default_name} executable was not found: {custom_path}"
        )
    return custom_path


def run_tool(
    tool_name: str,
    command: str,
    args: list[str],
    timeout: float | None = None,
    interactive: bool = False,
) -> str:
    """Run ``command`` once and return its stripped stdout.

    Non-zero exits and timeouts surface as the usual ``subprocess`` errors.
    Interactive runs inherit the terminal and return an empty string.
    """
    cmd = [command, *args]
    logger.debug("Running %s (timeout=%s)", " ".join(cmd), timeout)
    try:
        if interactive:
            subprocess.run(cmd, check=True, timeout=timeout)
            return ""
        result = subprocess.run(
            cmd, check=True, capture_output=True, text=True, timeout=timeout
        )
    except FileNotFoundError as exc:
        raise ToolUnavailableError(
            f"{tool_name} is not installed or not available on the PATH."
        ) from exc
    return (result.stdout or "").strip()
