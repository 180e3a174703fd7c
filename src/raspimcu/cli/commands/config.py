from __future__ import annotations

import shutil

import typer

from raspimcu.cli.common import load_settings_or_exit, resolve_config_path_or_exit
from raspimcu.config import ToolConfig, render_settings_toml
from raspimcu.core import default_search_roots

app = typer.Typer(no_args_is_help=True)


def _tool_status(name: str, tool: ToolConfig) -> str:
    if tool.path:
        return f"{name}: {tool.path} (configured)"
    found = shutil.which(name)
    return f"{name}: {found} (PATH)" if found else f"{name}: not found on PATH"


@app.command("show")
def show_config() -> None:
    """Show the configuration file and the effective discovery settings."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    typer.echo(f"Config source: {path if exists else 'defaults'}")
    typer.echo(render_settings_toml(settings))

    roots = settings.discovery.search_roots or default_search_roots()
    typer.echo(f"# effective search roots: {', '.join(roots)}")
    typer.echo(f"# {_tool_status('picotool', settings.picotool)}")
    typer.echo(f"# {_tool_status('mpremote', settings.mpremote)}")


@app.command("path")
def config_path() -> None:
    """Print where the configuration file is looked up."""
    path, _exists = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(str(path))
