"""Configuring, launching and supervising browser-sync."""

from .address import server_address
from .config_file import (
    build_cli_command,
    build_config_command,
    build_settings,
    generate_config_file,
    render_config,
)
from .launcher import BrowserSyncSupervisor, run
from .locator import locate_browsersync, which
from .options import ServeOptions, resolve_options

__all__ = [
    "BrowserSyncSupervisor",
    "ServeOptions",
    "build_cli_command",
    "build_config_command",
    "build_settings",
    "generate_config_file",
    "locate_browsersync",
    "render_config",
    "resolve_options",
    "run",
    "server_address",
    "which",
]
