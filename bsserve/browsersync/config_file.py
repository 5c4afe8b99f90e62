"""Rendering ServeOptions as browser-sync arguments or a bs-config.js file."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from bsserve.orchestration.logging_config import get_logger, log_labelled

from .options import ServeOptions

logger = get_logger("browsersync.config")

CONFIG_PREFIX = "module.exports = "
CONFIG_SUFFIX = ";"


def build_settings(options: ServeOptions) -> Dict[str, Any]:
    """Build the browser-sync settings object for ``options``.

    Args:
        options: Resolved serve options

    Returns:
        Settings as a JSON-serialisable dict
    """
    destination = options.destination_path

    settings: Dict[str, Any] = {
        "server": {
            "baseDir": destination,
        },
        "files": destination,
        "port": options.port,
        "host": options.host,
        "ui": {
            "port": options.ui_port,
        },
    }

    # Requests under the base url are served from the site root
    base_url = options.base_url
    if base_url and base_url.strip():
        settings["server"]["routes"] = {base_url: destination}

    if options.use_https:
        settings["https"] = True
    settings["open"] = "local" if options.open_browser else False
    if options.show_directory_listing:
        settings["server"]["directory"] = True
    if options.verbose:
        settings["logLevel"] = "debug"

    return settings


def render_config(settings: Dict[str, Any]) -> str:
    return f"{CONFIG_PREFIX}{json.dumps(settings)}{CONFIG_SUFFIX}"


def generate_config_file(options: ServeOptions) -> Path:
    """Write the bs-config.js file for ``options``, replacing any old content.

    Args:
        options: Resolved serve options; ``config_file_path`` must be set

    Returns:
        Path of the written file
    """
    config_file = Path(options.config_file_path)
    settings = build_settings(options)

    log_labelled(logger, logging.INFO, "Generating browser-sync config file:", config_file)
    log_labelled(logger, logging.DEBUG, "Configuration for browser-sync:", settings)
    config_file.write_text(render_config(settings), encoding="utf-8")

    return config_file


def build_config_command(binary_path: str, config_file: str) -> List[str]:
    return [binary_path, "start", "--config", str(config_file)]


def build_cli_command(destination: str, options: ServeOptions) -> List[str]:
    """Build the browser-sync argument vector for command line mode."""
    cmd = [
        options.binary_path,
        "start",
        "--server",
        destination,
        "--files",
        destination,
        "--port",
        str(options.port),
        "--host",
        options.host,
        "--ui-port",
        str(options.ui_port),
    ]

    if options.use_https:
        cmd.append("--https")
    if not options.open_browser:
        cmd.append("--no-open")
    if options.show_directory_listing:
        cmd.append("--directory")

    return cmd
