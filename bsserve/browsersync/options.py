"""Turning raw serve options into a complete ServeOptions record."""

import os
import secrets
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from bsserve.orchestration.exceptions import ConfigurationError
from bsserve.orchestration.logging_config import get_logger
from bsserve.validation import validate_browsersync_binary

from .locator import locate_browsersync

logger = get_logger("browsersync.options")

DEFAULT_PORT = 4000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_UI_PORT = 3001
DEFAULT_DESTINATION = "_site"
TEMPORARY_CONFIG_TEMPLATE = ".bs-config.{}.js"


@dataclass(frozen=True)
class ServeOptions:
    """Everything needed to configure and launch one browser-sync run."""

    host: str
    port: int
    ui_port: int
    destination_path: str
    binary_path: str
    use_https: bool = False
    open_browser: bool = False
    show_directory_listing: bool = False
    verbose: bool = False
    base_url: Optional[str] = None
    config_file_path: Optional[str] = None
    config_file_is_temporary: bool = False
    config_file_needs_generation: bool = False
    skip_initial_build: bool = False
    watch: bool = True
    incremental: bool = True

    @property
    def config_file_mode(self) -> bool:
        return self.config_file_path is not None


def temporary_config_path() -> str:
    """Random config file name in the working directory, 20 hex digits long."""
    return TEMPORARY_CONFIG_TEMPLATE.format(secrets.token_hex(10))


def _as_port(raw: Mapping[str, Any], key: str, default: int) -> int:
    value = raw[key] if key in raw else default
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid {key} {value!r}: expected a port number", config_key=key
        ) from e


def _as_flag(raw: Mapping[str, Any], key: str, default: bool) -> bool:
    value = raw[key] if key in raw else default
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"Invalid {key} {value!r}: expected true or false", config_key=key
        )
    return value


def resolve_options(
    raw: Mapping[str, Any],
    locator: Callable[[], str] = locate_browsersync,
    probe: Callable[[Optional[str]], str] = validate_browsersync_binary,
) -> ServeOptions:
    """Apply defaults to ``raw`` and validate the browser-sync binary.

    Defaults only fill keys that are absent from ``raw``. An explicit value is
    kept even when falsy, so ``{"open_url": False}`` or ``{"port": 0}`` survive.

    Args:
        raw: Option mapping keyed like the command line flags
            (``port``, ``host``, ``ui_port``, ``browsersync``, ``bs_config`` ...)
        locator: Called to find the binary when ``browsersync`` is absent
        probe: Version check run against the resolved binary

    Returns:
        The resolved options

    Raises:
        BinaryNotFoundError: If ``browsersync`` is absent and nothing is found
        ValidationError: If the binary does not answer ``--version``
        ConfigurationError: If a port is not a number or a flag is not a boolean
    """
    port = _as_port(raw, "port", DEFAULT_PORT)
    ui_port = _as_port(raw, "ui_port", DEFAULT_UI_PORT)
    host = str(raw["host"]) if "host" in raw else DEFAULT_HOST
    binary_path = raw["browsersync"] if "browsersync" in raw else locator()

    config_file_path = None
    is_temporary = False
    needs_generation = False
    if "bs_config" in raw:
        config_file_path = raw["bs_config"]
        if not config_file_path:
            config_file_path = temporary_config_path()
            is_temporary = True
        needs_generation = not os.path.exists(config_file_path)

    base_url = raw.get("baseurl") or None

    options = ServeOptions(
        host=host,
        port=port,
        ui_port=ui_port,
        destination_path=str(raw.get("destination") or DEFAULT_DESTINATION),
        binary_path=binary_path,
        use_https=_as_flag(raw, "https", False),
        open_browser=_as_flag(raw, "open_url", False),
        show_directory_listing=_as_flag(raw, "show_dir_listing", False),
        verbose=_as_flag(raw, "verbose", False),
        base_url=base_url,
        config_file_path=config_file_path,
        config_file_is_temporary=is_temporary,
        config_file_needs_generation=needs_generation,
        skip_initial_build=_as_flag(raw, "skip_initial_build", False),
        watch=_as_flag(raw, "watch", True),
        incremental=_as_flag(raw, "incremental", True),
    )

    probe(options.binary_path)

    if options.config_file_mode:
        logger.debug(
            f"Config file mode: {options.config_file_path} "
            f"(temporary={is_temporary}, generate={needs_generation})"
        )

    return options
