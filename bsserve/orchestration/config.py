"""Configuration management for bsserve."""

import os
import shlex
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from bsserve.orchestration.exceptions import ConfigurationError


DEFAULT_CONFIG_FILENAME = "bsserve.toml"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    level: str = "INFO"
    format_string: str = "%(levelname)-8s | %(name)-28s | %(message)s"


@dataclass
class SiteConfig:
    """Where the built site lives and how it is mounted."""

    destination: str = "_site"
    baseurl: str = ""


@dataclass
class BuildConfig:
    """Site build command settings."""

    command: List[str] = field(default_factory=lambda: ["jekyll", "build"])
    destination_flag: str = "--destination"
    watch_flag: str = "--watch"
    incremental_flag: str = "--incremental"
    watcher_stop_timeout: int = 5


@dataclass
class BSServeConfig:
    """Complete configuration for bsserve."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    site: SiteConfig = field(default_factory=SiteConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    serve: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and environment variable overrides."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to TOML configuration file. When None, the file
                ``bsserve.toml`` in the working directory is used if present.
        """
        self.explicit = config_path is not None
        self.config_path = Path(config_path or DEFAULT_CONFIG_FILENAME)
        self._config: Optional[BSServeConfig] = None

    def load_config(self) -> BSServeConfig:
        """Load configuration from file and environment variables.

        Returns:
            Complete configuration object
        """
        if self._config is not None:
            return self._config

        if self.config_path.exists():
            config_data = self._load_toml_config()
        elif self.explicit:
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}",
                details=f"Create one with: bsserve --create-config {self.config_path}",
            )
        else:
            config_data = {}

        config_data = self._apply_env_overrides(config_data)

        self._config = self._create_config_from_dict(config_data)

        return self._config

    def _load_toml_config(self) -> Dict:
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {self.config_path}: {e}"
            ) from e

    def _apply_env_overrides(self, config_data: Dict) -> Dict:
        """Apply environment variable overrides to configuration.

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied
        """
        env_mappings = {
            "BSSERVE_LOG_LEVEL": ("logging", "level"),
            "BSSERVE_DESTINATION": ("site", "destination"),
            "BSSERVE_BASEURL": ("site", "baseurl"),
            "BSSERVE_BUILD_COMMAND": ("build", "command"),
            "BSSERVE_BROWSERSYNC": ("serve", "browsersync"),
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                config_data.setdefault(section, {})[key] = value

        return config_data

    def _create_config_from_dict(self, config_data: Dict) -> BSServeConfig:
        """Create configuration object from dictionary.

        Args:
            config_data: Configuration dictionary

        Returns:
            Configuration object
        """
        logging_data = config_data.get("logging", {})
        site_data = config_data.get("site", {})
        build_data = dict(config_data.get("build", {}))

        # Commands may be written as a single string in TOML or the environment
        if isinstance(build_data.get("command"), str):
            build_data["command"] = shlex.split(build_data["command"])

        logging_config = LoggingConfig(
            **{
                k: v
                for k, v in logging_data.items()
                if k in LoggingConfig.__dataclass_fields__
            }
        )
        site_config = SiteConfig(
            **{k: v for k, v in site_data.items() if k in SiteConfig.__dataclass_fields__}
        )
        build_config = BuildConfig(
            **{
                k: v
                for k, v in build_data.items()
                if k in BuildConfig.__dataclass_fields__
            }
        )

        return BSServeConfig(
            logging=logging_config,
            site=site_config,
            build=build_config,
            serve=dict(config_data.get("serve", {})),
        )

    def get_config(self) -> BSServeConfig:
        """Get current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def save_config_template(self, output_path: Union[str, Path]) -> None:
        """Save a template configuration file.

        Args:
            output_path: Path to save template file
        """
        template_content = """# bsserve configuration

[logging]
level = "INFO"

[site]
destination = "_site"
# URL prefix the site is served under, e.g. "/docs"
baseurl = ""

[build]
command = ["bundle", "exec", "jekyll", "build"]
destination_flag = "--destination"
watch_flag = "--watch"
incremental_flag = "--incremental"

# Values used when the matching command line flag is not given
[serve]
# host = "127.0.0.1"
# port = 4000
# ui_port = 3001
# https = false
# open_url = false
# show_dir_listing = false
# browsersync = "node_modules/.bin/browser-sync"
# bs_config = ""  # empty: generate a temporary bs-config file per run
"""

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            f.write(template_content)


def get_config(config_path: Optional[Union[str, Path]] = None) -> BSServeConfig:
    """Load configuration from ``config_path`` or the default location.

    Args:
        config_path: Path to configuration file, or None for ``bsserve.toml``

    Returns:
        Configuration object
    """
    return ConfigManager(config_path).get_config()
