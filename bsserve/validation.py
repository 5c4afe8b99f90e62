import subprocess
from pathlib import Path
from typing import Optional

from .orchestration.exceptions import ValidationError
from .orchestration.logging_config import get_logger

logger = get_logger("validation")


def probe_browsersync_version(binary_path: str) -> str:
    try:
        result = subprocess.run(
            [binary_path, "--version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        logger.debug(f"Version probe of {binary_path} failed: {e}")
        return ""

    return result.stdout.strip()


def validate_browsersync_binary(binary_path: Optional[str]) -> str:
    if not binary_path:
        raise ValidationError(
            "Unable to locate browser-sync binary.", validation_type="version"
        )

    version = probe_browsersync_version(binary_path)
    if not version:
        raise ValidationError(
            f"Unable to locate browser-sync binary: {binary_path} is missing or not executable.",
            binary_path=binary_path,
            validation_type="version",
        )

    logger.debug(f"Using browser-sync {version} at {binary_path}")
    return version


def validate_destination(destination: str) -> Path:
    path = Path(destination)
    if not path.is_dir():
        raise ValidationError(
            f"Site destination {destination} does not exist or is not a directory.",
            validation_type="destination",
        )
    return path
