"""Locating the browser-sync executable."""

import os
from pathlib import Path
from typing import List, Optional, Union

from bsserve.orchestration.exceptions import BinaryNotFoundError

DEFAULT_BROWSERSYNC_PATH = "node_modules/.bin/browser-sync"
BROWSERSYNC_COMMAND = "browser-sync"


def _is_executable_file(path: Union[str, Path]) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def which(
    cmd: str, path: Optional[str] = None, pathext: Optional[str] = None
) -> Optional[str]:
    """Find ``cmd`` in the executable search path.

    Every ``PATH`` entry is tried with every ``PATHEXT`` suffix; when
    ``PATHEXT`` is unset only the bare name is tried.

    Args:
        cmd: Executable name
        path: Search path, defaults to ``$PATH``
        pathext: ``;``-separated suffixes, defaults to ``$PATHEXT``

    Returns:
        The first matching path, or None
    """
    if path is None:
        path = os.environ.get("PATH", "")
    if pathext is None:
        pathext = os.environ.get("PATHEXT")

    exts: List[str] = pathext.split(";") if pathext else [""]

    directories = path.split(os.pathsep) if path else []
    for directory in directories:
        # An empty entry means the current directory
        directory = directory or os.curdir
        for ext in exts:
            candidate = os.path.join(directory, f"{cmd}{ext}")
            if _is_executable_file(candidate):
                return candidate

    return None


def locate_browsersync(cwd: Optional[Union[str, Path]] = None) -> str:
    """Return the browser-sync binary to run.

    The project-local ``node_modules`` install wins over anything on ``PATH``.

    Raises:
        BinaryNotFoundError: If no executable is found
    """
    local = Path(cwd or ".") / DEFAULT_BROWSERSYNC_PATH
    if _is_executable_file(local):
        return DEFAULT_BROWSERSYNC_PATH if cwd is None else str(local)

    found = which(BROWSERSYNC_COMMAND)
    if found is None:
        raise BinaryNotFoundError(
            searched=[DEFAULT_BROWSERSYNC_PATH, f"$PATH/{BROWSERSYNC_COMMAND}"]
        )
    return found
