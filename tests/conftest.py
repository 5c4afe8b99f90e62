"""Global test configuration and fixtures."""

import logging
import stat
from pathlib import Path

import pytest

from bsserve.browsersync.options import ServeOptions

VERSION_PROBE = 'if [ "$1" = "--version" ]; then echo "2.29.3"; exit 0; fi\n'


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def reset_bsserve_logger():
    """Undo setup_logging() so records reach pytest's handlers."""
    yield
    logger = logging.getLogger("bsserve")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Temporary working directory with a built ``_site`` folder."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "_site").mkdir()
    (tmp_path / "_site" / "index.html").write_text("<h1>hello</h1>")
    return tmp_path


@pytest.fixture
def make_script(workdir):
    """Write an executable shell script into the working directory."""

    def _make(name: str, body: str, version_probe: bool = True) -> Path:
        return _write_script(
            workdir / name, (VERSION_PROBE if version_probe else "") + body
        )

    return _make


@pytest.fixture
def fake_browsersync(make_script):
    """A browser-sync stand-in that echoes its arguments and exits."""
    return make_script(
        "browser-sync",
        'echo "[Browsersync] Access URLs:"\necho "args: $*"\nexit 0\n',
    )


@pytest.fixture
def silent_browsersync(make_script):
    """A binary that prints nothing for --version."""
    return make_script("silent-browser-sync", "exit 0\n", version_probe=False)


@pytest.fixture
def make_options(workdir, fake_browsersync):
    """Build ServeOptions with test defaults."""

    def _make(**overrides):
        values = dict(
            host="127.0.0.1",
            port=4000,
            ui_port=3001,
            destination_path=str(workdir / "_site"),
            binary_path=str(fake_browsersync),
        )
        values.update(overrides)
        return ServeOptions(**values)

    return _make
