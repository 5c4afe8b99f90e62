"""Running the static site build around a browser-sync session."""

import subprocess
from typing import List, Optional

from bsserve.orchestration.config import BuildConfig
from bsserve.orchestration.exceptions import SiteBuildError
from bsserve.orchestration.logging_config import get_logger


class SiteBuilder:
    """Runs the configured build command once, or in watch mode in the background."""

    def __init__(self, config: BuildConfig, destination: str, incremental: bool = True):
        """Initialize the builder.

        Args:
            config: Build command settings
            destination: Directory the site is built into
            incremental: Pass the incremental flag to the build command
        """
        self.config = config
        self.destination = destination
        self.incremental = incremental
        self.watcher: Optional[subprocess.Popen] = None
        self.logger = get_logger("site.builder")

    def build_command(self, watch: bool = False) -> List[str]:
        cmd = [*self.config.command, self.config.destination_flag, self.destination]
        if self.incremental:
            cmd.append(self.config.incremental_flag)
        if watch:
            cmd.append(self.config.watch_flag)
        return cmd

    def build(self) -> None:
        """Run one build and wait for it.

        Raises:
            SiteBuildError: If the command cannot be started or fails
        """
        cmd = self.build_command()
        self.logger.info(f"Building site: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise SiteBuildError(
                f"Could not run site build command {cmd[0]}", command=cmd, details=str(e)
            ) from e

        for line in result.stdout.splitlines():
            self.logger.debug(line.rstrip())

        if result.returncode != 0:
            raise SiteBuildError(
                f"Site build failed with exit code {result.returncode}",
                command=cmd,
                returncode=result.returncode,
                details=result.stderr.strip() or None,
            )

    def start_watcher(self) -> subprocess.Popen:
        """Start the build command in watch mode in the background."""
        cmd = self.build_command(watch=True)
        self.logger.info(f"Watching site sources: {' '.join(cmd)}")
        try:
            self.watcher = subprocess.Popen(
                cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
            )
        except OSError as e:
            raise SiteBuildError(
                f"Could not start site watcher {cmd[0]}", command=cmd, details=str(e)
            ) from e
        return self.watcher

    def stop_watcher(self) -> None:
        """Stop the background watcher, if one is running."""
        if self.watcher is None:
            return

        if self.watcher.poll() is None:
            self.watcher.terminate()
            try:
                self.watcher.wait(timeout=self.config.watcher_stop_timeout)
            except subprocess.TimeoutExpired:
                self.watcher.kill()
                self.watcher.wait()
        self.logger.debug("Site watcher stopped")
        self.watcher = None
