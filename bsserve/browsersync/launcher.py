"""Browser-sync process launcher and lifecycle management."""

import errno
import fcntl
import logging
import os
import pty
import signal
import subprocess
import termios
from typing import List, Optional

from bsserve.orchestration.error_handling import ErrorHandler
from bsserve.orchestration.exceptions import CleanupError, SpawnError, StreamReadError
from bsserve.orchestration.logging_config import get_logger, log_labelled
from bsserve.validation import validate_destination

from .address import UI, server_address
from .config_file import build_cli_command, build_config_command, generate_config_file
from .options import ServeOptions

CHILD_STOP_TIMEOUT = 5


def _acquire_controlling_terminal() -> None:
    """Make the pty slave on stdin the controlling terminal of the new session.

    Runs in the child between setsid() and exec. Closing the master then hangs
    up browser-sync even when the supervisor dies without cleaning up.
    """
    fcntl.ioctl(0, termios.TIOCSCTTY, 0)


class BrowserSyncSupervisor:
    """Runs one browser-sync process on a pseudo-terminal until it exits."""

    def __init__(self, options: ServeOptions):
        """Initialize the supervisor.

        Args:
            options: Resolved serve options
        """
        self.options = options
        self.process: Optional[subprocess.Popen] = None
        self.logger = get_logger("browsersync.launcher")
        self.error_handler = ErrorHandler()
        self._previous_handler = None
        self._config_file_removed = False

    def build_command(self) -> List[str]:
        """Return the browser-sync argument vector for the active mode.

        In config file mode the file is written first if it does not exist yet.
        """
        options = self.options
        if options.config_file_mode:
            if options.config_file_needs_generation:
                generate_config_file(options)
            return build_config_command(options.binary_path, options.config_file_path)

        return build_cli_command(options.destination_path, options)

    def run(self) -> int:
        """Start browser-sync and stream its output until it exits.

        Returns:
            The child's return code

        Raises:
            ValidationError: If the destination directory is missing
            SpawnError: If the process or its terminal cannot be created
        """
        validate_destination(self.options.destination_path)
        command = self.build_command()
        master_fd = self._spawn(command)

        self._install_interrupt_handler()
        try:
            log_labelled(
                self.logger, logging.INFO, "Server address:", server_address(self.options)
            )
            log_labelled(
                self.logger, logging.INFO, "UI address:", server_address(self.options, UI)
            )

            self._stream_output(master_fd)
            return self.process.wait()
        finally:
            self._stop_child()
            self._restore_interrupt_handler()

    def handle_interrupt(self, signum=signal.SIGINT, frame=None) -> None:
        """SIGINT handler: pass the interrupt on and drop our temporary config."""
        if self.process is not None:
            try:
                os.kill(self.process.pid, signal.SIGINT)
            except ProcessLookupError:
                self.logger.debug(f"browser-sync (pid {self.process.pid}) already exited")

        if self.options.config_file_is_temporary and not self._config_file_removed:
            self._config_file_removed = True
            self._remove_temporary_config()

    def _spawn(self, command: List[str]) -> int:
        """Start ``command`` with a pty as its stdio and return the master fd."""
        self.logger.debug(f"Starting: {' '.join(command)}")
        try:
            master_fd, slave_fd = pty.openpty()
        except OSError as e:
            raise SpawnError(
                "Unable to open a pseudo-terminal for browser-sync",
                command=command,
                details=str(e),
            ) from e

        try:
            self.process = subprocess.Popen(
                command,
                stdin=slave_fd,
                stdout=slave_fd,
                stderr=slave_fd,
                close_fds=True,
                start_new_session=True,
                preexec_fn=_acquire_controlling_terminal,
            )
        except (OSError, subprocess.SubprocessError) as e:
            os.close(master_fd)
            raise SpawnError(
                f"Failed to start browser-sync: {command[0]}",
                command=command,
                details=str(e),
            ) from e
        finally:
            os.close(slave_fd)

        return master_fd

    def _stop_child(self) -> None:
        """Terminate browser-sync if it is still running, killing it after a timeout."""
        process = self.process
        if process is None or process.poll() is not None:
            return

        self.logger.debug(f"Stopping browser-sync (pid {process.pid})")
        process.terminate()
        try:
            process.wait(timeout=CHILD_STOP_TIMEOUT)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()

    def _stream_output(self, master_fd: int) -> None:
        with open(master_fd, "r", encoding="utf-8", errors="replace") as stream:
            try:
                for line in stream:
                    self.logger.debug(line.rstrip())
            except OSError as e:
                # Linux reports EIO on the master once the child side is closed
                if e.errno == errno.EIO:
                    return
                self.error_handler.handle_error(
                    StreamReadError("Stopped reading browser-sync output", details=str(e))
                )

    def _remove_temporary_config(self) -> None:
        config_file = self.options.config_file_path
        log_labelled(
            self.logger,
            logging.INFO,
            "Deleting temporary browser-sync config file:",
            config_file,
        )
        try:
            os.remove(config_file)
        except OSError as e:
            self.error_handler.handle_error(
                CleanupError(
                    f"Could not delete {config_file}",
                    file_path=config_file,
                    details=str(e),
                )
            )

    def _install_interrupt_handler(self) -> None:
        self._previous_handler = signal.signal(signal.SIGINT, self.handle_interrupt)

    def _restore_interrupt_handler(self) -> None:
        previous = self._previous_handler
        if previous is None:
            previous = signal.SIG_DFL
        signal.signal(signal.SIGINT, previous)
        self._previous_handler = None


def run(options: ServeOptions) -> int:
    """Launch browser-sync for ``options`` and block until it exits."""
    return BrowserSyncSupervisor(options).run()
