import argparse
import sys
from typing import Any, Dict, List, Optional

from .browsersync.launcher import BrowserSyncSupervisor
from .browsersync.options import resolve_options
from .orchestration.config import BSServeConfig, ConfigManager, LoggingConfig, get_config
from .orchestration.error_handling import ErrorHandler
from .orchestration.exceptions import BSServeError
from .orchestration.exit_codes import ExitCode, ExitCodeManager
from .orchestration.logging_config import get_logger, setup_logging
from .site.builder import SiteBuilder

# Keys forwarded from the command line into the raw serve options
RAW_OPTION_KEYS = (
    "https",
    "host",
    "open_url",
    "port",
    "show_dir_listing",
    "skip_initial_build",
    "ui_port",
    "browsersync",
    "bs_config",
    "destination",
    "baseurl",
    "verbose",
    "watch",
    "incremental",
)

logger = get_logger("cli")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsserve",
        description="Serve a static site using Browsersync.",
        argument_default=argparse.SUPPRESS,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bsserve
  bsserve --port 4001 --open-url
  bsserve --bs-config                # temporary bs-config file, deleted on Ctrl-C
  bsserve --bs-config bs-config.js   # generated once, kept
        """,
    )

    parser.add_argument(
        "-c", "--config", default=None, help="Path to bsserve.toml configuration file"
    )
    parser.add_argument(
        "--create-config",
        default=None,
        help="Create a configuration template at the specified path and exit",
    )

    parser.add_argument("--https", action="store_true", help="Use HTTPS")
    parser.add_argument("-H", "--host", help="Host to bind to")
    parser.add_argument(
        "-o",
        "--open-url",
        dest="open_url",
        action="store_true",
        help="Launch your site in a browser",
    )
    parser.add_argument("-P", "--port", type=int, help="Port to listen on")
    parser.add_argument(
        "--show-dir-listing",
        dest="show_dir_listing",
        action="store_true",
        help="Show a directory listing instead of loading your index file.",
    )
    parser.add_argument(
        "--skip-initial-build",
        dest="skip_initial_build",
        action="store_true",
        help="Skips the initial site build which occurs before the server is started.",
    )
    parser.add_argument(
        "--ui-port", dest="ui_port", type=int, help="The port for Browsersync UI to run on"
    )
    parser.add_argument(
        "--browser-sync",
        dest="browsersync",
        metavar="PATH",
        help="Specify the path to the Browsersync binary if in custom location.",
    )
    parser.add_argument(
        "--bs-config",
        dest="bs_config",
        nargs="?",
        const="",
        metavar="PATH",
        help="Use a bs-config.js file instead of cli args for browser-sync. "
        "If no PATH is given, a temporary file is generated and deleted on exit. "
        "If a PATH is given, and the file does not exist, it will be generated.",
    )
    parser.add_argument("-d", "--destination", help="Directory the site is built into")
    parser.add_argument("-b", "--baseurl", help="Serve the website from the given base URL")
    parser.add_argument(
        "--no-watch",
        dest="watch",
        action="store_false",
        help="Do not rebuild the site when sources change",
    )
    parser.add_argument(
        "--no-incremental",
        dest="incremental",
        action="store_false",
        help="Do not pass the incremental flag to the site build",
    )
    parser.add_argument(
        "-V", "--verbose", action="store_true", help="Print verbose output"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: from config, INFO)",
    )

    return parser


def collect_raw_options(args: argparse.Namespace, config: BSServeConfig) -> Dict[str, Any]:
    """Merge config file values and command line flags into raw serve options.

    Flags given on the command line win over the ``[serve]`` and ``[site]``
    tables. Flags that were not given are left out entirely.
    """
    raw: Dict[str, Any] = {
        "destination": config.site.destination,
        "baseurl": config.site.baseurl,
    }
    raw.update(config.serve)

    for key in RAW_OPTION_KEYS:
        if hasattr(args, key):
            raw[key] = getattr(args, key)

    return raw


def run_serve(args: argparse.Namespace, config: BSServeConfig) -> int:
    """Build the site and run browser-sync until it exits."""
    options = resolve_options(collect_raw_options(args, config))

    builder = SiteBuilder(config.build, options.destination_path, options.incremental)
    if options.skip_initial_build:
        logger.info("Skipping initial site build")
    else:
        builder.build()

    if options.watch:
        builder.start_watcher()

    try:
        returncode = BrowserSyncSupervisor(options).run()
    finally:
        builder.stop_watcher()

    return ExitCodeManager().get_exit_code_for_returncode(returncode)


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.create_config:
        try:
            ConfigManager(args.create_config).save_config_template(args.create_config)
        except OSError as e:
            print(f"❌ Failed to create config file: {e}")
            return ExitCode.GENERAL_ERROR
        print(f"✅ Configuration template created: {args.create_config}")
        return ExitCode.SUCCESS

    error_handler = ErrorHandler()
    exit_codes = ExitCodeManager()

    try:
        config = get_config(args.config)
    except BSServeError as e:
        setup_logging()
        info = error_handler.handle_error(e)
        return exit_codes.get_exit_code_for_error(info.category, info.severity, info.message)

    log_level = args.log_level
    if log_level is None:
        log_level = "DEBUG" if getattr(args, "verbose", False) else config.logging.level
    setup_logging(
        LoggingConfig(level=log_level, format_string=config.logging.format_string)
    )

    try:
        return run_serve(args, config)
    except BSServeError as e:
        info = error_handler.handle_error(e)
        return exit_codes.get_exit_code_for_error(info.category, info.severity, info.message)


if __name__ == "__main__":
    sys.exit(main())
