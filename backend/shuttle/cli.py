"""
Command line entry point.

Usage:
    shuttle
    shuttle --config /etc/shuttle/conf.yml
    shuttle --log-level debug
    python -m shuttle

Without --config, the configuration is read from conf/conf.yml next to the
running program.
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from .config.errors import ConfigLoadError
from .config.loader import default_config_path, load_config
from .service import ShuttleService
from .watchfolders.errors import WatchSubsystemError

logger = logging.getLogger("shuttle")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ["debug", "info", "warning", "error"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shuttle",
        description="Watch folders, wait for new files to finish writing, then move them.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Configuration file (default: {default_config_path()})",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging verbosity (default: info)",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run Shuttle until interrupted.

    Returns:
        Exit code (0 = clean shutdown, 1 = fatal startup error)
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
    except ConfigLoadError as e:
        logger.error(f"Unable to read configuration: {e}")
        return 1

    service = ShuttleService(config)

    def _handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, shutting down...")
        service.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    try:
        service.start()
    except WatchSubsystemError as e:
        logger.error(f"Unable to start watcher: {e}")
        service.close()
        return 1

    try:
        service.run_forever()
    finally:
        service.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
