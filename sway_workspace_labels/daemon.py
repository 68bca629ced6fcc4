"""Main daemon entry point with systemd integration.

Loads the glyph configuration, connects to sway, labels every
workspace once and then relabels on every window, workspace and binding
event until sway goes away or a signal stops the loop.
"""

import argparse
import contextlib
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Iterable, Optional

try:
    from systemd import journal, daemon as sd_daemon
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from .config import ConfigLoader
from .connection import SwaySession
from .errors import LabelerError
from .reactor import LabelReactor

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _suppress_stderr_fd():
    """Suppress stderr at the file descriptor level.

    systemd-python writes warnings straight to file descriptor 2, bypassing
    sys.stderr.
    """
    stderr_fd = sys.stderr.fileno()
    saved_stderr_fd = os.dup(stderr_fd)

    devnull_fd = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull_fd, stderr_fd)
    os.close(devnull_fd)

    try:
        yield
    finally:
        os.dup2(saved_stderr_fd, stderr_fd)
        os.close(saved_stderr_fd)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging to systemd journal or stderr."""
    log_level = "DEBUG" if verbose else os.environ.get("LOG_LEVEL", "INFO").upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if SYSTEMD_AVAILABLE and os.environ.get("JOURNAL_STREAM"):
        with _suppress_stderr_fd():
            handler = journal.JournalHandler(SYSLOG_IDENTIFIER="sway-workspace-labels")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={log_level}")


def notify_ready() -> None:
    """Send READY=1 to systemd when running as a notify service."""
    if SYSTEMD_AVAILABLE:
        with _suppress_stderr_fd():
            sd_daemon.notify("READY=1")
        logger.debug("Sent READY=1 to systemd")


class WorkspaceLabelDaemon:
    """Keeps sway workspace names in sync with their contents."""

    def __init__(self, config_path: Optional[Path] = None, dry_run: bool = False):
        """
        Initialize the daemon.

        Args:
            config_path: Glyph configuration file (defaults to the XDG location)
            dry_run: Log rename commands instead of sending them
        """
        self.loader = ConfigLoader(config_path)
        self.session = SwaySession(dry_run=dry_run)
        self.reactor: Optional[LabelReactor] = None

    def setup(self) -> LabelReactor:
        """Load configuration and connect to sway.

        Raises:
            ConfigLoadError: If the configuration file is invalid
            SwayIPCError: If sway is not reachable
        """
        config = self.loader.load()
        self.session.connect()
        self.reactor = LabelReactor(self.session, config)
        return self.reactor

    def run_once(self) -> None:
        """Label the focused workspace and return."""
        reactor = self.reactor or self.setup()
        reactor.relabel_focused()

    def run(self) -> None:
        """Label every workspace, then follow the event stream."""
        reactor = self.reactor or self.setup()
        try:
            reactor.relabel_all()
        except LabelerError as e:
            logger.warning(f"Initial labeling skipped: {e.message}")

        self.session.subscribe(reactor)
        notify_ready()

        def shutdown_handler(signum, frame):
            logger.info(f"Received signal {signum}, shutting down")
            self.session.quit()

        signal.signal(signal.SIGTERM, shutdown_handler)
        signal.signal(signal.SIGINT, shutdown_handler)

        logger.info("Daemon started")
        self.session.run()
        logger.info("Event stream ended")


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sway-workspace-labels",
        description="Rename sway workspaces after their focused application and layout",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Glyph configuration file (default: $XDG_CONFIG_HOME/sway-workspace-labels/config.toml)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log rename commands instead of sending them",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Label the focused workspace and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 = success, 1 = startup failure)
    """
    args = parse_args(argv)
    setup_logging(args.verbose)

    daemon = WorkspaceLabelDaemon(config_path=args.config, dry_run=args.dry_run)
    try:
        daemon.setup()
        if args.once:
            daemon.run_once()
        else:
            daemon.run()
    except LabelerError as e:
        logger.error(f"Fatal error: {e.message}")
        if e.suggestion:
            logger.error(f"  → {e.suggestion}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
