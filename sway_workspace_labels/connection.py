"""Sway IPC session built on i3ipc.

Wraps a synchronous ``i3ipc.Connection``: fetches tree snapshots, submits
rename commands and feeds window/workspace/binding events to the reactor.
i3ipc dispatches events one at a time from ``main()``, so each labeling cycle
finishes before the next event is read.
"""

import logging
from typing import Optional

import i3ipc
from i3ipc import Event

from .errors import ErrorCode, SwayIPCError, TreeIntegrityError
from .models import Node
from .reactor import LabelReactor

logger = logging.getLogger(__name__)


def _payload(con) -> Optional[Node]:
    """Convert the container carried by an event, dropping malformed ones."""
    if con is None:
        return None
    try:
        return Node.from_ipc(con.ipc_data)
    except TreeIntegrityError as e:
        logger.error(f"Ignoring event payload: {e.message}")
        return None


class SwaySession:
    """Fetch/submit transport and event source for the labeler."""

    def __init__(self, conn: Optional[i3ipc.Connection] = None, dry_run: bool = False) -> None:
        """
        Initialize the session.

        Args:
            conn: Existing connection (a new one is opened by connect())
            dry_run: Log rename commands instead of sending them
        """
        self.conn = conn
        self.dry_run = dry_run

    def connect(self) -> "SwaySession":
        """Open the IPC connection.

        Raises:
            SwayIPCError: If the sway socket cannot be reached
        """
        try:
            self.conn = i3ipc.Connection()
            version = self.conn.get_version()
        except Exception as e:
            raise SwayIPCError("connect", str(e)) from e

        logger.info(f"Connected to {version.human_readable}")
        return self

    def get_tree(self) -> Node:
        """Fetch a fresh snapshot of the window tree."""
        try:
            reply = self.conn.get_tree()
        except Exception as e:
            raise SwayIPCError("get_tree", str(e)) from e
        return Node.from_ipc(reply.ipc_data)

    def command(self, command: str) -> None:
        """Run a sway command, raising if sway rejects it."""
        if self.dry_run:
            logger.info(f"[dry-run] {command}")
            return

        try:
            replies = self.conn.command(command)
        except Exception as e:
            raise SwayIPCError("command", str(e)) from e

        failures = [reply.error for reply in replies if not reply.success]
        if failures:
            raise SwayIPCError(
                "command",
                f"{command!r}: {'; '.join(str(f) for f in failures)}",
                code=ErrorCode.RENAME_FAILED,
            )

    def subscribe(self, reactor: LabelReactor) -> None:
        """Route window, workspace and binding events to ``reactor``."""

        def on_window(conn, event):
            reactor.handle("window", event.change, _payload(event.container))

        def on_workspace(conn, event):
            reactor.handle("workspace", event.change, _payload(event.current))

        def on_binding(conn, event):
            reactor.handle("binding", event.change)

        self.conn.on(Event.WINDOW, on_window)
        self.conn.on(Event.WORKSPACE, on_workspace)
        self.conn.on(Event.BINDING, on_binding)
        logger.info("Subscribed to sway event stream (window, workspace, binding)")

    def run(self) -> None:
        """Dispatch events until the stream ends or main_quit() is called."""
        self.conn.main()

    def quit(self) -> None:
        if self.conn is not None:
            self.conn.main_quit()
