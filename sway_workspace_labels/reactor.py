"""Event reactor: maps sway events to labeling cycles.

Every cycle fetches a fresh tree snapshot, locates the window and its
workspace, resolves glyphs, composes the label and renames the workspace.
Nothing is carried over between cycles, so duplicate or reordered events
converge on the same label.
"""

import logging
from enum import Enum
from typing import List, Optional, Protocol

from .composer import compose_label, placeholder_label, rename_command
from .config import DEFAULT_CONFIG, LabelConfig
from .errors import (
    ErrorCode,
    LabelerError,
    ParentNotFound,
    TreeIntegrityError,
    is_lookup_error,
)
from .locator import (
    find_focus_leaf,
    find_focused,
    find_parent,
    find_workspace,
    iter_workspaces,
)
from .models import Node
from .resolver import EMPTY_GLYPH, resolve_app_glyph, resolve_layout_glyph

logger = logging.getLogger(__name__)


class Action(Enum):
    """What a sway event asks the reactor to do."""
    RECOMPUTE_WINDOW = "recompute_window"
    RECOMPUTE_FOCUSED = "recompute_focused"
    ASSIGN_PLACEHOLDER = "assign_placeholder"
    IGNORE = "ignore"


WINDOW_CHANGES = {"new", "focus", "title", "move", "floating"}
WORKSPACE_PLACEHOLDER_CHANGES = {"init", "reload"}
WORKSPACE_FOCUS_CHANGES = {"focus", "move"}


def classify(event_type: str, change: Optional[str]) -> Action:
    """Map an event type (window/workspace/binding) and its change to an Action."""
    if event_type == "window":
        if change in WINDOW_CHANGES:
            return Action.RECOMPUTE_WINDOW
        if change == "close":
            return Action.RECOMPUTE_FOCUSED
    elif event_type == "workspace":
        if change in WORKSPACE_PLACEHOLDER_CHANGES:
            return Action.ASSIGN_PLACEHOLDER
        if change in WORKSPACE_FOCUS_CHANGES:
            return Action.RECOMPUTE_FOCUSED
    elif event_type == "binding":
        # Bindings can change layout without emitting a window event
        return Action.RECOMPUTE_FOCUSED
    return Action.IGNORE


class Session(Protocol):
    """Transport to the window manager."""

    def get_tree(self) -> Node: ...

    def command(self, command: str) -> None: ...


def _workspace_number(workspace: Node) -> int:
    number = workspace.workspace_number
    # Sway reports -1 for names without a leading number
    if number is None or number < 0:
        raise TreeIntegrityError(
            f"workspace {workspace.workspace_label!r} has no number",
            node_id=workspace.id,
            code=ErrorCode.WORKSPACE_INCOMPLETE,
        )
    return number


def build_label(
    tree: Node,
    window: Node,
    config: LabelConfig = DEFAULT_CONFIG,
    workspace: Optional[Node] = None,
) -> str:
    """Compute the label of the workspace holding ``window``.

    Args:
        tree: Snapshot the window belongs to
        window: Focused or event window; may be the workspace itself
        config: Glyph and style tables
        workspace: Workspace already located for ``window`` in ``tree``

    Returns:
        Markup label for the workspace

    Raises:
        WorkspaceNotFound: If the window is outside every labeled workspace
        TreeIntegrityError: If the workspace has no usable number
    """
    if workspace is None:
        workspace = find_workspace(tree, window)
    number = _workspace_number(workspace)
    app_glyph = resolve_app_glyph(window.app_identity, config)

    if window.id == workspace.id:
        return compose_label(number, app_glyph, EMPTY_GLYPH, None, True, config)

    try:
        parent = find_parent(tree, window)
    except ParentNotFound:
        # Window not in this snapshot: it is its own container
        parent = window

    shape = window
    if parent.is_floating and not window.is_floating and len(parent.children) == 1:
        # i3 wraps each floating window in a floating_con
        shape = parent
        parent = find_parent(tree, shape)

    siblings = parent.floating_children if shape.is_floating else parent.children
    layout_glyph = resolve_layout_glyph(shape, parent, len(siblings), siblings, config)
    return compose_label(number, app_glyph, layout_glyph, window.title, False, config)


def _in_snapshot(tree: Node, target: Node) -> Node:
    """Prefer the snapshot's copy of an event node; its title and layout are current."""
    for node in tree.walk():
        if node.id == target.id:
            return node
    return target


class LabelReactor:
    """Runs one labeling cycle per event, strictly in arrival order."""

    def __init__(self, session: Session, config: LabelConfig = DEFAULT_CONFIG):
        """
        Initialize the reactor.

        Args:
            session: Sway transport used to fetch trees and send commands
            config: Glyph and style tables
        """
        self.session = session
        self.config = config

    def handle(self, event_type: str, change: Optional[str], node: Optional[Node] = None) -> Optional[str]:
        """
        Handle one event to completion.

        Errors abort only this cycle; the next event starts a fresh one.

        Args:
            event_type: "window", "workspace" or "binding"
            change: Event change field (new, close, init, ...)
            node: Container or workspace carried by the event

        Returns:
            The label that was submitted, or None if nothing was renamed
        """
        action = classify(event_type, change)
        if action == Action.IGNORE:
            return None

        logger.debug(f"{event_type}::{change} -> {action.value}")
        try:
            if action == Action.ASSIGN_PLACEHOLDER:
                if node is None:
                    logger.debug(f"{event_type}::{change} carried no workspace")
                    return None
                return self.assign_placeholder(node)
            if action == Action.RECOMPUTE_WINDOW and node is not None:
                return self.relabel(node)
            return self.relabel_focused()
        except LabelerError as e:
            if is_lookup_error(e):
                logger.warning(f"Skipping {event_type}::{change}: {e.message}")
            else:
                logger.error(f"Labeling cycle for {event_type}::{change} failed: {e.to_dict()}")
            return None

    def relabel(self, target: Node) -> Optional[str]:
        """Relabel the workspace that holds ``target``."""
        tree = self.session.get_tree()
        window = _in_snapshot(tree, target)
        workspace = find_workspace(tree, window)
        return self._submit(workspace, build_label(tree, window, self.config, workspace))

    def relabel_focused(self) -> Optional[str]:
        """Relabel the workspace holding the focused node."""
        tree = self.session.get_tree()
        window = find_focused(tree)
        workspace = find_workspace(tree, window)
        return self._submit(workspace, build_label(tree, window, self.config, workspace))

    def relabel_all(self) -> List[str]:
        """Label every workspace from one snapshot.

        Empty workspaces get the placeholder; the others are labeled after
        the window they would focus. A workspace that cannot be labeled is
        logged and skipped.

        Returns:
            Labels that were submitted
        """
        tree = self.session.get_tree()
        submitted = []
        for workspace in iter_workspaces(tree):
            try:
                window = find_focus_leaf(workspace)
                if window is None:
                    label = placeholder_label(_workspace_number(workspace), self.config)
                else:
                    label = build_label(tree, window, self.config, workspace)
                result = self._submit(workspace, label)
            except LabelerError as e:
                logger.warning(f"Skipping workspace {workspace.workspace_label!r}: {e.message}")
                continue
            if result is not None:
                submitted.append(result)

        logger.info(f"Startup pass renamed {len(submitted)} workspace(s)")
        return submitted

    def assign_placeholder(self, workspace: Node) -> Optional[str]:
        """Give a new or reloaded workspace the empty-workspace label."""
        tree = self.session.get_tree()
        current = find_workspace(tree, workspace)
        return self._submit(current, placeholder_label(_workspace_number(current), self.config))

    def _submit(self, workspace: Node, label: str) -> Optional[str]:
        if workspace.workspace_label == label:
            logger.debug(f"Workspace {workspace.workspace_number} already labeled")
            return None

        self.session.command(rename_command(workspace.workspace_label, label))
        logger.info(f"Renamed workspace {workspace.workspace_number}: {label}")
        return label
