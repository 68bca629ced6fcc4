"""Read-only queries over a window tree snapshot.

All lookups match nodes by ``id`` and traverse with an explicit stack. They
keep no state between calls, so they can be called repeatedly within one
labeling cycle.
"""

import logging
from itertools import chain
from typing import Iterator, List, Optional, Tuple

from .errors import FocusNotFound, ParentNotFound, WorkspaceNotFound
from .models import Node

logger = logging.getLogger(__name__)


def find_focused(tree: Node) -> Node:
    """Return the focused node, searching floating children as well.

    Raises:
        FocusNotFound: If no node in the snapshot is focused
    """
    for node in tree.walk():
        if node.focused:
            return node
    raise FocusNotFound()


def find_parent(tree: Node, target: Node) -> Node:
    """Return the node whose children or floating children contain ``target``.

    Raises:
        ParentNotFound: If ``target`` is the root or not in the snapshot
    """
    for node in tree.walk():
        for child in chain(node.children, node.floating_children):
            if child.id == target.id:
                return node
    raise ParentNotFound(target.id)


def iter_workspaces(tree: Node) -> Iterator[Node]:
    """Yield every workspace in the snapshot except the scratchpad."""
    for node in tree.walk():
        if node.is_workspace and not node.is_scratch:
            yield node


def find_focus_leaf(workspace: Node) -> Optional[Node]:
    """Return the window a workspace would focus, or None when it is empty.

    Descends along each container's ``focus`` order; a container reporting
    no focus order descends into its first child.
    """
    node = workspace
    while node.children or node.floating_children:
        members = {child.id: child for child in chain(node.children, node.floating_children)}
        recent = [members[child_id] for child_id in node.focus if child_id in members]
        node = recent[0] if recent else next(iter(members.values()))
    if node is workspace:
        return None
    return node


def find_workspace(tree: Node, target: Node) -> Node:
    """Return the nearest workspace containing ``target``.

    ``target`` may itself be a workspace. The scratchpad workspace is never
    returned: a window parked there has no workspace, and a scratchpad nested
    under a real workspace resolves to that outer workspace.

    Raises:
        WorkspaceNotFound: If no non-scratch workspace contains ``target``
    """
    # (node, nearest non-scratch workspace at or above node)
    stack: List[Tuple[Node, Optional[Node]]] = [(tree, None)]
    while stack:
        node, workspace = stack.pop()
        if node.is_workspace and not node.is_scratch:
            workspace = node

        if node.id == target.id:
            if workspace is None:
                break
            return workspace

        for child in chain(node.children, node.floating_children):
            stack.append((child, workspace))

    logger.debug(f"Node {target.id} is not inside a labeled workspace")
    raise WorkspaceNotFound(target.id)
