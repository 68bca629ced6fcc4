"""Window tree snapshot model.

A snapshot is built once per labeling cycle from the JSON returned by
``swaymsg -t get_tree`` (or ``i3ipc.Connection.get_tree().ipc_data``) and is
never mutated afterwards. Each node owns its children outright; there are no
parent back-pointers, parents are found by scanning (see locator.py).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from .errors import ErrorCode, TreeIntegrityError

# Sway parks scratchpad windows on this hidden workspace
SCRATCH_WORKSPACE = "__i3_scratch"


# =============================================================================
# Enumerations
# =============================================================================

class NodeKind(str, Enum):
    """Role of a node in the window tree."""
    ROOT = "root"
    OUTPUT = "output"
    WORKSPACE = "workspace"
    SPLIT_CONTAINER = "split_container"
    FLOATING_CONTAINER = "floating_container"
    LEAF_WINDOW = "leaf_window"


class Layout(str, Enum):
    """Arrangement of a container's children."""
    SPLITH = "splith"
    SPLITV = "splitv"
    TABBED = "tabbed"
    STACKED = "stacked"
    NONE = "none"

    @classmethod
    def from_ipc(cls, value: Optional[str]) -> "Layout":
        """Map sway's layout string; output/dockarea layouts carry no split shape."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


# =============================================================================
# Nodes
# =============================================================================

class AppIdentity(BaseModel):
    """Application identifiers of a window.

    Wayland clients report ``app_id``; XWayland clients leave it empty and
    report ``window_properties.class``/``instance`` instead.
    """

    model_config = ConfigDict(frozen=True)

    app_id: Optional[str] = None
    window_class: Optional[str] = None
    window_instance: Optional[str] = None


class Node(BaseModel):
    """One element of the window tree."""

    model_config = ConfigDict(frozen=True)

    id: int
    kind: NodeKind
    layout: Layout = Layout.NONE
    children: Tuple[Node, ...] = ()
    floating_children: Tuple[Node, ...] = ()
    focused: bool = False
    # Child ids, most recently focused first
    focus: Tuple[int, ...] = ()

    # Workspaces only
    workspace_number: Optional[int] = None
    workspace_label: Optional[str] = None

    # Windows only
    app_identity: Optional[AppIdentity] = None
    title: Optional[str] = None

    @model_validator(mode="after")
    def validate_workspace_fields(self):
        """Workspaces must carry both a number and a name."""
        if self.kind == NodeKind.WORKSPACE:
            if self.workspace_number is None or not self.workspace_label:
                raise ValueError(f"workspace {self.id} is missing its number or name")
        return self

    @property
    def is_workspace(self) -> bool:
        return self.kind == NodeKind.WORKSPACE

    @property
    def is_scratch(self) -> bool:
        """True for the hidden scratchpad workspace."""
        return self.is_workspace and self.workspace_label == SCRATCH_WORKSPACE

    @property
    def is_floating(self) -> bool:
        return self.kind == NodeKind.FLOATING_CONTAINER

    def walk(self) -> Iterator[Node]:
        """Yield this node and every descendant, depth-first.

        Tiled children are visited before floating children, both in
        document order. Uses an explicit stack so deep trees cannot hit the
        recursion limit.
        """
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.floating_children))
            stack.extend(reversed(node.children))

    @classmethod
    def from_ipc(cls, data: Dict[str, Any]) -> Node:
        """Build a snapshot from sway's get_tree JSON.

        Args:
            data: Root (or any subtree) of the get_tree reply

        Returns:
            Immutable Node hierarchy

        Raises:
            TreeIntegrityError: If the JSON violates sway's tree contract
        """
        try:
            return _convert(data)
        except ValidationError as e:
            raise TreeIntegrityError(str(e), node_id=data.get("id")) from e
        except (KeyError, TypeError) as e:
            raise TreeIntegrityError(f"unexpected node shape: {e!r}", node_id=data.get("id")) from e


def _node_kind(data: Dict[str, Any]) -> NodeKind:
    con_type = data.get("type")
    if con_type == "root":
        return NodeKind.ROOT
    if con_type == "output":
        return NodeKind.OUTPUT
    if con_type == "workspace":
        return NodeKind.WORKSPACE
    if con_type == "floating_con":
        return NodeKind.FLOATING_CONTAINER
    if con_type in ("con", "dockarea"):
        if data.get("nodes") or data.get("floating_nodes"):
            return NodeKind.SPLIT_CONTAINER
        return NodeKind.LEAF_WINDOW
    raise TreeIntegrityError(f"unknown node type {con_type!r}", node_id=data.get("id"))


def _convert(data: Dict[str, Any]) -> Node:
    kind = _node_kind(data)
    fields: Dict[str, Any] = {
        "id": data["id"],
        "kind": kind,
        "layout": Layout.from_ipc(data.get("layout")),
        "focused": bool(data.get("focused", False)),
        "focus": tuple(data.get("focus") or ()),
        "children": tuple(_convert(child) for child in data.get("nodes") or ()),
        "floating_children": tuple(_convert(child) for child in data.get("floating_nodes") or ()),
    }

    if kind == NodeKind.WORKSPACE:
        if data.get("num") is None or not data.get("name"):
            raise TreeIntegrityError(
                "workspace without number or name",
                node_id=data["id"],
                code=ErrorCode.WORKSPACE_INCOMPLETE,
            )
        fields["workspace_number"] = data["num"]
        fields["workspace_label"] = data["name"]

    if kind in (NodeKind.LEAF_WINDOW, NodeKind.FLOATING_CONTAINER):
        properties = data.get("window_properties") or {}
        fields["app_identity"] = AppIdentity(
            app_id=data.get("app_id"),
            window_class=properties.get("class"),
            window_instance=properties.get("instance"),
        )
        fields["title"] = data.get("name")

    return Node(**fields)


Node.model_rebuild()
