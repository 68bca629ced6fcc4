"""Tests for focused/parent/workspace lookups over a snapshot."""

import pytest

from sway_workspace_labels.errors import FocusNotFound, ParentNotFound, WorkspaceNotFound
from sway_workspace_labels.locator import (
    find_focus_leaf,
    find_focused,
    find_parent,
    find_workspace,
    iter_workspaces,
)
from sway_workspace_labels.models import Node, NodeKind

from sway_tree import container, floating, i3_floating, leaf, node_by_id, output, root, snapshot, workspace


class TestFindFocused:

    def test_returns_the_focused_leaf(self, desktop_tree):
        focused = find_focused(desktop_tree)
        assert focused.id == 15
        assert focused.app_identity.app_id == "foot"

    def test_only_one_match(self, desktop_tree):
        assert [node.id for node in desktop_tree.walk() if node.focused] == [find_focused(desktop_tree).id]

    def test_focused_floating_window(self):
        tree = snapshot(workspace(11, 1, leaf(12), floating_nodes=[floating(13, focused=True)]))
        assert find_focused(tree).id == 13

    def test_focused_empty_workspace(self):
        tree = snapshot(workspace(11, 1, focused=True))
        focused = find_focused(tree)
        assert focused.kind == NodeKind.WORKSPACE

    def test_no_focus_raises(self):
        tree = snapshot(workspace(11, 1, leaf(12)))
        with pytest.raises(FocusNotFound):
            find_focused(tree)


class TestFindParent:

    def test_direct_parent_of_nested_leaf(self, desktop_tree):
        parent = find_parent(desktop_tree, node_by_id(desktop_tree, 15))
        assert parent.id == 13

    def test_parent_of_floating_window_is_workspace(self, desktop_tree):
        parent = find_parent(desktop_tree, node_by_id(desktop_tree, 35))
        assert parent.id == 30

    def test_parent_contains_target_for_every_node(self, desktop_tree):
        for node in desktop_tree.walk():
            if node.id == desktop_tree.id:
                continue
            parent = find_parent(desktop_tree, node)
            child_ids = [c.id for c in parent.children + parent.floating_children]
            assert node.id in child_ids

    def test_matches_by_id_not_identity(self, desktop_tree):
        stale = Node(id=15, kind=NodeKind.LEAF_WINDOW, title="old title")
        assert find_parent(desktop_tree, stale).id == 13

    def test_root_has_no_parent(self, desktop_tree):
        with pytest.raises(ParentNotFound):
            find_parent(desktop_tree, desktop_tree)

    def test_absent_node(self, desktop_tree):
        with pytest.raises(ParentNotFound) as exc_info:
            find_parent(desktop_tree, Node(id=999, kind=NodeKind.LEAF_WINDOW))
        assert exc_info.value.context["node_id"] == 999


class TestFindWorkspace:

    def test_workspace_of_nested_leaf(self, desktop_tree):
        assert find_workspace(desktop_tree, node_by_id(desktop_tree, 15)).id == 11

    def test_workspace_of_floating_window(self, desktop_tree):
        assert find_workspace(desktop_tree, node_by_id(desktop_tree, 35)).id == 30

    def test_workspace_is_its_own_workspace(self, desktop_tree):
        assert find_workspace(desktop_tree, node_by_id(desktop_tree, 20)).id == 20

    def test_scratchpad_window_has_no_workspace(self, desktop_tree):
        with pytest.raises(WorkspaceNotFound):
            find_workspace(desktop_tree, node_by_id(desktop_tree, 4))

    def test_scratch_workspace_itself_not_returned(self, desktop_tree):
        with pytest.raises(WorkspaceNotFound):
            find_workspace(desktop_tree, node_by_id(desktop_tree, 3))

    def test_outputs_have_no_workspace(self, desktop_tree):
        with pytest.raises(WorkspaceNotFound):
            find_workspace(desktop_tree, node_by_id(desktop_tree, 10))

    def test_scratch_nested_in_workspace_resolves_outer(self):
        # Malformed: scratch workspace below a real one
        tree = Node.from_ipc(root(output(10, "DP-1", workspace(
            11, 1,
            workspace(3, -1, leaf(12, app_id="foot"), name="__i3_scratch"),
        ))))
        assert find_workspace(tree, node_by_id(tree, 12)).id == 11

    def test_never_returns_scratch(self, desktop_tree):
        for node in desktop_tree.walk():
            try:
                found = find_workspace(desktop_tree, node)
            except WorkspaceNotFound:
                continue
            assert not found.is_scratch


class TestIterWorkspaces:

    def test_skips_scratchpad(self, desktop_tree):
        assert [ws.workspace_number for ws in iter_workspaces(desktop_tree)] == [1, 2, 3]

    def test_across_outputs(self):
        tree = Node.from_ipc(root(
            output(10, "DP-1", workspace(11, 1), workspace(12, 2)),
            output(20, "HDMI-A-1", workspace(21, 5, container(22, "splith", leaf(23)))),
        ))
        assert [ws.id for ws in iter_workspaces(tree)] == [11, 12, 21]


class TestFindFocusLeaf:

    def test_follows_focus_order(self):
        tree = snapshot(workspace(
            11, 1,
            leaf(12),
            container(13, "splitv", leaf(14), leaf(15), focus=[15, 14]),
            focus=[13, 12],
        ))
        assert find_focus_leaf(node_by_id(tree, 11)).id == 15

    def test_first_child_without_focus_order(self, desktop_tree):
        assert find_focus_leaf(node_by_id(desktop_tree, 30)).id == 32

    def test_floating_window_in_focus_order(self):
        tree = snapshot(workspace(11, 1, leaf(12), floating_nodes=[floating(13)], focus=[13, 12]))
        assert find_focus_leaf(node_by_id(tree, 11)).id == 13

    def test_descends_through_i3_floating_wrapper(self):
        tree = snapshot(workspace(11, 1, floating_nodes=[i3_floating(13, leaf(14))], focus=[13]))
        assert find_focus_leaf(node_by_id(tree, 11)).id == 14

    def test_stale_focus_ids_ignored(self):
        tree = snapshot(workspace(11, 1, leaf(12), leaf(13), focus=[99, 13]))
        assert find_focus_leaf(node_by_id(tree, 11)).id == 13

    def test_empty_workspace(self, desktop_tree):
        assert find_focus_leaf(node_by_id(desktop_tree, 20)) is None
