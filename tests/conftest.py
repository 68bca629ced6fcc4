"""Pytest configuration for sway workspace label tests."""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from sway_workspace_labels.config import LabelConfig  # noqa: E402

from sway_tree import (  # noqa: E402
    MockSwaySession,
    container,
    floating,
    leaf,
    snapshot,
    workspace,
)


@pytest.fixture
def plain_config():
    """Configuration without any Pango styling, so labels compare as plain text."""
    return LabelConfig(
        layout_style={"default": "", "bar_unfocused": ""},
        title={"style": "", "max_length": 24},
    )


@pytest.fixture
def desktop_tree():
    """A typical session.

    Workspace 1: firefox | [vertical: Code, foot(focused)]
    Workspace 2: empty
    Workspace 3: tabbed(a, b, c) plus a floating window
    Scratchpad: one parked window
    """
    return snapshot(
        workspace(
            11, 1,
            leaf(12, app_id="firefox", name="Mozilla Firefox"),
            container(13, "splitv",
                      leaf(14, app_id="Code", name="main.py - Code"),
                      leaf(15, app_id="foot", name="~/src", focused=True)),
        ),
        workspace(20, 2),
        workspace(
            30, 3,
            container(31, "tabbed",
                      leaf(32, app_id="a"),
                      leaf(33, app_id="b"),
                      leaf(34, app_id="c")),
            floating_nodes=[floating(35, app_id="pavucontrol", name="Volume")],
        ),
        parked=[floating(4, app_id="keepassxc", name="Passwords")],
    )


@pytest.fixture
def mock_session():
    """Factory fixture for a mock session serving the given snapshots."""
    def factory(*trees):
        return MockSwaySession(*trees)
    return factory
