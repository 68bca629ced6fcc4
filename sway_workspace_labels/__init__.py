"""
Sway Workspace Labels

Renames sway workspaces after the focused application and the shape of the
window layout, recomputing the label from a fresh tree on every event.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
