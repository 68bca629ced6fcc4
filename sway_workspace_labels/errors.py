"""
Error handling for the workspace labeler.

Every failure that can abort a labeling cycle is a LabelerError carrying a
structured code, so the reactor can decide how loudly to log it.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the workspace labeler.

    - 1000-1099: Tree integrity errors
    - 1100-1199: Lookup errors
    - 1200-1299: Configuration errors
    - 1400-1499: Sway IPC errors
    """

    # Tree integrity errors (1000-1099)
    TREE_INVALID = 1000
    WORKSPACE_INCOMPLETE = 1001
    FOCUS_NOT_FOUND = 1002

    # Lookup errors (1100-1199)
    PARENT_NOT_FOUND = 1100
    WORKSPACE_NOT_FOUND = 1101

    # Configuration errors (1200-1299)
    CONFIG_LOAD_FAILED = 1200

    # Sway IPC errors (1400-1499)
    SWAY_IPC_FAILED = 1401
    RENAME_FAILED = 1402


class LabelerError(Exception):
    """Base exception for workspace labeler errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize labeler error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for structured logging.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class TreeIntegrityError(LabelerError):
    """Sway returned a tree that violates its own contract."""

    def __init__(
        self,
        reason: str,
        node_id: Optional[int] = None,
        code: ErrorCode = ErrorCode.TREE_INVALID
    ):
        context = {"reason": reason}
        if node_id is not None:
            context["node_id"] = node_id

        super().__init__(
            code=code,
            message=f"Malformed window tree: {reason}",
            suggestion="Check the output of 'swaymsg -t get_tree'",
            context=context
        )


class FocusNotFound(LabelerError):
    """No node in the snapshot is focused."""

    def __init__(self):
        super().__init__(
            code=ErrorCode.FOCUS_NOT_FOUND,
            message="No focused node in window tree",
        )


class ParentNotFound(LabelerError):
    """Target is the root or is not part of the snapshot."""

    def __init__(self, node_id: int):
        super().__init__(
            code=ErrorCode.PARENT_NOT_FOUND,
            message=f"No parent found for node {node_id}",
            context={"node_id": node_id}
        )


class WorkspaceNotFound(LabelerError):
    """Target has no workspace ancestor outside the scratchpad."""

    def __init__(self, node_id: int):
        super().__init__(
            code=ErrorCode.WORKSPACE_NOT_FOUND,
            message=f"No workspace contains node {node_id}",
            suggestion="The window may live in the scratchpad or have been closed",
            context={"node_id": node_id}
        )


class ConfigLoadError(LabelerError):
    """Configuration loading error."""

    def __init__(self, file_path: str, reason: str):
        """
        Initialize configuration load error.

        Args:
            file_path: Path to configuration file
            reason: Reason for load failure
        """
        super().__init__(
            code=ErrorCode.CONFIG_LOAD_FAILED,
            message=f"Failed to load configuration from {file_path}: {reason}",
            suggestion="Check file syntax and key names",
            context={"file_path": file_path, "reason": reason}
        )


class SwayIPCError(LabelerError):
    """Sway IPC communication error."""

    def __init__(self, operation: str, reason: str, code: ErrorCode = ErrorCode.SWAY_IPC_FAILED):
        """
        Initialize Sway IPC error.

        Args:
            operation: IPC operation that failed
            reason: Reason for failure
            code: Error code, RENAME_FAILED for rejected rename commands
        """
        super().__init__(
            code=code,
            message=f"Sway IPC {operation} failed: {reason}",
            suggestion="Ensure Sway is running and IPC socket is accessible",
            context={"operation": operation, "reason": reason}
        )


def is_lookup_error(error: LabelerError) -> bool:
    """Lookup errors are expected when windows vanish between event and fetch."""
    return 1100 <= error.code.value < 1200
