"""Command result handling for the flashsets CLI."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from flashsets.config import LOGGER
from flashsets.workflows.collection_save import (
    FailureReason,
    WorkflowPhase,
    WorkflowSnapshot,
)


class MessageType(Enum):
    """Types of messages that can be logged."""

    INFO = "info"
    ERROR = "error"
    SUCCESS = "success"


@dataclass
class CommandResult:
    """Encapsulates the result of a CLI command execution."""

    success: bool
    message: str | None = None
    message_type: MessageType = MessageType.INFO
    data: Any = None  # For commands that return data

    @property
    def exit_code(self) -> int:
        """Convert success status to exit code."""
        return 0 if self.success else 1

    def log(self) -> None:
        """Log the message if present."""
        if not self.message:
            return

        if self.message_type == MessageType.ERROR:
            LOGGER.error(self.message)
        elif self.message_type == MessageType.SUCCESS:
            LOGGER.info(f"✓ {self.message}")
        else:
            LOGGER.info(self.message)


# Convenience constructors
def success(message: str | None = None, data: Any = None) -> CommandResult:
    """Create a successful result."""
    return CommandResult(
        success=True,
        message=message,
        message_type=MessageType.SUCCESS if message else MessageType.INFO,
        data=data,
    )


def error(message: str, data: Any = None) -> CommandResult:
    """Create an error result."""
    return CommandResult(
        success=False, message=message, message_type=MessageType.ERROR, data=data
    )


def info(message: str, data: Any = None) -> CommandResult:
    """Create an info result."""
    return CommandResult(
        success=True, message=message, message_type=MessageType.INFO, data=data
    )


def from_snapshot(
    snapshot: WorkflowSnapshot, collection_id: str | None = None
) -> CommandResult:
    """
    Convert the final state of a save workflow into a result.
    Conflicts get a hint to pick another name.
    """
    data = snapshot.to_dict()
    if snapshot.phase is WorkflowPhase.SUCCEEDED:
        data["collection_id"] = collection_id
        return success(f"Saved collection '{snapshot.candidate_name}'", data=data)

    if snapshot.phase is WorkflowPhase.FAILED:
        message = snapshot.error_message or "The collection could not be saved."
        if snapshot.error_reason is FailureReason.CONFLICT:
            message += " Choose another name with --name."
        return error(message, data=data)

    return error(f"Save stopped while {snapshot.phase.value}", data=data)
