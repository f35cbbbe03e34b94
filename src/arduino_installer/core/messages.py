"""
Standardized status and error messages for Arduino Installer.

Provides structured message items with stable codes that both the CLI and
Streamlit can display consistently.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from .workflow import WorkflowState


class MessageLevel(Enum):
    """Severity level for messages."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class MessageCode(Enum):
    """Stable codes for known conditions."""
    # Port discovery
    E_DISCOVERY_FAILED = "E_DISCOVERY_FAILED"
    W_NO_PORTS = "W_NO_PORTS"
    W_STALE_PORT = "W_STALE_PORT"

    # Selection
    E_NO_FILE = "E_NO_FILE"
    E_NO_PORT = "E_NO_PORT"
    E_GENERAL = "E_GENERAL"

    # Flashing
    E_LAUNCH_FAILED = "E_LAUNCH_FAILED"
    E_TOOL_FAILED = "E_TOOL_FAILED"
    E_OUTPUT_UNDECODABLE = "E_OUTPUT_UNDECODABLE"
    I_FLASH_OK = "I_FLASH_OK"


# Default remediation hints for each code
REMEDIATIONS: Dict[MessageCode, str] = {
    MessageCode.E_DISCOVERY_FAILED:
        "Check that the serial driver is installed, then rescan.",
    MessageCode.W_NO_PORTS:
        "Connect the board over USB and rescan.",
    MessageCode.W_STALE_PORT:
        "The selected port was not found by the last scan. Select a port again.",
    MessageCode.E_NO_FILE:
        "Choose the compiled .elf file to flash.",
    MessageCode.E_NO_PORT:
        "Rescan and choose the port the board is connected to.",
    MessageCode.E_LAUNCH_FAILED:
        "Install avrdude and make sure it is on PATH, or pass --avrdude.",
    MessageCode.E_TOOL_FAILED:
        "Read the avrdude output below. Check the board selection and cable.",
    MessageCode.E_OUTPUT_UNDECODABLE:
        "avrdude printed bytes that are not UTF-8; they are shown replaced.",
}


@dataclass
class StatusMessage:
    """
    Structured message with stable code.

    Attributes:
        level: Severity (INFO, WARN, ERROR)
        code: Stable code for programmatic handling
        title: Short, user-facing title
        detail: Longer explanation
        remediation: Suggested action
    """
    level: MessageLevel
    code: MessageCode
    title: str
    detail: str = ""
    remediation: str = ""

    def __post_init__(self):
        if not self.remediation and self.code in REMEDIATIONS:
            self.remediation = REMEDIATIONS[self.code]

    @classmethod
    def info(cls, code: MessageCode, title: str, detail: str = "") -> "StatusMessage":
        """Create an INFO-level message."""
        return cls(MessageLevel.INFO, code, title, detail)

    @classmethod
    def warn(cls, code: MessageCode, title: str, detail: str = "") -> "StatusMessage":
        """Create a WARN-level message."""
        return cls(MessageLevel.WARN, code, title, detail)

    @classmethod
    def error(cls, code: MessageCode, title: str, detail: str = "") -> "StatusMessage":
        """Create an ERROR-level message."""
        return cls(MessageLevel.ERROR, code, title, detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/display."""
        return {
            "level": self.level.value,
            "code": self.code.value,
            "title": self.title,
            "detail": self.detail,
            "remediation": self.remediation,
        }

    def to_cli_string(self, verbose: bool = False) -> str:
        """Format for CLI output."""
        icons = {
            MessageLevel.INFO: "ℹ️ ",
            MessageLevel.WARN: "⚠️ ",
            MessageLevel.ERROR: "❌",
        }
        icon = icons.get(self.level, "")

        if verbose:
            lines = [f"{icon} [{self.code.value}] {self.title}"]
            if self.detail:
                lines.append(f"   {self.detail}")
            if self.remediation:
                lines.append(f"   → {self.remediation}")
            return "\n".join(lines)
        return f"{icon} {self.title}"


_SELECTION_CODES = {
    "no file selected": MessageCode.E_NO_FILE,
    "no port selected": MessageCode.E_NO_PORT,
}


def messages_from_state(state: "WorkflowState") -> List[StatusMessage]:
    """
    Derive the messages a shell should display for the current state.

    Args:
        state: Current workflow state

    Returns:
        List of StatusMessage objects, errors first
    """
    items: List[StatusMessage] = []

    if state.discovery_error:
        items.append(StatusMessage.error(MessageCode.E_DISCOVERY_FAILED, state.discovery_error))
    elif not state.ports:
        items.append(StatusMessage.warn(MessageCode.W_NO_PORTS, "No serial ports found"))

    if state.general_error:
        code = _SELECTION_CODES.get(state.general_error, MessageCode.E_GENERAL)
        items.append(StatusMessage.error(code, f"Error: {state.general_error}"))

    outcome = state.last_outcome
    if outcome is not None:
        code = outcome.kind()
        if code is MessageCode.I_FLASH_OK:
            items.append(StatusMessage.info(code, "avrdude finished successfully"))
        elif code is MessageCode.E_LAUNCH_FAILED:
            items.append(StatusMessage.error(code, "avrdude could not be started", outcome.launch_error or ""))
        elif code is MessageCode.E_OUTPUT_UNDECODABLE:
            items.append(StatusMessage.error(code, "avrdude output is not valid UTF-8", outcome.decode_error or ""))
        else:
            items.append(StatusMessage.error(code, f"avrdude exited with status {outcome.exit_code}"))

    if state.selected_port is not None and state.selected_port not in state.ports:
        items.append(StatusMessage.warn(
            MessageCode.W_STALE_PORT,
            f"Selected port {state.selected_port.name} is not in the last scan",
        ))

    return items
