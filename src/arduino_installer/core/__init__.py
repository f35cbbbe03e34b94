"""
Core module for Arduino Installer.

This module provides the single source of truth for:
- Serial port discovery (ports.py)
- avrdude command construction (command.py)
- Running avrdude (executor.py)
- Flash outcomes (results.py)
- The flashing workflow state machine (workflow.py)
- Standardized messages (messages.py)

Both CLI and Streamlit UI should call into this module rather than
implementing their own logic.
"""

from .errors import ArduinoInstallerError, PortDiscoveryError, UnknownBoardError
from .messages import MessageLevel, MessageCode, StatusMessage, messages_from_state
from .ports import PortType, UsbInfo, PortDescriptor, classify_port, scan_ports, find_port
from .command import AVRDUDE, FlashCommand, build_command
from .results import FlashOutcome
from .executor import execute
from .workflow import (
    WorkflowState,
    SelectFile,
    SelectBoard,
    SelectPort,
    Rescan,
    Flash,
    select_file,
    select_board,
    select_port,
    rescan,
    prepare_flash,
    record_flash,
    flash,
    apply_intent,
    FlashWorker,
    FlashCompleted,
    NO_FILE_SELECTED,
    NO_PORT_SELECTED,
)

__all__ = [
    # Errors
    "ArduinoInstallerError",
    "PortDiscoveryError",
    "UnknownBoardError",
    # Messages
    "MessageLevel",
    "MessageCode",
    "StatusMessage",
    "messages_from_state",
    # Ports
    "PortType",
    "UsbInfo",
    "PortDescriptor",
    "classify_port",
    "scan_ports",
    "find_port",
    # Command
    "AVRDUDE",
    "FlashCommand",
    "build_command",
    # Execution
    "FlashOutcome",
    "execute",
    # Workflow
    "WorkflowState",
    "SelectFile",
    "SelectBoard",
    "SelectPort",
    "Rescan",
    "Flash",
    "select_file",
    "select_board",
    "select_port",
    "rescan",
    "prepare_flash",
    "record_flash",
    "flash",
    "apply_intent",
    "FlashWorker",
    "FlashCompleted",
    "NO_FILE_SELECTED",
    "NO_PORT_SELECTED",
]
