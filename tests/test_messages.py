"""Tests for status messages derived from workflow state."""

from pathlib import Path

from arduino_installer.core.messages import (
    MessageCode,
    MessageLevel,
    StatusMessage,
    messages_from_state,
)
from arduino_installer.core.ports import PortDescriptor, PortType
from arduino_installer.core.results import FlashOutcome
from arduino_installer.core.workflow import WorkflowState

ACM0 = PortDescriptor("/dev/ttyACM0", PortType.USB)


def _codes(state):
    return [m.code for m in messages_from_state(state)]


def test_default_remediation_is_filled():
    msg = StatusMessage.error(MessageCode.E_NO_PORT, "Error: no port selected")
    assert msg.level is MessageLevel.ERROR
    assert "Rescan" in msg.remediation


def test_cli_string_verbose_includes_code():
    msg = StatusMessage.warn(MessageCode.W_NO_PORTS, "No serial ports found")
    assert "[W_NO_PORTS]" in msg.to_cli_string(verbose=True)
    assert "[W_NO_PORTS]" not in msg.to_cli_string()


def test_discovery_error():
    state = WorkflowState(discovery_error="ERROR: enumeration failed")
    assert _codes(state) == [MessageCode.E_DISCOVERY_FAILED]


def test_no_ports_warning():
    assert MessageCode.W_NO_PORTS in _codes(WorkflowState())


def test_selection_errors():
    assert MessageCode.E_NO_FILE in _codes(WorkflowState(ports=[ACM0], general_error="no file selected"))
    assert MessageCode.E_NO_PORT in _codes(WorkflowState(ports=[ACM0], general_error="no port selected"))


def test_stale_port_warning():
    state = WorkflowState(ports=[], selected_port=ACM0)
    assert MessageCode.W_STALE_PORT in _codes(state)
    state.ports = [ACM0]
    assert MessageCode.W_STALE_PORT not in _codes(state)


def test_outcome_messages():
    state = WorkflowState(ports=[ACM0], selected_file=Path("fw.elf"), selected_port=ACM0)

    state.last_outcome = FlashOutcome.completed(0)
    assert _codes(state) == [MessageCode.I_FLASH_OK]

    state.last_outcome = FlashOutcome.completed(1, stderr="boom")
    assert _codes(state) == [MessageCode.E_TOOL_FAILED]

    state.last_outcome = FlashOutcome.launch_failure("No such file or directory: avrdude")
    messages = messages_from_state(state)
    assert messages[0].code is MessageCode.E_LAUNCH_FAILED
    assert "avrdude" in messages[0].detail


def test_to_dict():
    data = StatusMessage.info(MessageCode.I_FLASH_OK, "done").to_dict()
    assert data["level"] == "info"
    assert data["code"] == "I_FLASH_OK"


def test_unrecognised_general_error_gets_generic_code():
    state = WorkflowState(ports=[ACM0], general_error="board is busy")
    assert _codes(state) == [MessageCode.E_GENERAL]
