"""Tests for running avrdude."""

import subprocess

from arduino_installer.core.command import FlashCommand
from arduino_installer.core.executor import decode_output, execute
from arduino_installer.core.messages import MessageCode

COMMAND = FlashCommand("avrdude", ("-c", "arduino", "-p", "atmega328p"))


def make_runner(returncode=0, stdout=b"", stderr=b"", calls=None):
    """Fake subprocess.run returning a fixed CompletedProcess."""
    def runner(argv, **kwargs):
        if calls is not None:
            calls.append((argv, kwargs))
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)
    return runner


def test_successful_run_captures_output():
    calls = []
    outcome = execute(COMMAND, runner=make_runner(0, b"", b"avrdude done.  Thank you.\n", calls))
    assert outcome.launched
    assert outcome.succeeded
    assert outcome.exit_code == 0
    assert "Thank you" in outcome.stderr
    assert outcome.kind() is MessageCode.I_FLASH_OK

    argv, kwargs = calls[0]
    assert argv == COMMAND.argv
    assert kwargs["capture_output"] is True
    assert kwargs["check"] is False
    assert "timeout" not in kwargs


def test_nonzero_exit_is_not_launch_failure():
    outcome = execute(COMMAND, runner=make_runner(1, b"", b"avrdude: ser_open(): can't open device\n"))
    assert outcome.launched
    assert not outcome.succeeded
    assert outcome.exit_code == 1
    assert outcome.launch_error is None
    assert outcome.kind() is MessageCode.E_TOOL_FAILED
    assert "can't open device" in outcome.to_summary()


def test_missing_executable_is_launch_failure():
    def runner(argv, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "avrdude")

    outcome = execute(COMMAND, runner=runner)
    assert not outcome.launched
    assert outcome.exit_code is None
    assert outcome.launch_error == "No such file or directory: avrdude"
    assert outcome.kind() is MessageCode.E_LAUNCH_FAILED
    assert outcome.to_summary().startswith("Flashing: failed to start")


def test_permission_error_is_launch_failure():
    def runner(argv, **kwargs):
        raise PermissionError(13, "Permission denied")

    outcome = execute(COMMAND, runner=runner)
    assert outcome.launch_error == "Permission denied"


def test_invalid_utf8_is_reported_not_raised():
    outcome = execute(COMMAND, runner=make_runner(0, b"ok \xff\xfe", b""))
    assert outcome.launched
    assert outcome.decode_error is not None
    assert outcome.decode_error.startswith("stdout:")
    assert outcome.stdout.startswith("ok ")
    assert "\ufffd" in outcome.stdout
    assert outcome.kind() is MessageCode.E_OUTPUT_UNDECODABLE


def test_decode_output_empty():
    assert decode_output(b"", "stdout") == ("", None)
    assert decode_output(None, "stderr") == ("", None)


def test_real_missing_executable():
    command = FlashCommand("arduino-installer-no-such-avrdude", ("-?",))
    outcome = execute(command)
    assert not outcome.launched
    assert outcome.launch_error


def test_undecodable_output_with_exit_zero_is_not_success():
    outcome = execute(COMMAND, runner=make_runner(0, b"\xff", b""))
    assert outcome.exit_code == 0
    assert not outcome.succeeded
    assert outcome.to_dict()["succeeded"] is False
