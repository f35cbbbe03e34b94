"""Tests for avrdude command construction."""

from pathlib import Path

from arduino_installer.boards import BoardIdentifier, BoardProfile, resolve
from arduino_installer.core.command import CHIP_ERASE_FLAG, FlashCommand, build_command
from arduino_installer.core.ports import PortDescriptor, PortType

PORT = PortDescriptor("/dev/ttyACM0", PortType.USB)


def test_arduino_uno_argument_vector():
    command = build_command(resolve(BoardIdentifier.ARDUINO_UNO), PORT, Path("/tmp/firmware.elf"))
    assert command.executable == "avrdude"
    assert list(command.args) == [
        "-c", "arduino",
        "-p", "atmega328p",
        "-P", "/dev/ttyACM0",
        "-D",
        "-U", "flash:w:/tmp/firmware.elf",
        "-e",
    ]


def test_erase_flag_absent_without_erase():
    profile = BoardProfile("stk500v1", "atmega168", erase_before_write=False)
    command = build_command(profile, PORT, "fw.elf")
    assert CHIP_ERASE_FLAG not in command.args
    assert command.args[-1] == "flash:w:fw.elf"


def test_erase_flag_is_last():
    profile = BoardProfile("arduino", "atmega328p", erase_before_write=True)
    command = build_command(profile, PORT, "fw.elf")
    assert command.args[-1] == CHIP_ERASE_FLAG
    assert command.args.count(CHIP_ERASE_FLAG) == 1


def test_build_is_deterministic():
    profile = resolve(BoardIdentifier.ARDUINO_UNO)
    first = build_command(profile, PORT, "/tmp/firmware.elf")
    second = build_command(profile, PORT, "/tmp/firmware.elf")
    assert first == second
    assert first.argv == second.argv
    assert first.render() == second.render()


def test_relative_path_is_kept_as_given():
    command = build_command(resolve(BoardIdentifier.ARDUINO_UNO), PORT, "build/blink.elf")
    assert "flash:w:build/blink.elf" in command.args


def test_custom_executable():
    command = build_command(resolve(BoardIdentifier.ARDUINO_UNO), PORT, "fw.elf", executable="/opt/avr/bin/avrdude")
    assert command.argv[0] == "/opt/avr/bin/avrdude"


def test_render_quotes_spaces():
    command = FlashCommand("avrdude", ("-U", "flash:w:/tmp/my firmware.elf"))
    assert command.render() == "avrdude -U 'flash:w:/tmp/my firmware.elf'"
    assert command.display().startswith("CMD: avrdude")
