"""
avrdude command construction.

The argument order is fixed:
    -c <programmer> -p <part> -P <port> -D -U flash:w:<file> [-e]
"""

import logging
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from arduino_installer.boards import BoardProfile
from .ports import PortDescriptor

logger = logging.getLogger(__name__)

AVRDUDE = "avrdude"

PROGRAMMER_FLAG = "-c"
PART_FLAG = "-p"
PORT_FLAG = "-P"
NO_AUTO_ERASE_FLAG = "-D"
MEMORY_OP_FLAG = "-U"
CHIP_ERASE_FLAG = "-e"


@dataclass(frozen=True)
class FlashCommand:
    """A fully materialized avrdude invocation."""
    executable: str
    args: Tuple[str, ...]

    @property
    def argv(self) -> List[str]:
        """Executable followed by its arguments, ready for subprocess."""
        return [self.executable, *self.args]

    def render(self) -> str:
        """Shell-quoted single line form of the command."""
        return shlex.join(self.argv)

    def display(self) -> str:
        """Rendering shown next to the flash output."""
        return f"CMD: {self.render()}"


def flash_write_operation(firmware: Union[str, Path]) -> str:
    """Memory operation writing the firmware file to flash."""
    return f"flash:w:{firmware}"


def build_command(
    profile: BoardProfile,
    port: PortDescriptor,
    firmware: Union[str, Path],
    *,
    executable: str = AVRDUDE,
) -> FlashCommand:
    """
    Build the avrdude command flashing `firmware` through `port`.

    Pure: identical inputs give identical commands. The chip erase flag
    is appended last, and only when the profile erases before writing.
    """
    args = [
        PROGRAMMER_FLAG, profile.programmer_name,
        PART_FLAG, profile.part_number,
        PORT_FLAG, port.name,
        NO_AUTO_ERASE_FLAG,
        MEMORY_OP_FLAG, flash_write_operation(firmware),
    ]
    if profile.erase_before_write:
        args.append(CHIP_ERASE_FLAG)

    command = FlashCommand(executable=executable, args=tuple(args))
    logger.debug("Built command: %s", command.render())
    return command
