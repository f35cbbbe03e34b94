"""
Board registry for supported Arduino boards.

Provides a single source of truth for the parameters avrdude needs to
flash a board:
- Programmer name (the onboard bootloader protocol)
- Part number (the target microcontroller)
- Whether the chip is erased before writing

Usage:
    from arduino_installer.boards import BoardIdentifier, resolve

    profile = resolve(BoardIdentifier.ARDUINO_UNO)
    profile.part_number  # "atmega328p"

Adding a board means adding a BoardIdentifier member and its row in
_BOARD_PROFILES together; the module refuses to import otherwise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from arduino_installer.core.errors import UnknownBoardError


class BoardIdentifier(Enum):
    """Supported boards."""
    ARDUINO_UNO = "arduino-uno"

    @property
    def display_name(self) -> str:
        """Human readable board name."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def default(cls) -> "BoardIdentifier":
        """Board selected when a session starts."""
        return cls.ARDUINO_UNO

    @classmethod
    def parse(cls, value: str) -> "BoardIdentifier":
        """
        Parse a board from user input.

        Accepts the slug ("arduino-uno"), the member name ("ARDUINO_UNO")
        or the display name ("Arduino Uno"), case-insensitive.

        Raises:
            UnknownBoardError: If nothing matches.
        """
        if isinstance(value, cls):
            return value
        text = (value or "").strip().lower()
        for board in cls:
            candidates = (
                board.value,
                board.name.lower(),
                board.display_name.lower(),
            )
            if text in candidates:
                return board
        known = ", ".join(b.value for b in cls)
        raise UnknownBoardError(f"Unknown board: {value!r} (known: {known})")


@dataclass(frozen=True)
class BoardProfile:
    """Flashing parameters passed to avrdude for one board."""
    programmer_name: str
    part_number: str
    erase_before_write: bool


_DISPLAY_NAMES: Dict[BoardIdentifier, str] = {
    BoardIdentifier.ARDUINO_UNO: "Arduino Uno",
}

# ============================================================================
# BOARD PROFILES - one row per BoardIdentifier
# ============================================================================

_BOARD_PROFILES: Dict[BoardIdentifier, BoardProfile] = {
    BoardIdentifier.ARDUINO_UNO: BoardProfile(
        programmer_name="arduino",
        part_number="atmega328p",
        erase_before_write=True,
    ),
}


def _check_registry() -> None:
    """Ensure every board has exactly one profile and display name."""
    for table_name, table in (("profile", _BOARD_PROFILES), ("display name", _DISPLAY_NAMES)):
        missing = [b.name for b in BoardIdentifier if b not in table]
        extra = [str(k) for k in table if not isinstance(k, BoardIdentifier)]
        if missing or extra:
            raise RuntimeError(
                f"Board registry out of sync: missing {table_name} for {missing}, "
                f"unexpected keys {extra}"
            )


_check_registry()


def resolve(board: BoardIdentifier) -> BoardProfile:
    """Return the flashing profile for a board. Total over BoardIdentifier."""
    return _BOARD_PROFILES[board]


def list_boards() -> List[BoardIdentifier]:
    """Return all supported boards in declaration order."""
    return list(BoardIdentifier)
