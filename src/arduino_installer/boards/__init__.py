"""
Board registry for Arduino boards.

Maps each supported board to the avrdude parameters used to flash it.
"""

from .registry import (
    BoardIdentifier,
    BoardProfile,
    resolve,
    list_boards,
)

__all__ = [
    "BoardIdentifier",
    "BoardProfile",
    "resolve",
    "list_boards",
]
