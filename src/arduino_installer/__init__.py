"""
Arduino Installer - flash compiled firmware onto Arduino boards with avrdude.

Board selection, serial port discovery and avrdude invocation.
"""

__version__ = "0.1.0"

from arduino_installer.core import WorkflowState, FlashWorker, flash, rescan
from arduino_installer.boards import BoardIdentifier, resolve

__all__ = [
    "WorkflowState",
    "FlashWorker",
    "flash",
    "rescan",
    "BoardIdentifier",
    "resolve",
    "__version__",
]
