"""Exception types raised by the core."""


class ArduinoInstallerError(Exception):
    """Base exception for arduino_installer operations."""


class PortDiscoveryError(ArduinoInstallerError):
    """Raised when the OS serial port enumeration fails."""


class UnknownBoardError(ArduinoInstallerError, ValueError):
    """Raised when a board name does not match any supported board."""
