"""
Serial port discovery.

Wraps pyserial's port enumeration and classifies each port the way the
board picker shows it (USB, Bluetooth, PCI or unknown).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import PortDiscoveryError

logger = logging.getLogger(__name__)

BLUETOOTH_HWID_TOKENS = ("bthenum", "bluetooth")


class PortType(Enum):
    """Port classification reported by the OS."""
    USB = "usb"
    BLUETOOTH = "bluetooth"
    PCI = "pci"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class UsbInfo:
    """USB vendor/product details for a USB serial port."""
    vid: int
    pid: int
    serial_number: Optional[str] = None
    manufacturer: Optional[str] = None
    product: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vid": f"0x{self.vid:04X}",
            "pid": f"0x{self.pid:04X}",
            "serial_number": self.serial_number,
            "manufacturer": self.manufacturer,
            "product": self.product,
        }


@dataclass(frozen=True)
class PortDescriptor:
    """One serial port as seen by the last scan."""
    name: str
    port_type: PortType = PortType.UNKNOWN
    usb: Optional[UsbInfo] = None
    description: str = ""

    def label(self) -> str:
        """Text used for the port in pickers, e.g. 'USB: /dev/ttyACM0'."""
        return f"{self.port_type.name}: {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.port_type.value,
            "usb": self.usb.to_dict() if self.usb else None,
            "description": self.description,
        }


def _safe_text(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def classify_port(info: Any) -> PortDescriptor:
    """
    Build a PortDescriptor from a pyserial ListPortInfo-like object.

    A USB vendor id wins; otherwise the hardware id decides between
    Bluetooth, PCI and unknown.
    """
    name = getattr(info, "device", None) or getattr(info, "name", "")
    description = _safe_text(getattr(info, "description", None)) or ""
    if description.lower() == "n/a":
        description = ""
    vid = getattr(info, "vid", None)
    pid = getattr(info, "pid", None)
    hwid = (_safe_text(getattr(info, "hwid", None)) or "").lower()

    if vid is not None:
        usb = UsbInfo(
            vid=int(vid),
            pid=int(pid or 0),
            serial_number=_safe_text(getattr(info, "serial_number", None)),
            manufacturer=_safe_text(getattr(info, "manufacturer", None)),
            product=_safe_text(getattr(info, "product", None)),
        )
        return PortDescriptor(name, PortType.USB, usb, description)
    if any(token in hwid for token in BLUETOOTH_HWID_TOKENS):
        return PortDescriptor(name, PortType.BLUETOOTH, None, description)
    if hwid.startswith("pci"):
        return PortDescriptor(name, PortType.PCI, None, description)
    return PortDescriptor(name, PortType.UNKNOWN, None, description)


def _default_lister() -> Iterable[Any]:
    import serial.tools.list_ports

    return serial.tools.list_ports.comports()


def scan_ports(lister: Optional[Callable[[], Iterable[Any]]] = None) -> List[PortDescriptor]:
    """
    Return every serial port the OS currently reports.

    An empty list means no ports are attached. No retries are made.

    Args:
        lister: Callable returning ListPortInfo-like objects
            (defaults to serial.tools.list_ports.comports)

    Raises:
        PortDiscoveryError: If the enumeration itself fails.
    """
    lister = lister or _default_lister
    try:
        ports = [classify_port(info) for info in lister()]
    except ImportError as exc:
        raise PortDiscoveryError(f"pyserial not installed: {exc}") from exc
    except (OSError, RuntimeError, ValueError) as exc:
        logger.warning("Serial port scan failed: %s", exc)
        raise PortDiscoveryError(str(exc) or exc.__class__.__name__) from exc

    logger.debug("Found %d serial port(s)", len(ports))
    return ports


def find_port(ports: Iterable[PortDescriptor], name: str) -> Optional[PortDescriptor]:
    """Return the scanned descriptor with the given device name, if any."""
    for port in ports:
        if port.name == name:
            return port
    return None
