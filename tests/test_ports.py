"""Tests for serial port discovery."""

from types import SimpleNamespace

import pytest

from arduino_installer.core.errors import PortDiscoveryError
from arduino_installer.core.ports import (
    PortDescriptor,
    PortType,
    UsbInfo,
    classify_port,
    find_port,
    scan_ports,
)


def _port_info(device, vid=None, pid=None, hwid="n/a", description="n/a", **extra):
    """Stand-in for pyserial's ListPortInfo."""
    fields = {
        "device": device,
        "vid": vid,
        "pid": pid,
        "hwid": hwid,
        "description": description,
        "serial_number": None,
        "manufacturer": None,
        "product": None,
    }
    fields.update(extra)
    return SimpleNamespace(**fields)


class TestClassifyPort:
    """Port type classification."""

    def test_usb_port_keeps_vendor_info(self):
        info = _port_info(
            "/dev/ttyACM0",
            vid=0x2341,
            pid=0x0043,
            hwid="USB VID:PID=2341:0043 SER=123",
            description="Arduino Uno",
            serial_number="123",
            manufacturer="Arduino (www.arduino.cc)",
        )
        port = classify_port(info)
        assert port.name == "/dev/ttyACM0"
        assert port.port_type is PortType.USB
        assert port.usb == UsbInfo(0x2341, 0x0043, "123", "Arduino (www.arduino.cc)", None)
        assert port.description == "Arduino Uno"

    def test_bluetooth_port(self):
        info = _port_info("COM5", hwid="BTHENUM\\{00001101-0000-1000-8000-00805F9B34FB}")
        assert classify_port(info).port_type is PortType.BLUETOOTH

    def test_pci_port(self):
        info = _port_info("/dev/ttyS4", hwid="PCI VEN_8086")
        assert classify_port(info).port_type is PortType.PCI

    def test_unknown_port(self):
        port = classify_port(_port_info("/dev/ttyS0"))
        assert port.port_type is PortType.UNKNOWN
        assert port.usb is None
        assert port.description == ""


class TestPortDescriptor:
    """Descriptor equality and display."""

    def test_structural_equality(self):
        a = PortDescriptor("/dev/ttyACM0", PortType.USB)
        b = PortDescriptor("/dev/ttyACM0", PortType.USB)
        assert a == b
        assert a != PortDescriptor("/dev/ttyACM1", PortType.USB)

    def test_label(self):
        assert PortDescriptor("/dev/ttyACM0", PortType.USB).label() == "USB: /dev/ttyACM0"

    def test_to_dict(self):
        port = PortDescriptor("/dev/ttyACM0", PortType.USB, UsbInfo(0x2341, 0x43))
        data = port.to_dict()
        assert data["type"] == "usb"
        assert data["usb"]["vid"] == "0x2341"


class TestScanPorts:
    """Scanning through an injected lister."""

    def test_scan_returns_all_ports(self):
        infos = [_port_info("/dev/ttyACM0", vid=0x2341, pid=0x43), _port_info("/dev/ttyS0")]
        ports = scan_ports(lambda: infos)
        assert [p.name for p in ports] == ["/dev/ttyACM0", "/dev/ttyS0"]

    def test_empty_scan_is_success(self):
        assert scan_ports(lambda: []) == []

    def test_failure_raises_discovery_error(self):
        def broken():
            raise OSError("udev not available")

        with pytest.raises(PortDiscoveryError) as ei:
            scan_ports(broken)
        assert "udev not available" in str(ei.value)

    def test_default_lister_uses_pyserial(self, monkeypatch):
        import serial.tools.list_ports

        monkeypatch.setattr(serial.tools.list_ports, "comports", lambda: [_port_info("/dev/ttyUSB0")])
        assert scan_ports() == [PortDescriptor("/dev/ttyUSB0", PortType.UNKNOWN)]


def test_find_port():
    ports = [PortDescriptor("/dev/ttyACM0", PortType.USB), PortDescriptor("/dev/ttyS0")]
    assert find_port(ports, "/dev/ttyS0") == ports[1]
    assert find_port(ports, "/dev/ttyUSB9") is None
