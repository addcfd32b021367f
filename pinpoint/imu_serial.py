"""WT9011DCL over a UART/serial link."""

from __future__ import annotations

import serial

from pinpoint.imu import WT9011DCLBase

DEFAULT_BAUD_RATE = 115200


class WT9011DCL(WT9011DCLBase):
    """Serial transport for the WT9011DCL, 8N1 without flow control.

    Incoming bytes are fetched by calling :meth:`poll` regularly.
    ``port_name`` may be a device path or any URL that pyserial accepts.
    """

    def __init__(self) -> None:
        super().__init__()
        self._serial = None
        self._port_name = ""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self, port_name: str, baud_rate: int = DEFAULT_BAUD_RATE) -> bool:
        """Open ``port_name``; emit ``error_occurred`` and return False on failure."""
        if self._serial is not None and self._serial.is_open:
            self._serial.close()
        self._serial = None
        self._port_name = port_name

        try:
            port = serial.serial_for_url(
                port_name,
                do_not_open=True,
                baudrate=baud_rate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=False,
                rtscts=False,
                dsrdtr=False,
                timeout=0,
            )
            port.open()
        except (serial.SerialException, ValueError) as exc:
            self.error_occurred.emit(str(exc))
            return False

        self._serial = port
        self.connected.emit()
        return True

    def close(self) -> None:
        """Close the port, emitting ``disconnected`` if it was open."""
        if self._serial is not None and self._serial.is_open:
            self._serial.close()
            self._serial = None
            self.disconnected.emit()

    def is_open(self) -> bool:
        """True while the port is open."""
        return self._serial is not None and self._serial.is_open

    def port_name(self) -> str:
        """Name of the last port passed to :meth:`open`."""
        return self._port_name

    def poll(self) -> int:
        """Read whatever bytes are waiting, decode them, and return their count.

        A read failure is reported through ``error_occurred`` and closes the port.
        """
        if not self.is_open():
            return 0
        try:
            waiting = self._serial.in_waiting
            data = self._serial.read(waiting) if waiting else b""
        except serial.SerialException as exc:
            self.error_occurred.emit(str(exc))
            self.close()
            return 0
        if data:
            self.receive_data(data)
        return len(data)

    def write_to_device(self, data) -> None:
        """Send raw bytes over the serial port, if it is open."""
        if self.is_open():
            self._serial.write(bytes(data))