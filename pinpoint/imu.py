"""Packet protocol of the WT9011DCL nine-axis IMU, independent of transport.

Frames sent by the device are eleven bytes long::

    [0]     0x55           header
    [1]     packet type
    [2..9]  four signed 16-bit little-endian words
    [10]    checksum, the low byte of the sum of bytes 0..9

Commands sent to the device are five bytes long::

    FF AA reg lo hi        write a register
    FF AA 27 reg count     read registers
"""

from __future__ import annotations

import enum
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass

from pinpoint.signals import Signal

FRAME_HEADER = 0x55
FRAME_SIZE = 11
_COMMAND_PREFIX = b"\xff\xaa"
_READ_REGISTERS = 0x27
_PAYLOAD = struct.Struct("<4h")


@dataclass(frozen=True)
class AccelData:
    """Acceleration in g and sensor temperature in degrees Celsius."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    temperature: float = 0.0


@dataclass(frozen=True)
class GyroData:
    """Angular rate in degrees per second and temperature in degrees Celsius."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    temperature: float = 0.0


@dataclass(frozen=True)
class EulerAngles:
    """Orientation in degrees."""

    roll: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0


@dataclass(frozen=True)
class MagData:
    """Raw magnetometer counts (about 120 per microtesla) and temperature."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    temperature: float = 0.0


@dataclass(frozen=True)
class QuaternionData:
    """Orientation as a unit quaternion."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class OutputRate(enum.IntEnum):
    """Rate at which the device streams data."""

    HZ_0_1 = 0x01
    HZ_0_5 = 0x02
    HZ_1 = 0x03
    HZ_2 = 0x04
    HZ_5 = 0x05
    HZ_10 = 0x06
    HZ_20 = 0x07
    HZ_50 = 0x08
    HZ_100 = 0x09
    HZ_200 = 0x0A
    OFF = 0x0B


class BaudRate(enum.IntEnum):
    """Serial baud rate stored on the device."""

    BAUD_4800 = 0x00
    BAUD_9600 = 0x01
    BAUD_19200 = 0x02
    BAUD_38400 = 0x03
    BAUD_57600 = 0x04
    BAUD_115200 = 0x05
    BAUD_230400 = 0x06
    BAUD_460800 = 0x07
    BAUD_921600 = 0x08


class OutputFlag(enum.IntFlag):
    """Packet kinds the device is asked to stream."""

    TIME = 0x0001
    ACCEL = 0x0002
    GYRO = 0x0004
    ANGLE = 0x0008
    MAG = 0x0010
    PORT_STATUS = 0x0020
    BAROMETRIC = 0x0040
    GPS = 0x0080
    GROUND_SPEED = 0x0100
    QUATERNION = 0x0200
    GPS_ACCURACY = 0x0400


class _PacketType(enum.IntEnum):
    TIME = 0x50
    ACCEL = 0x51
    GYRO = 0x52
    ANGLE = 0x53
    MAG = 0x54
    PORT_STATUS = 0x55
    BAROMETRIC = 0x56
    GPS = 0x57
    GROUND_SPEED = 0x58
    QUATERNION = 0x59
    GPS_ACCURACY = 0x5A


class _Register(enum.IntEnum):
    SAVE = 0x00
    CAL_SW = 0x01
    RSW = 0x02
    RRATE = 0x03
    BAUD = 0x04


def _temperature(raw: int) -> float:
    return raw / 100.0


def _checksum_ok(frame: bytes) -> bool:
    return sum(frame[: FRAME_SIZE - 1]) & 0xFF == frame[FRAME_SIZE - 1]


class WT9011DCLBase(ABC):
    """Protocol logic shared by every WT9011DCL transport.

    Subclasses implement :meth:`write_to_device` and feed incoming bytes to
    :meth:`receive_data`. Decoded packets update the cached values and are
    announced through the ``*_updated`` signals.
    """

    def __init__(self) -> None:
        self.connected = Signal()
        self.disconnected = Signal()
        self.error_occurred = Signal()
        self.accel_updated = Signal()
        self.gyro_updated = Signal()
        self.euler_angles_updated = Signal()
        self.mag_updated = Signal()
        self.quaternion_updated = Signal()

        self._buffer = bytearray()
        self._accel = AccelData()
        self._gyro = GyroData()
        self._euler = EulerAngles()
        self._mag = MagData()
        self._quat = QuaternionData()
        self._handlers = {
            _PacketType.ACCEL: self._parse_accel,
            _PacketType.GYRO: self._parse_gyro,
            _PacketType.ANGLE: self._parse_euler,
            _PacketType.MAG: self._parse_mag,
            _PacketType.QUATERNION: self._parse_quaternion,
        }

    # Configuration -------------------------------------------------------

    def save_configuration(self) -> None:
        """Persist the current settings on the device."""
        self.send_command(_Register.SAVE, 0x0000)

    def set_output_rate(self, rate: OutputRate) -> None:
        """Set the streaming rate."""
        self.send_command(_Register.RRATE, int(OutputRate(rate)))

    def set_device_baud_rate(self, rate: BaudRate) -> None:
        """Set the serial baud rate the device uses."""
        self.send_command(_Register.BAUD, int(BaudRate(rate)))

    def set_output_data(self, flags: OutputFlag) -> None:
        """Choose which packet kinds the device streams."""
        self.send_command(_Register.RSW, int(flags))

    # Calibration ---------------------------------------------------------

    def start_accel_gyro_calibration(self) -> None:
        """Begin accelerometer/gyro calibration; keep the device flat and still."""
        self.send_command(_Register.CAL_SW, 0x0001)

    def start_mag_calibration(self) -> None:
        """Begin magnetometer calibration; rotate through all orientations."""
        self.send_command(_Register.CAL_SW, 0x0007)

    def end_calibration(self) -> None:
        """Finish the running calibration."""
        self.send_command(_Register.CAL_SW, 0x0000)

    def reset_altitude(self) -> None:
        """Zero the altitude reading."""
        self.send_command(_Register.CAL_SW, 0x0003)

    # Commands ------------------------------------------------------------

    def read_registers(self, reg_addr: int, reg_count: int = 1) -> None:
        """Ask the device to report ``reg_count`` registers from ``reg_addr``."""
        self.write_to_device(
            _COMMAND_PREFIX + bytes((_READ_REGISTERS, reg_addr & 0xFF, reg_count & 0xFF))
        )

    def send_command(self, reg: int, value: int) -> None:
        """Write the 16-bit ``value`` to register ``reg``."""
        self.write_to_device(
            _COMMAND_PREFIX + bytes((reg & 0xFF, value & 0xFF, (value >> 8) & 0xFF))
        )

    @abstractmethod
    def write_to_device(self, data: bytes) -> None:
        """Send raw bytes over the transport."""

    # Incoming data -------------------------------------------------------

    def receive_data(self, data) -> None:
        """Buffer bytes from the device and decode every complete frame."""
        self._buffer += data
        self._process_buffer()

    def _process_buffer(self) -> None:
        buf = self._buffer
        while True:
            header = buf.find(FRAME_HEADER)
            if header < 0:
                buf.clear()
                return
            if header > 0:
                del buf[:header]
            if len(buf) < FRAME_SIZE:
                return
            frame = bytes(buf[:FRAME_SIZE])
            if _checksum_ok(frame):
                self._dispatch(frame)
            del buf[:1]

    def _dispatch(self, frame: bytes) -> None:
        try:
            handler = self._handlers[_PacketType(frame[1])]
        except (ValueError, KeyError):
            return
        handler(_PAYLOAD.unpack(frame[2:10]))

    def _parse_accel(self, words) -> None:
        x, y, z, t = words
        self._accel = AccelData(
            x / 32768.0 * 16.0, y / 32768.0 * 16.0, z / 32768.0 * 16.0, _temperature(t)
        )
        self.accel_updated.emit(self._accel)

    def _parse_gyro(self, words) -> None:
        x, y, z, t = words
        self._gyro = GyroData(
            x / 32768.0 * 2000.0, y / 32768.0 * 2000.0, z / 32768.0 * 2000.0, _temperature(t)
        )
        self.gyro_updated.emit(self._gyro)

    def _parse_euler(self, words) -> None:
        roll, pitch, yaw, _ = words
        self._euler = EulerAngles(
            roll / 32768.0 * 180.0, pitch / 32768.0 * 180.0, yaw / 32768.0 * 180.0
        )
        self.euler_angles_updated.emit(self._euler)

    def _parse_mag(self, words) -> None:
        x, y, z, t = words
        self._mag = MagData(float(x), float(y), float(z), _temperature(t))
        self.mag_updated.emit(self._mag)

    def _parse_quaternion(self, words) -> None:
        w, x, y, z = words
        self._quat = QuaternionData(w / 32768.0, x / 32768.0, y / 32768.0, z / 32768.0)
        self.quaternion_updated.emit(self._quat)

    # Latest values -------------------------------------------------------

    def accel_data(self) -> AccelData:
        """Most recent acceleration packet."""
        return self._accel

    def gyro_data(self) -> GyroData:
        """Most recent angular-rate packet."""
        return self._gyro

    def euler_angles(self) -> EulerAngles:
        """Most recent orientation packet."""
        return self._euler

    def mag_data(self) -> MagData:
        """Most recent magnetometer packet."""
        return self._mag

    def quaternion_data(self) -> QuaternionData:
        """Most recent quaternion packet."""
        return self._quat