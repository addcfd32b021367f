import struct

import pytest

from pinpoint.imu import (
    AccelData,
    BaudRate,
    EulerAngles,
    GyroData,
    MagData,
    OutputFlag,
    OutputRate,
    QuaternionData,
    WT9011DCLBase,
)


class RecordingIMU(WT9011DCLBase):
    def __init__(self):
        super().__init__()
        self.written = []

    def write_to_device(self, data):
        self.written.append(bytes(data))


def make_frame(packet_type, w0, w1, w2, w3):
    body = bytes((0x55, packet_type)) + struct.pack("<4h", w0, w1, w2, w3)
    return body + bytes((sum(body) & 0xFF,))


@pytest.fixture
def imu():
    return RecordingIMU()


def test_save_configuration_bytes(imu):
    imu.save_configuration()
    assert imu.written == [b"\xff\xaa\x00\x00\x00"]
    assert imu.accel_data() == AccelData()


def test_output_rate_bytes(imu):
    imu.set_output_rate(OutputRate(0x06))
    assert imu.written == [b"\xff\xaa\x03\x06\x00"]
    assert imu.accel_data() == AccelData()


def test_baud_rate_bytes(imu):
    imu.set_device_baud_rate(BaudRate(0x05))
    assert imu.written == [b"\xff\xaa\x04\x05\x00"]
    assert imu.accel_data() == AccelData()


def test_output_data_high_byte(imu):
    imu.set_output_data(OutputFlag.QUATERNION)
    assert imu.written == [b"\xff\xaa\x02\x00\x02"]
    assert imu.quaternion_data() == QuaternionData(1.0, 0.0, 0.0, 0.0)


def test_calibration_commands(imu):
    imu.start_accel_gyro_calibration()
    imu.start_mag_calibration()
    imu.reset_altitude()
    imu.end_calibration()
    assert imu.written == [
        b"\xff\xaa\x01\x01\x00",
        b"\xff\xaa\x01\x07\x00",
        b"\xff\xaa\x01\x03\x00",
        b"\xff\xaa\x01\x00\x00",
    ]
    assert imu.mag_data() == MagData()


def test_read_registers(imu):
    imu.read_registers(0x34, 3)
    imu.read_registers(0x40)
    assert imu.written == [b"\xff\xaa\x27\x34\x03", b"\xff\xaa\x27\x40\x01"]
    assert imu.euler_angles() == EulerAngles()


def test_defaults_before_data(imu):
    assert imu.quaternion_data() == QuaternionData(1.0, 0.0, 0.0, 0.0)
    assert imu.accel_data() == AccelData()


def test_accel_packet(imu):
    received = []
    imu.accel_updated.connect(received.append)
    imu.receive_data(make_frame(0x51, 16384, 0, -16384, 2500))
    assert received == [AccelData(8.0, 0.0, -8.0, 25.0)]
    assert imu.accel_data() == received[0]


def test_euler_packet(imu):
    imu.receive_data(make_frame(0x53, 16384, 0, 0, 0))
    assert imu.euler_angles() == EulerAngles(90.0, 0.0, 0.0)


def test_mag_packet_is_raw(imu):
    imu.receive_data(make_frame(0x54, 100, -200, 300, 0))
    assert imu.mag_data() == MagData(100.0, -200.0, 300.0, 0.0)


def test_gyro_and_quaternion_zero(imu):
    gyros, quats = [], []
    imu.gyro_updated.connect(gyros.append)
    imu.quaternion_updated.connect(quats.append)
    imu.receive_data(make_frame(0x52, 0, 0, 0, 0) + make_frame(0x59, 0, 0, 0, 0))
    assert gyros == [imu.gyro_data()]
    assert quats == [QuaternionData(0.0, 0.0, 0.0, 0.0)]


def test_bad_checksum_ignored(imu):
    frame = bytearray(make_frame(0x54, 1, 2, 3, 4))
    frame[-1] ^= 0xFF
    imu.receive_data(bytes(frame))
    assert imu.mag_data() == MagData()


def test_garbage_before_header_and_split_delivery(imu):
    received = []
    imu.mag_updated.connect(received.append)
    frame = make_frame(0x54, 7, 8, 9, 0)
    imu.receive_data(b"\x01\x02\x03" + frame[:5])
    assert imu.mag_data() == MagData()
    imu.receive_data(frame[5:])
    assert received == [MagData(7.0, 8.0, 9.0, 0.0)]
    assert imu.mag_data() == MagData(7.0, 8.0, 9.0, 0.0)


def test_unknown_packet_type_ignored(imu):
    received = []
    for signal in (imu.accel_updated, imu.gyro_updated, imu.euler_angles_updated,
                   imu.mag_updated, imu.quaternion_updated):
        signal.connect(received.append)
    imu.receive_data(make_frame(0x50, 1, 2, 3, 4))
    assert received == []
    assert imu.accel_data() == AccelData()
    assert imu.gyro_data() == GyroData()
    assert imu.mag_data() == MagData()


def test_invalid_output_rate_rejected(imu):
    with pytest.raises(ValueError):
        imu.set_output_rate(0x42)
    assert imu.written == []
    imu.set_output_rate(OutputRate(0x06))
    assert imu.written == [b"\xff\xaa\x03\x06\x00"]