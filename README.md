# pinpoint

Parts for a pipeline that records speech and reads motion data from a
WT9011DCL nine-axis IMU.

| Module | What it provides |
| --- | --- |
| `pinpoint.signals` | `Signal`, a synchronous signal/slot list with `connect`, `disconnect` and `emit` |
| `pinpoint.audio_format` | `SampleFormat` and the frozen dataclass `AudioFormat` |
| `pinpoint.audio_converter` | `to_whisper_format`, which turns raw PCM into 16 kHz mono `float32` |
| `pinpoint.audio_stream_saver` | `AudioStreamSaver`, which writes PCM buffers to a timestamped WAV file |
| `pinpoint.audio_base` | abstract `AudioInputBase`, `AudioOutputBase` and `AudioProcessorBase`, plus `AudioState` and `BackendState` |
| `pinpoint.playback_buffer` | `PlaybackBuffer`, a thread-safe FIFO of bytes waiting to be played |
| `pinpoint.imu` | `WT9011DCLBase`, the transport-independent WT9011DCL packet parser and command builder, with its data classes and enums |
| `pinpoint.imu_serial` | `WT9011DCL`, the IMU driver over a serial port (pyserial) |

## Install

```
pip install .
```

## Converting audio

```python
from pinpoint.audio_format import SampleFormat
from pinpoint.audio_converter import to_whisper_format

samples = to_whisper_format(raw_bytes, 48000, 2, SampleFormat.INT16)
```

`to_whisper_format` decodes little-endian `UINT8`, `INT16`, `INT32` or `FLOAT`
samples to floats. It averages the channels down to mono. If the rate is not
already 16000 Hz, it resamples with polyphase filtering. The result is a
`numpy` `float32` array.

- `SampleFormat.UNKNOWN` gives an empty array.
- A sample rate of zero or less raises `ValueError`.

## Saving a stream to WAV

```python
from pinpoint.audio_format import AudioFormat, SampleFormat
from pinpoint.audio_stream_saver import AudioStreamSaver

fmt = AudioFormat(sample_rate=16000, channel_count=1, sample_format=SampleFormat.INT16)
with AudioStreamSaver() as saver:
    saver.on_audio_data(chunk, fmt)
print(saver.file_path())
```

The first buffer creates `pinpoint_audio_<yyyyMMdd_HHmmss>.wav`. By default
the file goes in `~/Desktop`, or in the home directory when there is no
Desktop. Pass `AudioStreamSaver(directory=...)` to choose another place.

The first buffer's `AudioFormat` sets the WAV parameters. `FLOAT` data is
written as format tag 3 and everything else as PCM (tag 1).

`stop_saving()` writes the 44-byte header and closes the file. Leaving the
`with` block calls it too. A file that received no data keeps a zeroed header.

## Wiring a pipeline

`AudioInputBase` subclasses emit `audio_data_ready(data, fmt)` for each
captured buffer. You can connect that signal to several consumers:

- `connect_processor(processor)` sends buffers to
  `AudioProcessorBase.process_audio`.
- `AudioOutputBase.connect_source(source)` sends them to `write_audio`.
- `input.audio_data_ready.connect(saver.on_audio_data)` records them.

Both endpoint bases also have `state_changed` and `error_occurred` signals, and
report their current `AudioState` through `state()`.

`PlaybackBuffer` holds bytes waiting to be played:

- `append` adds bytes at the end.
- `read(max_len)` removes and returns up to `max_len` bytes. When the buffer is
  empty it returns `b""`.
- `bytes_available` reports how many bytes are waiting.
- `clear` discards everything.

## Reading the IMU over serial

```python
from pinpoint.imu import OutputRate
from pinpoint.imu_serial import WT9011DCL

imu = WT9011DCL()
imu.euler_angles_updated.connect(lambda a: print(a.roll, a.pitch, a.yaw))
if imu.open("/dev/ttyUSB0", 115200):
    imu.set_output_rate(OutputRate.HZ_10)
    while imu.is_open():
        imu.poll()
```

The port is opened 8N1 with no flow control. `open` accepts any port name or
URL that pyserial understands, such as `loop://`. A failure is reported
through `error_occurred`, and `open` returns `False`.

`poll()` reads whatever bytes are waiting and returns how many it read. A read
error is reported through `error_occurred` and closes the port.

The driver decodes acceleration, angular rate, angle, magnetometer and
quaternion packets, and drops frames whose checksum fails. It keeps the latest
value of each, which you can read with `accel_data()`, `gyro_data()`,
`euler_angles()`, `mag_data()` and `quaternion_data()`. Each new value is also
emitted through the matching `*_updated` signal.

These methods send configuration commands to the device:

- `set_output_rate`
- `set_device_baud_rate`
- `set_output_data` (takes `OutputFlag` values)
- `save_configuration`
- the calibration methods
- `read_registers`

To use another transport, subclass `WT9011DCLBase`. Implement
`write_to_device`, and pass incoming bytes to `receive_data`.

## What it does not do

The package has no concrete audio input or output classes. Nothing in it opens
a microphone or a speaker; you write a subclass of `AudioInputBase` or
`AudioOutputBase` for your own audio library.

It also leaves these out:

- speech-to-text and text-to-speech
- video capture
- a Bluetooth transport for the IMU
- a user interface or command-line program

## Tests

```
pip install .[test]
pytest
```