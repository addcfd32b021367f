"""Save incoming PCM buffers to a timestamped WAV file."""

from __future__ import annotations

import logging
import struct
from datetime import datetime
from pathlib import Path

from pinpoint.audio_format import AudioFormat, SampleFormat

logger = logging.getLogger(__name__)

_HEADER_SIZE = 44
_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def _default_directory() -> Path:
    desktop = Path.home() / "Desktop"
    return desktop if desktop.is_dir() else Path.home()


class AudioStreamSaver:
    """Writes buffers to ``pinpoint_audio_<yyyyMMdd_HHmmss>.wav``.

    The file is created on the first buffer, whose format decides the WAV
    parameters; the header is filled in by :meth:`stop_saving`.
    """

    def __init__(self, directory=None):
        self._directory = Path(directory) if directory is not None else None
        self._file = None
        self._path = ""
        self._format = AudioFormat()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop_saving()

    def is_saving(self) -> bool:
        """True while a file is open for writing."""
        return self._file is not None

    def file_path(self) -> str:
        """Path of the current or last file, or an empty string."""
        return self._path

    def on_audio_data(self, data, fmt) -> None:
        """Append a buffer, opening the file on first use."""
        if self._file is None:
            self._open_file(fmt)
        if self._file is None:
            return
        self._file.write(bytes(data))

    def stop_saving(self) -> None:
        """Write the WAV header and close the file."""
        if self._file is None:
            return
        try:
            self._finalise_wav()
        finally:
            self._file.close()
            self._file = None

    def _open_file(self, fmt: AudioFormat) -> None:
        self._format = fmt
        directory = self._directory or _default_directory()
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = directory / f"pinpoint_audio_{stamp}.wav"
        self._path = str(path)
        try:
            self._file = open(path, "wb+")
        except OSError:
            logger.warning("[AudioStreamSaver] Cannot open file for writing: %s", path)
            self._file = None
            return
        self._file.write(bytes(_HEADER_SIZE))

    def _finalise_wav(self) -> None:
        self._file.seek(0, 2)
        data_bytes = self._file.tell() - _HEADER_SIZE
        if data_bytes <= 0:
            return

        fmt = self._format
        sample_bytes = fmt.bytes_per_sample()
        channels = fmt.channel_count & 0xFFFF
        sample_rate = fmt.sample_rate & 0xFFFFFFFF
        chunk_size = min(data_bytes, 0xFFFFFFFF)
        audio_format = 3 if fmt.sample_format is SampleFormat.FLOAT else 1

        header = _HEADER.pack(
            b"RIFF",
            (36 + chunk_size) & 0xFFFFFFFF,
            b"WAVE",
            b"fmt ",
            16,
            audio_format,
            channels,
            sample_rate,
            (sample_rate * channels * sample_bytes) & 0xFFFFFFFF,
            (channels * sample_bytes) & 0xFFFF,
            (sample_bytes * 8) & 0xFFFF,
            b"data",
            chunk_size,
        )
        self._file.seek(0)
        self._file.write(header)
        self._file.flush()