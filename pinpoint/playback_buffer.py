"""Thread-safe FIFO of PCM bytes waiting to be played."""

from __future__ import annotations

import threading


class PlaybackBuffer:
    """Bytes appended by producers and drained by the playback device.

    Reading from an empty buffer returns no data rather than signalling the
    end of the stream, so the consumer idles until more arrives.
    """

    def __init__(self) -> None:
        self._data = bytearray()
        self._lock = threading.Lock()

    def append(self, data) -> None:
        """Queue ``data`` after everything already buffered."""
        with self._lock:
            self._data += data

    def read(self, max_len: int) -> bytes:
        """Remove and return up to ``max_len`` bytes from the front."""
        if max_len < 0:
            raise ValueError("max_len must not be negative")
        with self._lock:
            chunk = bytes(self._data[:max_len])
            del self._data[: len(chunk)]
        return chunk

    def bytes_available(self) -> int:
        """Number of bytes waiting to be read."""
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        """Discard all buffered data."""
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return self.bytes_available()