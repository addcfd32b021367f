"""Description of a PCM audio stream layout."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class SampleFormat(enum.Enum):
    """Encoding of a single PCM sample."""

    UNKNOWN = "unknown"
    UINT8 = "uint8"
    INT16 = "int16"
    INT32 = "int32"
    FLOAT = "float"


_SAMPLE_SIZES = {
    SampleFormat.UNKNOWN: 0,
    SampleFormat.UINT8: 1,
    SampleFormat.INT16: 2,
    SampleFormat.INT32: 4,
    SampleFormat.FLOAT: 4,
}


@dataclass(frozen=True)
class AudioFormat:
    """Sample rate, channel count and sample encoding of interleaved PCM."""

    sample_rate: int = 0
    channel_count: int = 0
    sample_format: SampleFormat = SampleFormat.UNKNOWN

    def bytes_per_sample(self) -> int:
        """Size in bytes of one sample of one channel."""
        return _SAMPLE_SIZES[self.sample_format]

    def bytes_per_frame(self) -> int:
        """Size in bytes of one sample across all channels."""
        return self.bytes_per_sample() * self.channel_count

    def is_valid(self) -> bool:
        """True when rate, channel count and encoding are all set."""
        return (
            self.sample_rate > 0
            and self.channel_count > 0
            and self.sample_format is not SampleFormat.UNKNOWN
        )