"""Conversion of captured PCM bytes to 16 kHz mono float32."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
from scipy.signal import resample_poly

from pinpoint.audio_format import SampleFormat

TARGET_SAMPLE_RATE = 16000


def _decode(raw: bytes, sample_format: SampleFormat) -> np.ndarray | None:
    if sample_format is SampleFormat.INT16:
        count = len(raw) // 2
        return np.frombuffer(raw[: count * 2], dtype="<i2").astype(np.float32) / np.float32(32768.0)
    if sample_format is SampleFormat.INT32:
        count = len(raw) // 4
        ints = np.frombuffer(raw[: count * 4], dtype="<i4")
        return (ints.astype(np.float64) / 2147483648.0).astype(np.float32)
    if sample_format is SampleFormat.FLOAT:
        count = len(raw) // 4
        return np.frombuffer(raw[: count * 4], dtype="<f4").astype(np.float32)
    if sample_format is SampleFormat.UINT8:
        return np.frombuffer(raw, dtype=np.uint8).astype(np.float32) / np.float32(128.0) - np.float32(1.0)
    return None


def to_whisper_format(raw_bytes, source_sample_rate, source_channels, source_sample_format):
    """Decode, downmix to mono and resample to 16 kHz.

    Returns a float32 array; an unknown sample format yields an empty array.
    Raises ValueError for a non-positive sample rate.
    """
    if source_sample_rate <= 0:
        raise ValueError(f"invalid source sample rate: {source_sample_rate}")

    samples = _decode(bytes(raw_bytes), source_sample_format)
    if samples is None:
        return np.empty(0, dtype=np.float32)

    if source_channels > 1:
        frames = samples.size // source_channels
        samples = (
            samples[: frames * source_channels]
            .reshape(frames, source_channels)
            .mean(axis=1, dtype=np.float32)
        )

    if source_sample_rate == TARGET_SAMPLE_RATE or samples.size == 0:
        return samples

    ratio = Fraction(TARGET_SAMPLE_RATE, source_sample_rate)
    resampled = resample_poly(samples, ratio.numerator, ratio.denominator)
    return np.asarray(resampled, dtype=np.float32)