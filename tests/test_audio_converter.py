import numpy as np
import pytest

from pinpoint.audio_converter import to_whisper_format
from pinpoint.audio_format import SampleFormat


def test_float_mono_16k_passes_through():
    samples = np.array([0.25, -0.5, 0.75, 0.0], dtype="<f4")
    out = to_whisper_format(samples.tobytes(), 16000, 1, SampleFormat.FLOAT)
    assert out.dtype == np.float32
    np.testing.assert_array_equal(out, samples)


def test_int16_full_scale_negative_maps_to_minus_one():
    raw = np.array([-32768, 0], dtype="<i2").tobytes()
    out = to_whisper_format(raw, 16000, 1, SampleFormat.INT16)
    assert out.tolist() == [-1.0, 0.0]


def test_int16_and_int32_agree_on_same_level():
    values16 = np.array([1000, -20000, 12345], dtype="<i2")
    values32 = values16.astype("<i4") << 16
    a = to_whisper_format(values16.tobytes(), 16000, 1, SampleFormat.INT16)
    b = to_whisper_format(values32.tobytes(), 16000, 1, SampleFormat.INT32)
    np.testing.assert_allclose(a, b, rtol=1e-6)


def test_uint8_midpoint_is_silence():
    out = to_whisper_format(bytes([128, 128, 128]), 16000, 1, SampleFormat.UINT8)
    assert out.tolist() == [0.0, 0.0, 0.0]


def test_identical_stereo_channels_downmix_to_same_signal():
    mono = np.array([0.1, 0.2, -0.3, 0.4], dtype="<f4")
    stereo = np.repeat(mono, 2)
    out = to_whisper_format(stereo.tobytes(), 16000, 2, SampleFormat.FLOAT)
    np.testing.assert_array_equal(out, mono)


def test_opposite_stereo_channels_cancel():
    mono = np.array([0.5, -0.25, 0.125], dtype="<f4")
    stereo = np.column_stack([mono, -mono]).ravel()
    out = to_whisper_format(stereo.tobytes(), 16000, 2, SampleFormat.FLOAT)
    assert out.size == mono.size
    assert np.all(out == 0.0)


def test_trailing_partial_sample_is_dropped():
    raw = np.array([100, 200], dtype="<i2").tobytes() + b"\x01"
    out = to_whisper_format(raw, 16000, 1, SampleFormat.INT16)
    assert out.size == 2


def test_unknown_format_gives_empty_result():
    out = to_whisper_format(b"\x00" * 16, 16000, 1, SampleFormat.UNKNOWN)
    assert out.size == 0


def test_resampling_from_48k_shrinks_length():
    n = 4800
    samples = np.zeros(n, dtype="<f4")
    out = to_whisper_format(samples.tobytes(), 48000, 1, SampleFormat.FLOAT)
    assert abs(out.size - n // 3) <= 1


def test_resampling_preserves_dc_level():
    n = 4410
    samples = np.full(n, 0.5, dtype="<f4")
    out = to_whisper_format(samples.tobytes(), 44100, 1, SampleFormat.FLOAT)
    middle = out[out.size // 4 : 3 * out.size // 4]
    np.testing.assert_allclose(middle, 0.5, atol=1e-3)


def test_empty_input_with_resampling_is_empty():
    out = to_whisper_format(b"", 48000, 2, SampleFormat.INT16)
    assert out.size == 0


def test_non_positive_rate_raises():
    with pytest.raises(ValueError):
        to_whisper_format(b"\x00\x00", 0, 1, SampleFormat.INT16)