import io

import numpy as np
import pytest
import soundfile as sf

from audio_equalizer import codec
from audio_equalizer.codec import AudioBuffer, decode_wav, encode_wav, is_valid_wav
from audio_equalizer.errors import DecodeFailure, EncodeFailure, InvalidFormat
from tests.wav_helpers import make_wav


def test_is_valid_wav_accepts_pcm16(ramp_stereo):
    assert is_valid_wav(make_wav(ramp_stereo))


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"RIFF",
        b"not a wav file at all, just some text",
        b"RIFF\x24\x00\x00\x00WAVEjunkjunkjunk",
        b"ID3\x03\x00\x00\x00\x00\x00\x00" + b"\x00" * 64,
    ],
)
def test_is_valid_wav_rejects_garbage(raw):
    assert not is_valid_wav(raw)


def test_is_valid_wav_rejects_float_wav():
    raw = make_wav(np.zeros(100, dtype=np.float32), subtype="FLOAT")

    assert not is_valid_wav(raw)
    with pytest.raises(InvalidFormat, match="integer PCM"):
        decode_wav(raw)


def test_decode_rejects_non_wav():
    with pytest.raises(InvalidFormat):
        decode_wav(b"definitely not RIFF data")


def test_decode_pcm16_stereo_is_interleaved(ramp_stereo):
    buffer = decode_wav(make_wav(ramp_stereo, sample_rate=44100))

    assert buffer.sample_rate == 44100
    assert buffer.channels == 2
    assert buffer.bit_depth == 16
    assert buffer.frames == len(ramp_stereo)
    np.testing.assert_array_equal(buffer.samples, ramp_stereo.reshape(-1))


def test_decode_pcm24_keeps_native_scale():
    native = np.array([-8_388_608, -1, 0, 1, 8_388_607], dtype=np.int32)
    raw = make_wav(native << 8, sample_rate=48000, subtype="PCM_24")

    buffer = decode_wav(raw)

    assert buffer.bit_depth == 24
    assert buffer.sample_limits == (-8_388_608, 8_388_607)
    np.testing.assert_array_equal(buffer.samples, native)


def test_decode_failure_is_reported(monkeypatch, ramp_stereo):
    def boom(*args, **kwargs):
        raise RuntimeError("truncated data chunk")

    monkeypatch.setattr(codec.sf, "read", boom)

    with pytest.raises(DecodeFailure, match="truncated data chunk"):
        decode_wav(make_wav(ramp_stereo))


@pytest.mark.parametrize(
    "sample_rate,channels,subtype",
    [(8000, 1, "PCM_16"), (44100, 2, "PCM_16"), (22050, 1, "PCM_U8"), (96000, 4, "PCM_24"), (48000, 2, "PCM_32")],
)
def test_round_trip_preserves_format_and_length(sample_rate, channels, subtype):
    frames = np.zeros((300, channels), dtype=np.int16)
    frames[:, 0] = np.arange(300, dtype=np.int16) * 50
    source = decode_wav(make_wav(frames, sample_rate=sample_rate, subtype=subtype))

    again = decode_wav(encode_wav(source))

    assert again.sample_rate == sample_rate
    assert again.channels == channels
    assert again.bit_depth == source.bit_depth
    assert len(again.samples) == len(source.samples)
    np.testing.assert_array_equal(again.samples, source.samples)


def test_encode_writes_pcm_wav():
    buffer = AudioBuffer(sample_rate=8000, channels=1, bit_depth=16, samples=[0, 1000, -1000])

    info = sf.info(io.BytesIO(encode_wav(buffer)))

    assert info.format == "WAV"
    assert info.subtype == "PCM_16"
    assert info.frames == 3


def test_encode_empty_buffer():
    buffer = AudioBuffer(sample_rate=8000, channels=2, bit_depth=16, samples=[])

    assert decode_wav(encode_wav(buffer)).frames == 0


def test_encode_rejects_incomplete_frame():
    buffer = AudioBuffer(sample_rate=8000, channels=2, bit_depth=16, samples=[1, 2, 3])

    with pytest.raises(EncodeFailure):
        encode_wav(buffer)


def test_encode_rejects_unknown_bit_depth():
    buffer = AudioBuffer(sample_rate=8000, channels=1, bit_depth=12, samples=[1, 2, 3])

    with pytest.raises(EncodeFailure, match="bit depth"):
        encode_wav(buffer)


@pytest.mark.parametrize("kwargs", [{"sample_rate": 0}, {"channels": 0}])
def test_buffer_rejects_non_positive_format(kwargs):
    params = {"sample_rate": 8000, "channels": 1, "bit_depth": 16, "samples": []}
    params.update(kwargs)

    with pytest.raises(ValueError):
        AudioBuffer(**params)
