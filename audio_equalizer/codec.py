"""WAV container boundary built on soundfile (libsndfile).

Decoding yields an :class:`AudioBuffer` whose samples sit at their native
integer scale (a 16-bit file gives values in [-32768, 32767]) so the gain
processor can clamp against the real bit depth. Encoding reverses the
shift and writes PCM WAV with the original rate, channels and depth.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import numpy as np
import soundfile as sf

from audio_equalizer.errors import DecodeFailure, EncodeFailure, InvalidFormat

logger = logging.getLogger("audio_equalizer")


# libsndfile subtype -> bits per sample
PCM_SUBTYPES = {
    "PCM_U8": 8,
    "PCM_16": 16,
    "PCM_24": 24,
    "PCM_32": 32,
}
SUBTYPE_FOR_BITS = {bits: subtype for subtype, bits in PCM_SUBTYPES.items()}


@dataclass
class AudioBuffer:
    sample_rate: int
    channels: int
    bit_depth: int
    samples: np.ndarray

    def __post_init__(self) -> None:
        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        if self.channels <= 0:
            raise ValueError("channels must be positive")
        self.samples = np.asarray(self.samples, dtype=np.int64).reshape(-1)

    @property
    def frames(self) -> int:
        return len(self.samples) // self.channels

    @property
    def sample_limits(self) -> tuple[int, int]:
        """Inclusive (low, high) range representable at ``bit_depth``."""
        high = 2 ** (self.bit_depth - 1) - 1
        return -high - 1, high


def _has_riff_header(raw: bytes) -> bool:
    return len(raw) >= 12 and raw[:4] == b"RIFF" and raw[8:12] == b"WAVE"


def is_valid_wav(raw: bytes) -> bool:
    """Header-only check; never touches the sample data."""

    if not _has_riff_header(raw):
        return False
    try:
        info = sf.info(io.BytesIO(raw))
    except (sf.SoundFileError, RuntimeError):
        return False
    return info.format == "WAV" and info.subtype in PCM_SUBTYPES


def decode_wav(raw: bytes) -> AudioBuffer:
    if not _has_riff_header(raw):
        raise InvalidFormat("not a valid WAV file")

    try:
        info = sf.info(io.BytesIO(raw))
    except (sf.SoundFileError, RuntimeError) as exc:
        raise InvalidFormat(f"not a valid WAV file: {exc}") from exc

    if info.format != "WAV":
        raise InvalidFormat(f"not a valid WAV file (container {info.format})")
    bit_depth = PCM_SUBTYPES.get(info.subtype)
    if bit_depth is None:
        raise InvalidFormat(f"unsupported WAV encoding {info.subtype}; integer PCM required")

    try:
        # int32 reads are left-aligned by libsndfile whatever the file depth.
        data, sr = sf.read(io.BytesIO(raw), dtype="int32", always_2d=True)
    except (sf.SoundFileError, RuntimeError) as exc:
        raise DecodeFailure(f"error decoding WAV: {exc}") from exc

    samples = data.astype(np.int64) >> (32 - bit_depth)
    logger.debug(
        "[CODEC] Decoded %d frames sr=%d ch=%d bits=%d",
        data.shape[0], sr, data.shape[1], bit_depth,
    )
    return AudioBuffer(
        sample_rate=int(sr),
        channels=int(data.shape[1]),
        bit_depth=bit_depth,
        samples=samples.reshape(-1),
    )


def encode_wav(buffer: AudioBuffer) -> bytes:
    subtype = SUBTYPE_FOR_BITS.get(buffer.bit_depth)
    if subtype is None:
        raise EncodeFailure(f"unsupported bit depth {buffer.bit_depth}")
    if len(buffer.samples) % buffer.channels:
        raise EncodeFailure(
            f"{len(buffer.samples)} samples do not fill {buffer.channels}-channel frames"
        )

    low, high = buffer.sample_limits
    native = np.clip(buffer.samples, low, high)
    frames = (native << (32 - buffer.bit_depth)).astype(np.int32)
    frames = frames.reshape(-1, buffer.channels)

    out = io.BytesIO()
    try:
        sf.write(out, frames, buffer.sample_rate, subtype=subtype, format="WAV")
    except (sf.SoundFileError, RuntimeError, ValueError, TypeError) as exc:
        raise EncodeFailure(f"error encoding WAV: {exc}") from exc
    return out.getvalue()
