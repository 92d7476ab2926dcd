import numpy as np

from audio_equalizer.codec import AudioBuffer, decode_wav
from audio_equalizer.models import AudioInfoResponse


def describe_buffer(filename: str, buffer: AudioBuffer) -> AudioInfoResponse:
    """Format metadata plus peak/RMS relative to full scale."""

    full_scale = float(2 ** (buffer.bit_depth - 1))
    if len(buffer.samples):
        normalised = buffer.samples.astype(np.float64) / full_scale
        peak = float(np.max(np.abs(normalised)))
        rms = float(np.sqrt(np.mean(normalised ** 2)))
    else:
        peak = 0.0
        rms = 0.0

    return AudioInfoResponse(
        filename=filename,
        sample_rate=buffer.sample_rate,
        channels=buffer.channels,
        bit_depth=buffer.bit_depth,
        frames=buffer.frames,
        duration=buffer.frames / float(buffer.sample_rate),
        peak=peak,
        rms=rms,
    )


def analyze_wav(filename: str, raw: bytes) -> AudioInfoResponse:
    return describe_buffer(filename, decode_wav(raw))
