import numpy as np

from audio_equalizer.codec import AudioBuffer


def apply_gain(buffer: AudioBuffer, bass: float, mid: float, treble: float) -> AudioBuffer:
    """Scale every sample by the three band gains and average the results.

    This is not frequency selective: the output is ``s * (bass+mid+treble)/3``
    clamped to the buffer's bit depth and truncated toward zero. Samples of a
    trailing incomplete frame are left as they are. Mutates ``buffer`` in
    place and returns it.
    """

    samples = buffer.samples
    usable = len(samples) - len(samples) % buffer.channels
    if usable == 0:
        return buffer

    low, high = buffer.sample_limits
    original = samples[:usable].astype(np.float64)

    with np.errstate(over="ignore", invalid="ignore"):
        bass_part = original * bass
        mid_part = original * mid
        treble_part = original * treble
        combined = (bass_part + mid_part + treble_part) / 3

    combined = np.nan_to_num(combined, nan=0.0, posinf=float(high), neginf=float(low))
    combined = np.clip(combined, low, high)
    samples[:usable] = np.trunc(combined).astype(samples.dtype)
    return buffer
