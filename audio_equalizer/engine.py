import logging
from time import perf_counter

from audio_equalizer.codec import decode_wav, encode_wav, is_valid_wav
from audio_equalizer.errors import InvalidFormat
from audio_equalizer.models import GainSettings
from audio_equalizer.processors import apply_gain

logger = logging.getLogger("audio_equalizer")


def process_file(raw_bytes: bytes, gains: GainSettings) -> bytes:
    """Decode a WAV upload, apply the gain triple and re-encode it.

    - Rejects anything that is not an integer PCM WAV before reading samples
    - Applies :func:`apply_gain` to the decoded buffer
    - Encodes with the source sample rate, channel count and bit depth

    Raises ``InvalidFormat``, ``DecodeFailure`` or ``EncodeFailure``.
    """

    start = perf_counter()

    if not is_valid_wav(raw_bytes):
        raise InvalidFormat("not a valid WAV file")

    buffer = decode_wav(raw_bytes)
    logger.debug(
        "[ENGINE] Applying gains bass=%.2f mid=%.2f treble=%.2f (combined %.3f)",
        gains.bass, gains.mid, gains.treble, gains.combined,
    )
    apply_gain(buffer, gains.bass, gains.mid, gains.treble)
    encoded = encode_wav(buffer)

    logger.info(
        "[ENGINE] Processed %d frames sr=%d ch=%d bits=%d in %.1f ms",
        buffer.frames,
        buffer.sample_rate,
        buffer.channels,
        buffer.bit_depth,
        (perf_counter() - start) * 1000.0,
    )
    return encoded
