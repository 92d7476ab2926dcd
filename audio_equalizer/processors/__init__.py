from audio_equalizer.processors.gain import apply_gain

__all__ = ["apply_gain"]
