"""Browser-driven WAV gain "equalizer" service.

Uploaded WAV files are decoded, scaled by the bass/mid/treble gain
triple and written back as PCM WAV next to the original.
"""

__version__ = "0.1.0"
