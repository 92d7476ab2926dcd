"""Pydantic models for gain settings and JSON responses."""

import math

from pydantic import BaseModel, ConfigDict


def _percent_to_factor(percentage: int) -> float:
    try:
        return float(percentage) / 100.0
    except OverflowError:
        # Integer too large for a float; saturate instead of failing.
        return math.inf if percentage > 0 else -math.inf


class GainSettings(BaseModel):
    """Linear multipliers for the bass, mid and treble sliders (1.0 = 100%)."""

    model_config = ConfigDict(frozen=True)

    bass: float = 1.0
    mid: float = 1.0
    treble: float = 1.0

    @classmethod
    def from_percentages(cls, bass: int, mid: int, treble: int) -> "GainSettings":
        # No range check: 0..200 is only the UI convention.
        return cls(
            bass=_percent_to_factor(bass),
            mid=_percent_to_factor(mid),
            treble=_percent_to_factor(treble),
        )

    @property
    def combined(self) -> float:
        return (self.bass + self.mid + self.treble) / 3


class AudioInfoResponse(BaseModel):
    filename: str
    sample_rate: int
    channels: int
    bit_depth: int
    frames: int
    duration: float
    peak: float
    rms: float


class HealthResponse(BaseModel):
    status: str
