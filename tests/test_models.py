import math

import pytest
from pydantic import ValidationError

from audio_equalizer.models import GainSettings


def test_percentages_map_to_factors():
    gains = GainSettings.from_percentages(200, 0, 100)

    assert (gains.bass, gains.mid, gains.treble) == (2.0, 0.0, 1.0)
    assert gains.combined == pytest.approx(1.0)


def test_out_of_range_percentages_are_kept():
    gains = GainSettings.from_percentages(-50, 1000, 250)

    assert (gains.bass, gains.mid, gains.treble) == (-0.5, 10.0, 2.5)


def test_huge_percentages_saturate():
    gains = GainSettings.from_percentages(10 ** 400, -(10 ** 400), 0)

    assert gains.bass == math.inf
    assert gains.mid == -math.inf


def test_settings_are_immutable():
    gains = GainSettings()

    with pytest.raises(ValidationError):
        gains.bass = 3.0
