import numpy as np
import pytest
from fastapi.testclient import TestClient

from audio_equalizer.config import EqualizerConfig
from audio_equalizer.main import create_app


@pytest.fixture
def ramp_stereo():
    left = np.linspace(-30000, 30000, 441).astype(np.int16)
    right = (-left).astype(np.int16)
    return np.stack([left, right], axis=1)


@pytest.fixture
def config(tmp_path):
    return EqualizerConfig(
        upload_dir=tmp_path / "uploads",
        processed_dir=tmp_path / "processed",
        max_upload_bytes=1024 * 1024,
    )


@pytest.fixture
def client(config):
    with TestClient(create_app(config)) as test_client:
        yield test_client
