import pytest

from audio_equalizer.errors import InvalidParameter, NotFound
from audio_equalizer.storage import FileStore, processed_name, sanitize_filename


@pytest.mark.parametrize(
    "name,expected",
    [
        ("song.wav", "song.wav"),
        ("music/song.wav", "song.wav"),
        ("C:\\Users\\me\\song.wav", "song.wav"),
        ("/abs/path/take 2.wav", "take 2.wav"),
        ("..song.wav", "..song.wav"),
    ],
)
def test_sanitize_keeps_basename(name, expected):
    assert sanitize_filename(name) == expected


@pytest.mark.parametrize(
    "name",
    [None, "", ".", "..", "../etc/passwd", "a/../../b.wav", "..\\secret.wav", "dir/", "bad\x00.wav"],
)
def test_sanitize_rejects_unsafe_names(name):
    with pytest.raises(InvalidParameter):
        sanitize_filename(name)


def test_processed_name():
    assert processed_name("song.wav") == "processed_song.wav"


@pytest.fixture
def store(config):
    config.ensure_directories()
    return FileStore(config)


def test_upload_round_trip(store, config):
    path = store.save_upload("nested/song.wav", b"abc")

    assert path == config.upload_dir / "song.wav"
    assert store.read_upload("song.wav") == b"abc"


def test_upload_overwrites(store):
    store.save_upload("song.wav", b"first")
    store.save_upload("song.wav", b"second")

    assert store.read_upload("song.wav") == b"second"


def test_read_missing_upload(store):
    with pytest.raises(NotFound):
        store.read_upload("missing.wav")


def test_save_processed_replaces_and_leaves_no_temp_files(store, config):
    store.save_processed("song.wav", b"one")
    path = store.save_processed("song.wav", b"two")

    assert path == config.processed_dir / "processed_song.wav"
    assert path.read_bytes() == b"two"
    assert sorted(p.name for p in config.processed_dir.iterdir()) == ["processed_song.wav"]
