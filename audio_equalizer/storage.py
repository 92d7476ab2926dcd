import logging
import os
import tempfile
from pathlib import Path

from audio_equalizer.config import EqualizerConfig
from audio_equalizer.errors import InvalidParameter, NotFound, StorageFailure

logger = logging.getLogger("audio_equalizer")

PROCESSED_PREFIX = "processed_"


def sanitize_filename(name: str | None) -> str:
    """Reduce a client-supplied filename to a safe basename.

    Directory parts are dropped (``music/song.wav`` -> ``song.wav``);
    ``..`` components and NUL bytes are rejected outright.
    """

    if not name or "\x00" in name:
        raise InvalidParameter("No filename provided")

    parts = name.replace("\\", "/").split("/")
    if ".." in parts:
        raise InvalidParameter(f"Invalid filename {name!r}")

    base = parts[-1].strip()
    if base in {"", ".", ".."}:
        raise InvalidParameter(f"Invalid filename {name!r}")
    return base


def processed_name(filename: str) -> str:
    return f"{PROCESSED_PREFIX}{filename}"


class FileStore:
    """Flat on-disk stores for original uploads and processed results.

    Concurrent writes to the same name are not coordinated; the last
    writer wins.
    """

    def __init__(self, config: EqualizerConfig):
        self.upload_dir = Path(config.upload_dir)
        self.processed_dir = Path(config.processed_dir)

    def upload_path(self, filename: str) -> Path:
        return self.upload_dir / sanitize_filename(filename)

    def processed_path(self, filename: str) -> Path:
        return self.processed_dir / processed_name(sanitize_filename(filename))

    def save_upload(self, filename: str, data: bytes) -> Path:
        path = self.upload_path(filename)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise StorageFailure(f"Error saving the file: {exc}") from exc
        logger.info("[STORE] Saved upload %s (%d bytes)", path.name, len(data))
        return path

    def read_upload(self, filename: str) -> bytes:
        path = self.upload_path(filename)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise NotFound(f"Source file {path.name!r} not found") from exc
        except OSError as exc:
            raise StorageFailure(f"Error opening the source file: {exc}") from exc

    def save_processed(self, filename: str, data: bytes) -> Path:
        """Write a processed result, replacing any earlier one atomically."""

        path = self.processed_path(filename)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.processed_dir, prefix=".tmp_", suffix=".wav")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageFailure(f"Error saving processed file: {exc}") from exc
        logger.info("[STORE] Saved processed %s (%d bytes)", path.name, len(data))
        return path
