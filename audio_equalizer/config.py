from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple


DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024  # 50 MiB
DEFAULT_PORT = 8080


def _int_env(env: Mapping[str, str], *names: str, default: int) -> int:
    for name in names:
        raw = env.get(name)
        if raw is None or raw.strip() == "":
            continue
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    return default


@dataclass(frozen=True)
class EqualizerConfig:
    """Runtime settings handed to :func:`audio_equalizer.main.create_app`.

    Nothing reads these values from module globals, so tests can point
    both stores at a temporary directory.
    """

    upload_dir: Path = Path("./uploads")
    processed_dir: Path = Path("./processed")
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "info"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EqualizerConfig":
        env = os.environ if env is None else env

        origins = tuple(
            origin.strip()
            for origin in (env.get("EQ_CORS_ORIGINS") or "").split(",")
            if origin.strip()
        )

        return cls(
            upload_dir=Path(env.get("EQ_UPLOAD_DIR") or "./uploads"),
            processed_dir=Path(env.get("EQ_PROCESSED_DIR") or "./processed"),
            max_upload_bytes=_int_env(env, "EQ_MAX_UPLOAD_BYTES", default=DEFAULT_MAX_UPLOAD_BYTES),
            host=env.get("EQ_HOST") or "0.0.0.0",
            port=_int_env(env, "EQ_PORT", "PORT", default=DEFAULT_PORT),
            cors_origins=origins,
            log_level=(env.get("LOG_LEVEL") or "info").lower(),
        )

    def ensure_directories(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.processed_dir.mkdir(parents=True, exist_ok=True)
