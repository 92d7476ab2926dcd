import logging
import re
from typing import NoReturn, Optional
from urllib.parse import quote

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from audio_equalizer import __version__
from audio_equalizer.analysis import analyze_wav
from audio_equalizer.config import EqualizerConfig
from audio_equalizer.engine import process_file
from audio_equalizer.errors import EqualizerError, InvalidParameter, PayloadTooLarge
from audio_equalizer.models import AudioInfoResponse, GainSettings, HealthResponse
from audio_equalizer.storage import FileStore, sanitize_filename
from audio_equalizer.ui import INDEX_HTML

logger = logging.getLogger("audio_equalizer")

UPLOAD_FIELD = "audioFile"
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def _raise_http(exc: EqualizerError) -> NoReturn:
    """Re-raise a domain error as an HTTPException with a structured detail."""

    raise HTTPException(
        status_code=exc.status_code,
        detail={"error": exc.code, "message": str(exc)},
    ) from exc


def _log_failure(tag: str, exc: EqualizerError, filename: Optional[str]) -> None:
    if exc.status_code >= 500:
        logger.exception("[%s] Failed for file=%s: %s", tag, filename, exc)
    else:
        logger.warning("[%s] Rejected file=%s: %s", tag, filename, exc)


def _redirect_to_file(filename: str) -> RedirectResponse:
    return RedirectResponse(url=f"/?file={quote(filename)}", status_code=303)


async def _read_limited_body(request: Request, limit: int) -> bytes:
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLarge("File too large")
    return bytes(body)


def _replay(request: Request, body: bytes) -> Request:
    """A Request over the same scope whose body is the buffered bytes."""

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(request.scope, receive)


def parse_percentage(field: str, raw: Optional[str]) -> int:
    """Parse a slider value as a base-10 integer; range is not checked."""

    if raw is None or raw == "":
        raise InvalidParameter(f"Missing {field} value")
    if not _INTEGER_RE.fullmatch(raw):
        raise InvalidParameter(f"Invalid {field} value")
    try:
        return int(raw)
    except ValueError as exc:  # more digits than int() will parse
        raise InvalidParameter(f"Invalid {field} value") from exc


def create_app(config: Optional[EqualizerConfig] = None) -> FastAPI:
    """Build the FastAPI app around an explicit configuration."""

    config = config or EqualizerConfig.from_env()
    config.ensure_directories()
    store = FileStore(config)

    app = FastAPI(title="Audio Equalizer", version=__version__)
    app.state.config = config
    app.state.store = store

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(config.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/", response_class=HTMLResponse)
    async def index():
        return HTMLResponse(INDEX_HTML)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Static liveness payload; does not touch the stores."""
        return HealthResponse(status="ok")

    @app.post("/upload")
    async def upload(request: Request):
        """Store a multipart ``audioFile`` upload under its sanitized name.

        The body is counted as it arrives, so chunked requests without a
        Content-Length hit the same ceiling, and only then parsed.
        """

        filename: Optional[str] = None
        try:
            declared = request.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > config.max_upload_bytes:
                raise PayloadTooLarge("File too large")

            body = await _read_limited_body(request, config.max_upload_bytes)
            form = await _replay(request, body).form()
            try:
                part = form.get(UPLOAD_FIELD)
                if not isinstance(part, UploadFile):
                    raise InvalidParameter("Error retrieving the file")
                filename = sanitize_filename(part.filename)
                data = await part.read()
            finally:
                await form.close()

            if len(data) > config.max_upload_bytes:
                raise PayloadTooLarge("File too large")

            await run_in_threadpool(store.save_upload, filename, data)
        except EqualizerError as exc:
            _log_failure("UPLOAD", exc, filename)
            _raise_http(exc)

        logger.info("[UPLOAD] Stored %s", filename)
        return _redirect_to_file(filename)

    @app.post("/process")
    async def process(
        filename: Optional[str] = Form(None),
        bass: Optional[str] = Form(None),
        mid: Optional[str] = Form(None),
        treble: Optional[str] = Form(None),
    ):
        """Apply the bass/mid/treble percentages to an uploaded WAV.

        The result lands in the processed store as ``processed_<filename>``
        and the client is redirected back to the player page.
        """

        try:
            name = sanitize_filename(filename)
            gains = GainSettings.from_percentages(
                parse_percentage("bass", bass),
                parse_percentage("mid", mid),
                parse_percentage("treble", treble),
            )
        except InvalidParameter as exc:
            _log_failure("PROCESS", exc, filename)
            _raise_http(exc)

        try:
            raw = await run_in_threadpool(store.read_upload, name)
            processed = await run_in_threadpool(process_file, raw, gains)
            await run_in_threadpool(store.save_processed, name, processed)
        except EqualizerError as exc:
            _log_failure("PROCESS", exc, name)
            _raise_http(exc)

        logger.info(
            "[PROCESS] %s bass=%s mid=%s treble=%s -> processed_%s",
            name, bass, mid, treble, name,
        )
        return _redirect_to_file(name)

    @app.get("/info/{filename}", response_model=AudioInfoResponse)
    async def info(filename: str):
        """Return format metadata and peak/RMS levels for an uploaded WAV."""

        try:
            name = sanitize_filename(filename)
            raw = await run_in_threadpool(store.read_upload, name)
            return await run_in_threadpool(analyze_wav, name, raw)
        except EqualizerError as exc:
            _log_failure("INFO", exc, filename)
            _raise_http(exc)

    app.mount("/uploads", StaticFiles(directory=str(config.upload_dir)), name="uploads")
    app.mount("/processed", StaticFiles(directory=str(config.processed_dir)), name="processed")

    return app


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""

    import uvicorn

    config = EqualizerConfig.from_env()
    logging.basicConfig(level=config.log_level.upper(), format="%(levelname)s %(message)s")
    app = create_app(config)

    logger.info("Server running on http://localhost:%d", config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)
