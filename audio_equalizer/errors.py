"""Error taxonomy shared by the engine, the stores and the HTTP layer."""


class EqualizerError(Exception):
    """Base class; ``status_code`` and ``code`` drive the HTTP mapping."""

    status_code = 500
    code = "EQUALIZER_ERROR"


class InvalidParameter(EqualizerError):
    status_code = 400
    code = "INVALID_PARAMETER"


class PayloadTooLarge(EqualizerError):
    status_code = 400
    code = "PAYLOAD_TOO_LARGE"


class NotFound(EqualizerError):
    status_code = 404
    code = "NOT_FOUND"


class InvalidFormat(EqualizerError):
    """Bytes are not a WAV container with integer PCM samples."""

    code = "INVALID_FORMAT"


class DecodeFailure(EqualizerError):
    """Header looked valid but the sample data could not be read."""

    code = "DECODE_FAILED"


class EncodeFailure(EqualizerError):
    code = "ENCODE_FAILED"


class StorageFailure(EqualizerError):
    code = "STORAGE_FAILED"
