"""Error taxonomy for the speech generation pipeline."""


class SpeechGenError(Exception):
    """Base class for every failure the pipeline reports to the operator."""


class MissingCredential(SpeechGenError):
    """No API key configured."""


class ConfigError(SpeechGenError):
    """An environment setting could not be parsed."""


class ReadError(SpeechGenError):
    """Prompt file missing, unreadable or empty."""


class RequestFailed(SpeechGenError):
    """The generation endpoint answered with a non-200 status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        msg = f"API request failed with status code: {status_code}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class TransportError(SpeechGenError):
    """DNS, TLS, connection or timeout failure talking to the endpoint."""


class DecodeError(SpeechGenError):
    """Response body, base64 payload or WAV bytes could not be decoded."""


class InvalidFormat(SpeechGenError):
    """Sample format parameters cannot describe a PCM WAV file."""


class WriteError(SpeechGenError):
    """The WAV file could not be written."""


class PlaybackError(SpeechGenError):
    """The written file could not be played."""
