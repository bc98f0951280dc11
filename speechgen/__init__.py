"""Gemini text-to-speech to WAV."""

from speechgen.config import Settings
from speechgen.errors import (
    ConfigError,
    DecodeError,
    InvalidFormat,
    MissingCredential,
    PlaybackError,
    ReadError,
    RequestFailed,
    SpeechGenError,
    TransportError,
    WriteError,
)
from speechgen.pipeline import run
from speechgen.types import PcmAudio, PcmFormat, SpeakerVoice, WavHeader
from speechgen.wav import decode_wav, encode_wav, read_wav_header, write_wav

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DecodeError",
    "InvalidFormat",
    "MissingCredential",
    "PcmAudio",
    "PcmFormat",
    "PlaybackError",
    "ReadError",
    "RequestFailed",
    "Settings",
    "SpeakerVoice",
    "SpeechGenError",
    "TransportError",
    "WavHeader",
    "WriteError",
    "decode_wav",
    "encode_wav",
    "read_wav_header",
    "run",
    "write_wav",
]
