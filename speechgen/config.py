"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from speechgen.errors import ConfigError, MissingCredential
from speechgen.types import PcmFormat, SpeakerVoice

API_KEY_ENV = "GOOGLE_API_KEY"

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_PROMPT_FILE = "prompt.txt"
DEFAULT_OUTPUT = "out.wav"
DEFAULT_VOICES = "Speaker 1=Algieba,Speaker 2=Laomedeia"
DEFAULT_TIMEOUT = 120.0


def parse_voices(value: str) -> tuple[SpeakerVoice, ...]:
    """Parse ``"Speaker 1=Algieba,Speaker 2=Laomedeia"`` into voice bindings."""
    voices = []
    for item in value.split(","):
        if not item.strip():
            continue
        speaker, sep, voice_name = item.partition("=")
        speaker, voice_name = speaker.strip(), voice_name.strip()
        if not sep or not speaker or not voice_name:
            raise ConfigError(f"voice binding must look like 'Speaker=VoiceName', got {item.strip()!r}")
        voices.append(SpeakerVoice(speaker=speaker, voice_name=voice_name))
    if not voices:
        raise ConfigError("at least one speaker voice is required")
    speakers = [v.speaker for v in voices]
    if len(set(speakers)) != len(speakers):
        raise ConfigError(f"duplicate speaker labels in {value!r}")
    return tuple(voices)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    prompt_file: Path = Path(DEFAULT_PROMPT_FILE)
    output_path: Path = Path(DEFAULT_OUTPUT)
    model: str = DEFAULT_MODEL
    api_base: str = DEFAULT_API_BASE
    voices: tuple[SpeakerVoice, ...] = field(default_factory=lambda: parse_voices(DEFAULT_VOICES))
    timeout: float = DEFAULT_TIMEOUT
    play: bool = False
    log_level: str = "INFO"
    fmt: PcmFormat = PcmFormat()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        timeout_raw = env.get("SPEECHGEN_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ConfigError(f"SPEECHGEN_TIMEOUT must be a number, got {timeout_raw!r}") from None
        if timeout <= 0:
            raise ConfigError(f"SPEECHGEN_TIMEOUT must be positive, got {timeout_raw!r}")

        log_level = env.get("SPEECHGEN_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"unknown SPEECHGEN_LOG_LEVEL {log_level!r}")

        return cls(
            api_key=env.get(API_KEY_ENV, "").strip(),
            prompt_file=Path(env.get("SPEECHGEN_PROMPT_FILE", DEFAULT_PROMPT_FILE)),
            output_path=Path(env.get("SPEECHGEN_OUTPUT", DEFAULT_OUTPUT)),
            model=env.get("SPEECHGEN_MODEL", DEFAULT_MODEL),
            api_base=env.get("SPEECHGEN_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            voices=parse_voices(env.get("SPEECHGEN_VOICES", DEFAULT_VOICES)),
            timeout=timeout,
            play=_parse_bool(env.get("SPEECHGEN_PLAY", "0")),
            log_level=log_level,
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise MissingCredential(
                f"API key is not set. Please set the {API_KEY_ENV} environment variable."
            )
        return self.api_key

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"
