"""End-to-end run: prompt file in, WAV file out."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from speechgen.client import request_speech
from speechgen.config import Settings
from speechgen.errors import ConfigError, MissingCredential, PlaybackError, SpeechGenError
from speechgen.pcm import bytes_to_samples, decode_base64, parse_mime_rate
from speechgen.prompt import read_prompt
from speechgen.types import PcmAudio, PcmFormat
from speechgen.wav import write_wav

log = logging.getLogger("speechgen")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

LOG_FORMAT = "%(asctime)s %(name)-14s %(levelname)-5s %(message)s"


def run(settings: Settings, client: httpx.Client | None = None) -> Path:
    """Generate speech for ``settings.prompt_file`` and write it as WAV.

    Nothing is written unless every earlier stage succeeded.

    Returns:
        Path of the written WAV file.
    """
    settings.require_api_key()
    text = read_prompt(settings.prompt_file)

    inline = request_speech(text, settings, client=client)
    raw = decode_base64(inline.data)

    fmt = settings.fmt
    rate = parse_mime_rate(inline.mime_type)
    if rate and rate != fmt.sample_rate:
        log.info("Response advertises %dHz (%s), overriding %dHz",
                 rate, inline.mime_type, fmt.sample_rate)
        fmt = PcmFormat(sample_rate=rate, bit_depth=fmt.bit_depth, channels=fmt.channels)

    audio = PcmAudio(samples=bytes_to_samples(raw), fmt=fmt)
    log.info("Decoded %d bytes → %d samples (%.2fs)", len(raw), audio.sample_count, audio.duration_s)

    return write_wav(settings.output_path, audio.samples, audio.fmt)


def main() -> int:
    """Console entry point. Returns the process exit code."""
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        log.error("An error occurred: %s", exc)
        return EXIT_CONFIG

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        path = run(settings)
    except MissingCredential as exc:
        log.error("An error occurred: %s", exc)
        return EXIT_CONFIG
    except SpeechGenError as exc:
        log.error("An error occurred: %s", exc)
        return EXIT_FAILED

    print(f"Successfully generated and saved audio to '{path}'")

    if settings.play:
        from speechgen.playback import play_wav

        try:
            play_wav(path)
        except PlaybackError as exc:
            log.warning("Playback skipped: %s", exc)
    return EXIT_OK
