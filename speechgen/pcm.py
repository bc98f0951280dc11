"""Base64 payload to raw PCM int16 samples."""

import base64
import binascii
import logging
import re

import numpy as np

from speechgen.errors import DecodeError

log = logging.getLogger("pcm")

_RATE_RE = re.compile(r"rate=(\d+)")


def decode_base64(text: str) -> bytes:
    """Decode standard-alphabet base64, rejecting anything outside it."""
    cleaned = "".join(text.split())
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"malformed base64 audio payload: {exc}") from exc


def bytes_to_samples(raw: bytes) -> np.ndarray:
    """Reinterpret a byte buffer as signed 16-bit little-endian samples.

    A trailing odd byte cannot form a whole sample and is dropped.
    """
    if len(raw) % 2:
        log.debug("Dropping trailing odd byte from %d-byte PCM buffer", len(raw))
        raw = raw[:-1]
    return np.frombuffer(raw, dtype="<i2").astype(np.int16)


def parse_mime_rate(mime_type: str | None) -> int | None:
    """Sample rate advertised in an L16 MIME type such as
    ``audio/L16;codec=pcm;rate=24000``."""
    if not mime_type:
        return None
    match = _RATE_RE.search(mime_type)
    return int(match.group(1)) if match else None
