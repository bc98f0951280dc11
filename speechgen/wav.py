"""Uncompressed PCM WAV encoding, written byte by byte.

Layout (all integers little-endian)::

    0   "RIFF"          4   chunk size = 36 + data size
    8   "WAVE"          12  "fmt "
    16  16              20  audio format = 1 (PCM)
    22  channels        24  sample rate
    28  byte rate       32  block align
    34  bits/sample     36  "data"
    40  data size       44  sample bytes

Players check that the RIFF chunk size equals file length - 8 and that the
data size matches the payload, so both are derived from the encoded payload.
"""

from __future__ import annotations

import logging
import os
import stat
import struct
import tempfile
from pathlib import Path

import numpy as np

from speechgen.errors import DecodeError, InvalidFormat, WriteError
from speechgen.types import MAX_U32, PcmAudio, PcmFormat, WavHeader

log = logging.getLogger("wav")

HEADER_SIZE = 44
FMT_CHUNK_SIZE = 16
WAVE_FORMAT_PCM = 1

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def _sample_bytes(samples: np.ndarray, fmt: PcmFormat) -> bytes:
    """Pack integer samples at the format's bit depth."""
    values = np.asarray(samples)
    if values.size and not np.issubdtype(values.dtype, np.integer):
        raise InvalidFormat(f"samples must be integers, got {values.dtype}")
    values = values.ravel()
    if not values.size:
        return b""

    bits = fmt.bit_depth
    lo, hi = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    # compare as Python ints before any cast can wrap uint64
    if int(values.min()) < lo or int(values.max()) > hi:
        raise InvalidFormat(f"sample values outside the {bits}-bit signed range [{lo}, {hi}]")
    values = values.astype(np.int64)

    if bits == 8:
        # 8-bit WAV data is unsigned, centred on 128
        return (values + 128).astype(np.uint8).tobytes()

    # Low-order bytes of each little-endian int64 are the two's complement
    # encoding at any narrower width.
    wide = values.astype("<i8").view(np.uint8).reshape(-1, 8)
    return wide[:, : fmt.sample_width].tobytes()


def build_header(data_size: int, fmt: PcmFormat) -> bytes:
    fmt.validate()
    if HEADER_SIZE - 8 + data_size > MAX_U32:
        raise InvalidFormat(f"{data_size} bytes of audio exceed the 4 GiB WAV limit")
    return _HEADER.pack(
        b"RIFF",
        HEADER_SIZE - 8 + data_size,
        b"WAVE",
        b"fmt ",
        FMT_CHUNK_SIZE,
        WAVE_FORMAT_PCM,
        fmt.channels,
        fmt.sample_rate,
        fmt.byte_rate,
        fmt.block_align,
        fmt.bit_depth,
        b"data",
        data_size,
    )


def encode_wav(samples: np.ndarray, fmt: PcmFormat = PcmFormat()) -> bytes:
    """Encode samples as a complete WAV file image.

    Args:
        samples: Integer samples, interleaved if ``fmt.channels > 1``.
        fmt: Sample rate, bit depth and channel count for the header.

    Returns:
        Header plus payload; ``len(result) == 44 + len(samples) * bit_depth/8``.

    Raises:
        InvalidFormat: Bad format parameters or out-of-range samples.
    """
    fmt.validate()
    payload = _sample_bytes(samples, fmt)
    return build_header(len(payload), fmt) + payload


def _file_mode(target: Path) -> int:
    """Mode for a new file at ``target``: the old file's, else 0666 less umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_wav(path: str | os.PathLike, samples: np.ndarray, fmt: PcmFormat = PcmFormat()) -> Path:
    """Encode and write a WAV file, replacing whatever was at ``path``.

    The file is written to a temporary sibling and renamed into place, so the
    target is either the complete new file or left as it was.
    """
    target = Path(path)
    data = encode_wav(samples, fmt)

    tmp_path: Path | None = None
    replaced = False
    try:
        with tempfile.NamedTemporaryFile(
            "wb", dir=target.parent, prefix=f".{target.name}.", suffix=".tmp", delete=False
        ) as f:
            tmp_path = Path(f.name)
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, _file_mode(target))
        os.replace(tmp_path, target)
        replaced = True
    except OSError as exc:
        raise WriteError(f"could not write {target}: {exc}") from exc
    finally:
        if tmp_path is not None and not replaced:
            tmp_path.unlink(missing_ok=True)

    log.info("Wrote %s: %d bytes (%d data, %dHz %d-bit %dch)",
             target, len(data), len(data) - HEADER_SIZE,
             fmt.sample_rate, fmt.bit_depth, fmt.channels)
    return target


def read_wav_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header at the start of ``data``."""
    if len(data) < HEADER_SIZE:
        raise DecodeError(f"WAV data too short for header: {len(data)} bytes")
    (riff, chunk_size, wave, fmt_id, fmt_size, audio_format, channels,
     sample_rate, byte_rate, block_align, bits, data_id, data_size) = _HEADER.unpack_from(data)
    if riff != b"RIFF" or wave != b"WAVE":
        raise DecodeError("not a RIFF/WAVE file")
    if fmt_id != b"fmt " or fmt_size != FMT_CHUNK_SIZE or data_id != b"data":
        raise DecodeError("unsupported chunk layout, expected canonical fmt/data chunks")
    return WavHeader(
        chunk_size=chunk_size,
        audio_format=audio_format,
        channels=channels,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits,
        data_size=data_size,
    )


def decode_wav(data: bytes) -> PcmAudio:
    """Read samples back out of a file produced by :func:`encode_wav`."""
    header = read_wav_header(data)
    if header.audio_format != WAVE_FORMAT_PCM:
        raise DecodeError(f"not linear PCM (audio format {header.audio_format})")
    fmt = header.fmt
    try:
        fmt.validate()
    except InvalidFormat as exc:
        raise DecodeError(str(exc)) from exc

    payload = data[HEADER_SIZE:HEADER_SIZE + header.data_size]
    if len(payload) != header.data_size:
        raise DecodeError(f"data chunk truncated: {len(payload)} of {header.data_size} bytes")

    width = fmt.sample_width
    if len(payload) % width:
        raise DecodeError(f"data size {len(payload)} is not a multiple of {width}-byte samples")
    if fmt.bit_depth == 8:
        samples = np.frombuffer(payload, dtype=np.uint8).astype(np.int16) - 128
    elif width in (2, 4, 8):
        samples = np.frombuffer(payload, dtype=f"<i{width}").copy()
    else:
        raw = np.frombuffer(payload, dtype=np.uint8).reshape(-1, width)
        # sign-extend into int64
        pad = np.where(raw[:, -1:] & 0x80, 0xFF, 0x00).astype(np.uint8)
        wide = np.concatenate([raw, np.repeat(pad, 8 - width, axis=1)], axis=1)
        samples = np.ascontiguousarray(wide).view("<i8").ravel()
    return PcmAudio(samples=samples, fmt=fmt)
