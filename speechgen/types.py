"""Shared data types for the speech pipeline."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from speechgen.errors import InvalidFormat

MAX_BIT_DEPTH = 64
MAX_U16 = 0xFFFF
MAX_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class PcmFormat:
    """Layout of linear PCM samples. Gemini TTS returns 24kHz 16-bit mono."""
    sample_rate: int = 24000
    bit_depth: int = 16
    channels: int = 1

    def validate(self) -> None:
        if self.bit_depth <= 0 or self.bit_depth % 8:
            raise InvalidFormat(f"bit depth must be a positive multiple of 8, got {self.bit_depth}")
        if self.bit_depth > MAX_BIT_DEPTH:
            raise InvalidFormat(f"bit depth above {MAX_BIT_DEPTH} is not supported, got {self.bit_depth}")
        if self.channels <= 0:
            raise InvalidFormat(f"channel count must be positive, got {self.channels}")
        if self.sample_rate <= 0:
            raise InvalidFormat(f"sample rate must be positive, got {self.sample_rate}")
        # header slots: channels, block align and bit depth are 2 bytes, rates 4
        if self.channels > MAX_U16 or self.block_align > MAX_U16:
            raise InvalidFormat(f"{self.channels} channels do not fit a WAV header")
        if self.sample_rate > MAX_U32 or self.byte_rate > MAX_U32:
            raise InvalidFormat(f"sample rate {self.sample_rate} does not fit a WAV header")

    @property
    def sample_width(self) -> int:
        return self.bit_depth // 8

    @property
    def block_align(self) -> int:
        return self.channels * self.sample_width

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align


@dataclass(frozen=True)
class SpeakerVoice:
    """One speaker label in the prompt bound to a prebuilt voice."""
    speaker: str
    voice_name: str


@dataclass
class PcmAudio:
    """Decoded PCM samples, interleaved when there is more than one channel."""
    samples: np.ndarray
    fmt: PcmFormat = PcmFormat()

    @property
    def sample_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def duration_s(self) -> float:
        return self.sample_count / (self.fmt.sample_rate * self.fmt.channels)


@dataclass(frozen=True)
class WavHeader:
    """Fields of the canonical 44-byte RIFF/WAVE header."""
    chunk_size: int
    audio_format: int
    channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int

    @property
    def fmt(self) -> PcmFormat:
        return PcmFormat(
            sample_rate=self.sample_rate,
            bit_depth=self.bits_per_sample,
            channels=self.channels,
        )
