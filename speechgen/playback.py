"""Play a written WAV file on the default output device."""

import logging
from pathlib import Path

from speechgen.errors import DecodeError, PlaybackError
from speechgen.wav import decode_wav

log = logging.getLogger("playback")


def play_wav(path) -> None:
    """Decode ``path`` and block until it has played through sounddevice."""
    path = Path(path)
    try:
        import sounddevice as sd
    except (ImportError, OSError) as exc:
        # OSError: the PortAudio shared library is missing
        raise PlaybackError(
            f"playback needs sounddevice (pip install 'speechgen[playback]'): {exc}"
        ) from exc

    try:
        audio = decode_wav(path.read_bytes())
    except (OSError, DecodeError) as exc:
        raise PlaybackError(f"cannot load {path}: {exc}") from exc
    frames = audio.samples
    if audio.fmt.channels > 1:
        frames = frames.reshape(-1, audio.fmt.channels)

    log.info("Playing %s (%.2fs)", path, audio.duration_s)
    try:
        sd.play(frames, samplerate=audio.fmt.sample_rate, blocking=True)
    except sd.PortAudioError as exc:
        raise PlaybackError(f"audio device error: {exc}") from exc
