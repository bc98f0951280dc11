import sys
import types

import numpy as np
import pytest

from speechgen.errors import PlaybackError
from speechgen.playback import play_wav
from speechgen.types import PcmFormat
from speechgen.wav import write_wav


class FakePortAudioError(Exception):
    pass


@pytest.fixture
def fake_sd(monkeypatch):
    calls = []
    module = types.SimpleNamespace(
        PortAudioError=FakePortAudioError,
        play=lambda data, samplerate, blocking: calls.append((data, samplerate, blocking)),
        calls=calls,
    )
    monkeypatch.setitem(sys.modules, "sounddevice", module)
    return module


def test_plays_decoded_samples(tmp_path, fake_sd):
    path = write_wav(tmp_path / "a.wav", np.array([1, 2, 3, 4], dtype=np.int16),
                     PcmFormat(22050, 16, 2))
    play_wav(path)

    data, rate, blocking = fake_sd.calls[0]
    assert rate == 22050
    assert blocking is True
    assert data.tolist() == [[1, 2], [3, 4]]


def test_device_error(tmp_path, fake_sd):
    def broken(*args, **kwargs):
        raise FakePortAudioError("no default output device")

    fake_sd.play = broken
    path = write_wav(tmp_path / "a.wav", np.zeros(4, dtype=np.int16))
    with pytest.raises(PlaybackError, match="no default output device"):
        play_wav(path)


def test_sounddevice_not_installed(tmp_path, monkeypatch):
    monkeypatch.setitem(sys.modules, "sounddevice", None)
    with pytest.raises(PlaybackError, match="sounddevice"):
        play_wav(tmp_path / "a.wav")


def test_unreadable_file(tmp_path, fake_sd):
    (tmp_path / "a.wav").write_bytes(b"not a wav")
    with pytest.raises(PlaybackError, match="cannot load"):
        play_wav(tmp_path / "a.wav")
