from pathlib import Path

import pytest

from speechgen.config import DEFAULT_MODEL, Settings, parse_voices
from speechgen.errors import ConfigError, MissingCredential
from speechgen.types import SpeakerVoice


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})

    assert settings.api_key == ""
    assert settings.output_path == Path("out.wav")
    assert settings.model == DEFAULT_MODEL
    assert settings.voices == (
        SpeakerVoice("Speaker 1", "Algieba"),
        SpeakerVoice("Speaker 2", "Laomedeia"),
    )
    assert settings.play is False
    assert settings.endpoint == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.5-flash-preview-tts:generateContent"
    )


def test_overrides():
    settings = Settings.from_env({
        "GOOGLE_API_KEY": " abc ",
        "SPEECHGEN_OUTPUT": "/tmp/story.wav",
        "SPEECHGEN_PROMPT_FILE": "story.md",
        "SPEECHGEN_API_BASE": "http://localhost:9000/v1/",
        "SPEECHGEN_MODEL": "m",
        "SPEECHGEN_VOICES": "Joe=Kore, Jane=Puck",
        "SPEECHGEN_TIMEOUT": "5",
        "SPEECHGEN_PLAY": "yes",
        "SPEECHGEN_LOG_LEVEL": "debug",
    })

    assert settings.require_api_key() == "abc"
    assert settings.output_path == Path("/tmp/story.wav")
    assert settings.prompt_file == Path("story.md")
    assert settings.endpoint == "http://localhost:9000/v1/models/m:generateContent"
    assert settings.voices == (SpeakerVoice("Joe", "Kore"), SpeakerVoice("Jane", "Puck"))
    assert settings.timeout == 5.0
    assert settings.play is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("key", ["", "   "])
def test_missing_api_key(key):
    with pytest.raises(MissingCredential, match="GOOGLE_API_KEY"):
        Settings.from_env({"GOOGLE_API_KEY": key}).require_api_key()


@pytest.mark.parametrize("voices", ["", "Joe", "Joe=", "=Kore", "Joe=Kore,Joe=Puck"])
def test_bad_voices(voices):
    with pytest.raises(ConfigError):
        parse_voices(voices)


@pytest.mark.parametrize("env", [
    {"SPEECHGEN_TIMEOUT": "soon"},
    {"SPEECHGEN_TIMEOUT": "0"},
    {"SPEECHGEN_LOG_LEVEL": "LOUD"},
])
def test_bad_settings(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)
