"""Gemini text-to-speech client, one generateContent call per prompt."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from speechgen.config import Settings
from speechgen.errors import DecodeError, RequestFailed, TransportError
from speechgen.types import SpeakerVoice

log = logging.getLogger("tts-client")


@dataclass(frozen=True)
class InlineAudio:
    """Base64 audio payload and its MIME type from a generateContent reply."""
    data: str
    mime_type: str = ""


def _voice_config(voice_name: str) -> dict:
    return {"prebuiltVoiceConfig": {"voiceName": voice_name}}


def build_request_body(text: str, voices: Sequence[SpeakerVoice]) -> dict:
    """JSON body asking for audio of ``text`` spoken by ``voices``.

    Two or more voices use the multi-speaker config, where each speaker label
    must match how the prompt names that speaker. A single voice reads the
    whole prompt.
    """
    if len(voices) == 1:
        speech_config = {"voiceConfig": _voice_config(voices[0].voice_name)}
    else:
        speech_config = {
            "multiSpeakerVoiceConfig": {
                "speakerVoiceConfigs": [
                    {"speaker": v.speaker, "voiceConfig": _voice_config(v.voice_name)}
                    for v in voices
                ]
            }
        }
    return {
        "contents": [{"parts": [{"text": text}]}],
        "generationConfig": {
            "responseModalities": ["AUDIO"],
            "speechConfig": speech_config,
        },
    }


def extract_audio(payload: Any) -> InlineAudio:
    """Pull ``candidates[0].content.parts[0].inlineData`` out of a response."""
    try:
        inline = payload["candidates"][0]["content"]["parts"][0]["inlineData"]
        data = inline["data"]
    except (KeyError, IndexError, TypeError) as exc:
        reason = ""
        if isinstance(payload, dict):
            candidates = payload.get("candidates")
            if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
                reason = candidates[0].get("finishReason", "")
        msg = "response has no candidates[0].content.parts[0].inlineData.data"
        raise DecodeError(f"{msg} (finishReason={reason})" if reason else msg) from exc
    if not isinstance(data, str):
        raise DecodeError(f"inlineData.data is {type(data).__name__}, expected base64 string")
    return InlineAudio(data=data, mime_type=inline.get("mimeType", ""))


def request_speech(text: str, settings: Settings, client: httpx.Client | None = None) -> InlineAudio:
    """POST ``text`` to the generation endpoint and return its audio part.

    Args:
        text: Prompt to synthesize.
        settings: Endpoint, model, voices, key and timeout.
        client: Optional preconfigured client (tests pass a MockTransport).

    Raises:
        MissingCredential: No API key configured.
        TransportError: The request never got an HTTP response.
        RequestFailed: Status other than 200.
        DecodeError: Body is not JSON or has no inline audio.
    """
    api_key = settings.require_api_key()
    body = build_request_body(text, settings.voices)

    owns_client = client is None
    if owns_client:
        client = httpx.Client(timeout=settings.timeout)

    log.info("POST %s (%d chars, %d voices)", settings.endpoint, len(text), len(settings.voices))
    try:
        resp = client.post(settings.endpoint, params={"key": api_key}, json=body)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        # str(exc) may include the URL; keep the key out of it
        msg = str(exc).replace(api_key, "***")
        raise TransportError(f"{type(exc).__name__}: {msg}") from exc
    finally:
        if owns_client:
            client.close()

    log.info("← %d (%d bytes)", resp.status_code, len(resp.content))
    if resp.status_code != 200:
        raise RequestFailed(resp.status_code, resp.text[:200].strip())

    try:
        payload = resp.json()
    except ValueError as exc:
        raise DecodeError(f"response is not JSON: {exc}") from exc
    return extract_audio(payload)
