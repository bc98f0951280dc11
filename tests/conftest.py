import base64
import json

import httpx
import numpy as np
import pytest

from speechgen.config import Settings


def gemini_reply(pcm: bytes, mime_type: str = "audio/L16;codec=pcm;rate=24000") -> dict:
    return {
        "candidates": [{
            "content": {"parts": [{"inlineData": {
                "mimeType": mime_type,
                "data": base64.b64encode(pcm).decode(),
            }}]},
            "finishReason": "STOP",
        }]
    }


@pytest.fixture
def prompt_file(tmp_path):
    path = tmp_path / "prompt.txt"
    path.write_text("Speaker 1: Hows it going today?\nSpeaker 2: Not too bad.\n", encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path, prompt_file):
    return Settings(
        api_key="test-key",
        prompt_file=prompt_file,
        output_path=tmp_path / "out.wav",
    )


@pytest.fixture
def samples():
    return np.array([0, 1, -1, 32767, -32768, 1234, -4321], dtype=np.int16)


@pytest.fixture
def make_client():
    """Build an httpx.Client whose transport answers with ``handler``.

    Every request seen is appended to ``client.seen``.
    """
    def factory(handler):
        seen = []

        def transport(request):
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(transport))
        client.seen = seen
        return client

    return factory


def json_response(status: int, body) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(body).encode(),
                          headers={"Content-Type": "application/json"})
