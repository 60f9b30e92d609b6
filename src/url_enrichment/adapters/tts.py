"""
INarrationProvider adapters.

Priority (see default_adapters): ElevenLabs > MiniMax > Edge-TTS.
ElevenLabs: premium quality, needs ELEVENLABS_API_KEY.
MiniMax: speech T2A v2 endpoint, needs MINIMAX_API_KEY.
Edge-TTS: free Microsoft voices, no key, opt-in with TTS_USE_EDGE_TTS=true.
"""

import asyncio
from typing import Any, Optional

import edge_tts
import requests
from elevenlabs.client import ElevenLabs

from url_enrichment.adapters.audio_common import audio_result, minimax_audio, minimax_headers
from url_enrichment.config import (
    ELEVENLABS_API_KEY,
    ELEVENLABS_MODEL_ID,
    ELEVENLABS_VOICE_ID,
    MINIMAX_API_KEY,
    MINIMAX_BASE_URL,
    MINIMAX_GROUP_ID,
    MINIMAX_TTS_MODEL,
    MINIMAX_VOICE_ID,
    TTS_EDGE_VOICE,
    TTS_TIMEOUT,
)
from url_enrichment.domain.results import Failure, StrategyResult
from url_enrichment.ports.interfaces import INarrationProvider


def _collect_chunks(response: Any) -> bytes:
    """text_to_speech.convert() returns a stream of audio chunks."""
    if isinstance(response, (bytes, bytearray)):
        return bytes(response)
    audio_bytes = b""
    for chunk in response:
        if isinstance(chunk, (bytes, bytearray)):
            audio_bytes += bytes(chunk)
        elif hasattr(chunk, "read"):
            audio_bytes += chunk.read()
    return audio_bytes


class ElevenLabsNarration(INarrationProvider):
    """ElevenLabs SDK text-to-speech."""

    name = "elevenlabs"

    def __init__(
        self,
        api_key: Optional[str] = None,
        voice_id: Optional[str] = None,
        model_id: Optional[str] = None,
        client: Optional[Any] = None,
    ):
        self._api_key = ELEVENLABS_API_KEY if api_key is None else api_key
        self._voice_id = voice_id or ELEVENLABS_VOICE_ID
        self._model_id = model_id or ELEVENLABS_MODEL_ID
        self._client = client

    def synthesize(self, script: str) -> StrategyResult:
        if not self._api_key and self._client is None:
            return Failure("ELEVENLABS_API_KEY not set", configuration=True)
        if self._client is None:
            self._client = ElevenLabs(api_key=self._api_key, timeout=TTS_TIMEOUT)

        print(f"  🔊 Using ElevenLabs voice {self._voice_id} (model {self._model_id})")
        response = self._client.text_to_speech.convert(
            text=script,
            voice_id=self._voice_id,
            model_id=self._model_id,
        )
        return audio_result(_collect_chunks(response), "audio/mpeg", self.name)


class MiniMaxNarration(INarrationProvider):
    """MiniMax T2A v2 (non-streaming, mp3)."""

    name = "minimax"

    def __init__(
        self,
        api_key: Optional[str] = None,
        group_id: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        voice_id: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = MINIMAX_API_KEY if api_key is None else api_key
        self._group_id = MINIMAX_GROUP_ID if group_id is None else group_id
        self._base_url = (base_url or MINIMAX_BASE_URL).rstrip("/")
        self._model = model or MINIMAX_TTS_MODEL
        self._voice_id = voice_id or MINIMAX_VOICE_ID
        self._timeout = timeout or TTS_TIMEOUT
        self._session = session or requests.Session()

    def synthesize(self, script: str) -> StrategyResult:
        if not self._api_key:
            return Failure("MINIMAX_API_KEY not set", configuration=True)

        response = self._session.post(
            f"{self._base_url}/v1/t2a_v2",
            json={
                "model": self._model,
                "text": script,
                "stream": False,
                "voice_setting": {"voice_id": self._voice_id, "speed": 1.0, "vol": 1.0, "pitch": 0},
                "audio_setting": {"format": "mp3", "sample_rate": 32000, "bitrate": 128000, "channel": 1},
            },
            headers=minimax_headers(self._api_key, self._group_id),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return minimax_audio(response.json(), self.name, self._session)


class EdgeTTSNarration(INarrationProvider):
    """Microsoft Edge TTS (free, no key). Disabled unless explicitly enabled."""

    name = "edge-tts"

    def __init__(self, enabled: bool = False, voice: Optional[str] = None):
        self._enabled = enabled
        self._voice = voice or TTS_EDGE_VOICE

    def synthesize(self, script: str) -> StrategyResult:
        if not self._enabled:
            return Failure("Edge-TTS disabled (set TTS_USE_EDGE_TTS=true)", configuration=True)

        print(f"  🔊 Using Edge-TTS voice: {self._voice}")
        # Edge-TTS is async only
        data = asyncio.run(self._stream(script))
        return audio_result(data, "audio/mpeg", self.name)

    async def _stream(self, script: str) -> bytes:
        communicate = edge_tts.Communicate(script, self._voice)
        audio_bytes = b""
        async for chunk in communicate.stream():
            if chunk.get("type") == "audio":
                audio_bytes += chunk["data"]
        return audio_bytes
