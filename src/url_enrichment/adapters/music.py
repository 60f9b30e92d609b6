"""
IMusicProvider adapters.

Priority (see default_adapters): MiniMax > ElevenLabs.
Both are asked for instrumental-only tracks.
"""

from typing import Optional

import requests

from url_enrichment.adapters.audio_common import audio_result, minimax_audio, minimax_headers
from url_enrichment.config import (
    ELEVENLABS_API_KEY,
    ELEVENLABS_MUSIC_URL,
    MINIMAX_API_KEY,
    MINIMAX_BASE_URL,
    MINIMAX_GROUP_ID,
    MINIMAX_MUSIC_MODEL,
    MUSIC_TIMEOUT,
)
from url_enrichment.domain.results import Failure, StrategyResult
from url_enrichment.ports.interfaces import IMusicProvider


class MiniMaxMusic(IMusicProvider):
    """MiniMax music generation."""

    name = "minimax"

    def __init__(
        self,
        api_key: Optional[str] = None,
        group_id: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = MINIMAX_API_KEY if api_key is None else api_key
        self._group_id = MINIMAX_GROUP_ID if group_id is None else group_id
        self._base_url = (base_url or MINIMAX_BASE_URL).rstrip("/")
        self._model = model or MINIMAX_MUSIC_MODEL
        self._timeout = timeout or MUSIC_TIMEOUT
        self._session = session or requests.Session()

    def compose(self, prompt: str, duration: float) -> StrategyResult:
        if not self._api_key:
            return Failure("MINIMAX_API_KEY not set", configuration=True)

        response = self._session.post(
            f"{self._base_url}/v1/music_generation",
            json={
                "model": self._model,
                "prompt": prompt,
                "duration": int(round(duration)),
                "instrumental": True,
                "audio_setting": {"format": "mp3", "sample_rate": 44100, "bitrate": 256000},
            },
            headers=minimax_headers(self._api_key, self._group_id),
            timeout=self._timeout,
        )
        response.raise_for_status()
        return minimax_audio(response.json(), self.name, self._session)


class ElevenLabsMusic(IMusicProvider):
    """ElevenLabs music endpoint; answers with the mp3 body directly."""

    name = "elevenlabs"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = ELEVENLABS_API_KEY if api_key is None else api_key
        self._api_url = api_url or ELEVENLABS_MUSIC_URL
        self._timeout = timeout or MUSIC_TIMEOUT
        self._session = session or requests.Session()

    def compose(self, prompt: str, duration: float) -> StrategyResult:
        if not self._api_key:
            return Failure("ELEVENLABS_API_KEY not set", configuration=True)

        response = self._session.post(
            self._api_url,
            json={
                "prompt": prompt,
                "music_length_ms": int(duration * 1000),
                "force_instrumental": True,
            },
            headers={"xi-api-key": self._api_key, "Accept": "audio/mpeg"},
            timeout=self._timeout,
        )
        response.raise_for_status()
        return audio_result(response.content, response.headers.get("Content-Type", ""), self.name)
