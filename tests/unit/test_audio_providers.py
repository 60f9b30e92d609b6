"""
Unit tests for the narration and music provider adapters.

HTTP providers are mocked with `responses`; the ElevenLabs SDK client is a
MagicMock injected through the constructor.
"""

import json
from unittest.mock import MagicMock

import requests
import responses

from conftest import FAKE_MP3
from url_enrichment.adapters.audio_common import minimax_error, validate_audio
from url_enrichment.adapters.music import ElevenLabsMusic, MiniMaxMusic
from url_enrichment.adapters.tts import EdgeTTSNarration, ElevenLabsNarration, MiniMaxNarration
from url_enrichment.application.chain import attempt
from url_enrichment.domain.results import Failure, Success

BASE = "https://api.minimax.test"
OK = {"status_code": 0, "status_msg": "success"}


class TestValidateAudio:
    def test_json_body_rejected(self):
        assert "expected audio" in validate_audio(b'{"detail": "quota"}' * 100, "application/json")

    def test_tiny_body_rejected(self):
        assert "too small" in validate_audio(b"ID3", "audio/mpeg")

    def test_real_audio_accepted(self):
        assert validate_audio(FAKE_MP3, "audio/mpeg") is None

    def test_minimax_error_codes(self):
        assert "billing" in minimax_error({"base_resp": {"status_code": 1008, "status_msg": "balance"}})
        assert minimax_error({"base_resp": OK}) is None
        assert minimax_error({}) is None


class TestElevenLabsNarration:
    def test_missing_key_is_configuration_failure(self):
        result = ElevenLabsNarration(api_key="").synthesize("Hello.")
        assert isinstance(result, Failure)
        assert result.configuration

    def test_chunks_are_joined(self):
        client = MagicMock()
        client.text_to_speech.convert.return_value = iter([FAKE_MP3[:2000], FAKE_MP3[2000:]])
        result = ElevenLabsNarration(api_key="k", voice_id="v1", model_id="m1", client=client).synthesize("Hello.")

        assert isinstance(result, Success)
        assert result.value.data == FAKE_MP3
        client.text_to_speech.convert.assert_called_once_with(text="Hello.", voice_id="v1", model_id="m1")

    def test_sdk_error_becomes_failure_in_chain(self):
        client = MagicMock()
        client.text_to_speech.convert.side_effect = RuntimeError("401 invalid api key")
        provider = ElevenLabsNarration(api_key="k", client=client)
        result = attempt(provider.name, lambda: provider.synthesize("Hello."))
        assert isinstance(result, Failure)
        assert "invalid api key" in result.reason


class TestMiniMaxNarration:
    @responses.activate
    def test_hex_audio_decoded(self):
        responses.add(
            responses.POST,
            f"{BASE}/v1/t2a_v2",
            json={"data": {"audio": FAKE_MP3.hex()}, "base_resp": OK},
            status=200,
        )
        result = MiniMaxNarration(api_key="k", group_id="g1", base_url=BASE).synthesize("Hello.")

        assert isinstance(result, Success)
        assert result.value.data == FAKE_MP3
        request = responses.calls[0].request
        assert request.headers["Authorization"] == "Bearer k"
        assert request.headers["X-Group-Id"] == "g1"
        assert json.loads(request.body)["text"] == "Hello."

    @responses.activate
    def test_group_id_optional(self):
        responses.add(
            responses.POST,
            f"{BASE}/v1/t2a_v2",
            json={"data": {"audio": FAKE_MP3.hex()}, "base_resp": OK},
        )
        MiniMaxNarration(api_key="k", group_id="", base_url=BASE).synthesize("Hello.")
        assert "X-Group-Id" not in responses.calls[0].request.headers

    @responses.activate
    def test_billing_error_in_200_body(self):
        responses.add(
            responses.POST,
            f"{BASE}/v1/t2a_v2",
            json={"base_resp": {"status_code": 1008, "status_msg": "insufficient balance"}},
            status=200,
        )
        result = MiniMaxNarration(api_key="k", base_url=BASE).synthesize("Hello.")
        assert isinstance(result, Failure)
        assert "1008" in result.reason
        assert not result.configuration

    @responses.activate
    def test_http_error_raises_for_chain(self):
        responses.add(responses.POST, f"{BASE}/v1/t2a_v2", status=503)
        provider = MiniMaxNarration(api_key="k", base_url=BASE)
        result = attempt(provider.name, lambda: provider.synthesize("Hello."))
        assert isinstance(result, Failure)
        assert "HTTPError" in result.reason

    @responses.activate
    def test_timeout_is_failure(self):
        responses.add(responses.POST, f"{BASE}/v1/t2a_v2", body=requests.exceptions.Timeout("read timed out"))
        provider = MiniMaxNarration(api_key="k", base_url=BASE)
        result = attempt(provider.name, lambda: provider.synthesize("Hello."))
        assert isinstance(result, Failure)
        assert "Timeout" in result.reason


class TestEdgeTTS:
    def test_disabled_by_default(self):
        result = EdgeTTSNarration().synthesize("Hello.")
        assert isinstance(result, Failure)
        assert result.configuration


class TestMiniMaxMusic:
    @responses.activate
    def test_audio_url_downloaded(self):
        responses.add(
            responses.POST,
            f"{BASE}/v1/music_generation",
            json={"data": {"audio": "https://cdn.minimax.test/track.mp3"}, "base_resp": OK},
        )
        responses.add(
            responses.GET,
            "https://cdn.minimax.test/track.mp3",
            body=FAKE_MP3,
            content_type="audio/mpeg",
        )
        result = MiniMaxMusic(api_key="k", base_url=BASE).compose("lo-fi chill beats", 30)

        assert isinstance(result, Success)
        assert result.value.source_url == "https://cdn.minimax.test/track.mp3"
        body = json.loads(responses.calls[0].request.body)
        assert body["instrumental"] is True
        assert body["duration"] == 30

    @responses.activate
    def test_no_audio_in_response(self):
        responses.add(responses.POST, f"{BASE}/v1/music_generation", json={"base_resp": OK})
        result = MiniMaxMusic(api_key="k", base_url=BASE).compose("jazz", 30)
        assert isinstance(result, Failure)

    def test_missing_key(self):
        result = MiniMaxMusic(api_key="").compose("jazz", 30)
        assert result.configuration


class TestElevenLabsMusic:
    URL = "https://api.elevenlabs.test/v1/music"

    @responses.activate
    def test_audio_body(self):
        responses.add(responses.POST, self.URL, body=FAKE_MP3, content_type="audio/mpeg")
        result = ElevenLabsMusic(api_key="k", api_url=self.URL).compose("rock", 12)

        assert isinstance(result, Success)
        request = responses.calls[0].request
        assert request.headers["xi-api-key"] == "k"
        assert json.loads(request.body)["music_length_ms"] == 12000

    @responses.activate
    def test_json_error_with_200_is_failure(self):
        responses.add(
            responses.POST,
            self.URL,
            json={"detail": {"status": "quota_exceeded", "message": "x" * 2000}},
            status=200,
        )
        result = ElevenLabsMusic(api_key="k", api_url=self.URL).compose("rock", 12)
        assert isinstance(result, Failure)
        assert "expected audio" in result.reason
