"""
Unit tests for the Audio Orchestrator: provider chains, empty-asset
contract and config warnings.
"""

import os

import pytest

from conftest import FAKE_MP3, FakeBeats, FakeMusic, FakeNarration, unconfigured
from url_enrichment.adapters.music import ElevenLabsMusic, MiniMaxMusic
from url_enrichment.adapters.tts import EdgeTTSNarration, ElevenLabsNarration, MiniMaxNarration
from url_enrichment.domain.models import describe_audio
from url_enrichment.domain.results import Failure, Success

SCRIPT = "Meet Example today. It is very fast!"


def keyless_providers():
    narration = [ElevenLabsNarration(api_key=""), MiniMaxNarration(api_key=""), EdgeTTSNarration(enabled=False)]
    music = [MiniMaxMusic(api_key=""), ElevenLabsMusic(api_key="")]
    return narration, music


class TestArguments:
    def test_blank_script_rejected(self, build_audio):
        with pytest.raises(ValueError):
            build_audio().generate_audio("lo-fi", "   ", 30)

    @pytest.mark.parametrize("duration", [0, -5])
    def test_non_positive_duration_rejected(self, build_audio, duration):
        with pytest.raises(ValueError):
            build_audio().generate_audio("lo-fi", SCRIPT, duration)


class TestNoProvidersConfigured:
    """No audio key at all: empty assets, warnings, placeholder beats."""

    def test_empty_assets_and_placeholder_beats(self, build_audio):
        narration, music = keyless_providers()
        bundle = build_audio(narration=narration, music=music).generate_audio("lo-fi", SCRIPT, 30)

        assert bundle.music.local_path == ""
        assert bundle.narration.local_path == ""
        assert len(bundle.warnings) >= 2
        assert bundle.beats
        assert all(round(b - a, 2) == 1.2 for a, b in zip(bundle.beats, bundle.beats[1:]))

    def test_each_missing_provider_reported_once(self, build_audio):
        narration, music = keyless_providers()
        bundle = build_audio(narration=narration, music=music).generate_audio("lo-fi", SCRIPT, 30)

        config = [w for w in bundle.warnings if w.startswith("[config]")]
        assert sum("ELEVENLABS_API_KEY" in w for w in config) == 1
        assert sum("MINIMAX_API_KEY" in w for w in config) == 1

    def test_segments_still_estimated(self, build_audio):
        narration, music = keyless_providers()
        bundle = build_audio(narration=narration, music=music).generate_audio("lo-fi", SCRIPT, 30)
        assert [s.text for s in bundle.narration.segments] == ["Meet Example today", "It is very fast"]

    def test_bundle_serializes_without_none(self, build_audio):
        bundle = build_audio().generate_audio("lo-fi", SCRIPT, 30)
        data = bundle.to_dict()
        assert data["music"]["localPath"] == ""
        assert data["narration"]["url"] == ""
        assert isinstance(data["narration"]["timecodes"], list)
        assert describe_audio(bundle).startswith("no music, no narration")


class TestProviderChains:
    def test_first_provider_wins(self, build_audio):
        first, second = FakeNarration("one"), FakeNarration("two")
        bundle = build_audio(narration=[first, second], music=[FakeMusic()]).generate_audio("jazz", SCRIPT, 20)

        assert first.scripts == [SCRIPT]
        assert second.scripts == []
        assert os.path.basename(bundle.narration.local_path).startswith("narration-")
        assert bundle.narration.static_path.startswith("audio/narration-")
        with open(bundle.narration.local_path, "rb") as f:
            assert f.read() == FAKE_MP3

    def test_failed_provider_advances_chain(self, build_audio):
        bad = FakeMusic("minimax", Failure("MiniMax insufficient balance (billing) (status 1008: )"))
        good = FakeMusic("elevenlabs")
        bundle = build_audio(narration=[FakeNarration()], music=[bad, good]).generate_audio("rock", SCRIPT, 20)

        assert bundle.music.produced
        assert bundle.music.source_url == "https://cdn/music.mp3"
        assert bundle.music.duration == 20
        assert any("[music] minimax failed" in w and "1008" in w for w in bundle.warnings)

    def test_music_prompt_is_instrumental(self, build_audio):
        music = FakeMusic()
        build_audio(narration=[FakeNarration()], music=[music]).generate_audio("cinematic", SCRIPT, 45)
        assert "instrumental only" in music.prompts[0]
        assert music.prompts[0].endswith("45 seconds")

    def test_beats_detected_on_saved_music(self, build_audio):
        beats = FakeBeats("aubio", Success([0.5, 1.0, 1.5], "aubio"))
        bundle = build_audio(narration=[FakeNarration()], music=[FakeMusic()], beats=[beats]).generate_audio(
            "pop", SCRIPT, 10
        )
        assert bundle.beats == (0.5, 1.0, 1.5)

    def test_config_failure_reported_under_config_stage(self, build_audio):
        missing = FakeNarration("elevenlabs", unconfigured("ELEVENLABS_API_KEY"))
        bundle = build_audio(narration=[missing, FakeNarration("minimax")], music=[FakeMusic()]).generate_audio(
            "pop", SCRIPT, 10
        )
        assert "[config] elevenlabs not configured: ELEVENLABS_API_KEY not set" in bundle.warnings
        assert bundle.narration.produced

    def test_store_failure_is_a_provider_failure(self, build_audio, asset_store):
        class BrokenStore(type(asset_store)):
            def save_audio(self, data, kind, source_url=""):
                raise OSError("disk full")

        bundle = build_audio(
            narration=[FakeNarration()], music=[FakeMusic()], store=BrokenStore(public_dir="unused")
        ).generate_audio("pop", SCRIPT, 10)
        assert not bundle.narration.produced
        assert any("disk full" in w for w in bundle.warnings)

    def test_narration_duration_falls_back_to_estimate(self, build_audio):
        bundle = build_audio(narration=[FakeNarration()]).generate_audio("pop", SCRIPT, 10)
        # measurement is disabled in the fixture store
        assert bundle.narration.duration == pytest.approx(3.3)
