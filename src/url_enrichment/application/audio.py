"""
Audio Orchestrator – narration, music and beats for one video.

Both provider chains may come back empty; an empty asset (local_path == "")
plus warnings is the contractual failure, never an exception. Missing
credentials are reported once per provider per call, however many chains
consult that provider.
"""

from typing import Optional, Sequence

from url_enrichment.application.beats import BeatDetector
from url_enrichment.application.chain import run_chain
from url_enrichment.application.narration import create_music_prompt, create_timecodes, estimated_length
from url_enrichment.domain.models import AudioAsset, AudioBundle, AudioPayload, NarrationAsset, describe_audio
from url_enrichment.domain.results import Failure, StrategyResult, Success, WarningLog
from url_enrichment.ports.interfaces import IAssetStore, IMusicProvider, INarrationProvider


class AudioOrchestrator:
    """
    Sequences narration, music and beat detection.
    All dependencies are injected (ports); no concrete implementations here.
    """

    def __init__(
        self,
        *,
        narration_providers: Sequence[INarrationProvider],
        music_providers: Sequence[IMusicProvider],
        beat_detector: BeatDetector,
        asset_store: IAssetStore,
    ):
        self._narration = list(narration_providers)
        self._music = list(music_providers)
        self._beats = beat_detector
        self._store = asset_store

    def generate_audio(self, style: str, script: str, duration: float) -> AudioBundle:
        """Generate narration + music and detect beats. Raises ValueError for bad arguments only."""
        if not script or not script.strip():
            raise ValueError("narration script is required")
        if not duration or duration <= 0:
            raise ValueError(f"duration must be positive, got {duration!r}")

        print(f"\n🎵 Generating audio: {style or 'default'} style, {duration:g}s")
        warnings = WarningLog()

        narration = self.generate_narration(script, warnings)
        music = self.generate_music(style, duration, warnings)
        beats = self._beats.detect(music.local_path, warnings, duration=music.duration or duration)

        bundle = AudioBundle(music=music, narration=narration, beats=beats, warnings=warnings.as_tuple())
        print(f"✓ Audio finished: {describe_audio(bundle)}, warnings={len(bundle.warnings)}")
        return bundle

    def generate_narration(self, script: str, warnings: Optional[WarningLog] = None) -> NarrationAsset:
        warnings = warnings if warnings is not None else WarningLog()
        segments = create_timecodes(script)

        strategies = [
            (provider.name, (lambda p=provider: self._save(p.synthesize(script), "narration")))
            for provider in self._narration
        ]
        result = run_chain("narration", strategies, warnings, on_config_failure=self._config_reporter(warnings))
        if result is None:
            warnings.add(
                "narration",
                "no narration produced: every provider failed or none is configured; "
                "render without voice-over or retry",
            )
            return NarrationAsset(segments=segments)

        asset: AudioAsset = result.value
        return NarrationAsset(
            local_path=asset.local_path,
            static_path=asset.static_path,
            source_url=asset.source_url,
            duration=asset.duration if asset.duration is not None else estimated_length(segments),
            segments=segments,
        )

    def generate_music(self, style: str, duration: float, warnings: Optional[WarningLog] = None) -> AudioAsset:
        warnings = warnings if warnings is not None else WarningLog()
        prompt = create_music_prompt(style, duration)
        print(f"  🎼 Music prompt: \"{prompt}\"")

        strategies = [
            (provider.name, (lambda p=provider: self._save(p.compose(prompt, duration), "music")))
            for provider in self._music
        ]
        result = run_chain("music", strategies, warnings, on_config_failure=self._config_reporter(warnings))
        if result is None:
            warnings.add(
                "music",
                "no music produced: every provider failed or none is configured; "
                "render without background music or retry",
            )
            return AudioAsset(duration=duration)

        asset: AudioAsset = result.value
        return AudioAsset(
            local_path=asset.local_path,
            static_path=asset.static_path,
            source_url=asset.source_url,
            duration=duration,
        )

    def _save(self, result: StrategyResult, kind: str) -> StrategyResult:
        if isinstance(result, Failure):
            return result
        payload: AudioPayload = result.value
        asset = self._store.save_audio(payload.data, kind, payload.source_url)
        print(f"  ✓ Saved {kind} to: {asset.local_path}")
        return Success(asset, result.source, result.notes)

    @staticmethod
    def _config_reporter(warnings: WarningLog):
        def report(name: str, failure: Failure) -> None:
            warnings.add_once("config", f"{name} not configured: {failure.reason}")
        return report
