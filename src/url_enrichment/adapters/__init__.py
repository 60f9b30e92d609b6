"""
Adapters – concrete implementations of ports.
Provider order inside each list is the fallback priority.
"""

from url_enrichment.adapters.beats import AubioBeatStrategy, EnergyBeatStrategy, FFmpegSilenceStrategy
from url_enrichment.adapters.browser import PlaywrightBrowser
from url_enrichment.adapters.http import RequestsFetcher
from url_enrichment.adapters.logos import (
    BrandfetchLogoSource,
    ClearbitLogoSource,
    CommonPathLogoSource,
    GoogleFaviconSource,
)
from url_enrichment.adapters.music import ElevenLabsMusic, MiniMaxMusic
from url_enrichment.adapters.storage import LocalAssetStore
from url_enrichment.adapters.tabstack import TabstackExtractor
from url_enrichment.adapters.tts import EdgeTTSNarration, ElevenLabsNarration, MiniMaxNarration


def default_adapters(**overrides):
    """
    Build default adapter instances from config.
    Overrides: browser=..., narration_providers=[...], etc. for testing.
    """
    from url_enrichment.config import TTS_USE_EDGE_TTS

    defaults = {
        "browser": PlaywrightBrowser(),
        "structured_extractor": TabstackExtractor(),
        "logo_sources": [
            ClearbitLogoSource(),
            BrandfetchLogoSource(),
            CommonPathLogoSource(),
            GoogleFaviconSource(),
        ],
        "fetcher": RequestsFetcher(),
        "asset_store": LocalAssetStore(),
        "narration_providers": [
            ElevenLabsNarration(),
            MiniMaxNarration(),
            EdgeTTSNarration(enabled=TTS_USE_EDGE_TTS),
        ],
        "music_providers": [MiniMaxMusic(), ElevenLabsMusic()],
        "beat_strategies": [AubioBeatStrategy(), FFmpegSilenceStrategy(), EnergyBeatStrategy()],
        "video_renderer": None,
    }
    defaults.update(overrides)
    return defaults
