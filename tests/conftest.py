"""
Shared pytest fixtures for the URL enrichment tests.

Nothing here touches the network or launches a browser: the browser, HTTP
fetcher and providers are small fakes injected through constructors.
"""

import io
from typing import List, Optional, Tuple

import pytest
from PIL import Image

from url_enrichment.adapters.storage import LocalAssetStore
from url_enrichment.application.audio import AudioOrchestrator
from url_enrichment.application.beats import BeatDetector
from url_enrichment.application.branding import BrandingAssembler
from url_enrichment.application.content import ContentExtractor
from url_enrichment.application.extraction import ExtractionOrchestrator
from url_enrichment.application.logos import LogoResolver
from url_enrichment.domain.models import AudioPayload, CssSignals, PageSnapshot
from url_enrichment.domain.results import Failure, Success
from url_enrichment.ports.interfaces import (
    IBeatStrategy,
    IHttpFetcher,
    IMusicProvider,
    INarrationProvider,
    IPageBrowser,
)

# Large enough to pass the minimum audio size check
FAKE_MP3 = b"ID3" + b"\x00" * 4096


def make_png(color=(0, 102, 255), size=(64, 48)) -> bytes:
    """Solid-color PNG, generated in memory."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


# ============================================================================
# Fakes
# ============================================================================

class FakeBrowser(IPageBrowser):
    """Returns a canned snapshot (or raises) and counts captures."""

    def __init__(self, snapshot: Optional[PageSnapshot] = None, error: Optional[Exception] = None):
        self.snapshot = snapshot
        self.error = error
        self.calls: List[str] = []

    def capture(self, url: str) -> PageSnapshot:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.snapshot


class FakeFetcher(IHttpFetcher):
    def __init__(self, body: bytes = b"\x89PNG logo", content_type: str = "image/png", error=None):
        self.body = body
        self.content_type = content_type
        self.error = error
        self.calls: List[str] = []

    def download(self, url: str, timeout: float) -> Tuple[bytes, str]:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.body, self.content_type


class FakeNarration(INarrationProvider):
    def __init__(self, name="fake-tts", result=None):
        self.name = name
        self.result = result if result is not None else Success(AudioPayload(FAKE_MP3), name)
        self.scripts: List[str] = []

    def synthesize(self, script: str):
        self.scripts.append(script)
        return self.result


class FakeMusic(IMusicProvider):
    def __init__(self, name="fake-music", result=None):
        self.name = name
        self.result = result if result is not None else Success(AudioPayload(FAKE_MP3, "https://cdn/music.mp3"), name)
        self.prompts: List[str] = []

    def compose(self, prompt: str, duration: float):
        self.prompts.append(prompt)
        return self.result


class FakeBeats(IBeatStrategy):
    def __init__(self, name="fake-beats", result=None):
        self.name = name
        self.result = result if result is not None else Failure("not available")

    def detect(self, audio_path: str):
        return self.result


def unconfigured(key: str) -> Failure:
    return Failure(f"{key} not set", configuration=True)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def png_bytes():
    """Factory for solid-color PNG screenshots."""
    return make_png


@pytest.fixture
def landing_html():
    return """
    <html><head>
      <title>Example - Home</title>
      <meta name="description" content="The cloud platform for teams.">
      <meta property="og:image" content="/img/hero.png">
    </head><body>
      <h1>Welcome</h1>
      <ul><li>Real-time collaboration</li><li>Single sign-on for all</li></ul>
      <h2>Why Example</h2><p>Because it is fast.</p>
    </body></html>
    """


@pytest.fixture
def snapshot(landing_html, png_bytes):
    return PageSnapshot(
        url="https://example.com",
        html=landing_html,
        title="Example - Home",
        screenshot=png_bytes((255, 255, 255)),
        css=CssSignals(font_family="Inter, sans-serif"),
    )


@pytest.fixture
def asset_store(tmp_path):
    """Local store under tmp_path; duration measurement off (no ffmpeg needed)."""
    return LocalAssetStore(public_dir=str(tmp_path / "public"), measure=False)


@pytest.fixture
def build_extractor(asset_store):
    """Factory wiring an ExtractionOrchestrator from fakes (sequential for determinism)."""

    def _build(structured=None, browser=None, logo_sources=(), fetcher=None, store=None):
        return ExtractionOrchestrator(
            content_extractor=ContentExtractor(structured),
            branding_assembler=BrandingAssembler(LogoResolver(list(logo_sources))),
            browser=browser,
            asset_store=store or asset_store,
            fetcher=fetcher or FakeFetcher(),
            parallel=False,
        )

    return _build


@pytest.fixture
def build_audio(asset_store):
    """Factory wiring an AudioOrchestrator from fakes."""

    def _build(narration=(), music=(), beats=(), store=None):
        return AudioOrchestrator(
            narration_providers=list(narration),
            music_providers=list(music),
            beat_detector=BeatDetector(list(beats)),
            asset_store=store or asset_store,
        )

    return _build
