"""
Port interfaces (SOLID – Dependency Inversion).
Implement these in adapters; the application layer depends only on these abstractions.
Each provider maps its raw response into the shared domain shape at this boundary.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from url_enrichment.domain.models import (
    AudioAsset,
    PageSnapshot,
    RenderProps,
    RenderResult,
)
from url_enrichment.domain.results import StrategyResult


class IPageBrowser(ABC):
    """Headless browser: load a page once and capture DOM, styles and a screenshot."""

    @abstractmethod
    def capture(self, url: str) -> PageSnapshot:
        """Load the page and return its snapshot; raise on navigation failure."""
        pass


class IStructuredExtractor(ABC):
    """Structured-extraction API (URL + JSON schema -> content)."""

    name = "structured-api"

    @abstractmethod
    def extract(self, url: str) -> StrategyResult:
        """Return Success(ContentRecord) or Failure(reason)."""
        pass


class ILogoSource(ABC):
    """One link of the logo chain."""

    name = "logo-source"

    @abstractmethod
    def lookup(self, domain: str, page_url: str) -> StrategyResult:
        """Return Success(Logo) or Failure(reason)."""
        pass


class INarrationProvider(ABC):
    """Text-to-speech provider. Returns validated audio as an AudioPayload."""

    name = "tts"

    @abstractmethod
    def synthesize(self, script: str) -> StrategyResult:
        """Return Success(AudioPayload) or Failure(reason, configuration=...)."""
        pass


class IMusicProvider(ABC):
    """Generative music provider. Returns validated audio as an AudioPayload."""

    name = "music"

    @abstractmethod
    def compose(self, prompt: str, duration: float) -> StrategyResult:
        """Return Success(AudioPayload) or Failure(reason, configuration=...)."""
        pass


class IBeatStrategy(ABC):
    """One beat-tracking method."""

    name = "beats"

    @abstractmethod
    def detect(self, audio_path: str) -> StrategyResult:
        """Return Success(list of seconds) or Failure(reason)."""
        pass


class IHttpFetcher(ABC):
    """Plain outbound HTTP download."""

    @abstractmethod
    def download(self, url: str, timeout: float) -> Tuple[bytes, str]:
        """Return (body, content_type); raise on network error or non-2xx status."""
        pass


class IAssetStore(ABC):
    """Durable local storage for downloaded logos and generated audio."""

    @abstractmethod
    def save_logo(self, data: bytes, content_type: str, source_url: str, domain: str) -> str:
        """Persist logo bytes; return path relative to the public asset root."""
        pass

    @abstractmethod
    def save_audio(self, data: bytes, kind: str, source_url: str = "") -> AudioAsset:
        """Persist audio bytes under a timestamped name; return the asset."""
        pass


class IVideoRenderer(ABC):
    """Video assembly collaborator: props -> final video file."""

    @abstractmethod
    def render(self, props: RenderProps, output_name: str) -> Optional[RenderResult]:
        """Render video; return {videoPath, duration, fileSize} or None."""
        pass
