"""
Video pipeline – single responsibility: orchestrate extract → audio → props → optional render.
Depends only on the orchestrators and port interfaces (SOLID – Dependency Inversion).
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from url_enrichment.application.audio import AudioOrchestrator
from url_enrichment.application.extraction import ExtractionOrchestrator
from url_enrichment.application.props import build_render_props
from url_enrichment.application.urls import validate_url
from url_enrichment.domain.models import describe_audio
from url_enrichment.ports.interfaces import IVideoRenderer


class VideoPipeline:
    """
    Runs the full URL-to-video enrichment.
    All dependencies are injected; no concrete implementations here.
    """

    def __init__(
        self,
        *,
        extractor: ExtractionOrchestrator,
        audio: AudioOrchestrator,
        video_renderer: Optional[IVideoRenderer] = None,
    ):
        self._extractor = extractor
        self._audio = audio
        self._video = video_renderer

    def run(
        self,
        url: str,
        script: str,
        music_style: str = "lo-fi",
        duration: float = 30,
        output_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Extract, generate audio and assemble props. Renders too when a
        renderer is configured. Returns {site, audio, props, render, warnings}.
        """
        url = validate_url(url)
        if not script or not script.strip():
            raise ValueError("narration script is required")
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration!r}")

        print("=" * 60)
        print(f"Generating video props for: {url}")
        print("=" * 60)

        print("\n[1/4] Extracting content and branding...")
        site = self._extractor.extract_url_content(url)
        print(f"Title: {site.content.title}")
        print(f"Method: {site.extraction_method.value}, industry: {site.metadata.industry}")

        print("\n[2/4] Generating audio...")
        audio = self._audio.generate_audio(music_style, script, duration)
        print(f"Audio: {describe_audio(audio)}")

        print("\n[3/4] Assembling renderer props...")
        props = build_render_props(site, audio, duration)

        render = None
        if self._video is None:
            print("\n[4/4] ℹ️  No renderer configured; skipping video render")
        else:
            print("\n[4/4] Rendering video...")
            output_name = output_name or self._output_name(site.metadata.domain)
            try:
                render = self._video.render(props, output_name)
            except Exception as e:
                print(f"\n⚠️  Renderer failed: {e}")
                render = None
            if render:
                print(f"\n✅ Success! Video saved to: {render.get('videoPath', '')}")
            else:
                print("\n❌ Failed to render video. Props are still returned.")

        warnings = list(site.warnings) + list(audio.warnings)
        if warnings:
            print(f"\n⚠️  {len(warnings)} warning(s):")
            for warning in warnings:
                print(f"  - {warning}")

        return {
            "site": site.to_dict(),
            "audio": audio.to_dict(),
            "props": props,
            "render": render,
            "warnings": warnings,
        }

    @staticmethod
    def _output_name(domain: str) -> str:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        safe = re.sub(r"[^A-Za-z0-9_-]", "_", domain or "site")[:30]
        return f"{safe}_{timestamp}"
