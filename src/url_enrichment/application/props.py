"""Renderer props assembly – EnrichedSite + AudioBundle -> RenderProps."""

from typing import Optional

from url_enrichment.domain.models import AudioAsset, AudioBundle, EnrichedSite, NarrationAsset, RenderProps


def empty_audio() -> AudioBundle:
    """Silent bundle for videos rendered without an audio step."""
    return AudioBundle(music=AudioAsset(), narration=NarrationAsset())


def build_render_props(site: EnrichedSite, audio: Optional[AudioBundle], duration: float) -> RenderProps:
    """
    Props object for the video renderer. Every key is present; missing
    values are empty strings or empty lists, never None.
    """
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration!r}")
    audio = audio if audio is not None else empty_audio()

    audio_props = audio.to_dict()
    # Warnings belong to the caller, not the composition
    audio_props.pop("warnings", None)

    return RenderProps(
        content=site.content.to_dict(),
        branding=site.branding.to_dict(),
        audio=audio_props,
        metadata=dict(site.metadata.to_dict(), extractionMethod=site.extraction_method.value),
        duration=float(duration),
    )
