"""Application layer – strategy chains, orchestrators and pipeline."""

from url_enrichment.application.audio import AudioOrchestrator
from url_enrichment.application.extraction import ExtractionOrchestrator
from url_enrichment.application.pipeline import VideoPipeline
from url_enrichment.application.props import build_render_props

__all__ = ["AudioOrchestrator", "ExtractionOrchestrator", "VideoPipeline", "build_render_props"]
