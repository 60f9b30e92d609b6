"""Domain models and value objects."""

from url_enrichment.domain.models import (
    AudioAsset,
    AudioBundle,
    AudioPayload,
    BrandingRecord,
    ContentRecord,
    CssSignals,
    EnrichedSite,
    ExtractionMethod,
    Logo,
    NarrationAsset,
    NarrationSegment,
    PageSnapshot,
    Palette,
    QualityTier,
    Section,
    SiteMetadata,
    Theme,
)
from url_enrichment.domain.results import Failure, StrategyResult, Success, WarningLog

__all__ = [
    "AudioAsset",
    "AudioBundle",
    "AudioPayload",
    "BrandingRecord",
    "ContentRecord",
    "CssSignals",
    "EnrichedSite",
    "ExtractionMethod",
    "Failure",
    "Logo",
    "NarrationAsset",
    "NarrationSegment",
    "PageSnapshot",
    "Palette",
    "QualityTier",
    "Section",
    "SiteMetadata",
    "StrategyResult",
    "Success",
    "Theme",
    "WarningLog",
]
