"""Ports (interfaces) – depend on these, implement in adapters."""

from url_enrichment.ports.interfaces import (
    IPageBrowser,
    IStructuredExtractor,
    ILogoSource,
    INarrationProvider,
    IMusicProvider,
    IBeatStrategy,
    IHttpFetcher,
    IAssetStore,
    IVideoRenderer,
)

__all__ = [
    "IPageBrowser",
    "IStructuredExtractor",
    "ILogoSource",
    "INarrationProvider",
    "IMusicProvider",
    "IBeatStrategy",
    "IHttpFetcher",
    "IAssetStore",
    "IVideoRenderer",
]
