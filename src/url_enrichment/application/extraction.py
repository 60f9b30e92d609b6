"""
Extraction Orchestrator – single responsibility: URL -> EnrichedSite.

Content, logo and palette branches run independently (concurrently by
default); the join after them is the only synchronization point. A failure in
one branch never blocks another, and every branch has a guaranteed terminal
strategy, so this call always returns a complete record.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from url_enrichment.application.branding import BrandingAssembler
from url_enrichment.application.content import ContentExtractor
from url_enrichment.application.urls import domain_of, validate_url
from url_enrichment.config import LOGO_DOWNLOAD_TIMEOUT
from url_enrichment.domain.models import EnrichedSite, Logo, PageSnapshot, SiteMetadata
from url_enrichment.domain.results import WarningLog
from url_enrichment.ports.interfaces import IAssetStore, IHttpFetcher, IPageBrowser

# First match wins; order matters
INDUSTRY_KEYWORDS = [
    ("tech", ["software", "app", "platform", "cloud", "saas", "api", "developer"]),
    ("finance", ["bank", "payment", "finance", "invest", "trading", "crypto"]),
    ("healthcare", ["health", "medical", "doctor", "patient", "clinic", "hospital"]),
    ("ecommerce", ["shop", "store", "buy", "product", "marketplace", "retail"]),
    ("education", ["learn", "course", "education", "student", "training", "teach"]),
    ("marketing", ["marketing", "advertising", "campaign", "brand", "social media"]),
    ("gaming", ["game", "play", "gaming", "esports", "player"]),
]


def infer_industry(title: str, description: str) -> str:
    text = f"{title} {description}".lower()
    for industry, keywords in INDUSTRY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return industry
    return "general"


class SnapshotCache:
    """
    Loads the page at most once per extraction call, whichever branch asks
    first. A failed load is remembered and re-raised to later callers.
    """

    def __init__(self, browser: Optional[IPageBrowser], url: str):
        self._browser = browser
        self._url = url
        self._lock = threading.Lock()
        self._snapshot: Optional[PageSnapshot] = None
        self._error: Optional[Exception] = None

    def get(self) -> PageSnapshot:
        with self._lock:
            if self._snapshot is None and self._error is None:
                if self._browser is None:
                    self._error = RuntimeError("no browser configured")
                else:
                    try:
                        self._snapshot = self._browser.capture(self._url)
                    except Exception as e:
                        self._error = e
            if self._error is not None:
                raise self._error
            return self._snapshot


class ExtractionOrchestrator:
    """
    Orchestrates content extraction, branding and logo persistence.
    All dependencies are injected (ports); no concrete implementations here.
    """

    def __init__(
        self,
        *,
        content_extractor: ContentExtractor,
        branding_assembler: BrandingAssembler,
        browser: Optional[IPageBrowser],
        asset_store: IAssetStore,
        fetcher: IHttpFetcher,
        parallel: bool = True,
    ):
        self._content = content_extractor
        self._branding = branding_assembler
        self._browser = browser
        self._store = asset_store
        self._fetcher = fetcher
        self._parallel = parallel

    def extract_url_content(self, url: str) -> EnrichedSite:
        """Extract content + branding for `url`. Raises ValueError only for a malformed URL."""
        url = validate_url(url)
        domain = domain_of(url)
        print(f"\n🔎 Extracting content from: {url}")

        snapshots = SnapshotCache(self._browser, url)
        content_log, logo_log, color_log, persist_log = WarningLog(), WarningLog(), WarningLog(), WarningLog()

        def content_branch():
            return self._content.extract(url, snapshots.get, content_log)

        def logo_branch():
            return self._branding.resolve_logo(domain, url, logo_log)

        def palette_branch():
            return self._branding.resolve_palette(snapshots.get, color_log)

        if self._parallel:
            with ThreadPoolExecutor(max_workers=3, thread_name_prefix="extract") as pool:
                content_future = pool.submit(content_branch)
                logo_future = pool.submit(logo_branch)
                palette_future = pool.submit(palette_branch)
                content, method = content_future.result()
                logo = logo_future.result()
                palette, theme, font = palette_future.result()
        else:
            content, method = content_branch()
            logo = logo_branch()
            palette, theme, font = palette_branch()

        industry = infer_industry(content.title, content.description)
        logo = self._persist_logo(logo, domain, persist_log)
        branding = self._branding.assemble(logo, palette, theme, font)

        warnings = WarningLog()
        for log in (content_log, logo_log, color_log, persist_log):
            warnings.extend(log)

        print(f"✓ Extraction finished: method={method.value}, industry={industry}, "
              f"logo={logo.quality_tier.value}, warnings={len(warnings)}")
        return EnrichedSite(
            content=content,
            branding=branding,
            metadata=SiteMetadata(industry=industry, domain=domain),
            extraction_method=method,
            warnings=warnings.as_tuple(),
        )

    def _persist_logo(self, logo: Logo, domain: str, warnings: WarningLog) -> Logo:
        """Download the logo for static serving; on failure keep the remote URL."""
        try:
            data, content_type = self._fetcher.download(logo.url, LOGO_DOWNLOAD_TIMEOUT)
            static_path = self._store.save_logo(data, content_type, logo.url, domain)
        except Exception as e:
            print(f"  ⚠️  Failed to download logo: {e}")
            warnings.add("logo", f"logo download failed ({e}); use the remote logo URL instead")
            return logo
        print(f"  ✓ Logo saved (staticPath: {static_path})")
        return Logo(url=logo.url, quality_tier=logo.quality_tier, local_static_path=static_path)
