"""
Logo Resolver – first usable logo from an ordered list of sources.

Failures are silent here (they are the normal case for most domains); the
quality tier of the winner discloses how much to trust it.
"""

from typing import Sequence

from url_enrichment.application.chain import run_chain
from url_enrichment.config import GOOGLE_FAVICON_URL
from url_enrichment.domain.models import Logo, QualityTier
from url_enrichment.domain.results import WarningLog
from url_enrichment.ports.interfaces import ILogoSource

FAVICON_NOTE = "logo resolved only to a low-resolution favicon; a manual logo override is recommended"


def favicon_logo(domain: str) -> Logo:
    return Logo(url=GOOGLE_FAVICON_URL.format(domain=domain), quality_tier=QualityTier.FAVICON)


class LogoResolver:
    """Walks logo sources in priority order."""

    def __init__(self, sources: Sequence[ILogoSource]):
        self._sources = list(sources)

    def resolve(self, domain: str, page_url: str, warnings: WarningLog) -> Logo:
        strategies = [
            (source.name, (lambda s=source: s.lookup(domain, page_url)))
            for source in self._sources
        ]
        result = run_chain("logo", strategies, warnings, record_failures=False)
        if result is not None:
            return result.value

        # No source list ends in a guaranteed source: favicon service keyed by domain
        warnings.add("logo", FAVICON_NOTE)
        return favicon_logo(domain)
