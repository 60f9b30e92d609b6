"""
ILogoSource adapters: Clearbit CDN, Brandfetch API, common site paths and
the Google favicon service.
"""

from typing import Optional, Sequence

import requests

from url_enrichment.application.logos import FAVICON_NOTE, favicon_logo
from url_enrichment.application.urls import origin_of
from url_enrichment.config import (
    BRANDFETCH_API_KEY,
    BRANDFETCH_API_URL,
    CDN_TIMEOUT,
    CLEARBIT_LOGO_URL,
    PATH_PROBE_TIMEOUT,
)
from url_enrichment.domain.models import Logo, QualityTier
from url_enrichment.domain.results import Failure, StrategyResult, Success
from url_enrichment.ports.interfaces import ILogoSource

COMMON_LOGO_PATHS = (
    "/logo.svg",
    "/logo.png",
    "/assets/logo.svg",
    "/assets/logo.png",
    "/images/logo.svg",
    "/images/logo.png",
)


class ClearbitLogoSource(ILogoSource):
    """HEAD against the Clearbit logo CDN; a 200 means a logo exists."""

    name = "clearbit"

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self._session = session or requests.Session()
        self._timeout = timeout or CDN_TIMEOUT

    def lookup(self, domain: str, page_url: str) -> StrategyResult:
        logo_url = CLEARBIT_LOGO_URL.format(domain=domain)
        response = self._session.head(logo_url, timeout=self._timeout, allow_redirects=True)
        if response.status_code != 200:
            return Failure(f"HTTP {response.status_code}")
        return Success(Logo(url=logo_url, quality_tier=QualityTier.HIGH), self.name)


class BrandfetchLogoSource(ILogoSource):
    """Brandfetch brand API: first format of the first logo."""

    name = "brandfetch"

    def __init__(
        self,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = BRANDFETCH_API_KEY if api_key is None else api_key
        self._session = session or requests.Session()
        self._timeout = timeout or CDN_TIMEOUT

    def lookup(self, domain: str, page_url: str) -> StrategyResult:
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        response = self._session.get(
            BRANDFETCH_API_URL.format(domain=domain),
            headers=headers,
            timeout=self._timeout,
        )
        response.raise_for_status()
        data = response.json()
        try:
            src = data["logos"][0]["formats"][0]["src"]
        except (KeyError, IndexError, TypeError):
            return Failure("no logo in brand data")
        if not src:
            return Failure("empty logo src")
        return Success(Logo(url=src, quality_tier=QualityTier.HIGH), self.name)


class CommonPathLogoSource(ILogoSource):
    """Probes well-known logo paths on the site's own origin."""

    name = "common paths"

    def __init__(
        self,
        paths: Sequence[str] = COMMON_LOGO_PATHS,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._paths = tuple(paths)
        self._session = session or requests.Session()
        self._timeout = timeout or PATH_PROBE_TIMEOUT

    def lookup(self, domain: str, page_url: str) -> StrategyResult:
        origin = origin_of(page_url)
        for path in self._paths:
            candidate = f"{origin}{path}"
            try:
                response = self._session.head(candidate, timeout=self._timeout, allow_redirects=True)
            except requests.RequestException:
                continue
            if response.status_code == 200:
                print(f"  ✓ Logo found at: {candidate}")
                return Success(Logo(url=candidate, quality_tier=QualityTier.MEDIUM), self.name)
        return Failure(f"none of {len(self._paths)} common paths answered 200")


class GoogleFaviconSource(ILogoSource):
    """Favicon service keyed by domain. Always succeeds; low resolution."""

    name = "google favicon"

    def lookup(self, domain: str, page_url: str) -> StrategyResult:
        return Success(favicon_logo(domain), self.name, (FAVICON_NOTE,))
