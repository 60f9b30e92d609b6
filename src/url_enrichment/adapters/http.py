"""IHttpFetcher adapter using requests."""

from typing import Optional, Tuple

import requests

from url_enrichment.config import USER_AGENT
from url_enrichment.ports.interfaces import IHttpFetcher


class RequestsFetcher(IHttpFetcher):
    """Plain GET download with a browser-like User-Agent."""

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    def download(self, url: str, timeout: float) -> Tuple[bytes, str]:
        response = self._session.get(url, timeout=timeout)
        response.raise_for_status()
        return response.content, response.headers.get("Content-Type", "")
