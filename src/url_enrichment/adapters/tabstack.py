"""IStructuredExtractor adapter for the Tabstack JSON extraction API."""

from typing import Any, List, Optional

import requests

from url_enrichment.application.content import MAX_FEATURES, MAX_SECTIONS
from url_enrichment.application.urls import absolutize
from url_enrichment.config import STRUCTURED_API_TIMEOUT, TABSTACK_API_KEY, TABSTACK_API_URL
from url_enrichment.domain.models import ContentRecord, ExtractionMethod, Section
from url_enrichment.domain.results import Failure, StrategyResult, Success
from url_enrichment.ports.interfaces import IStructuredExtractor

CONTENT_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "The main title or product name"},
        "description": {"type": "string", "description": "A brief description or value proposition"},
        "features": {
            "type": "array",
            "description": "3-5 key features or benefits",
            "items": {"type": "string"},
        },
        "heroImage": {"type": "string", "description": "URL of the main hero or banner image"},
        "sections": {
            "type": "array",
            "description": "Main content sections",
            "items": {
                "type": "object",
                "properties": {
                    "heading": {"type": "string"},
                    "text": {"type": "string"},
                },
            },
        },
    },
    "required": ["title", "description", "features"],
}


def _text(value: Any) -> str:
    return " ".join(str(value).split()) if isinstance(value, (str, int, float)) else ""


def normalize_features(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    features: List[str] = []
    for item in raw:
        text = _text(item)
        if text and text not in features:
            features.append(text)
    return features[:MAX_FEATURES]


def normalize_sections(raw: Any) -> List[Section]:
    if not isinstance(raw, list):
        return []
    sections = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        heading = _text(item.get("heading"))
        if heading:
            sections.append(Section(heading=heading, text=_text(item.get("text"))))
    return sections[:MAX_SECTIONS]


class TabstackExtractor(IStructuredExtractor):
    """POSTs {url, json_schema} and maps the answer into a ContentRecord."""

    name = "tabstack"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = TABSTACK_API_KEY if api_key is None else api_key
        self._api_url = api_url or TABSTACK_API_URL
        self._timeout = timeout or STRUCTURED_API_TIMEOUT
        self._session = session or requests.Session()

    def extract(self, url: str) -> StrategyResult:
        if not self._api_key:
            return Failure("TABSTACK_API_KEY not set", configuration=True)

        response = self._session.post(
            self._api_url,
            json={"url": url, "json_schema": CONTENT_SCHEMA},
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            return Failure(f"unexpected response type {type(data).__name__}")

        # Some deployments wrap the extracted object
        if "title" not in data and isinstance(data.get("data"), dict):
            data = data["data"]

        title = _text(data.get("title"))
        if not title:
            return Failure("response has no title")
        description = _text(data.get("description"))
        if not description:
            return Failure('response missing required field "description"')
        if not isinstance(data.get("features"), list):
            return Failure('response missing required field "features"')

        record = ContentRecord(
            title=title,
            description=description,
            features=tuple(normalize_features(data.get("features"))),
            hero_image=absolutize(url, _text(data.get("heroImage"))),
            sections=tuple(normalize_sections(data.get("sections"))),
        )
        return Success(record, ExtractionMethod.TABSTACK.value)
