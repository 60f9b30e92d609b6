"""
Content Extractor – structured API, then browser-DOM heuristics, then placeholder.

The placeholder always succeeds, so the ContentRecord title is never empty.
"""

from typing import Callable, List, Optional, Tuple

from bs4 import BeautifulSoup

from url_enrichment.application.chain import run_chain
from url_enrichment.application.urls import absolutize, domain_label, domain_of
from url_enrichment.domain.models import ContentRecord, ExtractionMethod, PageSnapshot, Section
from url_enrichment.domain.results import Failure, StrategyResult, Success, WarningLog
from url_enrichment.ports.interfaces import IStructuredExtractor

MIN_FEATURES = 3
MAX_FEATURES = 5
MAX_SECTIONS = 6
# Feature list items must be 6-119 characters long
FEATURE_MIN_LEN = 6
FEATURE_MAX_LEN = 119

PLACEHOLDER_MARKER = "PLACEHOLDER"
PLACEHOLDER_FEATURES = ("Easy to use", "Fast performance", "Reliable support")

SnapshotLoader = Callable[[], PageSnapshot]


def _clean(text: Optional[str]) -> str:
    return " ".join((text or "").split())


def feature_count_note(features) -> Tuple[str, ...]:
    if len(features) < MIN_FEATURES:
        return (f"only {len(features)} features found (ideal {MIN_FEATURES}-{MAX_FEATURES})",)
    return ()


def _meta(soup: BeautifulSoup, **attrs) -> str:
    tag = soup.find("meta", attrs=attrs)
    return _clean(tag.get("content")) if tag else ""


def parse_dom(html: str, page_url: str, document_title: str = "") -> ContentRecord:
    """
    Heuristic content from rendered HTML.

    title: first <h1>, else the document title
    description: meta description, else og:description
    features: <li> texts of 6-119 characters, at most 5
    sections: <h2>/<h3> headings (with the next paragraph), at most 6
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title = ""
    h1 = soup.find("h1")
    if h1:
        title = _clean(h1.get_text(" "))
    if not title:
        title = _clean(document_title) or (_clean(soup.title.string) if soup.title else "")

    description = _meta(soup, name="description") or _meta(soup, property="og:description")

    features: List[str] = []
    for li in soup.find_all("li"):
        text = _clean(li.get_text(" "))
        if FEATURE_MIN_LEN <= len(text) <= FEATURE_MAX_LEN and text not in features:
            features.append(text)
        if len(features) >= MAX_FEATURES:
            break

    sections: List[Section] = []
    for heading in soup.find_all(["h2", "h3"]):
        heading_text = _clean(heading.get_text(" "))
        if not heading_text:
            continue
        paragraph = heading.find_next("p")
        sections.append(Section(heading=heading_text, text=_clean(paragraph.get_text(" ")) if paragraph else ""))
        if len(sections) >= MAX_SECTIONS:
            break

    hero = _meta(soup, property="og:image")

    return ContentRecord(
        title=title,
        description=description,
        features=tuple(features),
        hero_image=absolutize(page_url, hero),
        sections=tuple(sections),
    )


def dom_strategy(load_snapshot: SnapshotLoader) -> StrategyResult:
    snapshot = load_snapshot()
    record = parse_dom(snapshot.html, snapshot.url, snapshot.title)
    if len(record.title) <= 1:
        return Failure("no usable title in page DOM")
    return Success(record, ExtractionMethod.BROWSER.value, feature_count_note(record.features))


def placeholder_content(url: str) -> Success:
    """Deterministic generic content derived from the domain name."""
    label = domain_label(domain_of(url))
    record = ContentRecord(
        title=label,
        description=f"Discover {label.lower()} - Your solution for better productivity",
        features=PLACEHOLDER_FEATURES,
    )
    note = (
        f"{PLACEHOLDER_MARKER} content: every extraction strategy failed for {url}. "
        "Title, description and features are generic and must be rewritten before use."
    )
    return Success(record, ExtractionMethod.PLACEHOLDER.value, (note,))


class ContentExtractor:
    """Walks the content strategy chain; the first success wins."""

    def __init__(self, structured: Optional[IStructuredExtractor] = None):
        self._structured = structured

    def extract(
        self,
        url: str,
        load_snapshot: SnapshotLoader,
        warnings: WarningLog,
    ) -> Tuple[ContentRecord, ExtractionMethod]:
        strategies = []
        if self._structured is not None:
            strategies.append((self._structured.name, lambda: self._with_feature_note(self._structured.extract(url))))
        strategies.append(("browser DOM heuristics", lambda: dom_strategy(load_snapshot)))
        strategies.append(("placeholder", lambda: placeholder_content(url)))

        result = run_chain("content", strategies, warnings)
        # The placeholder never fails, so the chain always yields a result
        return result.value, ExtractionMethod(result.source)

    @staticmethod
    def _with_feature_note(result: StrategyResult) -> StrategyResult:
        if isinstance(result, Success) and not result.notes:
            return Success(result.value, result.source, feature_count_note(result.value.features))
        return result
