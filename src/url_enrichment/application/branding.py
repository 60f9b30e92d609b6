"""
Branding Assembler – logo + palette + font + theme into one BrandingRecord.
"""

from typing import Callable, Tuple

from url_enrichment.application.chain import attempt
from url_enrichment.application.colors import resolve_colors
from url_enrichment.application.logos import LogoResolver
from url_enrichment.config import DEFAULT_FONT
from url_enrichment.domain.models import BrandingRecord, CssSignals, Logo, PageSnapshot, Palette, Theme
from url_enrichment.domain.results import Failure, Success, WarningLog

SnapshotLoader = Callable[[], PageSnapshot]


def pick_font(css: CssSignals) -> str:
    font = " ".join((css.font_family or "").split())
    return font or DEFAULT_FONT


class BrandingAssembler:
    """Runs the logo chain and the palette pipeline; never raises."""

    def __init__(self, logo_resolver: LogoResolver):
        self._logos = logo_resolver

    def resolve_logo(self, domain: str, page_url: str, warnings: WarningLog) -> Logo:
        return self._logos.resolve(domain, page_url, warnings)

    def resolve_palette(
        self,
        load_snapshot: SnapshotLoader,
        warnings: WarningLog,
    ) -> Tuple[Palette, Theme, str]:
        """Screenshot palette with the opportunistic CSS upgrade, plus the page font."""
        snapshot = attempt("page snapshot", lambda: Success(load_snapshot(), "browser"))
        if isinstance(snapshot, Failure):
            warnings.add("colors", f"page snapshot failed: {snapshot.reason}")
            palette, theme = resolve_colors(b"", None, warnings)
            return palette, theme, DEFAULT_FONT

        page = snapshot.value
        palette, theme = resolve_colors(page.screenshot, page.css, warnings)
        return palette, theme, pick_font(page.css)

    def assemble(self, logo: Logo, palette: Palette, theme: Theme, font: str) -> BrandingRecord:
        return BrandingRecord(logo=logo, colors=palette, font=font, theme=theme)
