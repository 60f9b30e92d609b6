"""
IPageBrowser adapter using Playwright (headless Chromium).

One browser per capture; it is closed on every exit path.
"""

from typing import Any, Dict, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from url_enrichment.config import (
    DEVICE_SCALE_FACTOR,
    PAGE_NAVIGATION_TIMEOUT,
    PAGE_SETTLE_DELAY,
    USER_AGENT,
    VIEWPORT_HEIGHT,
    VIEWPORT_WIDTH,
)
from url_enrichment.domain.models import CssSignals, PageSnapshot
from url_enrichment.ports.interfaces import IPageBrowser

# Computed-style hints: color custom properties on :root, the first visible
# button/CTA background, the first visible link color and the body font.
CSS_SIGNALS_SCRIPT = """() => {
    const result = { vars: {}, button: '', link: '', font: '' };
    const rootStyle = getComputedStyle(document.documentElement);
    for (const sheet of document.styleSheets) {
        let rules;
        try { rules = sheet.cssRules; } catch (e) { continue; }
        for (const rule of rules) {
            if (!rule.style || !rule.selectorText) continue;
            if (!/^(:root|html|body)$/.test(rule.selectorText.trim())) continue;
            for (const name of rule.style) {
                if (!name.startsWith('--')) continue;
                const value = rootStyle.getPropertyValue(name).trim();
                if (value) result.vars[name] = value;
            }
        }
    }
    const visible = (el) => el.offsetWidth > 0 && el.offsetHeight > 0;
    const buttons = document.querySelectorAll(
        'button, a[class*="btn"], a[class*="button"], [role="button"], input[type="submit"]'
    );
    for (const el of buttons) {
        if (!visible(el)) continue;
        const bg = getComputedStyle(el).backgroundColor;
        if (bg && bg !== 'transparent' && bg !== 'rgba(0, 0, 0, 0)') { result.button = bg; break; }
    }
    for (const el of document.querySelectorAll('main a, a')) {
        if (!visible(el)) continue;
        result.link = getComputedStyle(el).color;
        break;
    }
    result.font = getComputedStyle(document.body).fontFamily || '';
    return result;
}"""


def css_signals_from(raw: Optional[Dict[str, Any]]) -> CssSignals:
    raw = raw or {}
    variables = raw.get("vars") or {}
    return CssSignals(
        custom_properties={str(k): str(v) for k, v in variables.items()},
        button_background=str(raw.get("button") or ""),
        link_color=str(raw.get("link") or ""),
        font_family=str(raw.get("font") or "").replace('"', "").replace("'", ""),
    )


class PlaywrightBrowser(IPageBrowser):
    """Loads a page at high DPI, waits for it to settle and captures everything in one session."""

    def __init__(
        self,
        navigation_timeout: Optional[float] = None,
        settle_delay: Optional[float] = None,
        headless: bool = True,
    ):
        self._navigation_timeout = navigation_timeout or PAGE_NAVIGATION_TIMEOUT
        self._settle_delay = PAGE_SETTLE_DELAY if settle_delay is None else settle_delay
        self._headless = headless

    def capture(self, url: str) -> PageSnapshot:
        print(f"  📸 Loading page in headless browser: {url}")
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=self._headless)
            try:
                context = browser.new_context(
                    viewport={"width": VIEWPORT_WIDTH, "height": VIEWPORT_HEIGHT},
                    device_scale_factor=DEVICE_SCALE_FACTOR,
                    user_agent=USER_AGENT,
                )
                page = context.new_page()
                timeout_ms = self._navigation_timeout * 1000
                # networkidle never fires on pages with long-polling; fall back quickly
                try:
                    page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                except PlaywrightError:
                    page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                page.wait_for_timeout(self._settle_delay * 1000)

                try:
                    css = css_signals_from(page.evaluate(CSS_SIGNALS_SCRIPT))
                except PlaywrightError as e:
                    print(f"  ⚠️  CSS signal capture failed: {e}")
                    css = CssSignals()

                snapshot = PageSnapshot(
                    url=page.url or url,
                    html=page.content(),
                    title=page.title(),
                    screenshot=page.screenshot(full_page=True, type="png"),
                    css=css,
                )
            finally:
                browser.close()

        print(f"  ✓ Page captured ({len(snapshot.screenshot)} bytes screenshot)")
        return snapshot
