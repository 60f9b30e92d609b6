"""
Color Resolver – screenshot pixels and CSS hints -> four-slot brand palette.

Base palette from the screenshot's dominant color:
  primary    = dominant
  secondary  = dominant * 0.6 per channel
  accent     = dominant * 1.4 per channel, clamped to 255
  background = white if luminance(dominant) > 128 else black
with luminance = 0.299R + 0.587G + 0.114B.

CSS hints (custom properties, button background, link color, in that order)
then override primary/accent; screenshot colors tend to be washed out, so this
upgrade runs even when everything else succeeded. Theme always follows the
final background.
"""

import io
import re
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from url_enrichment.application.chain import attempt
from url_enrichment.config import DEFAULT_PALETTE
from url_enrichment.domain.models import CssSignals, Palette, Theme
from url_enrichment.domain.results import Failure, StrategyResult, Success, WarningLog

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,8})$")
_FUNC_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)

# Custom property name fragments, most specific first
PRIMARY_VAR_HINTS = ("primary", "brand", "main", "theme")
ACCENT_VAR_HINTS = ("accent", "highlight", "secondary")

# Channel spread below which a color counts as grey (not a brand color)
MIN_CHROMA = 24


def to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{max(0, min(255, int(round(c)))):02X}" for c in rgb)


def hex_to_rgb(value: str) -> RGB:
    value = normalize_hex(value)
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def normalize_hex(value: str) -> str:
    """'#0f0' -> '#00FF00'. Raises ValueError for anything that is not hex."""
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"not a hex color: {value!r}")
    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = "".join(c * 2 for c in digits[:3])
    elif len(digits) in (6, 8):
        digits = digits[:6]
    else:
        raise ValueError(f"not a hex color: {value!r}")
    return "#" + digits.upper()


def parse_css_color(value: str) -> Optional[RGB]:
    """
    Parse a computed CSS color ('#abc', '#aabbcc', 'rgb(1, 2, 3)',
    'rgba(1, 2, 3, 0.5)', 'rgb(1 2 3 / 50%)'). Fully transparent colors
    and anything unparseable return None.
    """
    if not value:
        return None
    value = value.strip()
    if value.startswith("#"):
        try:
            return hex_to_rgb(value)
        except ValueError:
            return None

    match = _FUNC_RE.match(value)
    if not match:
        return None
    parts = [p for p in re.split(r"[\s,/]+", match.group(1)) if p]
    if len(parts) < 3:
        return None
    try:
        channels = [float(p.rstrip("%")) * (2.55 if p.endswith("%") else 1) for p in parts[:3]]
        if len(parts) > 3:
            alpha = parts[3]
            alpha_value = float(alpha.rstrip("%")) / (100 if alpha.endswith("%") else 1)
            if alpha_value == 0:
                return None
    except ValueError:
        return None
    return tuple(int(round(max(0.0, min(255.0, c)))) for c in channels)


def luminance(rgb: RGB) -> float:
    r, g, b = rgb
    return 0.299 * r + 0.587 * g + 0.114 * b


def detect_theme(background: str) -> Theme:
    """Deterministic light/dark classification of a background hex color."""
    return Theme.LIGHT if luminance(hex_to_rgb(background)) > 128 else Theme.DARK


def scale(rgb: RGB, factor: float) -> RGB:
    return tuple(min(255, int(round(c * factor))) for c in rgb)


def darken(hex_color: str, factor: float = 0.6) -> str:
    return to_hex(scale(hex_to_rgb(hex_color), factor))


def is_chromatic(rgb: RGB) -> bool:
    return max(rgb) - min(rgb) >= MIN_CHROMA


def dominant_color(screenshot: bytes) -> RGB:
    """
    Most frequent color of the image: pixels are bucketed into a 16x16x16
    histogram and the mean of the fullest bucket is returned.
    """
    with Image.open(io.BytesIO(screenshot)) as image:
        image = image.convert("RGB")
        image.thumbnail((256, 256))
        pixels = np.asarray(image, dtype=np.uint8).reshape(-1, 3)

    if pixels.size == 0:
        raise ValueError("screenshot has no pixels")

    buckets = pixels.astype(np.int32) // 16
    keys = buckets[:, 0] * 256 + buckets[:, 1] * 16 + buckets[:, 2]
    winner = int(np.bincount(keys).argmax())
    mean = pixels[keys == winner].mean(axis=0)
    return tuple(int(round(c)) for c in mean)


def palette_from_dominant(dominant: RGB) -> Palette:
    background = "#FFFFFF" if luminance(dominant) > 128 else "#000000"
    return Palette(
        primary=to_hex(dominant),
        secondary=to_hex(scale(dominant, 0.6)),
        accent=to_hex(scale(dominant, 1.4)),
        background=background,
    )


def default_palette() -> Palette:
    primary, secondary, accent, background = DEFAULT_PALETTE
    return Palette(primary=primary, secondary=secondary, accent=accent, background=background)


def screenshot_palette(screenshot: bytes) -> StrategyResult:
    """Base palette strategy: needs a decodable screenshot."""
    if not screenshot:
        return Failure("no screenshot captured")
    return Success(palette_from_dominant(dominant_color(screenshot)), "screenshot")


def _var_candidates(css: CssSignals, hints) -> List[RGB]:
    found = []
    for hint in hints:
        for name, value in css.custom_properties.items():
            if hint in name.lower():
                rgb = parse_css_color(value)
                if rgb and is_chromatic(rgb) and rgb not in found:
                    found.append(rgb)
    return found


def css_upgrade(base: Palette, css: Optional[CssSignals]) -> StrategyResult:
    """
    Override primary/accent from CSS hints; secondary = darken(primary, 0.6).
    Background (and therefore theme) is kept from the base palette.
    """
    if css is None or css.empty:
        return Failure("no CSS color signals")

    candidates = _var_candidates(css, PRIMARY_VAR_HINTS)
    for raw in (css.button_background, css.link_color):
        rgb = parse_css_color(raw)
        if rgb and is_chromatic(rgb) and rgb not in candidates:
            candidates.append(rgb)
    if not candidates:
        return Failure("CSS signals carried no usable brand color")

    primary = candidates[0]
    accent_vars = [c for c in _var_candidates(css, ACCENT_VAR_HINTS) if c != primary]
    if accent_vars:
        accent = accent_vars[0]
    elif len(candidates) > 1:
        accent = candidates[1]
    else:
        accent = scale(primary, 1.4)

    primary_hex = to_hex(primary)
    return Success(
        Palette(
            primary=primary_hex,
            secondary=darken(primary_hex, 0.6),
            accent=to_hex(accent),
            background=base.background,
        ),
        "css",
    )


def resolve_colors(
    screenshot: bytes,
    css: Optional[CssSignals] = None,
    warnings: Optional[WarningLog] = None,
) -> Tuple[Palette, Theme]:
    """
    Always returns a complete palette: screenshot palette, else the default
    palette, then the opportunistic CSS upgrade on top.
    """
    log = warnings if warnings is not None else WarningLog()

    base = attempt("screenshot palette", lambda: screenshot_palette(screenshot))
    if isinstance(base, Success):
        palette = base.value
    else:
        log.add("colors", f"screenshot palette failed: {base.reason}; using default palette")
        palette = default_palette()

    upgraded = attempt("css upgrade", lambda: css_upgrade(palette, css))
    if isinstance(upgraded, Success):
        print(f"  ✓ colors: upgraded from CSS ({upgraded.value.primary})")
        palette = upgraded.value
    else:
        print(f"  ℹ️  colors: CSS upgrade skipped ({upgraded.reason})")

    return palette, detect_theme(palette.background)
