"""Domain models – immutable records handed to the renderer collaborator."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, TypedDict


class ExtractionMethod(str, Enum):
    """Which content strategy produced the ContentRecord."""
    TABSTACK = "tabstack"
    BROWSER = "playwright-fallback"
    PLACEHOLDER = "placeholder"


class QualityTier(str, Enum):
    """Provenance strength of a resolved logo."""
    HIGH = "high"
    MEDIUM = "medium"
    FAVICON = "favicon"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class Section:
    heading: str
    text: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"heading": self.heading, "text": self.text}


@dataclass(frozen=True)
class ContentRecord:
    """Marketing content for one page. `title` is never empty."""
    title: str
    description: str = ""
    features: Tuple[str, ...] = ()
    hero_image: str = ""
    sections: Tuple[Section, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "features": list(self.features),
            "heroImage": self.hero_image,
            "sections": [s.to_dict() for s in self.sections],
        }


@dataclass(frozen=True)
class Palette:
    """Four-slot brand palette; every slot is a `#RRGGBB` string."""
    primary: str
    secondary: str
    accent: str
    background: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "primary": self.primary,
            "secondary": self.secondary,
            "accent": self.accent,
            "background": self.background,
        }


@dataclass(frozen=True)
class Logo:
    url: str
    quality_tier: QualityTier
    local_static_path: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "staticPath": self.local_static_path,
            "qualityTier": self.quality_tier.value,
        }


@dataclass(frozen=True)
class BrandingRecord:
    logo: Logo
    colors: Palette
    font: str
    theme: Theme

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logo": self.logo.to_dict(),
            "colors": self.colors.to_dict(),
            "font": self.font,
            "theme": self.theme.value,
        }


@dataclass(frozen=True)
class SiteMetadata:
    industry: str
    domain: str

    def to_dict(self) -> Dict[str, str]:
        return {"industry": self.industry, "domain": self.domain}


@dataclass(frozen=True)
class EnrichedSite:
    """Aggregate result of one extraction call."""
    content: ContentRecord
    branding: BrandingRecord
    metadata: SiteMetadata
    extraction_method: ExtractionMethod
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content.to_dict(),
            "branding": self.branding.to_dict(),
            "metadata": self.metadata.to_dict(),
            "extractionMethod": self.extraction_method.value,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class NarrationSegment:
    start: float
    end: float
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end, "text": self.text}


@dataclass(frozen=True)
class AudioAsset:
    """
    One saved audio file. An empty `local_path` is the explicit
    "not produced" state.
    """
    local_path: str = ""
    static_path: str = ""
    source_url: str = ""
    duration: Optional[float] = None

    @property
    def produced(self) -> bool:
        return bool(self.local_path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.source_url,
            "localPath": self.local_path,
            "staticPath": self.static_path,
            "duration": self.duration if self.duration is not None else 0,
        }


@dataclass(frozen=True)
class NarrationAsset(AudioAsset):
    # Estimated from the script text, not from the audio waveform.
    segments: Tuple[NarrationSegment, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["timecodes"] = [s.to_dict() for s in self.segments]
        return data


@dataclass(frozen=True)
class AudioPayload:
    """Validated audio bytes as returned by a provider adapter."""
    data: bytes
    source_url: str = ""


@dataclass(frozen=True)
class AudioBundle:
    music: AudioAsset
    narration: NarrationAsset
    beats: Tuple[float, ...] = ()
    warnings: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "music": self.music.to_dict(),
            "narration": self.narration.to_dict(),
            "beats": list(self.beats),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class CssSignals:
    """Computed-style color hints captured from a rendered page."""
    custom_properties: Dict[str, str] = field(default_factory=dict)
    button_background: str = ""
    link_color: str = ""
    font_family: str = ""

    @property
    def empty(self) -> bool:
        return not (self.custom_properties or self.button_background or self.link_color)


@dataclass(frozen=True)
class PageSnapshot:
    """Everything one headless browser session captured for a URL."""
    url: str
    html: str = ""
    title: str = ""
    screenshot: bytes = b""
    css: CssSignals = field(default_factory=CssSignals)


class RenderProps(TypedDict):
    """Props object consumed by the video renderer. Every key is always present."""
    content: Dict[str, Any]
    branding: Dict[str, Any]
    audio: Dict[str, Any]
    metadata: Dict[str, Any]
    duration: float


class RenderResult(TypedDict, total=False):
    videoPath: str
    duration: float
    fileSize: int


def describe_audio(bundle: AudioBundle) -> str:
    """Short human summary of which audio parts were produced."""
    return ", ".join([
        "music" if bundle.music.produced else "no music",
        "narration" if bundle.narration.produced else "no narration",
        f"{len(bundle.beats)} beats",
    ])
