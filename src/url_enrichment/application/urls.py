"""URL helpers shared by the extraction stages."""

import re
from urllib.parse import urljoin, urlparse


def validate_url(url: str) -> str:
    """Return the stripped URL or raise ValueError for anything that is not http(s)."""
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ValueError(f"URL must be an absolute http(s) URL, got {url!r}")
    return url


def domain_of(url: str) -> str:
    """'https://www.Example.com/pricing' -> 'example.com'"""
    host = (urlparse(url).hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def domain_label(domain: str) -> str:
    """'example.com' -> 'Example'"""
    label = domain.split(".")[0] if domain else ""
    return label[:1].upper() + label[1:] if label else "Website"


def origin_of(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def absolutize(base_url: str, link: str) -> str:
    if not link:
        return ""
    return urljoin(base_url, link.strip())


def safe_domain(domain: str) -> str:
    """Filename-safe form of a domain."""
    return re.sub(r"[^a-z0-9.-]", "", domain.lower())
