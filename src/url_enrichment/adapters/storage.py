"""
IAssetStore adapter – files under the public asset root.

Layout:
  public/images/logo-{domain}.{ext}
  public/audio/{music|narration}-{timestamp_ms}.mp3
Static paths are relative to the public root, for the renderer's static file server.
"""

import os
import time
from typing import Optional, Tuple

from pydub import AudioSegment

from url_enrichment.application.urls import safe_domain
from url_enrichment.config import AUDIO_SUBDIR, IMAGES_SUBDIR, PUBLIC_DIR
from url_enrichment.domain.models import AudioAsset
from url_enrichment.ports.interfaces import IAssetStore


def logo_extension(content_type: str, source_url: str) -> str:
    """svg / jpg / png from the content type, else from the URL suffix; png by default."""
    content_type = (content_type or "").lower()
    path = (source_url or "").lower().split("?")[0]
    if "svg" in content_type:
        return "svg"
    if "jpeg" in content_type or "jpg" in content_type:
        return "jpg"
    if path.endswith(".svg"):
        return "svg"
    if path.endswith(".jpg") or path.endswith(".jpeg"):
        return "jpg"
    return "png"


def measure_duration(path: str) -> Optional[float]:
    """Length in seconds, or None when pydub/ffmpeg cannot decode the file."""
    try:
        return round(len(AudioSegment.from_file(path)) / 1000.0, 3)
    except Exception as e:
        print(f"  ℹ️  Could not measure duration of {os.path.basename(path)}: {e}")
        return None


class LocalAssetStore(IAssetStore):
    """Writes assets below `public_dir`; directories are created on first write."""

    def __init__(self, public_dir: Optional[str] = None, measure: bool = True):
        self._public_dir = public_dir or PUBLIC_DIR
        self._measure = measure

    def save_logo(self, data: bytes, content_type: str, source_url: str, domain: str) -> str:
        if not data:
            raise ValueError("empty logo body")
        ext = logo_extension(content_type, source_url)
        file_name = f"logo-{safe_domain(domain) or 'site'}.{ext}"
        static_path = f"{IMAGES_SUBDIR}/{file_name}"
        self._write(static_path, data)
        return static_path

    def save_audio(self, data: bytes, kind: str, source_url: str = "") -> AudioAsset:
        static_path, local_path = self._create_audio_file(kind, data)
        duration = measure_duration(local_path) if self._measure else None
        return AudioAsset(
            local_path=os.path.abspath(local_path),
            static_path=static_path,
            source_url=source_url,
            duration=duration,
        )

    def _create_audio_file(self, kind: str, data: bytes) -> Tuple[str, str]:
        """Claim `{kind}-{ms}.mp3` with exclusive creation; a taken name moves to the next millisecond."""
        stamp = int(time.time() * 1000)
        while True:
            static_path = f"{AUDIO_SUBDIR}/{kind}-{stamp}.mp3"
            path = self._local_path(static_path)
            try:
                with open(path, "xb") as f:
                    f.write(data)
            except FileExistsError:
                stamp += 1
                continue
            return static_path, path

    def _local_path(self, static_path: str) -> str:
        path = os.path.join(self._public_dir, *static_path.split("/"))
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return path

    def _write(self, static_path: str, data: bytes) -> str:
        path = self._local_path(static_path)
        with open(path, "wb") as f:
            f.write(data)
        return path
