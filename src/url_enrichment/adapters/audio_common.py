"""Shared helpers for the narration and music provider adapters."""

import binascii
from typing import Any, Dict, Optional

import requests

from url_enrichment.config import AUDIO_DOWNLOAD_TIMEOUT, MIN_AUDIO_BYTES
from url_enrichment.domain.models import AudioPayload
from url_enrichment.domain.results import Failure, StrategyResult, Success

# MiniMax base_resp.status_code values worth naming in warnings
MINIMAX_STATUS = {
    1002: "rate limited",
    1004: "authentication failed",
    1008: "insufficient balance (billing)",
    1039: "token limit exceeded",
    2013: "invalid parameters",
}


def validate_audio(data: bytes, content_type: str = "") -> Optional[str]:
    """
    Reason the payload is not audio, or None when it looks usable.
    Providers sometimes answer HTTP 200 with a JSON error body.
    """
    content_type = (content_type or "").lower()
    if "json" in content_type or "text/" in content_type:
        snippet = data[:200].decode("utf-8", errors="replace")
        return f"expected audio, got {content_type or 'text'}: {snippet}"
    if len(data) < MIN_AUDIO_BYTES:
        return f"payload too small for audio ({len(data)} bytes < {MIN_AUDIO_BYTES})"
    return None


def audio_result(data: bytes, content_type: str, source: str, source_url: str = "") -> StrategyResult:
    problem = validate_audio(data, content_type)
    if problem:
        return Failure(problem)
    return Success(AudioPayload(data=data, source_url=source_url), source)


def minimax_headers(api_key: str, group_id: str = "") -> Dict[str, str]:
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if group_id:
        headers["X-Group-Id"] = group_id
    return headers


def minimax_error(body: Dict[str, Any]) -> Optional[str]:
    """Explicit API error from base_resp, if any."""
    base = body.get("base_resp") or {}
    code = base.get("status_code", 0)
    if not code:
        return None
    label = MINIMAX_STATUS.get(code, "API error")
    return f"MiniMax {label} (status {code}: {base.get('status_msg', '')})"


def minimax_audio(
    body: Dict[str, Any],
    source: str,
    session: requests.Session,
    timeout: float = AUDIO_DOWNLOAD_TIMEOUT,
) -> StrategyResult:
    """
    Decode the audio part of a MiniMax answer: hex-encoded bytes in
    data.audio, or a URL (data.audio / audio_url) that is downloaded.
    """
    error = minimax_error(body)
    if error:
        return Failure(error)

    data = body.get("data") or {}
    audio = data.get("audio") or data.get("audio_url") or body.get("audio_url") or ""
    if not audio:
        return Failure("response has no audio")

    if audio.startswith("http://") or audio.startswith("https://"):
        response = session.get(audio, timeout=timeout)
        response.raise_for_status()
        return audio_result(response.content, response.headers.get("Content-Type", ""), source, audio)

    try:
        raw = binascii.unhexlify(audio)
    except (binascii.Error, ValueError) as e:
        return Failure(f"undecodable audio payload: {e}")
    return audio_result(raw, "audio/mpeg", source)
