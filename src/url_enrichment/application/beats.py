"""
Beat Detector – beat timecodes (seconds) for transition sync.

Best effort only: an external beat tracker, then silence-gap analysis, then a
fixed-tempo grid. When there is no music file at all a placeholder series is
synthesized so downstream beat-sync logic still has something to work with.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from url_enrichment.application.chain import run_chain
from url_enrichment.config import (
    DEFAULT_BPM,
    DEFAULT_MUSIC_DURATION,
    PLACEHOLDER_BEAT_SPACING,
    PLACEHOLDER_BEAT_START,
)
from url_enrichment.domain.results import WarningLog
from url_enrichment.ports.interfaces import IBeatStrategy


def clean_beats(values: Iterable[float]) -> Tuple[float, ...]:
    """Positive, de-duplicated, ascending, rounded to centiseconds."""
    return tuple(sorted({round(float(v), 2) for v in values if v is not None and float(v) > 0}))


def heuristic_beats(bpm: float = DEFAULT_BPM, duration: float = DEFAULT_MUSIC_DURATION) -> Tuple[float, ...]:
    """Regular grid at `bpm` from one interval in up to (excluding) `duration`; t=0 is never a beat."""
    interval = 60.0 / bpm
    beats: List[float] = []
    i = 1
    while i * interval < duration:
        beats.append(round(i * interval, 2))
        i += 1
    return tuple(beats)


def placeholder_beats(
    duration: float,
    start: float = PLACEHOLDER_BEAT_START,
    spacing: float = PLACEHOLDER_BEAT_SPACING,
) -> Tuple[float, ...]:
    """Fixed-spacing series used when no music was produced; never empty."""
    beats: List[float] = []
    i = 0
    while True:
        t = round(start + i * spacing, 2)
        if t >= duration and beats:
            break
        beats.append(t)
        i += 1
    return tuple(beats)


class BeatDetector:
    """Walks the beat strategies; falls back to the fixed-tempo grid."""

    def __init__(self, strategies: Sequence[IBeatStrategy], bpm: float = DEFAULT_BPM):
        self._strategies = list(strategies)
        self._bpm = bpm

    def detect(
        self,
        audio_path: str,
        warnings: WarningLog,
        duration: Optional[float] = None,
    ) -> Tuple[float, ...]:
        if not audio_path:
            span = duration or DEFAULT_MUSIC_DURATION
            warnings.add(
                "beats",
                f"no music track; using placeholder beats every {PLACEHOLDER_BEAT_SPACING}s",
            )
            return placeholder_beats(span)

        print(f"🥁 Detecting beats in: {audio_path}")
        strategies = [
            (strategy.name, (lambda s=strategy: s.detect(audio_path)))
            for strategy in self._strategies
        ]
        result = run_chain("beats", strategies, warnings, record_failures=False)
        if result is not None:
            beats = clean_beats(result.value)
            if beats:
                print(f"  ✓ Detected {len(beats)} beats using {result.source}")
                return beats

        span = duration or DEFAULT_MUSIC_DURATION
        warnings.add("beats", f"beat analysis unavailable; using a {self._bpm:g} BPM grid")
        return heuristic_beats(self._bpm, span)
