"""
Narration timecodes.

Segments are a textual approximation: the script is split on sentence
terminators and each sentence is timed at a fixed speaking rate with a fixed
pause between sentences. Nothing here looks at the generated waveform, so the
segments are the same whichever provider (if any) produced the audio.
"""

import re
from typing import List, Optional, Tuple

from url_enrichment.config import SEGMENT_PAUSE, WORDS_PER_SECOND
from url_enrichment.domain.models import NarrationSegment

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

MUSIC_STYLE_PROMPTS = {
    "pop": "upbeat pop instrumental background music, catchy melody, energetic",
    "hip-hop": "hip-hop instrumental beat, rhythmic drums, bass-heavy, modern",
    "rap": "rap instrumental beat, strong drums, urban vibe, no vocals",
    "jazz": "smooth jazz instrumental, piano and saxophone, sophisticated",
    "lo-fi": "lo-fi chill beats, mellow and relaxing, study music vibe",
    "ambient": "ambient atmospheric background music, ethereal and calming",
    "cinematic": "cinematic orchestral instrumental, dramatic and epic",
    "rock": "rock instrumental background, electric guitar driven, energetic",
}
DEFAULT_MUSIC_STYLE = "lo-fi"


def split_sentences(script: str) -> List[str]:
    return [" ".join(s.split()) for s in _SENTENCE_SPLIT.split(script or "") if s.strip()]


def create_timecodes(
    script: str,
    words_per_second: float = WORDS_PER_SECOND,
    pause: float = SEGMENT_PAUSE,
) -> Tuple[NarrationSegment, ...]:
    """
    Estimated narration segments: each sentence lasts words / words_per_second
    seconds and the next one starts `pause` seconds after it ends.
    """
    segments = []
    current = 0.0
    for sentence in split_sentences(script):
        duration = len(sentence.split()) / words_per_second
        segments.append(NarrationSegment(start=round(current, 3), end=round(current + duration, 3), text=sentence))
        current += duration + pause
    return tuple(segments)


def estimated_length(segments: Tuple[NarrationSegment, ...]) -> Optional[float]:
    return segments[-1].end if segments else None


def create_music_prompt(style: str, duration: float) -> str:
    """Instrumental-only prompt; unknown styles fall back to lo-fi."""
    base = MUSIC_STYLE_PROMPTS.get((style or "").strip().lower(), MUSIC_STYLE_PROMPTS[DEFAULT_MUSIC_STYLE])
    return f"{base}, instrumental only, no singing, no vocals, no lyrics, {int(round(duration))} seconds"
