"""
IBeatStrategy adapters: aubio CLI, ffmpeg silence detection and a pydub
energy-spike detector.
"""

import re
import shutil
import subprocess
from typing import List, Optional

import numpy as np
from pydub import AudioSegment

from url_enrichment.config import BEAT_TOOL_TIMEOUT
from url_enrichment.domain.results import Failure, StrategyResult, Success
from url_enrichment.ports.interfaces import IBeatStrategy

_SILENCE_END = re.compile(r"silence_end: ([\d.]+)")


def _run(args: List[str], timeout: float) -> subprocess.CompletedProcess:
    return subprocess.run(args, capture_output=True, text=True, timeout=timeout, check=False)


def parse_aubio_output(stdout: str) -> List[float]:
    """One timestamp (seconds) per line; anything else is ignored."""
    beats = []
    for line in (stdout or "").splitlines():
        try:
            value = float(line.strip().split()[0])
        except (ValueError, IndexError):
            continue
        if value > 0:
            beats.append(value)
    return beats


def parse_silence_ends(stderr: str) -> List[float]:
    return [float(m) for m in _SILENCE_END.findall(stderr or "")]


class AubioBeatStrategy(IBeatStrategy):
    """`aubio beat <file>` when the aubio CLI is installed."""

    name = "aubio"

    def __init__(self, executable: str = "aubio", timeout: Optional[float] = None):
        self._executable = executable
        self._timeout = timeout or BEAT_TOOL_TIMEOUT

    def detect(self, audio_path: str) -> StrategyResult:
        tool = shutil.which(self._executable)
        if not tool:
            return Failure("aubio not installed")
        result = _run([tool, "beat", audio_path], self._timeout)
        if result.returncode != 0:
            return Failure(f"aubio exited with {result.returncode}: {result.stderr.strip()[:200]}")
        beats = parse_aubio_output(result.stdout)
        if not beats:
            return Failure("aubio found no beats")
        return Success(beats, self.name)


class FFmpegSilenceStrategy(IBeatStrategy):
    """
    ffmpeg silencedetect: each silence end is taken as a beat candidate.
    A rough proxy, not real onset detection.
    """

    name = "ffmpeg silencedetect"

    def __init__(self, executable: str = "ffmpeg", timeout: Optional[float] = None):
        self._executable = executable
        self._timeout = timeout or BEAT_TOOL_TIMEOUT

    def detect(self, audio_path: str) -> StrategyResult:
        tool = shutil.which(self._executable)
        if not tool:
            return Failure("ffmpeg not installed")
        # silencedetect reports on stderr
        result = _run(
            [tool, "-hide_banner", "-i", audio_path, "-af", "silencedetect=noise=-30dB:d=0.1", "-f", "null", "-"],
            self._timeout,
        )
        if result.returncode != 0:
            return Failure(f"ffmpeg exited with {result.returncode}")
        beats = parse_silence_ends(result.stderr)
        if not beats:
            return Failure("no silence gaps detected")
        return Success(beats, self.name)


def energy_beats(
    samples: np.ndarray,
    sample_rate: int,
    window: float = 0.05,
    threshold: float = 1.5,
    floor: float = 0.01,
    min_gap: float = 0.1,
) -> List[float]:
    """
    Times where RMS energy jumps by `threshold` over the previous window.
    `samples` are mono floats in [-1, 1].
    """
    size = max(int(sample_rate * window), 1)
    hop = max(size // 2, 1)
    beats: List[float] = []
    previous = 0.0
    for start in range(0, len(samples) - size, hop):
        frame = samples[start:start + size]
        energy = float(np.sqrt(np.mean(frame * frame)))
        if previous > floor and energy > previous * threshold:
            t = round(start / sample_rate, 2)
            if not beats or t - beats[-1] > min_gap:
                beats.append(t)
        previous = energy
    return beats


class EnergyBeatStrategy(IBeatStrategy):
    """Energy-spike detection on samples decoded with pydub."""

    name = "energy spikes"

    def detect(self, audio_path: str) -> StrategyResult:
        segment = AudioSegment.from_file(audio_path).set_channels(1)
        samples = np.array(segment.get_array_of_samples(), dtype=np.float32)
        if not len(samples):
            return Failure("empty audio")
        samples /= float(1 << (8 * segment.sample_width - 1))
        beats = energy_beats(samples, segment.frame_rate)
        if not beats:
            return Failure("no energy spikes found")
        return Success(beats, self.name)
