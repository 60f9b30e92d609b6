"""
Ordered fallback chains.

A strategy is any zero-argument callable returning `Success` or `Failure`,
paired with a display name. `run_chain` tries them in order, records every
failure in the caller's WarningLog and returns the first success.
"""

from typing import Callable, Optional, Sequence, Tuple

from url_enrichment.domain.results import Failure, StrategyResult, Success, WarningLog

Strategy = Tuple[str, Callable[[], StrategyResult]]


def attempt(name: str, fn: Callable[[], StrategyResult]) -> StrategyResult:
    """Call one strategy; any exception it raises becomes a Failure."""
    try:
        result = fn()
    except Exception as e:
        return Failure(f"{type(e).__name__}: {e}")
    if not isinstance(result, (Success, Failure)):
        return Failure(f"{name} returned {type(result).__name__}, expected a strategy result")
    return result


def run_chain(
    stage: str,
    strategies: Sequence[Strategy],
    warnings: WarningLog,
    on_config_failure: Optional[Callable[[str, Failure], None]] = None,
    record_failures: bool = True,
) -> Optional[Success]:
    """
    Walk `strategies` in order until one succeeds.

    Failures append "[stage] <name> failed: <reason>" to `warnings`, except
    configuration failures when `on_config_failure` is given (the caller then
    decides how often to report a missing credential) or when
    `record_failures` is False. Notes attached to the
    winning Success are appended after the failures. Returns None when every
    strategy failed.
    """
    for name, fn in strategies:
        result = attempt(name, fn)
        if isinstance(result, Success):
            print(f"  ✓ {stage}: {name}")
            for note in result.notes:
                warnings.add(stage, note)
            return result

        print(f"  ⚠️  {stage}: {name} failed: {result.reason}")
        if result.configuration and on_config_failure is not None:
            on_config_failure(name, result)
        elif record_failures:
            warnings.add(stage, f"{name} failed: {result.reason}")
    return None
