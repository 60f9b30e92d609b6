"""
Tagged strategy results and the warning accumulator.

A fallback chain is a list of strategies; each returns `Success` or `Failure`
and the chain runner stops at the first `Success`. Warnings travel in an
explicit `WarningLog` owned by the caller, never in module state.
"""

from dataclasses import dataclass
from typing import Generic, List, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    source: str
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Failure:
    reason: str
    # Missing credentials, as opposed to a provider that answered badly
    configuration: bool = False


StrategyResult = Union[Success, Failure]


class WarningLog:
    """Ordered, stage-tagged list of degradation messages."""

    def __init__(self):
        self._items: List[str] = []

    def add(self, stage: str, message: str) -> None:
        self._items.append(f"[{stage}] {message}")

    def add_once(self, stage: str, message: str) -> None:
        entry = f"[{stage}] {message}"
        if entry not in self._items:
            self._items.append(entry)

    def extend(self, other: "WarningLog") -> None:
        self._items.extend(other._items)

    def as_tuple(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __contains__(self, text: str) -> bool:
        return any(text in item for item in self._items)
