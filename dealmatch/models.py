"""
Value types passed between the engine stages.

Every type is a frozen dataclass: stages build new values and never mutate
their inputs, so re-ranking the same batch is always safe.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import InvalidFilterConfiguration
from .schema import CRITERIA, validate_filters

UNRESOLVED = "—"
FOCUS_DISPLAY_LIMIT = 2


def _display(value: str) -> str:
    return value if value else UNRESOLVED


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ClientProfile:
    """The client being matched. Absence is always an empty string."""

    sector: str = ""
    stage: str = ""
    location: str = ""
    funding_amount: str = ""

    def __post_init__(self):
        for name in ("sector", "stage", "location", "funding_amount"):
            value = getattr(self, name)
            object.__setattr__(self, name, "" if value is None else str(value).strip())

    def is_empty(self) -> bool:
        return not (self.sector or self.stage or self.location or self.funding_amount)


@dataclass(frozen=True)
class ResolvedCandidate:
    """Canonical view of one investor or incubator record."""

    display_name: str = ""
    partner_name: str = ""
    email: str = ""
    focus_sectors: Tuple[str, ...] = ()
    stage: str = ""
    location: str = ""
    ticket_min: Optional[float] = None
    ticket_max: Optional[float] = None
    kind: str = "investor"

    def as_display(self) -> Dict[str, Any]:
        """Presentation row: em-dash for anything unresolved, at most two focus tags."""
        shown = list(self.focus_sectors[:FOCUS_DISPLAY_LIMIT])
        return {
            "name": _display(self.display_name),
            "partner": _display(self.partner_name),
            "email": _display(self.email),
            "focus": shown,
            "focus_overflow": max(0, len(self.focus_sectors) - len(shown)),
            "stage": _display(self.stage),
            "location": _display(self.location),
            "type": self.kind,
        }


@dataclass(frozen=True)
class Breakdown:
    """Per-criterion contributions. A positive value means the criterion matched."""

    sector: float = 0.0
    stage: float = 0.0
    location: float = 0.0
    amount: float = 0.0

    @property
    def total(self) -> float:
        return self.sector + self.stage + self.location + self.amount

    def flags(self) -> Dict[str, bool]:
        return {name: getattr(self, name) > 0 for name in CRITERIA}

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in CRITERIA}


@dataclass(frozen=True)
class MatchResult:
    score: float
    breakdown: Breakdown = field(default_factory=Breakdown)

    @property
    def display_score(self) -> int:
        return round_half_up(self.score)


@dataclass(frozen=True)
class ScoredCandidate:
    """A resolved candidate together with its score, as fed to the ranker."""

    candidate: ResolvedCandidate
    result: MatchResult


@dataclass(frozen=True)
class RankedEntry:
    candidate: ResolvedCandidate
    result: MatchResult
    satisfied_filter_count: int = 0

    @property
    def score(self) -> float:
        return self.result.score

    @property
    def display_score(self) -> int:
        return self.result.display_score

    @property
    def breakdown(self) -> Breakdown:
        return self.result.breakdown

    def as_display(self) -> Dict[str, Any]:
        row = self.candidate.as_display()
        row["score"] = self.display_score
        row["breakdown"] = self.breakdown.as_dict()
        row["matched"] = [name for name, hit in self.breakdown.flags().items() if hit]
        row["satisfied_filters"] = self.satisfied_filter_count
        return row


@dataclass(frozen=True)
class MatchFilters:
    """Which criteria the user switched on in the results view."""

    sector: bool = False
    stage: bool = False
    location: bool = False
    amount: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MatchFilters":
        """Build filters from a UI mapping; unknown keys are rejected, not ignored."""
        if data is None:
            return cls()
        errors = validate_filters(data)
        if errors:
            raise InvalidFilterConfiguration(errors)
        return cls(**{name: data.get(name, False) for name in CRITERIA})

    def active(self) -> Tuple[str, ...]:
        return tuple(name for name in CRITERIA if getattr(self, name))

    def as_dict(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in CRITERIA}
