"""
Scoring Logic for Client/Candidate Matching.

Responsibilities:
- Compute a deterministic 0-100 match score between a client profile and a
  resolved candidate.
- Emit a per-criterion breakdown (sector, stage, location, amount).

Non-Responsibilities:
- No field resolution.
- No filtering, ordering or exclusion of candidates.

Invariant:
Missing data must never be treated as a mismatch: a criterion with an empty
side contributes zero, never a penalty. Given identical inputs, this module
must always return the same score and breakdown.
"""

import math
import re
from dataclasses import dataclass, fields
from typing import Iterable, Optional

from .errors import InvalidWeightConfiguration
from .heuristics import SECTOR_VOCABULARY
from .models import Breakdown, ClientProfile, MatchResult, ResolvedCandidate
from .normalize import (
    is_global_location,
    normalize_stage,
    normalize_text,
    parse_amount_range,
    split_list,
    split_location,
    stage_rank,
)

MAX_CRITERION_SHARE = 0.4
NEAR_AMOUNT_RATIO = 10.0
# Short vocabulary keywords ("ai", "ml") only count as whole words.
WHOLE_WORD_SECTORS = frozenset(k for k in SECTOR_VOCABULARY if len(k) <= 3)


@dataclass(frozen=True)
class Weights:
    """Weight table shared by investor and incubator scoring."""

    sector: float = 40.0
    stage: float = 30.0
    location: float = 20.0
    amount: float = 10.0
    stage_adjacent_factor: float = 0.6
    amount_near_factor: float = 0.5

    def __post_init__(self):
        self.validate()

    @property
    def total(self) -> float:
        return self.sector + self.stage + self.location + self.amount

    def validate(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or math.isnan(value):
                raise InvalidWeightConfiguration(f"Weight '{f.name}' must be a number, got {value!r}")
            if value < 0:
                raise InvalidWeightConfiguration(f"Weight '{f.name}' must not be negative")
        if self.total <= 0:
            raise InvalidWeightConfiguration("Weights must sum to more than zero")
        for name in ("sector", "stage", "location", "amount"):
            share = getattr(self, name) / self.total
            if share > MAX_CRITERION_SHARE + 1e-9:
                raise InvalidWeightConfiguration(
                    f"Weight '{name}' is {share:.0%} of the total; no criterion may exceed "
                    f"{MAX_CRITERION_SHARE:.0%}"
                )
        for name in ("stage_adjacent_factor", "amount_near_factor"):
            if getattr(self, name) > 1:
                raise InvalidWeightConfiguration(f"'{name}' must be between 0 and 1")


DEFAULT_WEIGHTS = Weights()


def _contains_word(needle: str, haystack: str) -> bool:
    return re.search(r"(?<![a-z0-9])" + re.escape(needle) + r"(?![a-z0-9])", haystack) is not None


def _contains_sector(needle: str, haystack: str) -> bool:
    if needle in WHOLE_WORD_SECTORS:
        return _contains_word(needle, haystack)
    return needle in haystack


def sector_factor(profile_sector: str, focus_sectors: Iterable[str]) -> float:
    wanted = [normalize_text(s) for s in split_list(profile_sector)]
    focus = [normalize_text(s) for s in focus_sectors if str(s).strip()]
    if not wanted or not focus:
        return 0.0
    for needle in wanted:
        if any(_contains_sector(needle, f) for f in focus):
            return 1.0
    return 0.0


def stage_factor(profile_stage: str, candidate_stage: str, adjacent_factor: float = 0.6) -> float:
    """1.0 for the same stage, `adjacent_factor` one rung away, else 0."""
    wanted = normalize_stage(profile_stage)
    if not wanted:
        return 0.0
    wanted_rank = stage_rank(profile_stage)
    best = 0.0
    for offered in split_list(candidate_stage):
        if normalize_stage(offered) == wanted:
            return 1.0
        offered_rank = stage_rank(offered)
        if wanted_rank is not None and offered_rank is not None and abs(wanted_rank - offered_rank) == 1:
            best = max(best, adjacent_factor)
    return best


def location_factor(profile_location: str, candidate_location: str) -> float:
    wanted = normalize_text(profile_location)
    offered = normalize_text(candidate_location)
    if not wanted or not offered:
        return 0.0
    if is_global_location(offered):
        return 1.0
    if set(split_location(profile_location)) & set(split_location(candidate_location)):
        return 1.0
    if _contains_word(wanted, offered) or _contains_word(offered, wanted):
        return 1.0
    return 0.0


def amount_factor(
    funding_amount: str,
    ticket_min: Optional[float],
    ticket_max: Optional[float],
    near_factor: float = 0.5,
) -> float:
    """
    Full credit when the ask overlaps the ticket range, `near_factor` when it
    misses by less than one order of magnitude, otherwise 0.
    """
    if ticket_min is None and ticket_max is None:
        return 0.0
    low, high = parse_amount_range(funding_amount)
    if low is None and high is None:
        return 0.0
    ask_low = low if low is not None else high
    ask_high = high if high is not None else low

    floor = ticket_min if ticket_min is not None else 0.0
    ceiling = ticket_max if ticket_max is not None else math.inf
    if ask_low <= ceiling and ask_high >= floor:
        return 1.0
    if ask_high < floor and ask_high * NEAR_AMOUNT_RATIO >= floor:
        return near_factor
    if ask_low > ceiling and ask_low <= ceiling * NEAR_AMOUNT_RATIO:
        return near_factor
    return 0.0


def score_candidate(
    profile: ClientProfile,
    candidate: ResolvedCandidate,
    weights: Weights = DEFAULT_WEIGHTS,
) -> MatchResult:
    """Score one (profile, candidate) pair; the same table serves both record kinds."""
    breakdown = Breakdown(
        sector=weights.sector * sector_factor(profile.sector, candidate.focus_sectors),
        stage=weights.stage * stage_factor(profile.stage, candidate.stage, weights.stage_adjacent_factor),
        location=weights.location * location_factor(profile.location, candidate.location),
        amount=weights.amount * amount_factor(
            profile.funding_amount, candidate.ticket_min, candidate.ticket_max, weights.amount_near_factor
        ),
    )
    score = 100.0 * breakdown.total / weights.total
    return MatchResult(score=min(100.0, max(0.0, score)), breakdown=breakdown)
