"""
Ranking and Filtering of Scored Candidates.

Responsibilities:
- Count how many user-enabled criteria each candidate satisfies.
- Produce a total, deterministic ordering of the batch.

Non-Responsibilities:
- No scoring; scores and breakdowns pass through untouched.
- No deduplication or exclusion; every input entry is returned.

Invariant:
Ordering is by satisfied-filter count, then score, then
case-insensitive name. Switching a filter off only changes the count.
"""

from typing import Any, Iterable, List, Mapping, Tuple, Union

from .errors import InvalidFilterConfiguration
from .logger import get_logger
from .models import Breakdown, MatchFilters, RankedEntry, ScoredCandidate
from .schema import CRITERIA

logger = get_logger()

FilterInput = Union[MatchFilters, Mapping[str, Any], None]


def coerce_filters(filters: FilterInput) -> MatchFilters:
    if isinstance(filters, MatchFilters):
        return filters
    try:
        return MatchFilters.from_mapping(filters)
    except InvalidFilterConfiguration as e:
        logger.record_filter_error()
        logger.error("Rejected filter configuration", errors=e.errors)
        raise


def satisfied_filter_count(breakdown: Breakdown, filters: MatchFilters) -> int:
    flags = breakdown.flags()
    return sum(1 for name in CRITERIA if getattr(filters, name) and flags[name])


def _sort_key(entry: RankedEntry) -> Tuple[int, float, str, str]:
    name = entry.candidate.display_name
    # casefold first; the raw name keeps order total when two names differ only in case
    return (-entry.satisfied_filter_count, -entry.score, name.casefold(), name)


def rank(scored: Iterable[ScoredCandidate], filters: FilterInput = None) -> List[RankedEntry]:
    """Annotate each scored candidate with its filter count and sort the batch."""
    active = coerce_filters(filters)
    entries = [
        RankedEntry(
            candidate=item.candidate,
            result=item.result,
            satisfied_filter_count=satisfied_filter_count(item.result.breakdown, active),
        )
        for item in scored
    ]
    entries.sort(key=_sort_key)
    return entries
