"""
Matching Orchestrator.

Responsibilities:
- Build the client profile, resolve and score every candidate, rank the batch.
- Fan scoring out over a bounded worker pool and fan the results back in.

Non-Responsibilities:
- No record fetching or persistence.
- No feature computation; resolver and scorer own that.

Invariant:
Given the same inputs, the returned list is identical regardless of worker
count. Sorting happens once, on a single thread, after fan-in.
"""

import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable, List, Mapping, Optional, Union

from .aliases import alias_table_for
from .config import Settings, load_settings
from .errors import BatchCancelled
from .logger import get_logger
from .models import ClientProfile, RankedEntry, ScoredCandidate
from .profile import build_profile
from .ranking import FilterInput, coerce_filters, rank
from .resolver import resolve
from .scoring import DEFAULT_WEIGHTS, Weights, score_candidate

logger = get_logger()

ClientInput = Union[ClientProfile, Mapping[str, Any]]


def score_record(
    profile: ClientProfile,
    record: Mapping[str, Any],
    kind: str = "investor",
    weights: Weights = DEFAULT_WEIGHTS,
) -> ScoredCandidate:
    candidate = resolve(record, kind)
    return ScoredCandidate(candidate=candidate, result=score_candidate(profile, candidate, weights))


def score_batch(
    profile: ClientProfile,
    records: List[Mapping[str, Any]],
    kind: str = "investor",
    weights: Weights = DEFAULT_WEIGHTS,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[ScoredCandidate]:
    """
    Resolve and score every record, keeping input order.

    Raises:
        BatchCancelled: if `cancel_event` is set before every record is scored
    """
    total = len(records)
    results: List[Optional[ScoredCandidate]] = [None] * total
    workers = max(1, min(max_workers or os.cpu_count() or 1, total or 1))

    def cancelled() -> bool:
        return cancel_event is not None and cancel_event.is_set()

    def task(i: int) -> None:
        if cancelled():
            return
        results[i] = score_record(profile, records[i], kind, weights)

    if workers == 1:
        for i in range(total):
            if cancelled():
                break
            task(i)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(task, i) for i in range(total)]
            for future in as_completed(futures):
                future.result()
                if cancelled():
                    for pending in futures:
                        pending.cancel()
                    break

    completed = sum(1 for r in results if r is not None)
    logger.record_scored(completed)
    if completed < total:
        logger.warning("Batch cancelled", completed=completed, total=total)
        raise BatchCancelled(completed, total)
    return results


def match_candidates(
    client: ClientInput,
    records: Iterable[Mapping[str, Any]],
    kind: str = "investor",
    filters: FilterInput = None,
    weights: Optional[Weights] = None,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    settings: Optional[Settings] = None,
) -> List[RankedEntry]:
    """
    Run one matching invocation end to end.

    Args:
        client: A ClientProfile, or the raw client record to build one from
        records: Raw investor or incubator records
        kind: "investor" or "incubator"; selects the alias table
        filters: MatchFilters or a {criterion: bool} mapping
        weights: Weight table (defaults to the configured one)
        max_workers: Scoring pool size (defaults to the configured one)
        cancel_event: Set it to stop the batch between scoring tasks
        settings: Defaults for weights and max_workers; read from the
            environment with load_settings() when not given

    Returns:
        Ranked entries, best first. Empty when there are no records or the
        client profile is completely empty.

    Raises:
        UnknownRecordKind: for a kind other than investor/incubator
        InvalidFilterConfiguration: for unknown filter keys or non-bool values
        InvalidWeightConfiguration: for a configured weight table that breaks
            the scoring constraints
        BatchCancelled: when cancelled before scoring finished
    """
    alias_table_for(kind)
    active = coerce_filters(filters)
    profile = client if isinstance(client, ClientProfile) else build_profile(client)
    records = list(records)
    if weights is None or max_workers is None:
        settings = settings or load_settings()
        weights = weights or settings.weights
        max_workers = max_workers or settings.max_workers
    logger.record_batch()

    if not records:
        logger.info("No candidates to match", kind=kind)
        return []
    if profile.is_empty():
        logger.info("Client profile is empty; nothing to match on", kind=kind, candidates=len(records))
        return []

    scored = score_batch(profile, records, kind, weights, max_workers, cancel_event)
    ranked = rank(scored, active)

    matched = sum(1 for entry in ranked if entry.display_score > 0)
    logger.info(
        f"Matched {matched} of {len(ranked)} {kind}s",
        filters=list(active.active()),
    )
    return ranked
